# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""
A L{Command} object makes an arbitrary EC2 API call and displays the
response tree received from the backend cloud.
"""

import json
import sys

from twisted.internet.defer import maybeDeferred

from txec2.client import EC2Client
from txec2.exception import ApiError, TransportError


class Command(object):
    """
    An EC2 API call command that can make a request and display the
    response received from the backend cloud.

    @param config: The L{ClientConfig} to make the call with.
    @param action: The name of the EC2 API action to invoke.
    @param parameters: A C{dict} with parameters to include with the call.
    @param output: Optionally, a stream to write output to.  Defaults to
        C{sys.stdout}.
    @param client_factory: Optionally, a factory taking a L{ClientConfig}
        and returning the client used to make the call.  Defaults to
        L{EC2Client}.
    """

    def __init__(self, config, action, parameters, output=None,
                 client_factory=None):
        self.config = config
        self.action = action
        self.parameters = parameters
        if output is None:
            output = sys.stdout
        self.output = output
        if client_factory is None:
            client_factory = EC2Client
        self.client_factory = client_factory

    def run(self):
        """
        Run the configured call and write the response tree, or the error,
        to the output stream.

        @return: A L{Deferred} firing with C{0} on success and C{1} if the
            call failed, including when the parameters are rejected before
            any request is made.
        """
        client = self.client_factory(self.config)
        parameters = dict(self.parameters)
        parameters["Action"] = self.action

        def write_response(tree):
            self.output.write(json.dumps(tree, indent=2, sort_keys=True))
            self.output.write("\n")
            return 0

        def write_error(failure):
            if failure.check(ApiError):
                message = failure.value.original.decode("utf-8", "replace")
            elif failure.check(TransportError):
                message = str(failure.value)
            else:
                message = failure.getErrorMessage()
            self.output.write("ERROR: %s\n" % (message,))
            return 1

        deferred = maybeDeferred(client.send, parameters)
        deferred.addCallbacks(write_response, write_error)
        return deferred
