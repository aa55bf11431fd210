# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""A command-line client for making raw EC2 Query API calls."""

import os
import sys

from twisted.internet.defer import succeed
from twisted.internet.task import react
from twisted.logger import globalLogBeginner, textFileLogObserver

from txec2.command import Command
from txec2.exception import ConfigurationError
from txec2.service import client_config


class OptionError(Exception):
    """
    Raised if insufficient command-line arguments are provided when creating a
    L{Command}.
    """


class UsageError(Exception):
    """Raised if the usage message should be shown."""


USAGE_MESSAGE = """\
Purpose: Invoke an EC2 API method with arbitrary parameters.
Usage:   txec2-send [--key KEY] [--secret SECRET] [--region REGION]
             [--endpoint ENDPOINT] [--api-version VERSION] [--debug]
             --action ACTION [PARAMETERS, ...]

Options:
  --key                 The AWS access key to use when making the API request.
  --secret              The AWS secret key to use when making the API request.
  --region              The EC2 region to send the request to.  Defaults to
                        us-east-1.
  --endpoint            A URL to send the request to instead of the region's
                        EC2 endpoint.
  --api-version         The EC2 API version to request.
  --action              The name of the EC2 API to invoke.
  --debug               Log the text to sign and the request URL to stderr.
  -h, --help            Show help message.

Description:
  The request is signed with an AWS signature version 2 and the XML response
  is printed as JSON.  If AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION
  or AWS_ENDPOINT environment variables are defined the corresponding options
  can be omitted and the values defined in the environment variables will be
  used.  Credentials are also read from the shared AWS credentials file.

  Any additional parameters, beyond those defined above, will be included with
  the request as method parameters.

Examples:
  Run the DescribeRegions method, without any optional parameters:

    txec2-send --action DescribeRegions

  Run the DescribeRegions method, with a RegionName.1 parameter:

    txec2-send --action DescribeRegions --RegionName.1 us-east-1
"""

FLAGS = ("debug",)

ENVIRONMENT_DEFAULTS = (
    ("key", "AWS_ACCESS_KEY_ID"),
    ("secret", "AWS_SECRET_ACCESS_KEY"),
    ("region", "AWS_REGION"),
    ("endpoint", "AWS_ENDPOINT"),
)


def parse_options(arguments, environ=os.environ):
    """Parse command line arguments.

    The parsing logic is fairly simple.  It can only parse long-style
    parameters of the form::

      --key value

    apart from C{--debug}, which takes no value.  The key, secret, region
    and endpoint values fall back to the C{AWS_ACCESS_KEY_ID},
    C{AWS_SECRET_ACCESS_KEY}, C{AWS_REGION} and C{AWS_ENDPOINT}
    environment variables.

    @param arguments: A list of command-line arguments.  The first item is
        expected to be the name of the program being run.
    @raises OptionError: Raised if incorrectly formed command-line arguments
        are specified, or if C{--action} is not present.
    @raises UsageError: Raised if C{--help} is present in command-line
        arguments.
    @return: A C{dict} with key/value pairs extracted from the argument list.
    """
    arguments = list(arguments[1:])
    options = {}
    while arguments:
        key = arguments.pop(0)
        if key in ("-h", "--help"):
            raise UsageError("Help requested.")
        if not key.startswith("--"):
            raise OptionError("Encountered unexpected value '%s'." % key)
        key = key[2:]
        if key in FLAGS:
            options[key] = True
            continue
        try:
            value = arguments.pop(0)
        except IndexError:
            raise OptionError("'--%s' is missing a value." % key)
        options[key] = value

    for name, variable in ENVIRONMENT_DEFAULTS:
        default = environ.get(variable)
        if name not in options and default:
            options[name] = default
    if "action" not in options:
        raise OptionError("The '--action' command-line argument is required.")

    return options


def get_command(arguments, output=None, environ=os.environ):
    """Parse C{arguments} and configure a L{Command} instance.

    An action is required.  Additional parameters are passed as parameters
    to the call.  For example, the following command will create a
    L{Command} object that invokes C{DescribeRegions} with a
    C{RegionName.1} parameter::

      txec2-send --key KEY --secret SECRET \
                 --action DescribeRegions --RegionName.1 us-east-1

    @param arguments: The command-line arguments to parse.
    @raises OptionError: Raised if C{arguments} can't be used to create a
        L{Command} object.
    @raises ConfigurationError: Raised if no credentials can be found.
    @return: A L{Command} instance configured to make an EC2 API call.
    """
    options = parse_options(arguments, environ)
    config_kwargs = {"debug": options.pop("debug", False)}
    if "region" in options:
        config_kwargs["region"] = options.pop("region")
    if "endpoint" in options:
        config_kwargs["base_url"] = options.pop("endpoint")
    if "api-version" in options:
        config_kwargs["api_version"] = options.pop("api-version")
    config = client_config(
        options.pop("key", ""), options.pop("secret", ""), **config_kwargs)
    action = options.pop("action")
    return Command(config, action, options, output)


def run(reactor, arguments, output=None):
    """
    Parse C{arguments} and make the call they describe.

    @return: A L{Deferred} that fires when the call is done, failing with
        L{SystemExit} if the command did not succeed.
    """
    if output is None:
        output = sys.stdout

    def exit_with(status):
        if status:
            raise SystemExit(status)

    try:
        command = get_command(arguments, output)
    except UsageError:
        output.write(USAGE_MESSAGE.strip() + "\n")
        return succeed(None)
    except (OptionError, ConfigurationError) as e:
        output.write("ERROR: %s\n" % (e,))
        return succeed(2).addCallback(exit_with)
    if command.config.debug:
        globalLogBeginner.beginLoggingTo([textFileLogObserver(sys.stderr)])
    return command.run().addCallback(exit_with)


def main(arguments=None):
    """
    Entry point parses command-line arguments, runs the specified EC2 API
    call and prints the response to the screen.
    """
    if arguments is None:
        arguments = sys.argv
    react(run, (arguments,))
