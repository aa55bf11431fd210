# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""Configuration of the EC2 service a client talks to."""

import attr
from attr import validators

from txec2 import ec2_api
from txec2.credentials import AWSCredentials
from txec2.util import parse


__all__ = ["AWSServiceEndpoint", "ClientConfig", "client_config",
           "REGION_US_EAST_1"]


REGION_US_EAST_1 = "us-east-1"

EC2_ENDPOINT_TEMPLATE = "https://ec2.%s.amazonaws.com"


class AWSServiceEndpoint(object):
    """
    @param uri: The URL for the service.
    @param method: The HTTP method used when accessing a service.
    """

    def __init__(self, uri="", method="POST"):
        self.method = method
        self._parse_uri(uri)
        if not self.scheme:
            self.scheme = "http"

    def _parse_uri(self, uri):
        scheme, host, port, path = parse(str(uri), defaultPort=False)
        self.scheme = scheme
        self.host = host
        self.port = port
        self.path = path

    def get_canonical_host(self):
        """
        Return the lowercased host name, as it appears in the text to sign.
        """
        return self.host.lower()

    def get_uri(self):
        """Get a URL representation of the service."""
        host = self.host
        if ":" in host:
            host = "[%s]" % (host,)
        if self.port is not None:
            host = "%s:%s" % (host, self.port)
        return "%s://%s%s" % (self.scheme, host, self.path)


@attr.s(frozen=True)
class ClientConfig(object):
    """
    Everything an L{EC2Client} needs to know before it makes a call.

    @ivar creds: The credentials requests are signed with.
    @type creds: L{AWSCredentials}

    @ivar region: The EC2 region calls are made to.

    @ivar api_version: The EC2 API version sent with every call.

    @ivar base_url: The URL requests are posted to, or C{None} to derive
        it from C{region}.

    @ivar debug: Whether the text to sign and the request URL are logged.
    """
    creds = attr.ib(validator=validators.instance_of(AWSCredentials))
    region = attr.ib(default=REGION_US_EAST_1,
                     validator=validators.instance_of(str))
    api_version = attr.ib(default=ec2_api,
                          validator=validators.instance_of(str))
    base_url = attr.ib(default=None,
                       validator=validators.optional(
                           validators.instance_of(str)))
    debug = attr.ib(default=False, converter=bool)

    @property
    def access_key(self):
        return self.creds.access_key

    @property
    def secret_key(self):
        return self.creds.secret_key

    def get_base_url(self):
        """Return the configured base URL, or the one for C{region}."""
        if self.base_url:
            return self.base_url
        return EC2_ENDPOINT_TEMPLATE % (self.region,)

    def get_endpoint(self):
        return AWSServiceEndpoint(uri=self.get_base_url())


def client_config(access_key="", secret_key="", **kw):
    """
    Build a L{ClientConfig} from a raw key pair.

    Empty keys are looked up the way L{AWSCredentials} does.  Any other
    keyword arguments are passed to L{ClientConfig}.

    @raise CredentialsNotFoundError: If either key cannot be found.
    """
    return ClientConfig(creds=AWSCredentials(access_key, secret_key), **kw)
