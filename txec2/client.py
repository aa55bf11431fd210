# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""EC2 Query API client support."""

import os
from io import BytesIO
from urllib.parse import quote, urlparse
from xml.etree.ElementTree import ParseError

from pyrsistent import pmap

from twisted.internet.endpoints import TCP4ClientEndpoint
from twisted.logger import Logger
from twisted.python.reflect import namedAny
from twisted.web.client import Agent, ProxyAgent, FileBodyProducer, readBody
from twisted.web.http import RESPONSES
from twisted.web.http_headers import Headers

from txec2 import ec2_api
from txec2._version import __version__
from txec2.exception import (
    ApiError, ConfigurationError, EC2QueryError, InvalidRequestError,
    ResponseParseError, TransportError,
)
from txec2.service import ClientConfig
from txec2.tree import parse_response
from txec2.util import iso8601time, utcnow as _utcnow


__all__ = ["EC2Client", "Query", "Signature", "RESERVED_PARAMETERS"]


SIGNATURE_VERSION = "2"
SIGNATURE_METHOD = "HmacSHA256"
USER_AGENT = ("txec2/%s" % (__version__.public(),)).encode("ascii")

# Envelope keys the client always fills in itself.  Callers may not set them.
RESERVED_PARAMETERS = frozenset([
    "AWSAccessKeyId", "Timestamp", "Version", "SignatureVersion",
    "SignatureMethod", "Signature",
])


def error_wrapper(error):
    """
    Translate a failed HTTP exchange into a L{TransportError}.

    Errors already raised by txec2 (for example a L{TransportError} for a
    non-2xx status) are re-raised unchanged.  Anything else, such as a
    refused connection or a timeout, happened before a response arrived
    and becomes a L{TransportError} with no status.
    """
    if error.check(EC2QueryError):
        error.raiseException()
    raise TransportError(reason=error.getErrorMessage())


def encode(string):
    """Encode a string as per the canonicalisation encoding rules.

    This is RFC 3986 percent-encoding of the UTF-8 bytes of C{string}:
    only letters, digits and C{-_.~} are left alone.
    """
    return quote(string, safe="~")


def canonical_query_params(params):
    """Return C{params} encoded, sorted by name and joined with C{&}."""
    result = []
    for key, value in sorted(params.items()):
        result.append("%s=%s" % (encode(key), encode(value)))
    return "&".join(result)


def _check_parameters(action, other_params):
    if not isinstance(action, str) or not action:
        raise InvalidRequestError("Action must be defined")
    for key, value in other_params.items():
        if not isinstance(key, str) or not key:
            raise InvalidRequestError(
                "Parameter names must be non-empty strings: %r" % (key,))
        if key in RESERVED_PARAMETERS:
            raise InvalidRequestError(
                "Parameter %r is set by the client and cannot be "
                "overridden" % (key,))
        if not isinstance(value, str):
            raise InvalidRequestError(
                "Parameter %r must have a string value, not %r" % (
                    key, value))


class Query(object):
    """
    A single signed query that may be submitted to EC2.

    @ivar params: The request envelope, a L{pyrsistent.PMap}.  After
        L{sign} it also holds the C{Signature}.
    """

    _log = Logger()

    def __init__(self, action=None, creds=None, endpoint=None,
                 other_params=None, instant=None, api_version=None,
                 debug=False, cooperator=None):
        if other_params is None:
            other_params = {}
        _check_parameters(action, other_params)
        self.action = action
        self.creds = creds
        self.endpoint = endpoint
        self.debug = debug
        self.cooperator = cooperator
        if api_version is None:
            api_version = ec2_api
        params = dict(other_params)
        params.update({
            "AWSAccessKeyId": creds.access_key,
            "Action": action,
            "Timestamp": iso8601time(instant),
            "Version": api_version,
            "SignatureVersion": SIGNATURE_VERSION,
            "SignatureMethod": SIGNATURE_METHOD,
            })
        self.params = pmap(params)

    def sign(self):
        """Sign this query using its built in credentials.

        This prepares it to be sent, and should be done as the last step before
        submitting the query. Signing is done automatically - this is a public
        method to facilitate testing.
        """
        signature = Signature(self.creds, self.endpoint, self.params)
        if self.debug:
            self._log.debug(
                "Query to sign: {signing_text!r}",
                signing_text=signature.signing_text(),
            )
        self.params = self.params.set("Signature", signature.compute())

    def get_body(self):
        """Return the form-encoded request body."""
        return canonical_query_params(self.params).encode("ascii")

    def submit(self, agent):
        """Sign and submit this query.

        @param agent: The L{IAgent} provider to issue the request with.
        @return: A L{Deferred} that fires with the response body (L{bytes})
            on a 2xx response, and fails with L{TransportError} otherwise.
        """
        self.sign()
        url = self.endpoint.get_uri()
        if self.debug:
            self._log.debug("Generated query URL: {url}", url=url)
        headers = Headers({
            b"Content-Type": [b"application/x-www-form-urlencoded"],
            b"User-Agent": [USER_AGENT],
        })
        body = BytesIO(self.get_body())
        if self.cooperator is None:
            body_producer = FileBodyProducer(body)
        else:
            body_producer = FileBodyProducer(body, cooperator=self.cooperator)
        d = agent.request(
            self.endpoint.method.encode("ascii"),
            url.encode("ascii"),
            headers,
            body_producer,
        )
        d.addCallback(self._handle_response)
        return d.addErrback(error_wrapper)

    def _handle_response(self, response):
        d = readBody(response)
        d.addCallback(self._check_response, response)
        return d

    def _check_response(self, data, response):
        if not 200 <= response.code < 300:
            reason = response.phrase
            if not reason:
                reason = RESPONSES.get(response.code, b"")
            raise TransportError(
                response.code, reason.decode("latin-1"), data)
        return data


class Signature(object):
    """Compute EC2-compliant signatures for requests.

    @ivar creds: The L{AWSCredentials} to use to compute the signature.
    @ivar endpoint: The {AWSServiceEndpoint} to consider.
    @ivar params: A mapping of parameters to consider.
    """

    def __init__(self, creds, endpoint, params):
        self.creds = creds
        self.endpoint = endpoint
        self.params = params

    def compute(self):
        """Compute and return the signature according to the given data."""
        if "Signature" in self.params:
            raise RuntimeError("Existing signature in parameters")
        version = self.params["SignatureVersion"]
        if version != SIGNATURE_VERSION:
            raise RuntimeError("Unsupported SignatureVersion: '%s'" % version)
        method = self.params["SignatureMethod"]
        if method != SIGNATURE_METHOD:
            raise RuntimeError("Unsupported SignatureMethod: '%s'" % method)
        return self.creds.sign(self.signing_text())

    def signing_text(self):
        """Return the text to be signed when signing the query."""
        result = "%s\n%s\n%s\n%s" % (self.endpoint.method,
                                     self.endpoint.get_canonical_host(),
                                     "/",
                                     self.get_canonical_query_params())
        return result

    def get_canonical_query_params(self):
        """Return the canonical query params (used in signing)."""
        return canonical_query_params(self.params)


def parse_and_check(xml_bytes):
    """
    Turn a response body into a tree, failing if EC2 reported errors.

    @raise ApiError: If the document has a top-level C{Errors} entry.
    @raise ResponseParseError: If the body is not XML.
    """
    try:
        tree = parse_response(xml_bytes)
    except ParseError as e:
        raise ResponseParseError(
            "Could not parse the response: %s" % (e,), xml_bytes)
    if "Errors" in tree:
        raise ApiError(xml_bytes)
    return tree


class EC2Client(object):
    """A client for the EC2 Query API.

    @param config: The L{ClientConfig} describing credentials, region,
        API version, base URL and debugging.
    @param agent: The L{IAgent} provider requests are made with.  One
        honouring the proxy environment variables is created on first use
        if this is C{None}.
    @param utcnow: A no-argument callable returning the current time as a
        C{datetime}.  Used to timestamp each request.
    @param query_factory: The class or function that produces a query
        object for making requests to the EC2 service.
    @param parser: A callable turning a response body into the value
        L{send} results in.
    @param reactor: The reactor the default agent uses.
    @param cooperator: The L{Cooperator} request bodies are written with,
        or C{None} for the global one.
    """

    def __init__(self, config, agent=None, utcnow=None, query_factory=None,
                 parser=None, reactor=None, cooperator=None):
        if not isinstance(config, ClientConfig):
            raise ConfigurationError(
                "A ClientConfig is required, not %r" % (config,))
        if not (config.access_key and config.secret_key):
            raise ConfigurationError(
                "Both an access key and a secret key are required")
        if utcnow is None:
            utcnow = _utcnow
        if query_factory is None:
            query_factory = Query
        if parser is None:
            parser = parse_and_check
        self.config = config
        self.utcnow = utcnow
        self.query_factory = query_factory
        self.parser = parser
        self.cooperator = cooperator
        self._agent = agent
        self._reactor = reactor
        self._endpoint = None

    @property
    def endpoint(self):
        """The L{AWSServiceEndpoint} for the configured base URL."""
        if self._endpoint is None:
            self._endpoint = self.config.get_endpoint()
        return self._endpoint

    @property
    def agent(self):
        if self._agent is None:
            if self._reactor is None:
                self._reactor = namedAny("twisted.internet.reactor")
            self._agent = _get_agent(self.endpoint.scheme, self._reactor)
        return self._agent

    def send(self, parameters, agent=None):
        """
        Sign and send one EC2 API call.

        C{parameters} must hold a non-empty C{Action} and may hold any
        other string parameters the action accepts, for example::

            client.send({"Action": "DescribeRegions",
                         "RegionName.1": "us-east-1"})

        @param agent: An L{IAgent} provider to use for this call only.
        @raise InvalidRequestError: Raised immediately, before any request
            is made, if C{Action} is missing or a parameter is invalid or
            reserved.
        @return: A L{Deferred} that fires with the response tree, or fails
            with L{TransportError}, L{ApiError} or L{ResponseParseError}.
        """
        other_params = dict(parameters)
        action = other_params.pop("Action", None)
        query = self.query_factory(
            action=action, creds=self.config.creds, endpoint=self.endpoint,
            other_params=other_params, instant=self.utcnow(),
            api_version=self.config.api_version, debug=self.config.debug,
            cooperator=self.cooperator)
        if agent is None:
            agent = self.agent
        d = query.submit(agent)
        return d.addCallback(self.parser)


# Something like this belongs in Twisted, perhaps.  At least, the
# "give me an Agent and respect the OS conventions for proxy
# configuration" logic.
def _get_agent(scheme, reactor, environ=os.environ):
    if scheme == "https":
        proxy_endpoint = environ.get("https_proxy")
    else:
        proxy_endpoint = environ.get("http_proxy")
    if proxy_endpoint:
        proxy_url = urlparse(proxy_endpoint)
        endpoint = TCP4ClientEndpoint(
            reactor, proxy_url.hostname, proxy_url.port or 80)
        return ProxyAgent(endpoint)
    return Agent(reactor)
