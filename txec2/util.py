# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""Generally useful utilities for talking to the EC2 Query API.

Nothing in here knows about requests or clients; it is the shared
low-level plumbing for signing, timestamps, URLs and XML.
"""

from base64 import b64encode
from datetime import datetime
from hashlib import sha256
import hmac
from urllib.parse import urlparse, urlunparse
from xml.etree.ElementTree import fromstring

from dateutil.tz import tzutc


__all__ = ["hmac_sha256", "iso8601time", "utcnow", "XML", "parse"]


def _to_bytes(value):
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def hmac_sha256(secret, data):
    """
    Return the base64-encoded HMAC-SHA256 of C{data} keyed with C{secret}.

    Text arguments are encoded as UTF-8.  The result is a single line of
    base64 text.
    """
    digest = hmac.new(_to_bytes(secret), _to_bytes(data), sha256).digest()
    return b64encode(digest).decode("ascii")


def utcnow():
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tzutc())


def iso8601time(instant=None):
    """Format C{instant} as an ISO8601 UTC time string with second precision.

    :param instant: Either None, to use the current time, or a datetime.
        Naive datetimes are taken to be UTC already.
    """
    if instant is None:
        instant = utcnow()
    if instant.tzinfo is not None:
        instant = instant.astimezone(tzutc())
    return instant.strftime("%Y-%m-%dT%H:%M:%SZ")


def _fixname(key):
    if "}" in key:
        key = key.split("}", 1)[1]
    return key


def XML(text):
    """Parse C{text} into an element tree with namespaces removed from names."""
    root = fromstring(text)
    for element in root.iter():
        element.tag = _fixname(element.tag)
        if element.attrib:
            element.attrib = dict(
                (_fixname(k), v) for (k, v) in element.attrib.items())
    return root


def parse(url, defaultPort=True):
    """
    Split the given URL into the scheme, host, port, and path.

    @type url: C{str}
    @param url: An URL to parse.

    @type defaultPort: C{bool}
    @param defaultPort: Whether to return the default port associated with the
        scheme in the given url, when the url doesn't specify one.

    @return: A four-tuple of the scheme, host, port, and path of the URL.  All
    of these are C{str} instances except for port, which is an C{int}.
    """
    url = url.strip()
    parsed = urlparse(url)
    scheme = parsed[0]
    path = urlunparse(("", "") + parsed[2:])
    # Brackets around an IPv6 literal are not part of the host.
    host = parsed.hostname or ""
    try:
        port = parsed.port
    except ValueError:
        # A non-numeric port was given, it will be replaced with
        # an appropriate default value if defaultPort is True
        port = None

    if port is None and defaultPort:
        if scheme == "https":
            port = 443
        else:
            port = 80

    if path == "":
        path = "/"
    return (scheme, host, port, path)
