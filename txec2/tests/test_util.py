# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

from base64 import b64encode
from datetime import datetime, timedelta, timezone

from twisted.trial.unittest import TestCase

from txec2.util import hmac_sha256, iso8601time, parse, XML


class MiscellaneousTests(TestCase):

    def test_hmac_sha256(self):
        # RFC 4231 test cases 1 and 2.
        cases = [
            (b"\x0b" * 20, "Hi There",
             "b0344c61d8db38535ca8afceaf0bf12b"
             "881dc200c9833da726e9376c2e32cff7"),
            ("Jefe", "what do ya want for nothing?",
             "5bdcc146bf60754e6a042426089575c7"
             "5a003f089d2739839dec58b964ec3843"),
            ]

        for key, data, expected in cases:
            self.assertEqual(
                hmac_sha256(key, data),
                b64encode(bytes.fromhex(expected)).decode("ascii"))

    def test_iso8601time(self):
        self.assertEqual(
            "2006-07-07T15:04:56Z",
            iso8601time(datetime(2006, 7, 7, 15, 4, 56)))

    def test_iso8601time_drops_fraction(self):
        self.assertEqual(
            "2006-07-07T15:04:56Z",
            iso8601time(datetime(2006, 7, 7, 15, 4, 56, 999999)))

    def test_iso8601time_converts_to_utc(self):
        """
        Aware datetimes in another zone are converted, never rendered with
        their local offset.
        """
        eastern = timezone(timedelta(hours=-5))
        self.assertEqual(
            "2006-07-07T15:04:56Z",
            iso8601time(datetime(2006, 7, 7, 10, 4, 56, tzinfo=eastern)))

    def test_iso8601time_now(self):
        self.assertRegex(
            iso8601time(), r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


class XMLTestCase(TestCase):

    def test_namespaces_removed(self):
        root = XML(
            b'<Response xmlns="http://ec2.amazonaws.com/doc/2012-07-20/">'
            b'<requestId>abc</requestId></Response>')
        self.assertEqual("Response", root.tag)
        self.assertEqual("abc", root.find("requestId").text)


class ParseUrlTestCase(TestCase):
    """
    Test URL parsing facility and defaults values.
    """
    def test_parse(self):
        """
        L{parse} correctly parses a URL into its various components.
        """
        # The default port for HTTP is 80.
        self.assertEqual(
            parse("http://127.0.0.1/"),
            ("http", "127.0.0.1", 80, "/"))

        # The default port for HTTPS is 443.
        self.assertEqual(
            parse("https://127.0.0.1/"),
            ("https", "127.0.0.1", 443, "/"))

        # Specifying a port.
        self.assertEqual(
            parse("http://spam:12345/"),
            ("http", "spam", 12345, "/"))

        # Weird (but commonly accepted) structure uses default port.
        self.assertEqual(
            parse("http://spam:/"),
            ("http", "spam", 80, "/"))

        # Spaces in the hostname are trimmed, the default path is /.
        self.assertEqual(
            parse("http://foo "),
            ("http", "foo", 80, "/"))

    def test_parse_no_default_port(self):
        self.assertEqual(
            parse("https://ec2.us-east-1.amazonaws.com", defaultPort=False),
            ("https", "ec2.us-east-1.amazonaws.com", None, "/"))

    def test_parse_ipv6(self):
        """
        The brackets around an IPv6 literal are not part of the host.
        """
        self.assertEqual(
            parse("http://[::1]:8773/services/Cloud"),
            ("http", "::1", 8773, "/services/Cloud"))
        self.assertEqual(
            parse("https://[2001:db8::1]/"),
            ("https", "2001:db8::1", 443, "/"))
