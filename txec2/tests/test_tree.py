# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

from xml.etree.ElementTree import ParseError

from twisted.trial.unittest import TestCase

from txec2.testing import payload
from txec2.tree import parse_response


class ParseResponseTestCase(TestCase):
    """
    Tests for L{txec2.tree.parse_response}.
    """

    def test_describe_regions(self):
        tree = parse_response(payload.sample_describe_regions_result)
        self.assertEqual(
            {"requestId": "59dbff89-35bd-4eac-99ed-be587EXAMPLE",
             "regionInfo": {"item": [
                 {"regionName": "us-east-1",
                  "regionEndpoint": "ec2.us-east-1.amazonaws.com"}]}},
            tree)

    def test_multiple_items(self):
        tree = parse_response(
            payload.sample_describe_availability_zones_multiple_results)
        items = tree["availabilityZoneInfo"]["item"]
        self.assertEqual(2, len(items))
        self.assertEqual("us-east-1b", items[1]["zoneName"])

    def test_empty_elements(self):
        """
        Empty elements, including ones holding only whitespace, are
        C{None}.
        """
        tree = parse_response(
            b"<R><messageSet/><groupSet>\n  </groupSet></R>")
        self.assertEqual({"messageSet": None, "groupSet": None}, tree)

    def test_errors_always_a_list(self):
        tree = parse_response(payload.sample_ec2_error_message)
        self.assertEqual(
            [{"Error": {"Code": "Error.Code",
                        "Message": "Message for Error.Code"}}],
            tree["Errors"])
        self.assertEqual(
            "0ef9fc37-6230-4d81-b2e6-1b36277d4247", tree["RequestID"])

    def test_repeated_elements(self):
        """
        Repeated siblings are collected into a list even when not named
        C{item}.
        """
        tree = parse_response(b"<R><a>1</a><a>2</a><a>3</a><b>4</b></R>")
        self.assertEqual({"a": ["1", "2", "3"], "b": "4"}, tree)

    def test_single_empty_item(self):
        tree = parse_response(b"<R><set><item/></set></R>")
        self.assertEqual({"set": {"item": [None]}}, tree)

    def test_attributes(self):
        tree = parse_response(
            b'<R><tag key="Name">web</tag><empty flag="1"/></R>')
        self.assertEqual(
            {"tag": {"key": "Name", "content": "web"},
             "empty": {"flag": "1"}},
            tree)

    def test_namespaces_stripped(self):
        tree = parse_response(
            b'<R xmlns="http://ec2.amazonaws.com/doc/2012-07-20/">'
            b'<return>true</return></R>')
        self.assertEqual({"return": "true"}, tree)

    def test_empty_root(self):
        self.assertEqual({}, parse_response(b"<R/>"))

    def test_text_root(self):
        self.assertEqual({"content": "ok"}, parse_response(b"<R>ok</R>"))

    def test_unicode(self):
        tree = parse_response(
            u'<?xml version="1.0" encoding="UTF-8"?>'
            u'<R><name>caf\xe9</name></R>'.encode("utf-8"))
        self.assertEqual({"name": u"caf\xe9"}, tree)

    def test_force_list_override(self):
        tree = parse_response(
            b"<R><group>a</group></R>", force_list=frozenset(["group"]))
        self.assertEqual({"group": ["a"]}, tree)

    def test_not_xml(self):
        self.assertRaises(ParseError, parse_response, b"<html><body>")
