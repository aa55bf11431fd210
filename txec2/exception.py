# Licenced under the txec2 licence available at /LICENSE in the txec2 source.

"""Errors raised by txec2."""

from xml.etree.ElementTree import ParseError

from txec2.util import XML


__all__ = ["EC2QueryError", "ConfigurationError", "CredentialsNotFoundError",
           "InvalidRequestError", "TransportError", "ResponseParseError",
           "ApiError"]


class EC2QueryError(Exception):
    """
    A base class for txec2 errors.
    """


class ConfigurationError(EC2QueryError):
    """
    The client cannot be configured as requested, usually because a
    required credential is missing.
    """


class CredentialsNotFoundError(ConfigurationError):
    """
    No access key or secret key was provided, nor could they be found in
    the environment or filesystem.
    """


class InvalidRequestError(EC2QueryError, ValueError):
    """
    The parameters given for a call cannot be sent.  No request was made.
    """


class TransportError(EC2QueryError):
    """
    The request could not be completed at the HTTP level: either the
    connection failed or the server answered with a non-2xx status.

    @ivar status: The HTTP status code, or C{None} if no response was
        received.
    @ivar reason: The HTTP reason phrase or a description of the network
        failure.
    @ivar response: The raw response body, if any.
    """

    def __init__(self, status=None, reason=None, response=None):
        super(TransportError, self).__init__(status, reason, response)
        self.status = status
        self.reason = reason
        self.response = response

    def __str__(self):
        if self.status is None:
            return "POST request failed: %s" % (self.reason,)
        body = self.response or b""
        return "POST request failed: %s %s %s" % (
            self.status, self.reason, body.decode("utf-8", "replace"))


class ResponseParseError(EC2QueryError):
    """
    A successful HTTP response carried a body that is not XML.

    @ivar response: The raw response body.
    """

    def __init__(self, message, response):
        super(ResponseParseError, self).__init__(message)
        self.response = response


class ApiError(EC2QueryError):
    """
    EC2 accepted the request at the HTTP level but reported errors in
    the response document.

    @ivar original: The raw response body.
    @ivar status: The HTTP status the errors arrived with.
    @ivar errors: A C{list} of C{dict}s, one per reported error, usually
        with C{Code} and C{Message} keys.
    @ivar request_id: The request id reported by EC2, if any.
    """

    def __init__(self, xml_bytes, status=200):
        if not xml_bytes:
            raise ValueError("XML cannot be empty.")
        super(ApiError, self).__init__(xml_bytes)
        self.original = xml_bytes
        self.status = status
        self.errors = []
        self.request_id = ""
        self.parse()

    def __str__(self):
        return self._get_error_message_string()

    def __repr__(self):
        return "<%s object with %s>" % (
            self.__class__.__name__, self._get_error_code_string())

    def _set_request_id(self, tree):
        for name in ("RequestID", "RequestId"):
            node = tree.find(".//%s" % name)
            if node is not None and node.text:
                self.request_id = node.text
                return

    def _get_error_code_string(self):
        count = len(self.errors)
        error_code = self.get_error_codes()
        if count > 1:
            return "Error count: %s" % error_code
        else:
            return "Error code: %s" % error_code

    def _get_error_message_string(self):
        count = len(self.errors)
        error_message = self.get_error_messages()
        if count > 1:
            return "%s." % error_message
        else:
            return "Error Message: %s" % error_message

    def _node_to_dict(self, node):
        data = {}
        for child in node:
            if child.tag and child.text:
                data[child.tag] = child.text
        return data

    def parse(self):
        try:
            tree = XML(self.original.strip())
        except ParseError:
            return
        self._set_request_id(tree)
        errors_node = tree.find(".//Errors")
        if errors_node is not None:
            for error in errors_node:
                data = self._node_to_dict(error)
                if data:
                    self.errors.append(data)

    def has_error(self, error_string):
        for error in self.errors:
            if error_string in error.values():
                return True
        return False

    def get_error_codes(self):
        count = len(self.errors)
        if count > 1:
            return count
        elif count == 0:
            return
        else:
            return self.errors[0].get("Code")

    def get_error_messages(self):
        count = len(self.errors)
        if count > 1:
            return "Multiple EC2 Errors"
        elif count == 0:
            return "Empty error list"
        else:
            return self.errors[0].get("Message")
