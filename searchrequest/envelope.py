import abc


class Envelope(abc.ABC):
    """Outgoing request whose headers, body and declared length are filled in by the body encoder."""

    @abc.abstractmethod
    def get_header(self, name):
        """
        Obtains a header value, case-insensitive.

        :param str name: header name
        :return: header value or None when unset
        :rtype: str
        """

    @abc.abstractmethod
    def set_header(self, name, value):
        """
        Sets a header value, replacing any previous value for the name.

        :param str name: header name
        :param str value: header value
        """

    @abc.abstractmethod
    def set_body(self, stream):
        """
        Installs the body stream.

        :param stream: readable byte stream
        """

    @abc.abstractmethod
    def set_content_length(self, length):
        """
        Declares the byte count of the installed body.

        :param int length: body length in bytes
        """


class PreparedRequestEnvelope(Envelope):
    """Envelope backed by a requests.PreparedRequest."""

    def __init__(self, prepared):
        """
        :param requests.PreparedRequest prepared: request to mutate in place
        """
        self.prepared = prepared

    def get_header(self, name):
        return self.prepared.headers.get(name)

    def set_header(self, name, value):
        self.prepared.headers[name] = value

    def set_body(self, stream):
        self.prepared.body = stream

    def set_content_length(self, length):
        # the transport chunks stream bodies unless a length header is present
        self.prepared.headers.pop('Transfer-Encoding', None)
        self.prepared.headers['Content-Length'] = str(length)
