import io


class BodyValue(object):
    """Base of the request body variants. Only RawText, StructuredValue and ByteStream are encodable."""
    __slots__ = ()


class RawText(BodyValue):
    """Characters sent verbatim."""
    __slots__ = ('text', 'charset')

    def __init__(self, text, charset='utf-8'):
        """
        :param str text: characters to send
        :param str charset: character encoding applied before compression
        """
        self.text = text
        self.charset = charset

    def __repr__(self):
        return 'RawText({0!r}, charset={1!r})'.format(self.text, self.charset)


class StructuredValue(BodyValue):
    """In-memory value sent as its json representation."""
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return 'StructuredValue({0!r})'.format(self.value)


class ByteStream(BodyValue):
    """
    Already-open readable byte source. The encoder takes ownership of the stream and closes it when done,
    so file handles and pipes may be passed without wrapping them in a with-block.
    """
    __slots__ = ('stream',)

    def __init__(self, stream):
        """
        :param stream: object with a read(size) method returning bytes
        """
        self.stream = stream

    def __repr__(self):
        return 'ByteStream({0!r})'.format(self.stream)


def as_body_value(body):
    """
    Coerces a plain python object into a body value.

    :param body: body value, None, string, bytes, readable object or any json-serializable value
    :return: matching body variant, None when the body is absent
    :rtype: BodyValue
    """
    if body is None or isinstance(body, BodyValue):
        return body

    if isinstance(body, str):
        return RawText(body)

    if isinstance(body, (bytes, bytearray)):
        return ByteStream(io.BytesIO(body))

    if callable(getattr(body, 'read', None)):
        return ByteStream(body)

    return StructuredValue(body)
