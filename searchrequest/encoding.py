import contextlib
import io
import json
import logging
import zlib

from searchrequest.body import RawText, StructuredValue, ByteStream


GZIP_ENCODING = 'gzip'
JSON_CONTENT_TYPE = 'application/json'


class BodyEncoder(object):
    """
    Encodes request bodies onto an envelope. Every body, including an empty or absent one, is gzip compressed
    and the envelope's Content-Encoding and declared length are updated to describe the compressed payload.
    """

    log = logging.getLogger(__name__)

    def __init__(self, compresslevel=9, chunk_size=64 * 1024):
        """
        :param int compresslevel: zlib compression level, 0-9
        :param int chunk_size: number of bytes read from the source stream at a time
        :raises: ValueError
        """
        if not 0 <= compresslevel <= 9:
            raise ValueError('Parameter "compresslevel" must be between 0 and 9. Received "{0}".'.format(compresslevel))
        if chunk_size <= 0:
            raise ValueError('Parameter "chunk_size" must be positive. Received "{0}".'.format(chunk_size))
        self.compresslevel = compresslevel
        self.chunk_size = chunk_size

    def encode(self, envelope, value):
        """
        Encodes and compresses the body value and installs it on the envelope. Nothing on the envelope changes
        unless the whole body was encoded successfully.

        :param searchrequest.envelope.Envelope envelope: request to mutate
        :param value: body to send, None for an absent body
        :type value: RawText or StructuredValue or ByteStream or None
        :raises: SerializationError
        :raises: EncodingError
        :raises: TypeError
        """
        headers = {}
        stream = self._open_stream(value, headers)

        with _released(stream, self.log):
            data = self._compress(stream)
        headers['Content-Encoding'] = GZIP_ENCODING

        # commit
        for name, header_value in headers.items():
            envelope.set_header(name, header_value)
        envelope.set_body(io.BytesIO(data))
        envelope.set_content_length(len(data))

    def _open_stream(self, value, headers):
        """
        Turns a body value into a readable stream, collecting the headers it implies.

        :param value: body value
        :param dict headers: pending header changes
        :return: readable stream or None for an absent body
        """
        if value is None:
            return None

        if isinstance(value, RawText):
            try:
                return io.BytesIO(value.text.encode(value.charset))
            except (UnicodeError, LookupError) as e:
                raise EncodingError('Unable to encode raw text body as "{0}".'.format(value.charset), e) from e

        if isinstance(value, StructuredValue):
            text = serialize_json(value.value)
            headers['Content-Type'] = JSON_CONTENT_TYPE
            return io.BytesIO(text.encode('utf-8'))

        if isinstance(value, ByteStream):
            return value.stream

        raise TypeError('Body must be RawText, StructuredValue, ByteStream or None. Received "{0}".'.format(type(value).__name__))

    def _compress(self, stream):
        """
        Copies the stream through a gzip sink.

        :param stream: readable stream, None is read as empty
        :return: complete gzip member
        :rtype: bytes
        :raises: EncodingError
        """
        buf = io.BytesIO()
        sink = GzipSink(buf, compresslevel=self.compresslevel)
        raw_size = 0
        try:
            if stream is not None:
                raw_size = self._copy(stream, sink)
            sink.close()  # writes the gzip trailer, required for empty input as well
        except (OSError, ValueError, TypeError, zlib.error) as e:
            raise EncodingError('Unable to compress request body.', e) from e

        data = buf.getvalue()
        self.log.debug('Encoded request body. raw_bytes=%d compressed_bytes=%d', raw_size, len(data))
        return data

    def _copy(self, stream, sink):
        total = 0
        while True:
            chunk = stream.read(self.chunk_size)
            if not chunk:
                return total
            if isinstance(chunk, str):  # text-mode files
                chunk = chunk.encode('utf-8')
            sink.write(chunk)
            total += len(chunk)


class GzipSink(object):
    """Write target that gzip compresses everything written to it into an underlying buffer."""

    def __init__(self, fileobj, compresslevel=9):
        """
        :param fileobj: writable binary file object receiving the compressed bytes
        :param int compresslevel: zlib compression level
        """
        self.fileobj = fileobj
        self.closed = False
        self._compressor = zlib.compressobj(compresslevel, zlib.DEFLATED, zlib.MAX_WBITS | 16)

    def write(self, data):
        """
        Compresses and buffers the data.

        :param bytes data: uncompressed bytes
        :return: number of uncompressed bytes consumed
        :rtype: int
        :raises: ValueError
        """
        if self.closed:
            raise ValueError('Write to a closed gzip sink.')
        self.fileobj.write(self._compressor.compress(data))
        return len(data)

    def close(self):
        """Flushes pending output and the gzip trailer. Closing twice is a no-op."""
        if self.closed:
            return
        self.closed = True
        self.fileobj.write(self._compressor.flush())


def serialize_json(value):
    """
    Canonical json text of a value: sorted keys, no insignificant whitespace.

    :param value: json-serializable value
    :return: json text
    :rtype: str
    :raises: SerializationError
    """
    try:
        return json.dumps(value, sort_keys=True, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError('Unable to serialize request body as json.', e) from e


@contextlib.contextmanager
def _released(stream, log):
    """
    Closes the stream on exit when it can be closed. A failing close surfaces as EncodingError, unless another
    error is already propagating, in which case that error wins and the close failure is logged.

    :param stream: stream to release, may be None
    :param logging.Logger log: logger for close failures that cannot be raised
    :raises: EncodingError
    """
    close = getattr(stream, 'close', None)
    if not callable(close):
        yield stream
        return

    try:
        yield stream
    except BaseException:
        try:
            close()
        except (OSError, ValueError) as e:
            log.warning('Unable to release request body stream. error=%s', e)
        raise

    try:
        close()
    except (OSError, ValueError) as e:
        raise EncodingError('Unable to release request body stream.', e) from e


# ==============
# Helper Classes
# ==============

class BodyError(Exception):
    """
    Request body could not be encoded. The underlying exception, when there is one, is kept as cause.
    """
    def __init__(self, message, cause=None):
        Exception.__init__(self, message)
        self.cause = cause


class SerializationError(BodyError):
    """
    Structured body value has no json representation.
    """
    pass


class EncodingError(BodyError):
    """
    Reading the body, encoding its characters or compressing it failed.
    """
    pass
