from os import path

with open(path.join(path.dirname(__file__), 'VERSION'), encoding='utf-8') as f:
    __version__ = f.read().strip()

from searchrequest.body import BodyValue, RawText, StructuredValue, ByteStream, as_body_value  # noqa: E402
from searchrequest.encoding import BodyEncoder, BodyError, SerializationError, EncodingError  # noqa: E402
from searchrequest.envelope import Envelope, PreparedRequestEnvelope  # noqa: E402
from searchrequest.request import SearchRequest  # noqa: E402
from searchrequest.client import SearchClient, ConnectError, APIError  # noqa: E402
