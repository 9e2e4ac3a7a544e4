import platform

from requests import Request
from requests.auth import HTTPBasicAuth

from searchrequest import __version__
from searchrequest.body import as_body_value
from searchrequest.encoding import BodyEncoder
from searchrequest.envelope import PreparedRequestEnvelope


def default_headers():
    """
    Identification headers sent with every search request.

    :return: header names and values
    :rtype: dict[str, str]
    """
    return {
        'User-Agent': 'searchrequest/{0} ({1}-{2})'.format(__version__, platform.system().lower(), platform.machine().lower()),
        'Accept': 'application/json',
        'Content-Type': 'application/json',
        'Accept-Encoding': 'gzip, deflate',  # requests transparently decompresses responses so always ask for it
    }


class SearchRequest(Request):
    """Request to a search service. Adds identification headers and sends its body gzip compressed."""

    def __init__(self, method=None, url=None, body=None, encoder=None, **kwargs):
        """
        Constructor.

        :param str method: HTTP verb
        :param str url: request url
        :param body: body value, see searchrequest.body.as_body_value for accepted types
        :param BodyEncoder encoder: encoder for the body, a default encoder is used when absent
        :param kwargs: all of request's normal kwargs except data, files and json
        :raises: ValueError
        """
        for unsupported in ('data', 'files', 'json'):
            if kwargs.get(unsupported) is not None:
                raise ValueError('Parameter "{0}" is not supported, pass the payload as "body".'.format(unsupported))
        super(SearchRequest, self).__init__(method=method, url=url, **kwargs)  # delegate up

        # caller supplied headers win over the defaults
        headers = default_headers()
        headers.update(self.headers)
        self.headers = headers

        self.encoder = encoder or BodyEncoder()
        self.set_body(body)

    def set_basic_auth(self, username, password):
        """
        Authenticates the request with http basic auth.

        :param str username: user name
        :param str password: password
        """
        self.auth = HTTPBasicAuth(username, password)

    def set_body(self, body):
        """
        Replaces the body sent with the request.

        :param body: body value, see searchrequest.body.as_body_value for accepted types
        """
        self.body = as_body_value(body)

    def prepare(self):
        """
        Constructs a prepared request and installs the compressed body on it.

        :return: prepared request with compressed payload
        :rtype: requests.PreparedRequest
        :raises: searchrequest.encoding.SerializationError
        :raises: searchrequest.encoding.EncodingError
        """
        p = super(SearchRequest, self).prepare()  # delegate up
        self.encoder.encode(PreparedRequestEnvelope(p), self.body)
        return p
