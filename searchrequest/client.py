import logging

import requests
import requests.exceptions

from searchrequest.request import SearchRequest


class SearchClient(object):
    """Entry-point for talking to a search service. Builds compressed search requests and sends them."""

    log = logging.getLogger(__name__)

    def __init__(self, base_url, session=None, verify=True, auth=None, request_factory=SearchRequest, encoder=None):
        """
        :param str base_url: root url of the service, request paths are appended to it
        :param requests.Session session: session used to send requests, a new one is created when absent
        :param bool verify: whether to verify ssl certificates from the server or ignore them (should be false for local dev)
        :param tuple auth: (username, password) for http basic auth
        :param type|function request_factory: constructor of request objects
        :param searchrequest.encoding.BodyEncoder encoder: body encoder handed to every request
        """
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.verify = verify
        self.auth = auth
        self.request_factory = request_factory
        self.encoder = encoder

    def build_request(self, method, path, body=None, params=None):
        """
        Creates a prepared request with an encoded body.

        :param str method: HTTP verb
        :param str path: path relative to the base url
        :param body: body value, see searchrequest.body.as_body_value for accepted types
        :param dict params: query parameters
        :return: send-ready request
        :rtype: requests.PreparedRequest
        :raises: searchrequest.encoding.BodyError
        """
        url = '{0}/{1}'.format(self.base_url, path.lstrip('/'))
        request = self.request_factory(method, url, body=body, params=params, encoder=self.encoder)
        if self.auth:
            request.set_basic_auth(*self.auth)
        return request.prepare()

    def perform_request(self, method, path, body=None, params=None):
        """
        Sends a request and checks its status.

        :param str method: HTTP verb
        :param str path: path relative to the base url
        :param body: body value, see searchrequest.body.as_body_value for accepted types
        :param dict params: query parameters
        :return: response from the server
        :rtype: requests.Response
        :raises: ConnectError
        :raises: APIError
        :raises: searchrequest.encoding.BodyError
        """
        prepared_request = self.build_request(method, path, body=body, params=params)
        self.log.debug('Sending request. method=%s url=%s', prepared_request.method, prepared_request.url)
        try:
            response = self.session.send(prepared_request, verify=self.verify)
        except requests.exceptions.ConnectionError as e:
            self.log.warning('Unable to connect. url=%s error=%s', prepared_request.url, e)
            raise ConnectError('Unable to connect to server! url="{0}" verify="{1}"'.format(prepared_request.url, self.verify)) from e

        if response.status_code > 299 or response.status_code < 200:
            self.log.warning('Unexpected status. url=%s status_code=%s', prepared_request.url, response.status_code)
            raise APIError('Received an unexpected status code of "{0}"! url="{1}"'.format(response.status_code, prepared_request.url),
                           status_code=response.status_code)
        return response


class ConnectError(Exception):
    """Standard error for an inability to connect to the server."""
    pass


class APIError(Exception):
    """Bucket for errors related to server responses."""
    def __init__(self, message, status_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
