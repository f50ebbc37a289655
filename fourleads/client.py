"""4leads API client.

``FourLeadsClient.request`` is the only method that talks to the network.
Everything else builds a path, query and body and goes through it:

    client = FourLeadsClient('my-api-key')
    client.tags.list(page_size=100)
    client.contacts.add_tag(contact_id=17, tag_id=4)

Non-2xx responses are returned, not raised; check ``response.status_code``.
"""

import os
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlparse

from fourleads import endpoints
from fourleads.constants import VERSION
from fourleads.exceptions import ConfigurationError, ResponseParseError
from fourleads.operations import OPERATIONS, Operation
from fourleads.request import JSONValue, Response, build_request, build_url, parse_response
from fourleads.transport import RequestsTransport, Transport

DEFAULT_HOST = 'https://api.4leads.net'
DEFAULT_VERSION = '/v1'


def _validate_host(host: str) -> str:
    parsed = urlparse(host)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc or parsed.query or parsed.fragment:
        raise ConfigurationError(f'Invalid 4leads host: {host!r}')
    return host.rstrip('/')


class FourLeadsClient:
    """Client for the 4leads REST API.

    Configuration is fixed at construction, except for the transport options
    which can be replaced through ``set_transport_options``. That replacement
    is not synchronized: don't call it while other threads have requests in
    flight on the same client.
    """

    env_prefix = 'FOURLEADS'

    def __init__(
        self,
        api_key: str,
        host: Optional[str] = None,
        transport_options: Optional[Mapping[str, Any]] = None,
        version: str = DEFAULT_VERSION,
        transport: Optional[Transport] = None,
        operations: Optional[Mapping[str, Operation]] = None,
    ):
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError('Missing 4leads API key')
        self._host = _validate_host(host or DEFAULT_HOST)
        self._version = version or ''
        if operations is None:
            operations = OPERATIONS.get(self._version)
        if operations is None:
            raise ConfigurationError(f'No operations known for API version {version!r}')
        self._operations = operations
        self._headers = (
            f'Authorization: Bearer {api_key}',
            f'User-Agent: four-leads-api/{VERSION};python',
            'Accept: application/json',
        )
        self.transport = transport or RequestsTransport()
        self._transport_options: Dict[str, Any] = {}
        self.set_transport_options(transport_options or {})

        self.contacts = endpoints.Contacts(self)
        self.tags = endpoints.Tags(self)
        self.campaigns = endpoints.Campaigns(self)
        self.opt_ins = endpoints.OptIns(self)
        self.opt_in_cases = endpoints.OptInCases(self)
        self.global_fields = endpoints.GlobalFields(self)
        self.storage = endpoints.Storage(self)
        self.integrations = endpoints.Integrations(self)

    @classmethod
    def from_env(cls, **overrides) -> 'FourLeadsClient':
        """Build a client from FOURLEADS_API_KEY, FOURLEADS_API_URL and FOURLEADS_TIMEOUT.

        Keyword arguments override the environment.
        """
        api_key = os.environ.get(f'{cls.env_prefix}_API_KEY')
        if not api_key:
            raise ConfigurationError(f'Missing {cls.env_prefix}_API_KEY environment variable')
        raw_timeout = os.environ.get(f'{cls.env_prefix}_TIMEOUT', '10')
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f'Invalid {cls.env_prefix}_TIMEOUT: {raw_timeout!r}') from exc
        kwargs: Dict[str, Any] = {
            'host': os.environ.get(f'{cls.env_prefix}_API_URL'),
            'transport_options': {'timeout': timeout},
        }
        kwargs.update(overrides)
        return cls(api_key, **kwargs)

    @property
    def host(self) -> str:
        return self._host

    @property
    def headers(self) -> List[str]:
        return list(self._headers)

    @property
    def version(self) -> str:
        return self._version

    @property
    def transport_options(self) -> Dict[str, Any]:
        return dict(self._transport_options)

    def set_transport_options(self, options: Mapping[str, Any]) -> 'FourLeadsClient':
        """Replace the caller-supplied transport options wholesale."""
        known = self.transport.option_keys
        if known is not None:
            unknown = set(options) - known
            if unknown:
                raise ConfigurationError(f'Unsupported transport options: {sorted(unknown)}')
        self._transport_options = dict(options)
        return self

    def create_options(self) -> Dict[str, Any]:
        """Transport options for one call; the transport's required options win."""
        options = dict(self._transport_options)
        options.update(self.transport.required_options)
        return options

    def build_url(self, path: str, query_params: Optional[Mapping[str, Any]] = None) -> str:
        return build_url(self._host, self._version, path, query_params)

    def request(self, method: str, url: str, body: JSONValue = None,
                headers: Optional[Sequence[str]] = None) -> Response:
        """Perform one HTTP exchange and normalize the result.

        Args:
            method: HTTP method; GET/POST/PUT/DELETE are upper-cased, others sent as given
            url: Absolute URL, usually from ``build_url``
            body: JSON-serializable body, or None for no body
            headers: Extra ``"Name: value"`` lines appended after the defaults

        Returns:
            Response with the status code, header lines and decoded body

        Raises:
            SerializationError: body can't be encoded (nothing is sent)
            TransportError: the exchange failed at the connection level
            ResponseParseError: non-empty body that isn't JSON
        """
        spec = build_request(method, url, self._headers, body, headers)
        result = self.transport.perform(spec.method, spec.url, spec.headers, spec.body, self.create_options())
        return parse_response(*result)

    def call(self, name: str, ids: Optional[Mapping[str, Any]] = None,
             query: Optional[Mapping[str, Any]] = None, body: JSONValue = None) -> Response:
        """Run the named operation from this client's operation table."""
        try:
            operation = self._operations[name]
        except KeyError as exc:
            raise ConfigurationError(
                f'Operation {name!r} is not available for API version {self._version!r}') from exc
        url = self.build_url(operation.render(ids), query)
        return self.request(operation.method, url, body)

    def validate_key(self) -> bool:
        """Return True if the API key is accepted (``GET /ping`` answers 200).

        Only the status matters here, so an unparseable body doesn't fail the check.
        """
        try:
            return self.call('ping').status_code == 200
        except ResponseParseError as exc:
            return exc.status_code == 200
