"""Request construction and response normalization.

Every endpoint call passes through here:
  - build_url: host + version + path, plus a PHP-style query string
  - build_request: method normalization, header merge, JSON body encoding
  - parse_response: header lines + decoded JSON body into a ``Response``

Nothing in this module does I/O; the functions are pure and safe to call
repeatedly.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

from fourleads.constants import TOO_MANY_REQUESTS
from fourleads.exceptions import ResponseParseError, SerializationError

JSONValue = Union[None, bool, int, float, str, List['JSONValue'], Dict[str, 'JSONValue']]

METHODS = ('GET', 'POST', 'PUT', 'DELETE')
JSON_CONTENT_TYPE = 'Content-Type: application/json'


@dataclass(frozen=True)
class RequestSpec:
    """A dispatchable request. Built per call and discarded afterwards."""
    method: str
    url: str
    headers: Tuple[str, ...]
    body: Optional[bytes] = None


@dataclass(frozen=True)
class Response:
    """Normalized result of one request/response cycle.

    Attributes:
        status_code: HTTP status, returned as-is for 4xx/5xx too
        response_headers: Trimmed header lines, status line first
        response_body: Decoded JSON if the raw body was non-empty, else the raw empty body
        header_size: Byte length of the raw header block
    """
    status_code: int
    response_headers: Tuple[str, ...]
    response_body: Any
    header_size: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def too_many_requests(self) -> bool:
        return self.status_code == TOO_MANY_REQUESTS

    def header(self, name: str) -> Optional[str]:
        """Return the value of the first header line named ``name``, if any."""
        prefix = name.lower() + ':'
        for line in self.response_headers:
            if line.lower().startswith(prefix):
                return line[len(prefix):].strip()
        return None


def normalize_method(method: str) -> str:
    """Upper-case known HTTP methods; anything else is passed through untouched."""
    upper = method.upper()
    if upper in METHODS:
        return upper
    return method


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f'{prefix}[{key}]', item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f'{prefix}[{index}]', item, pairs)
    elif isinstance(value, bool):
        pairs.append((prefix, '1' if value else '0'))
    else:
        pairs.append((prefix, str(value)))


def build_query(params: Optional[Mapping[str, Any]]) -> str:
    """Encode query parameters the way the 4leads API expects.

    Lists become ``key[0]=..&key[1]=..`` in order, nested mappings become
    ``key[sub]=..``, booleans become 1/0 and None values are dropped.
    Keys and values are percent-encoded.
    """
    if not params:
        return ''
    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


def build_url(host: str, version: str, path: str,
              query_params: Optional[Mapping[str, Any]] = None) -> str:
    """Return ``host + version + path[?query]``.

    Slashes are not normalized; ``path`` must already be clean.
    """
    if not path.startswith('/'):
        raise ValueError(f'Path must start with "/": {path!r}')
    query = build_query(query_params)
    if query:
        path = f'{path}?{query}'
    return f'{host}{version or ""}{path}'


def merge_headers(default_headers: Sequence[str],
                  extra_headers: Optional[Sequence[str]] = None,
                  has_body: bool = False) -> List[str]:
    """Concatenate header lines.

    Extra headers are appended after the defaults without removing entries
    of the same name. With a body, the JSON content type is always appended
    last, even if a content type is already present.
    """
    headers = list(default_headers)
    if extra_headers is not None:
        headers.extend(extra_headers)
    if has_body:
        headers.append(JSON_CONTENT_TYPE)
    return headers


def encode_body(body: JSONValue) -> bytes:
    """Serialize ``body`` as compact JSON, UTF-8 encoded."""
    try:
        text = json.dumps(body, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f'Request body is not JSON serializable: {exc}') from exc
    return text.encode('utf-8')


def build_request(method: str, url: str, default_headers: Sequence[str],
                  body: JSONValue = None,
                  extra_headers: Optional[Sequence[str]] = None) -> RequestSpec:
    """Assemble a ``RequestSpec``. Serialization errors surface here, before any I/O."""
    has_body = body is not None
    encoded = encode_body(body) if has_body else None
    headers = merge_headers(default_headers, extra_headers, has_body)
    return RequestSpec(normalize_method(method), url, tuple(headers), encoded)


def parse_response(status_code: int, header_bytes: bytes, body_bytes: bytes) -> Response:
    """Split the raw transport output into a ``Response``.

    Header lines are trimmed and kept verbatim, status line and blank lines
    included. A non-empty body must be JSON.
    """
    header_text = header_bytes.decode('iso-8859-1')
    headers = tuple(line.strip() for line in header_text.split('\n'))

    body: Any = body_bytes
    if len(body_bytes):
        try:
            body = json.loads(body_bytes)
        except ValueError as exc:
            raise ResponseParseError(
                f'Response body ({status_code}) is not valid JSON: {exc}',
                status_code=status_code,
                body=body_bytes,
            ) from exc

    return Response(status_code, headers, body, len(header_bytes))
