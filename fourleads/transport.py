"""HTTP transport used by the client.

The client only needs one capability from its transport: perform a single
HTTP exchange and hand back the status code, the raw header block and the raw
body. ``RequestsTransport`` is the default; tests plug in their own.
"""

import logging
from abc import ABCMeta, abstractmethod
from typing import Any, Dict, FrozenSet, Mapping, NamedTuple, Optional, Sequence

import requests
from requests.structures import CaseInsensitiveDict

from fourleads.exceptions import TransportError

logger = logging.getLogger(__name__)

HTTP_VERSIONS = {9: 'HTTP/0.9', 10: 'HTTP/1.0', 11: 'HTTP/1.1', 20: 'HTTP/2'}


class TransportResult(NamedTuple):
    status_code: int
    header_bytes: bytes
    body_bytes: bytes


class Transport(object, metaclass=ABCMeta):
    """Parent class enforcing the interface the client needs from a transport."""

    # Option keys accepted by ``perform``; None means anything goes.
    option_keys: Optional[FrozenSet[str]] = None
    # Options that always win over caller-supplied ones.
    required_options: Mapping[str, Any] = {}

    @abstractmethod
    def perform(self, method: str, url: str, headers: Sequence[str],
                body: Optional[bytes], options: Mapping[str, Any]) -> TransportResult:
        pass


def fold_headers(lines: Sequence[str]) -> CaseInsensitiveDict:
    """Turn ``"Name: value"`` lines into a header mapping.

    requests can't send a header name twice, so repeated names are folded
    into one comma-separated value in the order they were given.
    """
    folded: CaseInsensitiveDict = CaseInsensitiveDict()
    for line in lines:
        name, sep, value = line.partition(':')
        name = name.strip()
        if not sep or not name:
            raise ValueError(f'Malformed header line: {line!r}')
        value = value.strip()
        if name in folded:
            folded[name] = f'{folded[name]}, {value}'
        else:
            folded[name] = value
    return folded


def header_block(response: requests.Response) -> bytes:
    """Rebuild the raw header block (status line, header lines, blank line)."""
    raw = response.raw
    version = HTTP_VERSIONS.get(getattr(raw, 'version', 11), 'HTTP/1.1')
    lines = [f'{version} {response.status_code} {response.reason or ""}'.rstrip()]
    raw_headers = getattr(raw, 'headers', None) or response.headers
    lines.extend(f'{name}: {value}' for name, value in raw_headers.items())
    return ('\r\n'.join(lines) + '\r\n\r\n').encode('iso-8859-1', errors='replace')


class RequestsTransport(Transport):
    """Transport backed by ``requests``.

    A new session is opened for every call and closed on every exit path, so
    nothing is pooled between calls.
    """

    option_keys = frozenset({'timeout', 'verify', 'cert', 'proxies', 'allow_redirects', 'stream'})
    # Body is read eagerly; TLS peer verification is always on.
    required_options = {'stream': False, 'verify': True}

    def perform(self, method: str, url: str, headers: Sequence[str],
                body: Optional[bytes], options: Mapping[str, Any]) -> TransportResult:
        header_map = fold_headers(headers)
        kwargs: Dict[str, Any] = dict(options)
        # 3xx responses are returned to the caller unless redirects are asked for
        kwargs.setdefault('allow_redirects', False)
        logger.debug('4leads request: %s %s', method, url)
        try:
            with requests.Session() as session:
                response = session.request(method, url, headers=header_map, data=body, **kwargs)
                result = TransportResult(response.status_code, header_block(response), response.content)
        except requests.RequestException as exc:
            raise TransportError(f'4leads request failed: {exc}') from exc
        logger.debug('4leads response: %s %s -> %s', method, url, result.status_code)
        return result
