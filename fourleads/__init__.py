"""Python client for the 4leads REST API."""

from .client import FourLeadsClient
from .constants import (
    MAX_PAGE_SIZE,
    TOO_MANY_REQUESTS,
    VERSION as __version__,
    ContactEmailStatus,
    GlobalFieldType,
    GlobalValueType,
    LockMode,
    TagListMode,
    add_to_field_list,
)
from .exceptions import (
    ConfigurationError,
    FourLeadsError,
    ResponseParseError,
    SerializationError,
    TransportError,
)
from .request import Response
from .transport import RequestsTransport, Transport, TransportResult
