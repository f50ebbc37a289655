"""Constant tables shared by the endpoint namespaces."""

from enum import Enum, IntEnum
from typing import Any, Dict, List

VERSION = '0.1.0'
TOO_MANY_REQUESTS = 429
MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50
MAX_FIELD_LIST_LENGTH = 20


class ContactEmailStatus(IntEnum):
    UNKNOWN = 0
    # opt-in sent, waiting for verification
    PENDING = 1
    # default status when created through the API
    VERIFIED = 2
    # soft bounce
    BLOCKED = 3
    # soft spam report
    DROPPED = 4
    # hard bounce
    BOUNCED = 5
    # hard spam report
    SUSPENDED = 6


class TagListMode(IntEnum):
    DEFAULT = 0
    IDS = 1
    SIMPLE = 2


class GlobalFieldType(str, Enum):
    TEXT = 'text'
    DATETIME = 'datetime'
    # stored as a (20,6) decimal
    NUMERIC = 'numeric'
    # values are added to the stored value, negatives allowed
    NUMERIC_SUM = 'numeric-sum'
    # read-only complex types
    TEXTAREA = 'textarea'
    RADIO = 'radio'
    SELECT = 'select'
    CHECKBOX = 'checkbox'


class GlobalValueType(str, Enum):
    TEXT = 'text'
    NUMERIC = 'numeric'
    NUMERIC_SUM = 'numeric-sum'
    DATETIME = 'datetime'


class LockMode(IntEnum):
    DEFAULT = 0
    IGNORE = 1
    FORCE = 2


def add_to_field_list(
    field_list: List[Dict[str, Any]],
    global_field_id: int,
    value: Any,
    do_triggers: bool = True,
    overwrite: bool = True,
) -> bool:
    """Append a field entry for ``global_fields.set_field_list``.

    The API accepts at most 20 entries per call.

    Args:
        field_list: List being built up, modified in place
        global_field_id: Target global field
        value: Value to set
        do_triggers: Fire value-change events if the value changes
        overwrite: If False only empty values are overwritten

    Returns:
        True if the entry was added, False if the list is already full
    """
    if len(field_list) >= MAX_FIELD_LIST_LENGTH:
        return False
    field_list.append({
        'globalFieldId': global_field_id,
        'value': value,
        'doTriggers': do_triggers,
        'overwrite': overwrite,
    })
    return True
