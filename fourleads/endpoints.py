"""Resource namespaces built on ``FourLeadsClient.call``.

Each method assembles identifiers, query parameters and a JSON body for one
entry of the operation table and returns the raw ``Response``.

Pagination: ``page_num`` starts at 0 and ``page_size`` defaults to 50. The
API caps pages at 200 items; larger sizes are sent anyway and left to the
server to reject.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from fourleads.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, TagListMode
from fourleads.request import Response

logger = logging.getLogger(__name__)

Identifier = Union[int, str]


def _page(page_num: int, page_size: int) -> Dict[str, Any]:
    if page_size > MAX_PAGE_SIZE:
        logger.warning('page_size %s exceeds the API maximum of %s', page_size, MAX_PAGE_SIZE)
    return {'pageNum': page_num, 'pageSize': page_size}


class Resource:
    """Base for a group of operations sharing a table prefix."""

    name = ''

    def __init__(self, client):
        self._client = client

    def _call(self, action: str, ids: Optional[Mapping[str, Any]] = None,
              query: Optional[Mapping[str, Any]] = None, body: Any = None) -> Response:
        return self._client.call(f'{self.name}.{action}', ids=ids, query=query, body=body)

    def _list(self, page_num: int, page_size: int, search_string: str) -> Response:
        query = _page(page_num, page_size)
        query['searchString'] = search_string
        return self._call('list', query=query)

    def _get(self, ident: Identifier) -> Response:
        return self._call('get', {'id': ident})


class Contacts(Resource):
    name = 'contacts'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '',
             mode: Optional[int] = None, status: Optional[int] = None) -> Response:
        """List contacts, optionally filtered by email status (see ``ContactEmailStatus``)."""
        query = _page(page_num, page_size)
        query.update(searchString=search_string, mode=mode, status=status)
        return self._call('list', query=query)

    def get(self, contact_id: Identifier, embed: Optional[Iterable[str]] = None) -> Response:
        """Get a contact by id, embedding related lists (e.g. ``['tags']``) if asked."""
        embed = list(embed or [])
        return self._call('get', {'id': contact_id}, query={'embed': embed} if embed else None)

    def get_by_email(self, email: str) -> Response:
        return self._call('get', {'id': email})

    def create(self, contact: Mapping[str, Any], no_update: bool = False) -> Response:
        """Create a contact.

        Args:
            contact: Contact fields (``email`` is required by the API)
            no_update: If True, an existing contact with the same email is left untouched
        """
        body = dict(contact)
        if no_update:
            body['_noUpdate'] = True
        return self._call('create', body=body)

    def update(self, contact_id: Identifier, contact: Mapping[str, Any]) -> Response:
        return self._call('update', {'id': contact_id}, body=dict(contact))

    def delete(self, contact_id: Identifier) -> Response:
        return self._call('delete', {'id': contact_id})

    def get_fields(self, id_or_email: Identifier, field_ids: Optional[Iterable[int]] = None) -> Response:
        """Get global field values of a contact, limited to ``field_ids`` if given."""
        field_ids = list(field_ids or [])
        return self._call('get_fields', {'id': id_or_email},
                          query={'fieldIds': field_ids} if field_ids else None)

    def get_tags(self, id_or_email: Identifier) -> Response:
        return self._call('get_tags', {'id': id_or_email})

    def compare_tags(self, id_or_email: Identifier, tag_ids: Iterable[int]) -> Response:
        """Check which of ``tag_ids`` the contact carries."""
        return self._call('compare_tags', {'id': id_or_email}, query={'tagIds': list(tag_ids)})

    def add_tag(self, contact_id: Identifier, tag_id: int) -> Response:
        return self._call('add_tag', {'id': contact_id}, body={'tagId': tag_id})

    def remove_tag(self, contact_id: Identifier, tag_id: int) -> Response:
        return self._call('remove_tag', {'id': contact_id}, body={'tagId': tag_id})

    def add_tag_list(self, contact_id: Identifier, tag_ids: Iterable[int]) -> Response:
        return self._call('add_tag_list', {'id': contact_id}, body={'tagIds': list(tag_ids)})

    def remove_tag_list(self, contact_id: Identifier, tag_ids: Iterable[int]) -> Response:
        return self._call('remove_tag_list', {'id': contact_id}, body={'tagIds': list(tag_ids)})


class Tags(Resource):
    name = 'tags'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '',
             mode: int = TagListMode.DEFAULT) -> Response:
        """List tags.

        ``mode`` selects the list structure (see ``TagListMode``) and is only
        sent when it differs from the default. An empty search string is
        omitted.
        """
        query: Dict[str, Any] = {}
        if mode != TagListMode.DEFAULT:
            query['mode'] = mode
        query.update(_page(page_num, page_size))
        if search_string:
            query['searchString'] = search_string
        return self._call('list', query=query)

    def get(self, tag_id: Identifier) -> Response:
        return self._get(tag_id)

    def create(self, name: str) -> Response:
        return self._call('create', body={'name': name})

    def update(self, tag_id: Identifier, name: str) -> Response:
        return self._call('update', {'id': tag_id}, body={'name': name})

    def delete(self, tag_id: Identifier) -> Response:
        return self._call('delete', {'id': tag_id})


class Campaigns(Resource):
    name = 'campaigns'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '') -> Response:
        return self._list(page_num, page_size, search_string)

    def get(self, campaign_id: Identifier) -> Response:
        return self._get(campaign_id)

    def start(self, contact_id: int, campaign_id: Identifier) -> Response:
        """Start a campaign for a contact."""
        return self._call('start', {'id': campaign_id}, body={'contactId': contact_id})

    def stop(self, contact_id: int, campaign_id: Identifier) -> Response:
        """Stop a running campaign for a contact."""
        return self._call('stop', {'id': campaign_id}, body={'contactId': contact_id})

    def list_snippets(self, page_num: int = 0, page_size: int = 100, search_string: str = '') -> Response:
        """List form snippets."""
        query = _page(page_num, page_size)
        if search_string:
            query['searchString'] = search_string
        return self._call('snippets', query=query)


class OptIns(Resource):
    name = 'opt_ins'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '') -> Response:
        return self._list(page_num, page_size, search_string)

    def get(self, opt_in_id: Identifier) -> Response:
        return self._get(opt_in_id)

    def send(self, contact_id: int, opt_in_id: Identifier) -> Response:
        """Send the opt-in mail to a contact."""
        return self._call('send', {'id': opt_in_id}, body={'contactId': contact_id})


class OptInCases(Resource):
    name = 'opt_in_cases'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '') -> Response:
        return self._list(page_num, page_size, search_string)

    def get(self, case_id: Identifier) -> Response:
        return self._get(case_id)

    def _consent(self, action: str, contact_id: int, case_id: Identifier, ip: Optional[str]) -> Response:
        body: Dict[str, Any] = {'contactId': contact_id}
        if ip is not None:
            body['ip'] = ip
        return self._call(action, {'id': case_id}, body=body)

    def grant(self, contact_id: int, case_id: Identifier, ip: Optional[str] = None) -> Response:
        """Grant an opt-in case for a contact, recording ``ip`` as the consent source."""
        return self._consent('grant', contact_id, case_id, ip)

    def revoke(self, contact_id: int, case_id: Identifier, ip: Optional[str] = None) -> Response:
        return self._consent('revoke', contact_id, case_id, ip)


class GlobalFields(Resource):
    name = 'global_fields'

    def list(self, page_num: int = 0, page_size: int = DEFAULT_PAGE_SIZE, search_string: str = '') -> Response:
        return self._list(page_num, page_size, search_string)

    def get(self, field_id: Identifier) -> Response:
        return self._get(field_id)

    def create(self, field: Mapping[str, Any]) -> Response:
        """Create a global field (``name`` and a ``GlobalFieldType`` as ``type``)."""
        return self._call('create', body=dict(field))

    def update(self, field_id: Identifier, field: Mapping[str, Any]) -> Response:
        return self._call('update', {'id': field_id}, body=dict(field))

    def delete(self, field_id: Identifier) -> Response:
        return self._call('delete', {'id': field_id})

    def get_value(self, field_id: Identifier, contact_id: int) -> Response:
        return self._call('get_value', {'id': field_id}, query={'contactId': contact_id})

    def set_value(self, field_id: Identifier, contact_id: int, value: Any,
                  do_triggers: bool = True, overwrite: bool = True) -> Response:
        """Set a global field value on a contact.

        Args:
            field_id: Global field id
            contact_id: Contact id
            value: New value (summed up for numeric-sum fields)
            do_triggers: Fire value-change events if the value changes
            overwrite: If False only empty values are overwritten
        """
        body = {
            'contactId': contact_id,
            'value': value,
            'doTriggers': do_triggers,
            'overwrite': overwrite,
        }
        return self._call('set_value', {'id': field_id}, body=body)

    def set_field_list(self, contact_id: int, fields: Iterable[Mapping[str, Any]]) -> Response:
        """Set several field values at once; build ``fields`` with ``add_to_field_list``."""
        return self._call('set_field_list', body={'contactId': contact_id, 'fields': list(fields)})


class Storage(Resource):
    """Global values, addressed by their unique key."""

    name = 'storage'

    def list(self) -> Response:
        return self._call('list')

    def get(self, key: str) -> Response:
        return self._call('get', {'key': key})

    def get_value(self, key: Optional[str] = None) -> Response:
        """Get the value stored under ``key``, or all values if no key is given."""
        if key:
            return self._call('get_value', {'key': key})
        return self._call('get_values')

    def set_value(self, key: str, value: str, overwrite: bool = True) -> Response:
        body = {
            'fields': [{'key': key, 'value': value}],
            'options': {'overwrite': overwrite},
        }
        return self._call('set_value', body=body)

    def create(self, global_value: Mapping[str, Any]) -> Response:
        """Create a global value from ``name``, ``typeId`` (``GlobalValueType``), ``key`` and ``value``."""
        return self._call('create', body=dict(global_value))

    def update(self, key: str, global_value: Mapping[str, Any]) -> Response:
        return self._call('update', {'key': key}, body=dict(global_value))

    def delete(self, key: str) -> Response:
        return self._call('delete', {'key': key})


class Integrations(Resource):
    """WordPress plugin endpoints; each call is authorized by the plugin ``token``."""

    name = 'integrations'

    def trigger_events(self, body: Mapping[str, Any], integration_id: Identifier, token: str) -> Response:
        payload = dict(body)
        payload['token'] = token
        return self._call('trigger_events', {'integration_id': integration_id}, body=payload)

    def stop_automation(self, automation_id: int, integration_id: Identifier, token: str) -> Response:
        body = {'token': token, 'automationId': automation_id}
        return self._call('stop_automation', {'integration_id': integration_id}, body=body)

    def add_sync_tags(self, integration_id: Identifier, token: str, tag_ids: Iterable[int]) -> Response:
        body = {'token': token, 'tagIds': list(tag_ids)}
        return self._call('add_sync_tags', {'integration_id': integration_id}, body=body)

    def remove_sync_tags(self, integration_id: Identifier, token: str, tag_ids: Iterable[int]) -> Response:
        body = {'token': token, 'tagIds': list(tag_ids)}
        return self._call('remove_sync_tags', {'integration_id': integration_id}, body=body)

    def get_function_list(self, integration_id: Identifier, token: str) -> Response:
        # the token travels as a GET body
        return self._call('function_list', {'integration_id': integration_id}, body={'token': token})
