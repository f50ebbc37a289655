"""Operation table: one entry per remote resource action, keyed by API version.

Path templates use ``{id}`` style placeholders; identifiers are
percent-encoded when the path is rendered.
"""

from typing import Any, Dict, Mapping, NamedTuple, Optional
from urllib.parse import quote


class Operation(NamedTuple):
    method: str
    path: str

    def render(self, ids: Optional[Mapping[str, Any]] = None) -> str:
        """Substitute identifiers into the path template."""
        encoded = {name: quote(str(value), safe='') for name, value in (ids or {}).items()}
        return self.path.format(**encoded)


PLUGIN = '/integrations/fl-plugin/{integration_id}'

V1: Dict[str, Operation] = {
    'ping': Operation('GET', '/ping'),

    'contacts.list': Operation('GET', '/contacts'),
    'contacts.get': Operation('GET', '/contacts/{id}'),
    'contacts.create': Operation('POST', '/contacts'),
    'contacts.update': Operation('PUT', '/contacts/{id}'),
    'contacts.delete': Operation('DELETE', '/contacts/{id}'),
    'contacts.get_fields': Operation('GET', '/contacts/{id}/getFieldList'),
    'contacts.get_tags': Operation('GET', '/contacts/{id}/getTagList'),
    'contacts.compare_tags': Operation('GET', '/contacts/{id}/compareTagList'),
    'contacts.add_tag': Operation('POST', '/contacts/{id}/addTag'),
    'contacts.remove_tag': Operation('POST', '/contacts/{id}/removeTag'),
    'contacts.add_tag_list': Operation('POST', '/contacts/{id}/addTagList'),
    'contacts.remove_tag_list': Operation('POST', '/contacts/{id}/removeTagList'),

    'tags.list': Operation('GET', '/tags'),
    'tags.get': Operation('GET', '/tags/{id}'),
    'tags.create': Operation('POST', '/tags'),
    'tags.update': Operation('PUT', '/tags/{id}'),
    'tags.delete': Operation('DELETE', '/tags/{id}'),

    'campaigns.list': Operation('GET', '/campaigns'),
    'campaigns.get': Operation('GET', '/campaigns/{id}'),
    'campaigns.start': Operation('POST', '/campaigns/{id}/start'),
    'campaigns.stop': Operation('POST', '/campaigns/{id}/stop'),
    'campaigns.snippets': Operation('GET', '/campaigns/snippets'),

    'opt_ins.list': Operation('GET', '/opt-ins'),
    'opt_ins.get': Operation('GET', '/opt-ins/{id}'),
    'opt_ins.send': Operation('POST', '/opt-ins/{id}/send'),

    'opt_in_cases.list': Operation('GET', '/opt-in-cases'),
    'opt_in_cases.get': Operation('GET', '/opt-in-cases/{id}'),
    'opt_in_cases.grant': Operation('POST', '/opt-in-cases/{id}/grant'),
    'opt_in_cases.revoke': Operation('POST', '/opt-in-cases/{id}/revoke'),

    'global_fields.list': Operation('GET', '/globalFields'),
    'global_fields.get': Operation('GET', '/globalFields/{id}'),
    'global_fields.create': Operation('POST', '/globalFields'),
    'global_fields.update': Operation('PUT', '/globalFields/{id}'),
    'global_fields.delete': Operation('DELETE', '/globalFields/{id}'),
    'global_fields.get_value': Operation('GET', '/globalFields/{id}/getValue'),
    'global_fields.set_value': Operation('POST', '/globalFields/{id}/setValue'),
    'global_fields.set_field_list': Operation('POST', '/globalFields/setFieldList'),

    'storage.list': Operation('GET', '/storage'),
    'storage.get': Operation('GET', '/storage/{key}'),
    'storage.create': Operation('POST', '/storage'),
    'storage.update': Operation('PUT', '/storage/{key}'),
    'storage.delete': Operation('DELETE', '/storage/{key}'),
    'storage.get_values': Operation('GET', '/storage-values'),
    'storage.get_value': Operation('GET', '/storage-values/{key}'),
    'storage.set_value': Operation('POST', '/storage-values'),

    'integrations.trigger_events': Operation('POST', PLUGIN + '/trigger-events'),
    'integrations.stop_automation': Operation('POST', PLUGIN + '/stop-automation'),
    'integrations.add_sync_tags': Operation('POST', PLUGIN + '/tags'),
    'integrations.remove_sync_tags': Operation('DELETE', PLUGIN + '/tags'),
    'integrations.function_list': Operation('GET', PLUGIN + '/function-list'),
}

OPERATIONS: Dict[str, Dict[str, Operation]] = {
    '/v1': V1,
}
