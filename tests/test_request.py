"""Tests for URL assembly, header merging, body encoding and response parsing."""

import dataclasses
import unittest

from fourleads.constants import GlobalFieldType, TagListMode
from fourleads.exceptions import ResponseParseError, SerializationError
from fourleads.request import (
    JSON_CONTENT_TYPE,
    Response,
    build_query,
    build_request,
    build_url,
    encode_body,
    merge_headers,
    normalize_method,
    parse_response,
)

HOST = 'https://api.4leads.net'
DEFAULT_HEADERS = ['Authorization: Bearer k', 'Accept: application/json']


class TestBuildQuery(unittest.TestCase):
    """Test PHP-style query string encoding."""

    def test_scalars_in_order(self):
        query = build_query({'pageNum': 0, 'pageSize': 50, 'searchString': ''})
        self.assertEqual(query, 'pageNum=0&pageSize=50&searchString=')

    def test_list_values_indexed(self):
        """Lists become key[i]=value pairs in original order."""
        query = build_query({'tagIds': [3, 1, 2]})
        self.assertEqual(query, 'tagIds%5B0%5D=3&tagIds%5B1%5D=1&tagIds%5B2%5D=2')

    def test_nested_mapping(self):
        self.assertEqual(build_query({'filter': {'status': 2}}), 'filter%5Bstatus%5D=2')

    def test_booleans_and_none(self):
        """Booleans become 1/0, None values are dropped."""
        self.assertEqual(build_query({'a': True, 'b': False, 'c': None}), 'a=1&b=0')

    def test_enum_values_unwrapped(self):
        query = build_query({'mode': TagListMode.IDS, 'type': GlobalFieldType.NUMERIC_SUM})
        self.assertEqual(query, 'mode=1&type=numeric-sum')

    def test_values_percent_encoded(self):
        self.assertEqual(build_query({'searchString': 'a b&c=d'}), 'searchString=a+b%26c%3Dd')

    def test_empty(self):
        self.assertEqual(build_query({}), '')
        self.assertEqual(build_query(None), '')


class TestBuildUrl(unittest.TestCase):
    """Test URL assembly."""

    def test_without_query(self):
        self.assertEqual(build_url(HOST, '/v1', '/tags'), 'https://api.4leads.net/v1/tags')

    def test_empty_query_adds_no_separator(self):
        url = build_url(HOST, '/v1', '/tags', {})
        self.assertEqual(url, 'https://api.4leads.net/v1/tags')
        self.assertNotIn('?', url)

    def test_query_with_only_none_values(self):
        self.assertEqual(build_url(HOST, '/v1', '/tags', {'mode': None}), 'https://api.4leads.net/v1/tags')

    def test_with_query(self):
        url = build_url(HOST, '/v1', '/tags', {'pageNum': 0, 'pageSize': 50})
        self.assertEqual(url, 'https://api.4leads.net/v1/tags?pageNum=0&pageSize=50')
        self.assertEqual(url.count('?'), 1)

    def test_list_query(self):
        url = build_url(HOST, '/v1', '/contacts/7/compareTagList', {'tagIds': [5, 9]})
        self.assertEqual(url.count('?'), 1)
        self.assertTrue(url.endswith('?tagIds%5B0%5D=5&tagIds%5B1%5D=9'))

    def test_empty_version(self):
        self.assertEqual(build_url(HOST, '', '/tags'), 'https://api.4leads.net/tags')

    def test_no_slash_normalization(self):
        self.assertEqual(build_url(HOST, '/v1/', '/tags'), 'https://api.4leads.net/v1//tags')

    def test_idempotent(self):
        params = {'pageNum': 1, 'tagIds': [1, 2]}
        self.assertEqual(build_url(HOST, '/v1', '/tags', params),
                         build_url(HOST, '/v1', '/tags', params))

    def test_relative_path_rejected(self):
        with self.assertRaises(ValueError):
            build_url(HOST, '/v1', 'tags')


class TestMergeHeaders(unittest.TestCase):
    """Test header merging and the JSON content type rule."""

    def test_defaults_only(self):
        headers = merge_headers(DEFAULT_HEADERS)
        self.assertEqual(headers, DEFAULT_HEADERS)
        self.assertIsNot(headers, DEFAULT_HEADERS)

    def test_extra_headers_keep_duplicates(self):
        """Extra headers never replace defaults with the same name."""
        headers = merge_headers(DEFAULT_HEADERS, ['Accept: text/plain'])
        self.assertEqual(headers, DEFAULT_HEADERS + ['Accept: text/plain'])

    def test_body_appends_content_type_last(self):
        headers = merge_headers(DEFAULT_HEADERS, has_body=True)
        self.assertEqual(headers[-1], JSON_CONTENT_TYPE)
        self.assertEqual(headers.count(JSON_CONTENT_TYPE), 1)

    def test_body_content_type_even_if_present(self):
        headers = merge_headers(DEFAULT_HEADERS, ['Content-Type: text/plain'], has_body=True)
        self.assertIn('Content-Type: text/plain', headers)
        self.assertEqual(headers[-1], JSON_CONTENT_TYPE)
        self.assertEqual(headers.count(JSON_CONTENT_TYPE), 1)


class TestEncodeBody(unittest.TestCase):
    """Test JSON body encoding."""

    def test_compact(self):
        self.assertEqual(encode_body({'a': 1, 'b': [1, 2]}), b'{"a":1,"b":[1,2]}')

    def test_non_ascii_escaped(self):
        self.assertEqual(encode_body({'name': 'Müller'}), b'{"name":"M\\u00fcller"}')

    def test_not_serializable(self):
        with self.assertRaises(SerializationError) as ctx:
            encode_body({'when': object()})
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_nan_rejected(self):
        with self.assertRaises(SerializationError):
            encode_body({'value': float('nan')})


class TestBuildRequest(unittest.TestCase):
    """Test request assembly."""

    def test_method_normalization(self):
        self.assertEqual(normalize_method('get'), 'GET')
        self.assertEqual(normalize_method('Delete'), 'DELETE')
        self.assertEqual(normalize_method('patch'), 'patch')

    def test_with_body(self):
        spec = build_request('post', 'https://x/v1/tags', DEFAULT_HEADERS, {'name': 'VIP'})
        self.assertEqual(spec.method, 'POST')
        self.assertEqual(spec.body, b'{"name":"VIP"}')
        self.assertEqual(spec.headers[-1], JSON_CONTENT_TYPE)

    def test_without_body(self):
        spec = build_request('GET', 'https://x/v1/tags', DEFAULT_HEADERS)
        self.assertIsNone(spec.body)
        self.assertNotIn(JSON_CONTENT_TYPE, spec.headers)

    def test_bad_body(self):
        with self.assertRaises(SerializationError):
            build_request('POST', 'https://x/v1/tags', DEFAULT_HEADERS, {1, 2})


class TestParseResponse(unittest.TestCase):
    """Test response normalization."""

    header = (b'HTTP/1.1 200 OK\r\n'
              b'Content-Type: application/json\r\n'
              b'X-RateLimit-Remaining: 99\r\n\r\n')

    def test_header_lines(self):
        response = parse_response(200, self.header, b'')
        self.assertEqual(response.response_headers, (
            'HTTP/1.1 200 OK',
            'Content-Type: application/json',
            'X-RateLimit-Remaining: 99',
            '',
            '',
        ))
        self.assertEqual(response.header_size, len(self.header))

    def test_empty_body_unchanged(self):
        response = parse_response(204, self.header, b'')
        self.assertEqual(response.response_body, b'')

    def test_json_body(self):
        response = parse_response(200, self.header, b'{"items":[],"total":0}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.response_body, {'items': [], 'total': 0})

    def test_error_status_is_not_raised(self):
        response = parse_response(404, self.header, b'{"error":"not found"}')
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.ok)
        self.assertEqual(response.response_body, {'error': 'not found'})

    def test_invalid_json(self):
        with self.assertRaises(ResponseParseError) as ctx:
            parse_response(502, self.header, b'<html>Bad gateway</html>')
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertEqual(ctx.exception.body, b'<html>Bad gateway</html>')

    def test_header_lookup(self):
        response = parse_response(200, self.header, b'')
        self.assertEqual(response.header('x-ratelimit-remaining'), '99')
        self.assertIsNone(response.header('Retry-After'))

    def test_status_properties(self):
        self.assertTrue(Response(201, (), b'').ok)
        self.assertTrue(Response(429, (), b'').too_many_requests)
        self.assertFalse(Response(200, (), b'').too_many_requests)

    def test_immutable(self):
        response = parse_response(200, self.header, b'{}')
        with self.assertRaises(dataclasses.FrozenInstanceError):
            response.status_code = 500


if __name__ == '__main__':
    unittest.main()
