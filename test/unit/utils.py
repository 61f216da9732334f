# Copyright (c) 2010-2012 OpenStack, LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import importlib
import unittest
from unittest import mock

from requests import RequestException
from requests.structures import CaseInsensitiveDict
from urllib.parse import urlparse, ParseResult

from blobclient import auth
from blobclient import client as c

TEST_ACCOUNT = 'myaccount'
# base64 of b'secret-key'
TEST_KEY = 'c2VjcmV0LWtleQ=='
TEST_DATE = 'Sun, 18 Oct 2026 10:00:00 GMT'


def make_credentials(endpoint=None):
    return auth.SharedKeyCredentials(TEST_ACCOUNT, TEST_KEY,
                                     endpoint=endpoint)


def container_listing(*names, next_marker=''):
    containers = ''.join(
        '<Container><Name>%s</Name></Container>' % name for name in names)
    return ('<?xml version="1.0" encoding="utf-8"?>'
            '<EnumerationResults ServiceEndpoint="https://myaccount.blob.'
            'core.windows.net/"><Containers>%s</Containers>'
            '<NextMarker>%s</NextMarker></EnumerationResults>'
            % (containers, next_marker)).encode('utf-8')


def blob_listing(*names, next_marker=''):
    blobs = ''.join(
        '<Blob><Name>%s</Name><Properties><Content-Length>5</Content-Length>'
        '</Properties></Blob>' % name for name in names)
    return ('<?xml version="1.0" encoding="utf-8"?>'
            '<EnumerationResults ContainerName="logs"><Blobs>%s</Blobs>'
            '<NextMarker>%s</NextMarker></EnumerationResults>'
            % (blobs, next_marker)).encode('utf-8')


class StubResponse(object):
    """
    Placeholder structure for use with fake_http_connect's code_iter to modify
    response attributes (status, body, headers, reason) on a per-request
    basis.
    """

    def __init__(self, status=200, body=b'', headers=None, reason=None):
        self.status = status
        self.body = body
        self.headers = headers or {}
        self.reason = reason

    def __repr__(self):
        return '%s(%r, %r, %r)' % (self.__class__.__name__, self.status,
                                   self.body, self.headers)


def fake_http_connect(*code_iter, **kwargs):
    """
    Generate a callable which yields a series of stubbed responses, one per
    request made.
    """

    class FakeConn(object):

        def __init__(self, status, body=b'', headers=None, reason=None):
            self.status_code = self.status = status
            self.reason = reason or 'Fake'
            self.scheme = 'https'
            self.host = 'myaccount.blob.core.windows.net'
            self.body = body
            self.headers = headers
            self.request = None
            self._closed = False

        def getheaders(self):
            if self.headers is not None:
                return list(self.headers.items())
            headers = {'content-length': str(len(self.body)),
                       'etag': '"0x8D0000000000001"',
                       'x-ms-request-id': 'req-1234'}
            if 'headers' in kwargs:
                headers.update(kwargs['headers'])
            return list(headers.items())

        def read(self, amt=None):
            rv = self.body[:amt]
            if amt is not None:
                self.body = self.body[amt:]
            else:
                self.body = b''
            return rv

        def getheader(self, name, default=None):
            return dict((k.lower(), v) for k, v in self.getheaders()).get(
                name.lower(), default)

        def close(self):
            self._closed = True

    code_iter = iter(code_iter)

    def connect(*args, **ckwargs):
        if 'give_connect' in kwargs:
            kwargs['give_connect'](*args, **ckwargs)
        status = next(code_iter)
        if isinstance(status, StubResponse):
            fake_conn = FakeConn(status.status, body=status.body,
                                 headers=status.headers,
                                 reason=status.reason)
        else:
            fake_conn = FakeConn(status, body=kwargs.get('body', b''))
        if fake_conn.status <= 0:
            raise RequestException()
        return fake_conn

    connect.code_iter = code_iter
    return connect


class MockHttpTest(unittest.TestCase):

    def setUp(self):
        super(MockHttpTest, self).setUp()
        self.fake_connect = None
        self.request_log = []
        self.connections = []

        date_patcher = mock.patch.object(c, 'format_request_date',
                                         return_value=TEST_DATE)
        date_patcher.start()
        self.addCleanup(date_patcher.stop)

        def fake_http_connection(*args, **kwargs):
            self.validateMockedRequestsConsumed()
            self.request_log = []
            self.fake_connect = fake_http_connect(*args, **kwargs)
            exc = kwargs.get('exc')

            def wrapper(url, insecure=False, cacert=None,
                        default_user_agent=None, timeout=None):
                parsed = urlparse(url)

                class RequestsWrapper(object):
                    closed = False

                    def close(self):
                        self.closed = True
                        if hasattr(self, 'resp'):
                            self.resp.close()
                conn = RequestsWrapper()
                conn.connect_kwargs = {
                    'insecure': insecure, 'cacert': cacert,
                    'default_user_agent': default_user_agent,
                    'timeout': timeout}
                self.connections.append(conn)

                def request(method, path, *args, **kwargs):
                    try:
                        conn.resp = self.fake_connect()
                    except StopIteration:
                        self.fail('Unexpected %s request for %s' % (
                            method, path))
                    self.request_log.append((parsed, method, path, args,
                                             kwargs, conn.resp))
                    conn.resp.request = RequestsWrapper()
                    conn.resp.request.url = '%s://%s%s' % (
                        conn.resp.scheme, conn.resp.host, path)
                    if exc:
                        raise exc
                    return conn.resp

                conn.request = request

                def getresponse():
                    return conn.resp
                conn.getresponse = getresponse

                return parsed, conn
            return wrapper
        self.fake_http_connection = fake_http_connection

    def iter_request_log(self):
        for parsed, method, path, args, kwargs, resp in self.request_log:
            parts = parsed._asdict()
            parts['path'] = path
            full_path = ParseResult(**parts).geturl()
            args = list(args)
            log = dict(zip(('body', 'headers'), args))
            log.update({
                'method': method,
                'full_path': full_path,
                'parsed_path': urlparse(full_path),
                'path': path,
                'headers': CaseInsensitiveDict(log.get('headers')),
                'resp': resp,
                'status': resp.status,
            })
            yield log

    orig_assertEqual = unittest.TestCase.assertEqual

    def assert_request_equal(self, expected, real_request):
        method, path = expected[:2]
        if urlparse(path).scheme:
            match_path = real_request['full_path']
        else:
            match_path = real_request['path']
        self.assertEqual((method, path), (real_request['method'],
                                          match_path))
        if len(expected) > 2:
            body = expected[2]
            real_request['expected'] = body
            err_msg = 'Body mismatch for %(method)s %(path)s, ' \
                'expected %(expected)r, and got %(body)r' % real_request
            self.orig_assertEqual(body, real_request['body'], err_msg)

        if len(expected) > 3:
            headers = CaseInsensitiveDict(expected[3])
            for key, value in headers.items():
                real_request['key'] = key
                real_request['expected_value'] = value
                real_request['value'] = real_request['headers'].get(key)
                err_msg = (
                    'Header mismatch on %(key)r, '
                    'expected %(expected_value)r and got %(value)r '
                    'for %(method)s %(path)s %(headers)r' % real_request)
                self.orig_assertEqual(value, real_request['value'],
                                      err_msg)

    def assertRequests(self, expected_requests):
        """
        Make sure some requests were made like you expected, provide a list of
        expected requests, typically in the form of [(method, path), ...]
        or [(method, path, body, headers), ...]
        """
        real_requests = self.iter_request_log()
        for expected in expected_requests:
            real_request = next(real_requests)
            self.assert_request_equal(expected, real_request)
        try:
            real_request = next(real_requests)
        except StopIteration:
            pass
        else:
            self.fail('At least one extra request received: %r' %
                      real_request)

    def validateMockedRequestsConsumed(self):
        if not self.fake_connect:
            return
        unused_responses = list(self.fake_connect.code_iter)
        if unused_responses:
            self.fail('Unused responses %r' % (unused_responses,))

    def tearDown(self):
        self.validateMockedRequestsConsumed()
        super(MockHttpTest, self).tearDown()
        # tests swap c.http_connection for a fake; put the real one back
        importlib.reload(c)


class FakeStream(object):
    def __init__(self, size):
        self.bytes_read = 0
        self.size = size

    def read(self, size=-1):
        if self.bytes_read == self.size:
            return b''

        if size == -1 or size + self.bytes_read > self.size:
            remaining = self.size - self.bytes_read
            self.bytes_read = self.size
            return b'A' * remaining

        self.bytes_read += size
        return b'A' * size

    def __len__(self):
        return self.size
