# Copyright (c) 2010-2013 OpenStack, LLC.
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

import urllib.parse

from requests.exceptions import RequestException

#: Network level failures are raised by requests and reach the caller as-is.
TransportError = RequestException


class ClientException(Exception):

    def __init__(self, msg, http_scheme='', http_host='', http_port='',
                 http_path='', http_query='', http_status=None, http_reason='',
                 http_response_content='', http_response_headers=None):
        super(ClientException, self).__init__(msg)
        self.msg = msg
        self.http_scheme = http_scheme
        self.http_host = http_host
        self.http_port = http_port
        self.http_path = http_path
        self.http_query = http_query
        self.http_status = http_status
        self.http_reason = http_reason
        self.http_response_content = http_response_content
        self.http_response_headers = http_response_headers

        self.transaction_id = None
        if self.http_response_headers:
            for header in ('x-ms-request-id', 'X-Ms-Request-Id'):
                if header in self.http_response_headers:
                    self.transaction_id = self.http_response_headers[header]
                    break

    @classmethod
    def from_response(cls, resp, msg=None, body=None):
        msg = msg or '%s %s' % (resp.status, resp.reason)
        if body is None:
            body = getattr(resp, 'content', '')
        parsed_url = urllib.parse.urlparse(resp.request.url)
        return cls(msg, parsed_url.scheme, parsed_url.hostname,
                   parsed_url.port, parsed_url.path, parsed_url.query,
                   resp.status, resp.reason, body, dict(resp.getheaders()))

    def __str__(self):
        a = self.msg
        b = ''
        if self.http_scheme:
            b += '%s://' % self.http_scheme
        if self.http_host:
            b += self.http_host
        if self.http_port:
            b += ':%s' % self.http_port
        if self.http_path:
            b += self.http_path
        if self.http_query:
            b += '?%s' % self.http_query
        if self.http_status:
            if b:
                b = '%s %s' % (b, self.http_status)
            else:
                b = str(self.http_status)
        if self.http_reason and self.http_reason != self.msg:
            if b:
                b = '%s %s' % (b, self.http_reason)
            else:
                b = '- %s' % self.http_reason
        if self.http_response_content:
            if len(self.http_response_content) <= 60:
                b += '   %s' % self.http_response_content
            else:
                b += '  [first 60 chars of response] %s' \
                    % self.http_response_content[:60]
        c = ''
        if self.transaction_id:
            c = ' (request-id: %s)' % self.transaction_id
        return b and '%s: %s%s' % (a, b, c) or (a + c)


class ConfigurationError(ClientException):
    """Blob storage is disabled, unconfigured or has an unusable key."""


class MappingError(ClientException):
    """A listing response could not be turned into records."""


class ValidationError(ClientException):
    """
    The service answered with a non-2xx status. ``msg`` is the reason
    phrase exactly as the service sent it.
    """

    @classmethod
    def from_response(cls, resp, msg=None, body=None):
        return super(ValidationError, cls).from_response(
            resp, msg or resp.reason, body)


class AuthenticationError(ValidationError):
    """
    The service rejected the request signature (401/403).

    The response alone cannot tell a canonicalization bug from clock skew
    or a wrong key; re-derive the string to sign to find out which.
    """
