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

"""
Shared Key request signing.

Every request carries an ``Authorization`` header computed from the
request itself::

   > GET /?comp=list HTTP/1.1
   > x-ms-date: Sun, 18 Oct 2026 10:00:00 GMT
   > x-ms-version: 2019-12-12
   > Authorization: SharedKey <account>:<base64 HMAC-SHA256>

The HMAC is taken over a "string to sign": twelve fixed lines (the verb
and eleven standard header slots), the canonical ``x-ms-*`` headers and
the canonical resource. Any difference between what is signed here and
what the service rebuilds on its side is reported as a 403 with no
further detail, so the construction below must stay byte-exact.
"""

import base64
import binascii
import hashlib
import hmac
import logging
from email.utils import formatdate

from blobclient.exceptions import ConfigurationError

logger = logging.getLogger("blobclient")

API_VERSION = '2019-12-12'
DEFAULT_ENDPOINT = 'https://%s.blob.core.windows.net'
CUSTOM_HEADER_PREFIX = 'x-ms-'

#: Standard header slots following the verb, in string-to-sign order.
#: Only Content-Length and Content-Type are ever filled by this client.
STANDARD_HEADER_SLOTS = (
    'Content-Encoding',
    'Content-Language',
    'Content-Length',
    'Content-MD5',
    'Content-Type',
    'Date',
    'If-Modified-Since',
    'If-Match',
    'If-None-Match',
    'If-Unmodified-Since',
    'Range',
)


class SharedKeyCredentials:
    """
    Account name, endpoint and decoded account key.

    Built once from configuration and never changed afterwards. The key
    is kept as raw bytes and is left out of ``repr``.
    """

    def __init__(self, account, account_key, endpoint=None,
                 api_version=API_VERSION):
        if not account:
            raise ConfigurationError('No storage account name configured')
        if not account_key:
            raise ConfigurationError(
                'No shared key configured for account %s' % account)
        try:
            key = base64.b64decode(account_key, validate=True)
        except (binascii.Error, ValueError):
            raise ConfigurationError(
                'Shared key for account %s is not valid base64' % account)
        if not key:
            raise ConfigurationError(
                'Shared key for account %s is empty' % account)
        self._account = account
        self._key = key
        self._endpoint = (endpoint or DEFAULT_ENDPOINT % account).rstrip('/')
        self._api_version = api_version

    @property
    def account(self):
        return self._account

    @property
    def key(self):
        return self._key

    @property
    def endpoint(self):
        return self._endpoint

    @property
    def api_version(self):
        return self._api_version

    def __repr__(self):
        return '%s(account=%r, endpoint=%r, api_version=%r)' % (
            type(self).__name__, self._account, self._endpoint,
            self._api_version)


def format_request_date(timestamp=None):
    """
    Format a timestamp the way ``x-ms-date`` expects it, e.g.
    ``Sun, 18 Oct 2026 10:00:00 GMT``.

    :param timestamp: seconds since the epoch; defaults to now
    """
    return formatdate(timestamp, usegmt=True)


def canonicalize_query(raw_query):
    """
    Canonical form of a query string.

    Tokens are sorted as plain strings and the first ``=`` of each one
    becomes ``:``; values are left exactly as given.

    :param raw_query: an ``&``-joined query string, or a sequence of
                      ``name=value`` tokens that were already split (and
                      possibly decoded, so a value may hold ``&``)

    >>> canonicalize_query('restype=container&comp=list')
    'comp:list\\nrestype:container'
    >>> canonicalize_query(['comp=list', 'prefix=a&b'])
    'comp:list\\nprefix:a&b'
    """
    if not raw_query:
        return ''
    if isinstance(raw_query, str):
        raw_query = raw_query.lstrip('?').split('&')
    tokens = sorted(raw_query)
    return '\n'.join(token.replace('=', ':', 1) for token in tokens)


def canonicalize_headers(headers):
    """
    Canonical form of the ``x-ms-*`` headers of a request.

    :param headers: a dict or an iterable of (name, value) pairs; headers
                    without the ``x-ms-`` prefix are ignored
    :returns: ``name:value`` lines, names lower-cased, ordered by name
    """
    if hasattr(headers, 'items'):
        headers = headers.items()
    pairs = []
    for name, value in headers:
        name = name.strip().lower()
        if not name.startswith(CUSTOM_HEADER_PREFIX):
            continue
        pairs.append((name, str(value).strip()))
    pairs.sort(key=lambda pair: pair[0])
    return '\n'.join('%s:%s' % pair for pair in pairs)


def string_to_sign(method, path, account, content_length=0,
                   content_type='', canonical_query='', canonical_headers=''):
    """
    Assemble the exact text that gets signed.

    :param method: HTTP verb
    :param path: request path as sent on the wire (already quoted)
    :param account: storage account name
    :param content_length: body size; zero leaves the slot empty
    :param content_type: body content type, if any
    :param canonical_query: output of :func:`canonicalize_query`
    :param canonical_headers: output of :func:`canonicalize_headers`
    """
    slots = dict.fromkeys(STANDARD_HEADER_SLOTS, '')
    if content_length:
        slots['Content-Length'] = str(content_length)
    if content_type:
        slots['Content-Type'] = content_type

    resource = '/%s%s' % (account, path)
    if canonical_query:
        resource += '\n' + canonical_query

    lines = [method.upper()]
    lines.extend(slots[name] for name in STANDARD_HEADER_SLOTS)
    lines.append(canonical_headers)
    lines.append(resource)
    return '\n'.join(lines)


def sign(credentials, method, path, request_date, content_length=0,
         content_type='', query_string='', headers=None):
    """
    Compute the ``Authorization`` header value for a request.

    ``x-ms-date`` and ``x-ms-version`` are added to a copy of ``headers``
    before signing; ``request_date`` must be the very string sent as the
    ``x-ms-date`` header.

    :param credentials: a :class:`SharedKeyCredentials`
    :param method: HTTP verb
    :param path: request path as sent on the wire
    :param request_date: output of :func:`format_request_date`
    :param content_length: body size in bytes
    :param content_type: body content type
    :param query_string: raw query string, unsorted, or the list of its
                         tokens (see :func:`canonicalize_query`)
    :param headers: caller supplied ``x-ms-*`` headers, as a dict or an
                    iterable of (name, value) pairs
    :returns: ``SharedKey <account>:<signature>``
    """
    if headers is None:
        signed_headers = []
    elif hasattr(headers, 'items'):
        signed_headers = list(headers.items())
    else:
        signed_headers = list(headers)
    signed_headers.append(('x-ms-date', request_date))
    signed_headers.append(('x-ms-version', credentials.api_version))

    to_sign = string_to_sign(method, path, credentials.account,
                             content_length=content_length,
                             content_type=content_type,
                             canonical_query=canonicalize_query(query_string),
                             canonical_headers=canonicalize_headers(
                                 signed_headers))
    logger.debug('String to sign: %r', to_sign)

    digest = hmac.new(credentials.key, to_sign.encode('utf-8'),
                      hashlib.sha256).digest()
    signature = base64.b64encode(digest).decode('ascii')
    return 'SharedKey %s:%s' % (credentials.account, signature)
