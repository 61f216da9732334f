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
Azure Blob Storage client library using Shared Key authentication
"""
import logging
import os
import threading
from urllib.parse import quote, unquote, urlparse

import requests

from blobclient import version as blobclient_version
from blobclient.auth import format_request_date, sign
from blobclient.config import StorageConfig
from blobclient.exceptions import (
    AuthenticationError, ClientException, ValidationError)
from blobclient.listing import map_blobs, map_containers, next_marker
from blobclient.utils import (
    DEFAULT_CONTENT_TYPE, get_content_type, read_contents)

BLOB_TYPE_HEADER = 'x-ms-blob-type'
BLOCK_BLOB = 'BlockBlob'
#: Headers that are computed per request and never taken from the caller.
RESERVED_HEADERS = ('x-ms-date', 'x-ms-version', 'authorization')

logger = logging.getLogger("blobclient")
logger.addHandler(logging.NullHandler())

#: Default behaviour is to redact header values known to contain secrets,
#: such as ``Authorization``. Up to the first 16 chars may be revealed.
#:
#: To disable, set the value of ``redact_sensitive_headers`` to ``False``.
#:
#: When header redaction is enabled, ``reveal_sensitive_prefix`` configures the
#: maximum length of any sensitive header data sent to the logs. If the header
#: is less than twice this length, only ``int(len(value)/2)`` chars will be
#: logged; if it is less than 15 chars long, even less will be logged.
logger_settings = {
    'redact_sensitive_headers': True,
    'reveal_sensitive_prefix': 16
}
#: A list of sensitive headers to redact in logs. Note that when extending this
#: list, the header names must be added in all lower case.
LOGGER_SENSITIVE_HEADERS = [
    'authorization', 'x-ms-copy-source-authorization', 'set-cookie'
]


def safe_value(name, value):
    """
    Only show up to logger_settings['reveal_sensitive_prefix'] characters
    from a sensitive header.

    :param name: Header name
    :param value: Header value
    :return: Safe header value
    """
    if name.lower() in LOGGER_SENSITIVE_HEADERS:
        prefix_length = logger_settings.get('reveal_sensitive_prefix', 16)
        prefix_length = int(
            min(prefix_length, (len(value) ** 2) / 32, len(value) / 2)
        )
        redacted_value = value[0:prefix_length]
        return redacted_value + '...'
    return value


def _header_string(data):
    if isinstance(data, bytes):
        return data.decode('latin-1')
    return str(data)


def scrub_headers(headers):
    """
    Redact header values that can contain sensitive information that
    should not be logged.

    :param headers: Either a dict or an iterable of two-element tuples
    :return: Safe dictionary of headers with sensitive information removed
    """
    if hasattr(headers, 'items'):
        headers = headers.items()
    headers = [(_header_string(key), _header_string(val))
               for (key, val) in headers]
    if not logger_settings.get('redact_sensitive_headers', True):
        return dict(headers)
    if logger_settings.get('reveal_sensitive_prefix', 16) < 0:
        logger_settings['reveal_sensitive_prefix'] = 16
    return {key: safe_value(key, val) for (key, val) in headers}


def http_log(args, kwargs, resp, body):
    if not logger.isEnabledFor(logging.INFO):
        return

    # create and log equivalent curl command
    string_parts = ['curl -i']
    for element in args:
        if element == 'HEAD':
            string_parts.append(' -I')
        elif element in ('GET', 'POST', 'PUT', 'DELETE'):
            string_parts.append(' -X %s' % element)
        else:
            string_parts.append(' %s' % element)
    if 'headers' in kwargs:
        headers = scrub_headers(kwargs['headers'])
        for element in headers:
            header = ' -H "%s: %s"' % (element, headers[element])
            string_parts.append(header)

    # log response as debug if good, or info if error
    if resp.status < 300:
        log_method = logger.debug
    else:
        log_method = logger.info

    log_method("REQ: %s", "".join(string_parts))
    log_method("RESP STATUS: %s %s", resp.status, resp.reason)
    log_method("RESP HEADERS: %s", scrub_headers(resp.getheaders()))
    if body:
        log_method("RESP BODY: %s", body)


def resp_header_dict(resp):
    resp_headers = {}
    for header, value in resp.getheaders():
        header = _header_string(header).lower()
        resp_headers[header] = _header_string(value)
    return resp_headers


def store_response(resp, response_dict):
    """
    store information about an operation into a dict

    :param resp: an http response object containing the response
                 headers
    :param response_dict: a dict into which are placed the
       status, reason and a dict of lower-cased headers
    """
    if response_dict is not None:
        response_dict['status'] = resp.status
        response_dict['reason'] = resp.reason
        response_dict['headers'] = resp_header_dict(resp)


def check_response(resp, body):
    """
    Raise for any status outside 2xx.

    :raises AuthenticationError: the service rejected the signature
    :raises ValidationError: any other non-2xx status
    """
    if resp.status < 200 or resp.status >= 300:
        if resp.status in (401, 403):
            raise AuthenticationError.from_response(resp, body=body)
        raise ValidationError.from_response(resp, body=body)


class _ObjectBody:
    """
    Readable and iterable blob body response wrapper.
    """

    def __init__(self, resp, chunk_size, conn_to_close):
        """
        Wrap the underlying response

        :param resp: the response to wrap
        :param chunk_size: number of bytes to return each iteration/next call
        :param conn_to_close: connection to close once the body is consumed
        """
        self.resp = resp
        self.chunk_size = chunk_size
        self.conn_to_close = conn_to_close

    def read(self, length=None):
        buf = self.resp.read(length)
        if length != 0 and not buf:
            self.close()
        return buf

    def __iter__(self):
        return self

    def __next__(self):
        buf = self.read(self.chunk_size)
        if not buf:
            raise StopIteration()
        return buf

    def close(self):
        self.resp.close()
        if self.conn_to_close:
            self.conn_to_close.close()


class HTTPConnection:
    def __init__(self, url, insecure=False, cacert=None,
                 default_user_agent=None, timeout=None):
        """
        Make an HTTPConnection or HTTPSConnection

        :param url: url to connect to
        :param insecure: Allow to access servers without checking SSL certs.
                         The server's certificate will not be verified.
        :param cacert: A CA bundle file to use in verifying a TLS server
                       certificate.
        :param default_user_agent: Set the User-Agent header on every request.
                                   If set to None (default), the user agent
                                   will be "python-blobclient-<version>". This
                                   may be overridden on a per-request basis by
                                   explicitly setting the user-agent header on
                                   a call to request().
        :param timeout: socket read timeout value, passed directly to
                        the requests library.
        :raises ClientException: Unable to handle protocol scheme
        """
        self.url = url
        self.parsed_url = urlparse(url)
        self.host = self.parsed_url.netloc
        self.port = self.parsed_url.port
        self.requests_args = {}
        self.request_session = requests.Session()
        # Don't use requests's default headers, and never let .netrc
        # replace the Authorization header we computed.
        self.request_session.headers = None
        self.request_session.trust_env = False
        self.resp = None
        if self.parsed_url.scheme not in ('http', 'https'):
            raise ClientException('Unsupported scheme "%s" in url "%s"'
                                  % (self.parsed_url.scheme, url))
        self.requests_args['verify'] = not insecure
        if cacert and not insecure:
            self.requests_args['verify'] = cacert
        self.requests_args['stream'] = True
        if default_user_agent is None:
            default_user_agent = \
                'python-blobclient-%s' % blobclient_version.version_string
        self.default_user_agent = default_user_agent
        if timeout:
            self.requests_args['timeout'] = timeout

    def _request(self, *arg, **kwarg):
        """Final wrapper before requests call, to be patched in tests"""
        return self.request_session.request(*arg, **kwarg)

    def request(self, method, full_path, data=None, headers=None):
        """Build the absolute url, then call requests.request"""
        headers = dict(headers) if headers else {}

        # set a default User-Agent header if it wasn't passed in
        if 'user-agent' not in (k.lower() for k in headers):
            headers['user-agent'] = self.default_user_agent
        url = "%s://%s%s" % (
            self.parsed_url.scheme,
            self.parsed_url.netloc,
            full_path)
        self.resp = self._request(method, url, headers=headers, data=data,
                                  **self.requests_args)
        return self.resp

    def getresponse(self):
        """Adapt requests response to httplib interface"""
        self.resp.status = self.resp.status_code
        headers = self.resp.headers

        def getheaders():
            return list(headers.items())

        def getheader(k, v=None):
            return headers.get(k, v)

        def releasing_read(*args, **kwargs):
            chunk = self.resp.raw.read(*args, **kwargs)
            if not chunk:
                # hand the connection back to urllib3's pool
                self.resp.close()
            return chunk

        self.resp.getheaders = getheaders
        self.resp.getheader = getheader
        self.resp.read = releasing_read

        return self.resp

    def close(self):
        if self.resp:
            self.resp.close()
        self.request_session.close()


def http_connection(*arg, **kwarg):
    """:returns: tuple of (parsed url, connection object)"""
    conn = HTTPConnection(*arg, **kwarg)
    return conn.parsed_url, conn


def _signed_query(query_string):
    # The service splits on '&' first and decodes each value afterwards,
    # so an encoded '&' stays inside its token.
    if not query_string:
        return []
    return [unquote(token)
            for token in query_string.lstrip('?').split('&')]


def build_request(credentials, method, path, query_string=None, headers=None,
                  content_length=0, content_type='', request_date=None):
    """
    Build the path and headers of a signed request.

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param method: HTTP verb
    :param path: quoted request path, including any endpoint path
    :param query_string: raw query string; sent exactly as given
    :param headers: additional headers, as a dict or list of (name, value)
                    pairs; only ``x-ms-*`` headers are covered by the
                    signature
    :param content_length: size of the request body
    :param content_type: content type of the request body
    :param request_date: ``x-ms-date`` value; defaults to now
    :returns: a tuple of (full path with query string, request headers)
    """
    if headers is None:
        headers = []
    elif hasattr(headers, 'items'):
        headers = list(headers.items())
    else:
        headers = list(headers)
    headers = [(name, value) for name, value in headers
               if name.lower() not in RESERVED_HEADERS]
    if request_date is None:
        request_date = format_request_date()

    authorization = sign(credentials, method, path, request_date,
                         content_length=content_length,
                         content_type=content_type,
                         query_string=_signed_query(query_string),
                         headers=headers)

    req_headers = dict(headers)
    req_headers['x-ms-date'] = request_date
    req_headers['x-ms-version'] = credentials.api_version
    if content_length or method.upper() == 'PUT':
        req_headers['Content-Length'] = str(content_length)
    if content_type:
        req_headers['Content-Type'] = content_type
    req_headers['Authorization'] = authorization

    full_path = path
    if query_string:
        full_path += '?' + query_string.lstrip('?')
    return full_path, req_headers


def _listing_query(base, prefix=None, marker=None, limit=None):
    qs = base
    if prefix:
        qs += '&prefix=%s' % quote(prefix)
    if marker:
        qs += '&marker=%s' % quote(marker)
    if limit:
        qs += '&maxresults=%d' % limit
    return qs


def _get_listing(credentials, http_conn, path, query_string, headers,
                 mapper):
    parsed, conn = http_conn
    full_path, req_headers = build_request(
        credentials, 'GET', path, query_string, headers)
    conn.request('GET', full_path, '', req_headers)
    resp = conn.getresponse()
    body = resp.read()
    http_log(('%s://%s%s' % (parsed.scheme, parsed.netloc, full_path),
              'GET',), {'headers': req_headers}, resp, body)

    check_response(resp, body)
    return resp_header_dict(resp), mapper(body), next_marker(body)


def _list(credentials, path, base_query, prefix, marker, limit, http_conn,
          full_listing, headers, mapper):
    close_conn = False
    if not http_conn:
        http_conn = http_connection(credentials.endpoint)
        close_conn = True
    try:
        query_string = _listing_query(base_query, prefix, marker, limit)
        resp_headers, listing, marker = _get_listing(
            credentials, http_conn, path, query_string, headers, mapper)
        while full_listing and marker:
            query_string = _listing_query(base_query, prefix, marker, limit)
            _junk, page, marker = _get_listing(
                credentials, http_conn, path, query_string, headers, mapper)
            listing.extend(page)
    finally:
        if close_conn:
            http_conn[1].close()
    return resp_headers, listing


def _container_path(parsed, container):
    return '%s/%s' % (parsed.path.rstrip('/'), quote(container))


def _blob_path(parsed, container, name):
    return '%s/%s' % (_container_path(parsed, container), quote(name))


def list_containers(credentials, prefix=None, marker=None, limit=None,
                    http_conn=None, full_listing=False, headers=None):
    """
    Get a listing of containers for the account.

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param prefix: prefix query
    :param marker: marker query, as returned in a previous NextMarker
    :param limit: maxresults query
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param full_listing: if True, follow NextMarker until the listing is
                         complete, else return a single page
    :param headers: additional ``x-ms-*`` headers to include in the request
    :returns: a tuple of (response headers, a list of ContainerRecord) The
              response headers will be a dict and all header names will be
              lowercase.
    :raises ValidationError: HTTP GET request failed
    :raises MappingError: the listing could not be parsed
    """
    path = '%s/' % urlparse(credentials.endpoint).path.rstrip('/')
    return _list(credentials, path, 'comp=list', prefix, marker, limit,
                 http_conn, full_listing, headers, map_containers)


def list_blobs(credentials, container, prefix=None, marker=None, limit=None,
               http_conn=None, full_listing=False, headers=None):
    """
    Get a listing of blobs for the container.

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name to get a listing for
    :param prefix: prefix query
    :param marker: marker query, as returned in a previous NextMarker
    :param limit: maxresults query
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param full_listing: if True, follow NextMarker until the listing is
                         complete, else return a single page
    :param headers: additional ``x-ms-*`` headers to include in the request
    :returns: a tuple of (response headers, a list of BlobRecord) The
              response headers will be a dict and all header names will be
              lowercase.
    :raises ValidationError: HTTP GET request failed
    :raises MappingError: the listing could not be parsed
    """
    path = _container_path(urlparse(credentials.endpoint), container)

    def mapper(body):
        return map_blobs(body, container)

    return _list(credentials, path, 'restype=container&comp=list', prefix,
                 marker, limit, http_conn, full_listing, headers, mapper)


def _simple_request(credentials, method, path_func, args, query_string,
                    http_conn, headers, response_dict, data=b'',
                    content_type=''):
    close_conn = False
    if http_conn:
        parsed, conn = http_conn
    else:
        parsed, conn = http_connection(credentials.endpoint)
        close_conn = True
    path = path_func(parsed, *args)
    full_path, req_headers = build_request(
        credentials, method, path, query_string, headers,
        content_length=len(data), content_type=content_type)
    try:
        conn.request(method, full_path, data, req_headers)
        resp = conn.getresponse()
        body = resp.read()
    finally:
        if close_conn:
            conn.close()
    http_log(('%s://%s%s' % (parsed.scheme, parsed.netloc, full_path),
              method,), {'headers': req_headers}, resp, body)

    store_response(resp, response_dict)
    check_response(resp, body)
    return resp


def create_container(credentials, container, http_conn=None, headers=None,
                     response_dict=None):
    """
    Create a container

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name to create
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param headers: additional ``x-ms-*`` headers to include in the request
    :param response_dict: an optional dictionary into which to place
                     the response - status, reason and headers
    :raises ValidationError: HTTP PUT request failed
    """
    _simple_request(credentials, 'PUT', _container_path, (container,),
                    'restype=container', http_conn, headers, response_dict)


def delete_container(credentials, container, http_conn=None, headers=None,
                     response_dict=None):
    """
    Delete a container

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name to delete
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param headers: additional ``x-ms-*`` headers to include in the request
    :param response_dict: an optional dictionary into which to place
                     the response - status, reason and headers
    :raises ValidationError: HTTP DELETE request failed
    """
    _simple_request(credentials, 'DELETE', _container_path, (container,),
                    'restype=container', http_conn, headers, response_dict)


def get_blob(credentials, container, name, http_conn=None,
             resp_chunk_size=None, headers=None, response_dict=None):
    """
    Get a blob

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name that the blob is in
    :param name: blob name to get
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object and close it
                      after all content is read)
    :param resp_chunk_size: if defined, chunk size of data to read. NOTE: If
                            you specify a resp_chunk_size you must fully read
                            the blob's contents before making another
                            request.
    :param headers: additional ``x-ms-*`` headers to include in the request
    :param response_dict: an optional dictionary into which to place
                     the response - status, reason and headers
    :returns: a tuple of (response headers, the blob's contents) The response
              headers will be a dict and all header names will be lowercase.
    :raises ValidationError: HTTP GET request failed
    """
    close_conn = False
    if http_conn:
        parsed, conn = http_conn
    else:
        parsed, conn = http_connection(credentials.endpoint)
        close_conn = True
    path = _blob_path(parsed, container, name)
    full_path, req_headers = build_request(
        credentials, 'GET', path, None, headers)
    try:
        conn.request('GET', full_path, '', req_headers)
        resp = conn.getresponse()
    except Exception:
        if close_conn:
            conn.close()
        raise
    url = '%s://%s%s' % (parsed.scheme, parsed.netloc, full_path)

    parsed_response = {}
    store_response(resp, parsed_response)
    if response_dict is not None:
        response_dict.update(parsed_response)

    if resp.status < 200 or resp.status >= 300:
        body = resp.read()
        if close_conn:
            conn.close()
        http_log((url, 'GET',), {'headers': req_headers}, resp, body)
        check_response(resp, body)
    if resp_chunk_size:
        blob_body = _ObjectBody(resp, resp_chunk_size,
                                conn_to_close=conn if close_conn else None)
    else:
        blob_body = resp.read()
        if close_conn:
            conn.close()
    http_log((url, 'GET',), {'headers': req_headers}, resp, None)

    return parsed_response['headers'], blob_body


def put_blob(credentials, container, name, contents=None, content_type=None,
             http_conn=None, headers=None, response_dict=None):
    """
    Upload a block blob

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name that the blob is in
    :param name: blob name to put
    :param contents: a string (sent as UTF-8), bytes or a file-like object
                     to read blob data from; if None, a zero-byte put will be
                     done. Everything is read into memory first so the
                     length is known before signing.
    :param content_type: value to send as content-type header; if None, no
                         content type is sent
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param headers: additional ``x-ms-*`` headers to include in the request
    :param response_dict: an optional dictionary into which to place
                     the response - status, reason and headers
    :returns: etag
    :raises ValidationError: HTTP PUT request failed
    """
    data = read_contents(contents)
    if headers is None:
        headers = []
    elif hasattr(headers, 'items'):
        headers = list(headers.items())
    else:
        headers = list(headers)
    headers = [(k, v) for k, v in headers if k.lower() != BLOB_TYPE_HEADER]
    headers.append((BLOB_TYPE_HEADER, BLOCK_BLOB))
    resp = _simple_request(credentials, 'PUT', _blob_path, (container, name),
                           None, http_conn, headers, response_dict,
                           data=data, content_type=content_type or '')
    return resp.getheader('etag', '').strip('"')


def delete_blob(credentials, container, name, http_conn=None, headers=None,
                response_dict=None):
    """
    Delete a blob

    :param credentials: a :class:`blobclient.auth.SharedKeyCredentials`
    :param container: container name that the blob is in
    :param name: blob name to delete
    :param http_conn: a tuple of (parsed url, HTTPConnection object),
                      (If None, it will create the conn object)
    :param headers: additional ``x-ms-*`` headers to include in the request
    :param response_dict: an optional dictionary into which to place
                     the response - status, reason and headers
    :raises ValidationError: HTTP DELETE request failed
    """
    _simple_request(credentials, 'DELETE', _blob_path, (container, name),
                    None, http_conn, headers, response_dict)


class Connection:

    """
    Convenience class to make signed requests against one storage account.

    Credentials are resolved from ``config`` (or, without one, from the
    environment) on the first call and kept for the lifetime of the
    object. Nothing is retried: every failure reaches the caller.
    """

    def __init__(self, config=None, cacert=None, default_user_agent=None):
        """
        :param config: a :class:`blobclient.config.StorageConfig`; read from
                       the environment when None
        :param cacert: A CA bundle file to use in verifying a TLS server
                       certificate.
        :param default_user_agent: User-Agent header sent on every request
        """
        self.config = config
        self.cacert = cacert
        self.default_user_agent = default_user_agent
        self.credentials = None
        self._settings = None
        self._init_lock = threading.Lock()

    def initialize(self):
        """
        Resolve configuration into signing credentials, once.

        :returns: the :class:`blobclient.auth.SharedKeyCredentials` in use
        :raises ConfigurationError: storage is disabled or unconfigured
        """
        if self.credentials is not None:
            return self.credentials
        with self._init_lock:
            if self.credentials is None:
                settings = self.config
                if settings is None:
                    settings = StorageConfig.from_environ()
                credentials = settings.get_credentials()
                self._settings = settings
                self.credentials = credentials
                logger.debug('Initialized blob storage for account %s at %s',
                             credentials.account, credentials.endpoint)
        return self.credentials

    def http_connection(self):
        return http_connection(self.credentials.endpoint,
                               insecure=self._settings.insecure,
                               cacert=self.cacert,
                               default_user_agent=self.default_user_agent,
                               timeout=self._settings.timeout)

    def _call_and_close(self, func, *args, **kwargs):
        credentials = self.initialize()
        http_conn = self.http_connection()
        kwargs['http_conn'] = http_conn
        try:
            return func(credentials, *args, **kwargs)
        finally:
            http_conn[1].close()

    def list_containers(self, prefix=None, marker=None, limit=None,
                        full_listing=False, headers=None):
        """Wrapper for :func:`list_containers`"""
        return self._call_and_close(
            list_containers, prefix=prefix, marker=marker, limit=limit,
            full_listing=full_listing, headers=headers)

    def create_container(self, container, headers=None, response_dict=None):
        """Wrapper for :func:`create_container`"""
        return self._call_and_close(create_container, container,
                                    headers=headers,
                                    response_dict=response_dict)

    def delete_container(self, container, headers=None, response_dict=None):
        """Wrapper for :func:`delete_container`"""
        return self._call_and_close(delete_container, container,
                                    headers=headers,
                                    response_dict=response_dict)

    def list_blobs(self, container, prefix=None, marker=None, limit=None,
                   full_listing=False, headers=None):
        """Wrapper for :func:`list_blobs`"""
        return self._call_and_close(
            list_blobs, container, prefix=prefix, marker=marker, limit=limit,
            full_listing=full_listing, headers=headers)

    def get_blob(self, container, name, resp_chunk_size=None, headers=None,
                 response_dict=None):
        """Wrapper for :func:`get_blob`"""
        if resp_chunk_size:
            credentials = self.initialize()
            http_conn = self.http_connection()
            try:
                resp_headers, body = get_blob(
                    credentials, container, name, http_conn=http_conn,
                    resp_chunk_size=resp_chunk_size, headers=headers,
                    response_dict=response_dict)
            except Exception:
                http_conn[1].close()
                raise
            # the body closes the connection once it has been read
            body.conn_to_close = http_conn[1]
            return resp_headers, body
        return self._call_and_close(get_blob, container, name,
                                    headers=headers,
                                    response_dict=response_dict)

    def put_blob(self, container, name, contents=None, content_type=None,
                 headers=None, response_dict=None):
        """Wrapper for :func:`put_blob`"""
        return self._call_and_close(put_blob, container, name,
                                    contents=contents,
                                    content_type=content_type,
                                    headers=headers,
                                    response_dict=response_dict)

    def delete_blob(self, container, name, headers=None, response_dict=None):
        """Wrapper for :func:`delete_blob`"""
        return self._call_and_close(delete_blob, container, name,
                                    headers=headers,
                                    response_dict=response_dict)

    def upload_file(self, container, path, blob_name=None, content_type=None,
                    headers=None, response_dict=None):
        """
        Upload a local file as a block blob.

        :param container: container to upload into
        :param path: local file path
        :param blob_name: blob name; defaults to the file's base name
        :param content_type: defaults to a type guessed from the file
                             extension, or application/octet-stream
        :returns: etag
        """
        if blob_name is None:
            blob_name = os.path.basename(path)
        if content_type is None:
            content_type = get_content_type(path) or DEFAULT_CONTENT_TYPE
        with open(path, 'rb') as f:
            return self.put_blob(container, blob_name, contents=f,
                                 content_type=content_type, headers=headers,
                                 response_dict=response_dict)
