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
"""Miscellaneous utility functions for use with blob storage."""
import os

TRUE_VALUES = set(('true', '1', 'yes', 'on', 't', 'y'))

#: Extensions get_content_type knows about. Keys are lower case.
CONTENT_TYPES = {
    'jpg': 'image/jpeg',
    'pdf': 'application/pdf',
    'png': 'image/png',
    'txt': 'text/plain',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def config_true_value(value):
    """
    Returns True if the value is either True or a string in TRUE_VALUES.
    Returns False otherwise.
    """
    return value is True or \
        (isinstance(value, str) and value.lower() in TRUE_VALUES)


def get_content_type(filename):
    """
    Guess a MIME type from the extension of ``filename``.

    Matching is case-insensitive. An unknown or missing extension gives
    an empty string so the caller can pick its own fallback.
    """
    if not filename:
        return ''
    ext = os.path.splitext(filename)[1]
    if not ext:
        return ''
    return CONTENT_TYPES.get(ext[1:].lower(), '')


def truncate(value, max_length):
    """Cut ``value`` down to at most ``max_length`` characters."""
    if value is None:
        return ''
    return value[:max_length]


def encode_utf8(value):
    if type(value) in (int, float, bool):
        # requests wants header values as str or bytes
        value = str(value)
    if isinstance(value, str):
        value = value.encode('utf8')
    return value


def read_contents(contents, chunk_size=65536):
    """
    Turn a blob payload into bytes of known length.

    :param contents: None, a string (sent as UTF-8), bytes, or a
                     file-like object with a ``read`` method
    :param chunk_size: size of each read from a file-like object
    :returns: bytes
    """
    if contents is None:
        return b''
    if isinstance(contents, (bytes, bytearray, memoryview)):
        return bytes(contents)
    if isinstance(contents, str):
        return contents.encode('utf8')
    if hasattr(contents, 'read'):
        chunks = []
        while True:
            chunk = contents.read(chunk_size)
            if not chunk:
                break
            chunks.append(encode_utf8(chunk))
        return b''.join(chunks)
    raise TypeError('Unsupported blob contents type: %s'
                    % type(contents).__name__)
