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
Container and blob listings.

The service answers ``comp=list`` requests with an XML document::

    <EnumerationResults>
      <Containers>
        <Container>
          <Name>logs</Name>
          <Properties>
            <Last-Modified>Sun, 18 Oct 2026 10:00:00 GMT</Last-Modified>
            <Etag>"0x8D..."</Etag>
            <LeaseStatus>unlocked</LeaseStatus>
            <LeaseState>available</LeaseState>
          </Properties>
        </Container>
      </Containers>
      <NextMarker />
    </EnumerationResults>

Blob listings use ``Blobs/Blob`` and add ``Content-Length``,
``Content-Type`` and ``Content-Encoding`` to the properties.
"""

import enum
from email.utils import parsedate_to_datetime

from defusedxml import ElementTree
from defusedxml import DefusedXmlException

from blobclient.exceptions import MappingError
from blobclient.utils import truncate

MAX_NAME_LENGTH = 250
MAX_ETAG_LENGTH = 100
MAX_CONTENT_TYPE_LENGTH = 100
MAX_CONTENT_ENCODING_LENGTH = 100
MAX_CONTAINER_LENGTH = 250


class LeaseState(enum.Enum):
    UNSPECIFIED = ''
    AVAILABLE = 'available'
    LEASED = 'leased'
    EXPIRED = 'expired'
    BREAKING = 'breaking'
    BROKEN = 'broken'


class LeaseStatus(enum.Enum):
    UNSPECIFIED = ''
    LOCKED = 'locked'
    UNLOCKED = 'unlocked'


LEASE_STATES = {
    'available': LeaseState.AVAILABLE,
    'leased': LeaseState.LEASED,
    'expired': LeaseState.EXPIRED,
    'breaking': LeaseState.BREAKING,
    'broken': LeaseState.BROKEN,
}

LEASE_STATUSES = {
    'locked': LeaseStatus.LOCKED,
    'unlocked': LeaseStatus.UNLOCKED,
}


class ContainerRecord:
    """One entry of a container listing."""

    _fields = ('name', 'last_modified', 'etag', 'lease_state',
               'lease_status')

    def __init__(self, name, last_modified=None, etag='',
                 lease_state=LeaseState.UNSPECIFIED,
                 lease_status=LeaseStatus.UNSPECIFIED):
        self.name = truncate(name, MAX_NAME_LENGTH)
        self.last_modified = last_modified
        self.etag = truncate(etag, MAX_ETAG_LENGTH)
        self.lease_state = lease_state
        self.lease_status = lease_status

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f)
                   for f in self._fields)

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, ', '.join(
            '%s=%r' % (f, getattr(self, f)) for f in self._fields))


class BlobRecord(ContainerRecord):
    """One entry of a blob listing."""

    _fields = ContainerRecord._fields + (
        'content_length', 'content_type', 'content_encoding', 'container')

    def __init__(self, name, last_modified=None, etag='',
                 lease_state=LeaseState.UNSPECIFIED,
                 lease_status=LeaseStatus.UNSPECIFIED, content_length=0,
                 content_type='', content_encoding='', container=''):
        super(BlobRecord, self).__init__(
            name, last_modified=last_modified, etag=etag,
            lease_state=lease_state, lease_status=lease_status)
        self.content_length = content_length
        self.content_type = truncate(content_type, MAX_CONTENT_TYPE_LENGTH)
        self.content_encoding = truncate(content_encoding,
                                         MAX_CONTENT_ENCODING_LENGTH)
        self.container = truncate(container, MAX_CONTAINER_LENGTH)


def _parse_document(xml):
    if isinstance(xml, str):
        xml = xml.lstrip("\ufeff").encode('utf-8')
    if not xml:
        return None
    try:
        return ElementTree.fromstring(xml)
    except (ElementTree.ParseError, DefusedXmlException) as err:
        raise MappingError('Unable to parse listing: %s' % err)


def _text(node, path, strip=True):
    if node is None:
        return ''
    child = node.find(path)
    if child is None or child.text is None:
        return ''
    if not strip:
        return child.text
    return child.text.strip()


def _parse_enum(table, value, field, default):
    if not value:
        return default
    try:
        return table[value.lower()]
    except KeyError:
        raise MappingError('Unknown %s %r in listing' % (field, value))


def _parse_timestamp(value):
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        raise MappingError('Unparseable Last-Modified %r in listing' % value)


def _parse_int(value, field):
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise MappingError('Unparseable %s %r in listing' % (field, value))


def _common_fields(node):
    # names are stored verbatim, surrounding spaces included
    name = _text(node, 'Name', strip=False)
    if not name:
        raise MappingError('Listing entry without a Name')
    props = node.find('Properties')
    return {
        'name': name,
        'last_modified': _parse_timestamp(_text(props, 'Last-Modified')),
        'etag': _text(props, 'Etag'),
        'lease_state': _parse_enum(
            LEASE_STATES, _text(props, 'LeaseState'), 'LeaseState',
            LeaseState.UNSPECIFIED),
        'lease_status': _parse_enum(
            LEASE_STATUSES, _text(props, 'LeaseStatus'), 'LeaseStatus',
            LeaseStatus.UNSPECIFIED),
    }


def _select(xml, path):
    root = _parse_document(xml)
    if root is None or root.tag != 'EnumerationResults':
        return []
    return root.findall(path)


def map_containers(xml):
    """
    Build container records from a container listing.

    :param xml: response body, bytes or str
    :returns: a new list of :class:`ContainerRecord` in document order
    :raises MappingError: the document or one of its entries is invalid
    """
    return [ContainerRecord(**_common_fields(node))
            for node in _select(xml, 'Containers/Container')]


def map_blobs(xml, container):
    """
    Build blob records from a blob listing.

    :param xml: response body, bytes or str
    :param container: name of the container that was listed
    :returns: a new list of :class:`BlobRecord` in document order
    :raises MappingError: the document or one of its entries is invalid
    """
    records = []
    for node in _select(xml, 'Blobs/Blob'):
        fields = _common_fields(node)
        props = node.find('Properties')
        records.append(BlobRecord(
            content_length=_parse_int(
                _text(props, 'Content-Length'), 'Content-Length'),
            content_type=_text(props, 'Content-Type'),
            content_encoding=_text(props, 'Content-Encoding'),
            container=container,
            **fields))
    return records


def next_marker(xml):
    """Continuation marker of a listing page; empty on the last page."""
    root = _parse_document(xml)
    if root is None:
        return ''
    return _text(root, 'NextMarker')
