# -*- encoding: utf-8 -*-
"""
Azure Blob Storage Shared Key client binding.
"""
from blobclient.client import *  # noqa
from blobclient.config import StorageConfig  # noqa
from blobclient.exceptions import (  # noqa
    AuthenticationError, ClientException, ConfigurationError, MappingError,
    TransportError, ValidationError)
from blobclient.listing import (  # noqa
    BlobRecord, ContainerRecord, LeaseState, LeaseStatus)

from blobclient import version

__version__ = version.version_string
