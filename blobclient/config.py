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

import configparser
import os

from blobclient.auth import API_VERSION, SharedKeyCredentials
from blobclient.exceptions import ConfigurationError
from blobclient.utils import config_true_value

#: Environment variables read by StorageConfig.from_environ, and the
#: option names read by StorageConfig.from_file.
ENVIRON_KEYS = {
    'account': 'AZURE_STORAGE_ACCOUNT',
    'account_key': 'AZURE_STORAGE_KEY',
    'enabled': 'BLOBCLIENT_STORAGE_ENABLED',
    'endpoint': 'BLOBCLIENT_ENDPOINT',
    'insecure': 'BLOBCLIENT_INSECURE',
    'timeout': 'BLOBCLIENT_TIMEOUT',
}


class StorageConfig:
    """
    Settings a :class:`blobclient.client.Connection` is built from.
    Read-only once constructed.

    :param account: storage account name
    :param account_key: base64 encoded shared key
    :param enabled: set to False to refuse all storage operations
    :param endpoint: blob service URL; defaults to the public endpoint of
                     the account
    :param api_version: value sent as ``x-ms-version``
    :param timeout: socket read timeout, passed to requests
    :param insecure: skip TLS certificate verification
    """

    def __init__(self, account=None, account_key=None, enabled=True,
                 endpoint=None, api_version=API_VERSION, timeout=None,
                 insecure=False):
        self._account = account
        self._account_key = account_key
        self._enabled = enabled
        self._endpoint = endpoint
        self._api_version = api_version
        self._timeout = timeout
        self._insecure = insecure

    @property
    def account(self):
        return self._account

    @property
    def account_key(self):
        return self._account_key

    @property
    def enabled(self):
        return self._enabled

    @property
    def endpoint(self):
        return self._endpoint

    @property
    def api_version(self):
        return self._api_version

    @property
    def timeout(self):
        return self._timeout

    @property
    def insecure(self):
        return self._insecure

    @classmethod
    def from_environ(cls, environ=None):
        if environ is None:
            environ = os.environ
        return cls._from_mapping(
            dict((k, environ.get(v)) for k, v in ENVIRON_KEYS.items()))

    @classmethod
    def from_file(cls, path, section='storage'):
        parser = configparser.ConfigParser()
        if not parser.read(path):
            raise ConfigurationError('Unable to read config file %s' % path)
        if not parser.has_section(section):
            raise ConfigurationError(
                'Config file %s has no [%s] section' % (path, section))
        return cls._from_mapping(
            dict((k, parser.get(section, k, fallback=None))
                 for k in ENVIRON_KEYS))

    @classmethod
    def _from_mapping(cls, values):
        timeout = values.get('timeout')
        if timeout:
            try:
                timeout = float(timeout)
            except ValueError:
                raise ConfigurationError('Invalid timeout %r' % timeout)
        enabled = values.get('enabled')
        return cls(account=values.get('account'),
                   account_key=values.get('account_key'),
                   enabled=True if enabled is None
                   else config_true_value(enabled),
                   endpoint=values.get('endpoint') or None,
                   timeout=timeout or None,
                   insecure=config_true_value(values.get('insecure')))

    def get_credentials(self):
        """
        Validate the settings and build the signing credentials.

        :raises ConfigurationError: storage is disabled, the account or
                                    key is missing, or the key is not
                                    valid base64
        """
        if not self.enabled:
            raise ConfigurationError('Blob storage is not enabled')
        return SharedKeyCredentials(self.account, self.account_key,
                                    endpoint=self.endpoint,
                                    api_version=self.api_version)

    def __repr__(self):
        return ('%s(account=%r, enabled=%r, endpoint=%r, api_version=%r, '
                'timeout=%r, insecure=%r)' % (
                    type(self).__name__, self.account, self.enabled,
                    self.endpoint, self.api_version, self.timeout,
                    self.insecure))
