# Copyright (c) 2014 Christian Schwede <christian.schwede@enovance.com>
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

TEST_CONFIG = None


def _load_config(force_reload=False):
    global TEST_CONFIG
    if not force_reload and TEST_CONFIG is not None:
        return TEST_CONFIG

    config_file = os.environ.get('BLOBCLIENT_TEST_CONFIG_FILE',
                                 '/etc/blobclient/test.conf')
    parser = configparser.ConfigParser()
    parser.read(config_file)
    conf = {}
    if parser.has_section('func_test'):
        conf['account'] = parser.get('func_test', 'account')
        conf['account_key'] = parser.get('func_test', 'account_key')
        try:
            conf['endpoint'] = parser.get('func_test', 'endpoint')
        except configparser.NoOptionError:
            conf['endpoint'] = None
        try:
            conf['cacert'] = parser.get('func_test', 'cacert')
        except configparser.NoOptionError:
            conf['cacert'] = None
        TEST_CONFIG = conf


try:
    _load_config()
except configparser.NoOptionError:
    TEST_CONFIG = None  # sentinel used in test setup
