# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#	http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

import configparser
import logging
import os
from enum import Enum

from bootloader import exceptions, paths


class Scope(Enum):
    # Built-in defaults, used when nothing else provides a value
    defaults = 1
    # Read from the configuration file ~/.bbl/bbl.ini
    application = 2
    # Intended to allow overriding of values in the config file from the command line
    applicationOverride = 3


class ConfigFile:
    def __init__(self, config_name=None):
        self.config_name = config_name

    @property
    def present(self):
        """
        :return: true iff a config file already exists.
        """
        return os.path.isfile(self.location)

    def load(self):
        config = configparser.ConfigParser()
        config.read(self.location, encoding="utf-8")
        return config

    def store(self, config):
        with open(self.location, "wt", encoding="utf-8") as configfile:
            config.write(configfile)

    @property
    def location(self):
        if self.config_name:
            config_name_suffix = "-{}".format(self.config_name)
        else:
            config_name_suffix = ""
        return os.path.join(paths.bbl_confdir(), "bbl%s.ini" % config_name_suffix)


class Config:
    DEFAULTS = {
        ("terraform", "binary"): "terraform",
        ("system", "env.prefix"): "bbl-env",
    }

    def __init__(self, config_name=None, config_file_class=ConfigFile):
        self.logger = logging.getLogger(__name__)
        self.name = config_name
        self.config_file = config_file_class(config_name)
        self._opts = {}
        for (section, key), value in Config.DEFAULTS.items():
            self.add(Scope.defaults, section, key, value)

    def add(self, scope, section, key, value):
        """
        Adds or overrides a new configuration property.

        :param scope: The scope of this property. More specific scopes (higher values) override more generic ones (lower values).
        :param section: The configuration section.
        :param key: The configuration key within this section. Same keys in different sections will not collide.
        :param value: The associated value.
        """
        self._opts[self._k(scope, section, key)] = value

    def opts(self, section, key, default_value=None, mandatory=True):
        """
        Resolves a configuration property.

        :param section: The configuration section.
        :param key: The configuration key.
        :param default_value: The default value to use for optional properties as a fallback. Default: None
        :param mandatory: Whether a value is expected to exist for the given section and key. Note that the default_value is ignored for
        mandatory properties. It must be ensured that a value exists. Default: True
        :return: The associated value.
        """
        try:
            scope = self._resolve_scope(section, key)
            return self._opts[self._k(scope, section, key)]
        except KeyError:
            if not mandatory:
                return default_value
            else:
                raise exceptions.ConfigError(f"No value for mandatory configuration: section='{section}', key='{key}'")

    def config_present(self):
        """
        :return: true iff a config file already exists.
        """
        return self.config_file.present

    def load_config(self):
        """
        Loads the configuration file into the application scope. A missing file is not an error.
        """
        if not self.config_present():
            self.logger.info("No config file found at [%s]. Using built-in defaults.", self.config_file.location)
            return
        config = self.config_file.load()
        for section in config.sections():
            for key, value in config.items(section):
                self.add(Scope.application, section, key, value)

    def install_default_config(self):
        config = configparser.ConfigParser()
        for (section, key), value in Config.DEFAULTS.items():
            if not config.has_section(section):
                config.add_section(section)
            config.set(section, key, value)
        self.config_file.store(config)

    def _k(self, scope, section, key):
        if scope is None or scope == Scope.applicationOverride:
            return Scope.applicationOverride, section, key
        else:
            return scope, section, key

    def _resolve_scope(self, section, key):
        """
        Scopes are resolved from most specific to least specific, i.e. an application override wins over the config file
        which in turn wins over built-in defaults.
        """
        for scope in reversed(Scope):
            k = self._k(scope, section, key)
            if k in self._opts:
                return scope
        raise KeyError("No value for key [%s] in section [%s]" % (key, section))
