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
from unittest import TestCase

from bootloader import config, exceptions


class InMemoryConfigStore:
    def __init__(self, config_name, config=None):
        self.config_name = config_name
        self.config = config
        self.location = "in-memory"

    @property
    def present(self):
        return self.config is not None

    def load(self):
        parser = configparser.ConfigParser()
        parser.read_dict(self.config)
        return parser

    def store(self, parser):
        self.config = {section: dict(parser.items(section)) for section in parser.sections()}


class ConfigTests(TestCase):
    def test_uses_defaults_without_config_file(self):
        cfg = config.Config(config_file_class=InMemoryConfigStore)

        cfg.load_config()

        self.assertFalse(cfg.config_present())
        self.assertEqual("terraform", cfg.opts("terraform", "binary"))
        self.assertEqual("bbl-env", cfg.opts("system", "env.prefix"))

    def test_config_file_overrides_defaults(self):
        cfg = config.Config(config_file_class=lambda name: InMemoryConfigStore(name, {
            "terraform": {"binary": "/opt/terraform/bin/terraform", "templates.dir": "/opt/templates"},
        }))

        cfg.load_config()

        self.assertEqual("/opt/terraform/bin/terraform", cfg.opts("terraform", "binary"))
        self.assertEqual("/opt/templates", cfg.opts("terraform", "templates.dir"))
        self.assertEqual("bbl-env", cfg.opts("system", "env.prefix"))

    def test_override_wins(self):
        cfg = config.Config(config_file_class=InMemoryConfigStore)

        cfg.add(config.Scope.applicationOverride, "terraform", "binary", "tf")

        self.assertEqual("tf", cfg.opts("terraform", "binary"))

    def test_optional_and_mandatory_keys(self):
        cfg = config.Config(config_file_class=InMemoryConfigStore)

        self.assertEqual("/tmp", cfg.opts("terraform", "templates.dir", default_value="/tmp", mandatory=False))
        with self.assertRaisesRegex(exceptions.ConfigError, "No value for mandatory configuration"):
            cfg.opts("terraform", "templates.dir")

    def test_installs_default_config(self):
        cfg = config.Config(config_file_class=InMemoryConfigStore)

        cfg.install_default_config()

        self.assertTrue(cfg.config_present())
        self.assertEqual({"terraform": {"binary": "terraform"}, "system": {"env.prefix": "bbl-env"}}, cfg.config_file.config)
