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

import re
import unittest.mock as mock
from unittest import TestCase

from bootloader import exceptions
from bootloader.commands.up import UpConfig
from bootloader.infrastructure.up import Up
from bootloader.storage.state import BOSH, IAAS, State


@mock.patch("bootloader.utils.console.info")
class UpTests(TestCase):
    def setUp(self):
        self.environment = mock.Mock()
        self.environment.iaas = IAAS.GCP
        self.environment.configure.side_effect = lambda config, state: state
        self.environment.variables.return_value = {}
        self.terraform = mock.Mock()
        self.terraform.apply.return_value = ({"director_address": "https://10.0.0.6:25555"}, '{"serial": 1}')
        self.state_store = mock.Mock()
        self.up = Up(self.environment, self.terraform, self.state_store, env_id_prefix="lake")

    def test_creates_new_environment(self, console_info):
        self.up.execute(UpConfig(iaas="gcp"), State(iaas="gcp"))

        first_save, last_save = [c[0][0] for c in self.state_store.save.call_args_list]
        self.assertRegex(first_save.env_id, r"^lake-[0-9a-f]{8}-\d{4}-\d{2}-\d{2}t\d{2}-\d{2}z$")
        self.assertEqual(f"stack-{first_save.env_id}", first_save.stack.name)
        self.assertTrue(re.match(r"^user-[0-9a-f]{8}$", first_save.bosh.director_username))
        self.assertTrue(first_save.bosh.director_password)
        self.assertEqual("", first_save.tf_state)
        self.assertEqual('{"serial": 1}', last_save.tf_state)
        self.assertEqual("https://10.0.0.6:25555", last_save.bosh.director_address)

    def test_uses_given_name(self, console_info):
        self.up.execute(UpConfig(iaas="gcp", name="my-env"), State(iaas="gcp"))

        self.assertEqual("my-env", self.state_store.save.call_args[0][0].env_id)

    def test_keeps_existing_environment(self, console_info):
        bosh = BOSH(director_username="user-1", director_password="secret")

        self.up.execute(UpConfig(), State(iaas="gcp", env_id="bbl-env", bosh=bosh))

        saved = self.state_store.save.call_args[0][0]
        self.assertEqual("bbl-env", saved.env_id)
        self.assertEqual("user-1", saved.bosh.director_username)
        self.assertEqual("secret", saved.bosh.director_password)

    def test_cannot_rename_environment(self, console_info):
        with self.assertRaisesRegex(exceptions.ConfigError, "The director name cannot be changed"):
            self.up.execute(UpConfig(name="other"), State(iaas="gcp", env_id="bbl-env"))

        self.terraform.apply.assert_not_called()

    def test_invalid_credentials_fail_before_terraform(self, console_info):
        self.environment.verify_credentials.side_effect = exceptions.CredentialsError("The provided credentials are invalid")

        with self.assertRaises(exceptions.CredentialsError):
            self.up.execute(UpConfig(iaas="gcp"), State())

        self.state_store.save.assert_not_called()
        self.terraform.apply.assert_not_called()
