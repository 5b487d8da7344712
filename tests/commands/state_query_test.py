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

import unittest.mock as mock
from unittest import TestCase

from bootloader import exceptions
from bootloader.commands.state_query import state_queries
from bootloader.storage.state import BOSH, State


class StateQueryTests(TestCase):
    def setUp(self):
        self.state_validator = mock.Mock()
        self.queries = state_queries(self.state_validator)
        self.state = State(iaas="aws", env_id="bbl-env-lake-2017",
                           bosh=BOSH(director_address="https://10.0.0.6:25555", director_username="user-1234",
                                     director_password="secret", director_ssl_ca="-----BEGIN CERTIFICATE-----"))

    @mock.patch("bootloader.utils.console.println")
    def test_prints_raw_values(self, println):
        expected = {
            "director-address": "https://10.0.0.6:25555",
            "director-username": "user-1234",
            "director-password": "secret",
            "director-ca-cert": "-----BEGIN CERTIFICATE-----",
            "env-id": "bbl-env-lake-2017",
        }
        for name, value in expected.items():
            self.queries[name].execute([], self.state)
            println.assert_called_with(value)

        self.assertEqual(len(expected), self.state_validator.validate.call_count)

    def test_fails_for_missing_values(self):
        with self.assertRaisesRegex(exceptions.NotFound,
                                    "Could not retrieve director address, please make sure you are targeting the proper state dir."):
            self.queries["director-address"].execute([], State(iaas="aws"))

    def test_validation_failure_propagates(self):
        self.state_validator.validate.side_effect = exceptions.ValidationError("bbl-state.json not found")

        with self.assertRaises(exceptions.ValidationError):
            self.queries["env-id"].execute([], self.state)

    def test_rejects_flags(self):
        with self.assertRaisesRegex(exceptions.ConfigError, "env-id: unrecognized arguments: --json"):
            self.queries["env-id"].execute(["--json"], self.state)
