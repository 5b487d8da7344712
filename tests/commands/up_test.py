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

import os
import unittest.mock as mock
from unittest import TestCase

from bootloader import exceptions
from bootloader.commands.up import Up, UpConfig
from bootloader.storage.state import State


class UpTests(TestCase):
    def setUp(self):
        self.gcp_up = mock.Mock()
        self.aws_up = mock.Mock()
        self.command = Up(self.gcp_up, self.aws_up)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_routes_to_iaas_from_flags(self):
        state = State()

        self.command.execute(["--iaas", "aws", "--aws-access-key-id", "AKIA", "--aws-secret-access-key", "secret",
                              "--aws-region", "us-east-1"], state)

        expected = UpConfig(iaas="aws", aws_access_key_id="AKIA", aws_secret_access_key="secret", aws_region="us-east-1")
        self.aws_up.execute.assert_called_once_with(expected, state)
        self.gcp_up.execute.assert_not_called()

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_falls_back_to_iaas_from_state(self):
        state = State(iaas="gcp", env_id="bbl-env")

        self.command.execute([], state)

        self.gcp_up.execute.assert_called_once_with(UpConfig(), state)

    @mock.patch.dict(os.environ, {"BBL_IAAS": "gcp", "BBL_GCP_ZONE": "us-east1-b"}, clear=True)
    def test_reads_environment(self):
        self.command.execute([], State())

        self.gcp_up.execute.assert_called_once_with(UpConfig(iaas="gcp", gcp_zone="us-east1-b"), State())

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_requires_iaas(self):
        with self.assertRaisesRegex(exceptions.ConfigError, r"--iaas \[gcp, aws\] must be provided"):
            self.command.execute([], State())

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_cannot_change_iaas(self):
        with self.assertRaisesRegex(exceptions.ConfigError, "The iaas type cannot be changed for an existing environment"):
            self.command.execute(["--iaas", "aws"], State(iaas="gcp"))

        self.aws_up.execute.assert_not_called()

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_rejects_unsupported_iaas(self):
        with self.assertRaisesRegex(exceptions.UnsupportedBackendError, '"azure" is an invalid iaas type'):
            self.command.execute(["--iaas", "azure"], State())
