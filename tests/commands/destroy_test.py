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

import io
import unittest.mock as mock
from unittest import TestCase

from bootloader import exceptions
from bootloader.commands.destroy import Destroy
from bootloader.storage.state import State


@mock.patch("bootloader.utils.console.info")
class DestroyTests(TestCase):
    def setUp(self):
        self.gcp_destroy = mock.Mock()
        self.aws_destroy = mock.Mock()
        self.state_validator = mock.Mock()
        self.state = State(iaas="aws", env_id="bbl-env")

    def destroy_command(self, answer=""):
        return Destroy(self.gcp_destroy, self.aws_destroy, self.state_validator, stdin=io.StringIO(answer))

    def test_destroys_without_confirmation(self, console_info):
        self.destroy_command().execute(["--no-confirm"], self.state)

        self.aws_destroy.execute.assert_called_once_with(self.state)
        self.gcp_destroy.execute.assert_not_called()

    def test_destroys_after_confirmation(self, console_info):
        for answer in ["y\n", "yes\n", "YES\n"]:
            self.aws_destroy.reset_mock()

            self.destroy_command(answer).execute([], self.state)

            self.aws_destroy.execute.assert_called_once_with(self.state)

    def test_exits_when_not_confirmed(self, console_info):
        self.destroy_command("n\n").execute([], self.state)

        self.aws_destroy.execute.assert_not_called()
        console_info.assert_called_with("exiting", logger=mock.ANY)

    def test_skips_if_missing(self, console_info):
        self.destroy_command().execute(["--skip-if-missing"], State())

        self.state_validator.validate.assert_not_called()
        console_info.assert_called_once_with("state file not found, and --skip-if-missing flag provided, exiting", logger=mock.ANY)

    def test_validation_failure_prevents_destroy(self, console_info):
        self.state_validator.validate.side_effect = exceptions.ValidationError("bbl-state.json not found")

        with self.assertRaises(exceptions.ValidationError):
            self.destroy_command().execute(["--no-confirm"], self.state)

        self.aws_destroy.execute.assert_not_called()

    def test_rejects_unsupported_iaas(self, console_info):
        with self.assertRaises(exceptions.UnsupportedBackendError):
            self.destroy_command().execute(["--no-confirm"], State(iaas="azure", env_id="bbl-env"))
