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

import logging
import sys
from dataclasses import dataclass

from bootloader.commands.command import IaaSCommand
from bootloader.flags import Flags
from bootloader.utils import console


@dataclass(frozen=True)
class DestroyConfig:
    no_confirm: bool = False
    skip_if_missing: bool = False


class Destroy(IaaSCommand):
    def __init__(self, gcp_destroy, aws_destroy, state_validator, stdin=None):
        super().__init__(gcp_destroy, aws_destroy)
        self.logger = logging.getLogger(__name__)
        self.state_validator = state_validator
        self.stdin = stdin or sys.stdin

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        if config.skip_if_missing and state.is_empty():
            console.info("state file not found, and --skip-if-missing flag provided, exiting", logger=self.logger)
            return

        self.state_validator.validate()

        if not config.no_confirm and not self.confirmed(state):
            console.info("exiting", logger=self.logger)
            return

        return self.executor_for(state).execute(state)

    def confirmed(self, state):
        console.info(f'Are you sure you want to delete infrastructure for "{state.env_id}"? This operation cannot be undone! ', end="",
                     flush=True)
        answer = self.stdin.readline().strip().lower()
        return answer in ("y", "yes")

    @staticmethod
    def parse_flags(subcommand_flags):
        destroy_flags = Flags("destroy")
        destroy_flags.bool("no_confirm", "no-confirm", help="Do not ask for confirmation (y/n)")
        destroy_flags.bool("skip_if_missing", "skip-if-missing", help="Gracefully exit if there is no state file")
        return DestroyConfig(**destroy_flags.parse(subcommand_flags))
