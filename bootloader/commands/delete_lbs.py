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
from dataclasses import dataclass

from bootloader.commands.command import IaaSCommand, lb_exists
from bootloader.flags import Flags
from bootloader.utils import console


@dataclass(frozen=True)
class DeleteLBsConfig:
    skip_if_missing: bool = False


class DeleteLBs(IaaSCommand):
    def __init__(self, gcp_delete_lbs, aws_delete_lbs, state_validator):
        super().__init__(gcp_delete_lbs, aws_delete_lbs)
        self.logger = logging.getLogger(__name__)
        self.state_validator = state_validator

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        if config.skip_if_missing and not lb_exists(state.stack.lb_type):
            console.info("no lb type exists, skipping...", logger=self.logger)
            return

        self.state_validator.validate()

        return self.executor_for(state).execute(state)

    @staticmethod
    def parse_flags(subcommand_flags):
        lb_flags = Flags("delete-lbs")
        lb_flags.bool("skip_if_missing", "skip-if-missing", help="Skip if no load balancer exists")
        return DeleteLBsConfig(**lb_flags.parse(subcommand_flags))
