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

from bootloader import exceptions
from bootloader.commands.command import IaaSCommand, lb_exists
from bootloader.flags import Flags
from bootloader.utils import console


@dataclass(frozen=True)
class UpdateLBsConfig:
    cert_path: str = ""
    key_path: str = ""
    chain_path: str = ""
    domain: str = ""
    skip_if_missing: bool = False


class UpdateLBs(IaaSCommand):
    def __init__(self, gcp_update_lbs, aws_update_lbs, state_validator):
        super().__init__(gcp_update_lbs, aws_update_lbs)
        self.logger = logging.getLogger(__name__)
        self.state_validator = state_validator

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        if config.skip_if_missing and not lb_exists(state.stack.lb_type):
            console.info("no lb type exists, skipping...", logger=self.logger)
            return

        self.state_validator.validate()

        if not lb_exists(state.stack.lb_type):
            raise exceptions.ValidationError("no load balancer has been found for this bbl environment")

        return self.executor_for(state).execute(config, state)

    @staticmethod
    def parse_flags(subcommand_flags):
        lb_flags = Flags("update-lbs")
        lb_flags.string("cert_path", "cert", help="Path to SSL certificate")
        lb_flags.string("key_path", "key", help="Path to SSL certificate key")
        lb_flags.string("chain_path", "chain", help="Path to SSL certificate chain")
        lb_flags.string("domain", "domain", help="Domain to attach to the load balancer")
        lb_flags.bool("skip_if_missing", "skip-if-missing", help="Skip if no load balancer exists")
        return UpdateLBsConfig(**lb_flags.parse(subcommand_flags))
