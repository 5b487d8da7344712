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
from bootloader.commands.command import LB_TYPES, IaaSCommand, lb_exists
from bootloader.flags import Flags
from bootloader.utils import console


@dataclass(frozen=True)
class CreateLBsConfig:
    lb_type: str
    cert_path: str = ""
    key_path: str = ""
    chain_path: str = ""
    domain: str = ""
    skip_if_exists: bool = False


class CreateLBs(IaaSCommand):
    def __init__(self, gcp_create_lbs, aws_create_lbs, state_validator):
        super().__init__(gcp_create_lbs, aws_create_lbs)
        self.logger = logging.getLogger(__name__)
        self.state_validator = state_validator

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        if config.skip_if_exists and lb_exists(state.stack.lb_type):
            console.info(f'lb type "{state.stack.lb_type}" exists, skipping...', logger=self.logger)
            return

        self.state_validator.validate()

        if lb_exists(state.stack.lb_type) and state.stack.lb_type != config.lb_type:
            raise exceptions.ValidationError(
                f"bbl already has a {state.stack.lb_type} load balancer attached, please remove the previous load balancer "
                f"before attaching a new one")

        return self.executor_for(state).execute(config, state)

    @staticmethod
    def parse_flags(subcommand_flags):
        lb_flags = Flags("create-lbs")
        lb_flags.string("lb_type", "type", required=True, help="Load balancer(s) type. Valid options: %s" % ", ".join(LB_TYPES))
        lb_flags.string("cert_path", "cert", help="Path to SSL certificate")
        lb_flags.string("key_path", "key", help="Path to SSL certificate key")
        lb_flags.string("chain_path", "chain", help="Path to SSL certificate chain")
        lb_flags.string("domain", "domain", help="Domain to attach to the load balancer")
        lb_flags.bool("skip_if_exists", "skip-if-exists", help="Skip if a load balancer already exists")
        config = CreateLBsConfig(**lb_flags.parse(subcommand_flags))

        if config.lb_type not in LB_TYPES:
            raise exceptions.ConfigError(f'"{config.lb_type}" is not a valid lb type, valid lb types are: [{", ".join(LB_TYPES)}]')
        return config
