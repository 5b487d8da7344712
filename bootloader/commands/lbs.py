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

import json
from dataclasses import dataclass

import tabulate

from bootloader.commands.command import Command, lb_exists
from bootloader.flags import Flags
from bootloader.storage.state import IAAS
from bootloader.utils import console


@dataclass(frozen=True)
class LBsConfig:
    json: bool = False


class LBs(Command):
    """
    Prints the load balancers attached to the environment. Prints nothing if there are none.
    """

    def __init__(self, state_validator):
        self.state_validator = state_validator

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        self.state_validator.validate()
        IAAS.resolve(state.iaas)

        if not lb_exists(state.stack.lb_type):
            return

        if config.json:
            console.println(json.dumps({"type": state.stack.lb_type, "outputs": state.lb.outputs}, indent=2, sort_keys=True))
        else:
            rows = sorted(state.lb.outputs.items())
            console.println(tabulate.tabulate(rows, headers=[f"{state.stack.lb_type} load balancer", "address"], tablefmt="simple"))

    @staticmethod
    def parse_flags(subcommand_flags):
        lbs_flags = Flags("lbs")
        lbs_flags.bool("json", "json", help="Print the load balancers as JSON")
        return LBsConfig(**lbs_flags.parse(subcommand_flags))
