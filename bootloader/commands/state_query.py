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

from bootloader import exceptions
from bootloader.commands.command import Command
from bootloader.flags import Flags
from bootloader.utils import console


class StateQuery(Command):
    """
    Prints a single value recorded in the environment state, e.g. the director address.
    """

    def __init__(self, command_name, property_name, get_property, state_validator):
        self.command_name = command_name
        self.property_name = property_name
        self.get_property = get_property
        self.state_validator = state_validator

    def execute(self, subcommand_flags, state):
        Flags(self.command_name).parse(subcommand_flags)
        self.state_validator.validate()

        value = self.get_property(state)
        if not value:
            raise exceptions.NotFound(
                f"Could not retrieve {self.property_name}, please make sure you are targeting the proper state dir.")
        console.println(value)


def state_queries(state_validator):
    """
    :return: A dict mapping each query command name to its ``StateQuery``.
    """
    queries = [
        ("director-address", "director address", lambda state: state.bosh.director_address),
        ("director-username", "director username", lambda state: state.bosh.director_username),
        ("director-password", "director password", lambda state: state.bosh.director_password),
        ("director-ca-cert", "director ca cert", lambda state: state.bosh.director_ssl_ca),
        ("env-id", "environment id", lambda state: state.env_id),
    ]
    return {name: StateQuery(name, property_name, getter, state_validator) for name, property_name, getter in queries}
