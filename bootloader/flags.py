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

import argparse
import os
from dataclasses import dataclass
from typing import Any, Optional

from bootloader import exceptions


@dataclass(frozen=True)
class Flag:
    """Schema entry describing one command line flag"""

    dest: str
    name: str
    kind: str
    default: Any
    required: bool = False
    env: Optional[str] = None
    help: Optional[str] = None


TRUE_VALUES = ("1", "t", "T", "TRUE", "true", "True")
FALSE_VALUES = ("0", "f", "F", "FALSE", "false", "False")


def to_bool(value):
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}'")


class _RaisingArgumentParser(argparse.ArgumentParser):
    # argparse exits the process on errors, commands need an exception instead
    def error(self, message):
        raise exceptions.ConfigError("{}: {}".format(self.prog, message))


class Flags:
    """
    Parses the raw flags of a single subcommand according to a declared schema.
    """

    BOOL = "bool"
    STRING = "string"

    def __init__(self, command):
        self.command = command
        self.schema = []

    def bool(self, dest, name, default=False, help=None):
        self.schema.append(Flag(dest=dest, name=name, kind=Flags.BOOL, default=default, help=help))

    def string(self, dest, name, default="", required=False, env=None, help=None):
        self.schema.append(Flag(dest=dest, name=name, kind=Flags.STRING, default=default, required=required, env=env, help=help))

    def parse(self, raw_args):
        """
        Parses ``raw_args`` against the declared schema.

        :param raw_args: The unparsed flags following the subcommand name.
        :return: A dict mapping each flag's ``dest`` to its parsed (or default) value.
        """
        parser = self._create_parser()
        args = parser.parse_args(list(raw_args))
        values = vars(args)
        for flag in self.schema:
            if flag.kind == Flags.STRING and flag.env and not values[flag.dest]:
                values[flag.dest] = os.getenv(flag.env, flag.default)
        missing = [f"--{flag.name}" for flag in self.schema if flag.required and not values[flag.dest]]
        if missing:
            raise exceptions.ConfigError("{}: the following flags are required: {}".format(self.command, ", ".join(missing)))
        return values

    def _create_parser(self):
        parser = _RaisingArgumentParser(prog=self.command, add_help=False, allow_abbrev=False)
        for flag in self.schema:
            if flag.kind == Flags.BOOL:
                parser.add_argument(f"--{flag.name}", dest=flag.dest, default=flag.default, nargs="?", const=True, type=to_bool,
                                    metavar="true|false", help=flag.help)
            else:
                parser.add_argument(f"--{flag.name}", dest=flag.dest, default=flag.default, help=flag.help)
        return parser
