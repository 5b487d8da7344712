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

import sys

from bootloader import PROGRAM_NAME

ASSUME_TTY = True


class PlainFormat:
    @classmethod
    def red(cls, message):
        return message


class RichFormat:
    @classmethod
    def red(cls, message):
        return "\033[31;1m%s\033[0m" % message


format = PlainFormat


def init(assume_tty=True):
    """
    Initializes console output.

    :param assume_tty: Whether messages may use escape sequences when the error stream is a terminal.
    """
    global ASSUME_TTY, format
    ASSUME_TTY = assume_tty
    if ASSUME_TTY and sys.stderr.isatty():
        format = RichFormat
    else:
        format = PlainFormat


def info(msg, end="\n", flush=False, logger=None):
    _print_notice("", msg, end, flush, logger, "info")


def error(msg, end="\n", flush=False, logger=None):
    if logger:
        logger.error(msg)
    print(format.red("%s:" % PROGRAM_NAME) + " " + msg, end=end, flush=flush, file=sys.stderr)


def println(msg, end="\n", flush=False, logger=None):
    """
    Writes a raw value to stdout. Query commands depend on this being the only stdout output.
    """
    if logger:
        logger.info(msg)
    print(msg, end=end, flush=flush, file=sys.stdout)


def _print_notice(prefix, msg, end, flush, logger, level):
    if logger:
        getattr(logger, level)(msg)
    print(prefix + msg, end=end, flush=flush, file=sys.stderr)
