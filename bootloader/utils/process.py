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
import shlex
import subprocess


def _to_args(command_line):
    if isinstance(command_line, str):
        return shlex.split(command_line)
    return list(command_line)


def _describe(command_line):
    return command_line if isinstance(command_line, str) else " ".join(command_line)


def run_subprocess_with_output(command_line, env=None, cwd=None):
    """
    Runs the provided command line and returns its stdout as a list of lines.

    :param command_line: The command line to run, either as a string or as an argument list.
    :param env: An optional environment for the child process.
    :param cwd: An optional working directory for the child process.
    :return: A list of output lines with trailing line breaks removed.
    """
    logger = logging.getLogger(__name__)
    logger.debug("Running subprocess [%s] with output.", _describe(command_line))
    with subprocess.Popen(_to_args(command_line), stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                          env=env, cwd=cwd) as command_line_process:
        lines = []
        for line in command_line_process.stdout:
            lines.append(line.decode("utf-8").rstrip())
        command_line_process.wait()
    return lines


def run_subprocess_with_logging(command_line, header=None, level=logging.INFO, env=None, cwd=None):
    """
    Runs the provided command line in a subprocess. All output will be captured by a logger.

    :param command_line: The command line of the subprocess to launch.
    :param header: An optional header line that should be logged (this will be logged on info level, regardless of the defined log level).
    :param level: The log level to use for output (default: logging.INFO).
    :param env: An optional environment for the child process. Its values are never logged.
    :param cwd: An optional working directory for the child process.
    :return: The process exit code as an int.
    """
    logger = logging.getLogger(__name__)
    logger.debug("Running subprocess [%s] with logging.", _describe(command_line))
    if header is not None:
        logger.info(header)

    with subprocess.Popen(_to_args(command_line), stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                          universal_newlines=True, env=env, cwd=cwd) as command_line_process:
        for line in command_line_process.stdout:
            logger.log(level=level, msg=line.rstrip())
        command_line_process.wait()
    logger.debug("Subprocess [%s] finished with return code [%s].", _describe(command_line), str(command_line_process.returncode))
    return command_line_process.returncode
