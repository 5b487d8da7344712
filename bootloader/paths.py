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

import os

from bootloader.utils.io import ensure_dir


def bbl_confdir():
    confdir = os.path.join(os.getenv("BBL_HOME", os.path.expanduser("~")), ".bbl")
    ensure_dir(confdir)
    return confdir


def logs():
    """
    :return: The absolute path to the directory that contains bbl's log file.
    """
    return os.path.join(bbl_confdir(), "logs")


def state_file(state_dir):
    return os.path.join(state_dir, "bbl-state.json")


def terraform_templates(state_dir):
    return os.path.join(state_dir, "terraform")
