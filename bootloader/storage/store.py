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

import dataclasses
import json
import logging
import os
import tempfile

from bootloader import exceptions, paths
from bootloader.storage.state import State


class StateStore:
    """
    Loads and persists the environment state kept in ``bbl-state.json`` inside a state directory.
    """

    def __init__(self, state_dir):
        self.logger = logging.getLogger(__name__)
        self.state_dir = state_dir

    @property
    def path(self):
        return paths.state_file(self.state_dir)

    def load(self):
        if not os.path.isfile(self.path):
            self.logger.info("No state file at [%s]. Starting from an empty state.", self.path)
            return State()
        try:
            with open(self.path, "rt", encoding="utf-8") as f:
                return State.from_dict(json.load(f))
        except (ValueError, TypeError) as e:
            raise exceptions.ValidationError(f"Could not read state file [{self.path}]", e)

    def save(self, state):
        os.makedirs(self.state_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".bbl-state-", dir=self.state_dir)
        try:
            with os.fdopen(fd, "wt", encoding="utf-8") as f:
                json.dump(dataclasses.asdict(state), f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.remove(tmp_path)
            raise
        self.logger.info("Saved state for environment [%s] to [%s].", state.env_id, self.path)

    def delete(self):
        if os.path.isfile(self.path):
            os.remove(self.path)
            self.logger.info("Deleted state file [%s].", self.path)
