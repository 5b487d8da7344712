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

from bootloader import exceptions, paths


class StateValidator:
    def __init__(self, state_dir):
        self.state_dir = state_dir

    def validate(self):
        if not os.path.isfile(paths.state_file(self.state_dir)):
            raise exceptions.ValidationError(
                f'bbl-state.json not found in "{self.state_dir}", ensure you\'re running this command in the proper state '
                f"directory or create a new environment with bbl up")
