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

from bootloader import exceptions
from bootloader.infrastructure.executor import TerraformBackedExecutor
from bootloader.utils import console


class Destroy(TerraformBackedExecutor):
    def execute(self, state):
        console.info(f"step: destroying {self.environment.iaas.value} infrastructure for [{state.env_id}]", logger=self.logger)
        try:
            self.terraform.destroy(self.environment.iaas.value, self.environment.variables(state), state.tf_state)
        except exceptions.TerraformApplyError as e:
            self.state_store.save(dataclasses.replace(state, tf_state=e.tf_state))
            raise
        self.state_store.delete()
        console.info("step: infrastructure has been destroyed", logger=self.logger)
