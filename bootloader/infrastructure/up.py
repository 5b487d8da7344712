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
import datetime
import secrets

from bootloader import exceptions
from bootloader.infrastructure.executor import TerraformBackedExecutor
from bootloader.utils import console


class Up(TerraformBackedExecutor):
    def __init__(self, environment, terraform, state_store, env_id_prefix="bbl-env"):
        super().__init__(environment, terraform, state_store)
        self.env_id_prefix = env_id_prefix

    def execute(self, config, state):
        state = self.environment.configure(config, state)
        self.environment.verify_credentials(state)

        if config.name and state.env_id and config.name != state.env_id:
            raise exceptions.ConfigError(
                f"The director name cannot be changed for an existing environment. Current name is {state.env_id}.")
        env_id = state.env_id or config.name or self.generate_env_id()

        bosh = state.bosh
        if not bosh.director_username:
            bosh = dataclasses.replace(bosh,
                                       director_name=f"bosh-{env_id}",
                                       director_username=f"user-{secrets.token_hex(4)}",
                                       director_password=secrets.token_urlsafe(24))

        state = dataclasses.replace(state, env_id=env_id, bosh=bosh, stack=dataclasses.replace(state.stack, name=f"stack-{env_id}"))
        self.state_store.save(state)

        console.info(f"step: creating {self.environment.iaas.value} infrastructure for [{env_id}]", logger=self.logger)
        self.apply(state)
        console.info("step: infrastructure is up", logger=self.logger)

    def generate_env_id(self):
        timestamp = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dt%H-%Mz")
        return f"{self.env_id_prefix}-{secrets.token_hex(4)}-{timestamp}"
