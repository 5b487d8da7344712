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

from bootloader.infrastructure.executor import TerraformBackedExecutor, read_file
from bootloader.storage.state import LB
from bootloader.utils import console


class CreateLBs(TerraformBackedExecutor):
    def execute(self, config, state):
        cert = read_file(config.cert_path, "--cert")
        key = read_file(config.key_path, "--key")
        self.environment.check_lb_config(config.lb_type, cert, key)

        new_state = dataclasses.replace(
            state,
            stack=dataclasses.replace(state.stack, lb_type=config.lb_type),
            lb=LB(cert=cert, key=key, chain=read_file(config.chain_path, "--chain"), domain=config.domain),
        )
        self.apply(new_state)


class UpdateLBs(TerraformBackedExecutor):
    def execute(self, config, state):
        cert = read_file(config.cert_path, "--cert")
        key = read_file(config.key_path, "--key")
        chain = read_file(config.chain_path, "--chain")
        domain = config.domain or state.lb.domain
        self.environment.check_lb_config(state.stack.lb_type, cert, key)

        if (cert, key, chain, domain) == (state.lb.cert, state.lb.key, state.lb.chain, state.lb.domain):
            console.info("no updates are to be performed", logger=self.logger)
            return

        self.apply(dataclasses.replace(state, lb=dataclasses.replace(state.lb, cert=cert, key=key, chain=chain, domain=domain)))


class DeleteLBs(TerraformBackedExecutor):
    def execute(self, state):
        self.logger.info("Deleting [%s] load balancers of environment [%s].", state.stack.lb_type, state.env_id)
        self.apply(dataclasses.replace(state, stack=dataclasses.replace(state.stack, lb_type=""), lb=LB()))
