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
import logging

from bootloader import exceptions


class TerraformBackedExecutor:
    """
    Base for IaaS executors that converge the cloud onto a desired state by applying terraform, then persist the
    result. Each instance is bound to one IaaS through its ``environment``.
    """

    def __init__(self, environment, terraform, state_store):
        self.logger = logging.getLogger(__name__)
        self.environment = environment
        self.terraform = terraform
        self.state_store = state_store

    def apply(self, state):
        """
        Applies terraform for ``state`` and saves the state enriched with the terraform outputs.

        ;return: The saved State
        """
        try:
            outputs, tf_state = self.terraform.apply(self.environment.iaas.value, self.environment.variables(state), state.tf_state)
        except exceptions.TerraformApplyError as e:
            self.state_store.save(dataclasses.replace(state, tf_state=e.tf_state))
            raise

        new_state = dataclasses.replace(
            state,
            tf_state=tf_state,
            lb=dataclasses.replace(state.lb, outputs=lb_outputs(state.stack.lb_type, outputs)),
            bosh=dataclasses.replace(state.bosh, director_address=str(outputs.get("director_address") or state.bosh.director_address)),
        )
        self.state_store.save(new_state)
        return new_state


def lb_outputs(lb_type, outputs):
    if not lb_type:
        return {}
    return {name: str(value) for name, value in outputs.items() if name.startswith(f"{lb_type}_")}


def read_file(path, flag):
    if not path:
        return ""
    try:
        with open(path, "rt", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise exceptions.ConfigError(f"Could not read {flag} [{path}]", e)
