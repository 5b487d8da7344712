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

import json
import logging
import os
import tempfile

from bootloader import exceptions
from bootloader.utils import io, process

STATE_FILE = "terraform.tfstate"


class TerraformExecutor:
    """
    Runs terraform against the operator supplied templates in ``<templates_dir>/<iaas>``. Variables are handed over as
    ``TF_VAR_*`` environment variables so credentials never show up on a command line or in the logs.
    """

    def __init__(self, binary, templates_dir):
        self.logger = logging.getLogger(__name__)
        self.binary = binary
        self.templates_dir = templates_dir

    def apply(self, iaas, variables, tf_state):
        """
        ;param iaas: The IAAS whose templates to apply
        ;param variables: A dict of terraform input variables
        ;param tf_state: The terraform state from the previous run as a string, possibly empty
        ;return: A tuple of the terraform outputs as a dict and the new terraform state
        """
        with tempfile.TemporaryDirectory(prefix="bbl-terraform-") as work_dir:
            env = self._prepare(iaas, variables, tf_state, work_dir)
            self._run(["init", "-input=false", "-no-color"], env, work_dir, tf_state)
            self._run(["apply", "-auto-approve", "-input=false", "-no-color", f"-state={STATE_FILE}"], env, work_dir, tf_state)
            new_tf_state = self._read_state(work_dir)
            return self.outputs(new_tf_state), new_tf_state

    def destroy(self, iaas, variables, tf_state):
        """
        ;return: The terraform state after all resources have been destroyed
        """
        with tempfile.TemporaryDirectory(prefix="bbl-terraform-") as work_dir:
            env = self._prepare(iaas, variables, tf_state, work_dir)
            self._run(["init", "-input=false", "-no-color"], env, work_dir, tf_state)
            self._run(["destroy", "-auto-approve", "-input=false", "-no-color", f"-state={STATE_FILE}"], env, work_dir, tf_state)
            return self._read_state(work_dir)

    def version(self):
        try:
            lines = process.run_subprocess_with_output([self.binary, "version"])
        except FileNotFoundError:
            raise exceptions.SystemSetupError(f"Could not find terraform binary [{self.binary}]. Please install terraform "
                                              f"or configure [terraform] binary in bbl.ini.") from None
        return lines[0] if lines else ""

    @staticmethod
    def outputs(tf_state):
        if not tf_state:
            return {}
        return {name: output.get("value") for name, output in json.loads(tf_state).get("outputs", {}).items()}

    def _prepare(self, iaas, variables, tf_state, work_dir):
        template_dir = os.path.join(self.templates_dir, iaas)
        if not os.path.isdir(template_dir):
            raise exceptions.SystemSetupError(f"No terraform templates for [{iaas}] found in [{template_dir}].")
        self.logger.info("Using [%s] with templates in [%s].", self.version(), template_dir)
        io.copy_tree(template_dir, work_dir)
        if tf_state:
            with open(os.path.join(work_dir, STATE_FILE), "wt", encoding="utf-8") as f:
                f.write(tf_state)

        env = os.environ.copy()
        for name, value in variables.items():
            env[f"TF_VAR_{name}"] = value if isinstance(value, str) else json.dumps(value)
        return env

    def _run(self, args, env, work_dir, previous_tf_state):
        command = [self.binary] + args
        return_code = process.run_subprocess_with_logging(command, header=f"Running terraform {args[0]}", env=env, cwd=work_dir)
        if return_code != 0:
            tf_state = self._read_state(work_dir) or previous_tf_state
            raise exceptions.TerraformApplyError(f"terraform {args[0]} failed with exit code [{return_code}]", tf_state)

    @staticmethod
    def _read_state(work_dir):
        state_path = os.path.join(work_dir, STATE_FILE)
        if not os.path.isfile(state_path):
            return ""
        with open(state_path, "rt", encoding="utf-8") as f:
            return f.read()
