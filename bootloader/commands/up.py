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

from dataclasses import dataclass

from bootloader import exceptions
from bootloader.commands.command import IaaSCommand
from bootloader.flags import Flags
from bootloader.storage.state import IAAS


@dataclass(frozen=True)
class UpConfig:
    iaas: str = ""
    name: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = ""
    gcp_service_account_key: str = ""
    gcp_project_id: str = ""
    gcp_region: str = ""
    gcp_zone: str = ""


class Up(IaaSCommand):
    """
    Creates or updates the infrastructure of an environment. Unlike other commands, ``up`` may run
    against an empty state directory, so the IaaS is taken from the flags before falling back to state.
    """

    def execute(self, subcommand_flags, state):
        config = self.parse_flags(subcommand_flags)

        iaas = config.iaas or state.iaas
        if not iaas:
            raise exceptions.ConfigError("--iaas [{}] must be provided or BBL_IAAS must be set".format(", ".join(IAAS.supported())))
        if state.iaas and config.iaas and state.iaas != config.iaas:
            raise exceptions.ConfigError(
                f"The iaas type cannot be changed for an existing environment. The current iaas type is {state.iaas}.")

        return self.executors[IAAS.resolve(iaas)].execute(config, state)

    @staticmethod
    def parse_flags(subcommand_flags):
        up_flags = Flags("up")
        up_flags.string("iaas", "iaas", env="BBL_IAAS", help="IaaS to deploy bbl on")
        up_flags.string("name", "name", help="Name to assign to your BOSH director (optional, will be randomly generated)")
        up_flags.string("aws_access_key_id", "aws-access-key-id", env="BBL_AWS_ACCESS_KEY_ID", help="AWS Access Key ID to use")
        up_flags.string("aws_secret_access_key", "aws-secret-access-key", env="BBL_AWS_SECRET_ACCESS_KEY",
                        help="AWS Secret Access Key to use")
        up_flags.string("aws_region", "aws-region", env="BBL_AWS_REGION", help="AWS Region to use")
        up_flags.string("gcp_service_account_key", "gcp-service-account-key", env="BBL_GCP_SERVICE_ACCOUNT_KEY",
                        help="GCP Service Access Key to use, either a path or the key contents")
        up_flags.string("gcp_project_id", "gcp-project-id", env="BBL_GCP_PROJECT_ID", help="GCP Project ID to use")
        up_flags.string("gcp_region", "gcp-region", env="BBL_GCP_REGION", help="GCP Region to use")
        up_flags.string("gcp_zone", "gcp-zone", env="BBL_GCP_ZONE", help="GCP Zone to use")
        return UpConfig(**up_flags.parse(subcommand_flags))
