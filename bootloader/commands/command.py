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

from abc import ABC, abstractmethod

from bootloader.storage.state import IAAS

LB_TYPES = ("cf", "concourse")


def lb_exists(lb_type):
    return lb_type in LB_TYPES


class Command(ABC):
    """
    A bbl subcommand. Commands receive the raw flags that follow their name on the command line
    together with the environment state loaded by the caller.
    """

    @abstractmethod
    def execute(self, subcommand_flags, state):
        """
        Runs the command.

        ;param subcommand_flags: The unparsed flags following the subcommand name
        ;param state: The State of the targeted environment
        ;return None
        """
        raise NotImplementedError


class IaaSCommand(Command):
    """
    A command that routes its work to exactly one IaaS-specific executor, chosen by ``state.iaas``.
    """

    def __init__(self, gcp_executor, aws_executor):
        self.executors = {
            IAAS.GCP: gcp_executor,
            IAAS.AWS: aws_executor,
        }

    def executor_for(self, state):
        return self.executors[IAAS.resolve(state.iaas)]
