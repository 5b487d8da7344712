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

from bootloader import exceptions


class Environment(ABC):
    """
    The IaaS-specific part of provisioning: how credentials are gathered and checked and how the state maps onto
    terraform input variables.
    """

    iaas = None

    @abstractmethod
    def configure(self, config, state):
        """
        Merges the credentials given on the command line into the state.

        ;param config: An UpConfig
        ;param state: The current State
        ;return: The State carrying the effective credentials
        """
        raise NotImplementedError

    @abstractmethod
    def verify_credentials(self, state):
        """
        Checks the credentials in ``state`` with the cloud provider and raises CredentialsError if they are rejected.
        """
        raise NotImplementedError

    @abstractmethod
    def variables(self, state):
        """
        ;return: A dict of terraform input variables for ``state``
        """
        raise NotImplementedError

    @abstractmethod
    def check_lb_config(self, lb_type, cert, key):
        """
        Raises ConfigError if the certificate material is insufficient for a load balancer of ``lb_type`` on this IaaS.
        """
        raise NotImplementedError

    @staticmethod
    def common_variables(state):
        return {
            "env_id": state.env_id,
            "lb_type": state.stack.lb_type,
            "lb_cert": state.lb.cert,
            "lb_key": state.lb.key,
            "lb_chain": state.lb.chain,
            "lb_domain": state.lb.domain,
        }


def require(values):
    """
    Raises a ConfigError naming every flag whose value is empty.

    ;param values: A list of (flag name, value) tuples
    """
    missing = [name for name, value in values if not value]
    if missing:
        raise exceptions.ConfigError("Missing required flags: {}".format(", ".join(missing)))
