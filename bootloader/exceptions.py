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


class BootloaderError(Exception):
    """
    Base class for all bbl exceptions
    """

    def __init__(self, message, cause=None):
        super().__init__(message, cause)
        self.message = message
        self.cause = cause

    def __repr__(self):
        return self.message

    def __str__(self):
        return self.message


class ConfigError(BootloaderError):
    """
    Thrown when command line flags or credentials are malformed, unknown or missing
    """


class ValidationError(BootloaderError):
    """
    Thrown when the persisted environment state does not satisfy a command's preconditions
    """


class UnsupportedBackendError(BootloaderError):
    """
    Thrown when the state names an IaaS that bbl has no executor for
    """

    def __init__(self, iaas, supported=("gcp", "aws")):
        super().__init__('"{}" is an invalid iaas type in state, supported iaas types are: [{}]'.format(
            iaas, ", ".join(supported)))
        self.iaas = iaas
        self.supported = supported


class ExecutorError(BootloaderError):
    """
    Thrown whenever an IaaS-specific executor fails to carry out its operation
    """


class CredentialsError(ExecutorError):
    """
    Thrown when the cloud provider rejects the supplied credentials
    """


class SystemSetupError(BootloaderError):
    """
    Thrown when a user did something wrong, e.g. terraform is not installed or templates are missing
    """


class NotFound(BootloaderError):
    pass


class TerraformApplyError(ExecutorError):
    """
    Thrown when terraform fails part way. Carries the terraform state so the resources created so far are not lost.
    """

    def __init__(self, message, tf_state, cause=None):
        super().__init__(message, cause)
        self.tf_state = tf_state
