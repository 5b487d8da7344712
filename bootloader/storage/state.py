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

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict

from bootloader import exceptions

STATE_VERSION = 3


class IAAS(str, Enum):
    GCP = "gcp"
    AWS = "aws"

    @classmethod
    def supported(cls):
        return tuple(member.value for member in cls)

    @classmethod
    def resolve(cls, value):
        """
        Maps the IaaS name recorded in state onto a known backend.

        :param value: The raw ``iaas`` value, possibly empty.
        :return: The matching ``IAAS`` member.
        :raises UnsupportedBackendError: if ``value`` does not name a known backend.
        """
        for member in cls:
            if member.value == value:
                return member
        raise exceptions.UnsupportedBackendError(value, cls.supported())


@dataclass(frozen=True)
class AWS:
    access_key_id: str = ""
    secret_access_key: str = ""
    region: str = ""


@dataclass(frozen=True)
class GCP:
    service_account_key: str = ""
    project_id: str = ""
    region: str = ""
    zone: str = ""


@dataclass(frozen=True)
class Stack:
    name: str = ""
    lb_type: str = ""


@dataclass(frozen=True)
class LB:
    cert: str = ""
    key: str = ""
    chain: str = ""
    domain: str = ""
    outputs: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BOSH:
    director_name: str = ""
    director_address: str = ""
    director_username: str = ""
    director_password: str = ""
    director_ssl_ca: str = ""


@dataclass(frozen=True)
class State:
    """A durable record describing one provisioned environment"""

    version: int = STATE_VERSION
    iaas: str = ""
    env_id: str = ""
    aws: AWS = field(default_factory=AWS)
    gcp: GCP = field(default_factory=GCP)
    stack: Stack = field(default_factory=Stack)
    lb: LB = field(default_factory=LB)
    bosh: BOSH = field(default_factory=BOSH)
    tf_state: str = ""

    def is_empty(self):
        return not self.iaas and not self.env_id

    @classmethod
    def from_dict(cls, d):
        """
        Builds a State from its JSON form. Unknown keys are ignored at every level and a null section reads as empty.

        :raises ValueError: if the document or one of its sections is not a JSON object.
        """
        if not isinstance(d, dict):
            raise ValueError(f"expected a JSON object but got {type(d).__name__}")
        return cls(
            version=d.get("version", STATE_VERSION),
            iaas=d.get("iaas", ""),
            env_id=d.get("env_id", ""),
            aws=_section(AWS, d, "aws"),
            gcp=_section(GCP, d, "gcp"),
            stack=_section(Stack, d, "stack"),
            lb=_section(LB, d, "lb"),
            bosh=_section(BOSH, d, "bosh"),
            tf_state=d.get("tf_state", ""),
        )


def _section(section_class, d, key):
    values = d.get(key) or {}
    if not isinstance(values, dict):
        raise ValueError(f"expected [{key}] to be a JSON object but got {type(values).__name__}")
    names = {f.name for f in fields(section_class)}
    return section_class(**{name: value for name, value in values.items() if name in names})
