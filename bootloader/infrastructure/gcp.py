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
import json
import logging
import os

from bootloader import exceptions
from bootloader.infrastructure.environment import Environment, require
from bootloader.storage import state as st

REQUIRED_KEY_FIELDS = ("type", "project_id", "private_key", "client_email")


def load_service_account_key(path_or_contents):
    """
    Accepts either the path to a service account key file or the key's JSON contents.

    ;return: The key's JSON contents as a string
    """
    if os.path.isfile(path_or_contents):
        with open(path_or_contents, "rt", encoding="utf-8") as f:
            return f.read()
    return path_or_contents


def parse_service_account_key(contents):
    try:
        key = json.loads(contents)
    except ValueError as e:
        raise exceptions.ConfigError("error reading or parsing the GCP service account key (must be a valid json file or "
                                     "json string)", e)
    if not isinstance(key, dict):
        raise exceptions.ConfigError("the GCP service account key must be a json object")
    return key


class GCPEnvironment(Environment):
    iaas = st.IAAS.GCP

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def configure(self, config, state):
        service_account_key = state.gcp.service_account_key
        if config.gcp_service_account_key:
            service_account_key = load_service_account_key(config.gcp_service_account_key)
        project_id = config.gcp_project_id or state.gcp.project_id
        if service_account_key and not project_id:
            project_id = parse_service_account_key(service_account_key).get("project_id", "")

        gcp = st.GCP(
            service_account_key=service_account_key,
            project_id=project_id,
            region=config.gcp_region or state.gcp.region,
            zone=config.gcp_zone or state.gcp.zone,
        )
        require([
            ("--gcp-service-account-key", gcp.service_account_key),
            ("--gcp-project-id", gcp.project_id),
            ("--gcp-region", gcp.region),
            ("--gcp-zone", gcp.zone),
        ])
        return dataclasses.replace(state, iaas=self.iaas.value, gcp=gcp)

    def verify_credentials(self, state):
        key = parse_service_account_key(state.gcp.service_account_key)
        missing = [field for field in REQUIRED_KEY_FIELDS if not key.get(field)]
        if missing:
            raise exceptions.CredentialsError("The GCP service account key is missing: {}".format(", ".join(missing)))
        if key["type"] != "service_account":
            raise exceptions.CredentialsError(f'The GCP key must be of type "service_account" but was "{key["type"]}"')
        if key["project_id"] != state.gcp.project_id:
            raise exceptions.CredentialsError(
                f'The GCP service account key belongs to project "{key["project_id"]}" but "{state.gcp.project_id}" was requested')
        self.logger.info("Using GCP service account [%s].", key["client_email"])

    def variables(self, state):
        variables = self.common_variables(state)
        variables.update({
            "project_id": state.gcp.project_id,
            "region": state.gcp.region,
            "zone": state.gcp.zone,
            "credentials": state.gcp.service_account_key,
        })
        return variables

    def check_lb_config(self, lb_type, cert, key):
        if lb_type == "cf" and (not cert or not key):
            raise exceptions.ConfigError("--cert and --key are required for GCP cf load balancers")
