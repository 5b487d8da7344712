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

import boto3
import botocore.config
import botocore.exceptions

from bootloader import exceptions
from bootloader.infrastructure.environment import Environment, require
from bootloader.storage import state as st

# invalid credentials must fail within seconds rather than after botocore's default retry schedule
STS_CLIENT_CONFIG = botocore.config.Config(connect_timeout=5, read_timeout=5, retries={"max_attempts": 1})


class AWSEnvironment(Environment):
    iaas = st.IAAS.AWS

    def __init__(self, session_factory=boto3.session.Session):
        self.logger = logging.getLogger(__name__)
        self.session_factory = session_factory

    def configure(self, config, state):
        aws = st.AWS(
            access_key_id=config.aws_access_key_id or state.aws.access_key_id,
            secret_access_key=config.aws_secret_access_key or state.aws.secret_access_key,
            region=config.aws_region or state.aws.region,
        )
        require([
            ("--aws-access-key-id", aws.access_key_id),
            ("--aws-secret-access-key", aws.secret_access_key),
            ("--aws-region", aws.region),
        ])
        return dataclasses.replace(state, iaas=self.iaas.value, aws=aws)

    def verify_credentials(self, state):
        session = self.session_factory(aws_access_key_id=state.aws.access_key_id,
                                       aws_secret_access_key=state.aws.secret_access_key,
                                       region_name=state.aws.region)
        try:
            identity = session.client("sts", config=STS_CLIENT_CONFIG).get_caller_identity()
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            self.logger.error("AWS rejected the provided credentials.")
            raise exceptions.CredentialsError("The provided AWS credentials are invalid", e)
        self.logger.info("Authenticated with AWS as [%s].", identity.get("Arn"))

    def variables(self, state):
        variables = self.common_variables(state)
        variables.update({
            "access_key": state.aws.access_key_id,
            "secret_key": state.aws.secret_access_key,
            "region": state.aws.region,
        })
        return variables

    def check_lb_config(self, lb_type, cert, key):
        if not cert or not key:
            raise exceptions.ConfigError("--cert and --key are required for AWS load balancers")
