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

import datetime
import functools
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass

import psutil
import pytest

UP_TIMEOUT = 40 * 60
DEFAULT_TIMEOUT = 10 * 60
FAST_FAIL_TIMEOUT = 10

IAASES = ["aws", "gcp"]


@dataclass(frozen=True)
class Config:
    """Cloud credentials for the integration tests, read from the same BBL_* variables bbl itself understands"""

    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = ""
    gcp_service_account_key_path: str = ""
    gcp_project_id: str = ""
    gcp_region: str = ""
    gcp_zone: str = ""
    lb_cert_path: str = ""
    lb_key_path: str = ""
    lb_chain_path: str = ""

    @classmethod
    def from_env(cls):
        return cls(
            aws_access_key_id=os.getenv("BBL_AWS_ACCESS_KEY_ID", ""),
            aws_secret_access_key=os.getenv("BBL_AWS_SECRET_ACCESS_KEY", ""),
            aws_region=os.getenv("BBL_AWS_REGION", ""),
            gcp_service_account_key_path=os.getenv("BBL_GCP_SERVICE_ACCOUNT_KEY", ""),
            gcp_project_id=os.getenv("BBL_GCP_PROJECT_ID", ""),
            gcp_region=os.getenv("BBL_GCP_REGION", ""),
            gcp_zone=os.getenv("BBL_GCP_ZONE", ""),
            lb_cert_path=os.getenv("BBL_TEST_LB_CERT_PATH", ""),
            lb_key_path=os.getenv("BBL_TEST_LB_KEY_PATH", ""),
            lb_chain_path=os.getenv("BBL_TEST_LB_CHAIN_PATH", ""),
        )

    def supports(self, iaas):
        if iaas == "aws":
            return bool(self.aws_access_key_id and self.aws_secret_access_key and self.aws_region)
        if iaas == "gcp":
            return bool(self.gcp_service_account_key_path and self.gcp_project_id and self.gcp_region and self.gcp_zone)
        return False


CONFIGURATION = Config.from_env()


def bbl_command():
    """
    :return: The argument list that starts bbl. BBL_BINARY may point to a specific build, e.g. "python -m bootloader.bbl".
    """
    binary = os.getenv("BBL_BINARY")
    if binary:
        return shlex.split(binary)
    return [sys.executable, "-m", "bootloader.bbl"]


def all_iaases(t):
    @functools.wraps(t)
    @pytest.mark.parametrize("iaas", [
        pytest.param(iaas, marks=pytest.mark.skipif(not CONFIGURATION.supports(iaas), reason=f"no {iaas} credentials configured"))
        for iaas in IAASES
    ])
    def wrapper(iaas, *args, **kwargs):
        t(iaas, *args, **kwargs)

    return wrapper


class Session:
    """
    One bbl invocation. The process starts when the session is entered and is killed together with all of its
    children when the session is left, whether or not it has exited by then. Output is captured into temporary
    files and optionally echoed to this process' own streams once bbl has exited.
    """

    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    EXITED = "Exited"

    def __init__(self, args, env=None, passthrough=True):
        self.args = args
        self.env = env
        self.passthrough = passthrough
        self.process = None
        self.exit_code = None
        self.stdout = ""
        self.stderr = ""
        self._stdout_file = None
        self._stderr_file = None

    @property
    def state(self):
        if self.process is None:
            return Session.NOT_STARTED
        if self.exit_code is None:
            return Session.RUNNING
        return Session.EXITED

    def __enter__(self):
        print(f'\n{datetime.datetime.now().strftime("%Y-%m-%dT%H:%M:%S")} Invoking bbl: {" ".join(self.args)}')
        self._stdout_file = tempfile.TemporaryFile()
        self._stderr_file = tempfile.TemporaryFile()
        try:
            self.process = subprocess.Popen(self.args, stdout=self._stdout_file, stderr=self._stderr_file, env=self.env)
        except BaseException:
            self._close()
            raise
        return self

    def wait(self, timeout=None, expected_exit_code=None):
        """
        Blocks until bbl exits.

        :param timeout: Seconds to wait before failing the test. ``None`` waits indefinitely.
        :param expected_exit_code: If given, the exit code bbl must terminate with.
        :return: The exit code.
        """
        try:
            self.exit_code = self.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            self._kill()
            self.exit_code = self.process.returncode
            self._collect_output()
            raise AssertionError(f"[{' '.join(self.args)}] did not exit within [{timeout}] seconds and was killed. "
                                 f"stdout:\n{self.stdout}\nstderr:\n{self.stderr}") from None
        self._collect_output()
        if expected_exit_code is not None and self.exit_code != expected_exit_code:
            raise AssertionError(f"[{' '.join(self.args)}] exited with [{self.exit_code}] but [{expected_exit_code}] was expected. "
                                 f"stderr:\n{self.stderr}")
        return self.exit_code

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.state == Session.RUNNING:
            self._kill()
        self._close()
        return False

    def _collect_output(self):
        self.stdout = self._read(self._stdout_file)
        self.stderr = self._read(self._stderr_file)
        if self.passthrough:
            sys.stdout.write(self.stdout)
            sys.stderr.write(self.stderr)

    def _kill(self):
        try:
            parent = psutil.Process(self.process.pid)
            for child in parent.children(recursive=True):
                child.kill()
            parent.kill()
        except psutil.NoSuchProcess:
            pass
        self.process.wait()

    def _close(self):
        for f in (self._stdout_file, self._stderr_file):
            if f is not None:
                f.close()

    @staticmethod
    def _read(f):
        f.flush()
        f.seek(0)
        return f.read().decode("utf-8", errors="replace")


class BBL:
    """
    Drives a bbl binary against one state directory. Two BBL instances must never share a state directory.
    """

    def __init__(self, state_directory, command=None, configuration=CONFIGURATION, env=None):
        self.state_directory = state_directory
        self.command = command or bbl_command()
        self.configuration = configuration
        self.env = env

    def up(self, iaas):
        args = ["--state-dir", self.state_directory, "up"]
        if iaas == "aws":
            args += [
                "--iaas", "aws",
                "--aws-access-key-id", self.configuration.aws_access_key_id,
                "--aws-secret-access-key", self.configuration.aws_secret_access_key,
                "--aws-region", self.configuration.aws_region,
            ]
        elif iaas == "gcp":
            args += [
                "--iaas", "gcp",
                "--gcp-service-account-key", self.configuration.gcp_service_account_key_path,
                "--gcp-project-id", self.configuration.gcp_project_id,
                "--gcp-region", self.configuration.gcp_region,
                "--gcp-zone", self.configuration.gcp_zone,
            ]
        else:
            raise ValueError(f"invalid iaas [{iaas}]")
        self.run(args, timeout=UP_TIMEOUT, expected_exit_code=0)

    def up_with_invalid_aws_credentials(self):
        self.run([
            "--state-dir", self.state_directory,
            "up",
            "--iaas", "aws",
            "--aws-access-key-id", "some-bad-access-key-id",
            "--aws-secret-access-key", "some-bad-secret-access-key",
            "--aws-region", self.configuration.aws_region or "us-east-1",
        ], timeout=FAST_FAIL_TIMEOUT, expected_exit_code=1)

    def destroy(self):
        self.run(["--state-dir", self.state_directory, "destroy", "--no-confirm"], expected_exit_code=0)

    def save_director_ca(self):
        session = self.run(["--state-dir", self.state_directory, "director-ca-cert"], expected_exit_code=0, passthrough=False)
        with tempfile.NamedTemporaryFile("wt", suffix=".crt", delete=False) as f:
            f.write(session.stdout)
        return f.name

    def director_username(self):
        return self.fetch_value("director-username")

    def director_password(self):
        return self.fetch_value("director-password")

    def director_address(self):
        return self.fetch_value("director-address")

    def env_id(self):
        return self.fetch_value("env-id")

    def create_lb(self, load_balancer_type, cert, key, chain):
        self.run([
            "--state-dir", self.state_directory,
            "create-lbs",
            "--type", load_balancer_type,
            "--cert", cert,
            "--key", key,
            "--chain", chain,
        ], expected_exit_code=0)

    def create_gcp_lb(self, load_balancer_type):
        self.run(["--state-dir", self.state_directory, "create-lbs", "--type", load_balancer_type], expected_exit_code=0)

    def lbs(self):
        return self.run(["--state-dir", self.state_directory, "lbs"], expected_exit_code=0)

    def update_lb(self, cert_path, key_path):
        self.run([
            "--state-dir", self.state_directory,
            "update-lbs",
            "--cert", cert_path,
            "--key", key_path,
        ], expected_exit_code=0)

    def delete_lb(self, *flags):
        return self.run(["--state-dir", self.state_directory, "delete-lbs"] + list(flags), expected_exit_code=0)

    def fetch_value(self, value):
        session = self.run(["--state-dir", self.state_directory, value], timeout=None, passthrough=False)
        return session.stdout.strip()

    def run(self, args, timeout=DEFAULT_TIMEOUT, expected_exit_code=None, passthrough=True):
        """
        Runs bbl with ``args`` and waits for it to exit.

        :return: The exited Session.
        """
        with Session(self.command + args, env=self.env, passthrough=passthrough) as session:
            session.wait(timeout=timeout, expected_exit_code=expected_exit_code)
        return session
