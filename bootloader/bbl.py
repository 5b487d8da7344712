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

import argparse
import logging
import os
import platform
import sys
import time

from bootloader import PROGRAM_NAME, check_python_version, config, doc_link, exceptions, log, paths, version
from bootloader.commands.create_lbs import CreateLBs
from bootloader.commands.delete_lbs import DeleteLBs
from bootloader.commands.destroy import Destroy
from bootloader.commands.lbs import LBs
from bootloader.commands.state_query import state_queries
from bootloader.commands.up import Up
from bootloader.commands.update_lbs import UpdateLBs
from bootloader.infrastructure import destroy, lbs, up
from bootloader.infrastructure.aws import AWSEnvironment
from bootloader.infrastructure.gcp import GCPEnvironment
from bootloader.infrastructure.terraform import TerraformExecutor
from bootloader.storage.store import StateStore
from bootloader.storage.validator import StateValidator
from bootloader.utils import console

COMMANDS = {
    "up": "Deploys the infrastructure for a BOSH director",
    "destroy": "Tears down the infrastructure of the environment",
    "create-lbs": "Attaches load balancer(s)",
    "update-lbs": "Updates load balancer(s)",
    "delete-lbs": "Deletes attached load balancer(s)",
    "lbs": "Prints attached load balancer(s)",
    "director-address": "Prints the BOSH director address",
    "director-username": "Prints the BOSH director username",
    "director-password": "Prints the BOSH director password",
    "director-ca-cert": "Prints the BOSH director CA certificate",
    "env-id": "Prints the environment ID",
}


def create_arg_parser():
    commands_help = "\n".join(f"  {name:<20}{description}" for name, description in COMMANDS.items())
    parser = argparse.ArgumentParser(prog=PROGRAM_NAME,
                                     description="Provisions and tears down infrastructure for BOSH environments on AWS and GCP",
                                     epilog="commands:\n{}\n\nFind out more about bbl at {}".format(commands_help, doc_link()),
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--version", action="version", version="%(prog)s " + version.version())
    parser.add_argument(
        "--state-dir",
        help="Directory containing the bbl state (default: the current directory or BBL_STATE_DIR).",
        default=os.getenv("BBL_STATE_DIR", os.getcwd()))
    parser.add_argument(
        "--debug",
        help="Print debug output to stderr (default: false).",
        default=False,
        action="store_true")
    parser.add_argument(
        "--configuration-name",
        metavar="configuration_name",
        help="The name of the configuration to load, i.e. bbl-<name>.ini (default: bbl.ini).",
        default=None)
    parser.add_argument(
        "command",
        metavar="command",
        choices=list(COMMANDS),
        help="The command to run, see below.")
    parser.add_argument(
        "subcommand_flags",
        nargs=argparse.REMAINDER,
        help=argparse.SUPPRESS)
    return parser


def create_commands(cfg, state_store):
    """
    Wires every command to its collaborators. Each IaaS-routing command gets one executor per supported IaaS.
    """
    state_dir = cfg.opts("system", "state.dir")
    terraform = TerraformExecutor(binary=cfg.opts("terraform", "binary"),
                                  templates_dir=cfg.opts("terraform", "templates.dir", default_value=paths.terraform_templates(state_dir),
                                                         mandatory=False))
    env_id_prefix = cfg.opts("system", "env.prefix")
    gcp, aws = GCPEnvironment(), AWSEnvironment()
    state_validator = StateValidator(state_dir)

    commands = {
        "up": Up(up.Up(gcp, terraform, state_store, env_id_prefix), up.Up(aws, terraform, state_store, env_id_prefix)),
        "destroy": Destroy(destroy.Destroy(gcp, terraform, state_store), destroy.Destroy(aws, terraform, state_store), state_validator),
        "create-lbs": CreateLBs(lbs.CreateLBs(gcp, terraform, state_store), lbs.CreateLBs(aws, terraform, state_store), state_validator),
        "update-lbs": UpdateLBs(lbs.UpdateLBs(gcp, terraform, state_store), lbs.UpdateLBs(aws, terraform, state_store), state_validator),
        "delete-lbs": DeleteLBs(lbs.DeleteLBs(gcp, terraform, state_store), lbs.DeleteLBs(aws, terraform, state_store), state_validator),
        "lbs": LBs(state_validator),
    }
    commands.update(state_queries(state_validator))
    return commands


def dispatch_sub_command(commands, command_name, subcommand_flags, state):
    logger = logging.getLogger(__name__)
    try:
        commands[command_name].execute(subcommand_flags, state)
        return True
    except exceptions.BootloaderError as e:
        logger.exception("Cannot run command [%s].", command_name)
        msg = str(e.message)
        nesting = 0
        while hasattr(e, "cause") and e.cause:
            nesting += 1
            e = e.cause
            if hasattr(e, "message"):
                msg += "\n%s%s" % ("\t" * nesting, e.message)
            else:
                msg += "\n%s%s" % ("\t" * nesting, str(e))

        console.error(msg)
        return False
    except BaseException as e:
        logger.exception("A fatal error occurred while running command [%s].", command_name)
        console.error("%s. Check the log files in %s for details." % (e, paths.logs()))
        return False


def main(argv=None):
    check_python_version()
    log.install_default_log_config()
    arg_parser = create_arg_parser()
    args = arg_parser.parse_args(argv)

    log.configure_logging(debug=args.debug)
    logger = logging.getLogger(__name__)
    console.init()
    start = time.time()

    cfg = config.Config(config_name=args.configuration_name)
    if not cfg.config_present():
        cfg.install_default_config()
    cfg.load_config()
    cfg.add(config.Scope.applicationOverride, "system", "state.dir", args.state_dir)

    logger.info("OS [%s]", str(platform.uname()))
    logger.info("Python [%s]", str(sys.implementation))
    logger.info("bbl version [%s]", version.version())
    logger.info("Running command [%s] against state directory [%s].", args.command, args.state_dir)

    state_store = StateStore(cfg.opts("system", "state.dir"))
    try:
        state = state_store.load()
    except exceptions.BootloaderError as e:
        console.error(e.message, logger=logger)
        sys.exit(1)

    commands = create_commands(cfg, state_store)
    success = dispatch_sub_command(commands, args.command, args.subcommand_flags, state)

    end = time.time()
    if success:
        logger.info("Command [%s] succeeded (took %d seconds).", args.command, end - start)
    else:
        logger.info("Command [%s] failed (took %d seconds).", args.command, end - start)
        sys.exit(1)


if __name__ == "__main__":
    main()
