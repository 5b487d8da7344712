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
import os
import tempfile
from unittest import TestCase

from bootloader import exceptions
from bootloader.storage.state import AWS, LB, State, Stack
from bootloader.storage.store import StateStore


class StateStoreTests(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = StateStore(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_loads_empty_state_if_missing(self):
        self.assertEqual(State(), self.store.load())

    def test_saves_and_loads(self):
        state = State(iaas="aws", env_id="bbl-env", aws=AWS(region="us-west-1"),
                      stack=Stack(lb_type="cf"), lb=LB(outputs={"cf_router_lb": "lb.example.com"}))

        self.store.save(state)

        self.assertEqual(state, self.store.load())
        self.assertEqual(["bbl-state.json"], os.listdir(self.tmp.name))
        with open(self.store.path, "rt", encoding="utf-8") as f:
            self.assertEqual("aws", json.load(f)["iaas"])

    def test_rejects_malformed_state(self):
        with open(self.store.path, "wt", encoding="utf-8") as f:
            f.write("{not json")

        with self.assertRaisesRegex(exceptions.ValidationError, "Could not read state file"):
            self.store.load()

    def test_rejects_state_that_is_not_an_object(self):
        for contents in ["[]", "\"x\"", "3"]:
            with open(self.store.path, "wt", encoding="utf-8") as f:
                f.write(contents)

            with self.assertRaisesRegex(exceptions.ValidationError, "Could not read state file"):
                self.store.load()

    def test_loads_state_with_unknown_keys(self):
        with open(self.store.path, "wt", encoding="utf-8") as f:
            json.dump({"iaas": "gcp", "env_id": "bbl-env", "stack": {"lb_type": "concourse", "extra": 1}, "future": True}, f)

        self.assertEqual(State(iaas="gcp", env_id="bbl-env", stack=Stack(lb_type="concourse")), self.store.load())

    def test_deletes_state(self):
        self.store.save(State(iaas="gcp"))

        self.store.delete()
        # deleting twice is fine
        self.store.delete()

        self.assertFalse(os.path.exists(self.store.path))
