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

import sys

PROGRAM_NAME = "bbl"

DOC_LINK = "https://github.com/cloudfoundry/bosh-bootloader"


def doc_link():
    return DOC_LINK


def check_python_version():
    if sys.version_info < (3, 8):
        raise RuntimeError("%s requires at least Python 3.8 but you are using:\n\nPython %s" % (PROGRAM_NAME, str(sys.version)))
