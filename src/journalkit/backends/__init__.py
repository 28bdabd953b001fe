# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Protocol-based backend shim layer for journalkit.

Repository access goes through the injectable
:class:`~journalkit.backends.vcs.VersionControlReader` protocol, so the
core never shells out itself. Tests swap in a fake reader; the default
implementation is :class:`~journalkit.backends.vcs.GitCLIReader`.
"""

from journalkit.backends._run import CommandResult, run_command
from journalkit.backends.vcs import GitCLIReader, VersionControlReader

__all__ = [
    'CommandResult',
    'GitCLIReader',
    'VersionControlReader',
    'run_command',
]
