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

"""Version control reader protocol for journalkit.

The :class:`VersionControlReader` protocol is the read-only view of a
repository that journalkit needs. Implementations:

- :class:`~journalkit.backends.vcs.git.GitCLIReader`: the ``git`` CLI
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from journalkit._types import RawCommit, Tag
from journalkit.backends.vcs.git import GitCLIReader as GitCLIReader

__all__ = [
    'GitCLIReader',
    'VersionControlReader',
]


@runtime_checkable
class VersionControlReader(Protocol):
    """Protocol for reading commits and tags.

    All methods are synchronous; journalkit walks history sequentially.
    """

    def resolve(self, revision_range: str) -> list[str]:
        """Return the commit SHAs in a revision range, most recent first.

        A single revision (``"HEAD"``) means everything reachable from
        it; ``"A..B"`` means reachable from ``B`` but not from ``A``.

        Args:
            revision_range: A revision or revision range.

        Raises:
            ResolutionError: If the range names no valid revisions.
        """
        ...

    def commit(self, commit_id: str) -> RawCommit:
        """Read a single commit.

        Args:
            commit_id: Full commit SHA.

        Raises:
            CatalogError: If the commit cannot be read.
        """
        ...

    def list_tags(self) -> list[Tag]:
        """Return every tag, peeled to the commit it points at.

        Raises:
            CatalogError: If the tags cannot be listed.
        """
        ...
