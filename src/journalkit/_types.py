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

"""Shared leaf-level types used across journalkit.

This module must have **zero** imports from other ``journalkit``
subpackages to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

__all__ = [
    'RawCommit',
    'Tag',
]


@dataclass(frozen=True)
class RawCommit:
    """A commit as read from the repository.

    Attributes:
        id: The full commit SHA.
        message: The complete, unparsed commit message.
        timestamp: Commit time (timezone-aware).
    """

    id: str
    message: str
    timestamp: datetime

    @property
    def short_id(self) -> str:
        """First 7 characters of the SHA, for display."""
        return self.id[:7]

    @property
    def date(self) -> date:
        """Calendar date of the commit in UTC."""
        return self.timestamp.astimezone(timezone.utc).date()


@dataclass(frozen=True)
class Tag:
    """A tag name and the commit it points at.

    Annotated tags are peeled, so ``target_id`` is always a commit SHA.

    Attributes:
        target_id: SHA of the tagged commit.
        name: Tag name (e.g. ``"v1.2.0"``).
    """

    target_id: str
    name: str
