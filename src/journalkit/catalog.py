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

"""In-memory index of tags and parse outcomes, keyed by commit SHA.

The catalog is built once per run from what the repository reader
returned and is read-only afterwards, so it can be shared freely.

Key Concepts::

    ┌─────────────────────┬─────────────────────────────────────────────┐
    │ Concept             │ Plain-English                               │
    ├─────────────────────┼─────────────────────────────────────────────┤
    │ Release tag         │ A tag whose name contains none of the skip  │
    │                     │ substrings. Only these open release groups. │
    ├─────────────────────┼─────────────────────────────────────────────┤
    │ Parse outcome       │ The entry a commit message parsed into, or  │
    │                     │ the ParseError it raised.                   │
    └─────────────────────┴─────────────────────────────────────────────┘

Parsing every message up front with :meth:`Catalog.parse_all` is
optional; the partitioner falls back to parsing on demand.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from journalkit._types import RawCommit, Tag
from journalkit.commit_parsing import CommitParser, ParsedEntry
from journalkit.errors import ParseError
from journalkit.logging import get_logger

logger = get_logger(__name__)

ParseOutcome = ParsedEntry | ParseError


def is_release_tag(name: str, skip_patterns: Iterable[str]) -> bool:
    """Whether a tag name qualifies as a release boundary.

    Empty skip patterns are ignored, so ``''`` skips nothing.

    >>> is_release_tag('v1.0.0-rc1', ['rc'])
    False
    >>> is_release_tag('v1.0.0', [''])
    True
    """
    return not any(pattern and pattern in name for pattern in skip_patterns)


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup tables for one journalkit run.

    Attributes:
        tags: Commit SHA to release tag names, in the order the
            repository listed them.
        outcomes: Commit SHA to parse outcome, filled by
            :meth:`parse_all`. Empty when messages are parsed lazily.
    """

    tags: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    outcomes: Mapping[str, ParseOutcome] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, tags: Iterable[Tag], *, skip_patterns: Iterable[str] = ()) -> Catalog:
        """Index release tags by the commit they point at.

        Args:
            tags: Tags as listed by the repository.
            skip_patterns: Substrings that disqualify a tag.

        Returns:
            A new catalog without parse outcomes.
        """
        patterns = tuple(skip_patterns)
        by_commit: dict[str, list[str]] = {}
        skipped = 0
        for tag in tags:
            if not is_release_tag(tag.name, patterns):
                skipped += 1
                continue
            by_commit.setdefault(tag.target_id, []).append(tag.name)
        logger.debug(
            'catalog_built',
            release_tags=sum(len(names) for names in by_commit.values()),
            skipped_tags=skipped,
        )
        return cls(tags=MappingProxyType({sha: tuple(names) for sha, names in by_commit.items()}))

    def tags_for(self, commit_id: str) -> tuple[str, ...]:
        """Release tag names on ``commit_id``, possibly empty."""
        return self.tags.get(commit_id, ())

    def parse_all(self, commits: Iterable[RawCommit], parser: CommitParser) -> Catalog:
        """Parse every commit message and return a catalog holding the outcomes.

        The parser is pure, so outcomes do not depend on traversal
        order. The partitioner still consumes them in order.
        """
        outcomes: dict[str, ParseOutcome] = dict(self.outcomes)
        for commit in commits:
            try:
                outcomes[commit.id] = parser.parse(commit.message, sha=commit.id)
            except ParseError as exc:
                outcomes[commit.id] = exc
        return replace(self, outcomes=MappingProxyType(outcomes))

    def outcome_for(self, commit: RawCommit, parser: CommitParser) -> ParseOutcome:
        """Return the stored outcome for ``commit`` or parse it now."""
        stored = self.outcomes.get(commit.id)
        if stored is not None:
            return stored
        try:
            return parser.parse(commit.message, sha=commit.id)
        except ParseError as exc:
            return exc


__all__ = [
    'Catalog',
    'ParseOutcome',
    'is_release_tag',
]
