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

"""Group a newest-first commit walk into release groups.

The walk is a fold over :class:`PartitionState`. Every tagged commit
seals the entries collected so far and opens a group for its tag, so
commits *at and below* a tag belong to that tag::

    HEAD  C3  feat: add X        ─┐ Unreleased
          C2  fix: correct Y     ─┼─ v1.0   (tag on C2 seals Unreleased)
          C1  feat: add Z        ─┘

    → [Unreleased: C3], [v1.0: C2, C1]

Without ``all``, the walk stops at the first tag boundary past
``max_tags_count`` opened tags. Commits whose message does not parse
are recorded as skipped and never affect tag counting.

Usage::

    from journalkit.partition import PartitionOptions, partition

    result = partition(commits, catalog, parser, options=PartitionOptions(all=True))
    for group in result.groups:
        print(group.tag_name, len(group.entries))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from journalkit._types import RawCommit
from journalkit.catalog import Catalog
from journalkit.commit_parsing import CommitParser, ParsedEntry
from journalkit.errors import CatalogError, ParseError
from journalkit.logging import get_logger

logger = get_logger(__name__)

UNRELEASED = 'Unreleased'


@dataclass
class ReleaseGroup:
    """Entries belonging to one release.

    Attributes:
        tag_name: The tag name, or ``"Unreleased"``.
        date: Date of the tagged commit; the run date for Unreleased.
        entries: Parsed entries in traversal (newest-first) order.
        unreleased: ``True`` only for the sentinel group.
    """

    tag_name: str
    date: date
    entries: list[ParsedEntry] = field(default_factory=list)
    unreleased: bool = False


@dataclass(frozen=True)
class SkippedCommit:
    """A commit left out because its message does not parse."""

    commit: RawCommit
    error: ParseError


@dataclass(frozen=True)
class PartitionOptions:
    """Knobs for one walk.

    Attributes:
        max_tags_count: Release groups to open before stopping. Only
            applies when ``all`` is false.
        all: Walk the whole range regardless of ``max_tags_count``.
        skip_unreleased: Do not collect commits above the first tag.
        partial_on_error: On a repository read error mid-walk, return
            the groups sealed so far instead of raising.
    """

    max_tags_count: int = 1
    all: bool = False
    skip_unreleased: bool = False
    partial_on_error: bool = False


@dataclass
class PartitionState:
    """Accumulator threaded through :func:`step`."""

    current: ReleaseGroup
    entries: list[ParsedEntry] = field(default_factory=list)
    groups: list[ReleaseGroup] = field(default_factory=list)
    skipped: list[SkippedCommit] = field(default_factory=list)
    tags_opened: int = 0
    stopped: bool = False

    @classmethod
    def start(cls, today: date) -> PartitionState:
        """Initial state with the Unreleased sentinel as current group."""
        return cls(current=ReleaseGroup(tag_name=UNRELEASED, date=today, unreleased=True))

    def seal(self) -> None:
        """Close the current group if it collected anything."""
        if self.entries:
            self.current.entries = self.entries
            self.groups.append(self.current)
            self.entries = []


@dataclass(frozen=True)
class Partition:
    """Result of a walk.

    Attributes:
        groups: Release groups, newest first.
        skipped: Commits dropped by the grammar, in traversal order.
        complete: ``False`` when a read error cut the walk short and
            partial results were requested.
    """

    groups: list[ReleaseGroup]
    skipped: list[SkippedCommit] = field(default_factory=list)
    complete: bool = True


def _open_tags(
    state: PartitionState,
    index: int,
    commit: RawCommit,
    tags: tuple[str, ...],
    options: PartitionOptions,
) -> None:
    # Co-located tags: listed order, last one wins, each counts.
    for name in tags:
        state.seal()
        if not options.all and index > 0 and state.tags_opened >= options.max_tags_count:
            logger.debug('traversal_stopped', tag=name, commit=commit.short_id, tags_opened=state.tags_opened)
            state.stopped = True
            return
        state.tags_opened += 1
        state.current = ReleaseGroup(tag_name=name, date=commit.date)
        logger.debug('tag_opened', tag=name, commit=commit.short_id)


def step(
    state: PartitionState,
    index: int,
    commit: RawCommit,
    *,
    catalog: Catalog,
    parser: CommitParser,
    options: PartitionOptions,
) -> PartitionState:
    """Fold one commit into the state.

    Args:
        state: The accumulator; updated in place and returned.
        index: Zero-based position of ``commit`` in the walk.
        commit: The commit being visited.
        catalog: Release tags and optional pre-parsed outcomes.
        parser: Parser for messages without a stored outcome.
        options: Walk options.

    Returns:
        The same state object. ``state.stopped`` is set when the walk
        must end; the commit is then not collected.
    """
    tags = catalog.tags_for(commit.id)
    if tags:
        _open_tags(state, index, commit, tags, options)
        if state.stopped:
            return state

    if options.skip_unreleased and state.current.unreleased:
        return state

    outcome = catalog.outcome_for(commit, parser)
    if isinstance(outcome, ParseError):
        state.skipped.append(SkippedCommit(commit=commit, error=outcome))
        logger.warning('commit_skipped', commit=commit.short_id, code=outcome.code.value, reason=outcome.info.message)
    else:
        state.entries.append(outcome)
    return state


def partition(
    commits: Iterable[RawCommit],
    catalog: Catalog,
    parser: CommitParser,
    *,
    options: PartitionOptions | None = None,
    today: date | None = None,
) -> Partition:
    """Walk newest-first commits and group them by release tag.

    Args:
        commits: Commits in traversal order (most recent first). May be
            a lazy iterator that reads from the repository.
        catalog: Release tags by commit.
        parser: Commit message parser.
        options: Walk options (defaults: one release, not all).
        today: Date for the Unreleased group (defaults to today, UTC).

    Returns:
        The :class:`Partition`.

    Raises:
        CatalogError: If reading a commit fails and
            ``options.partial_on_error`` is false.
    """
    opts = options or PartitionOptions()
    state = PartitionState.start(today or datetime.now(timezone.utc).date())

    iterator: Iterator[RawCommit] = iter(commits)
    index = 0
    while not state.stopped:
        try:
            commit = next(iterator)
        except StopIteration:
            break
        except CatalogError as exc:
            if not opts.partial_on_error:
                raise
            logger.error('traversal_aborted', error=str(exc), groups_kept=len(state.groups))
            return Partition(groups=state.groups, skipped=state.skipped, complete=False)
        step(state, index, commit, catalog=catalog, parser=parser, options=opts)
        index += 1

    state.seal()
    logger.info(
        'partition_done',
        groups=len(state.groups),
        entries=sum(len(g.entries) for g in state.groups),
        skipped=len(state.skipped),
    )
    return Partition(groups=state.groups, skipped=state.skipped)


__all__ = [
    'Partition',
    'PartitionOptions',
    'PartitionState',
    'ReleaseGroup',
    'SkippedCommit',
    'UNRELEASED',
    'partition',
    'step',
]
