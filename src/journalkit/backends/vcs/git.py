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

"""Git reader backend for journalkit.

The :class:`GitCLIReader` implements the
:class:`~journalkit.backends.vcs.VersionControlReader` protocol by
delegating to ``git`` via :func:`run_command`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from journalkit._types import RawCommit, Tag
from journalkit.backends._run import CommandResult, TimeoutExpired, run_command
from journalkit.errors import CatalogError, ResolutionError
from journalkit.logging import get_logger

log = get_logger('journalkit.backends.git')

# SHA, committer timestamp, raw message; NUL separated.
_COMMIT_FORMAT = '--format=%H%x00%ct%x00%B'

# Tag name, object, peeled object (empty for lightweight tags).
_TAG_FORMAT = '--format=%(refname:strip=2)%00%(objectname)%00%(*objectname)'


class GitCLIReader:
    """Default :class:`~journalkit.backends.vcs.VersionControlReader` using ``git``.

    Args:
        repo_root: Path to the git repository (or any directory inside it).
    """

    def __init__(self, repo_root: Path) -> None:
        """Initialize with the git repository root path."""
        self._root = repo_root

    def _git(self, *args: str) -> CommandResult:
        """Run a git command in the repository.

        Raises:
            CatalogError: If git cannot be started (not installed, missing
                repository directory) or does not finish in time.
        """
        try:
            return run_command(['git', *args], cwd=self._root)
        except TimeoutExpired as exc:
            raise CatalogError(
                f'git {args[0]} timed out after {exc.timeout}s in {self._root}',
                hint='Retry on a smaller revision range.',
            ) from exc
        except OSError as exc:
            raise CatalogError(
                f'Could not run git in {self._root}: {exc}',
                hint='Check that git is installed and that -C points at a repository.',
            ) from exc

    def resolve(self, revision_range: str) -> list[str]:
        """Return commit SHAs in ``revision_range``, newest first (``git rev-list``)."""
        if not revision_range.strip() or revision_range.startswith('-'):
            raise ResolutionError(revision_range, 'not a revision')
        result = self._git('rev-list', revision_range, '--')
        if not result.ok:
            raise ResolutionError(revision_range, result.stderr.strip())
        ids = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        log.debug('range_resolved', revision_range=revision_range, commits=len(ids))
        return ids

    def commit(self, commit_id: str) -> RawCommit:
        """Read one commit's SHA, committer time and full message."""
        result = self._git('show', '--no-patch', '--no-show-signature', _COMMIT_FORMAT, commit_id)
        if not result.ok:
            raise CatalogError(f'Could not read commit {commit_id}: {result.stderr.strip()}')
        parts = result.stdout.split('\x00', 2)
        if len(parts) != 3:
            raise CatalogError(f'Unexpected git output for commit {commit_id}')
        sha, timestamp, message = parts
        try:
            when = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
        except ValueError as exc:
            raise CatalogError(f'Invalid timestamp {timestamp!r} for commit {commit_id}') from exc
        return RawCommit(id=sha.strip(), message=message, timestamp=when)

    def list_tags(self) -> list[Tag]:
        """Return annotated and lightweight tags, peeled to commits."""
        result = self._git('for-each-ref', _TAG_FORMAT, 'refs/tags')
        if not result.ok:
            raise CatalogError(f'Could not list tags: {result.stderr.strip()}')
        tags: list[Tag] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            name, target, peeled = line.split('\x00')
            tags.append(Tag(target_id=peeled or target, name=name))
        log.debug('tags_listed', count=len(tags))
        return tags
