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

"""One journalkit run: read history, partition it, render it.

Flow::

    reader.list_tags()  ──→ Catalog.build(skip patterns)
    reader.resolve(range) ─→ [sha, ...]  (newest first)
         │
         ▼
    reader.commit(sha) (lazy) ─→ partition(...) ─→ Partition
         │
         ▼
    render_terminal / render_markdown

Usage::

    from journalkit.journal import Journal

    journal = Journal.open(Path('.'))
    journal.parse_log('v1.0..HEAD', all=True)
    journal.print_log(short=True)
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path

from rich.console import Console

from journalkit._types import RawCommit
from journalkit.backends.vcs import GitCLIReader, VersionControlReader
from journalkit.catalog import Catalog
from journalkit.commit_parsing import CommitMessageParser, ParsedEntry
from journalkit.config import JournalConfig, load_config, write_default_config
from journalkit.errors import E, JournalKitError
from journalkit.logging import bind_run, clear_run, get_logger
from journalkit.partition import Partition, PartitionOptions, partition
from journalkit.render import render_markdown, render_terminal

logger = get_logger(__name__)

# Written by `git commit -v`; git drops this line and everything below it.
SCISSORS = '# ------------------------ >8 ------------------------'


class Journal:
    """Changelog generation for one repository.

    Args:
        reader: Repository access.
        config: Validated settings.
        today: Date for the Unreleased group (defaults to today, UTC).
    """

    def __init__(
        self,
        reader: VersionControlReader,
        config: JournalConfig | None = None,
        *,
        today: date | None = None,
    ) -> None:
        """Initialize with a reader and configuration."""
        self.reader = reader
        self.config = config or JournalConfig()
        self.parser: CommitMessageParser = self.config.make_parser()
        self.today = today
        self.result: Partition | None = None

    @classmethod
    def open(cls, path: Path) -> Journal:
        """Create a journal for the git repository at ``path``.

        Loads ``.journalkit.toml`` from ``path`` when present.
        """
        return cls(GitCLIReader(path), load_config(path))

    def _walk(self, ids: list[str]) -> Iterator[RawCommit]:
        for commit_id in ids:
            yield self.reader.commit(commit_id)

    def parse_log(
        self,
        revision_range: str = 'HEAD',
        *,
        tag_skip_pattern: str | None = None,
        max_tags_count: int | None = None,
        all: bool = False,  # noqa: A002 - mirrors the --all flag
        skip_unreleased: bool | None = None,
        partial_on_error: bool = False,
    ) -> Partition:
        """Parse a revision range into release groups.

        Arguments left as ``None`` fall back to the configuration.

        Args:
            revision_range: A revision (``"HEAD"``) or range (``"v1..v2"``).
            tag_skip_pattern: Tags containing this are not releases.
            max_tags_count: Releases to walk unless ``all`` is set.
            all: Walk the whole range.
            skip_unreleased: Leave out commits above the newest tag.
            partial_on_error: Keep groups sealed before a read error.

        Returns:
            The :class:`Partition`, also kept on :attr:`result`.

        Raises:
            ResolutionError: If the range cannot be resolved.
            CatalogError: If the repository cannot be read.
        """
        skip_patterns = self.config.skip_patterns(tag_skip_pattern)
        options = PartitionOptions(
            max_tags_count=self.config.max_tags_count if max_tags_count is None else max_tags_count,
            all=all,
            skip_unreleased=self.config.skip_unreleased if skip_unreleased is None else skip_unreleased,
            partial_on_error=partial_on_error,
        )

        bind_run(revision_range=revision_range)
        try:
            catalog = Catalog.build(self.reader.list_tags(), skip_patterns=skip_patterns)
            ids = self.reader.resolve(revision_range)
            logger.info('parsing_log', commits=len(ids), skip_patterns=list(skip_patterns))
            self.result = partition(self._walk(ids), catalog, self.parser, options=options, today=self.today)
        finally:
            clear_run()
        return self.result

    def _groups(self) -> Partition:
        if self.result is None:
            raise RuntimeError('parse_log() must be called before rendering')
        return self.result

    def print_log(self, *, short: bool = True, console: Console | None = None) -> None:
        """Print the parsed log to the terminal."""
        render_terminal(self._groups().groups, self.config, short=short, console=console)

    def write_log(self, path: Path, *, short: bool = False) -> Path:
        """Write the parsed log as Markdown to ``path``.

        Raises:
            JournalKitError: If the file cannot be written.
        """
        text = render_markdown(self._groups().groups, self.config, short=short)
        try:
            path.write_text(text, encoding='utf-8')
        except OSError as exc:
            raise JournalKitError(
                code=E.OUTPUT_WRITE_FAILED,
                message=f'Failed to write {path}: {exc}',
            ) from exc
        logger.info('log_written', path=str(path))
        return path

    @staticmethod
    def verify(path: Path, config: JournalConfig | None = None) -> ParsedEntry:
        """Check a commit message file against the grammar.

        Git comment lines (starting with ``#``) are ignored, as is
        everything from the scissors line down, as git strips them when
        committing.

        Raises:
            JournalKitError: If the file cannot be read.
            ParseError: If the message is invalid.
        """
        try:
            text = path.read_text(encoding='utf-8')
        except OSError as exc:
            raise JournalKitError(
                code=E.VERIFY_READ_FAILED,
                message=f'Failed to read commit message file {path}: {exc}',
            ) from exc
        lines: list[str] = []
        for line in text.splitlines():
            if line.startswith(SCISSORS):
                break
            if not line.startswith('#'):
                lines.append(line)
        message = '\n'.join(lines)
        return (config or JournalConfig()).make_parser().parse(message)

    @staticmethod
    def setup(path: Path) -> Path:
        """Write the default configuration into ``path``."""
        return write_default_config(path)


__all__ = [
    'Journal',
]
