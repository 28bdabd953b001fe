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

r"""Commit message parsing.

Parses a commit message into a :class:`ParsedEntry`::

    category(component)!: [PROJ-12] subject

    Body paragraph.

    Reviewed-by: Jane
    BREAKING CHANGE: what breaks

Usage::

    from journalkit.commit_parsing import (
        CommitMessageParser,
        ParsedEntry,
        parse_commit_message,
    )

    entry = parse_commit_message('feat(auth): add OAuth2')
    assert entry.category == 'feat'
    assert entry.component == 'auth'

    parser = CommitMessageParser(['Added', 'Fixed'])
    entry = parser.parse('Fixed: crash on empty input')
    assert entry.category == 'Fixed'

Failures raise :class:`~journalkit.errors.InvalidSummaryError` or
:class:`~journalkit.errors.UnknownCategoryError`, both subclasses of
:class:`~journalkit.errors.ParseError`.
"""

from journalkit.commit_parsing._grammar import (
    DEFAULT_BREAKING_FOOTER_KEY,
    DEFAULT_BREAKING_MARKER,
    DEFAULT_PREFIX_PATTERN,
)
from journalkit.commit_parsing._parser import DEFAULT_CATEGORIES, CommitMessageParser
from journalkit.commit_parsing._types import CommitParser, ParsedEntry

# Module-level singleton for convenience.
_DEFAULT_PARSER = CommitMessageParser()


def parse_commit_message(message: str, sha: str = '') -> ParsedEntry:
    """Parse a commit message with the default categories.

    Convenience wrapper around :meth:`CommitMessageParser.parse`.

    Args:
        message: The full commit message.
        sha: The commit SHA (for reference).

    Returns:
        The parsed entry.

    Raises:
        ParseError: If the summary line is invalid.
    """
    return _DEFAULT_PARSER.parse(message, sha=sha)


__all__ = [
    'CommitMessageParser',
    'CommitParser',
    'DEFAULT_BREAKING_FOOTER_KEY',
    'DEFAULT_BREAKING_MARKER',
    'DEFAULT_CATEGORIES',
    'DEFAULT_PREFIX_PATTERN',
    'ParsedEntry',
    'parse_commit_message',
]
