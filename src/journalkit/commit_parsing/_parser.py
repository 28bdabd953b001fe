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

"""Commit message parser built from the grammar matchers.

Only the summary line can make a message invalid. Lines that do not
fit the body or footer rules are kept as body text.

Pure implementation: no I/O, no logging, no side effects.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from journalkit.commit_parsing._grammar import (
    DEFAULT_BREAKING_FOOTER_KEY,
    DEFAULT_BREAKING_MARKER,
    DEFAULT_PREFIX_PATTERN,
    extract_prefix,
    footer_pattern,
    match_summary,
    normalize_footer_key,
    split_footer_run,
    split_paragraphs,
    split_summary,
)
from journalkit.commit_parsing._types import ParsedEntry
from journalkit.errors import UnknownCategoryError

# Conventional-commit style categories, in changelog display order.
DEFAULT_CATEGORIES: tuple[str, ...] = (
    'feat',
    'fix',
    'perf',
    'refactor',
    'docs',
    'style',
    'test',
    'build',
    'ci',
    'chore',
    'revert',
)


class CommitMessageParser:
    r"""Parser for ``category(component)!: subject`` commit messages.

    The category set, breaking marker, breaking footer key and prefix
    pattern are all injected, so two parsers with the same settings
    always produce equal entries for the same message.

    Example::

        parser = CommitMessageParser(['feat', 'fix'])

        entry = parser.parse('feat(auth): add OAuth2')
        assert entry.category == 'feat'
        assert entry.component == 'auth'

        msg = 'fix: drop v1 API\n\nBREAKING CHANGE: v1 clients must upgrade'
        entry = parser.parse(msg)
        assert entry.breaking is True

        parser.parse('chore: bump deps')  # raises UnknownCategoryError
    """

    def __init__(
        self,
        categories: Iterable[str] = DEFAULT_CATEGORIES,
        *,
        breaking_marker: str = DEFAULT_BREAKING_MARKER,
        breaking_footer_key: str = DEFAULT_BREAKING_FOOTER_KEY,
        prefix_pattern: str | None = DEFAULT_PREFIX_PATTERN,
    ) -> None:
        """Initialize the parser.

        Args:
            categories: Allowed categories, in display order. Matching
                is case-sensitive.
            breaking_marker: Character that marks a breaking change when
                placed right before the ``: `` separator.
            breaking_footer_key: Footer key that marks a breaking change.
            prefix_pattern: Regex for a leading issue token in the
                subject, or ``None`` to keep subjects untouched.
        """
        self.categories: tuple[str, ...] = tuple(dict.fromkeys(categories))
        if not self.categories:
            raise ValueError('At least one category is required')
        self._category_set = frozenset(self.categories)
        self._marker = breaking_marker
        self._breaking_key = normalize_footer_key(breaking_footer_key)
        self._footer_re = footer_pattern(breaking_footer_key)
        self._prefix_re: re.Pattern[str] | None = re.compile(prefix_pattern) if prefix_pattern else None

    def parse(self, message: str, sha: str = '') -> ParsedEntry:
        """Parse a full commit message.

        Args:
            message: The raw commit message.
            sha: The commit SHA (for reference).

        Returns:
            The parsed entry.

        Raises:
            InvalidSummaryError: If the summary line is malformed.
            UnknownCategoryError: If the category is not configured.
        """
        summary_line, rest = split_summary(message)
        summary = match_summary(summary_line, marker=self._marker)
        if summary.category not in self._category_set:
            raise UnknownCategoryError(summary.category, self.categories)

        prefix, subject = extract_prefix(summary.subject, self._prefix_re)

        body: list[str] = []
        footers: list[tuple[str, str]] = []
        for paragraph in split_paragraphs(rest):
            lines, block = split_footer_run(paragraph, self._footer_re)
            if lines:
                body.append('\n'.join(lines))
            footers.extend(block)

        breaking = summary.breaking
        breaking_description = ''
        for key, value in footers:
            if normalize_footer_key(key) == self._breaking_key:
                breaking = True
                breaking_description = breaking_description or value
        if breaking and not breaking_description:
            breaking_description = subject

        return ParsedEntry(
            category=summary.category,
            subject=subject,
            component=summary.component,
            body=tuple(body),
            footers=tuple(footers),
            breaking=breaking,
            breaking_description=breaking_description,
            prefix=prefix,
            sha=sha,
            raw=message,
        )
