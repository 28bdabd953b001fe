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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass or protocol: no I/O, no
logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ParsedEntry:
    """A commit message split into its grammatical parts.

    Attributes:
        category: The summary category (e.g. ``"feat"``), always one of
            the categories the parser was configured with.
        subject: The summary text after ``category(component): `` with
            any issue prefix removed.
        component: The optional parenthesized qualifier, ``None`` when
            absent or empty.
        body: Body paragraphs in message order.
        footers: ``(key, value)`` pairs in message order. Repeated keys
            are kept as separate pairs.
        breaking: Whether the summary marker or a breaking footer was
            present.
        breaking_description: Value of the breaking footer, or the
            subject when only the summary marker was used.
        prefix: Leading issue token of the subject, verbatim
            (e.g. ``"[PROJ-12]"``).
        sha: The commit SHA the message belongs to, if known.
        raw: The original unparsed message.
    """

    category: str
    subject: str
    component: str | None = None
    body: tuple[str, ...] = ()
    footers: tuple[tuple[str, str], ...] = ()
    breaking: bool = False
    breaking_description: str = ''
    prefix: str | None = None
    sha: str = ''
    raw: str = ''

    @property
    def footer(self) -> dict[str, list[str]]:
        """Footers as an insertion-ordered mapping of key to values.

        >>> ParsedEntry('fix', 'x', footers=(('Refs', '1'), ('Refs', '2'))).footer
        {'Refs': ['1', '2']}
        """
        grouped: dict[str, list[str]] = {}
        for key, value in self.footers:
            grouped.setdefault(key, []).append(value)
        return grouped


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser receives a full commit message and returns a
    :class:`ParsedEntry`, or raises
    :class:`~journalkit.errors.ParseError` when the summary line
    does not follow the grammar.

    Built-in implementation:

    - :class:`~journalkit.commit_parsing.CommitMessageParser`
    """

    def parse(self, message: str, sha: str = '') -> ParsedEntry:
        """Parse a commit message.

        Args:
            message: The full commit message.
            sha: The commit SHA (for reference).

        Returns:
            The parsed entry.

        Raises:
            ParseError: If the summary line is invalid.
        """
        ...
