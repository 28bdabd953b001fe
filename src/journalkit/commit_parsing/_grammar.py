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

r"""Line and paragraph matchers for the commit message grammar.

A commit message is read as::

    <category>[(<component>)][!]: [<prefix> ]<subject>
    <blank line>
    <body paragraph>
    <blank line>
    <Footer-Key>: <value>
      <indented continuation>

Each rule is a separate matcher so it can be tested on its own:

- :func:`split_summary` picks the summary line (first non-blank line).
- :func:`match_summary` walks the summary with small cursor matchers
  (category, component, marker, separator, subject). Only this rule
  can fail; it raises :class:`~journalkit.errors.InvalidSummaryError`.
- :func:`extract_prefix` strips a leading issue token from the subject.
- :func:`split_paragraphs` groups the remaining lines into paragraphs.
- :func:`split_footer_run` separates a trailing footer run from body
  lines; :func:`match_footer_block` decides whether a paragraph is a footer
  block and returns its ``(key, value)`` pairs.

Pure implementation: depends only on ``re`` and the error types.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from journalkit.errors import InvalidSummaryError

DEFAULT_BREAKING_MARKER = '!'
DEFAULT_BREAKING_FOOTER_KEY = 'BREAKING CHANGE'

# "[PROJ-123]" or "PROJ-123".
DEFAULT_PREFIX_PATTERN = r'\[[A-Z][A-Z0-9]*-\d+\]|[A-Z][A-Z0-9]*-\d+'

_SEPARATOR = ': '


@dataclass(frozen=True)
class Summary:
    """The pieces of a valid summary line."""

    category: str
    subject: str
    component: str | None = None
    breaking: bool = False


def split_summary(message: str) -> tuple[str, list[str]]:
    """Return the summary line and every line after it.

    Raises:
        InvalidSummaryError: If the message has no non-blank line.
    """
    lines = message.splitlines()
    for index, line in enumerate(lines):
        if line.strip():
            return line.strip(), lines[index + 1 :]
    raise InvalidSummaryError('Commit message is empty')


def _match_category(line: str, pos: int, marker: str) -> tuple[str, int]:
    stop = set(' \t():') | set(marker)
    end = pos
    while end < len(line) and line[end] not in stop:
        end += 1
    if end == pos:
        raise InvalidSummaryError(
            f'Missing category in summary line: {line!r}',
            hint="Start the summary with a category, e.g. 'fix: ...'.",
        )
    return line[pos:end], end


def _match_component(line: str, pos: int) -> tuple[str | None, int]:
    if not line.startswith('(', pos):
        return None, pos
    close = line.find(')', pos + 1)
    if close == -1 or '(' in line[pos + 1 : close]:
        raise InvalidSummaryError(f'Unbalanced component parentheses in summary line: {line!r}')
    component = line[pos + 1 : close].strip()
    return component or None, close + 1


def _match_marker(line: str, pos: int, marker: str) -> tuple[bool, int]:
    if marker and line.startswith(marker, pos):
        return True, pos + len(marker)
    return False, pos


def _match_separator(line: str, pos: int) -> int:
    if line.startswith(_SEPARATOR, pos):
        return pos + len(_SEPARATOR)
    if line[pos:] == ':':
        # "feat:" with nothing after it; reported as a missing subject.
        return len(line)
    raise InvalidSummaryError(
        f"Missing ': ' separator after category in summary line: {line!r}",
        hint="Separate category and subject with a colon and a space, e.g. 'feat: add X'.",
    )


def match_summary(line: str, *, marker: str = DEFAULT_BREAKING_MARKER) -> Summary:
    """Match ``<category>[(<component>)][<marker>]: <subject>``.

    Args:
        line: The summary line.
        marker: The breaking-change marker character.

    Returns:
        The matched :class:`Summary`. The category is *not* checked
        against any allowlist here.

    Raises:
        InvalidSummaryError: If any part of the summary is missing.
    """
    category, pos = _match_category(line, 0, marker)
    component, pos = _match_component(line, pos)
    breaking, pos = _match_marker(line, pos, marker)
    pos = _match_separator(line, pos)
    subject = line[pos:].strip()
    if not subject:
        raise InvalidSummaryError(f'Empty subject in summary line: {line!r}')
    return Summary(category=category, subject=subject, component=component, breaking=breaking)


def extract_prefix(subject: str, pattern: re.Pattern[str] | None) -> tuple[str | None, str]:
    """Split a leading issue token off the subject.

    The token is only taken when it is followed by whitespace and
    more text, so a subject never becomes empty.

    >>> extract_prefix('[PROJ-1] fix it', re.compile(DEFAULT_PREFIX_PATTERN))
    ('[PROJ-1]', 'fix it')
    """
    if pattern is None:
        return None, subject
    match = pattern.match(subject)
    if not match or match.end() == 0:
        return None, subject
    rest = subject[match.end() :]
    if not rest[:1].isspace() or not rest.strip():
        return None, subject
    return match.group(0), rest.strip()


def split_paragraphs(lines: list[str]) -> list[list[str]]:
    """Group lines into paragraphs separated by blank lines.

    Trailing whitespace is removed from each line; blank lines never
    appear inside a returned paragraph.
    """
    paragraphs: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if line.strip():
            current.append(line.rstrip())
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def footer_pattern(breaking_key: str = DEFAULT_BREAKING_FOOTER_KEY) -> re.Pattern[str]:
    """Build the footer line regex for a given breaking-change key.

    Keys are letters and hyphens. The breaking key may also be
    written with spaces and in any case (``Breaking change``).
    """
    alternatives = [r'[A-Za-z][A-Za-z-]*']
    words = [re.escape(word) for word in re.split(r'[\s-]+', breaking_key.strip()) if word]
    if words:
        alternatives.insert(0, '(?i:' + r'[ -]'.join(words) + ')')
    return re.compile(r'^(?P<key>' + '|'.join(alternatives) + r'):[ \t]+(?P<value>\S.*)$')


def normalize_footer_key(key: str) -> str:
    """Fold a footer key for comparison (case and space/hyphen)."""
    return ' '.join(re.split(r'[\s-]+', key.strip())).casefold()


def match_footer_block(
    paragraph: list[str],
    pattern: re.Pattern[str],
) -> list[tuple[str, str]] | None:
    """Parse a paragraph as a footer block.

    The first line must be a footer line. Every following line must
    either start a new footer or be an indented continuation of the
    previous value.

    Returns:
        The ``(key, value)`` pairs, or ``None`` when the paragraph is
        ordinary body text.
    """
    footers: list[tuple[str, str]] = []
    key = ''
    value_lines: list[str] = []
    for line in paragraph:
        match = pattern.match(line)
        if match:
            if key:
                footers.append((key, '\n'.join(value_lines).strip()))
            key = match.group('key')
            value_lines = [match.group('value')]
        elif key and line[:1] in (' ', '\t'):
            value_lines.append(line.strip())
        else:
            return None
    if key:
        footers.append((key, '\n'.join(value_lines).strip()))
    return footers


def split_footer_run(
    paragraph: list[str],
    pattern: re.Pattern[str],
) -> tuple[list[str], list[tuple[str, str]]]:
    """Split a paragraph into leading body lines and a trailing footer run.

    The run starts at the first footer line from which every remaining
    line is a footer or a continuation, so ``Explain.`` followed by
    ``Closes: #12`` yields one body line and one footer.

    >>> split_footer_run(['Explain.', 'Closes: #12'], footer_pattern())
    (['Explain.'], [('Closes', '#12')])
    """
    for start, line in enumerate(paragraph):
        if not pattern.match(line):
            continue
        footers = match_footer_block(paragraph[start:], pattern)
        if footers is not None:
            return paragraph[:start], footers
    return paragraph, []


__all__ = [
    'DEFAULT_BREAKING_FOOTER_KEY',
    'DEFAULT_BREAKING_MARKER',
    'DEFAULT_PREFIX_PATTERN',
    'Summary',
    'extract_prefix',
    'footer_pattern',
    'match_footer_block',
    'match_summary',
    'normalize_footer_key',
    'split_paragraphs',
    'split_footer_run',
    'split_summary',
]
