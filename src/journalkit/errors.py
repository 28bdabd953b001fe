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

"""Structured error system for journalkit.

Every error has a unique ``JK-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix.

Code categories::

    JK-CONFIG-*       Configuration errors
    JK-PARSE-*        Commit message grammar violations (per commit)
    JK-VCS-*          Repository access errors
    JK-VERIFY-*       Commit message file verification errors
    JK-SETUP-*        Default configuration setup errors

Grammar violations are the only non-fatal family: the history
partitioner converts them into skipped commits. Everything else
propagates to the caller.

Usage::

    from journalkit.errors import E, JournalKitError

    raise JournalKitError(
        code=E.CONFIG_INVALID_KEY,
        message="Unknown key 'categorys' in .journalkit.toml",
        hint="Did you mean 'categories'?",
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.text import Text


class ErrorCode(str, Enum):
    """Enumeration of all journalkit diagnostic codes."""

    # Configuration
    CONFIG_INVALID_KEY = 'JK-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'JK-CONFIG-INVALID-VALUE'
    CONFIG_PARSE_ERROR = 'JK-CONFIG-PARSE-ERROR'

    # Commit message grammar
    PARSE_INVALID_SUMMARY = 'JK-PARSE-INVALID-SUMMARY'
    PARSE_UNKNOWN_CATEGORY = 'JK-PARSE-UNKNOWN-CATEGORY'

    # Repository access
    VCS_RESOLUTION = 'JK-VCS-RESOLUTION'
    VCS_CATALOG = 'JK-VCS-CATALOG'

    # Commands
    VERIFY_READ_FAILED = 'JK-VERIFY-READ-FAILED'
    SETUP_CONFIG_EXISTS = 'JK-SETUP-CONFIG-EXISTS'
    OUTPUT_WRITE_FAILED = 'JK-OUTPUT-WRITE-FAILED'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``JK-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class JournalKitError(Exception):
    """Base exception for all journalkit errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class ParseError(JournalKitError):
    """A commit message violates the summary line grammar.

    Callers decide whether to skip the commit or abort; the two
    subclasses let them tell a malformed summary from a category
    that is simply not configured.
    """


class InvalidSummaryError(ParseError):
    """The summary line is missing a category, the separator, or a subject."""

    def __init__(self, message: str, hint: str = '') -> None:
        """Initialize with a description of the malformed summary."""
        super().__init__(E.PARSE_INVALID_SUMMARY, message, hint)


class UnknownCategoryError(ParseError):
    """The summary category is not one of the configured categories.

    Attributes:
        category: The category token found in the summary line.
    """

    def __init__(self, category: str, allowed: tuple[str, ...]) -> None:
        """Initialize with the offending category and the allowed set."""
        self.category = category
        super().__init__(
            E.PARSE_UNKNOWN_CATEGORY,
            f"Unknown category '{category}'",
            hint=f'Allowed categories: {", ".join(allowed)}.',
        )


class ResolutionError(JournalKitError):
    """A revision range could not be resolved to commits."""

    def __init__(self, revision_range: str, detail: str = '') -> None:
        """Initialize with the unresolvable revision range."""
        self.revision_range = revision_range
        message = f"Could not resolve revision range '{revision_range}'"
        if detail:
            message = f'{message}: {detail}'
        super().__init__(
            E.VCS_RESOLUTION,
            message,
            hint="Check the range with 'git rev-list <range>'.",
        )


class CatalogError(JournalKitError):
    """The repository could not be read while walking history."""

    def __init__(self, message: str, hint: str = '') -> None:
        """Initialize with a description of the read failure."""
        super().__init__(E.VCS_CATALOG, message, hint)


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='The .journalkit.toml file contains a key journalkit does not know.',
        hint="Run 'journalkit setup' in an empty directory to see every supported key.",
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A .journalkit.toml value has the wrong type or an invalid value.',
        hint='Compare the value against the defaults written by journalkit setup.',
    ),
    E.PARSE_INVALID_SUMMARY: ErrorInfo(
        code=E.PARSE_INVALID_SUMMARY,
        message='The first line of the commit message is not "<category>[(<component>)]: <subject>".',
        hint="Example: 'fix(parser): handle empty footers'.",
    ),
    E.PARSE_UNKNOWN_CATEGORY: ErrorInfo(
        code=E.PARSE_UNKNOWN_CATEGORY,
        message='The commit category is not listed in the configured categories.',
        hint="Add it to 'categories' in .journalkit.toml or reword the commit.",
    ),
    E.VCS_RESOLUTION: ErrorInfo(
        code=E.VCS_RESOLUTION,
        message='The revision range does not name any commits in this repository.',
        hint="Use a single revision ('HEAD') or a range ('v1.0..HEAD').",
    ),
    E.VCS_CATALOG: ErrorInfo(
        code=E.VCS_CATALOG,
        message='A commit or tag could not be read from the repository.',
        hint="Run 'git fsck' to check the repository for corrupted objects.",
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='The .journalkit.toml file could not be read or is not valid TOML.',
        hint='Fix the syntax error reported with the line and column.',
    ),
    E.VERIFY_READ_FAILED: ErrorInfo(
        code=E.VERIFY_READ_FAILED,
        message='A commit message file passed to journalkit verify could not be read.',
        hint='In a commit-msg hook, pass the path git gives as the first argument.',
    ),
    E.SETUP_CONFIG_EXISTS: ErrorInfo(
        code=E.SETUP_CONFIG_EXISTS,
        message='journalkit setup never overwrites an existing .journalkit.toml.',
        hint='Delete or rename the file to regenerate the defaults.',
    ),
    E.OUTPUT_WRITE_FAILED: ErrorInfo(
        code=E.OUTPUT_WRITE_FAILED,
        message='An output file could not be written.',
        hint='Check that the target directory exists and is writable.',
    ),
}


# Per-commit failures: the partitioner skips the commit and carries on.
_PER_COMMIT = frozenset({E.PARSE_INVALID_SUMMARY, E.PARSE_UNKNOWN_CATEGORY})


def explain(code: str) -> str | None:
    """Describe an error code for ``journalkit explain``.

    Codes are matched case-insensitively.

    >>> print(explain('jk-vcs-catalog').splitlines()[0])
    JK-VCS-CATALOG: A commit or tag could not be read from the repository.

    Returns:
        The explanation, or ``None`` for an unknown code.
    """
    try:
        error_code = ErrorCode(code.strip().upper())
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{error_code.value}: No detailed explanation available.'
    lines = [f'{error_code.value}: {info.message}']
    if error_code in _PER_COMMIT:
        lines.append('  The commit is skipped; the rest of the history is still processed.')
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: JournalKitError, *, file: TextIO | None = None) -> None:
    """Print an error rustc-style, colored when the stream is a terminal.

    Output format::

        error[JK-VCS-RESOLUTION]: Could not resolve revision range 'nope'
          |
          = hint: Check the range with 'git rev-list <range>'.

    Args:
        exc: The error to print.
        file: Target stream (default: ``sys.stderr``).
    """
    out = file or sys.stderr
    code = f'error[{exc.code.value}]'

    if not out.isatty():
        lines = [f'{code}: {exc.info.message}']
        if exc.hint:
            lines += ['  |', f'  = hint: {exc.hint}']
        out.write('\n'.join(lines) + '\n\n')
        return

    console = Console(file=out, highlight=False)
    console.print(Text.assemble((code, 'bold red'), (f': {exc.info.message}', 'bold')))
    if exc.hint:
        console.print(Text('  |', style='dim'))
        console.print(Text.assemble(('  = ', 'dim'), ('hint', 'cyan'), f': {exc.hint}'))
    console.print()


__all__ = [
    'CatalogError',
    'E',
    'ERRORS',
    'ErrorCode',
    'ErrorInfo',
    'InvalidSummaryError',
    'JournalKitError',
    'ParseError',
    'ResolutionError',
    'UnknownCategoryError',
    'explain',
    'render_error',
]
