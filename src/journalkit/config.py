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

"""Configuration reader for journalkit.

Reads ``.journalkit.toml`` from the repository root and returns a
validated :class:`JournalConfig`. A missing file means "all defaults".

Validation pipeline::

    .journalkit.toml
         │
         ▼
    1. Unknown key detection   → JK-CONFIG-INVALID-KEY  ("Did you mean ...?")
         │
         ▼
    2. Type check each value   → JK-CONFIG-INVALID-VALUE
         │
         ▼
    3. Value checks            → JK-CONFIG-INVALID-VALUE
       (non-empty categories, single-char marker, compilable regex)
         │
         ▼
    JournalConfig()            ← frozen dataclass, ready to use

Supported keys::

    categories          = ["feat", "fix", ...]  # allowed summary categories, display order
    tag_skip_pattern    = "rc"                  # tags containing this are not releases
    excluded_tags       = ["internal"]          # more skip substrings
    breaking_marker     = "!"                   # feat!: ...
    breaking_footer_key = "BREAKING CHANGE"
    prefix_pattern      = "..."                 # issue token regex, "" disables
    max_tags_count      = 1                     # releases shown without --all
    skip_unreleased     = false
    colored_output      = true
    show_prefix         = false
    show_footers        = true
"""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from journalkit.commit_parsing import (
    DEFAULT_BREAKING_FOOTER_KEY,
    DEFAULT_BREAKING_MARKER,
    DEFAULT_CATEGORIES,
    DEFAULT_PREFIX_PATTERN,
    CommitMessageParser,
)
from journalkit.errors import E, JournalKitError
from journalkit.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = '.journalkit.toml'

VALID_KEYS: frozenset[str] = frozenset({
    'breaking_footer_key',
    'breaking_marker',
    'categories',
    'colored_output',
    'excluded_tags',
    'max_tags_count',
    'prefix_pattern',
    'show_footers',
    'show_prefix',
    'skip_unreleased',
    'tag_skip_pattern',
})

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'breaking_footer_key': str,
    'breaking_marker': str,
    'categories': list,
    'colored_output': bool,
    'excluded_tags': list,
    'max_tags_count': int,
    'prefix_pattern': str,
    'show_footers': bool,
    'show_prefix': bool,
    'skip_unreleased': bool,
    'tag_skip_pattern': str,
}


@dataclass(frozen=True)
class JournalConfig:
    """Validated configuration for a journalkit run.

    Attributes:
        categories: Allowed summary categories, in display order.
        tag_skip_pattern: Tags whose name contains this substring are
            not release boundaries. Empty means no tag is skipped.
        excluded_tags: Additional skip substrings.
        breaking_marker: Summary marker for breaking changes.
        breaking_footer_key: Footer key for breaking changes.
        prefix_pattern: Regex for a leading issue token; empty disables.
        max_tags_count: Number of releases walked without ``--all``.
        skip_unreleased: Leave out commits newer than the newest tag.
        colored_output: Color terminal output.
        show_prefix: Show issue prefixes in rendered entries.
        show_footers: Show footers in the detailed output.
        config_path: The file that was loaded, if any.
    """

    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    tag_skip_pattern: str = ''
    excluded_tags: tuple[str, ...] = ()
    breaking_marker: str = DEFAULT_BREAKING_MARKER
    breaking_footer_key: str = DEFAULT_BREAKING_FOOTER_KEY
    prefix_pattern: str = DEFAULT_PREFIX_PATTERN
    max_tags_count: int = 1
    skip_unreleased: bool = False
    colored_output: bool = True
    show_prefix: bool = False
    show_footers: bool = True
    config_path: Path | None = None

    def skip_patterns(self, override: str | None = None) -> tuple[str, ...]:
        """Non-empty tag skip substrings.

        Args:
            override: Replaces ``tag_skip_pattern`` when not ``None``
                (e.g. from the command line).
        """
        primary = self.tag_skip_pattern if override is None else override
        return tuple(p for p in (primary, *self.excluded_tags) if p)

    def make_parser(self) -> CommitMessageParser:
        """Build the commit message parser these settings describe."""
        return CommitMessageParser(
            self.categories,
            breaking_marker=self.breaking_marker,
            breaking_footer_key=self.breaking_footer_key,
            prefix_pattern=self.prefix_pattern or None,
        )


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _invalid(key: str, message: str, hint: str = '') -> JournalKitError:
    return JournalKitError(
        code=E.CONFIG_INVALID_VALUE,
        message=f"'{key}' {message}",
        hint=hint or f'Check the value of {key} in {CONFIG_FILENAME}.',
    )


def _validate_value_type(key: str, value: Any) -> None:  # noqa: ANN401 - dynamic config values
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    # bool is an int subclass; "max_tags_count = true" is a mistake.
    if isinstance(value, bool) and expected is int:
        raise _invalid(key, 'must be int, got bool')
    if not isinstance(value, expected):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise _invalid(key, f'must be {type_name}, got {type(value).__name__}')


def _validate_string_list(key: str, items: list[object]) -> tuple[str, ...]:
    for item in items:
        if not isinstance(item, str) or not item:
            raise _invalid(key, f'must contain non-empty strings, got {item!r}')
    return tuple(items)  # type: ignore[arg-type]


def _validate_categories(items: list[object]) -> tuple[str, ...]:
    categories = _validate_string_list('categories', items)
    if not categories:
        raise _invalid('categories', 'must not be empty')
    duplicates = sorted({c for c in categories if categories.count(c) > 1})
    if duplicates:
        raise _invalid('categories', f'contains duplicates: {", ".join(duplicates)}')
    for category in categories:
        if re.search(r'[\s():]', category):
            raise _invalid('categories', f'entry {category!r} may not contain spaces, parentheses or colons')
    return categories


def _validate_raw(raw: dict[str, Any]) -> dict[str, Any]:  # noqa: ANN401 - dynamic config values
    """Check keys, types and values; return constructor kwargs."""
    for key in raw:
        if key not in VALID_KEYS:
            suggestion = _suggest_key(key)
            raise JournalKitError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=f"Did you mean '{suggestion}'?" if suggestion else 'Check the journalkit docs for valid keys.',
            )

    for key, value in raw.items():
        _validate_value_type(key, value)

    kwargs: dict[str, Any] = dict(raw)  # noqa: ANN401
    if 'categories' in raw:
        kwargs['categories'] = _validate_categories(raw['categories'])
    if 'excluded_tags' in raw:
        kwargs['excluded_tags'] = _validate_string_list('excluded_tags', raw['excluded_tags'])
    if 'breaking_marker' in raw and len(raw['breaking_marker']) != 1:
        raise _invalid('breaking_marker', 'must be a single character')
    marker = raw.get('breaking_marker', DEFAULT_BREAKING_MARKER)
    for category in kwargs.get('categories', DEFAULT_CATEGORIES):
        if marker in category:
            raise _invalid('categories', f'entry {category!r} contains the breaking marker {marker!r}')
    if 'breaking_footer_key' in raw and not raw['breaking_footer_key'].strip():
        raise _invalid('breaking_footer_key', 'must not be empty')
    if raw.get('prefix_pattern'):
        try:
            re.compile(raw['prefix_pattern'])
        except re.error as exc:
            raise _invalid('prefix_pattern', f'is not a valid regular expression: {exc}') from exc
    if raw.get('max_tags_count', 0) < 0:
        raise _invalid('max_tags_count', 'must be zero or greater')
    return kwargs


def parse_config(text: str, *, path: Path | None = None) -> JournalConfig:
    """Parse and validate configuration from TOML text.

    Args:
        text: The TOML document.
        path: Where the text came from (recorded and used in messages).

    Returns:
        A validated :class:`JournalConfig`.

    Raises:
        JournalKitError: If the text is not TOML or holds invalid config.
    """
    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise JournalKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {path or CONFIG_FILENAME}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401
    return JournalConfig(**_validate_raw(raw), config_path=path)


def load_config(repo_root: Path) -> JournalConfig:
    """Load and validate ``.journalkit.toml`` from a repository root.

    Args:
        repo_root: Directory containing ``.journalkit.toml``.

    Returns:
        A validated :class:`JournalConfig`; defaults when the file is
        missing.

    Raises:
        JournalKitError: If the file cannot be read or is invalid.
    """
    config_path = repo_root / CONFIG_FILENAME
    if not config_path.is_file():
        logger.debug('no_journalkit_config', path=str(config_path))
        return JournalConfig()

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise JournalKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    config = parse_config(text, path=config_path)
    logger.info('config_loaded', path=str(config_path))
    return config


def default_config_document() -> tomlkit.TOMLDocument:
    """Build the commented default ``.journalkit.toml`` document."""
    defaults = JournalConfig()
    doc = tomlkit.document()
    doc.add(tomlkit.comment('journalkit configuration'))
    doc.add(tomlkit.nl())

    doc.add(tomlkit.comment('Allowed summary categories, in changelog display order'))
    doc.add('categories', tomlkit.item(list(defaults.categories)).multiline(True))
    doc.add(tomlkit.comment('Tags whose name contains this substring are not treated as releases, e.g. "rc"'))
    doc.add('tag_skip_pattern', defaults.tag_skip_pattern)
    doc.add(tomlkit.comment('Further substrings that exclude tags, e.g. ["internal"]'))
    doc.add('excluded_tags', tomlkit.array())
    doc.add(tomlkit.comment('Marker after the category that flags a breaking change: feat!: ...'))
    doc.add('breaking_marker', defaults.breaking_marker)
    doc.add(tomlkit.comment('Footer key that flags a breaking change'))
    doc.add('breaking_footer_key', defaults.breaking_footer_key)
    doc.add(tomlkit.comment('Regex for a leading issue token in the subject, e.g. JIRA-1234 ("" disables)'))
    doc.add('prefix_pattern', defaults.prefix_pattern)
    doc.add(tomlkit.comment('Number of releases to show unless --all is given'))
    doc.add('max_tags_count', defaults.max_tags_count)
    doc.add(tomlkit.comment('Leave out commits that are not part of any release yet'))
    doc.add('skip_unreleased', defaults.skip_unreleased)
    doc.add(tomlkit.comment('Set to false if the output should not be colored'))
    doc.add('colored_output', defaults.colored_output)
    doc.add(tomlkit.comment('Show or hide the commit message prefix, e.g. JIRA-1234'))
    doc.add('show_prefix', defaults.show_prefix)
    doc.add(tomlkit.comment('Show commit footers in the detailed output'))
    doc.add('show_footers', defaults.show_footers)
    return doc


def write_default_config(repo_root: Path) -> Path:
    """Write the default ``.journalkit.toml`` into ``repo_root``.

    Returns:
        The path of the written file.

    Raises:
        JournalKitError: If the file already exists or cannot be written.
    """
    config_path = repo_root / CONFIG_FILENAME
    if config_path.exists():
        raise JournalKitError(
            code=E.SETUP_CONFIG_EXISTS,
            message=f'{config_path} already exists',
            hint='Remove it first to regenerate the defaults.',
        )
    try:
        config_path.write_text(tomlkit.dumps(default_config_document()), encoding='utf-8')
    except OSError as exc:
        raise JournalKitError(
            code=E.OUTPUT_WRITE_FAILED,
            message=f'Failed to write {config_path}: {exc}',
        ) from exc
    logger.info('default_config_written', path=str(config_path))
    return config_path


__all__ = [
    'CONFIG_FILENAME',
    'JournalConfig',
    'VALID_KEYS',
    'default_config_document',
    'load_config',
    'parse_config',
    'write_default_config',
]
