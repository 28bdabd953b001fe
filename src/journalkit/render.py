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

"""Render release groups for the terminal or as Markdown.

Entries within a group are sorted by the position of their category
in the configured category list; the sort is stable, so entries of
one category keep their commit order.

Terminal output (short)::

    v1.2.0 (2026-03-01):
    - [feat] auth: add OAuth2 login
    - [fix] correct rounding in totals

Markdown output (detailed)::

    ## v1.2.0 (2026-03-01)

    - **feat** (auth): add OAuth2 login

      Tokens are refreshed in the background.

      - Reviewed-by: Jane
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.text import Text

from journalkit.commit_parsing import ParsedEntry
from journalkit.config import JournalConfig
from journalkit.partition import ReleaseGroup

_CATEGORY_STYLE = 'bold cyan'
_TAG_STYLE = 'bold green'
_BREAKING_STYLE = 'bold red'


def sort_entries(entries: Iterable[ParsedEntry], categories: Sequence[str]) -> list[ParsedEntry]:
    """Stable sort by category position; unknown categories go last."""
    rank = {category: index for index, category in enumerate(categories)}
    return sorted(entries, key=lambda entry: rank.get(entry.category, len(rank)))


def _group_heading(group: ReleaseGroup) -> str:
    return f'{group.tag_name} ({group.date.isoformat()})'


def _summary_text(entry: ParsedEntry, config: JournalConfig) -> Text:
    text = Text('- ')
    text.append(f'[{entry.category}]', style=_CATEGORY_STYLE)
    text.append(' ')
    if entry.breaking:
        text.append('BREAKING ', style=_BREAKING_STYLE)
    if config.show_prefix and entry.prefix:
        text.append(f'{entry.prefix} ', style='dim')
    if entry.component:
        text.append(f'{entry.component}: ', style='bold')
    text.append(entry.subject)
    return text


def _indented(value: str, indent: str) -> str:
    return '\n'.join(f'{indent}{line}' if line else '' for line in value.splitlines())


def render_terminal(
    groups: Iterable[ReleaseGroup],
    config: JournalConfig,
    *,
    short: bool = True,
    console: Console | None = None,
) -> None:
    """Print release groups to a rich console.

    Args:
        groups: Release groups, newest first.
        config: Display settings and category order.
        short: Print only summaries; otherwise also body and footers.
        console: Target console (default: stdout, colors per config).
    """
    out = console or Console(no_color=not config.colored_output, highlight=False)
    for group in groups:
        out.print(Text(_group_heading(group) + ':', style=_TAG_STYLE), soft_wrap=True)
        for entry in sort_entries(group.entries, config.categories):
            out.print(_summary_text(entry, config), soft_wrap=True)
            if short:
                continue
            for paragraph in entry.body:
                out.print(Text(_indented(paragraph, '    ')), soft_wrap=True)
            if config.show_footers:
                for key, value in entry.footers:
                    out.print(Text(_indented(f'{key}: {value}', '    '), style='dim'), soft_wrap=True)
        out.print()


def _entry_markdown(entry: ParsedEntry, config: JournalConfig, *, short: bool) -> list[str]:
    parts = [f'- **{entry.category}**']
    if entry.component:
        parts.append(f'({entry.component})')
    head = ' '.join(parts) + ': '
    if entry.breaking:
        head += '**BREAKING** '
    if config.show_prefix and entry.prefix:
        head += f'{entry.prefix} '
    lines = [head + entry.subject]
    if short:
        return lines
    for paragraph in entry.body:
        lines.append('')
        lines.append(_indented(paragraph, '  '))
    if config.show_footers and entry.footers:
        lines.append('')
        lines.extend(_indented(f'- {key}: {value}', '  ') for key, value in entry.footers)
    return lines


def render_markdown(
    groups: Iterable[ReleaseGroup],
    config: JournalConfig,
    *,
    short: bool = False,
) -> str:
    """Render release groups as a Markdown document.

    Args:
        groups: Release groups, newest first.
        config: Display settings and category order.
        short: Leave out bodies and footers.

    Returns:
        The Markdown text, ending in a single newline.
    """
    lines: list[str] = ['# Changelog', '']
    for group in groups:
        lines.append(f'## {_group_heading(group)}')
        lines.append('')
        for entry in sort_entries(group.entries, config.categories):
            lines.extend(_entry_markdown(entry, config, short=short))
        lines.append('')
    return '\n'.join(lines).rstrip() + '\n'


__all__ = [
    'render_markdown',
    'render_terminal',
    'sort_entries',
]
