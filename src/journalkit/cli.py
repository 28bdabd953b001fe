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

"""Command-line interface for journalkit.

Subcommands::

    journalkit log [RANGE] [-a] [-n N] [-e PATTERN] [-u] [-s] [-o FILE]
    journalkit verify FILE...
    journalkit setup
    journalkit explain CODE

Global flags (``-C``, ``-v``, ``-q``, ``--json-log``) go before the
subcommand. Logs go to stderr; the changelog goes to stdout.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich_argparse import RichHelpFormatter

from journalkit import __version__
from journalkit.config import load_config
from journalkit.errors import JournalKitError, ParseError, explain, render_error
from journalkit.journal import Journal
from journalkit.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _cmd_log(args: argparse.Namespace) -> int:
    """Handle the ``log`` subcommand."""
    journal = Journal.open(args.path)
    result = journal.parse_log(
        args.revision_range,
        tag_skip_pattern=args.skip_pattern,
        max_tags_count=args.tags_count,
        all=args.all,
        skip_unreleased=args.skip_unreleased,
    )
    if args.output:
        journal.write_log(args.output, short=args.short)
        print(f'Changelog written to {args.output}')  # noqa: T201 - CLI output
    else:
        journal.print_log(short=args.short)
    if result.skipped:
        logger.info('commits_skipped', count=len(result.skipped))
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    """Handle the ``verify`` subcommand.

    Every file is checked; the exit code is 1 if any of them fails.
    """
    config = load_config(args.path)
    failed = 0
    for message_file in args.files:
        try:
            entry = Journal.verify(message_file, config)
        except ParseError as exc:
            failed += 1
            print(f'{message_file}: invalid', file=sys.stderr)  # noqa: T201 - CLI output
            render_error(exc)
            continue
        print(f'{message_file}: ok ({entry.category})')  # noqa: T201 - CLI output
    return 1 if failed else 0


def _cmd_setup(args: argparse.Namespace) -> int:
    """Handle the ``setup`` subcommand."""
    written = Journal.setup(args.path)
    print(f'Setup complete, defaults written to {written}')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError('must be zero or greater')
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='journalkit',
        description='Changelog generation from structured git commit messages.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '--path',
        '-C',
        type=Path,
        default=Path('.'),
        help='Repository to work on (default: current directory).',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging.')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Log as JSON lines.')

    subparsers = parser.add_subparsers(dest='command')

    log_parser = subparsers.add_parser(
        'log',
        help='Print the changelog for a revision range.',
        formatter_class=RichHelpFormatter,
    )
    log_parser.add_argument(
        'revision_range',
        nargs='?',
        default='HEAD',
        help="Single revision or range, e.g. 'HEAD' or 'v1.0..HEAD' (default: HEAD).",
    )
    log_parser.add_argument(
        '--all',
        '-a',
        action='store_true',
        help='Walk the whole range instead of stopping after --tags-count releases.',
    )
    log_parser.add_argument(
        '--tags-count',
        '-n',
        type=_non_negative,
        default=None,
        metavar='N',
        help='Number of releases to show (default: max_tags_count from config).',
    )
    log_parser.add_argument(
        '--skip-pattern',
        '-e',
        default=None,
        metavar='PATTERN',
        help='Tags containing PATTERN are not treated as releases, e.g. rc.',
    )
    log_parser.add_argument(
        '--skip-unreleased',
        '-u',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Leave out commits newer than the latest release tag (default: from config).',
    )
    log_parser.add_argument(
        '--short',
        '-s',
        action='store_true',
        help='Only print summary lines.',
    )
    log_parser.add_argument(
        '--output',
        '-o',
        type=Path,
        default=None,
        metavar='FILE',
        help='Write the changelog as Markdown to FILE.',
    )

    verify_parser = subparsers.add_parser(
        'verify',
        help='Verify commit message files against the commit grammar.',
    )
    verify_parser.add_argument('files', nargs='+', type=Path, metavar='FILE', help='Commit message file(s).')

    subparsers.add_parser(
        'setup',
        help='Write a default .journalkit.toml into the repository.',
    )

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
    )
    explain_parser.add_argument(
        'code',
        help='Error code to explain (e.g., JK-PARSE-INVALID-SUMMARY).',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'log':
            return _cmd_log(args)
        if command == 'verify':
            return _cmd_verify(args)
        if command == 'setup':
            return _cmd_setup(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except JournalKitError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
