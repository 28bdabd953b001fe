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

"""Structured logging for journalkit.

All log output goes to stderr through `structlog
<https://www.structlog.org/>`_, leaving stdout for the changelog
itself (``journalkit log > CHANGES``). Two renderers are available:

- **Console** (default): ``HH:MM:SS [level] event key=value``,
  colored when stderr is a terminal.
- **JSON** (``--json-log``): one object per line with an ISO
  timestamp, for CI log collectors.

Context bound with :func:`bind_run` (the revision range being walked)
is merged into every event until :func:`clear_run` is called.

Usage::

    from journalkit.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.info('tag_opened', tag='v1.2.0', commit='3f2a9c1')
"""

from __future__ import annotations

import logging
import sys

import structlog


def _level(*, verbose: bool, quiet: bool) -> int:
    # quiet wins: "-q -v" is treated as "-q".
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def _renderer(json_log: bool) -> list[structlog.types.Processor]:
    if json_log:
        return [
            structlog.processors.TimeStamper(fmt='iso', utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    return [
        structlog.processors.TimeStamper(fmt='%H:%M:%S', utc=False),
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route structlog events through the stdlib root logger to stderr.

    Safe to call more than once; the last call wins.

    Args:
        verbose: Also show ``debug`` events (tag openings, git calls).
        quiet: Only show warnings and errors; overrides ``verbose``.
        json_log: Render events as JSON lines.
    """
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderer(json_log),
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def bind_run(**context: object) -> None:
    """Attach ``context`` to every event logged until :func:`clear_run`."""
    structlog.contextvars.bind_contextvars(**context)


def clear_run() -> None:
    """Drop the context bound by :func:`bind_run`."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = 'journalkit') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'bind_run',
    'clear_run',
    'configure_logging',
    'get_logger',
]
