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

"""Subprocess runner behind the repository readers.

Readers never call :mod:`subprocess` directly. :func:`run_command`
runs one read-only command, captures its output as text and hands
back a :class:`CommandResult`; a non-zero exit is data, not an
exception, so each reader maps failures onto its own error types.

Commands run non-interactively with a fixed locale, so git never
waits for credentials and its error text does not depend on the
user's language settings.
"""

from __future__ import annotations

import os
import subprocess  # noqa: S404 - subprocess is the core purpose of this module
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from journalkit.logging import get_logger

log = get_logger('journalkit.backends.run')

# History reads are local; a minute is plenty even for large repositories.
DEFAULT_TIMEOUT_SECONDS = 60

_QUIET_ENV: Mapping[str, str] = {
    'GIT_TERMINAL_PROMPT': '0',
    'GIT_PAGER': 'cat',
    'LC_ALL': 'C',
}

# Only this much of a failing command's stderr is logged.
_STDERR_LOG_LIMIT = 500


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one command.

    Attributes:
        command: Program and arguments.
        return_code: Exit status; 0 means success.
        stdout: Standard output, decoded as UTF-8.
        stderr: Standard error, decoded as UTF-8.
        duration: Wall-clock time in milliseconds.
    """

    command: list[str]
    return_code: int
    stdout: str = ''
    stderr: str = ''
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.return_code == 0

    @property
    def command_str(self) -> str:
        """Program and arguments joined by spaces, for messages."""
        return ' '.join(self.command)


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Path | str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> CommandResult:
    """Run ``cmd`` and capture what it printed.

    Undecodable bytes in the output are replaced rather than raising,
    since commit messages are not guaranteed to be valid UTF-8.

    Args:
        cmd: Program and arguments.
        cwd: Directory to run in (default: the current one).
        timeout: Seconds before the process is killed.

    Returns:
        The :class:`CommandResult`, also for non-zero exits.

    Raises:
        FileNotFoundError: If the program is not installed.
        subprocess.TimeoutExpired: If ``timeout`` elapses.
    """
    argv = list(cmd)
    started = time.monotonic()
    try:
        proc = subprocess.run(  # noqa: S603 - argv built by readers, never a shell string
            argv,
            cwd=cwd,
            env={**os.environ, **_QUIET_ENV},
            capture_output=True,
            text=True,
            encoding='utf-8',
            errors='replace',
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        log.error('command_timeout', cmd=' '.join(argv), timeout=timeout)
        raise
    elapsed = (time.monotonic() - started) * 1000

    result = CommandResult(
        command=argv,
        return_code=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
        duration=elapsed,
    )
    if result.ok:
        log.debug('command_ok', cmd=result.command_str, cwd=str(cwd or '.'), ms=round(elapsed, 1))
    else:
        log.debug(
            'command_failed',
            cmd=result.command_str,
            return_code=result.return_code,
            stderr=result.stderr[:_STDERR_LOG_LIMIT],
        )
    return result


# Re-exported so readers and tests need not import subprocess.
TimeoutExpired = subprocess.TimeoutExpired

__all__ = [
    'CommandResult',
    'DEFAULT_TIMEOUT_SECONDS',
    'TimeoutExpired',
    'run_command',
]
