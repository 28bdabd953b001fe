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

"""Tests for the git reader backend.

Mocks ``_git`` to avoid real git calls.
"""

from __future__ import annotations

import subprocess  # noqa: S404
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from journalkit._types import Tag
from journalkit.backends import VersionControlReader
from journalkit.backends._run import CommandResult
from journalkit.backends.vcs.git import GitCLIReader
from journalkit.errors import CatalogError, E, ResolutionError
from journalkit.journal import Journal


def _ok(stdout: str = '', **kw: Any) -> CommandResult:  # noqa: ANN401
    return CommandResult(command=['git'], return_code=0, stdout=stdout, **kw)


def _fail(stderr: str = '', **kw: Any) -> CommandResult:  # noqa: ANN401
    return CommandResult(command=['git'], return_code=128, stderr=stderr, **kw)


@pytest.fixture()
def git() -> GitCLIReader:
    """Git reader on a fake path."""
    return GitCLIReader(repo_root=Path('/fake/repo'))


class TestProtocol:
    """GitCLIReader satisfies the reader protocol."""

    def test_isinstance(self, git: GitCLIReader) -> None:
        """Runtime protocol check."""
        assert isinstance(git, VersionControlReader)


class TestResolve:
    """Tests for resolve()."""

    def test_range(self, git: GitCLIReader) -> None:
        """rev-list output becomes a list of SHAs."""
        with patch.object(git, '_git', return_value=_ok('aaa\nbbb\n\n')) as m:
            assert git.resolve('v1.0..HEAD') == ['aaa', 'bbb']
            m.assert_called_once_with('rev-list', 'v1.0..HEAD', '--')

    def test_empty_range(self, git: GitCLIReader) -> None:
        """An empty but valid range resolves to nothing."""
        with patch.object(git, '_git', return_value=_ok('')):
            assert git.resolve('HEAD..HEAD') == []

    def test_unknown_revision(self, git: GitCLIReader) -> None:
        """git failure becomes ResolutionError."""
        with patch.object(git, '_git', return_value=_fail('fatal: bad revision')):
            with pytest.raises(ResolutionError) as exc_info:
                git.resolve('nope')
        assert 'fatal: bad revision' in exc_info.value.info.message

    @pytest.mark.parametrize('revision_range', ['', '   ', '--all'])
    def test_not_a_revision(self, git: GitCLIReader, revision_range: str) -> None:
        """Blank ranges and options are rejected without calling git."""
        with patch.object(git, '_git') as m:
            with pytest.raises(ResolutionError):
                git.resolve(revision_range)
            m.assert_not_called()


class TestCommit:
    """Tests for commit()."""

    def test_reads_commit(self, git: GitCLIReader) -> None:
        """SHA, timestamp and message are split on NUL."""
        stdout = 'abc123\x001767225600\x00feat: add X\n\nBody line.\n'
        with patch.object(git, '_git', return_value=_ok(stdout)) as m:
            raw = git.commit('abc123')
        assert raw.id == 'abc123'
        assert raw.message == 'feat: add X\n\nBody line.\n'
        assert raw.timestamp == datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert raw.short_id == 'abc123'[:7]
        assert m.call_args.args[0] == 'show'

    def test_signatures_not_shown(self, git: GitCLIReader) -> None:
        """Signature output is disabled so the SHA field stays first."""
        with patch.object(git, '_git', return_value=_ok('abc\x000\x00fix: x')) as m:
            git.commit('abc')
        assert '--no-show-signature' in m.call_args.args
        assert m.call_args.args[-1] == 'abc'

    def test_message_keeps_later_nul(self, git: GitCLIReader) -> None:
        """Only the first two separators split the output."""
        with patch.object(git, '_git', return_value=_ok('s\x000\x00fix: a\x00b')):
            assert git.commit('s').message == 'fix: a\x00b'

    def test_git_failure(self, git: GitCLIReader) -> None:
        """A failing show is a CatalogError."""
        with patch.object(git, '_git', return_value=_fail('fatal: bad object')):
            with pytest.raises(CatalogError):
                git.commit('deadbeef')

    def test_malformed_output(self, git: GitCLIReader) -> None:
        """Output without separators is a CatalogError."""
        with patch.object(git, '_git', return_value=_ok('garbage')):
            with pytest.raises(CatalogError):
                git.commit('abc')

    def test_bad_timestamp(self, git: GitCLIReader) -> None:
        """A non-numeric timestamp is a CatalogError."""
        with patch.object(git, '_git', return_value=_ok('abc\x00soon\x00fix: x')):
            with pytest.raises(CatalogError):
                git.commit('abc')


class TestListTags:
    """Tests for list_tags()."""

    def test_annotated_and_lightweight(self, git: GitCLIReader) -> None:
        """Annotated tags are peeled; lightweight tags use the object."""
        stdout = 'v1.0\x00tagobj1\x00commit1\nv0.9\x00commit0\x00\n'
        with patch.object(git, '_git', return_value=_ok(stdout)):
            assert git.list_tags() == [Tag('commit1', 'v1.0'), Tag('commit0', 'v0.9')]

    def test_no_tags(self, git: GitCLIReader) -> None:
        """No tags, empty list."""
        with patch.object(git, '_git', return_value=_ok('')):
            assert git.list_tags() == []

    def test_failure(self, git: GitCLIReader) -> None:
        """A failing for-each-ref is a CatalogError."""
        with patch.object(git, '_git', return_value=_fail('fatal: not a git repository')):
            with pytest.raises(CatalogError):
                git.list_tags()


class TestGitInvocation:
    """_git delegates to run_command in the repository root."""

    def test_cwd(self, git: GitCLIReader) -> None:
        """Commands run in the repository root."""
        with patch('journalkit.backends.vcs.git.run_command', return_value=_ok()) as m:
            git._git('rev-list', 'HEAD', '--')
        m.assert_called_once_with(['git', 'rev-list', 'HEAD', '--'], cwd=Path('/fake/repo'))

    def test_timeout_is_catalog_error(self, git: GitCLIReader) -> None:
        """A git call that times out becomes a CatalogError."""
        with patch('journalkit.backends.vcs.git.run_command', side_effect=subprocess.TimeoutExpired(['git'], 60)):
            with pytest.raises(CatalogError) as exc_info:
                git.commit('abc')
        assert exc_info.value.code == E.VCS_CATALOG
        assert 'timed out after 60' in exc_info.value.info.message

    def test_git_not_installed(self, git: GitCLIReader) -> None:
        """A missing git executable becomes a CatalogError."""
        with patch('journalkit.backends.vcs.git.run_command', side_effect=FileNotFoundError(2, 'No such file', 'git')):
            with pytest.raises(CatalogError) as exc_info:
                git.list_tags()
        assert 'git is installed' in exc_info.value.hint

    def test_missing_repository_directory(self, tmp_path: Path) -> None:
        """Resolving in a directory that does not exist fails with a typed error."""
        reader = GitCLIReader(repo_root=tmp_path / 'nope')
        with pytest.raises(CatalogError):
            reader.resolve('HEAD')


def _show_times_out_on(sha: str) -> Any:  # noqa: ANN401
    """run_command stand-in: one tag, two commits, and ``show <sha>`` hangs."""

    def run(cmd: list[str], *, cwd: Path) -> CommandResult:
        args = cmd[1:]
        if args[0] == 'for-each-ref':
            return _ok('v1.0\x00bbb\x00\n')
        if args[0] == 'rev-list':
            return _ok('aaa\nbbb\nccc\n')
        if args[-1] == sha:
            raise subprocess.TimeoutExpired(cmd, 60)
        return _ok(f'{args[-1]}\x001767225600\x00fix: change {args[-1]}')

    return run


class TestTimeoutDuringWalk:
    """A git timeout while walking history follows the read error policy."""

    def test_partial_result(self) -> None:
        """Groups sealed before the timeout are kept when asked for."""
        journal = Journal(GitCLIReader(repo_root=Path('/fake/repo')))
        with patch('journalkit.backends.vcs.git.run_command', side_effect=_show_times_out_on('ccc')):
            result = journal.parse_log('HEAD', all=True, partial_on_error=True)
        assert result.complete is False
        assert [g.tag_name for g in result.groups] == ['Unreleased']

    def test_raises_by_default(self) -> None:
        """Without partial results the timeout aborts the run."""
        journal = Journal(GitCLIReader(repo_root=Path('/fake/repo')))
        with patch('journalkit.backends.vcs.git.run_command', side_effect=_show_times_out_on('ccc')):
            with pytest.raises(CatalogError):
                journal.parse_log('HEAD', all=True)
