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

"""Tests for journalkit.errors."""

from __future__ import annotations

import io

from journalkit.errors import (
    ERRORS,
    CatalogError,
    E,
    ErrorCode,
    InvalidSummaryError,
    JournalKitError,
    ParseError,
    ResolutionError,
    UnknownCategoryError,
    explain,
    render_error,
)


class TestErrorCodes:
    """Tests for the ErrorCode enum."""

    def test_codes_are_prefixed(self) -> None:
        """Every code starts with JK-."""
        for code in ErrorCode:
            assert code.value.startswith('JK-')

    def test_codes_unique(self) -> None:
        """No two members share a value."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestJournalKitError:
    """Tests for the exception hierarchy."""

    def test_str_contains_code(self) -> None:
        """The string form carries the code and message."""
        exc = JournalKitError(E.CONFIG_INVALID_KEY, 'bad key', hint='fix it')
        assert str(exc) == '[JK-CONFIG-INVALID-KEY] bad key'
        assert exc.code == E.CONFIG_INVALID_KEY
        assert exc.hint == 'fix it'

    def test_parse_errors(self) -> None:
        """Grammar errors share the ParseError base."""
        assert isinstance(InvalidSummaryError('x'), ParseError)
        unknown = UnknownCategoryError('wip', ('feat', 'fix'))
        assert isinstance(unknown, ParseError)
        assert unknown.category == 'wip'
        assert unknown.info.message == "Unknown category 'wip'"
        assert unknown.hint == 'Allowed categories: feat, fix.'

    def test_resolution_error(self) -> None:
        """The range and the git detail end up in the message."""
        exc = ResolutionError('v9..HEAD', 'bad revision')
        assert exc.revision_range == 'v9..HEAD'
        assert exc.code == E.VCS_RESOLUTION
        assert 'bad revision' in exc.info.message
        assert not isinstance(exc, ParseError)

    def test_catalog_error(self) -> None:
        """CatalogError carries the catalog code."""
        assert CatalogError('boom').code == E.VCS_CATALOG


class TestExplain:
    """Tests for explain()."""

    def test_known(self) -> None:
        """A documented code is explained with its hint."""
        text = explain('JK-VCS-RESOLUTION')
        assert text is not None
        assert text.startswith('JK-VCS-RESOLUTION: ')
        assert 'Hint:' in text

    def test_unknown(self) -> None:
        """An unknown code returns None."""
        assert explain('JK-NOPE') is None

    def test_every_code_documented(self) -> None:
        """Every error code has a catalog entry."""
        assert set(ERRORS) == set(ErrorCode)
        for code, info in ERRORS.items():
            assert info.code is code

    def test_case_insensitive(self) -> None:
        """Codes may be given in lower case."""
        assert explain('jk-vcs-catalog') == explain('JK-VCS-CATALOG')

    def test_per_commit_codes_say_skipped(self) -> None:
        """Grammar errors explain that the commit is skipped."""
        assert 'skipped' in (explain('JK-PARSE-UNKNOWN-CATEGORY') or '')
        assert 'skipped' not in (explain('JK-VCS-CATALOG') or '')


class TestRenderError:
    """Tests for render_error()."""

    def test_plain_output(self) -> None:
        """Non-TTY output is plain text."""
        buf = io.StringIO()
        render_error(ResolutionError('nope'), file=buf)
        lines = buf.getvalue().splitlines()
        assert lines[0] == "error[JK-VCS-RESOLUTION]: Could not resolve revision range 'nope'"
        assert lines[1] == '  |'
        assert lines[2].startswith('  = hint: ')

    def test_no_hint(self) -> None:
        """Without a hint only the error line is printed."""
        buf = io.StringIO()
        render_error(CatalogError('boom'), file=buf)
        assert buf.getvalue() == 'error[JK-VCS-CATALOG]: boom\n\n'
