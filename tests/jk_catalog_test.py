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

"""Tests for journalkit.catalog."""

from __future__ import annotations

import pytest
from journalkit._types import Tag
from journalkit.catalog import Catalog, is_release_tag
from journalkit.commit_parsing import CommitMessageParser, ParsedEntry
from journalkit.errors import InvalidSummaryError, UnknownCategoryError

from tests._fakes import commit


class TestIsReleaseTag:
    """Tests for is_release_tag()."""

    def test_no_patterns(self) -> None:
        """Every tag qualifies without skip patterns."""
        assert is_release_tag('v1.0.0', []) is True

    def test_substring_match_skips(self) -> None:
        """A tag containing a skip pattern does not qualify."""
        assert is_release_tag('v1.0.0-rc1', ['rc']) is False

    def test_empty_pattern_skips_nothing(self) -> None:
        """The empty pattern is ignored."""
        assert is_release_tag('v1.0.0', ['']) is True

    def test_any_pattern(self) -> None:
        """Any matching pattern disqualifies."""
        assert is_release_tag('internal-2', ['rc', 'internal']) is False


class TestCatalogBuild:
    """Tests for Catalog.build()."""

    def test_indexes_by_commit(self) -> None:
        """Tags are keyed by the commit they point at."""
        catalog = Catalog.build([Tag('c1', 'v1.0'), Tag('c2', 'v2.0')])
        assert catalog.tags_for('c1') == ('v1.0',)
        assert catalog.tags_for('c2') == ('v2.0',)
        assert catalog.tags_for('c3') == ()

    def test_co_located_tags_keep_order(self) -> None:
        """Several tags on one commit keep the listed order."""
        catalog = Catalog.build([Tag('c1', 'v1.0'), Tag('c1', 'stable')])
        assert catalog.tags_for('c1') == ('v1.0', 'stable')

    def test_skip_patterns_filter(self) -> None:
        """Skipped tags are not indexed."""
        catalog = Catalog.build(
            [Tag('c1', 'v1.0'), Tag('c2', 'v2.0-rc1')],
            skip_patterns=['rc'],
        )
        assert catalog.tags_for('c2') == ()
        assert dict(catalog.tags) == {'c1': ('v1.0',)}

    def test_read_only(self) -> None:
        """The tag table cannot be mutated."""
        catalog = Catalog.build([Tag('c1', 'v1.0')])
        with pytest.raises(TypeError):
            catalog.tags['c2'] = ('v2.0',)  # type: ignore[index]


class TestParseOutcomes:
    """Tests for parse_all() and outcome_for()."""

    def test_parse_all(self) -> None:
        """Outcomes hold entries and errors."""
        parser = CommitMessageParser()
        commits = [commit('a', 'feat: x'), commit('b', 'garbage'), commit('c', 'wip: y')]
        catalog = Catalog.build([]).parse_all(commits, parser)
        assert isinstance(catalog.outcomes['a'], ParsedEntry)
        assert isinstance(catalog.outcomes['b'], InvalidSummaryError)
        assert isinstance(catalog.outcomes['c'], UnknownCategoryError)

    def test_parse_all_keeps_tags(self) -> None:
        """parse_all returns a new catalog with the same tags."""
        base = Catalog.build([Tag('a', 'v1')])
        parsed = base.parse_all([commit('a', 'fix: x')], CommitMessageParser())
        assert parsed.tags_for('a') == ('v1',)
        assert base.outcomes == {}

    def test_outcome_for_uses_stored(self) -> None:
        """A stored outcome is returned without reparsing."""
        strict = CommitMessageParser(['feat'])
        catalog = Catalog.build([]).parse_all([commit('a', 'feat: x')], strict)
        outcome = catalog.outcome_for(commit('a', 'feat: x'), CommitMessageParser(['fix']))
        assert isinstance(outcome, ParsedEntry)

    def test_outcome_for_parses_lazily(self) -> None:
        """Without a stored outcome the message is parsed on demand."""
        outcome = Catalog().outcome_for(commit('a', 'nope'), CommitMessageParser())
        assert isinstance(outcome, InvalidSummaryError)
        assert Catalog().outcome_for(commit('b', 'fix: y'), CommitMessageParser()).sha == 'b'
