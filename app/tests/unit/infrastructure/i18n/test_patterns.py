"""Tests for infrastructure.i18n.patterns module."""

import pytest

from infrastructure.i18n.options import BASE_OPTIONS, I18nOptions
from infrastructure.i18n.patterns import (
    compile_patterns,
    interpolation_pattern,
    interpolation_unescape_pattern,
    nesting_pattern,
)


@pytest.mark.unit
class TestInterpolationPattern:
    """Tests for the interpolation matcher."""

    @pytest.fixture
    def all_matches(self):
        pattern = interpolation_pattern(BASE_OPTIONS)
        return lambda text: [match.group(1) for match in pattern.finditer(text)]

    def test_default_pattern(self):
        assert interpolation_pattern(BASE_OPTIONS).pattern == r"\{\{(.*?)\}\}"

    def test_single_match(self, all_matches):
        assert all_matches("My text has {{one}} match") == ["one"]
        assert all_matches("My text has {{one, Xyz}} match") == ["one, Xyz"]

    def test_whitespace_is_kept(self, all_matches):
        assert all_matches("My text has {{one,   Xyz}} match") == ["one,   Xyz"]
        assert all_matches("My text has {{one, Xyz   }} match") == ["one, Xyz   "]
        assert all_matches("My text has {{one, \nXyz\n}} match") == ["one, \nXyz\n"]

    def test_multiple_mixed_matches(self, all_matches):
        assert all_matches("My {{text}} {{has, Bbb}} {{four, Ccc}} {{matches}}") == [
            "text",
            "has, Bbb",
            "four, Ccc",
            "matches",
        ]

    def test_custom_delimiters_are_literal(self):
        pattern = interpolation_pattern(
            BASE_OPTIONS.merge(
                I18nOptions(interpolation_prefix="[[", interpolation_suffix="]]")
            )
        )
        assert pattern.pattern == r"\[\[(.*?)\]\]"
        assert [m.group(1) for m in pattern.finditer("a [[b]] {{c}}")] == ["b"]


@pytest.mark.unit
class TestInterpolationUnescapePattern:
    """Tests for the unescaped interpolation matcher."""

    @pytest.fixture
    def all_matches(self):
        pattern = interpolation_unescape_pattern(BASE_OPTIONS)
        return lambda text: [match.group(1) for match in pattern.finditer(text)]

    def test_default_pattern(self):
        assert interpolation_unescape_pattern(BASE_OPTIONS).pattern == (
            r"\{\{-(.+?)\}\}"
        )

    def test_no_matches(self, all_matches):
        assert all_matches("") == []
        assert all_matches("no matches") == []
        assert all_matches("Some {{asd}}") == []

    def test_matches_keep_leading_whitespace(self, all_matches):
        assert all_matches("Some {{-value}}") == ["value"]
        assert all_matches("Some {{- value}}") == [" value"]
        assert all_matches("Some {{-   value, fmt}}") == ["   value, fmt"]
        assert all_matches("Some {{-value, fmt}} {{unescaped}}") == ["value, fmt"]


@pytest.mark.unit
class TestNestingPattern:
    """Tests for the nesting matcher."""

    @pytest.fixture
    def all_matches(self):
        pattern = nesting_pattern(BASE_OPTIONS)
        return lambda text: [
            [match.group("key"), match.group("variables")]
            for match in pattern.finditer(text)
        ]

    def test_default_pattern(self):
        assert nesting_pattern(BASE_OPTIONS).pattern == (
            r"\$t\((?P<key>.*?)(,\s*(?P<variables>.*?)\s*)?\)"
        )

    def test_match_without_variables(self, all_matches):
        assert all_matches("My text has $t(one) match") == [["one", None]]

    def test_match_with_variables(self, all_matches):
        assert all_matches('My text has $t(one, {"my": "values"}) match') == [
            ["one", '{"my": "values"}']
        ]

    def test_variables_are_trimmed(self, all_matches):
        assert all_matches("My text has $t(one,   Xyz) match") == [["one", "Xyz"]]
        assert all_matches("My text has $t(one, Xyz   ) match") == [["one", "Xyz"]]
        assert all_matches("My text has $t(one, \nXyz\n) match") == [["one", "Xyz"]]

    def test_multiple_mixed_matches(self, all_matches):
        assert all_matches("My $t(text) $t(has, Bbb) $t(four, Ccc) $t(matches)") == [
            ["text", None],
            ["has", "Bbb"],
            ["four", "Ccc"],
            ["matches", None],
        ]

    def test_custom_separator(self):
        pattern = nesting_pattern(
            BASE_OPTIONS.merge(I18nOptions(nesting_separator="|"))
        )
        match = pattern.search("$t(key | {}) and $t(a, b)")
        assert match.group("key") == "key "
        assert match.group("variables") == "{}"


@pytest.mark.unit
def test_compile_patterns_builds_all_matchers():
    patterns = compile_patterns(BASE_OPTIONS)
    assert patterns.interpolation.pattern == r"\{\{(.*?)\}\}"
    assert patterns.unescaped_interpolation.pattern == r"\{\{-(.+?)\}\}"
    assert patterns.nesting.pattern.startswith(r"\$t\(")
