"""Tests for search option flags."""

import pytest

from ftsquery.condition.options import OPTION_NAMES, SearchOptions


class TestSearchOptions:
    """Test the option flag set."""

    def test_default_flags(self):
        """Default stems and trims but never throws."""
        default = SearchOptions.DEFAULT

        assert SearchOptions.STEM_TERMS in default
        assert SearchOptions.STEM_PHRASES in default
        assert SearchOptions.TRIM_PREFIX_TERMS in default
        assert SearchOptions.TRIM_PREFIX_PHRASES in default
        assert SearchOptions.THROW_ON_UNBALANCED_PARENS not in default
        assert SearchOptions.THROW_ON_UNBALANCED_QUOTES not in default
        assert SearchOptions.THROW_ON_INVALID_NEAR_USE not in default

    def test_composite_values(self):
        """Composite members combine the single flags."""
        assert SearchOptions.STEM_ALL.value == 3
        assert SearchOptions.TRIM_PREFIX_ALL.value == 12
        assert SearchOptions.THROW_ON_ALL.value == 128 | 256 | 512
        assert SearchOptions.DEFAULT.value == 15

    def test_names_of_default(self):
        """Names lists single flags in declaration order."""
        assert SearchOptions.DEFAULT.names() == [
            "stem-terms",
            "stem-phrases",
            "trim-prefix-terms",
            "trim-prefix-phrases",
        ]

    def test_names_of_none(self):
        """No flags, no names."""
        assert SearchOptions.NONE.names() == []


class TestFromNames:
    """Test resolving options from names."""

    def test_kebab_and_snake_case(self):
        """Names may use dashes, underscores and any case."""
        options = SearchOptions.from_names(["stem-terms", "THROW_ON_ALL"])

        assert options == SearchOptions.STEM_TERMS | SearchOptions.THROW_ON_ALL

    def test_composite_name(self):
        """Composite members can be named."""
        assert SearchOptions.from_names(["default"]) == SearchOptions.DEFAULT

    def test_empty(self):
        """No names gives no flags."""
        assert SearchOptions.from_names([]) == SearchOptions.NONE
        assert SearchOptions.from_names(["", "  "]) == SearchOptions.NONE

    def test_unknown_name(self):
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown search option"):
            SearchOptions.from_names(["stem-everything"])

    def test_option_names_cover_members(self):
        """Every member, composite or not, has a choice name."""
        assert "throw-on-invalid-near-use" in OPTION_NAMES
        assert "trim-prefix-all" in OPTION_NAMES
        assert "none" in OPTION_NAMES
