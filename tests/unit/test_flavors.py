#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_flavors.py
"""Unit tests for flavor resolution.

Tests cover:
- Name and synonym matching, case and whitespace insensitive
- Fallback to GFM for absent, unknown and malformed selectors
- Capability flags per flavor
- Immutability of the flavor table

"""

import pytest

from mdsync.flavors import (
    FLAVORS,
    CommonMarkFlavor,
    Flavor,
    GFMFlavor,
    get_markdown_flavors,
    is_known_flavor,
    resolve_flavor,
)


@pytest.mark.unit
class TestResolveFlavor:
    """Test resolve_flavor selector handling."""

    @pytest.mark.parametrize("name", ["commonmark", "CommonMark", "  COMMONMARK  ", "common-mark", "cm", "CM"])
    def test_commonmark_names(self, name):
        """Test every CommonMark spelling resolves to CommonMark."""
        assert resolve_flavor(name).flavor is Flavor.COMMONMARK

    @pytest.mark.parametrize("name", ["gfm", "GFM", " github ", "GitHub"])
    def test_gfm_names(self, name):
        """Test every GFM spelling resolves to GFM."""
        assert resolve_flavor(name).flavor is Flavor.GFM

    @pytest.mark.parametrize("name", [None, "", "   ", "markdown", "pandoc", 42, ["gfm"], object()])
    def test_fallback_to_gfm(self, name):
        """Test that anything unrecognized resolves to GFM without raising."""
        assert resolve_flavor(name).flavor is Flavor.GFM

    def test_default_argument(self):
        """Test calling without a selector."""
        assert resolve_flavor().name == "gfm"

    def test_enum_member_passthrough(self):
        """Test that Flavor members resolve to themselves."""
        assert resolve_flavor(Flavor.COMMONMARK).flavor is Flavor.COMMONMARK

    def test_returns_shared_instances(self):
        """Test that each flavor maps to exactly one capability object."""
        assert resolve_flavor("cm") is resolve_flavor("commonmark")
        assert resolve_flavor("gfm") is FLAVORS[Flavor.GFM]

    def test_get_markdown_flavors(self):
        """Test the canonical name list."""
        assert get_markdown_flavors() == ["commonmark", "gfm"]

    @pytest.mark.parametrize(
        "name,expected",
        [("cm", True), ("GitHub", True), (Flavor.GFM, True), ("markdown", False), (None, False), (3, False)],
    )
    def test_is_known_flavor(self, name, expected):
        """Test recognition of flavor names for argument validation."""
        assert is_known_flavor(name) is expected


@pytest.mark.unit
class TestFlavorCapabilities:
    """Test flavor capability checks."""

    def test_commonmark_capabilities(self):
        """Test CommonMark flavor capabilities."""
        flavor = CommonMarkFlavor()
        assert flavor.name == "commonmark"
        assert not flavor.supports_tables()
        assert not flavor.supports_strikethrough()
        assert not flavor.supports_autolinks()
        assert not flavor.supports_task_lists()
        assert not flavor.supports_subscript()
        assert not flavor.supports_tagfilter()
        assert not flavor.supports_front_matter()

    def test_gfm_capabilities(self):
        """Test GFM flavor capabilities."""
        flavor = GFMFlavor()
        assert flavor.name == "gfm"
        assert flavor.supports_tables()
        assert flavor.supports_strikethrough()
        assert flavor.supports_autolinks()
        assert flavor.supports_task_lists()
        assert flavor.supports_subscript()
        assert flavor.supports_tagfilter()
        assert not flavor.supports_front_matter()

    @pytest.mark.parametrize("flavor", [CommonMarkFlavor(), GFMFlavor()])
    def test_fixed_parse_behavior(self, flavor):
        """Test behavior shared by every flavor."""
        assert flavor.smart_punctuation is True
        assert flavor.allow_raw_html is False
        assert flavor.source_positions is True

    def test_feature_flags(self):
        """Test the feature flag summary."""
        flags = resolve_flavor("cm").feature_flags()
        assert flags["tables"] is False
        assert flags["smart_punctuation"] is True
        assert list(flags) == list(resolve_flavor("gfm").feature_flags())

    def test_flavor_table_is_read_only(self):
        """Test that the flavor table cannot be modified."""
        with pytest.raises(TypeError):
            FLAVORS[Flavor.GFM] = CommonMarkFlavor()  # type: ignore[index]

    def test_mapping_is_exhaustive(self):
        """Test that every Flavor member has a capability object."""
        assert set(FLAVORS) == set(Flavor)
        for flavor, capabilities in FLAVORS.items():
            assert capabilities.flavor is flavor
