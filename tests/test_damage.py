"""
Tests for damage exponent decoding and normalization.
"""

import pytest

from stormharm.damage import (
    DEFAULT_MULTIPLIER,
    EXPONENT_MULTIPLIERS,
    multiplier,
    normalize,
    normalize_event,
    normalize_events,
)


class TestMultiplier:
    """The exponent code table."""

    @pytest.mark.parametrize("code,expected", [
        ("H", 100), ("h", 100),
        ("K", 1_000), ("k", 1_000),
        ("M", 1_000_000), ("m", 1_000_000),
        ("B", 1_000_000_000), ("b", 1_000_000_000),
        ("+", 1), ("-", 0), ("?", 0), ("", 0),
    ])
    def test_documented_codes(self, code, expected):
        assert multiplier(code) == expected

    @pytest.mark.parametrize("digit", list("012345678"))
    def test_every_digit_is_ten(self, digit):
        assert multiplier(digit) == 10

    @pytest.mark.parametrize("code", ["x", "9", "KK", " ", "*", "1000"])
    def test_unknown_codes_are_zero(self, code):
        assert multiplier(code) == DEFAULT_MULTIPLIER == 0

    def test_none_is_blank(self):
        assert multiplier(None) == 0

    def test_table_is_complete(self):
        expected = set("HKMB+-?") | set("012345678") | {""}
        assert set(EXPONENT_MULTIPLIERS) == expected


class TestNormalize:
    """Magnitude x multiplier."""

    @pytest.mark.parametrize("magnitude", [0, 1, 2.5, -3, 1e6])
    @pytest.mark.parametrize("code", ["K", "m", "5", "+", "?", "", "z"])
    def test_linear(self, magnitude, code):
        assert normalize(magnitude, code) == magnitude * multiplier(code)

    def test_negative_passes_through(self):
        assert normalize(-2, "K") == -2000

    def test_missing_magnitude_stays_missing(self):
        assert normalize(None, "K") is None

    def test_normalize_event_fills_derived_fields(self, event):
        e = event("FLOOD", prop=2, prop_exp="M", crop=1.5, crop_exp="K")
        out = normalize_event(e)
        assert out.property_damage == 2_000_000
        assert out.crop_damage == 1_500
        assert out.total_damage == 2_001_500
        # original record is untouched
        assert e.total_damage is None
        assert out.prop_dmg == 2 and out.prop_dmg_exp == "M"

    def test_normalize_event_overwrites_previous_values(self, event):
        once = normalize_event(event("HAIL", prop=1, prop_exp="K"))
        twice = normalize_event(once)
        assert twice == once

    def test_total_missing_when_one_side_missing(self, event):
        out = normalize_event(event("HAIL", prop=None, prop_exp="K", crop=1, crop_exp="K"))
        assert out.property_damage is None
        assert out.crop_damage == 1000
        assert out.total_damage is None

    def test_empty_input(self):
        assert normalize_events([]) == []
