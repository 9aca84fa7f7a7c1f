"""Tests for derived statistics."""

from __future__ import annotations

import pytest

from mythras_builder.engine.derived import (
    damage_modifier,
    derive,
    experience_modifier,
    healing_rate,
    hit_points_per_location,
    initiative_bonus,
    luck_points,
)
from mythras_builder.models.characteristics import Characteristics
from mythras_builder.models.snapshot import HitLocations


class TestDamageModifier:
    """Tests for the STR+SIZ damage modifier table."""

    def test_strength_twelve_size_fourteen(self) -> None:
        """Test STR 12 + SIZ 14 = 26 lands in the +1d2 band."""
        assert damage_modifier(12 + 14) == "+1d2"

    @pytest.mark.parametrize(
        ("str_siz", "expected"),
        [
            (0, "-1d8"),
            (5, "-1d8"),
            (6, "-1d6"),
            (20, "-1d2"),
            (21, "0"),
            (25, "0"),
            (50, "+1d10"),
            (51, "+1d12"),
            (120, "+2d10+1d2"),
        ],
    )
    def test_band_edges(self, str_siz: int, expected: str) -> None:
        """Test values on and around band boundaries."""
        assert damage_modifier(str_siz) == expected

    def test_above_table(self) -> None:
        """Test that the table extends with one d2 per full 10 above 120."""
        assert damage_modifier(125) == "+2d10+0d2"
        assert damage_modifier(130) == "+2d10+1d2"
        assert damage_modifier(140) == "+2d10+2d2"


class TestHitPoints:
    """Tests for hit points per location."""

    def test_con_sixteen_size_ten(self) -> None:
        """Test CON 16 + SIZ 10 = 26 uses row 5 with no extra."""
        assert hit_points_per_location(16 + 10) == HitLocations(
            head=6, chest=8, abdomen=7, arm=5, leg=6
        )

    def test_first_row(self) -> None:
        """Test the lowest row, including a zero sum."""
        expected = HitLocations(head=1, chest=3, abdomen=2, arm=1, leg=1)
        assert hit_points_per_location(5) == expected
        assert hit_points_per_location(0) == expected

    def test_extra_above_forty(self) -> None:
        """Test that sums above 40 add one point per further five."""
        assert hit_points_per_location(45) == HitLocations(
            head=9, chest=11, abdomen=10, arm=8, leg=9
        )


class TestBandedStats:
    """Tests for experience, healing and luck."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, -1), (6, -1), (7, 0), (12, 0), (13, 1), (18, 1)],
    )
    def test_experience_bands(self, value: int, expected: int) -> None:
        """Test the three experience modifier bands."""
        assert experience_modifier(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(6, 1), (7, 2), (12, 2), (13, 3), (18, 3)],
    )
    def test_healing_and_luck_bands(self, value: int, expected: int) -> None:
        """Test the shared healing rate and luck point bands."""
        assert healing_rate(value) == expected
        assert luck_points(value) == expected

    def test_overflow_offset(self) -> None:
        """Test the two readings of the above-18 formula."""
        assert healing_rate(19) == 4
        assert healing_rate(19, offset=18) == 3
        assert experience_modifier(19) == 2
        assert experience_modifier(19, offset=18) == 1
        assert luck_points(24, offset=18) == 4


class TestDerive:
    """Tests for the combined derive() function."""

    def test_default_characteristics(self) -> None:
        """Test derived stats for an all-10 character."""
        stats = derive(Characteristics())

        assert stats.action_points == 2
        assert stats.damage_modifier == "-1d2"
        assert stats.experience_modifier == 0
        assert stats.healing_rate == 2
        assert stats.initiative_bonus == 10
        assert stats.luck_points == 2
        assert stats.magic_points == 10
        assert stats.movement_rate == 6
        assert stats.hit_points == hit_points_per_location(20)

    def test_initiative_rounds_down(self) -> None:
        """Test initiative is the floor of the DEX+INT average."""
        assert initiative_bonus(13, 12) == 12

    def test_recomputed_from_characteristics(self) -> None:
        """Test that derived stats follow the characteristics they are given."""
        chars = Characteristics(strength=12, size=14, constitution=16, power=19)

        stats = derive(chars)

        assert stats.damage_modifier == "+1d2"
        assert stats.luck_points == 4
        assert stats.magic_points == 19
        assert derive(chars, overflow_offset=18).luck_points == 3
