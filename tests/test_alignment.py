"""Tests for alignment token parsing."""
import pytest

from latticecut.errors import AlignmentParseError
from latticecut.geometry.alignment import (
    ALL_CORNERS,
    Corner,
    Horizontal,
    Vertical,
    parse_corner,
    parse_corners,
    parse_horizontal,
    parse_vertical,
)


class TestParseAxis:
    @pytest.mark.parametrize("token, expected", [
        ("left", Horizontal.LEFT),
        ("center", Horizontal.CENTER),
        ("right", Horizontal.RIGHT),
        (" Right ", Horizontal.RIGHT),
    ])
    def test_horizontal(self, token, expected):
        assert parse_horizontal(token) is expected

    @pytest.mark.parametrize("token, expected", [
        ("top", Vertical.TOP),
        ("center", Vertical.CENTER),
        ("BOTTOM", Vertical.BOTTOM),
    ])
    def test_vertical(self, token, expected):
        assert parse_vertical(token) is expected

    def test_horizontal_rejects_vertical_token(self):
        with pytest.raises(AlignmentParseError, match="left, center, right"):
            parse_horizontal("top")

    def test_vertical_rejects_unknown(self):
        with pytest.raises(AlignmentParseError, match="top, center, bottom"):
            parse_vertical("middle")


class TestParseCorner:
    def test_pair(self):
        assert parse_corner("left-top") == Corner(Horizontal.LEFT, Vertical.TOP)
        assert parse_corner("right-bottom") == Corner(Horizontal.RIGHT, Vertical.BOTTOM)

    def test_bare_center(self):
        assert parse_corner("center") == Corner(Horizontal.CENTER, Vertical.CENTER)

    def test_token_round_trip(self):
        for corner in ALL_CORNERS:
            assert parse_corner(corner.token) == corner

    @pytest.mark.parametrize("token", ["", "left", "left-top-right", "top-left", "up-down"])
    def test_invalid(self, token):
        with pytest.raises(AlignmentParseError):
            parse_corner(token)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_corner("nowhere")


class TestAllCorners:
    def test_nine_distinct(self):
        assert len(ALL_CORNERS) == 9
        assert len(set(ALL_CORNERS)) == 9

    def test_horizontal_major_order(self):
        assert ALL_CORNERS[0] == Corner(Horizontal.LEFT, Vertical.TOP)
        assert ALL_CORNERS[1] == Corner(Horizontal.LEFT, Vertical.CENTER)
        assert ALL_CORNERS[-1] == Corner(Horizontal.RIGHT, Vertical.BOTTOM)

    def test_parse_corners_expands_all(self):
        corners = parse_corners(["left-top", "all"])
        assert len(corners) == 10
        assert corners[0] == Corner(Horizontal.LEFT, Vertical.TOP)
        assert corners[1:] == ALL_CORNERS
