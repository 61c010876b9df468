"""Tests for PageStyle and geometry helpers."""

import pytest

from pagequill.engine.geometry import Padding, Size, mm_to_px, points_to_px, px_to_points
from pagequill.engine.page_style import PageStyle
from pagequill.exceptions import ConfigurationError


class TestGeometry:
    def test_mm_to_px(self):
        assert mm_to_px(25.4) == pytest.approx(96.0)
        assert mm_to_px(None) == 0.0

    def test_points_round_trip(self):
        assert px_to_points(96) == pytest.approx(72.0)
        assert points_to_px(72) == pytest.approx(96.0)

    def test_size_from_mm(self):
        size = Size.from_mm(210, 297)

        assert size.width == pytest.approx(793.7, abs=0.1)
        assert size.height == pytest.approx(1122.5, abs=0.1)

    def test_padding(self):
        padding = Padding(top=1, bottom=2, left=3, right=4)

        assert padding.vertical == 3
        assert padding.horizontal == 7
        assert Padding.uniform(5) == Padding(5, 5, 5, 5)


class TestPageStyle:
    def test_a4_defaults(self):
        style = PageStyle()
        padding = mm_to_px(20)

        assert style.content_width == pytest.approx(mm_to_px(210) - 2 * padding)
        assert style.content_height == pytest.approx(mm_to_px(297) - 2 * padding - 72)
        assert style.line_box_height == pytest.approx(12 * 1.45)

    def test_capacity_follows_style(self):
        style = PageStyle()
        taller_header = style.replace(header_height=136)

        assert taller_header.content_height == pytest.approx(style.content_height - 100)

    def test_capacity_never_negative(self):
        style = PageStyle(page_size=Size(100, 50))

        assert style.content_height == 0.0

    @pytest.mark.parametrize(
        "changes",
        [
            {"font_size": 0},
            {"line_height": -1},
            {"header_height": -5},
            {"page_size": Size(0, 100)},
        ],
    )
    def test_invalid_values_rejected(self, changes):
        with pytest.raises(ConfigurationError):
            PageStyle(**changes)

    def test_from_dict_mm_and_padding(self):
        style = PageStyle.from_dict({
            "page_width_mm": 148,
            "page_height_mm": 210,
            "padding": {"top": 10, "bottom": 20, "left": 5, "right": 5},
            "font_size": 14,
        })

        assert style.page_size.width == pytest.approx(mm_to_px(148))
        assert style.padding == Padding(10.0, 20.0, 5.0, 5.0)
        assert style.font_size == 14.0

    def test_from_dict_uniform_padding_mm(self):
        style = PageStyle.from_dict({"padding_mm": 10})

        assert style.padding == Padding.uniform(mm_to_px(10))

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError):
            PageStyle.from_dict({"margin": 3})

    def test_from_dict_bad_value(self):
        with pytest.raises(ConfigurationError):
            PageStyle.from_dict({"font_size": "large"})

    def test_to_dict_round_trip(self):
        style = PageStyle(font_family="Georgia", font_size=13)

        assert PageStyle.from_dict(style.to_dict()) == style

    def test_styles_are_hashable(self):
        assert hash(PageStyle()) == hash(PageStyle())
