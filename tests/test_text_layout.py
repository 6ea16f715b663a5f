"""Tests for text layout resolution."""

import pytest

from core.data_structures import Alignment, ProjectSettings
from core.text_layout import TextLayoutResolver

from conftest import build_library


class TestSplitLines:
    """Tests for line splitting and letter filtering."""

    def test_text_is_uppercased(self, hello_library):
        lines = TextLayoutResolver.split_lines("hello", hello_library)
        assert [slot.letter for slot in lines[0]] == list("HELLO")

    def test_missing_letters_are_dropped(self, hello_library):
        lines = TextLayoutResolver.split_lines("H-E", hello_library)
        line = lines[0]
        assert [slot.letter for slot in line] == ["H", "E"]
        assert [slot.position for slot in line] == [0, 1]
        assert [slot.source_position for slot in line] == [0, 2]

    def test_empty_lines_keep_their_index(self, hello_library):
        lines = TextLayoutResolver.split_lines("H\n\n?\nE", hello_library)
        assert len(lines) == 4
        assert lines[1] == ()
        assert lines[2] == ()
        assert lines[3][0].line_index == 3


class TestLayout:
    """Tests for geometry and canvas sizing."""

    def test_hello_world_line_widths(self, hello_library):
        settings = ProjectSettings(text="HELLO\nWORLD", spacing=12, char_spacing=0, fps=30)
        layout = TextLayoutResolver.layout(hello_library, settings)

        assert layout.line_widths == (298, 298)
        assert layout.canvas_width == 800
        assert layout.canvas_height == 400
        assert len(layout.placements) == 10

    def test_center_alignment_positions(self, hello_library):
        settings = ProjectSettings(text="HELLO\nWORLD", spacing=12, line_spacing=24)
        layout = TextLayoutResolver.layout(hello_library, settings)

        first_line = layout.placements[:5]
        assert first_line[0].x == pytest.approx((800 - 298) / 2)
        assert first_line[1].x == pytest.approx((800 - 298) / 2 + 62)
        assert all(p.y == 50 for p in first_line)
        assert layout.placements[5].y == 50 + 100 + 24

    def test_width_is_sum_of_widths_plus_spacing(self):
        library = build_library({"H": (40, 100, 1), "E": (70, 100, 1), "L": (30, 100, 1)})
        settings = ProjectSettings(text="HEL", spacing=9, char_spacing=0)
        layout = TextLayoutResolver.layout(library, settings)
        assert layout.line_widths == (40 + 70 + 30 + 2 * 9,)

    def test_char_spacing_adds_to_spacing(self, hello_library):
        settings = ProjectSettings(text="HE", spacing=10, char_spacing=5)
        layout = TextLayoutResolver.layout(hello_library, settings)
        assert layout.line_widths == (115,)

    def test_kerning_is_directional(self):
        library = build_library({"A": (50, 100, 1), "V": (50, 100, 1)})
        av = TextLayoutResolver.layout(library, ProjectSettings(text="AV", spacing=0))
        va = TextLayoutResolver.layout(library, ProjectSettings(text="VA", spacing=0))

        assert av.line_widths == (80,)
        assert va.line_widths == (100,)
        assert av.placements[1].x - av.placements[0].x == 30

    def test_wide_text_grows_canvas(self, hello_library):
        settings = ProjectSettings(text="HELLOWORLD" * 2, spacing=12)
        layout = TextLayoutResolver.layout(hello_library, settings)
        assert layout.line_widths == (20 * 50 + 19 * 12,)
        assert layout.canvas_width == 20 * 50 + 19 * 12 + 100

    def test_empty_line_adds_no_gap(self):
        library = build_library({"H": (50, 300, 1), "E": (50, 300, 1)})
        settings = ProjectSettings(text="H\n\nE", line_spacing=24)
        layout = TextLayoutResolver.layout(library, settings)

        assert len(layout.lines) == 3
        assert layout.placements[1].y == 50 + 300 + 24
        assert layout.canvas_height == 300 + 300 + 24 + 100

    def test_baseline_alignment_aligns_bottoms(self):
        library = build_library({"H": (50, 100, 1), "E": (50, 60, 1)})
        settings = ProjectSettings(text="HE", alignment=Alignment.BASELINE)
        layout = TextLayoutResolver.layout(library, settings)

        tall, short = layout.placements
        assert tall.y == 50
        assert short.y == 50 + 100 - 60
        assert tall.x == 50

    def test_center_alignment_centers_vertically(self):
        library = build_library({"H": (50, 100, 1), "E": (50, 60, 1)})
        layout = TextLayoutResolver.layout(library, ProjectSettings(text="HE"))
        assert layout.placements[1].y == pytest.approx(50 + 20)

    def test_left_alignment_uses_margin(self, hello_library):
        settings = ProjectSettings(text="HE\nLO", alignment=Alignment.LEFT)
        layout = TextLayoutResolver.layout(hello_library, settings)
        assert layout.placements[0].x == 50
        assert layout.placements[2].x == 50

    def test_no_matching_letters_is_empty(self, hello_library):
        layout = TextLayoutResolver.layout(hello_library, ProjectSettings(text="xyz\n123"))
        assert layout.is_empty
        assert layout.canvas_width == 0
        assert layout.canvas_height == 0
        assert len(layout.lines) == 2

    def test_layout_is_repeatable(self, hello_library):
        settings = ProjectSettings(text="HELLO\nWORLD")
        assert TextLayoutResolver.layout(hello_library, settings) == \
            TextLayoutResolver.layout(hello_library, settings)
