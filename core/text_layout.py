"""
Text Layout Resolver
Turns text into per-letter canvas positions
"""

from typing import List, Sequence, Tuple

from .asset_library import AssetLibrary
from .data_structures import (
    Alignment,
    LayoutResult,
    LetterSlot,
    PlacedLetter,
    ProjectSettings,
)
from .kerning import kerning_adjust

CANVAS_PADDING = 100
MIN_CANVAS_WIDTH = 800
MIN_CANVAS_HEIGHT = 400
LEFT_MARGIN = 50
TOP_MARGIN = 50


class TextLayoutResolver:
    """Computes line breaking, kerning, alignment and canvas size"""

    @staticmethod
    def split_lines(text: str, library: AssetLibrary) -> Tuple[Tuple[LetterSlot, ...], ...]:
        """
        Split text into lines of letters that have an asset

        Characters without an asset are dropped. Their index in the raw line
        is kept as ``source_position``.
        """
        lines = []
        for line_index, raw_line in enumerate(text.upper().split("\n")):
            slots = []
            for source_position, char in enumerate(raw_line):
                if char not in library:
                    continue
                slots.append(LetterSlot(
                    letter=char,
                    line_index=line_index,
                    position=len(slots),
                    source_position=source_position,
                ))
            lines.append(tuple(slots))
        return tuple(lines)

    @staticmethod
    def advance(library: AssetLibrary, line: Sequence[LetterSlot], index: int,
                settings: ProjectSettings) -> int:
        """Horizontal distance from a letter's left edge to the next letter's"""
        slot = line[index]
        width = library.get(slot.letter).width
        if index >= len(line) - 1:
            return width
        next_letter = line[index + 1].letter
        return (width + settings.spacing + settings.char_spacing
                + kerning_adjust(slot.letter, next_letter))

    @classmethod
    def line_width(cls, library: AssetLibrary, line: Sequence[LetterSlot],
                   settings: ProjectSettings) -> int:
        return sum(cls.advance(library, line, i, settings) for i in range(len(line)))

    @staticmethod
    def line_height(library: AssetLibrary, line: Sequence[LetterSlot]) -> int:
        return max(library.get(slot.letter).height for slot in line)

    @classmethod
    def layout(cls, library: AssetLibrary, settings: ProjectSettings) -> LayoutResult:
        """
        Lay out ``settings.text`` against the library

        Args:
            library: Letter assets
            settings: Project settings

        Returns:
            LayoutResult; ``is_empty`` is True when no letter matched
        """
        lines = cls.split_lines(settings.text, library)
        filled = [line for line in lines if line]
        if not filled:
            return LayoutResult(lines=lines, placements=(), canvas_width=0, canvas_height=0)

        widths = [cls.line_width(library, line, settings) for line in filled]
        heights = [cls.line_height(library, line) for line in filled]

        total_height = sum(heights) + settings.line_spacing * (len(filled) - 1)
        canvas_width = max(max(widths) + CANVAS_PADDING, MIN_CANVAS_WIDTH)
        canvas_height = max(total_height + CANVAS_PADDING, MIN_CANVAS_HEIGHT)

        placements: List[PlacedLetter] = []
        cursor_y = TOP_MARGIN
        for line, line_width, line_height in zip(filled, widths, heights):
            if settings.alignment is Alignment.CENTER:
                x = (canvas_width - line_width) / 2
            else:
                x = LEFT_MARGIN

            for index, slot in enumerate(line):
                asset = library.get(slot.letter)
                if settings.alignment is Alignment.BASELINE:
                    y = cursor_y + line_height - asset.height
                else:
                    y = cursor_y + (line_height - asset.height) / 2
                placements.append(PlacedLetter(slot, x, y, asset.width, asset.height))
                x += cls.advance(library, line, index, settings)

            cursor_y += line_height + settings.line_spacing

        return LayoutResult(
            lines=lines,
            placements=tuple(placements),
            canvas_width=int(canvas_width),
            canvas_height=int(canvas_height),
            line_widths=tuple(widths),
        )
