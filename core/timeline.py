"""
Timeline Resolver
Works out animation length, per-letter stagger offsets and export length
"""

import math
from typing import Iterable, Sequence

from .asset_library import AssetLibrary
from .data_structures import (
    DurationMode,
    DurationUnit,
    LetterSlot,
    ProjectSettings,
    TimingMode,
)
from .exceptions import StaggerOverflowError

# Stagger index of a letter is line_index * MAX_LETTERS_PER_LINE + position,
# so a longer line would overlap the next one. The limit is inclusive: a line
# of exactly 100 letters uses positions 0..99 and is accepted, 101 is rejected.
MAX_LETTERS_PER_LINE = 100
DEFAULT_DURATION_FRAMES = 24


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)"""
    return int(math.floor(value + 0.5))


class TimelineResolver:
    """Pure timing calculations over a laid-out composition"""

    @staticmethod
    def stagger_position(slot: LetterSlot, settings: ProjectSettings) -> int:
        """Position used for ordering, optionally counting dropped characters"""
        if settings.reserve_missing_slots:
            return slot.source_position
        return slot.position

    @classmethod
    def global_index(cls, slot: LetterSlot, settings: ProjectSettings) -> int:
        return slot.line_index * MAX_LETTERS_PER_LINE + cls.stagger_position(slot, settings)

    @classmethod
    def stagger_offset(cls, slot: LetterSlot, settings: ProjectSettings) -> int:
        """Frames a letter waits before its local animation begins"""
        if settings.timing_mode is not TimingMode.STAGGER:
            return 0
        return cls.global_index(slot, settings) * settings.stagger_frames

    @staticmethod
    def resolve_duration(library: AssetLibrary,
                         lines: Iterable[Sequence[LetterSlot]],
                         settings: ProjectSettings) -> int:
        """
        Length of one letter's animation in frames

        Args:
            library: Letter assets
            lines: Matched letters per line
            settings: Project settings

        Returns:
            Duration in frames
        """
        if settings.duration_mode is DurationMode.CUSTOM:
            if settings.duration_unit is DurationUnit.SECONDS:
                return round_half_up(settings.custom_duration_value * settings.fps)
            return int(settings.custom_duration_value)

        max_frames = 0
        for line in lines:
            for slot in line:
                asset = library.get(slot.letter)
                if asset:
                    max_frames = max(max_frames, asset.frame_count)
        return max_frames or DEFAULT_DURATION_FRAMES

    @classmethod
    def total_frames(cls, lines: Iterable[Sequence[LetterSlot]],
                     duration_frames: int, settings: ProjectSettings) -> int:
        """Frames needed so the last staggered letter finishes its animation"""
        if settings.timing_mode is not TimingMode.STAGGER:
            return duration_frames
        last_index = 0
        for line in lines:
            for slot in line:
                last_index = max(last_index, cls.global_index(slot, settings))
        return last_index * settings.stagger_frames + duration_frames

    @classmethod
    def validate(cls, lines: Iterable[Sequence[LetterSlot]], settings: ProjectSettings):
        """
        Raise StaggerOverflowError if a line is too long for stagger ordering

        Only stagger timing depends on the global index, so simultaneous
        timing accepts lines of any length.
        """
        if settings.timing_mode is not TimingMode.STAGGER:
            return
        for line_index, line in enumerate(lines):
            if not line:
                continue
            length = max(cls.stagger_position(slot, settings) for slot in line) + 1
            if length > MAX_LETTERS_PER_LINE:
                raise StaggerOverflowError(line_index, length, MAX_LETTERS_PER_LINE)
