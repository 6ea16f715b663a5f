"""
Data structures for AniType
Defines the core data types used throughout the application
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class AssetKind(Enum):
    """How a letter asset stores its frames"""
    VIDEO = "video"
    IMAGE_SEQUENCE = "sequence"


class Alignment(Enum):
    CENTER = "center"
    BASELINE = "baseline"
    LEFT = "left"


class TimingMode(Enum):
    SIMULTANEOUS = "simultaneous"
    STAGGER = "stagger"


class DurationMode(Enum):
    AUTO = "auto"
    CUSTOM = "custom"


class DurationUnit(Enum):
    SECONDS = "seconds"
    FRAMES = "frames"


@dataclass(frozen=True)
class AssetDescriptor:
    """Metadata for one decoded letter asset"""
    kind: AssetKind
    width: int
    height: int
    frame_count: int
    duration: Optional[float] = None
    # Video handle or ordered tuple of still images, owned by the decoder
    source: Any = field(default=None, compare=False, hash=False, repr=False)

    @property
    def baseline(self) -> int:
        """Vertical reference used for baseline alignment"""
        return int(self.height * 0.8)

    @property
    def is_video(self) -> bool:
        return self.kind is AssetKind.VIDEO


@dataclass(frozen=True)
class ProjectSettings:
    """Composition settings shared by every resolver"""
    text: str = "AniType"
    spacing: int = 12
    char_spacing: int = 0
    line_spacing: int = 24
    alignment: Alignment = Alignment.CENTER
    fps: float = 30
    timing_mode: TimingMode = TimingMode.SIMULTANEOUS
    stagger_frames: int = 6
    duration_mode: DurationMode = DurationMode.AUTO
    custom_duration_value: float = 1
    duration_unit: DurationUnit = DurationUnit.SECONDS
    hold_last_frame: bool = True
    # When True, characters without an asset still consume a stagger slot
    reserve_missing_slots: bool = False


@dataclass(frozen=True)
class LetterSlot:
    """A matched letter in a line, before geometry is applied"""
    letter: str
    line_index: int
    position: int
    source_position: int


@dataclass(frozen=True)
class PlacedLetter:
    """Letter with its resolved top-left position on the canvas"""
    slot: LetterSlot
    x: float
    y: float
    width: int
    height: int

    @property
    def letter(self) -> str:
        return self.slot.letter


@dataclass(frozen=True)
class LayoutResult:
    """Geometry of a full composition"""
    lines: Tuple[Tuple[LetterSlot, ...], ...]
    placements: Tuple[PlacedLetter, ...]
    canvas_width: int
    canvas_height: int
    line_widths: Tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.placements


@dataclass(frozen=True)
class ResolvedLetter:
    """Frame decision for one letter at one global frame"""
    letter: str
    x: float
    y: float
    stagger_offset: int
    frame_index: int
    drawn: bool = False


@dataclass
class RenderResult:
    """Output of one pass of the render pipeline"""
    frame: int
    layout: LayoutResult
    duration_frames: int
    letters: List[ResolvedLetter] = field(default_factory=list)
    image: Any = None

    @property
    def is_empty(self) -> bool:
        return self.layout.is_empty
