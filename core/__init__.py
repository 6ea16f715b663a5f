"""
Core module for AniType
Contains data structures, layout, timing and playback logic
"""

from .data_structures import (
    AssetKind,
    AssetDescriptor,
    Alignment,
    TimingMode,
    DurationMode,
    DurationUnit,
    ProjectSettings,
    LetterSlot,
    PlacedLetter,
    LayoutResult,
    ResolvedLetter,
    RenderResult,
)
from .asset_library import AssetLibrary
from .exceptions import AniTypeError, StaggerOverflowError
from .kerning import KERNING, kerning_adjust
from .fps_detector import FrameRateDetector, FpsDetection, FpsSource
from .text_layout import TextLayoutResolver
from .timeline import TimelineResolver, MAX_LETTERS_PER_LINE
from .frame_index import resolve_frame_index, video_seek_time
from .frame_source import FrameSource, LiveFrameSource, SweepFrameSource, pump
from .animation_player import PlaybackController, PlaybackState, FrameScheduler

__all__ = [
    'AssetKind',
    'AssetDescriptor',
    'Alignment',
    'TimingMode',
    'DurationMode',
    'DurationUnit',
    'ProjectSettings',
    'LetterSlot',
    'PlacedLetter',
    'LayoutResult',
    'ResolvedLetter',
    'RenderResult',
    'AssetLibrary',
    'AniTypeError',
    'StaggerOverflowError',
    'KERNING',
    'kerning_adjust',
    'FrameRateDetector',
    'FpsDetection',
    'FpsSource',
    'TextLayoutResolver',
    'TimelineResolver',
    'MAX_LETTERS_PER_LINE',
    'resolve_frame_index',
    'video_seek_time',
    'FrameSource',
    'LiveFrameSource',
    'SweepFrameSource',
    'pump',
    'PlaybackController',
    'PlaybackState',
    'FrameScheduler',
]
