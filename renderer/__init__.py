"""
Renderer module for AniType
Draw surfaces, the compositor and the export frame sequencer
"""

from .surface import DrawSurface, PillowSurface
from .video_handle import VideoHandle, FrameListVideo
from .video_decoder import MoviePyVideo, open_video
from .compositor import Compositor
from .frame_sequencer import FrameSequencer, ExportResult

__all__ = [
    'DrawSurface',
    'PillowSurface',
    'VideoHandle',
    'FrameListVideo',
    'MoviePyVideo',
    'open_video',
    'Compositor',
    'FrameSequencer',
    'ExportResult',
]
