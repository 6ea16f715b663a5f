"""
Frame Sequencer
Renders every frame of the timeline for export
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from core.animation_player import PlaybackController
from core.asset_library import AssetLibrary
from core.data_structures import ProjectSettings
from core.frame_source import SweepFrameSource, pump
from utils.export_names import sanitize_filename
from .compositor import Compositor


@dataclass
class ExportResult:
    """Rendered frames plus what an encoder needs to assemble them"""
    frames: List = field(default_factory=list)
    fps: float = 30
    frame_count: int = 0
    suggested_name: str = ''

    def to_array(self) -> np.ndarray:
        """Frames stacked as a (frames, height, width, 4) uint8 array"""
        if not self.frames:
            return np.zeros((0, 0, 0, 4), dtype=np.uint8)
        return np.stack([np.asarray(frame, dtype=np.uint8) for frame in self.frames])


class FrameSequencer:
    """Synchronous sweep over ``[0, total_frames)``"""

    def __init__(self, compositor: Compositor,
                 playback: Optional[PlaybackController] = None,
                 log_callback: Optional[Callable[[str, str], None]] = None):
        self.compositor = compositor
        self.playback = playback
        self.log_callback = log_callback

    def _log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    def render_all(self, library: AssetLibrary, settings: ProjectSettings,
                   progress_callback: Optional[Callable[[int, int], None]] = None
                   ) -> ExportResult:
        """
        Render the full timeline

        Playback is stopped for the sweep and restarted from frame 0
        afterwards if it was running.

        Args:
            library: Letter assets
            settings: Project settings
            progress_callback: Called with (frames_done, total_frames)

        Returns:
            ExportResult with one image per frame
        """
        self.compositor.validate(library, settings)
        total = self.compositor.total_frames(library, settings)
        result = ExportResult(fps=settings.fps, suggested_name=sanitize_filename(settings.text))

        layout, _ = self.compositor.resolve(library, settings)
        if layout.is_empty:
            self._log("Nothing to export: no letters match the text", "WARNING")
            return result

        was_playing = bool(self.playback and self.playback.playing)
        if was_playing:
            self.playback.stop()

        def render(frame: int):
            image = self.compositor.render(library, settings, frame).image
            result.frames.append(image)
            if progress_callback:
                progress_callback(len(result.frames), total)
            return image

        try:
            self._log(f"Rendering {total} frames at {settings.fps:g} FPS", "INFO")
            pump(SweepFrameSource(total), render)
        finally:
            if was_playing:
                self.playback.start()

        result.frame_count = len(result.frames)
        self._log(f"Rendered {result.frame_count} frames", "SUCCESS")
        return result
