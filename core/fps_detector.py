"""
Frame Rate Detector
Infers a project frame rate from the loaded letter assets
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from .asset_library import AssetLibrary
from .data_structures import AssetKind, ProjectSettings
from .timeline import round_half_up

MAX_VIDEO_FPS = 120


class FpsSource(Enum):
    VIDEO = "video"
    SEQUENCE = "sequence"
    DEFAULT = "default"


@dataclass(frozen=True)
class FpsDetection:
    """Outcome of a detection pass"""
    fps: float
    source: FpsSource
    changed: bool = False

    def describe(self) -> str:
        if self.source is FpsSource.DEFAULT:
            return f"Default: {self.fps:g} FPS"
        return f"Auto-detected: {self.fps:g} FPS from clips"


class FrameRateDetector:
    """Detects fps from clips and applies it to settings and library"""

    def __init__(self, log_callback: Optional[Callable[[str, str], None]] = None):
        self.log_callback = log_callback

    def _log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    @staticmethod
    def detect(library: AssetLibrary) -> Optional[Tuple[int, FpsSource]]:
        """
        Find the first conclusive frame rate signal

        Video clips take precedence over image sequences. Frame counts are
        read as stored, i.e. computed with the previous project fps.

        Returns:
            (fps, source) or None when nothing is conclusive
        """
        for asset in library.assets():
            if asset.kind is AssetKind.VIDEO and asset.duration and asset.duration > 0:
                fps = round_half_up(asset.frame_count / asset.duration)
                if 0 < fps <= MAX_VIDEO_FPS:
                    return fps, FpsSource.VIDEO

        for threshold in (24, 12):
            for asset in library.assets():
                if asset.kind is AssetKind.IMAGE_SEQUENCE and asset.frame_count >= threshold:
                    return threshold, FpsSource.SEQUENCE
        return None

    @staticmethod
    def change_fps(library: AssetLibrary, settings: ProjectSettings,
                   fps: float) -> Tuple[ProjectSettings, int]:
        """
        Switch the project to ``fps`` and re-time every video clip for it

        Used both after detection and when the user edits the rate, so video
        frame counts always match the project fps.

        Returns:
            (new_settings, number_of_clips_retimed)
        """
        if fps != settings.fps:
            settings = replace(settings, fps=fps)
        return settings, library.recompute_video_frame_counts(fps)

    def apply(self, library: AssetLibrary,
              settings: ProjectSettings) -> Tuple[ProjectSettings, FpsDetection]:
        """
        Detect, then update fps and video frame counts if the rate changed

        Detection finishes before any frame count is touched; recomputing
        video frame counts is a separate pass over the library.
        """
        found = self.detect(library)
        if found is None:
            detection = FpsDetection(settings.fps, FpsSource.DEFAULT)
            self._log(detection.describe(), "INFO")
            return settings, detection

        fps, source = found
        if fps == settings.fps:
            return settings, FpsDetection(fps, source, changed=False)

        new_settings, updated = self.change_fps(library, settings, fps)
        detection = FpsDetection(fps, source, changed=True)
        self._log(f"{detection.describe()} ({updated} video clip(s) re-timed)", "INFO")
        return new_settings, detection
