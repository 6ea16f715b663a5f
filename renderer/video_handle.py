"""
Video handles
Seekable clip interface used for video letter assets
"""

from typing import List, Optional, Sequence

from PIL import Image


class VideoHandle:
    """
    Interface the compositor expects from a decoded video clip

    ``current_time`` is the playhead in seconds. ``current_image`` returns
    the frame at the playhead or None while the frame is not ready.
    """

    current_time: float = 0.0

    def seek(self, seconds: float):
        raise NotImplementedError

    def play(self):
        raise NotImplementedError

    def pause(self):
        raise NotImplementedError

    def current_image(self) -> Optional[Image.Image]:
        raise NotImplementedError

    def close(self):
        """Release decoder resources"""


class FrameListVideo(VideoHandle):
    """Video handle over frames that are already decoded into memory"""

    def __init__(self, frames: Sequence[Image.Image], fps: float):
        if not frames:
            raise ValueError("FrameListVideo needs at least one frame")
        if fps <= 0:
            raise ValueError(f"Invalid clip fps: {fps}")
        self.frames: List[Image.Image] = list(frames)
        self.fps = float(fps)
        self.current_time = 0.0
        self.playing = False
        self.seek_count = 0

    @property
    def duration(self) -> float:
        return len(self.frames) / self.fps

    @property
    def size(self):
        return self.frames[0].size

    def seek(self, seconds: float):
        self.current_time = max(0.0, float(seconds))
        self.seek_count += 1

    def play(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def current_image(self) -> Optional[Image.Image]:
        # Small epsilon so t = n / fps lands on frame n despite float error
        index = int(self.current_time * self.fps + 1e-6)
        if 0 <= index < len(self.frames):
            return self.frames[index]
        return None
