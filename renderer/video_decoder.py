"""
Video Decoder
Opens video letter clips with moviepy and serves frames on demand
"""

from typing import Optional

import numpy as np
from PIL import Image

from .video_handle import VideoHandle


class MoviePyVideo(VideoHandle):
    """Video handle over a moviepy clip"""

    def __init__(self, clip):
        self.clip = clip
        self.current_time = 0.0
        self.playing = False
        self._cached_time: Optional[float] = None
        self._cached_image: Optional[Image.Image] = None

    @property
    def duration(self) -> float:
        return float(self.clip.duration or 0.0)

    @property
    def size(self):
        width, height = self.clip.size
        return int(width), int(height)

    def seek(self, seconds: float):
        self.current_time = max(0.0, float(seconds))

    def play(self):
        self.playing = True

    def pause(self):
        self.playing = False

    def current_image(self) -> Optional[Image.Image]:
        if self._cached_time == self.current_time:
            return self._cached_image

        frame = np.asarray(self.clip.get_frame(self.current_time), dtype=np.uint8)
        image = Image.fromarray(frame[:, :, :3]).convert("RGBA")
        mask = getattr(self.clip, "mask", None)
        if mask is not None:
            # Mask frames are 0..1 floats
            alpha = np.clip(np.asarray(mask.get_frame(self.current_time)) * 255, 0, 255)
            image.putalpha(Image.fromarray(alpha.astype(np.uint8)))

        self._cached_time = self.current_time
        self._cached_image = image
        return image

    def close(self):
        self.clip.close()


def open_video(path: str) -> MoviePyVideo:
    """Open a clip with its alpha channel and without audio"""
    from moviepy import VideoFileClip

    return MoviePyVideo(VideoFileClip(path, has_mask=True, audio=False))
