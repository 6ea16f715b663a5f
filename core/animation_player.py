"""
Animation Player
Handles playback state and the global frame counter
"""

from enum import Enum
from typing import Any, Callable, Optional

from .asset_library import AssetLibrary
from .exceptions import AniTypeError
from .frame_source import LiveFrameSource, pump


class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class FrameScheduler:
    """Host timer that calls back once per animation tick"""

    def start(self, callback: Callable[[], None]):
        raise NotImplementedError

    def stop(self):
        raise NotImplementedError


class PlaybackController:
    """Drives the render function from scheduler ticks"""

    def __init__(self, library: AssetLibrary, render: Callable[[int], Any],
                 scheduler: FrameScheduler,
                 validate: Optional[Callable[[], None]] = None,
                 status_callback: Optional[Callable[[int], None]] = None,
                 log_callback: Optional[Callable[[str, str], None]] = None):
        self.library = library
        self.render = render
        self.scheduler = scheduler
        self.validate = validate
        self.status_callback = status_callback
        self.log_callback = log_callback
        self.source = LiveFrameSource()
        self.state = PlaybackState.STOPPED
        self.last_result: Any = None

    @property
    def global_frame(self) -> int:
        return self.source.frame

    @property
    def playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    def _log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    def start(self) -> bool:
        """
        Start playback from frame 0

        Returns:
            False if the composition cannot be played
        """
        if self.validate:
            try:
                self.validate()
            except AniTypeError as exc:
                self._log(f"Cannot start playback: {exc}", "ERROR")
                return False

        if self.playing:
            self.scheduler.stop()

        self.source.reset()
        for handle in self.library.video_handles():
            try:
                handle.seek(0)
                handle.play()
            except Exception:
                # A clip that refuses to play is simply drawn from its seek position
                pass

        self.state = PlaybackState.PLAYING
        self.scheduler.start(self.tick)
        return True

    def stop(self):
        """Stop playback, keeping the current frame"""
        self.scheduler.stop()
        for handle in self.library.video_handles():
            handle.pause()
        self.state = PlaybackState.STOPPED

    def toggle(self) -> bool:
        """Toggle between playing and stopped; returns the new playing flag"""
        if self.playing:
            self.stop()
        else:
            self.start()
        return self.playing

    def tick(self):
        """Advance one frame and render it"""
        if not self.playing:
            return
        results = pump(self.source, self.render, max_frames=1)
        self.last_result = results[0] if results else None
        if self.status_callback:
            self.status_callback(self.global_frame)

    def reset(self):
        """Stop and render frame 0"""
        self.stop()
        self.source.reset()
        self.last_result = self.render(0)
        if self.status_callback:
            self.status_callback(self.global_frame)
