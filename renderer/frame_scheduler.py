"""
Qt frame scheduler
QTimer-backed host clock for live playback
"""

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer

from core.animation_player import FrameScheduler


class QtFrameScheduler(FrameScheduler):
    """Calls the tick callback from a repeating QTimer"""

    def __init__(self, parent: Optional[QObject] = None, interval_ms: int = 16):
        self._callback: Optional[Callable[[], None]] = None
        self.timer = QTimer(parent)
        self.timer.setInterval(interval_ms)  # ~60 FPS
        self.timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self.timer.isActive()

    def start(self, callback: Callable[[], None]):
        self._callback = callback
        self.timer.start()

    def stop(self):
        self.timer.stop()
        self._callback = None

    def _on_timeout(self):
        if self._callback:
            self._callback()
