"""
Frame sources
Producers of global frame numbers consumed by a single render loop
"""

from typing import Any, Callable, List, Optional


class FrameSource:
    """Yields global frame numbers, one per pull"""

    def next_frame(self) -> Optional[int]:
        """Next frame to render, or None when the source is exhausted"""
        raise NotImplementedError


class LiveFrameSource(FrameSource):
    """Real-time source: each pull advances the counter by exactly one"""

    def __init__(self):
        self.frame: int = 0

    def reset(self):
        self.frame = 0

    def next_frame(self) -> Optional[int]:
        self.frame += 1
        return self.frame


class SweepFrameSource(FrameSource):
    """Eager source covering ``[0, total_frames)`` in increasing order"""

    def __init__(self, total_frames: int):
        self.total_frames = max(0, int(total_frames))
        self._next = 0

    def __len__(self) -> int:
        return self.total_frames

    def next_frame(self) -> Optional[int]:
        if self._next >= self.total_frames:
            return None
        frame = self._next
        self._next += 1
        return frame


def pump(source: FrameSource, render: Callable[[int], Any],
         max_frames: Optional[int] = None) -> List[Any]:
    """
    Pull frames from ``source`` and render each one

    Args:
        source: Frame producer
        render: Render function taking a global frame number
        max_frames: Stop after this many frames (None = until exhausted)

    Returns:
        Render results in frame order
    """
    results = []
    while max_frames is None or len(results) < max_frames:
        frame = source.next_frame()
        if frame is None:
            break
        results.append(render(frame))
    return results
