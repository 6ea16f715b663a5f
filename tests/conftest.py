"""Shared test fixtures and helpers.

Letter assets are built from solid-color Pillow images so tests never touch
real media files.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

import pytest
from PIL import Image

from core.animation_player import FrameScheduler
from core.asset_library import AssetLibrary
from core.data_structures import ProjectSettings


def make_frames(count: int, width: int = 50, height: int = 100,
                color: Tuple[int, int, int] = (255, 0, 0)) -> List[Image.Image]:
    """Solid frames whose blue channel encodes the frame number."""
    return [
        Image.new("RGBA", (width, height), (color[0], color[1], index % 256, 255))
        for index in range(count)
    ]


def build_library(letters: Dict[str, Tuple[int, int, int]]) -> AssetLibrary:
    """Library of image sequences from ``{letter: (width, height, frame_count)}``."""
    library = AssetLibrary()
    for letter, (width, height, frame_count) in letters.items():
        library.add_image_sequence(letter, make_frames(frame_count, width, height))
    return library


class FakeScheduler(FrameScheduler):
    """Scheduler driven by hand instead of a host timer."""

    def __init__(self):
        self.callback: Optional[Callable[[], None]] = None
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback):
        self.callback = callback
        self.start_calls += 1

    def stop(self):
        self.callback = None
        self.stop_calls += 1

    def fire(self, times: int = 1):
        for _ in range(times):
            if self.callback:
                self.callback()


class LogRecorder:
    """Collects (message, level) pairs sent to a log callback."""

    def __init__(self):
        self.entries: List[Tuple[str, str]] = []

    def __call__(self, message: str, level: str = "INFO"):
        self.entries.append((message, level))

    def levels(self) -> List[str]:
        return [level for _, level in self.entries]


@pytest.fixture
def hello_library() -> AssetLibrary:
    """Letters of HELLO WORLD, each 50x100 with a single frame."""
    return build_library({letter: (50, 100, 1) for letter in "HELOWRD"})


@pytest.fixture
def settings() -> ProjectSettings:
    return ProjectSettings()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def log_recorder() -> LogRecorder:
    return LogRecorder()
