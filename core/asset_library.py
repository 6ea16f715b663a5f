"""
Asset Library
Holds the decoded letter assets keyed by uppercase character
"""

import itertools
import math
from dataclasses import replace
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple

from .data_structures import AssetDescriptor, AssetKind

_library_serials = itertools.count(1)


def video_frame_count(duration: float, fps: float) -> int:
    """Frames a clip of ``duration`` seconds spans at ``fps`` (at least 1)"""
    return max(1, math.floor(duration * fps))


class AssetLibrary:
    """
    Insertion-ordered store of letter assets.

    Every mutation bumps ``version`` so cached layouts can tell when the
    library they were built from has changed. ``serial`` is unique per
    instance for the lifetime of the process, unlike ``id()``.
    """

    def __init__(self):
        self._assets: Dict[str, AssetDescriptor] = {}
        self.version: int = 0
        self.serial: int = next(_library_serials)

    def __contains__(self, letter: object) -> bool:
        return letter in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)

    def get(self, letter: str) -> Optional[AssetDescriptor]:
        return self._assets.get(letter)

    def assets(self):
        return self._assets.values()

    def letters(self) -> Tuple[str, ...]:
        return tuple(self._assets)

    def add(self, letter: str, asset: AssetDescriptor):
        """
        Register an asset for a letter, replacing any previous one

        Args:
            letter: Single character; stored uppercased
            asset: Descriptor produced by the decoding layer
        """
        if len(letter) != 1:
            raise ValueError(f"Letter key must be a single character, got {letter!r}")
        if asset.frame_count < 1:
            raise ValueError(f"Asset for {letter!r} has no frames")
        key = letter.upper()
        # Re-adding moves the letter to the end, matching a fresh insert
        self._assets.pop(key, None)
        self._assets[key] = asset
        self.version += 1

    def add_video(self, letter: str, handle: Any, width: int, height: int,
                  duration: float, fps: float) -> AssetDescriptor:
        """Register a video clip; its frame count follows the project fps"""
        asset = AssetDescriptor(
            kind=AssetKind.VIDEO,
            width=int(width),
            height=int(height),
            frame_count=video_frame_count(duration, fps),
            duration=float(duration),
            source=handle,
        )
        self.add(letter, asset)
        return asset

    def add_image_sequence(self, letter: str, frames: Sequence[Any]) -> AssetDescriptor:
        """Register an ordered list of still images; size comes from the first"""
        frames = tuple(frames)
        if not frames:
            raise ValueError(f"Image sequence for {letter!r} is empty")
        width, height = frames[0].size
        asset = AssetDescriptor(
            kind=AssetKind.IMAGE_SEQUENCE,
            width=int(width),
            height=int(height),
            frame_count=len(frames),
            source=frames,
        )
        self.add(letter, asset)
        return asset

    def remove(self, letter: str) -> bool:
        removed = self._assets.pop(letter.upper(), None) is not None
        if removed:
            self.version += 1
        return removed

    def clear(self):
        if self._assets:
            self._assets.clear()
            self.version += 1

    def video_handles(self):
        """Yield the external handle of every video asset"""
        for asset in self._assets.values():
            if asset.is_video and asset.source is not None:
                yield asset.source

    def recompute_video_frame_counts(self, fps: float) -> int:
        """
        Second pass of an fps change: refresh every video's frame count

        Returns:
            Number of assets whose frame count changed
        """
        changed = 0
        for letter, asset in list(self._assets.items()):
            if not asset.is_video or not asset.duration:
                continue
            frame_count = video_frame_count(asset.duration, fps)
            if frame_count != asset.frame_count:
                self._assets[letter] = replace(asset, frame_count=frame_count)
                changed += 1
        if changed:
            self.version += 1
        return changed
