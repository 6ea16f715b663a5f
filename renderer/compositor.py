"""
Compositor
Render pipeline shared by live playback and export
"""

from collections import OrderedDict
from typing import Callable, Optional, Tuple

from core.asset_library import AssetLibrary
from core.data_structures import (
    LayoutResult,
    ProjectSettings,
    RenderResult,
    ResolvedLetter,
)
from core.frame_index import resolve_frame_index, sequence_frame, sync_video_handle
from core.text_layout import TextLayoutResolver
from core.timeline import TimelineResolver
from .surface import DrawSurface, PillowSurface


class Compositor:
    """Lays out the text, resolves every letter's frame and draws it"""

    CACHE_SIZE = 16

    def __init__(self, surface_factory: Callable[[int, int], DrawSurface] = PillowSurface,
                 log_callback: Optional[Callable[[str, str], None]] = None):
        self.surface_factory = surface_factory
        self.log_callback = log_callback
        self._cache: "OrderedDict[tuple, Tuple[LayoutResult, int]]" = OrderedDict()

    def _log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    def resolve(self, library: AssetLibrary,
                settings: ProjectSettings) -> Tuple[LayoutResult, int]:
        """
        Layout and animation duration for the current settings

        Both are pure functions of the inputs, so they are cached by the
        settings value and the library's serial and version.
        """
        key = (settings, library.serial, library.version)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        layout = TextLayoutResolver.layout(library, settings)
        duration = TimelineResolver.resolve_duration(library, layout.lines, settings)
        self._cache[key] = (layout, duration)
        if len(self._cache) > self.CACHE_SIZE:
            self._cache.popitem(last=False)
        return layout, duration

    def validate(self, library: AssetLibrary, settings: ProjectSettings):
        """Raise StaggerOverflowError if the text cannot be staggered"""
        layout, _ = self.resolve(library, settings)
        TimelineResolver.validate(layout.lines, settings)

    def total_frames(self, library: AssetLibrary, settings: ProjectSettings) -> int:
        layout, duration = self.resolve(library, settings)
        return TimelineResolver.total_frames(layout.lines, duration, settings)

    def render(self, library: AssetLibrary, settings: ProjectSettings,
               frame: int, draw: bool = True) -> RenderResult:
        """
        Render one global frame

        Args:
            library: Letter assets
            settings: Project settings
            frame: Global frame number
            draw: When False only frame decisions are computed

        Returns:
            RenderResult; ``image`` is None for an empty composition or when
            ``draw`` is False
        """
        layout, duration = self.resolve(library, settings)
        result = RenderResult(frame=frame, layout=layout, duration_frames=duration)
        if layout.is_empty:
            return result

        surface = None
        if draw:
            surface = self.surface_factory(layout.canvas_width, layout.canvas_height)

        for placed in layout.placements:
            asset = library.get(placed.letter)
            offset = TimelineResolver.stagger_offset(placed.slot, settings)
            index = resolve_frame_index(asset, frame, offset, duration,
                                        settings.hold_last_frame)
            drawn = False
            if surface is not None:
                drawn = self._draw_letter(surface, asset, index, placed.x, placed.y,
                                          settings.fps, placed.letter)
            result.letters.append(ResolvedLetter(
                letter=placed.letter,
                x=placed.x,
                y=placed.y,
                stagger_offset=offset,
                frame_index=index,
                drawn=drawn,
            ))

        if surface is not None:
            result.image = getattr(surface, "image", surface)
        return result

    def _draw_letter(self, surface: DrawSurface, asset, index: int, x: float, y: float,
                     fps: float, letter: str) -> bool:
        try:
            if asset.is_video:
                handle = asset.source
                if handle is None:
                    return False
                sync_video_handle(handle, index, fps, asset.duration)
                image = handle.current_image()
            else:
                image = sequence_frame(asset, index)
            if image is None:
                return False
            surface.draw_image(image, x, y)
            return True
        except Exception as exc:
            # Decoders and surfaces raise their own error types
            self._log(f"Skipped letter '{letter}' frame {index}: {exc}", "WARNING")
            return False
