"""
Draw surfaces
Raster targets the compositor blits letter frames onto
"""

from typing import Tuple

from PIL import Image

from core.timeline import round_half_up


class DrawSurface:
    """Minimal raster target: opaque draw-in-place at a top-left position"""

    width: int = 0
    height: int = 0

    def draw_image(self, image, x: float, y: float):
        raise NotImplementedError


class PillowSurface(DrawSurface):
    """RGBA canvas backed by a Pillow image"""

    def __init__(self, width: int, height: int,
                 background: Tuple[int, int, int, int] = (0, 0, 0, 0)):
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGBA", (self.width, self.height), background)

    def draw_image(self, image: Image.Image, x: float, y: float):
        """Paste ``image`` unscaled with its top-left corner at (x, y)"""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self.image.paste(image, (round_half_up(x), round_half_up(y)))
