"""Pixel canvases the renderers draw into.

Canvas is the capability every renderer consumes: a mutable 2D pixel grid
with bounded get/set/blend and an in-bounds test. Any object with these
methods works (structural typing); RgbaCanvas is the bundled numpy-backed
implementation.

Clip-or-drop semantics:
    - set_pixel / blend_pixel outside the grid are silently dropped
    - get_pixel outside the grid raises IndexError (a read has no sane default)

Usage:
    from rasterkit.canvas import RgbaCanvas
    from rasterkit.utils.color import BLACK

    canvas = RgbaCanvas(64, 64)
    canvas.set_pixel(3, 4, BLACK)
    canvas.save("outputs/dot.png")

Memory layout: (H, W, 4) uint8, row-major, indexed [y, x, channel].
"""

from pathlib import Path
from typing import Protocol, Union, runtime_checkable

import numpy as np
from PIL import Image

from rasterkit.utils import fs
from rasterkit.utils.color import WHITE, ColorLike, Rgba, blend_over, parse_color


@runtime_checkable
class Canvas(Protocol):
    """Mutable pixel grid consumed by the renderers."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def in_bounds(self, x: int, y: int) -> bool: ...

    def get_pixel(self, x: int, y: int) -> Rgba: ...

    def set_pixel(self, x: int, y: int, color: Rgba) -> None: ...

    def blend_pixel(self, x: int, y: int, color: Rgba) -> None: ...


class RgbaCanvas:
    """Canvas backed by an (H, W, 4) uint8 numpy array.

    Parameters
    ----------
    width, height : int
        Size in pixels, both > 0.
    background : ColorLike
        Initial fill, default opaque white.

    Attributes
    ----------
    pixels : np.ndarray
        The live (H, W, 4) uint8 buffer. Writes through it are visible to
        the canvas and vice versa.
    """

    def __init__(self, width: int, height: int, background: ColorLike = WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.pixels = np.empty((height, width, 4), dtype=np.uint8)
        self.fill(background)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "RgbaCanvas":
        """Wrap an existing (H, W, 4) uint8 array without copying."""
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError(
                f"Expected (H, W, 4) uint8 array, got {pixels.shape} {pixels.dtype}"
            )
        canvas = cls.__new__(cls)
        canvas.pixels = pixels
        return canvas

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Rgba:
        if not self.in_bounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        return Rgba(*(int(c) for c in self.pixels[y, x]))

    def set_pixel(self, x: int, y: int, color: Rgba) -> None:
        if self.in_bounds(x, y):
            self.pixels[y, x] = color

    def blend_pixel(self, x: int, y: int, color: Rgba) -> None:
        if self.in_bounds(x, y):
            self.pixels[y, x] = blend_over(self.get_pixel(x, y), color)

    def fill(self, color: ColorLike) -> None:
        """Overwrite every pixel with color."""
        self.pixels[:, :] = parse_color(color)

    def changed_mask(self, background: ColorLike = WHITE) -> np.ndarray:
        """Boolean (H, W) mask of pixels that differ from background."""
        ref = np.asarray(parse_color(background), dtype=np.uint8)
        return np.any(self.pixels != ref, axis=2)

    def to_image(self) -> Image.Image:
        """Copy the buffer into a Pillow RGBA image."""
        return Image.fromarray(self.pixels.copy())

    def save(self, path: Union[str, Path]) -> Path:
        """Write the canvas to an image file atomically, return the path."""
        path = Path(path)
        fs.atomic_save_image(self.pixels, path)
        return path

    def __repr__(self) -> str:
        return f"RgbaCanvas({self.width}x{self.height})"
