"""rasterkit: 2D raster drawing primitives in two fidelities.

Draws lines, rectangles, circles, arcs and rounded rectangles onto a pixel
canvas, either aliased (integer scan-conversion) or anti-aliased (fractional
coverage, alpha-blended edges).

Architecture layers (strict one-way dependency):
    scripts/ → rasterkit/scene.py → rasterkit/renderers/ → rasterkit/canvas.py → rasterkit/utils/

Key invariants:
    - Pixel coordinates are ints, top-left origin, +Y down
    - Angles grow clockwise on screen (0° = +X, 90° = +Y)
    - Out-of-bounds writes are dropped, never raised
    - Renderers are stateless; the canvas is the only mutable state
    - YAML-only configs, validated with pydantic

Quick start:
    from rasterkit import AntiAliasingRenderer, Circle, RgbaCanvas, BLUE

    canvas = RgbaCanvas(64, 64)
    AntiAliasingRenderer().draw_filled_circle(canvas, Circle((32, 32), 20), BLUE)
    canvas.save("circle.png")
"""

from .canvas import Canvas, RgbaCanvas
from .renderers import AntiAliasingRenderer, BasicRenderer, Renderer, get_renderer
from .utils.color import BLACK, BLUE, GREEN, RED, TRANSPARENT, WHITE, Rgba
from .utils.geometry import Angle, Circle, Rect, arc_span, inside_arc

__version__ = "0.3.0"

__all__ = [
    "Angle",
    "AntiAliasingRenderer",
    "BasicRenderer",
    "Canvas",
    "Circle",
    "Rect",
    "Renderer",
    "RgbaCanvas",
    "Rgba",
    "arc_span",
    "get_renderer",
    "inside_arc",
    "BLACK",
    "BLUE",
    "GREEN",
    "RED",
    "TRANSPARENT",
    "WHITE",
]
