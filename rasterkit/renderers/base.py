"""Renderer contract shared by both fidelity tiers.

Every renderer exposes the same ten drawing operations. Renderers are
stateless: each call is a pure function of (canvas, shape, color) plus the
pixels already on the canvas. Repeated blending calls are not idempotent
(alpha accumulates).

Points are (x, y) integer pixel coordinates, top-left origin, +Y down.
"""

import logging
from typing import Callable, Protocol, Tuple, runtime_checkable

from rasterkit.canvas import Canvas
from rasterkit.utils.color import Rgba
from rasterkit.utils.geometry import Angle, Circle, Rect

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

PixelFilter = Callable[[int, int], bool]
"""Per-pixel inclusion test: accept(x, y) -> bool."""


@runtime_checkable
class Renderer(Protocol):
    """Uniform drawing interface of BasicRenderer and AntiAliasingRenderer."""

    def draw_line(self, canvas: Canvas, start: Point, end: Point, color: Rgba) -> None: ...

    def draw_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None: ...

    def draw_filled_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None: ...

    def draw_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None: ...

    def draw_filled_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None: ...

    def draw_arc(
        self, canvas: Canvas, circle: Circle, start: Angle, end: Angle, color: Rgba
    ) -> None: ...

    def draw_filled_arc(
        self, canvas: Canvas, circle: Circle, start: Angle, end: Angle, color: Rgba
    ) -> None: ...

    def draw_rounded_rect(
        self, canvas: Canvas, rect: Rect, corner_radius: int, color: Rgba
    ) -> None: ...

    def draw_filled_rounded_rect(
        self, canvas: Canvas, rect: Rect, corner_radius: int, color: Rgba
    ) -> None: ...


def check_corner_radius(rect: Rect, corner_radius: int) -> None:
    """Reject corner radii that would invert the straight edges.

    Raises
    ------
    ValueError
        If corner_radius < 0 or 2 * corner_radius exceeds width or height.
    """
    if corner_radius < 0:
        raise ValueError(f"corner_radius must be >= 0, got {corner_radius}")
    if 2 * corner_radius > rect.width or 2 * corner_radius > rect.height:
        raise ValueError(
            f"corner_radius {corner_radius} exceeds half of "
            f"{rect.width}x{rect.height} rect"
        )


def corner_arcs(rect: Rect, corner_radius: int):
    """Quarter-circle corners of a rounded rect.

    Returns
    -------
    list[tuple[Circle, Angle, Angle]]
        (circle, start, end) per corner: bottom-right 0–90°, bottom-left
        90–180°, top-left 180–270°, top-right 270–360°.
    """
    r = corner_radius
    return [
        (Circle((rect.right - r, rect.bottom - r), r), Angle.degrees(0), Angle.degrees(90)),
        (Circle((rect.left + r, rect.bottom - r), r), Angle.degrees(90), Angle.degrees(180)),
        (Circle((rect.left + r, rect.top + r), r), Angle.degrees(180), Angle.degrees(270)),
        (Circle((rect.right - r, rect.top + r), r), Angle.degrees(270), Angle.degrees(360)),
    ]


def compose_rounded_rect(renderer: Renderer, canvas: Canvas, rect: Rect,
                         corner_radius: int, color: Rgba) -> None:
    """Outline a rounded rect with renderer's own draw_line / draw_arc."""
    check_corner_radius(rect, corner_radius)
    r = corner_radius
    logger.debug("rounded_rect %s r=%d via %s", rect, r, type(renderer).__name__)

    renderer.draw_line(canvas, (rect.left, rect.top + r), (rect.left, rect.bottom - r), color)
    renderer.draw_line(canvas, (rect.right, rect.top + r), (rect.right, rect.bottom - r), color)
    renderer.draw_line(canvas, (rect.left + r, rect.top), (rect.right - r, rect.top), color)
    renderer.draw_line(canvas, (rect.left + r, rect.bottom), (rect.right - r, rect.bottom), color)

    for circle, start, end in corner_arcs(rect, r):
        renderer.draw_arc(canvas, circle, start, end, color)


def compose_filled_rounded_rect(renderer: Renderer, canvas: Canvas, rect: Rect,
                                corner_radius: int, color: Rgba) -> None:
    """Fill a rounded rect with renderer's own draw_filled_rect / draw_filled_arc.

    Three boxes (a full-height middle band and the two side bands between
    the corners) plus four filled quarter arcs.
    """
    check_corner_radius(rect, corner_radius)
    r = corner_radius
    logger.debug("filled_rounded_rect %s r=%d via %s", rect, r, type(renderer).__name__)

    renderer.draw_filled_rect(
        canvas, Rect(rect.left + r, rect.top, rect.width - 2 * r, rect.height), color
    )
    renderer.draw_filled_rect(
        canvas, Rect(rect.left, rect.top + r, r, rect.height - 2 * r), color
    )
    renderer.draw_filled_rect(
        canvas, Rect(rect.right - r, rect.top + r, r, rect.height - 2 * r), color
    )

    for circle, start, end in corner_arcs(rect, r):
        renderer.draw_filled_arc(canvas, circle, start, end, color)
