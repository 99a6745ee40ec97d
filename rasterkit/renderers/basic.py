"""Aliased renderer: integer scan-conversion, direct pixel writes.

Algorithms:
    - Lines: generalized Bresenham (8-connected, all octants)
    - Circles: midpoint algorithm, one octant mirrored 8 ways
    - Arcs: midpoint circle filtered through inside_arc()
    - Fills: horizontal spans between mirrored octant points
    - Rounded rects: straight edges + quarter arcs through this renderer

All writes go through Canvas.set_pixel, which drops out-of-bounds pixels, so
shapes hanging over the canvas edge are clipped rather than rejected.
"""

from typing import Iterator, Tuple

from rasterkit.canvas import Canvas
from rasterkit.renderers.base import (
    PixelFilter,
    Point,
    compose_filled_rounded_rect,
    compose_rounded_rect,
)
from rasterkit.utils.color import Rgba
from rasterkit.utils.geometry import Angle, Circle, Rect, arc_span, inside_arc


def bresenham_points(start: Point, end: Point) -> Iterator[Point]:
    """Yield the pixels of the Bresenham line from start to end, inclusive.

    Notes
    -----
    Error-accumulator form: err = dx + dy with dy = -|Δy|. Both axis
    steps may fire in the same iteration, giving an 8-connected line.
    """
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1

    err = dx + dy
    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            return
        err2 = 2 * err
        if err2 >= dy:
            err += dy
            x += sx
        if err2 <= dx:
            err += dx
            y += sy


def midpoint_octant(radius: int) -> Iterator[Tuple[int, int]]:
    """Yield (x, y) for the octant from (0, r) to the 45° diagonal."""
    x, y = 0, radius
    p = 1 - radius
    while x <= y:
        yield x, y
        x += 1
        if p < 0:
            p += 2 * x + 1
        else:
            y -= 1
            p += 2 * (x - y) + 1


def eight_way(x: int, y: int) -> Tuple[Tuple[int, int], ...]:
    """The 8 reflections of an octant offset."""
    return ((x, y), (y, x), (-y, x), (-x, y), (-x, -y), (-y, -x), (y, -x), (x, -y))


def _fill_spans(x: int, y: int):
    # (left, right, row) offsets of the four spans one octant step covers
    return (
        (-x, x, y),
        (-y, y, x),
        (-x, x, -y),
        (-y, y, -x),
    )


class BasicRenderer:
    """Aliased renderer.

    Stateless; a single instance can be shared freely.

    Examples
    --------
    >>> canvas = RgbaCanvas(32, 32)
    >>> BasicRenderer().draw_circle(canvas, Circle((16, 16), 10), BLACK)
    """

    def filtered_draw_line(self, canvas: Canvas, start: Point, end: Point,
                           color: Rgba, accept: PixelFilter) -> None:
        """Draw a Bresenham line, skipping pixels where accept(x, y) is False.

        The traced geometry is identical to draw_line(); only the writes
        are filtered.
        """
        for x, y in bresenham_points(start, end):
            if accept(x, y):
                canvas.set_pixel(x, y, color)

    def draw_line(self, canvas: Canvas, start: Point, end: Point, color: Rgba) -> None:
        for x, y in bresenham_points(start, end):
            canvas.set_pixel(x, y, color)

    def draw_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None:
        for x in range(rect.left, rect.right + 1):
            canvas.set_pixel(x, rect.top, color)
            canvas.set_pixel(x, rect.bottom, color)
        for y in range(rect.top, rect.bottom + 1):
            canvas.set_pixel(rect.left, y, color)
            canvas.set_pixel(rect.right, y, color)

    def draw_filled_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None:
        for y in range(rect.top, rect.bottom + 1):
            for x in range(rect.left, rect.right + 1):
                canvas.set_pixel(x, y, color)

    def draw_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None:
        if circle.radius == 0:
            return
        cx, cy = circle.center
        for x, y in midpoint_octant(circle.radius):
            for dx, dy in eight_way(x, y):
                canvas.set_pixel(cx + dx, cy + dy, color)

    def draw_filled_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None:
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center

        self.draw_line(canvas, (cx + r, cy), (cx - r, cy), color)
        self.draw_line(canvas, (cx, cy + r), (cx, cy - r), color)

        for x, y in midpoint_octant(r):
            for left, right, row in _fill_spans(x, y):
                self.draw_line(canvas, (cx + left, cy + row), (cx + right, cy + row), color)

    def draw_arc(self, canvas: Canvas, circle: Circle, start: Angle, end: Angle,
                 color: Rgba) -> None:
        if circle.radius == 0:
            return
        cx, cy = circle.center
        lo, hi = arc_span(start, end)

        for x, y in midpoint_octant(circle.radius):
            for dx, dy in eight_way(x, y):
                if inside_arc((dx, dy), lo, hi):
                    canvas.set_pixel(cx + dx, cy + dy, color)

    def draw_filled_arc(self, canvas: Canvas, circle: Circle, start: Angle, end: Angle,
                        color: Rgba) -> None:
        """Fill the wedge between start and end.

        The center pixel is always written; the two axis diameters seed the
        wedge edges at 0/90/180/270° and every fill span is masked pixel by
        pixel.
        """
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center
        lo, hi = arc_span(start, end)

        def in_wedge(x: int, y: int) -> bool:
            return inside_arc((x - cx, y - cy), lo, hi)

        canvas.set_pixel(cx, cy, color)
        self.filtered_draw_line(canvas, (cx - r, cy), (cx + r, cy), color, in_wedge)
        self.filtered_draw_line(canvas, (cx, cy - r), (cx, cy + r), color, in_wedge)

        for x, y in midpoint_octant(r):
            for left, right, row in _fill_spans(x, y):
                self.filtered_draw_line(
                    canvas, (cx + left, cy + row), (cx + right, cy + row), color, in_wedge
                )

    def draw_rounded_rect(self, canvas: Canvas, rect: Rect, corner_radius: int,
                          color: Rgba) -> None:
        compose_rounded_rect(self, canvas, rect, corner_radius, color)

    def draw_filled_rounded_rect(self, canvas: Canvas, rect: Rect, corner_radius: int,
                                 color: Rgba) -> None:
        compose_filled_rounded_rect(self, canvas, rect, corner_radius, color)
