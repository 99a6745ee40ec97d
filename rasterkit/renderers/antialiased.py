"""Anti-aliased renderer: fractional coverage, alpha-blended edges.

Algorithms:
    - Lines: Wu's algorithm; each major-axis step splits coverage between
      the two pixels straddling the true minor-axis position
    - Circles: floating-point octant walk, x = ceil(sqrt(r² - y²)); the
      ceiling pixel takes coverage 1 - k and its inward neighbour k, where
      k = ceil(x) - x is the sub-pixel gap to the true edge
    - Arcs: the same walk, each mirrored pixel pair masked by inside_arc()
    - Fills: anti-aliased edge pairs plus interior spans
    - Rects: delegated to BasicRenderer (axis-aligned edges have no partial
      coverage)
    - Rounded rects: straight edges + quarter arcs through this renderer

All writes go through Canvas.blend_pixel; out-of-bounds writes are dropped.
Coverage scales the incoming color's own alpha, so a half-transparent
color stays half-transparent at full coverage.
"""

import math
from typing import Iterator, Tuple

from rasterkit.canvas import Canvas
from rasterkit.renderers.base import (
    PixelFilter,
    Point,
    compose_filled_rounded_rect,
    compose_rounded_rect,
)
from rasterkit.renderers.basic import BasicRenderer, bresenham_points
from rasterkit.utils.color import Rgba, with_coverage
from rasterkit.utils.geometry import Angle, Circle, Rect, arc_span, inside_arc


def coverage_octant(radius: int) -> Iterator[Tuple[int, int, float]]:
    """Yield (x, y, k) from just below (r, 0) to the 45° diagonal.

    x is the ceiling of the true edge abscissa at row y and k = x - true_x,
    in [0, 1).
    """
    x, y = radius, 0
    while x > y:
        y += 1
        real_x = math.sqrt(radius * radius - y * y)
        x = math.ceil(real_x)
        yield x, y, x - real_x


def edge_pairs(x: int, y: int):
    """(outer, inner) offset pairs for the 8 reflections of an edge point.

    The inner pixel is the outer one moved one step toward the center along
    the axis the octant walks across.
    """
    return (
        ((x, y), (x - 1, y)),
        ((y, x), (y, x - 1)),
        ((-y, x), (-y, x - 1)),
        ((-x, y), (-x + 1, y)),
        ((-x, -y), (-x + 1, -y)),
        ((-y, -x), (-y, -x + 1)),
        ((y, -x), (y, -x + 1)),
        ((x, -y), (x - 1, -y)),
    )


def _interior_spans(x: int, y: int):
    # Spans stop one pixel short of the outer edge column/row
    return (
        ((-x + 1, y), (x - 1, y)),
        ((-y, x - 1), (y, x - 1)),
        ((-x + 1, -y), (x - 1, -y)),
        ((-y, -x + 1), (y, -x + 1)),
    )


def _cardinals(r: int):
    return ((r, 0), (-r, 0), (0, r), (0, -r))


class AntiAliasingRenderer:
    """Anti-aliased renderer.

    Stateless; holds a BasicRenderer only to delegate axis-aligned rects.

    Examples
    --------
    >>> canvas = RgbaCanvas(64, 64)
    >>> aa = AntiAliasingRenderer()
    >>> aa.draw_line(canvas, (2, 3), (60, 41), BLACK)
    >>> aa.draw_filled_rounded_rect(canvas, Rect(8, 8, 30, 20), 6, BLUE)
    """

    def __init__(self) -> None:
        self._basic = BasicRenderer()

    def _blend_filtered_span(self, canvas: Canvas, start: Point, end: Point,
                             color: Rgba, accept: PixelFilter) -> None:
        for x, y in bresenham_points(start, end):
            if accept(x, y):
                canvas.blend_pixel(x, y, color)

    def _blend_edge_pair(self, canvas: Canvas, cx: int, cy: int, outer, inner,
                         outer_color: Rgba, inner_color: Rgba) -> None:
        canvas.blend_pixel(cx + outer[0], cy + outer[1], outer_color)
        canvas.blend_pixel(cx + inner[0], cy + inner[1], inner_color)

    def draw_line(self, canvas: Canvas, start: Point, end: Point, color: Rgba) -> None:
        """Wu's line.

        Endpoints are ordered along the major axis first, so (a, b) and
        (b, a) produce the same writes.
        """
        x0, y0 = start
        x1, y1 = end

        steep = abs(y1 - y0) > abs(x1 - x0)
        if steep:
            x0, y0 = y0, x0
            x1, y1 = y1, x1
        if x0 > x1:
            x0, x1 = x1, x0
            y0, y1 = y1, y0

        dx = x1 - x0
        gradient = 1.0 if dx == 0 else (y1 - y0) / dx

        intersect_y = float(y0)
        for x in range(x0, x1 + 1):
            base = math.floor(intersect_y)
            frac = intersect_y - base
            near = with_coverage(color, 1.0 - frac)
            far = with_coverage(color, frac)
            if steep:
                canvas.blend_pixel(base, x, near)
                canvas.blend_pixel(base + 1, x, far)
            else:
                canvas.blend_pixel(x, base, near)
                canvas.blend_pixel(x, base + 1, far)
            intersect_y += gradient

    def draw_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None:
        self._basic.draw_rect(canvas, rect, color)

    def draw_filled_rect(self, canvas: Canvas, rect: Rect, color: Rgba) -> None:
        self._basic.draw_filled_rect(canvas, rect, color)

    def draw_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None:
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center

        for dx, dy in _cardinals(r):
            canvas.blend_pixel(cx + dx, cy + dy, color)

        for x, y, k in coverage_octant(r):
            c1 = with_coverage(color, 1.0 - k)
            c2 = with_coverage(color, k)
            for outer, inner in edge_pairs(x, y):
                self._blend_edge_pair(canvas, cx, cy, outer, inner, c1, c2)

    def draw_filled_circle(self, canvas: Canvas, circle: Circle, color: Rgba) -> None:
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center

        for dx, dy in _cardinals(r):
            canvas.blend_pixel(cx + dx, cy + dy, color)

        self.draw_line(canvas, (cx - r, cy), (cx + r, cy), color)
        self.draw_line(canvas, (cx, cy - r), (cx, cy + r), color)

        for x, y, k in coverage_octant(r):
            c1 = with_coverage(color, 1.0 - k)
            c2 = with_coverage(color, k)
            for outer, inner in edge_pairs(x, y):
                self._blend_edge_pair(canvas, cx, cy, outer, inner, c1, c2)
            for (lx, ly), (rx, ry) in _interior_spans(x, y):
                self.draw_line(canvas, (cx + lx, cy + ly), (cx + rx, cy + ry), color)

    def draw_arc(self, canvas: Canvas, circle: Circle, start: Angle, end: Angle,
                 color: Rgba) -> None:
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center
        lo, hi = arc_span(start, end)

        for dx, dy in _cardinals(r):
            if inside_arc((dx, dy), lo, hi):
                canvas.blend_pixel(cx + dx, cy + dy, color)

        for x, y, k in coverage_octant(r):
            c1 = with_coverage(color, 1.0 - k)
            c2 = with_coverage(color, k)
            for outer, inner in edge_pairs(x, y):
                if inside_arc(outer, lo, hi):
                    self._blend_edge_pair(canvas, cx, cy, outer, inner, c1, c2)

    def draw_filled_arc(self, canvas: Canvas, circle: Circle, start: Angle, end: Angle,
                        color: Rgba) -> None:
        """Fill the wedge between start and end with an anti-aliased rim.

        Center pixel and the masked axis diameters seed the wedge; interior
        spans are masked pixel by pixel.
        """
        r = circle.radius
        if r == 0:
            return
        cx, cy = circle.center
        lo, hi = arc_span(start, end)

        def in_wedge(x: int, y: int) -> bool:
            return inside_arc((x - cx, y - cy), lo, hi)

        canvas.blend_pixel(cx, cy, color)
        self._blend_filtered_span(canvas, (cx - r, cy), (cx + r, cy), color, in_wedge)
        self._blend_filtered_span(canvas, (cx, cy - r), (cx, cy + r), color, in_wedge)

        for x, y, k in coverage_octant(r):
            c1 = with_coverage(color, 1.0 - k)
            c2 = with_coverage(color, k)
            for outer, inner in edge_pairs(x, y):
                if inside_arc(outer, lo, hi):
                    self._blend_edge_pair(canvas, cx, cy, outer, inner, c1, c2)
            for (lx, ly), (rx, ry) in _interior_spans(x, y):
                self._blend_filtered_span(
                    canvas, (cx + lx, cy + ly), (cx + rx, cy + ry), color, in_wedge
                )

    def draw_rounded_rect(self, canvas: Canvas, rect: Rect, corner_radius: int,
                          color: Rgba) -> None:
        compose_rounded_rect(self, canvas, rect, corner_radius, color)

    def draw_filled_rounded_rect(self, canvas: Canvas, rect: Rect, corner_radius: int,
                                 color: Rgba) -> None:
        compose_filled_rounded_rect(self, canvas, rect, corner_radius, color)
