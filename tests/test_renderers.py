"""Contract tests shared by both renderer tiers.

Every test here runs once per tier through the `renderer` fixture:
    - Zero-radius circles/arcs perform no writes at all
    - Rect outline/fill pixel sets (closed intervals)
    - Rounded rects: corner_radius validation, r=0 degenerates to a rect,
      corners outside the rounding stay untouched
    - Shapes hanging over the canvas edge are clipped, never raised
    - get_renderer() name lookup

Run:
    pytest tests/test_renderers.py -v
"""

import math
import typing

import pytest

from rasterkit.renderers import (
    RENDERERS,
    AntiAliasingRenderer,
    BasicRenderer,
    Renderer,
    get_renderer,
)
from rasterkit.utils.validators import RendererName
from rasterkit.utils.color import BLUE, RED
from rasterkit.utils.geometry import Angle, Circle, Rect


def rect_outline_points(rect: Rect):
    pts = set()
    for x in range(rect.left, rect.right + 1):
        pts.add((x, rect.top))
        pts.add((x, rect.bottom))
    for y in range(rect.top, rect.bottom + 1):
        pts.add((rect.left, y))
        pts.add((rect.right, y))
    return pts


def rect_fill_points(rect: Rect):
    return {
        (x, y)
        for y in range(rect.top, rect.bottom + 1)
        for x in range(rect.left, rect.right + 1)
    }


# ============================================================================
# LOOKUP
# ============================================================================

@pytest.mark.parametrize("name,cls", [
    ("basic", BasicRenderer),
    ("antialiased", AntiAliasingRenderer),
])
def test_get_renderer(name, cls):
    assert isinstance(get_renderer(name), cls)


@pytest.mark.parametrize("name", ["vector", "aa", "aliased", "Basic"])
def test_get_renderer_unknown(name):
    with pytest.raises(ValueError, match="Unknown renderer"):
        get_renderer(name)


def test_renderer_names_match_config_schema():
    assert set(RENDERERS) == set(typing.get_args(RendererName))


def test_satisfies_protocol(renderer):
    assert isinstance(renderer, Renderer)


# ============================================================================
# ZERO RADIUS
# ============================================================================

def test_filled_circle_zero_radius_no_writes(renderer, canvas):
    renderer.draw_filled_circle(canvas, Circle((10, 10), 0), RED)
    assert canvas.writes == []


@pytest.mark.parametrize("method", ["draw_circle", "draw_filled_circle"])
def test_circles_zero_radius_no_writes(renderer, canvas, method):
    getattr(renderer, method)(canvas, Circle((10, 10), 0), RED)
    assert canvas.writes == []


@pytest.mark.parametrize("method", ["draw_arc", "draw_filled_arc"])
def test_arcs_zero_radius_no_writes(renderer, canvas, method):
    getattr(renderer, method)(
        canvas, Circle((10, 10), 0), Angle.degrees(0), Angle.degrees(180), RED
    )
    assert canvas.writes == []


# ============================================================================
# RECTS
# ============================================================================

@pytest.mark.parametrize("rect", [Rect(2, 3, 10, 4), Rect(0, 0, 0, 0), Rect(5, 1, 0, 7)])
def test_filled_rect_writes_each_pixel_once(renderer, canvas, rect):
    renderer.draw_filled_rect(canvas, rect, RED)
    points = [(x, y) for x, y, _ in canvas.writes]
    assert len(points) == (rect.width + 1) * (rect.height + 1)
    assert set(points) == rect_fill_points(rect)
    assert canvas.changed_mask().sum() == len(points)


def test_rect_outline(renderer, canvas):
    rect = Rect(4, 6, 9, 5)
    renderer.draw_rect(canvas, rect, RED)
    assert canvas.visible_points() == rect_outline_points(rect)


# ============================================================================
# ROUNDED RECTS
# ============================================================================

@pytest.mark.parametrize("method", ["draw_rounded_rect", "draw_filled_rounded_rect"])
@pytest.mark.parametrize("radius", [-1, 6])
def test_rounded_rect_rejects_radius(renderer, canvas, method, radius):
    with pytest.raises(ValueError, match="corner_radius"):
        getattr(renderer, method)(canvas, Rect(2, 2, 10, 10), radius, RED)
    assert canvas.writes == []


def test_rounded_rect_zero_radius_is_rect(renderer, canvas):
    rect = Rect(3, 4, 12, 8)
    renderer.draw_rounded_rect(canvas, rect, 0, RED)
    assert canvas.visible_points() == rect_outline_points(rect)


def test_filled_rounded_rect_zero_radius_is_rect(renderer, canvas):
    rect = Rect(3, 4, 12, 8)
    renderer.draw_filled_rounded_rect(canvas, rect, 0, RED)
    assert canvas.visible_points() == rect_fill_points(rect)


def test_rounded_rect_edges_and_corners(renderer, canvas):
    rect = Rect(4, 4, 20, 14)
    renderer.draw_rounded_rect(canvas, rect, 4, BLUE)
    visible = canvas.visible_points()

    # Straight edge midpoints
    assert (rect.left, rect.top + 7) in visible
    assert (rect.right, rect.top + 7) in visible
    assert (rect.left + 10, rect.top) in visible
    assert (rect.left + 10, rect.bottom) in visible
    # Sharp corners are cut away
    for corner in [(rect.left, rect.top), (rect.right, rect.top),
                   (rect.left, rect.bottom), (rect.right, rect.bottom)]:
        assert corner not in visible


def test_filled_rounded_rect_corners(renderer, canvas):
    rect = Rect(4, 4, 20, 14)
    renderer.draw_filled_rounded_rect(canvas, rect, 4, BLUE)
    visible = canvas.visible_points()

    assert (rect.left + 10, rect.top + 7) in visible
    assert canvas.get_pixel(rect.left + 10, rect.top + 7) == BLUE
    for corner in [(rect.left, rect.top), (rect.right, rect.top),
                   (rect.left, rect.bottom), (rect.right, rect.bottom)]:
        assert corner not in visible
    # Nothing outside the box
    assert visible <= rect_fill_points(rect)


# ============================================================================
# CLIPPING
# ============================================================================

def test_shapes_over_edge_are_clipped(renderer, canvas):
    renderer.draw_line(canvas, (0, 0), (100, 60), RED)
    renderer.draw_circle(canvas, Circle((0, 0), 6), RED)
    renderer.draw_filled_circle(canvas, Circle((31, 31), 9), RED)
    renderer.draw_arc(canvas, Circle((1, 30), 12), Angle.degrees(0), Angle.degrees(180), RED)
    renderer.draw_filled_arc(
        canvas, Circle((2, 2), 8), Angle.degrees(90), Angle.degrees(270), RED
    )
    renderer.draw_filled_rounded_rect(canvas, Rect(20, 20, 40, 40), 5, RED)

    outside = [(x, y) for x, y, _ in canvas.writes if not canvas.in_bounds(x, y)]
    assert outside
    assert canvas.changed_mask().any()


# ============================================================================
# ARCS
# ============================================================================

@pytest.mark.parametrize("start,end,sx,sy", [
    (0, 90, 1, 1),
    (90, 180, -1, 1),
    (180, 270, -1, -1),
    (270, 360, 1, -1),
])
def test_arc_stays_in_quadrant(renderer, canvas, start, end, sx, sy):
    cx, cy = 16, 16
    renderer.draw_arc(canvas, Circle((cx, cy), 10), Angle.degrees(start), Angle.degrees(end), RED)
    visible = canvas.visible_points()
    assert visible
    for x, y in visible:
        assert (x - cx) * sx >= 0 and (y - cy) * sy >= 0
        assert abs(math.hypot(x - cx, y - cy) - 10) < 1.5


@pytest.mark.parametrize("start,end,sx,sy", [
    (0, 90, 1, 1),
    (90, 180, -1, 1),
    (180, 270, -1, -1),
    (270, 360, 1, -1),
])
def test_filled_arc_stays_in_quadrant(renderer, canvas, start, end, sx, sy):
    cx, cy = 16, 16
    renderer.draw_filled_arc(
        canvas, Circle((cx, cy), 10), Angle.degrees(start), Angle.degrees(end), RED
    )
    visible = canvas.visible_points()
    assert (cx, cy) in visible
    assert (cx + 3 * sx, cy + 3 * sy) in visible
    for x, y in visible:
        assert (x - cx) * sx >= 0 and (y - cy) * sy >= 0


def test_arc_radian_span_matches_degrees(renderer, make_canvas):
    deg, rad = make_canvas(), make_canvas()
    circle = Circle((16, 16), 9)
    renderer.draw_arc(deg, circle, Angle.degrees(0), Angle.degrees(180), RED)
    renderer.draw_arc(rad, circle, Angle.radians(0), Angle.radians(math.pi), RED)
    assert deg.visible_points() == rad.visible_points()
