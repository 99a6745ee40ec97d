"""Test the anti-aliased renderer.

Tests for rasterkit.renderers.antialiased:
    - Wu line: endpoint-swap symmetry, exact pixels on axis/diagonal lines,
      split coverage on fractional rows, color alpha scaling
    - Coverage octant: k in [0, 1), x is the ceiling of the true edge
    - Circle: opaque cardinals, distance band, 8-way symmetry
    - Filled circle: opaque interior, nothing beyond the rim
    - Arcs: rim pairs weighted 1 - k (ceiling) and k (inward neighbor)
    - Rounded rects: corners drawn with fractional coverage
    - All writes go through blend_pixel; rects delegate to BasicRenderer

Run:
    pytest tests/test_antialiased_renderer.py -v
"""

import math
from collections import Counter

import pytest

from rasterkit.renderers.antialiased import coverage_octant, edge_pairs
from rasterkit.renderers.basic import BasicRenderer, eight_way
from rasterkit.utils.color import BLACK, BLUE, RED, WHITE, Rgba, blend_over, with_coverage
from rasterkit.utils.geometry import Angle, Circle, Rect, arc_span, inside_arc

LINES = [
    ((1, 2), (20, 9)),
    ((3, 25), (9, 2)),
    ((0, 0), (0, 10)),
    ((5, 5), (25, 25)),
    ((2, 7), (30, 7)),
    ((28, 3), (4, 19)),
    ((6, 6), (6, 6)),
]


class TestWuLine:
    @pytest.mark.parametrize("a,b", LINES)
    def test_endpoint_swap_symmetry(self, aa, make_canvas, a, b):
        fwd, rev = make_canvas(), make_canvas()
        aa.draw_line(fwd, a, b, BLACK)
        aa.draw_line(rev, b, a, BLACK)
        assert sorted(fwd.blends) == sorted(rev.blends)
        assert (fwd.pixels == rev.pixels).all()

    def test_horizontal_exact(self, aa, canvas):
        aa.draw_line(canvas, (2, 5), (10, 5), RED)
        assert canvas.visible_points() == {(x, 5) for x in range(2, 11)}
        assert all(canvas.get_pixel(x, 5) == RED for x in range(2, 11))
        assert canvas.get_pixel(5, 6) == WHITE

    def test_vertical_exact(self, aa, canvas):
        aa.draw_line(canvas, (4, 12), (4, 3), RED)
        assert canvas.visible_points() == {(4, y) for y in range(3, 13)}

    def test_diagonal_exact(self, aa, canvas):
        aa.draw_line(canvas, (0, 0), (5, 5), BLUE)
        assert canvas.visible_points() == {(i, i) for i in range(6)}

    def test_fractional_row_split(self, aa, canvas):
        aa.draw_line(canvas, (0, 0), (2, 1), BLACK)
        alphas = {(x, y): c.a for x, y, c in canvas.blends}
        assert alphas[(0, 0)] == 255
        assert alphas[(1, 0)] == 127
        assert alphas[(1, 1)] == 127
        assert alphas[(2, 1)] == 255
        px = canvas.get_pixel(1, 0)
        assert 0 < px.r < 255

    def test_coverage_scales_color_alpha(self, aa, canvas):
        aa.draw_line(canvas, (0, 3), (8, 3), Rgba(255, 0, 0, 128))
        assert {c.a for x, y, c in canvas.blends if y == 3} == {128}

    def test_only_blends(self, aa, canvas):
        aa.draw_line(canvas, (1, 2), (20, 9), BLACK)
        assert canvas.sets == []
        assert len(canvas.blends) == 2 * 20


class TestCoverageOctant:
    @pytest.mark.parametrize("radius", [1, 2, 5, 10, 17])
    def test_ceiling_and_gap(self, radius):
        for x, y, k in coverage_octant(radius):
            true_x = math.sqrt(radius * radius - y * y)
            assert x == math.ceil(true_x)
            assert 0.0 <= k < 1.0
            assert k == pytest.approx(x - true_x)

    def test_walk_stops_at_diagonal(self):
        pts = list(coverage_octant(10))
        assert [y for _, y, _ in pts] == list(range(1, len(pts) + 1))
        assert pts[-1][0] <= pts[-1][1]
        assert all(x > y for x, y, _ in pts[:-1])

    def test_edge_pairs_move_inward(self):
        for outer, inner in edge_pairs(7, 3):
            assert math.hypot(*inner) < math.hypot(*outer)


class TestCircle:
    def test_cardinals_opaque(self, aa, canvas):
        aa.draw_circle(canvas, Circle((16, 16), 10), RED)
        for x, y in [(26, 16), (6, 16), (16, 26), (16, 6)]:
            assert canvas.get_pixel(x, y) == RED

    @pytest.mark.parametrize("radius", [1, 3, 10, 14])
    def test_distance_band(self, aa, canvas, radius):
        aa.draw_circle(canvas, Circle((16, 16), radius), RED)
        for x, y in canvas.visible_points():
            assert abs(math.hypot(x - 16, y - 16) - radius) < 1.5

    @pytest.mark.parametrize("radius", [4, 10])
    def test_eight_way_symmetry(self, aa, canvas, radius):
        aa.draw_circle(canvas, Circle((16, 16), radius), RED)
        alpha = {}
        for x, y, c in canvas.blends:
            key = (x - 16, y - 16)
            alpha[key] = max(alpha.get(key, 0), c.a)
        for (dx, dy), a in alpha.items():
            for mirrored in eight_way(dx, dy):
                assert alpha[mirrored] == a

    def test_only_blends(self, aa, canvas):
        aa.draw_circle(canvas, Circle((16, 16), 10), RED)
        assert canvas.sets == []


class TestFilledCircle:
    @pytest.mark.parametrize("radius", [4, 10, 14])
    def test_interior_and_rim(self, aa, canvas, radius):
        aa.draw_filled_circle(canvas, Circle((16, 16), radius), BLUE)
        assert canvas.get_pixel(16, 16) == BLUE
        for y in range(32):
            for x in range(32):
                d = math.hypot(x - 16, y - 16)
                if d <= radius - 2:
                    assert canvas.get_pixel(x, y) == BLUE, (x, y)
                elif d > radius + 1.5:
                    assert canvas.get_pixel(x, y) == WHITE, (x, y)

    def test_translucent_fill_stays_translucent(self, aa, make_canvas):
        canvas = make_canvas(32, 32, (0, 0, 0, 0))
        aa.draw_filled_circle(canvas, Circle((16, 16), 6), Rgba(0, 0, 255, 100))
        edge = canvas.get_pixel(22, 16)
        assert edge.b == 255
        assert 0 < edge.a < 255


def arc_edge_blends(circle, lo, hi, color):
    """(x, y, color) blends of the rim pairs that fall inside [lo, hi]."""
    cx, cy = circle.center
    out = []
    for x, y, k in coverage_octant(circle.radius):
        outer_c = with_coverage(color, 1.0 - k)
        inner_c = with_coverage(color, k)
        for outer, inner in edge_pairs(x, y):
            if inside_arc(outer, lo, hi):
                out.append((cx + outer[0], cy + outer[1], outer_c))
                out.append((cx + inner[0], cy + inner[1], inner_c))
    return out


class TestArcs:
    def test_arc_subset_of_circle(self, aa, make_canvas):
        full, arc = make_canvas(), make_canvas()
        circle = Circle((16, 16), 11)
        aa.draw_circle(full, circle, RED)
        aa.draw_arc(arc, circle, Angle.degrees(30), Angle.degrees(200), RED)
        assert arc.visible_points() <= full.visible_points()
        assert arc.visible_points() < full.visible_points()

    @pytest.mark.parametrize("start,end", [(0, 90), (30, 200), (270, 360)])
    def test_arc_edge_coverage(self, aa, canvas, start, end):
        circle = Circle((16, 16), 11)
        aa.draw_arc(canvas, circle, Angle.degrees(start), Angle.degrees(end), RED)
        lo, hi = arc_span(Angle.degrees(start), Angle.degrees(end))
        expected = [
            (16 + dx, 16 + dy, RED) for dx, dy in ((11, 0), (-11, 0), (0, 11), (0, -11))
            if inside_arc((dx, dy), lo, hi)
        ] + arc_edge_blends(circle, lo, hi, RED)
        assert sorted(canvas.blends) == sorted(expected)
        assert canvas.sets == []

    def test_quadrant_matches_circle_weights(self, aa, make_canvas):
        full, arc = make_canvas(), make_canvas()
        circle = Circle((16, 16), 11)
        aa.draw_circle(full, circle, RED)
        aa.draw_arc(arc, circle, Angle.degrees(0), Angle.degrees(90), RED)
        assert not Counter(arc.blends) - Counter(full.blends)
        # Ceiling pixel at 1 - k, inward neighbor at k
        x, y, k = next(coverage_octant(11))
        assert arc.get_pixel(16 + x, 16 + y) == blend_over(WHITE, with_coverage(RED, 1.0 - k))

    def test_filled_arc_rim_coverage(self, aa, canvas):
        circle = Circle((16, 16), 11)
        aa.draw_filled_arc(canvas, circle, Angle.degrees(0), Angle.degrees(90), RED)
        lo, hi = arc_span(Angle.degrees(0), Angle.degrees(90))
        rim = arc_edge_blends(circle, lo, hi, RED)
        assert any(0 < c.a < 255 for _, _, c in rim)
        assert not Counter(rim) - Counter(canvas.blends)
        assert canvas.sets == []

    def test_filled_arc_seeds_center(self, aa, canvas):
        aa.draw_filled_arc(canvas, Circle((16, 16), 8), Angle.degrees(200), Angle.degrees(250), RED)
        assert canvas.get_pixel(16, 16) == RED


class TestRects:
    @pytest.mark.parametrize("method", ["draw_rect", "draw_filled_rect"])
    def test_delegates_to_basic(self, aa, make_canvas, method):
        ours, theirs = make_canvas(), make_canvas()
        rect = Rect(3, 4, 12, 7)
        getattr(aa, method)(ours, rect, RED)
        getattr(BasicRenderer(), method)(theirs, rect, RED)
        assert ours.sets == theirs.sets
        assert ours.blends == []


class TestRoundedRects:
    rect = Rect(4, 4, 20, 14)
    radius = 5

    def in_bands(self, x, y):
        r = self.radius
        return (self.rect.left + r <= x <= self.rect.right - r
                or self.rect.top + r <= y <= self.rect.bottom - r)

    def test_outline_only_blends(self, aa, canvas):
        aa.draw_rounded_rect(canvas, self.rect, self.radius, RED)
        assert canvas.sets == []
        assert any(0 < c.a < 255 for _, _, c in canvas.blends)

    def test_outline_corners_use_coverage(self, aa, canvas):
        aa.draw_rounded_rect(canvas, self.rect, self.radius, RED)
        corner = [c for x, y, c in canvas.blends if not self.in_bands(x, y)]
        assert corner
        assert any(0 < c.a < 255 for c in corner)

    def test_filled_corner_rims_blend(self, aa, canvas):
        aa.draw_filled_rounded_rect(canvas, self.rect, self.radius, RED)
        # Straight bands are rect fills (set_pixel); corners are filled arcs
        assert all(self.in_bands(x, y) for x, y, _ in canvas.sets)
        corner = [c for x, y, c in canvas.blends if not self.in_bands(x, y)]
        assert corner
        assert any(0 < c.a < 255 for c in corner)
