"""Geometric value types and the arc-membership predicate.

Provides:
    - Angle: degree- or radian-tagged scalar with wrap-around normalization
    - Rect, Circle: immutable shape descriptors consumed by the renderers
    - inside_arc(): angular membership test for an offset from a circle center
    - arc_span(): normalize + order a (start, end) pair for inside_arc()

Used by:
    - Renderers: arc masking, rounded-rect corner decomposition
    - Scene replay: shape construction from validated YAML specs

Coordinate frame:
    - Pixel grid, top-left origin, +X right, +Y down
    - Angles grow clockwise on screen: 0° = +X, 90° = +Y (down), 180° = -X, 270° = -Y

Invariants:
    - Normalized angles lie in [0, 360) degrees or [0, 2π) radians
    - Shapes hold non-negative integers only (validated at construction)
    - inside_arc() cannot express a span crossing 0°/360°; split such spans
      into two calls at 0°
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Literal, Tuple

AngleUnit = Literal["degrees", "radians"]

_PERIODS = {
    "degrees": 360.0,
    "radians": 2.0 * math.pi,
}


def _wrap(value: float, period: float) -> float:
    """Map value into [0, period)."""
    wrapped = math.fmod(value, period)
    if wrapped < 0.0:
        wrapped += period
    # -1e-20 + 360.0 rounds to exactly 360.0
    if wrapped >= period:
        wrapped -= period
    return wrapped


# ---------------------------------------------------------------------------
# Angle
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Angle:
    """Angular value tagged with its unit.

    Parameters
    ----------
    value : float
        Magnitude in ``unit``.
    unit : ``"degrees"`` | ``"radians"``
        Unit tag. Conversions never change it.

    Examples
    --------
    >>> Angle.degrees(-270).normalized().to_degrees()
    90.0
    >>> Angle.radians(math.pi).to_degrees()
    180.0
    """

    value: float
    unit: AngleUnit = "degrees"

    def __post_init__(self) -> None:
        if self.unit not in _PERIODS:
            raise ValueError(
                f"unit must be 'degrees' or 'radians', got {self.unit!r}"
            )
        self.value = float(self.value)

    @classmethod
    def degrees(cls, value: float) -> "Angle":
        return cls(value, "degrees")

    @classmethod
    def radians(cls, value: float) -> "Angle":
        return cls(value, "radians")

    @property
    def period(self) -> float:
        """One full turn in this angle's unit."""
        return _PERIODS[self.unit]

    def to_degrees(self) -> float:
        if self.unit == "degrees":
            return self.value
        return math.degrees(self.value)

    def to_radians(self) -> float:
        if self.unit == "radians":
            return self.value
        return math.radians(self.value)

    def normalize(self) -> None:
        """Wrap the value into [0, period) in place."""
        self.value = _wrap(self.value, self.period)

    def normalized(self) -> "Angle":
        """Return a wrapped copy, same unit."""
        return replace(self, value=_wrap(self.value, self.period))


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def _check_non_negative_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned box.

    The drawn region is the *closed* interval [left, right] x [top, bottom],
    so a Rect covers (width + 1) x (height + 1) pixels.

    Parameters
    ----------
    left, top : int
        Top-left corner in pixels.
    width, height : int
        Extent in pixels, >= 0.
    """

    left: int
    top: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("left", "top", "width", "height"):
            _check_non_negative_int(name, getattr(self, name))

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True, slots=True)
class Circle:
    """Circle with integer center and radius.

    A zero radius makes every draw operation on the circle a no-op.

    Parameters
    ----------
    center : tuple[int, int]
        Center (x, y) in pixels.
    radius : int
        Radius in pixels, >= 0.
    """

    center: Tuple[int, int]
    radius: int

    def __post_init__(self) -> None:
        if len(self.center) != 2:
            raise ValueError(f"center must be (x, y), got {self.center!r}")
        object.__setattr__(self, "center", tuple(self.center))
        _check_non_negative_int("center x", self.center[0])
        _check_non_negative_int("center y", self.center[1])
        _check_non_negative_int("radius", self.radius)


# ---------------------------------------------------------------------------
# Arc predicate
# ---------------------------------------------------------------------------


def inside_arc(offset: Tuple[float, float], start: Angle, end: Angle) -> bool:
    """Test whether an offset vector points inside an angular span.

    Parameters
    ----------
    offset : tuple[float, float]
        (dx, dy) relative to the circle center.
    start, end : Angle
        Span bounds, already normalized and ordered (start <= end).
        Use arc_span() to prepare them.

    Returns
    -------
    bool
        True if start <= angle(offset) <= end (both ends inclusive).

    Notes
    -----
    A wrap-around span (e.g. 300° → 30°) is not representable here; issue
    two calls split at 0° instead. The zero vector has angle 0°.
    """
    dx, dy = offset
    angle = _wrap(math.degrees(math.atan2(dy, dx)), 360.0)
    return start.to_degrees() <= angle <= end.to_degrees()


def arc_span(start: Angle, end: Angle) -> Tuple[Angle, Angle]:
    """Normalize and order an arc span for inside_arc().

    Parameters
    ----------
    start, end : Angle
        Caller's span bounds, any range, either unit.

    Returns
    -------
    tuple[Angle, Angle]
        (lo, hi) in degrees with 0 <= lo <= hi <= 360.

    Notes
    -----
    An end that wraps to exactly 0° while its raw value exceeds the raw start
    (270° → 360°, -90° → 0°) is kept at 360° so the quadrant survives
    normalization instead of being reordered into its complement.
    """
    lo = _wrap(start.to_degrees(), 360.0)
    hi = _wrap(end.to_degrees(), 360.0)
    if hi == 0.0 and end.to_degrees() > start.to_degrees():
        hi = 360.0
    if lo > hi:
        lo, hi = hi, lo
    return Angle.degrees(lo), Angle.degrees(hi)
