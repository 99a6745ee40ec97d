"""RGBA pixel values and alpha compositing.

Provides:
    - Rgba: 8-bit straight-alpha pixel (r, g, b, a)
    - blend_over(): "over" compositing of an incoming color onto a pixel
    - with_coverage(): scale a color's alpha by a coverage fraction
    - parse_color(): hex strings, sequences and names → Rgba

Used by:
    - Canvas: blend_pixel() compositing
    - AntiAliasingRenderer: coverage-weighted edge pixels
    - Validators: color fields in scene and render configs

Invariants:
    - Channels are ints in [0, 255], alpha is straight (not premultiplied)
    - Compositing math runs in normalized [0, 1] floats and truncates back
"""

from typing import NamedTuple, Sequence, Union


class Rgba(NamedTuple):
    """8-bit RGBA pixel, straight alpha."""

    r: int
    g: int
    b: int
    a: int = 255


BLACK = Rgba(0, 0, 0, 255)
WHITE = Rgba(255, 255, 255, 255)
TRANSPARENT = Rgba(0, 0, 0, 0)
RED = Rgba(255, 0, 0, 255)
GREEN = Rgba(0, 255, 0, 255)
BLUE = Rgba(0, 0, 255, 255)

NAMED_COLORS = {
    "black": BLACK,
    "white": WHITE,
    "transparent": TRANSPARENT,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "magenta": Rgba(255, 0, 255, 255),
    "cyan": Rgba(0, 255, 255, 255),
    "yellow": Rgba(255, 255, 0, 255),
}

ColorLike = Union[str, Sequence[int], Rgba]


def _to_u8(x: float) -> int:
    # float → u8 cast truncates toward zero and saturates
    return min(255, max(0, int(x)))


def blend_over(dst: Rgba, src: Rgba) -> Rgba:
    """Composite src over dst.

    Parameters
    ----------
    dst : Rgba
        Existing pixel.
    src : Rgba
        Incoming color.

    Returns
    -------
    Rgba
        Composited pixel.

    Notes
    -----
    Standard straight-alpha "over" operator:
        a_out = a_s + a_d·(1 - a_s)
        c_out = (c_s·a_s + c_d·a_d·(1 - a_s)) / a_out
    A fully transparent src leaves dst unchanged; a fully opaque src
    replaces it.
    """
    if src[3] == 0:
        return Rgba(*dst)
    if src[3] == 255:
        return Rgba(*src)

    a_s = src[3] / 255.0
    a_d = dst[3] / 255.0
    keep = a_d * (1.0 - a_s)
    # a_s + (1 - a_s) is exactly 1.0 over an opaque pixel; a_s + a_d - a_s·a_d is not
    a_out = a_s + keep
    channels = [
        (src[i] / 255.0 * a_s + dst[i] / 255.0 * keep) / a_out
        for i in range(3)
    ]
    return Rgba(
        _to_u8(channels[0] * 255.0),
        _to_u8(channels[1] * 255.0),
        _to_u8(channels[2] * 255.0),
        _to_u8(a_out * 255.0),
    )


def with_coverage(color: Rgba, coverage: float) -> Rgba:
    """Scale color alpha by a coverage fraction in [0, 1].

    Parameters
    ----------
    color : Rgba
        Base color.
    coverage : float
        Fraction of the pixel covered by the shape; clamped to [0, 1].

    Returns
    -------
    Rgba
        Same RGB, alpha = trunc(alpha · coverage).
    """
    coverage = min(1.0, max(0.0, coverage))
    return Rgba(color[0], color[1], color[2], _to_u8(color[3] * coverage))


def parse_color(value: ColorLike) -> Rgba:
    """Parse a color from config-friendly forms.

    Parameters
    ----------
    value : str | Sequence[int] | Rgba
        - "#rrggbb" or "#rrggbbaa"
        - a name from NAMED_COLORS (case-insensitive)
        - [r, g, b] or [r, g, b, a], ints in [0, 255]

    Returns
    -------
    Rgba

    Raises
    ------
    ValueError
        If the value cannot be interpreted as a color.
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text in NAMED_COLORS:
            return NAMED_COLORS[text]
        if text.startswith("#") and len(text) in (7, 9):
            try:
                parts = [int(text[i:i + 2], 16) for i in range(1, len(text), 2)]
            except ValueError:
                raise ValueError(f"Invalid hex color: {value!r}") from None
            return Rgba(*parts)
        raise ValueError(f"Unknown color: {value!r}")

    parts = list(value)
    if len(parts) not in (3, 4):
        raise ValueError(f"Color needs 3 or 4 channels, got {len(parts)}")
    for p in parts:
        if isinstance(p, bool) or not isinstance(p, int) or not 0 <= p <= 255:
            raise ValueError(f"Color channels must be ints in [0, 255], got {parts}")
    return Rgba(*parts)
