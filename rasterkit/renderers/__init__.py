"""Renderers: the two fidelity tiers behind one drawing contract.

    BasicRenderer          aliased, integer scan-conversion, set_pixel writes
    AntiAliasingRenderer   fractional coverage, blend_pixel writes

Usage:
    from rasterkit.renderers import get_renderer
    renderer = get_renderer("antialiased")
    renderer.draw_filled_circle(canvas, Circle((32, 32), 20), BLUE)
"""

from .antialiased import AntiAliasingRenderer
from .base import Renderer
from .basic import BasicRenderer

RENDERERS = {
    "basic": BasicRenderer,
    "antialiased": AntiAliasingRenderer,
}


def get_renderer(name: str) -> Renderer:
    """Instantiate a renderer by tier name.

    Parameters
    ----------
    name : str
        "basic" or "antialiased", the same names scene and render configs accept.

    Raises
    ------
    ValueError
        If the name is unknown.
    """
    try:
        return RENDERERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown renderer {name!r}. Use one of: {', '.join(sorted(RENDERERS))}"
        ) from None


__all__ = [
    "AntiAliasingRenderer",
    "BasicRenderer",
    "Renderer",
    "RENDERERS",
    "get_renderer",
]
