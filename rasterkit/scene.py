"""Scene replay: draw a validated shape list onto a canvas.

A scene (scene.v1 YAML, see utils.validators.SceneV1) is an ordered list of
primitive calls. render_scene() turns each spec into the matching renderer
call, so a scene file is a reproducible, diffable description of an image.

Usage:
    from rasterkit import scene as scene_mod
    from rasterkit.utils import validators

    scene = validators.load_scene("configs/scenes/demo.v1.yaml")
    canvas = scene_mod.render_scene(scene)
    canvas.save("outputs/demo.png")

Per-shape renderer overrides let one scene mix aliased and anti-aliased
primitives, which is how the bundled demo compares the two tiers side by side.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from rasterkit.canvas import Canvas, RgbaCanvas
from rasterkit.renderers import Renderer, get_renderer
from rasterkit.utils import fs, profiler
from rasterkit.utils.geometry import Angle, Circle, Rect
from rasterkit.utils.validators import (
    ArcSpec,
    CircleSpec,
    LineSpec,
    RectSpec,
    RoundedRectSpec,
    SceneV1,
)

logger = logging.getLogger(__name__)

_SHAPE_SPECS = (LineSpec, RectSpec, RoundedRectSpec, CircleSpec, ArcSpec)


def shape_args(spec) -> Tuple[str, tuple]:
    """Map a validated shape spec to (renderer method name, positional args).

    The canvas is not included; callers pass it first.

    Examples
    --------
    >>> shape_args(CircleSpec(kind="circle", center=(5, 5), radius=3))
    ('draw_circle', (Circle(center=(5, 5), radius=3), Rgba(r=0, g=0, b=0, a=255)))
    """
    if not isinstance(spec, _SHAPE_SPECS):
        raise TypeError(f"Unsupported shape spec: {type(spec).__name__}")
    method = f"draw_{spec.kind}"

    if isinstance(spec, LineSpec):
        return method, (tuple(spec.start), tuple(spec.end), spec.color)
    if isinstance(spec, RectSpec):
        return method, (Rect(spec.left, spec.top, spec.width, spec.height), spec.color)
    if isinstance(spec, RoundedRectSpec):
        rect = Rect(spec.left, spec.top, spec.width, spec.height)
        return method, (rect, spec.corner_radius, spec.color)
    if isinstance(spec, CircleSpec):
        return method, (Circle(tuple(spec.center), spec.radius), spec.color)
    # ArcSpec
    circle = Circle(tuple(spec.center), spec.radius)
    start = Angle(spec.start, spec.unit)
    end = Angle(spec.end, spec.unit)
    return method, (circle, start, end, spec.color)


def render_scene(scene: SceneV1, canvas: Optional[Canvas] = None) -> Canvas:
    """Draw every shape of a scene in order.

    Parameters
    ----------
    scene : SceneV1
        Validated scene.
    canvas : Canvas, optional
        Target; a fresh RgbaCanvas of the scene's size and background if None.

    Returns
    -------
    Canvas
        The canvas drawn into.
    """
    if canvas is None:
        canvas = RgbaCanvas(scene.canvas.width, scene.canvas.height, scene.canvas.background)

    renderers: Dict[str, Renderer] = {}
    timers: Dict[str, profiler.TimerAccumulator] = {}
    timings: Dict[str, float] = {}

    with profiler.timer(scene.name, sink=timings.__setitem__):
        for spec in scene.shapes:
            tier = spec.renderer or scene.renderer
            if tier not in renderers:
                renderers[tier] = get_renderer(tier)
            method, args = shape_args(spec)

            acc = timers.setdefault(spec.kind, profiler.TimerAccumulator(spec.kind))
            with acc.measure():
                getattr(renderers[tier], method)(canvas, *args)

    for acc in timers.values():
        logger.debug("%s", acc)
    logger.info(
        "Rendered scene %r: %d shapes on %dx%d in %.1f ms",
        scene.name, len(scene.shapes), canvas.width, canvas.height,
        timings[scene.name] * 1000.0,
    )
    return canvas


def scene_to_dict(scene: SceneV1) -> Dict[str, Any]:
    """Plain-data form of a scene, suitable for YAML."""
    return scene.model_dump(mode="json", by_alias=True, exclude_none=True)


def save_scene(scene: SceneV1, path: Union[str, Path]) -> Path:
    """Write a scene to YAML atomically; load_scene() reads it back."""
    path = Path(path)
    fs.atomic_yaml_dump(scene_to_dict(scene), path)
    logger.debug("Saved scene %r to %s", scene.name, path)
    return path
