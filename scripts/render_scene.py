"""Render a scene.v1 YAML file to an image.

Pipeline:
    1. Load render config (render.v1) and configure logging from it
    2. Load and validate the scene (scene.v1)
    3. Fill scene defaults the file left unset (renderer, background)
       from the render config
    4. Replay every shape onto a fresh canvas
    5. Save the canvas atomically (format from the output extension)

Refactored architecture:
    - render_main(scene_path, output_path, config_path) → dict
        * Callable function (used by tests and batch jobs)
        * Returns: {output_path, width, height, shapes}
    - CLI entry point: if __name__ == "__main__"

CLI:
    python scripts/render_scene.py --scene configs/scenes/demo.v1.yaml \\
                                   --output demo.png
    python scripts/render_scene.py --scene my_scene.yaml --output out/my.png \\
                                   --config configs/render.v1.yaml --renderer basic

Relative output paths are resolved against the config's output_dir;
absolute paths are used as given.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rasterkit import scene as scene_mod
from rasterkit.renderers import RENDERERS
from rasterkit.utils import fs, logging_config, validators

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "configs/render.v1.yaml"


def _apply_config_defaults(
    scene: validators.SceneV1,
    cfg: validators.RenderConfig,
    renderer: Optional[str] = None,
) -> validators.SceneV1:
    # Keys the scene file sets explicitly win over the render config
    canvas = scene.canvas
    if "background" not in canvas.model_fields_set:
        canvas = canvas.model_copy(update={"background": cfg.background})

    tier = scene.renderer if "renderer" in scene.model_fields_set else cfg.renderer
    if renderer is not None:
        tier = renderer

    return scene.model_copy(update={"canvas": canvas, "renderer": tier})


def render_main(
    scene_path: str,
    output_path: str,
    config_path: Optional[str] = None,
    renderer: Optional[str] = None,
    setup_logs: bool = False,
) -> Dict[str, Any]:
    """Render one scene file to one image.

    Parameters
    ----------
    scene_path : str
        Path to scene.v1 YAML
    output_path : str
        Image path (.png recommended); relative paths land in cfg.output_dir
    config_path : str, optional
        Path to render.v1 YAML; built-in defaults if None
    renderer : str, optional
        Force the scene-level tier ("basic" | "antialiased"); per-shape
        overrides in the scene still apply
    setup_logs : bool
        Configure logging from the render config, default False (the
        caller owns logging)

    Returns
    -------
    Dict[str, Any]
        Results dict with:
            - output_path: str (absolute path of the written image)
            - width, height: int
            - shapes: int (number of shapes drawn)

    Raises
    ------
    FileNotFoundError
        If the scene or config file doesn't exist
    pydantic.ValidationError
        If either file fails validation
    """
    if config_path is not None:
        cfg = validators.load_render_config(config_path)
    else:
        cfg = validators.RenderConfig()

    if setup_logs:
        logging_config.setup_logging(**cfg.logging.setup_kwargs(), context={"app": "render"})

    if renderer is not None and renderer not in RENDERERS:
        raise ValueError(f"Unknown renderer {renderer!r}. Use 'basic' or 'antialiased'.")

    scene = _apply_config_defaults(validators.load_scene(scene_path), cfg, renderer)
    logging_config.push_context(scene=scene.name)
    try:
        logger.info(f"Rendering {scene_path} ({len(scene.shapes)} shapes, {scene.renderer})")

        out = Path(output_path)
        if not out.is_absolute():
            out = fs.ensure_dir(cfg.output_dir) / out

        canvas = scene_mod.render_scene(scene)
        canvas.save(out)
        logger.info(f"Saved {out}")
    finally:
        logging_config.pop_context(["scene"])

    return {
        'output_path': str(out.resolve()),
        'width': canvas.width,
        'height': canvas.height,
        'shapes': len(scene.shapes),
    }


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render a scene.v1 YAML file to an image"
    )
    parser.add_argument(
        "--scene",
        type=str,
        required=True,
        help="Path to scene YAML (scene.v1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output image path (relative paths land in output_dir)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG,
        help="Path to render config (render.v1)",
    )
    parser.add_argument(
        "--renderer",
        choices=["basic", "antialiased"],
        help="Override the scene's default renderer tier",
    )

    args = parser.parse_args()

    # A missing default config falls back to built-in defaults; an explicit one must exist
    config_path = args.config
    if config_path == DEFAULT_CONFIG and not Path(config_path).exists():
        config_path = None
    logging_config.install_excepthook()

    result = render_main(
        scene_path=args.scene,
        output_path=args.output,
        config_path=config_path,
        renderer=args.renderer,
        setup_logs=True,
    )

    print("\n=== Render Complete ===")
    print(f"Image: {result['output_path']}")
    print(f"Size: {result['width']}x{result['height']}, {result['shapes']} shapes")

    logging_config.shutdown()


if __name__ == "__main__":
    main()
