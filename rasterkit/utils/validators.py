"""YAML schema validation and config loading.

Provides centralized validation for every YAML file rasterkit reads, using
pydantic:
    - Render config (render.v1): default renderer, background, output dir, logging
    - Scene (scene.v1): canvas size + ordered list of shapes to draw

Fail fast: a malformed file raises pydantic.ValidationError naming the
offending key and the expected range before any pixel is touched.

Units:
    - Geometry: integer pixels, top-left origin, +Y down
    - Arc angles: degrees (default) or radians, per shape
    - Colors: "#rrggbb", "#rrggbbaa", a color name, or [r, g, b(, a)] in [0, 255]

Usage:
    from rasterkit.utils import validators

    cfg = validators.load_render_config("configs/render.v1.yaml")
    scene = validators.load_scene("configs/scenes/demo.v1.yaml")
"""

import logging
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    field_validator,
    model_validator,
)

from . import fs
from .color import BLACK, WHITE, Rgba, parse_color

logger = logging.getLogger(__name__)

Color = Annotated[Rgba, BeforeValidator(parse_color)]
RendererName = Literal["basic", "antialiased"]


# ============================================================================
# RENDER CONFIG V1
# ============================================================================

class LoggingConfig(BaseModel):
    """Arguments for logging_config.setup_logging()."""
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_format: bool = Field(False, description="JSON lines in the log file")
    color: bool = True
    log_file: Optional[str] = None
    rotate: Optional[Dict[str, Any]] = None
    quiet_libs: List[str] = Field(default_factory=lambda: ["PIL"])

    @field_validator('level', mode='before')
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def setup_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for setup_logging()."""
        return {
            "log_level": self.level,
            "log_file": self.log_file,
            "json": self.json_format,
            "color": self.color,
            "rotate": self.rotate,
            "quiet_libs": self.quiet_libs,
        }


class RenderConfig(BaseModel):
    """Process-wide render settings (render.v1.yaml)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field("render.v1", alias="schema")
    renderer: RendererName = "antialiased"
    background: Color = WHITE
    output_dir: str = "outputs"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "render.v1":
            raise ValueError(f"Expected schema 'render.v1', got '{v}'")
        return v


# ============================================================================
# SCENE SCHEMA V1
# ============================================================================

class _ShapeBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    color: Color = BLACK
    renderer: Optional[RendererName] = Field(
        None, description="Per-shape override of the scene renderer"
    )


class LineSpec(_ShapeBase):
    kind: Literal["line"]
    start: Tuple[int, int]
    end: Tuple[int, int]


class RectSpec(_ShapeBase):
    kind: Literal["rect", "filled_rect"]
    left: NonNegativeInt
    top: NonNegativeInt
    width: NonNegativeInt
    height: NonNegativeInt


class RoundedRectSpec(_ShapeBase):
    kind: Literal["rounded_rect", "filled_rounded_rect"]
    left: NonNegativeInt
    top: NonNegativeInt
    width: NonNegativeInt
    height: NonNegativeInt
    corner_radius: NonNegativeInt

    @model_validator(mode='after')
    def validate_corner_radius(self) -> 'RoundedRectSpec':
        if 2 * self.corner_radius > min(self.width, self.height):
            raise ValueError(
                f"corner_radius {self.corner_radius} exceeds half of "
                f"{self.width}x{self.height}"
            )
        return self


class CircleSpec(_ShapeBase):
    kind: Literal["circle", "filled_circle"]
    center: Tuple[NonNegativeInt, NonNegativeInt]
    radius: NonNegativeInt


class ArcSpec(_ShapeBase):
    kind: Literal["arc", "filled_arc"]
    center: Tuple[NonNegativeInt, NonNegativeInt]
    radius: NonNegativeInt
    start: float
    end: float
    unit: Literal["degrees", "radians"] = "degrees"


ShapeSpec = Annotated[
    Union[LineSpec, RectSpec, RoundedRectSpec, CircleSpec, ArcSpec],
    Field(discriminator="kind"),
]


class CanvasSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: PositiveInt
    height: PositiveInt
    background: Color = WHITE


class SceneV1(BaseModel):
    """Ordered drawing list (scene.v1.yaml).

    Shapes are drawn in file order; later shapes paint over earlier ones.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field("scene.v1", alias="schema")
    name: str = "scene"
    canvas: CanvasSpec
    renderer: RendererName = "antialiased"
    shapes: List[ShapeSpec] = Field(default_factory=list)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "scene.v1":
            raise ValueError(f"Expected schema 'scene.v1', got '{v}'")
        return v


# ============================================================================
# LOADERS
# ============================================================================

def load_render_config(path: Union[str, Path]) -> RenderConfig:
    """Load and validate a render.v1 YAML file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    pydantic.ValidationError
        If the content doesn't match the schema
    """
    data = fs.load_yaml(path) or {}
    cfg = RenderConfig.model_validate(data)
    logger.debug("Loaded render config %s (renderer=%s)", path, cfg.renderer)
    return cfg


def load_scene(path: Union[str, Path]) -> SceneV1:
    """Load and validate a scene.v1 YAML file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    pydantic.ValidationError
        If the content doesn't match the schema
    """
    data = fs.load_yaml(path) or {}
    scene = SceneV1.model_validate(data)
    logger.debug("Loaded scene %r from %s: %d shapes", scene.name, path, len(scene.shapes))
    return scene
