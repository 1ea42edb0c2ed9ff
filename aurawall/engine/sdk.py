#!/usr/bin/env python3
"""
Core SDK for the Wallpaper Engine

Single source of truth for scene types and constants. Recipes, variations, the
compiler and the batch CLI all import from this file to avoid drift.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .color_engine import ColorField, HexColor, HslColor, parse_color


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080
BLOB_CONTRAST = 0.4
DEFAULT_BLOB_COMPLEXITY = 6


class ExportSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    width: int
    height: int


EXPORT_SIZES: List[ExportSize] = [
    ExportSize(name="iPhone 16/15 Pro", width=1179, height=2556),
    ExportSize(name="iPhone 16/15 Plus", width=1290, height=2796),
    ExportSize(name="Android Common", width=1080, height=2400),
    ExportSize(name="4K Desktop", width=3840, height=2160),
    ExportSize(name="Macbook Air/Pro", width=2560, height=1600),
    ExportSize(name="Instagram Story", width=1080, height=1920),
    ExportSize(name="iPad / Tablet", width=2048, height=2732),
]


# ============================================================================
# PYDANTIC MODELS
# ============================================================================

class Gradient(BaseModel):
    """Two-stop background gradient. Unknown kinds are kept as given."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(default="linear", description="linear, radial or anything else")
    color1: ColorField = Field(..., description="Start stop")
    color2: ColorField = Field(..., description="End stop")
    angle: float = Field(default=0, description="Rotation in degrees (linear only)")


class AnimationIntent(BaseModel):
    """Ambient motion knobs. Anything missing means "no motion of that kind"."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = False
    speed: float = 0
    flow: float = 0
    pulse: float = 0
    rotate: float = 0
    noise_anim: float = 0
    color_cycle: bool = False
    color_cycle_speed: float = 0


class Vignette(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    color: ColorField = HexColor(value="#000000")
    intensity: float = Field(default=0.5, ge=0.0, le=1.0)
    size: float = Field(default=50, ge=0, le=100, description="Transparent core radius %")
    offset_x: float = 0
    offset_y: float = 0
    shape_x: float = Field(default=50, gt=0)
    shape_y: float = Field(default=50, gt=0)
    inverted: bool = False


# Ids end up in `#shape-<id>` selectors and keyframe names
SHAPE_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


class _ShapeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ..., pattern=SHAPE_ID_PATTERN, description="Unique within a scene; used in CSS selectors"
    )
    x: float = Field(default=50, description="Centre X, percent of canvas width")
    y: float = Field(default=50, description="Centre Y, percent of canvas height")
    size: float = Field(default=50, ge=0, description="Percent of canvas width")
    color: ColorField = HexColor(value="#ffffff")
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    blur: float = Field(default=0, ge=0)
    blend_mode: str = Field(default="normal", description="CSS mix-blend-mode, passed through")


class BlobShape(_ShapeBase):
    kind: Literal["blob"] = "blob"
    complexity: int = Field(default=DEFAULT_BLOB_COMPLEXITY, ge=3)


class CircleShape(_ShapeBase):
    kind: Literal["circle"] = "circle"


Shape = Annotated[Union[BlobShape, CircleShape], Field(discriminator="kind")]
Background = Union[HexColor, HslColor, Gradient]


def _coerce_background(value: Any) -> Any:
    if isinstance(value, (HexColor, HslColor, Gradient)):
        return value
    if isinstance(value, dict):
        if value.get("kind") in ("hex", "hsl"):
            return parse_color(value)
        if "color1" in value:
            return Gradient(**value)
        return parse_color(value)
    return parse_color(value)


class SceneConfig(BaseModel):
    """Complete, immutable description of one wallpaper."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Canvas width in px")
    height: int = Field(..., gt=0, description="Canvas height in px")
    base_color: Background = HexColor(value="#000000")
    noise: float = Field(default=0, ge=0, le=100, description="Grain strength")
    noise_scale: float = Field(default=1.0, gt=0, description="Grain frequency x1000")
    shapes: Tuple[Shape, ...] = ()
    animation: AnimationIntent = AnimationIntent()
    vignette: Vignette = Vignette()

    @field_validator("base_color", mode="before")
    @classmethod
    def coerce_background(cls, v: Any) -> Any:
        return _coerce_background(v)

    @model_validator(mode="after")
    def validate_unique_ids(self):
        seen = set()
        for shape in self.shapes:
            if shape.id in seen:
                raise ValueError(f"Duplicate shape id: {shape.id}")
            seen.add(shape.id)
        return self

    def evolve(self, **changes: Any) -> "SceneConfig":
        """Validated copy with `changes` applied (model_copy skips validation)."""
        data: Dict[str, Any] = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self).model_validate(data)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def validate_scene_config(data: Union[Dict, SceneConfig]) -> SceneConfig:
    """Validate and return a SceneConfig instance."""
    if isinstance(data, dict):
        return SceneConfig(**data)
    elif isinstance(data, SceneConfig):
        return data
    else:
        raise TypeError("Data must be a dict or SceneConfig instance")


def save_scene_config(config: SceneConfig, path: Union[str, Path]) -> None:
    """Save SceneConfig to JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(config.model_dump(mode="json"), f, indent=2)


def load_scene_config(path: Union[str, Path]) -> SceneConfig:
    """Load SceneConfig from JSON file."""
    with open(path, 'r') as f:
        data = json.load(f)
    return SceneConfig(**data)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    # Constants
    'DEFAULT_WIDTH', 'DEFAULT_HEIGHT', 'BLOB_CONTRAST', 'DEFAULT_BLOB_COMPLEXITY',
    'ExportSize', 'EXPORT_SIZES', 'SHAPE_ID_PATTERN',

    # Models
    'Gradient', 'AnimationIntent', 'Vignette', 'BlobShape', 'CircleShape', 'Shape',
    'Background', 'SceneConfig',

    # Helper functions
    'validate_scene_config', 'save_scene_config', 'load_scene_config',
]
