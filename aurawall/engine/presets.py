"""
Named hand-tuned wallpapers shipped as package data (presets.yaml).
"""

import os
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from aurawall.core import load_yaml

from .sdk import DEFAULT_HEIGHT, DEFAULT_WIDTH, AnimationIntent, SceneConfig

PRESETS_PATH = os.path.join(os.path.dirname(__file__), "presets.yaml")


class Preset(BaseModel):
    id: str
    name: str
    category: str
    thumbnail: Optional[str] = Field(None, description="CSS gradient used as a swatch")
    config: Dict = Field(..., description="SceneConfig fields minus the canvas size")


@lru_cache(maxsize=1)
def _load_presets() -> Dict[str, Preset]:
    raw = load_yaml(PRESETS_PATH)
    presets = [Preset(**item) for item in raw.get("presets", [])]
    return {p.id: p for p in presets}


def list_presets() -> List[Preset]:
    return list(_load_presets().values())


def get_preset(preset_id: str) -> Preset:
    presets = _load_presets()
    if preset_id not in presets:
        raise KeyError(f"Unknown preset {preset_id!r}. Valid presets: {', '.join(presets)}")
    return presets[preset_id]


def preset_config(
    preset_id: str,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    animation: Optional[AnimationIntent] = None,
) -> SceneConfig:
    """Build a SceneConfig for a preset at the requested canvas size."""
    preset = get_preset(preset_id)
    data = dict(preset.config)
    data.update(width=width, height=height)
    if animation is not None:
        data["animation"] = animation
    return SceneConfig(**data)
