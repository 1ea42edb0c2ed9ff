"""
AuraWall Engine

Deterministic procedural wallpapers: seeded randomness, color utilities, blob
geometry, style recipes and the SVG scene compiler.
"""

from .blob_paths import blob_points, generate_blob_path
from .color_engine import (
    HexColor,
    HslColor,
    clamp,
    hex_to_hsl,
    hsl_to_hex,
    parse_color,
    parse_hsl,
    shift_color,
)
from .compiler import AnimationProfile, RenderDocument, animation_profile, compile_scene, render_svg
from .recipes import RECIPES, Recipe, apply_recipe, get_recipe, list_recipes, register_recipe
from .sdk import (  # Constants; Models; Helper functions
    BLOB_CONTRAST,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    EXPORT_SIZES,
    AnimationIntent,
    BlobShape,
    CircleShape,
    Gradient,
    SceneConfig,
    Vignette,
    load_scene_config,
    save_scene_config,
    validate_scene_config,
)
from .seeded_random import SeededRandom, seed_from_string
from .variations import ensure_visibility, generate_variations

__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "BLOB_CONTRAST",
    "EXPORT_SIZES",
    "AnimationIntent",
    "BlobShape",
    "CircleShape",
    "Gradient",
    "SceneConfig",
    "Vignette",
    "validate_scene_config",
    "save_scene_config",
    "load_scene_config",
    "SeededRandom",
    "seed_from_string",
    "HexColor",
    "HslColor",
    "clamp",
    "hex_to_hsl",
    "hsl_to_hex",
    "parse_color",
    "parse_hsl",
    "shift_color",
    "blob_points",
    "generate_blob_path",
    "Recipe",
    "RECIPES",
    "register_recipe",
    "get_recipe",
    "list_recipes",
    "apply_recipe",
    "AnimationProfile",
    "RenderDocument",
    "animation_profile",
    "compile_scene",
    "render_svg",
    "ensure_visibility",
    "generate_variations",
]
