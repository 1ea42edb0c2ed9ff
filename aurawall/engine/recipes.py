#!/usr/bin/env python3
"""
Recipe Registry for the Wallpaper Engine

A recipe is a named style: given a base SceneConfig and a SeededRandom it
returns a new SceneConfig with its own background, grain, shapes and
(optionally) motion settings. Every draw goes through the injected random
source, so a seeded run reproduces the same scene, shape ids included.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from aurawall.core import get_logger

from .color_engine import HexColor, clamp, hsl
from .sdk import BlobShape, CircleShape, SceneConfig
from .seeded_random import SeededRandom, SeedLike

log = get_logger("aurawall.recipes")

RecipeBuilder = Callable[[SceneConfig, SeededRandom], SceneConfig]


@dataclass(frozen=True)
class Recipe:
    name: str
    description: str
    min_shapes: int
    max_shapes: int
    build: RecipeBuilder


RECIPES: Dict[str, Recipe] = {}


def register_recipe(recipe: Recipe) -> Recipe:
    """Add (or replace) a recipe in the registry."""
    if recipe.min_shapes > recipe.max_shapes:
        raise ValueError(f"Recipe {recipe.name}: min_shapes > max_shapes")
    RECIPES[recipe.name] = recipe
    return recipe


def recipe(name: str, description: str, min_shapes: int, max_shapes: int):
    """Decorator registering a builder function as a recipe."""

    def decorator(fn: RecipeBuilder) -> RecipeBuilder:
        register_recipe(Recipe(name, description, min_shapes, max_shapes, fn))
        return fn

    return decorator


def get_recipe(name: str) -> Recipe:
    try:
        return RECIPES[name]
    except KeyError:
        raise KeyError(f"Unknown recipe {name!r}. Valid recipes: {', '.join(RECIPES)}") from None


def list_recipes() -> List[str]:
    return list(RECIPES)


def apply_recipe(
    name: str,
    base: SceneConfig,
    seed: Optional[Union[SeedLike, SeededRandom]] = None,
) -> SceneConfig:
    """
    Run a recipe against a base config.

    Args:
        name: Registered recipe name
        base: Config whose canvas, animation and vignette are inherited
        seed: None for a fresh unseeded source, an int/str seed, or a
              SeededRandom the caller keeps drawing from afterwards

    Raises:
        KeyError: If the recipe name is not registered
    """
    entry = get_recipe(name)
    if isinstance(seed, SeededRandom):
        rng = seed
    elif seed is None:
        rng = SeededRandom.unseeded()
    else:
        rng = SeededRandom.from_seed(seed)

    result = entry.build(base, rng)
    log.debug(f"Recipe {name} produced {len(result.shapes)} shapes ({rng!r})")
    return result


def _shape_id(prefix: str, tag: str, index: int) -> str:
    return f"{prefix}-{tag}-{index}"


def _animate(base: SceneConfig, **overrides):
    return base.animation.model_copy(update=overrides)


# ============================================================================
# RECIPES
# ============================================================================

@recipe("boreal", "Soft aurora glows on a near-black or near-white field", 3, 5)
def boreal(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_shapes = rng.randint(3, 5)
    base_hue = math.floor(rng.next() * 360)
    is_dark = rng.next() > 0.4

    if is_dark:
        base_color = hsl(base_hue, 40, math.floor(rng.next() * 10) + 5)
        blend_modes = ["screen", "color-dodge", "normal", "lighten"]
    else:
        base_color = hsl(base_hue, 20, math.floor(rng.next() * 10) + 88)
        blend_modes = ["multiply", "overlay", "normal", "difference"]
    noise = math.floor(rng.next() * 25) + 20

    shapes = []
    for i in range(num_shapes):
        h = (base_hue + i * 40) % 360
        s = rng.next() * 40 + 60
        l = rng.next() * 40 + 50 if is_dark else rng.next() * 40 + 10
        shape_cls = BlobShape if rng.next() > 0.7 else CircleShape
        fields = dict(
            id=_shape_id("boreal", tag, i),
            x=rng.next() * 100,
            y=rng.next() * 100,
            size=rng.next() * 80 + 60,
            color=hsl(h, s, l),
            opacity=rng.next() * 0.4 + 0.5,
            blur=rng.next() * 60 + 60,
            blend_mode=rng.choice(blend_modes),
        )
        complexity = math.floor(rng.next() * 4) + 4
        if shape_cls is BlobShape:
            fields["complexity"] = complexity
        shapes.append(shape_cls(**fields))

    return base.evolve(base_color=base_color, noise=noise, shapes=tuple(shapes))


@recipe("chroma", "Acid hues fighting through difference/exclusion blends", 3, 5)
def chroma(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_shapes = rng.randint(3, 5)
    base_hue = math.floor(rng.next() * 360)
    base_color = hsl(base_hue, 10, 5)
    noise = math.floor(rng.next() * 40) + 30
    noise_scale = rng.next() * 2 + 2
    acid_modes = ["difference", "exclusion", "hard-light", "color-dodge", "overlay"]

    shapes = []
    for i in range(num_shapes):
        h = rng.next() * 360
        shape_cls = BlobShape if rng.next() > 0.3 else CircleShape
        fields = dict(
            id=_shape_id("chroma", tag, i),
            x=rng.next() * 80 + 10,
            y=rng.next() * 80 + 10,
            size=rng.next() * 100 + 50,
            color=hsl(h, 100, 50),
            opacity=rng.next() * 0.5 + 0.5,
            blur=rng.next() * 40 + 10,
            blend_mode=rng.choice(acid_modes),
        )
        complexity = math.floor(rng.next() * 5) + 5
        if shape_cls is BlobShape:
            fields["complexity"] = complexity
        shapes.append(shape_cls(**fields))

    return base.evolve(
        base_color=base_color, noise=noise, noise_scale=noise_scale, shapes=tuple(shapes)
    )


@recipe("lava", "Slow molten blobs from a single warm, violet or green palette", 3, 6)
def lava(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_shapes = rng.randint(3, 6)
    palette = rng.choice([(0, 60), (260, 60), (120, 60)])
    palette_base, palette_range = palette
    base_color = hsl(palette_base, 20, 10)

    shapes = []
    for i in range(num_shapes):
        h = (palette_base + rng.next() * palette_range) % 360
        s = 80 + rng.next() * 20
        l = 40 + rng.next() * 30
        shapes.append(
            BlobShape(
                id=_shape_id("lava", tag, i),
                x=rng.next() * 60 + 20,
                y=rng.next() * 80 + 10,
                size=rng.next() * 80 + 80,
                color=hsl(h, s, l),
                opacity=0.8,
                blur=40,
                blend_mode="screen",
                complexity=3 + math.floor(rng.next() * 2),
            )
        )

    return base.evolve(
        base_color=base_color,
        noise=15,
        shapes=tuple(shapes),
        animation=_animate(base, enabled=True, flow=5, speed=2),
    )


@recipe("midnight", "Three faint nebulae under fifteen stars", 18, 18)
def midnight(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    base_color = hsl(240 + rng.next() * 40, 30, 4)

    shapes = []
    for i in range(3):
        shapes.append(
            BlobShape(
                id=_shape_id("nebula", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 100,
                size=150,
                color=hsl(200 + rng.next() * 100, 60, 20),
                opacity=0.3,
                blur=100,
                blend_mode="screen",
                complexity=5,
            )
        )
    for i in range(15):
        shapes.append(
            CircleShape(
                id=_shape_id("star", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 100,
                size=rng.next() * 2 + 1,
                color=HexColor(value="#ffffff"),
                opacity=rng.next() * 0.5 + 0.5,
                blur=2 if rng.next() > 0.8 else 0,
                blend_mode="normal",
            )
        )

    return base.evolve(base_color=base_color, noise=10, noise_scale=1, shapes=tuple(shapes))


@recipe("geometrica", "Static primary-color discs snapped to a Bauhaus grid", 2, 5)
def geometrica(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_shapes = rng.randint(2, 5)
    colors = ["#E4002B", "#1244A4", "#F3A200", "#000000", "#FFFFFF"]
    grid_steps = [0, 25, 50, 75, 100]
    size_steps = [10, 25, 50, 75]

    shapes = []
    for i in range(num_shapes):
        color = rng.choice(colors)
        shapes.append(
            CircleShape(
                id=_shape_id("geo", tag, i),
                x=rng.choice(grid_steps),
                y=rng.choice(grid_steps),
                size=rng.choice(size_steps),
                color=HexColor(value=color),
                opacity=0.95,
                blur=0,
                blend_mode="multiply" if color == "#000000" else "normal",
            )
        )

    return base.evolve(
        base_color=HexColor(value="#f0f0f0"),
        noise=8,
        shapes=tuple(shapes),
        animation=_animate(base, enabled=False),
    )


@recipe("glitch", "RGB-split discs with the odd inverted artifact", 9, 32)
def glitch(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_groups = rng.randint(3, 8)
    channels = (("r", "#ff0000"), ("g", "#00ff00"), ("b", "#0000ff"))

    shapes = []
    for i in range(num_groups):
        cx = rng.next() * 100
        cy = rng.next() * 100
        size = rng.next() * 50 + 10
        offset = rng.next() * 4 + 1
        positions = {
            "r": (clamp(cx - offset, 0, 100), cy),
            "g": (cx, clamp(cy - offset, 0, 100)),
            "b": (clamp(cx + offset, 0, 100), cy),
        }
        for channel, color in channels:
            x, y = positions[channel]
            shapes.append(
                CircleShape(
                    id=_shape_id(f"glitch-{channel}", tag, i),
                    x=x,
                    y=y,
                    size=size,
                    color=HexColor(value=color),
                    opacity=0.8,
                    blur=2,
                    blend_mode="screen",
                )
            )
        if rng.next() > 0.7:
            shapes.append(
                BlobShape(
                    id=_shape_id("artifact", tag, i),
                    x=rng.next() * 100,
                    y=rng.next() * 100,
                    size=rng.next() * 30 + 5,
                    color=HexColor(value="#ffffff"),
                    opacity=1,
                    blur=0,
                    blend_mode="difference",
                    complexity=10,
                )
            )

    return base.evolve(
        base_color=HexColor(value="#050505"),
        noise=60,
        noise_scale=4,
        shapes=tuple(shapes),
        animation=_animate(base, enabled=True, noise_anim=8, speed=5),
    )


@recipe("sakura", "Twelve drifting petals on a blush field", 12, 12)
def sakura(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    base_color = hsl(340 + rng.next() * 20, 30, 90)

    shapes = []
    for i in range(12):
        shapes.append(
            BlobShape(
                id=_shape_id("petal", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 100,
                size=rng.next() * 20 + 10,
                color=hsl(340 + rng.next() * 30, 80, 85),
                opacity=0.6,
                blur=5,
                blend_mode="multiply",
                complexity=3,
            )
        )

    return base.evolve(
        base_color=base_color,
        noise=15,
        shapes=tuple(shapes),
        animation=_animate(base, enabled=True, flow=8, speed=1),
    )


@recipe("ember", "Smoke plumes and glowing sparks", 11, 11)
def ember(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()

    shapes = []
    for i in range(3):
        shapes.append(
            BlobShape(
                id=_shape_id("smoke", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 80,
                size=100,
                color=HexColor(value="#302020"),
                opacity=0.4,
                blur=80,
                blend_mode="screen",
                complexity=6,
            )
        )
    for i in range(8):
        shapes.append(
            CircleShape(
                id=_shape_id("spark", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 100,
                size=rng.next() * 5 + 2,
                color=hsl(10 + rng.next() * 30, 100, 60),
                opacity=0.9,
                blur=4,
                blend_mode="screen",
            )
        )

    return base.evolve(
        base_color=HexColor(value="#100502"),
        noise=25,
        shapes=tuple(shapes),
        animation=_animate(base, enabled=True, flow=2, speed=0.5),
    )


@recipe("oceanic", "Deep-water currents with an occasional foam crest", 3, 7)
def oceanic(base: SceneConfig, rng: SeededRandom) -> SceneConfig:
    tag = rng.token()
    num_shapes = rng.randint(3, 6)
    base_hue = 190 + rng.next() * 40
    base_color = hsl(base_hue, 60, 10)

    shapes = []
    for i in range(num_shapes):
        h = (base_hue + rng.next() * 40 - 20) % 360
        s = 60 + rng.next() * 30
        l = 20 + rng.next() * 40
        shapes.append(
            BlobShape(
                id=_shape_id("ocean", tag, i),
                x=rng.next() * 100,
                y=rng.next() * 80 + 20,
                size=rng.next() * 100 + 50,
                color=hsl(h, s, l),
                opacity=0.6,
                blur=40,
                blend_mode="overlay" if rng.next() > 0.6 else "screen",
                complexity=4 + math.floor(rng.next() * 3),
            )
        )
    if rng.next() > 0.3:
        shapes.append(
            BlobShape(
                id=_shape_id("foam", tag, 0),
                x=rng.next() * 100,
                y=rng.next() * 100,
                size=40,
                color=HexColor(value="#ffffff"),
                opacity=0.3,
                blur=20,
                blend_mode="overlay",
                complexity=6,
            )
        )

    return base.evolve(
        base_color=base_color,
        noise=15,
        shapes=tuple(shapes),
        animation=_animate(
            base, enabled=True, flow=4, speed=1.5, color_cycle=True, color_cycle_speed=2
        ),
    )
