#!/usr/bin/env python3
"""
Variation generator and visibility policing.

generate_variations() derives five alternative scenes from one config
(composition remix, atmosphere shift, deep contrast, analogous flow, vibrant
pop). Every variation is passed through ensure_visibility() so shapes never
disappear into the background (black on black, white on white).
"""

from typing import Iterable, List, Union

from aurawall.core import get_logger

from .color_engine import HslColor, clamp, jitter, to_hsl, shift_color
from .sdk import Background, Gradient, SceneConfig
from .seeded_random import SeededRandom

log = get_logger("aurawall.variations")

OPACITY_FLOOR = 0.5
SIZE_FLOOR = 30

PITCH_BLACK_LIGHTNESS = 10
DARK_LIGHTNESS = 40
LIGHT_LIGHTNESS = 60

EMISSIVE_MODES = ("screen", "lighten", "color-dodge", "normal")
DARKENING_MODES = ("multiply", "darken", "color-burn", "difference")
LIGHTENING_MODES = ("screen", "lighten", "color-dodge", "plus")
OVERLAY_MODES = ("overlay", "soft-light")


def background_hsl(background: Background) -> HslColor:
    """HSL of a solid background; gradients use the mean of their two stops."""
    if isinstance(background, Gradient):
        c1, c2 = to_hsl(background.color1), to_hsl(background.color2)
        return HslColor(h=c1.h, s=(c1.s + c2.s) / 2, l=(c1.l + c2.l) / 2)
    return to_hsl(background)


def shift_background(background: Background, d_hue: float, d_sat: float, d_light: float) -> Background:
    if isinstance(background, Gradient):
        return background.model_copy(
            update={
                "color1": shift_color(background.color1, d_hue, d_sat, d_light),
                "color2": shift_color(background.color2, d_hue, d_sat, d_light),
            }
        )
    return shift_color(background, d_hue, d_sat, d_light)


def ensure_visibility(shapes: Iterable, base_color: Background, rng: SeededRandom) -> list:
    """
    Adjust blend modes, lightness, opacity and size so every shape stays
    visible against `base_color`.

    Pitch black bases (l < 10) only allow light-emitting modes and lift dim or
    washed-out shapes. Dark bases (l < 40) forbid darkening modes. Light bases
    (l > 60) forbid lightening modes and darken the shapes instead.
    """
    base = background_hsl(base_color)
    is_pitch_black = base.l < PITCH_BLACK_LIGHTNESS
    is_dark = base.l < DARK_LIGHTNESS
    is_light = base.l > LIGHT_LIGHTNESS

    result = []
    for shape in shapes:
        color = to_hsl(shape.color)
        h, s, l = color.h, color.s, color.l
        blend = shape.blend_mode

        if is_pitch_black:
            if blend not in EMISSIVE_MODES:
                blend = "screen" if rng.next() > 0.4 else "normal"
            if l < 50:
                l = 50 + rng.next() * 40
            if s < 50:
                s = 50 + rng.next() * 50
        elif is_dark:
            if blend in DARKENING_MODES:
                blend = "overlay" if rng.next() > 0.5 else "screen"
            if blend in OVERLAY_MODES and l < 60:
                l = 60 + rng.next() * 30
            if l < 30:
                l = 40 + rng.next() * 40
        elif is_light:
            if blend in LIGHTENING_MODES:
                blend = "multiply" if rng.next() > 0.5 else "normal"
            if l > 60:
                l = rng.next() * 50
            if blend == "normal" and l > base.l - 20:
                l = max(0, base.l - 40)

        result.append(
            shape.model_copy(
                update={
                    "color": HslColor(h=h, s=s, l=l),
                    "opacity": max(OPACITY_FLOOR, shape.opacity),
                    "size": max(SIZE_FLOOR, shape.size),
                    "blend_mode": blend,
                }
            )
        )
    return result


def _remix(config: SceneConfig, rng: SeededRandom) -> SceneConfig:
    shapes = [
        s.model_copy(
            update={
                "x": clamp(jitter(s.x, 40, rng), 0, 100),
                "y": clamp(jitter(s.y, 40, rng), 0, 100),
                "size": clamp(jitter(s.size, 30, rng), 25, 150),
                "id": f"{s.id}-remix",
            }
        )
        for s in config.shapes
    ]
    return config.evolve(shapes=tuple(ensure_visibility(shapes, config.base_color, rng)))


def _atmosphere(config: SceneConfig, rng: SeededRandom) -> SceneConfig:
    base = shift_background(config.base_color, 10, -5, 5)
    shapes = [
        s.model_copy(
            update={
                "blur": min(150, s.blur * 1.3),
                "blend_mode": "screen" if rng.next() > 0.5 else "soft-light",
                "opacity": clamp(s.opacity * 0.9, 0.4, 0.9),
                "id": f"{s.id}-atmos",
            }
        )
        for s in config.shapes
    ]
    return config.evolve(
        base_color=base,
        noise=clamp(config.noise - 10, 10, 50),
        shapes=tuple(ensure_visibility(shapes, base, rng)),
    )


def _deep_contrast(config: SceneConfig, rng: SeededRandom) -> SceneConfig:
    base = shift_background(config.base_color, 0, 10, -10)
    shapes = [
        s.model_copy(
            update={
                "color": shift_color(s.color, 0, 20, 5),
                "blend_mode": "color-dodge" if rng.next() > 0.5 else "normal",
                "opacity": clamp(s.opacity + 0.2, 0.6, 1),
                "id": f"{s.id}-deep",
            }
        )
        for s in config.shapes
    ]
    return config.evolve(
        base_color=base,
        noise=clamp(config.noise + 15, 20, 80),
        shapes=tuple(ensure_visibility(shapes, base, rng)),
    )


def _analogous_flow(config: SceneConfig, rng: SeededRandom) -> SceneConfig:
    hue_shift = 30 + rng.next() * 30
    base = shift_background(config.base_color, hue_shift, 0, 0)
    shapes = [
        s.model_copy(
            update={
                "color": shift_color(s.color, hue_shift, 0, 0),
                "x": clamp(jitter(s.x, 15, rng), -10, 110),
                "y": clamp(jitter(s.y, 15, rng), -10, 110),
                "id": f"{s.id}-flow",
            }
        )
        for s in config.shapes
    ]
    return config.evolve(base_color=base, shapes=tuple(ensure_visibility(shapes, base, rng)))


def _vibrant_pop(config: SceneConfig, rng: SeededRandom) -> SceneConfig:
    base = shift_background(config.base_color, 180, 0, 0)
    shapes = [
        s.model_copy(
            update={
                "color": shift_color(s.color, 180, 20, 0),
                "blend_mode": "normal",
                "id": f"{s.id}-pop",
            }
        )
        for s in config.shapes
    ]
    return config.evolve(base_color=base, shapes=tuple(ensure_visibility(shapes, base, rng)))


STRATEGIES = (
    ("remix", _remix),
    ("atmos", _atmosphere),
    ("deep", _deep_contrast),
    ("flow", _analogous_flow),
    ("pop", _vibrant_pop),
)


def generate_variations(
    config: SceneConfig, rng: Union[SeededRandom, None] = None
) -> List[SceneConfig]:
    """Five visibility-checked variations of `config`, in STRATEGIES order."""
    rng = rng or SeededRandom.unseeded()
    variations = [strategy(config, rng) for _, strategy in STRATEGIES]
    log.debug(f"Generated {len(variations)} variations of a {len(config.shapes)}-shape scene")
    return variations
