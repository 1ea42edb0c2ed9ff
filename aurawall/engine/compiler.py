#!/usr/bin/env python3
"""
Scene Compiler

Turns a SceneConfig into standalone SVG: background fill or gradient, one
element per shape with its own blur filter, per-shape CSS keyframes for
ambient motion, optional SMIL fill cycling, an optional vignette and a
fractal-noise grain overlay.

Motion parameters depend only on a shape's index, never on randomness, so the
same config always compiles to the same markup and removing a later shape
leaves the motion of earlier shapes untouched.
"""

from dataclasses import dataclass, field
from typing import List, Union
from xml.sax.saxutils import escape

from aurawall.core import get_logger
from aurawall.utils.numbers import fmt_num

from .blob_paths import generate_blob_path
from .color_engine import HexColor, HslColor, shift_color
from .sdk import BLOB_CONTRAST, AnimationIntent, BlobShape, Gradient, SceneConfig, Vignette

log = get_logger("aurawall.compiler")

SVG_NS = "http://www.w3.org/2000/svg"
BACKGROUND_GRADIENT_ID = "bgGradient"
VIGNETTE_GRADIENT_ID = "vignette-grad"
NOISE_FILTER_ID = "noiseFilter"
COLOR_CYCLE_STEP = 120


def _attr(value) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = fmt_num(value)
    return escape(str(value), {'"': "&quot;"})


# ============================================================================
# ANIMATION PROFILES
# ============================================================================

@dataclass(frozen=True)
class AnimationProfile:
    """Per-shape motion parameters (all times in seconds)."""

    index: int
    flow_x: float
    flow_y: float
    scale_min: float
    scale_max: float
    rotate_deg: float
    duration: float
    delay: float
    color_duration: float
    color_delay: float


def animation_profile(index: int, intent: AnimationIntent) -> AnimationProfile:
    """
    Derive motion for the shape at `index`.

    Three pseudo-random fractions come from the index alone:
    r1 = (i*13 % 10)/10, r2 = (i*29 % 10)/10, r3 = (i*37 % 10)/10.
    Zero speeds fall back to 1 so durations stay finite.
    """
    r1 = ((index * 13) % 10) / 10
    r2 = ((index * 29) % 10) / 10
    r3 = ((index * 37) % 10) / 10

    base_duration = 20 / (intent.speed or 1)
    color_base_duration = 60 / (intent.color_cycle_speed or 1)
    rot_dir = 1 if index % 2 == 0 else -1

    return AnimationProfile(
        index=index,
        flow_x=intent.flow * (5 if r1 > 0.5 else -5),
        flow_y=intent.flow * (5 if r2 > 0.5 else -5),
        scale_min=1 - intent.pulse / 50,
        scale_max=1 + intent.pulse / 50,
        rotate_deg=intent.rotate * 15 * rot_dir,
        duration=base_duration * (0.8 + r1 * 0.4),
        delay=-1 * (r2 * 10),
        color_duration=color_base_duration * (0.8 + r3 * 0.4),
        color_delay=-1 * (r1 * 5),
    )


def _keyframes_css(shape, profile: AnimationProfile) -> str:
    p = profile
    n = fmt_num
    origin = (
        "transform-box: fill-box; transform-origin: center;"
        if isinstance(shape, BlobShape)
        else f"transform-origin: {n(shape.x)}% {n(shape.y)}%;"
    )
    return (
        f"@keyframes move-{shape.id} {{\n"
        f"  0% {{ transform: translate(0%, 0%) scale(1) rotate(0deg); }}\n"
        f"  33% {{ transform: translate({n(p.flow_x * 0.7)}%, {n(p.flow_y * 0.5)}%) "
        f"scale({n(p.scale_max)}) rotate({n(p.rotate_deg * 0.3)}deg); }}\n"
        f"  66% {{ transform: translate({n(p.flow_x * -0.5)}%, {n(p.flow_y * 0.8)}%) "
        f"scale({n(p.scale_min)}) rotate({n(p.rotate_deg * 0.6)}deg); }}\n"
        f"  100% {{ transform: translate(0%, 0%) scale(1) rotate({n(p.rotate_deg)}deg); }}\n"
        f"}}\n"
        f"#shape-{shape.id} {{\n"
        f"  {origin}\n"
        f"  animation: move-{shape.id} {n(p.duration)}s ease-in-out infinite alternate;\n"
        f"  animation-delay: {n(p.delay)}s;\n"
        f"}}\n"
    )


def _color_cycle_tag(color: Union[HexColor, HslColor], profile: AnimationProfile) -> str:
    values = ";".join(
        [
            color.css(),
            shift_color(color, COLOR_CYCLE_STEP, 0, 0).css(),
            shift_color(color, COLOR_CYCLE_STEP * 2, 0, 0).css(),
            color.css(),
        ]
    )
    return (
        f'<animate attributeName="fill" values="{_attr(values)}" '
        f'dur="{_attr(profile.color_duration)}s" begin="{_attr(profile.color_delay)}s" '
        f'repeatCount="indefinite" />'
    )


# ============================================================================
# DOCUMENT MODEL
# ============================================================================

@dataclass
class RenderedShape:
    id: str
    element: str
    blur_filter: str
    profile: AnimationProfile


@dataclass
class RenderDocument:
    """Compiled scene, kept in parts so callers (and QA) can inspect it."""

    width: int
    height: int
    background_fill: str
    defs: List[str] = field(default_factory=list)
    style: str = ""
    background: str = ""
    shapes: List[RenderedShape] = field(default_factory=list)
    overlays: List[str] = field(default_factory=list)

    def to_svg(self) -> str:
        lines = [
            f'<svg viewBox="0 0 {self.width} {self.height}" width="{self.width}" '
            f'height="{self.height}" xmlns="{SVG_NS}" preserveAspectRatio="xMidYMid slice" '
            f'style="background-color: {_attr(self.background_fill)}">',
            "  <defs>",
        ]
        if self.style:
            lines.append(f"    <style>{escape(self.style)}</style>")
        lines.extend(f"    {d}" for d in self.defs)
        lines.extend(f"    {s.blur_filter}" for s in self.shapes)
        lines.append("  </defs>")
        lines.append(f"  {self.background}")
        lines.append("  <g>")
        lines.extend(f"    {s.element}" for s in self.shapes)
        lines.append("  </g>")
        lines.extend(f"  {o}" for o in self.overlays)
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


# ============================================================================
# LAYERS
# ============================================================================

def _gradient_def(gradient: Gradient) -> str:
    stops = (
        f'<stop offset="0%" stop-color="{_attr(gradient.color1.css())}" />'
        f'<stop offset="100%" stop-color="{_attr(gradient.color2.css())}" />'
    )
    if gradient.kind == "linear":
        return (
            f'<linearGradient id="{BACKGROUND_GRADIENT_ID}" x1="0%" y1="0%" x2="100%" y2="0%" '
            f'gradientTransform="rotate({_attr(gradient.angle)}, 0.5, 0.5)">{stops}</linearGradient>'
        )
    data_kind = "" if gradient.kind == "radial" else f' data-kind="{_attr(gradient.kind)}"'
    return (
        f'<radialGradient id="{BACKGROUND_GRADIENT_ID}" cx="50%" cy="50%" r="50%"{data_kind}>'
        f"{stops}</radialGradient>"
    )


def _vignette_def(vignette: Vignette) -> str:
    n = fmt_num
    transform = (
        f"translate({n(0.5 + vignette.offset_x / 100)} {n(0.5 + vignette.offset_y / 100)}) "
        f"scale({n(vignette.shape_x / 50)} {n(vignette.shape_y / 50)}) translate(-0.5 -0.5)"
    )
    inner_opacity = vignette.intensity if vignette.inverted else 0
    outer_opacity = 0 if vignette.inverted else vignette.intensity
    color = _attr(vignette.color.css())
    return (
        f'<radialGradient id="{VIGNETTE_GRADIENT_ID}" cx="0.5" cy="0.5" r="0.5" '
        f'gradientTransform="{transform}">'
        f'<stop offset="{_attr(vignette.size)}%" stop-color="{color}" '
        f'stop-opacity="{_attr(inner_opacity)}" />'
        f'<stop offset="100%" stop-color="{color}" stop-opacity="{_attr(outer_opacity)}" />'
        f"</radialGradient>"
    )


def _noise_filter_def(config: SceneConfig) -> str:
    anim = config.animation
    seed_anim = ""
    if anim.enabled and anim.noise_anim > 0:
        seed_anim = (
            f'<animate attributeName="seed" values="0;100;0" '
            f'dur="{_attr(2 / (anim.noise_anim / 5))}s" repeatCount="indefinite" />'
        )
    return (
        f'<filter id="{NOISE_FILTER_ID}">'
        f'<feTurbulence type="fractalNoise" baseFrequency="{_attr(config.noise_scale / 1000)}" '
        f'numOctaves="3" stitchTiles="stitch">{seed_anim}</feTurbulence>'
        f'<feColorMatrix type="saturate" values="0" />'
        f'<feComponentTransfer><feFuncA type="linear" slope="{_attr(config.noise / 100)}" />'
        f"</feComponentTransfer></filter>"
    )


def _render_shape(shape, index: int, config: SceneConfig, low_quality: bool,
                  blob_contrast: float) -> RenderedShape:
    profile = animation_profile(index, config.animation)
    anim = config.animation
    animate_tag = _color_cycle_tag(shape.color, profile) if anim.enabled and anim.color_cycle else ""

    common = (
        f'id="shape-{_attr(shape.id)}" fill="{_attr(shape.color.css())}" '
        f'opacity="{_attr(shape.opacity)}" filter="url(#blur-{_attr(shape.id)})" '
        f'style="mix-blend-mode: {_attr(shape.blend_mode)}"'
    )

    if isinstance(shape, BlobShape):
        pixel_size = (shape.size / 100) * config.width
        path_data = generate_blob_path(
            pixel_size, pixel_size, shape.id, shape.complexity, blob_contrast
        )
        tx = (shape.x / 100) * config.width - pixel_size / 2
        ty = (shape.y / 100) * config.height - pixel_size / 2
        element = (
            f'<g transform="translate({_attr(tx)}, {_attr(ty)})">'
            f'<path d="{path_data}" {common}>{animate_tag}</path></g>'
        )
    else:
        element = (
            f'<circle cx="{_attr(shape.x)}%" cy="{_attr(shape.y)}%" r="{_attr(shape.size / 2)}%" '
            f"{common}>{animate_tag}</circle>"
        )

    blur = shape.blur / 2 if low_quality else shape.blur
    blur_filter = (
        f'<filter id="blur-{_attr(shape.id)}" x="-100%" y="-100%" width="300%" height="300%">'
        f'<feGaussianBlur stdDeviation="{_attr(blur)}" result="coloredBlur" /></filter>'
    )
    return RenderedShape(id=shape.id, element=element, blur_filter=blur_filter, profile=profile)


# ============================================================================
# ENTRY POINTS
# ============================================================================

def compile_scene(
    config: SceneConfig,
    low_quality: bool = False,
    blob_contrast: float = BLOB_CONTRAST,
) -> RenderDocument:
    """
    Compile a scene into a RenderDocument.

    Args:
        config: Scene to render (never modified)
        low_quality: Halve blur radii and drop the grain layer (thumbnails)
        blob_contrast: Radius variance handed to the blob generator

    Returns:
        RenderDocument; call to_svg() for markup
    """
    if isinstance(config.base_color, Gradient):
        background_fill = "transparent"
        fill = f"url(#{BACKGROUND_GRADIENT_ID})"
    else:
        background_fill = config.base_color.css()
        fill = background_fill

    doc = RenderDocument(
        width=config.width,
        height=config.height,
        background_fill=background_fill,
        background=f'<rect width="100%" height="100%" fill="{_attr(fill)}" />',
    )

    if isinstance(config.base_color, Gradient):
        doc.defs.append(_gradient_def(config.base_color))
    if config.vignette.enabled:
        doc.defs.append(_vignette_def(config.vignette))
    if not low_quality:
        doc.defs.append(_noise_filter_def(config))

    css = []
    for index, shape in enumerate(config.shapes):
        rendered = _render_shape(shape, index, config, low_quality, blob_contrast)
        doc.shapes.append(rendered)
        if config.animation.enabled:
            css.append(_keyframes_css(shape, rendered.profile))
    doc.style = "".join(css)

    if config.vignette.enabled:
        doc.overlays.append(
            f'<rect width="100%" height="100%" fill="url(#{VIGNETTE_GRADIENT_ID})" '
            f'style="mix-blend-mode: normal" />'
        )
    if not low_quality:
        doc.overlays.append(
            f'<rect width="100%" height="100%" filter="url(#{NOISE_FILTER_ID})" opacity="1" '
            f'style="mix-blend-mode: overlay" />'
        )

    log.debug(
        f"Compiled {len(doc.shapes)} shapes at {config.width}x{config.height} "
        f"(animated={config.animation.enabled}, low_quality={low_quality})"
    )
    return doc


def render_svg(
    config: SceneConfig, low_quality: bool = False, blob_contrast: float = BLOB_CONTRAST
) -> str:
    return compile_scene(config, low_quality=low_quality, blob_contrast=blob_contrast).to_svg()
