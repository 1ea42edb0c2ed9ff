import xml.etree.ElementTree as ET

import pytest

from aurawall.engine.blob_paths import generate_blob_path
from aurawall.engine.compiler import SVG_NS, animation_profile, compile_scene, render_svg
from aurawall.engine.recipes import RECIPES, apply_recipe
from aurawall.engine.sdk import AnimationIntent, CircleShape, Gradient, Vignette


def _circle(i, **kwargs):
    fields = dict(id=f"c{i}", x=10 * i, y=50, size=20, color="#ff0000", opacity=0.7, blur=10)
    fields.update(kwargs)
    return CircleShape(**fields)


def test_profile_values_for_first_indices():
    intent = AnimationIntent(enabled=True, speed=5, flow=2, pulse=2, rotate=2, color_cycle_speed=5)

    p0 = animation_profile(0, intent)
    assert (p0.flow_x, p0.flow_y) == (-10, -10)
    assert p0.scale_min == pytest.approx(0.96)
    assert p0.scale_max == pytest.approx(1.04)
    assert p0.rotate_deg == 30
    assert p0.duration == pytest.approx(3.2)
    assert p0.delay == 0
    assert p0.color_duration == pytest.approx(9.6)

    p1 = animation_profile(1, intent)  # r1=0.3, r2=0.9, r3=0.7
    assert (p1.flow_x, p1.flow_y) == (-10, 10)
    assert p1.rotate_deg == -30
    assert p1.duration == pytest.approx(4 * (0.8 + 0.3 * 0.4))
    assert p1.delay == pytest.approx(-9)
    assert p1.color_duration == pytest.approx(12 * (0.8 + 0.7 * 0.4))
    assert p1.color_delay == pytest.approx(-1.5)


def test_profile_missing_fields_default_to_zero():
    profile = animation_profile(3, AnimationIntent(enabled=True))
    assert profile.flow_x == 0 and profile.rotate_deg == 0
    assert profile.scale_min == profile.scale_max == 1
    assert profile.duration == pytest.approx(20 * (0.8 + 0.9 * 0.4))


def test_removing_later_shape_keeps_earlier_animation(base_scene):
    shapes = tuple(_circle(i) for i in range(4))
    full = compile_scene(base_scene.evolve(shapes=shapes))
    trimmed = compile_scene(base_scene.evolve(shapes=shapes[:3]))
    for a, b in zip(full.shapes, trimmed.shapes):
        assert a.profile == b.profile
        assert a.element == b.element
    assert trimmed.style in full.style


def test_solid_background(sample_scene):
    svg = render_svg(sample_scene)
    assert '<rect width="100%" height="100%" fill="#000000" />' in svg
    assert "background-color: #000000" in svg


def test_linear_gradient_rotation(base_scene):
    config = base_scene.evolve(
        base_color=Gradient(kind="linear", color1="#ff0000", color2="#0000ff", angle=45)
    )
    svg = render_svg(config)
    assert '<linearGradient id="bgGradient"' in svg
    assert 'gradientTransform="rotate(45, 0.5, 0.5)"' in svg
    assert 'fill="url(#bgGradient)"' in svg
    assert 'stop-color="#ff0000"' in svg and 'stop-color="#0000ff"' in svg


def test_radial_and_unknown_gradient_kinds(base_scene):
    radial = render_svg(base_scene.evolve(base_color={"kind": "radial", "color1": "#fff", "color2": "#000"}))
    assert '<radialGradient id="bgGradient" cx="50%" cy="50%" r="50%">' in radial

    conic = render_svg(base_scene.evolve(base_color=Gradient(kind="conic", color1="#fff", color2="#000")))
    assert '<radialGradient id="bgGradient"' in conic
    assert 'data-kind="conic"' in conic


def test_blob_and_circle_geometry(sample_scene):
    doc = compile_scene(sample_scene)
    blob, circle = doc.shapes
    assert generate_blob_path(960, 960, "b1", 6, 0.4) in blob.element
    assert blob.element.startswith('<g transform="translate(')
    assert 'cx="70%" cy="60%" r="20%"' in circle.element
    assert 'style="mix-blend-mode: overlay"' in circle.element


def test_keyframes_per_shape(sample_scene):
    doc = compile_scene(sample_scene)
    assert "@keyframes move-b1" in doc.style
    assert "@keyframes move-c1" in doc.style
    assert "33% {" in doc.style and "66% {" in doc.style


def test_disabled_animation_emits_no_motion(sample_scene):
    config = sample_scene.evolve(
        animation=AnimationIntent(enabled=False, flow=5, color_cycle=True, noise_anim=8)
    )
    svg = render_svg(config)
    assert "@keyframes" not in svg
    assert "<style>" not in svg
    assert "<animate" not in svg


def test_color_cycle_uses_two_shifted_variants(base_scene):
    config = base_scene.evolve(
        shapes=(_circle(0, color="#ff0000"),),
        animation=AnimationIntent(enabled=True, speed=1, color_cycle=True, color_cycle_speed=2),
    )
    svg = render_svg(config)
    assert (
        'values="#ff0000;hsl(120, 100%, 50%);hsl(240, 100%, 50%);#ff0000"' in svg
    )
    assert 'repeatCount="indefinite"' in svg


def test_noise_filter_and_animation(base_scene):
    config = base_scene.evolve(
        noise=60,
        noise_scale=4,
        animation=AnimationIntent(enabled=True, noise_anim=8),
    )
    svg = render_svg(config)
    assert 'baseFrequency="0.004"' in svg
    assert 'numOctaves="3"' in svg
    assert 'slope="0.6"' in svg
    assert '<animate attributeName="seed" values="0;100;0" dur="1.25s"' in svg
    assert 'filter="url(#noiseFilter)"' in svg
    assert "mix-blend-mode: overlay" in svg


def test_blend_mode_passthrough_and_escaping(base_scene):
    config = base_scene.evolve(shapes=(_circle(0, blend_mode='made-up"<mode>'),))
    svg = render_svg(config)
    assert "mix-blend-mode: made-up&quot;&lt;mode&gt;" in svg
    ET.fromstring(svg)


def test_low_quality_halves_blur_and_drops_noise(sample_scene):
    svg = render_svg(sample_scene, low_quality=True)
    assert 'stdDeviation="20"' in svg
    assert 'stdDeviation="10"' in svg
    assert "noiseFilter" not in svg


def test_vignette_layer_order(sample_scene):
    config = sample_scene.evolve(vignette=Vignette(enabled=True, intensity=0.7, size=40))
    svg = render_svg(config)
    assert '<radialGradient id="vignette-grad"' in svg
    assert 'stop-opacity="0.7"' in svg
    assert svg.index('fill="url(#vignette-grad)"') < svg.index('filter="url(#noiseFilter)" opacity')
    assert svg.index('id="shape-c1"') < svg.index('fill="url(#vignette-grad)"')


def test_compile_does_not_mutate(sample_scene):
    before = sample_scene.model_dump()
    compile_scene(sample_scene)
    assert sample_scene.model_dump() == before


def test_deterministic_output(sample_scene):
    assert render_svg(sample_scene) == render_svg(sample_scene)


def test_render_svg_passes_blob_contrast(sample_scene):
    svg = render_svg(sample_scene, blob_contrast=0.9)
    assert svg == compile_scene(sample_scene, blob_contrast=0.9).to_svg()
    assert svg != render_svg(sample_scene)


@pytest.mark.parametrize("name", list(RECIPES)[:9])
def test_recipe_output_is_well_formed(name, base_scene):
    config = apply_recipe(name, base_scene, 1234)
    root = ET.fromstring(render_svg(config))
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.get("viewBox") == "0 0 1920 1080"
    shape_ids = [el.get("id") for el in root.iter() if (el.get("id") or "").startswith("shape-")]
    assert len(shape_ids) == len(config.shapes)
