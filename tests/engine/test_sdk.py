import pytest
from pydantic import ValidationError

from aurawall.engine.color_engine import HexColor, HslColor
from aurawall.engine.sdk import (
    EXPORT_SIZES,
    AnimationIntent,
    BlobShape,
    CircleShape,
    Gradient,
    SceneConfig,
    load_scene_config,
    save_scene_config,
    validate_scene_config,
)


def test_canvas_dimensions_required_and_positive():
    with pytest.raises(ValidationError):
        SceneConfig(height=100)
    with pytest.raises(ValidationError):
        SceneConfig(width=0, height=100)
    with pytest.raises(ValidationError):
        SceneConfig(width=100, height=-1)


def test_blob_complexity_below_three_rejected():
    with pytest.raises(ValidationError):
        BlobShape(id="b", complexity=2)
    assert BlobShape(id="b").complexity == 6


def test_circle_has_no_complexity():
    assert "complexity" not in CircleShape.model_fields


def test_shapes_from_dicts_use_kind_tag():
    config = SceneConfig(
        width=10,
        height=10,
        shapes=[
            {"kind": "blob", "id": "a", "color": "#fff", "complexity": 4},
            {"kind": "circle", "id": "b", "color": "hsl(10, 20%, 30%)"},
        ],
    )
    assert isinstance(config.shapes, tuple)
    assert isinstance(config.shapes[0], BlobShape)
    assert isinstance(config.shapes[1], CircleShape)
    assert config.shapes[0].color == HexColor(value="#ffffff")
    assert config.shapes[1].color == HslColor(h=10, s=20, l=30)


def test_duplicate_shape_ids_rejected():
    with pytest.raises(ValidationError):
        SceneConfig(width=10, height=10, shapes=[CircleShape(id="x"), CircleShape(id="x")])


@pytest.mark.parametrize("bad_id", ["star.1", "a b", "x{y}", "#c1", ""])
def test_shape_ids_must_be_css_safe(bad_id):
    with pytest.raises(ValidationError):
        CircleShape(id=bad_id)
    assert CircleShape(id="glow_2-a").id == "glow_2-a"


def test_config_is_frozen(sample_scene):
    with pytest.raises(ValidationError):
        sample_scene.noise = 50


def test_partial_animation_is_default_merged():
    intent = AnimationIntent(**{"enabled": True, "flow": 3, "unknown": 1})
    assert intent.speed == 0 and intent.pulse == 0 and intent.color_cycle is False
    assert intent.flow == 3


def test_background_accepts_strings_and_gradients():
    assert SceneConfig(width=1, height=1, base_color="#ABC").base_color == HexColor(value="#aabbcc")
    gradient = SceneConfig(
        width=1, height=1, base_color={"kind": "linear", "color1": "#000", "color2": "#fff", "angle": 90}
    ).base_color
    assert isinstance(gradient, Gradient) and gradient.angle == 90


def test_evolve_validates(sample_scene):
    with pytest.raises(ValidationError):
        sample_scene.evolve(width=0)
    changed = sample_scene.evolve(noise=5)
    assert changed.noise == 5 and sample_scene.noise == 25


def test_save_and_load_round_trip(tmp_path, sample_scene):
    path = tmp_path / "scenes" / "demo.json"
    save_scene_config(sample_scene, path)
    assert load_scene_config(path) == sample_scene


def test_validate_scene_config():
    config = validate_scene_config({"width": 5, "height": 5})
    assert validate_scene_config(config) is config
    with pytest.raises(TypeError):
        validate_scene_config("nope")


def test_export_sizes():
    names = [size.name for size in EXPORT_SIZES]
    assert "4K Desktop" in names
    assert all(size.width > 0 and size.height > 0 for size in EXPORT_SIZES)
