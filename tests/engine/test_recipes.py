import pytest

from aurawall.engine.color_engine import HslColor
from aurawall.engine.recipes import (
    RECIPES,
    Recipe,
    apply_recipe,
    get_recipe,
    list_recipes,
    register_recipe,
)
from aurawall.engine.sdk import BlobShape, CircleShape
from aurawall.engine.seeded_random import SeededRandom

EXPECTED_BOUNDS = {
    "boreal": (3, 5),
    "chroma": (3, 5),
    "lava": (3, 6),
    "midnight": (18, 18),
    "geometrica": (2, 5),
    "glitch": (9, 32),
    "sakura": (12, 12),
    "ember": (11, 11),
    "oceanic": (3, 7),
}


def test_registry_contents():
    assert list_recipes()[:9] == list(EXPECTED_BOUNDS)
    for name, (lo, hi) in EXPECTED_BOUNDS.items():
        recipe = get_recipe(name)
        assert (recipe.min_shapes, recipe.max_shapes) == (lo, hi)
        assert recipe.description


@pytest.mark.parametrize("name", list(EXPECTED_BOUNDS))
def test_shape_count_bounds_over_many_runs(name, base_scene):
    lo, hi = EXPECTED_BOUNDS[name]
    rng = SeededRandom(2024)
    counts = set()
    for _ in range(1000):
        config = apply_recipe(name, base_scene, rng)
        counts.add(len(config.shapes))
        assert lo <= len(config.shapes) <= hi
    if lo != hi:
        assert len(counts) > 1


@pytest.mark.parametrize("name", list(EXPECTED_BOUNDS))
def test_seeded_runs_are_reproducible(name, base_scene):
    assert apply_recipe(name, base_scene, 42) == apply_recipe(name, base_scene, 42)
    assert apply_recipe(name, base_scene, "demo-1") == apply_recipe(name, base_scene, "demo-1")


def test_different_seeds_differ(base_scene):
    assert apply_recipe("boreal", base_scene, 1) != apply_recipe("boreal", base_scene, 2)


def test_unseeded_run_is_valid(base_scene):
    config = apply_recipe("chroma", base_scene)
    assert 3 <= len(config.shapes) <= 5


def test_canvas_and_vignette_inherited(base_scene):
    config = apply_recipe("sakura", base_scene, 7)
    assert (config.width, config.height) == (base_scene.width, base_scene.height)
    assert config.vignette == base_scene.vignette
    assert base_scene.shapes == ()


def test_shape_ids_unique_and_tagged(base_scene):
    config = apply_recipe("midnight", base_scene, 3)
    ids = [s.id for s in config.shapes]
    assert len(set(ids)) == len(ids)
    assert ids[0].startswith("nebula-") and ids[0].endswith("-0")
    assert ids[3].startswith("star-")


def test_animation_overrides(base_scene):
    lava = apply_recipe("lava", base_scene, 1).animation
    assert lava.enabled and lava.flow == 5 and lava.speed == 2
    assert lava.pulse == base_scene.animation.pulse

    geometrica = apply_recipe("geometrica", base_scene, 1).animation
    assert geometrica.enabled is False

    glitch = apply_recipe("glitch", base_scene, 1).animation
    assert glitch.noise_anim == 8 and glitch.speed == 5

    oceanic = apply_recipe("oceanic", base_scene, 1).animation
    assert oceanic.color_cycle is True and oceanic.color_cycle_speed == 2

    boreal = apply_recipe("boreal", base_scene, 1).animation
    assert boreal == base_scene.animation


def test_boreal_blend_palette_matches_base_lightness(base_scene):
    dark_modes = {"screen", "color-dodge", "normal", "lighten"}
    light_modes = {"multiply", "overlay", "normal", "difference"}
    rng = SeededRandom(77)
    for _ in range(200):
        config = apply_recipe("boreal", base_scene, rng)
        modes = {s.blend_mode for s in config.shapes}
        assert isinstance(config.base_color, HslColor)
        if config.base_color.l < 50:
            assert modes <= dark_modes
        else:
            assert modes <= light_modes


def test_geometrica_snaps_to_grid(base_scene):
    config = apply_recipe("geometrica", base_scene, 5)
    for shape in config.shapes:
        assert isinstance(shape, CircleShape)
        assert shape.x in (0, 25, 50, 75, 100)
        assert shape.y in (0, 25, 50, 75, 100)
        assert shape.size in (10, 25, 50, 75)
        expected_mode = "multiply" if shape.color.value == "#000000" else "normal"
        assert shape.blend_mode == expected_mode


def test_lava_blobs_use_low_complexity(base_scene):
    config = apply_recipe("lava", base_scene, 9)
    assert all(isinstance(s, BlobShape) and s.complexity in (3, 4) for s in config.shapes)


def test_injected_source_keeps_advancing(base_scene):
    rng = SeededRandom(10)
    first = apply_recipe("ember", base_scene, rng)
    second = apply_recipe("ember", base_scene, rng)
    assert first != second
    replay = SeededRandom(10)
    assert apply_recipe("ember", base_scene, replay) == first


def test_unknown_recipe_raises_key_error(base_scene):
    with pytest.raises(KeyError) as exc:
        apply_recipe("nope", base_scene, 1)
    assert "boreal" in str(exc.value)


def test_register_custom_recipe(base_scene):
    def empty(base, rng):
        return base.evolve(noise=rng.next() * 10)

    register_recipe(Recipe("empty-test", "nothing", 0, 0, empty))
    try:
        config = apply_recipe("empty-test", base_scene, 1)
        assert config.shapes == ()
        assert 0 <= config.noise < 10
    finally:
        RECIPES.pop("empty-test")


def test_register_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        register_recipe(Recipe("broken", "", 5, 2, lambda base, rng: base))
