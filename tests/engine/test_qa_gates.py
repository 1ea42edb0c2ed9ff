from aurawall.engine.compiler import compile_scene
from aurawall.engine.qa_gates import (
    QAResult,
    check_blob_paths,
    check_color_ranges,
    check_markup,
    run_qa_suite,
)
from aurawall.engine.recipes import apply_recipe
from aurawall.engine.sdk import CircleShape


def test_blob_paths_pass_for_compiled_scene(sample_scene):
    result = check_blob_paths(sample_scene, compile_scene(sample_scene))
    assert isinstance(result, QAResult)
    assert result.ok, result.fails
    assert result.details["paths"] == [{"id": "b1", "closed": True, "segments": 6, "complexity": 6}]


def test_blob_paths_flag_tampered_markup(sample_scene):
    doc = compile_scene(sample_scene)
    # drop the last curve so the blob closes with a straight line
    head, _, tail = doc.shapes[0].element.rpartition(" C ")
    doc.shapes[0].element = head + tail[tail.index(" Z"):]
    result = check_blob_paths(sample_scene, doc)
    assert not result.ok


def test_color_ranges(sample_scene):
    assert check_color_ranges(sample_scene).ok


def test_low_contrast_is_a_warning(base_scene):
    config = base_scene.evolve(shapes=(CircleShape(id="ghost", color="#000000"),))
    result = check_color_ranges(config)
    assert result.ok
    assert result.details["low_contrast"] == ["ghost"]


def test_check_markup():
    assert not check_markup("<svg><g></svg>").ok
    wrong_root = check_markup('<html xmlns="http://www.w3.org/2000/svg"/>')
    assert not wrong_root.ok


def test_check_markup_shape_count(sample_scene):
    svg = compile_scene(sample_scene).to_svg()
    assert check_markup(svg, expected_shapes=2).ok
    assert not check_markup(svg, expected_shapes=3).ok


def test_run_qa_suite_on_recipes(base_scene):
    for name in ("boreal", "glitch", "oceanic", "midnight"):
        config = apply_recipe(name, base_scene, 99)
        results = run_qa_suite(config)
        assert results["overall_status"] == "PASS", results
        assert results["summary"]["total_checks"] == 3
        assert results["summary"]["failed_checks"] == 0
