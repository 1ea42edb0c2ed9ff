import re

import pytest
from svgpathtools import CubicBezier, parse_path

from aurawall.engine.blob_paths import blob_points, generate_blob_path

DEMO_1_PATH = (
    "M 1314.6212291009724 540 "
    "C 1316.894002258312 660.0986800699653 1264.906646411866 858.4679598054474 "
    "1174.8353352751583 912.1057159576684 "
    "C 1084.7640241384506 965.7434721098894 889.5043709306048 923.8441562396036 "
    "774.1933622807265 861.8265369133256 "
    "C 658.8823536308483 799.8089175870476 481.47636579209944 644.6897031978053 "
    "482.96928337588906 540.0000000000001 "
    "C 484.4622009596787 435.31029680219496 670.1126322909257 291.7693784701819 "
    "783.1508677834644 233.68831772649463 "
    "C 896.189103276003 175.60725698280737 1072.620302778203 140.46168849229232 "
    "1161.198696331121 191.51363553787655 "
    "C 1249.777089884039 242.56558258346078 1312.3484559436329 419.9013199300347 "
    "1314.6212291009724 540 Z"
)

TRIANGLE_PATH = (
    "M 100 50 "
    "C 100 64.43375672974065 37.500000000000014 100.51814855409226 25.00000000000001 93.30127018922194 "
    "C 12.500000000000005 86.08439182435161 12.49999999999998 13.915608175648398 "
    "24.99999999999998 6.698729810778076 "
    "C 37.49999999999998 -0.5181485540922468 100 35.566243270259356 100 50 Z"
)

SQUARE_PATH = (
    "M 200 100 "
    "C 200 133.33333333333334 133.33333333333334 200 100 200 "
    "C 66.66666666666666 200 2.3684757858670005e-15 133.33333333333334 0 100.00000000000001 "
    "C -2.3684757858670005e-15 66.66666666666669 66.66666666666666 2.3684757858670005e-15 "
    "99.99999999999999 0 "
    "C 133.33333333333331 -2.3684757858670005e-15 200 66.66666666666666 200 100 Z"
)


def test_golden_demo_1():
    assert generate_blob_path(1920, 1080, "demo-1", 6, 0.4) == DEMO_1_PATH


def test_zero_contrast_fixtures():
    assert generate_blob_path(100, 100, "abc", 3, 0) == TRIANGLE_PATH
    assert generate_blob_path(200, 200, "x", 4, 0) == SQUARE_PATH


def test_deterministic():
    first = generate_blob_path(800, 600, "shape-7", 7, 0.3)
    assert all(generate_blob_path(800, 600, "shape-7", 7, 0.3) == first for _ in range(5))
    assert generate_blob_path(800, 600, "shape-8", 7, 0.3) != first


@pytest.mark.parametrize("complexity", [3, 4, 5, 6, 8, 10, 16])
def test_closed_with_one_segment_per_vertex(complexity):
    d = generate_blob_path(500, 500, f"seed-{complexity}", complexity, 0.4)
    assert d.startswith("M ")
    assert d.endswith(" Z")
    assert d.count(" C ") == complexity

    start = re.match(r"M (\S+) (\S+)", d).groups()
    last_end = d[: -len(" Z")].split()[-2:]
    assert list(start) == last_end

    path = parse_path(d)
    assert path.isclosed()
    assert sum(1 for seg in path if isinstance(seg, CubicBezier)) == complexity


@pytest.mark.parametrize("complexity", [2, 1, 0, -3])
def test_complexity_below_three_raises(complexity):
    with pytest.raises(ValueError):
        generate_blob_path(100, 100, "abc", complexity, 0.3)


def test_radius_bounds():
    size = 400
    for x, y in blob_points(size, size, "bounds", 9, 0.4):
        r = ((x - size / 2) ** 2 + (y - size / 2) ** 2) ** 0.5
        assert size / 2 * 0.6 - 1e-9 <= r <= size / 2 + 1e-9


def test_contrast_not_clamped():
    # contrast > 1 lets vertices cross the centre; still a valid closed path
    d = generate_blob_path(300, 300, "wild", 5, 1.8)
    assert parse_path(d).isclosed()
