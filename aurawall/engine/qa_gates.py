#!/usr/bin/env python3
"""
QA Gates for the Wallpaper Engine

Post-compile checks that catch broken scenes before they are written to disk:
blob paths must parse and close, colors must be in range, and the final
markup must be well-formed XML. All functions are side-effect free and return
structured results.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from svgpathtools import CubicBezier, parse_path

from aurawall.core import get_logger

from .color_engine import HexColor, HslColor, contrast_ratio
from .compiler import SVG_NS, RenderDocument, compile_scene
from .sdk import BlobShape, Gradient, SceneConfig

log = get_logger("aurawall.qa_gates")

_PATH_DATA = re.compile(r'<path d="([^"]*)"')
_HEX_VALUE = re.compile(r"^#[0-9a-f]{6}$")

# Shapes this close in luminance to the background are flagged, not failed
LOW_CONTRAST_RATIO = 1.1


@dataclass
class QAResult:
    """Structured result from QA checks"""
    ok: bool
    fails: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)


def check_blob_paths(config: SceneConfig, doc: RenderDocument) -> QAResult:
    """
    Parse every blob path with svgpathtools and verify that it is closed and
    made of exactly `complexity` cubic segments.
    """
    fails = []
    details = {"paths": []}

    for shape, rendered in zip(config.shapes, doc.shapes):
        if not isinstance(shape, BlobShape):
            continue
        match = _PATH_DATA.search(rendered.element)
        if not match:
            fails.append(f"Blob {shape.id} has no path data")
            continue
        try:
            path = parse_path(match.group(1))
        except (ValueError, IndexError) as e:
            fails.append(f"Blob {shape.id} path does not parse: {e}")
            continue

        cubic_count = sum(1 for seg in path if isinstance(seg, CubicBezier))
        closed = path.isclosed()
        if not closed:
            fails.append(f"Blob {shape.id} path is not closed")
        if cubic_count != shape.complexity:
            fails.append(
                f"Blob {shape.id} has {cubic_count} cubic segments, expected {shape.complexity}"
            )
        details["paths"].append(
            {"id": shape.id, "closed": closed, "segments": cubic_count, "complexity": shape.complexity}
        )

    return QAResult(ok=not fails, fails=fails, details=details)


def _color_in_range(color) -> bool:
    if isinstance(color, HexColor):
        return bool(_HEX_VALUE.match(color.value))
    if isinstance(color, HslColor):
        return 0 <= color.h < 360 and 0 <= color.s <= 100 and 0 <= color.l <= 100
    return False


def check_color_ranges(config: SceneConfig) -> QAResult:
    """Every color in range, opacities in [0, 1]; warn on shapes that vanish into the base."""
    fails = []
    warnings = []
    details = {"low_contrast": []}

    backgrounds = (
        [config.base_color.color1, config.base_color.color2]
        if isinstance(config.base_color, Gradient)
        else [config.base_color]
    )
    for color in backgrounds:
        if not _color_in_range(color):
            fails.append(f"Background color out of range: {color.css()}")

    for shape in config.shapes:
        if not _color_in_range(shape.color):
            fails.append(f"Shape {shape.id} color out of range: {shape.color.css()}")
        if not 0 <= shape.opacity <= 1:
            fails.append(f"Shape {shape.id} opacity out of range: {shape.opacity}")
        ratio = min(contrast_ratio(shape.color, bg) for bg in backgrounds)
        if ratio < LOW_CONTRAST_RATIO:
            warnings.append(f"Shape {shape.id} is nearly invisible on the background ({ratio:.2f}:1)")
            details["low_contrast"].append(shape.id)

    return QAResult(ok=not fails, fails=fails, warnings=warnings, details=details)


def check_markup(svg: str, expected_shapes: Optional[int] = None) -> QAResult:
    """The document parses as XML, has an <svg> root and the expected shape count."""
    try:
        root = ET.fromstring(svg)
    except ET.ParseError as e:
        return QAResult(ok=False, fails=[f"SVG is not well-formed: {e}"])

    fails = []
    if root.tag != f"{{{SVG_NS}}}svg":
        fails.append(f"Unexpected root element {root.tag}")

    shape_count = sum(
        1 for el in root.iter() if el.get("id", "").startswith("shape-")
    )
    if expected_shapes is not None and shape_count != expected_shapes:
        fails.append(f"Expected {expected_shapes} shapes in markup, found {shape_count}")

    return QAResult(ok=not fails, fails=fails, details={"shape_count": shape_count})


def run_qa_suite(config: SceneConfig, doc: Optional[RenderDocument] = None) -> Dict[str, Any]:
    """
    Run the complete QA suite on a scene.

    Args:
        config: Scene that was (or will be) compiled
        doc: Compiled document; compiled here when omitted

    Returns:
        Dict with per-check results and a summary
    """
    if doc is None:
        doc = compile_scene(config)

    checks = {
        "blob_paths": check_blob_paths(config, doc),
        "colors": check_color_ranges(config),
        "markup": check_markup(doc.to_svg(), expected_shapes=len(config.shapes)),
    }

    results = {
        "overall_status": "PASS",
        "checks": {
            name: {
                "ok": result.ok,
                "fails": result.fails,
                "warnings": result.warnings,
                "details": result.details,
            }
            for name, result in checks.items()
        },
    }

    total_checks = len(checks)
    passed_checks = sum(1 for r in checks.values() if r.ok)
    results["summary"] = {
        "total_checks": total_checks,
        "passed_checks": passed_checks,
        "failed_checks": total_checks - passed_checks,
        "warnings": sum(len(r.warnings) for r in checks.values()),
    }
    if passed_checks != total_checks:
        results["overall_status"] = "FAIL"
        log.warning(f"QA failed: {[f for r in checks.values() for f in r.fails]}")

    return results
