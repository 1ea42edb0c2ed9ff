"""
Test configuration and shared fixtures for the wallpaper engine.
"""

import os
import sys

import pytest

# Ensure repo root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from aurawall.core import load_config
from aurawall.engine.sdk import AnimationIntent, BlobShape, CircleShape, SceneConfig


@pytest.fixture(scope="session")
def test_config():
    """Load the shipped example configuration"""
    return load_config(os.path.join(ROOT, "conf", "global.example.yaml"))


@pytest.fixture
def base_scene():
    """Default base every recipe starts from in the batch generator"""
    return SceneConfig(
        width=1920,
        height=1080,
        base_color="#000000",
        noise=25,
        noise_scale=1.5,
        animation=AnimationIntent(enabled=True, speed=5, flow=2, pulse=2, rotate=2, color_cycle_speed=5),
    )


@pytest.fixture
def sample_scene(base_scene):
    """Small hand-built scene with one blob and one circle"""
    return base_scene.evolve(
        shapes=(
            BlobShape(id="b1", x=30, y=40, size=50, color="#ff00cc", opacity=0.6, blur=40,
                      blend_mode="screen", complexity=6),
            CircleShape(id="c1", x=70, y=60, size=40, color="hsl(200, 80%, 60%)", opacity=0.5,
                        blur=20, blend_mode="overlay"),
        )
    )
