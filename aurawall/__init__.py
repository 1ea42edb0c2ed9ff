"""AuraWall - deterministic procedural SVG wallpapers."""

__version__ = "0.1.0"
