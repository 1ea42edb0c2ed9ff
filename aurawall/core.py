import logging
import logging.handlers
import os
import sys
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

BASE = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# ---------------- Logging ----------------


def get_logger(name="aurawall", log_file=None):
    # Handlers live on the top-level package logger; "aurawall.<module>" loggers propagate to it
    logger = logging.getLogger(name.split(".")[0])
    fmt = logging.Formatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","step":"%(name)s","msg":"%(message)s"}'
    )
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(fmt)
        logger.addHandler(sh)
    has_file = any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
    if log_file and not has_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logging.getLogger(name)


log = get_logger("aurawall")

# ---------------- Config Models ----------------


class CanvasCfg(BaseModel):
    width: int = Field(1920, gt=0)
    height: int = Field(1080, gt=0)
    base_color: str = "#000000"


class NoiseCfg(BaseModel):
    amount: float = Field(25, ge=0, le=100)
    scale: float = Field(1.5, gt=0)


class AnimationCfg(BaseModel):
    enabled: bool = True
    speed: float = 5
    flow: float = 2
    pulse: float = 2
    rotate: float = 2
    noise_anim: float = 0
    color_cycle: bool = False
    color_cycle_speed: float = 5


class EngineCfg(BaseModel):
    blob_contrast: float = 0.4
    seed: Optional[int] = None


class BatchCfg(BaseModel):
    output_dir: str = "public"
    file_pattern: str = "bg-{recipe}.svg"
    force_animation: bool = True
    recipes: list[str] = Field(default_factory=list)
    log_file: Optional[str] = None


class GlobalCfg(BaseModel):
    canvas: CanvasCfg = Field(default_factory=CanvasCfg)
    noise: NoiseCfg = Field(default_factory=NoiseCfg)
    animation: AnimationCfg = Field(default_factory=AnimationCfg)
    engine: EngineCfg = Field(default_factory=EngineCfg)
    batch: BatchCfg = Field(default_factory=BatchCfg)

    def default_scene(self, width: Optional[int] = None, height: Optional[int] = None):
        """Shared base scene every recipe in a batch run starts from."""
        from aurawall.engine.sdk import SceneConfig

        return SceneConfig(
            width=width or self.canvas.width,
            height=height or self.canvas.height,
            base_color=self.canvas.base_color,
            noise=self.noise.amount,
            noise_scale=self.noise.scale,
            shapes=(),
            animation=self.animation.model_dump(),
        )


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[str] = None) -> GlobalCfg:
    if path is None:
        path = os.environ.get("AURAWALL_CONFIG")
    if path is None:
        path = os.path.join(BASE, "conf", "global.yaml")
        if not os.path.exists(path):
            path = os.path.join(BASE, "conf", "global.example.yaml")
    if not os.path.exists(path):
        log.warning(f"No config found at {path}, using built-in defaults")
        return GlobalCfg()
    raw = load_yaml(path)
    if not isinstance(raw, dict):
        raise ValueError(f"YAML at {path} must be a mapping/object.")

    try:
        cfg = GlobalCfg(**raw)
    except ValidationError as e:
        log.error(f"Config validation failed: {e}")
        raise
    return cfg


# ---------------- Env ----------------


def load_env() -> dict:
    load_dotenv(os.path.join(BASE, ".env"))
    env = {k: v for k, v in os.environ.items()}
    return env
