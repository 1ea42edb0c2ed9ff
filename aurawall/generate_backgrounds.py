#!/usr/bin/env python3
"""
Batch background generator.

Applies every requested recipe to the configured default scene, compiles it
and writes one SVG per recipe (bg-<recipe>.svg by default).
"""

import argparse
import hashlib
import os
import sys
from typing import List, Optional, Union

from aurawall.cli.args import build_common_parser
from aurawall.core import get_logger, load_config, load_env
from aurawall.engine.compiler import compile_scene
from aurawall.engine.qa_gates import run_qa_suite
from aurawall.engine.recipes import apply_recipe, get_recipe, list_recipes
from aurawall.engine.sdk import BLOB_CONTRAST, SceneConfig
from aurawall.engine.seeded_random import SeededRandom

log = get_logger("aurawall.generate_backgrounds")


class QAFailure(RuntimeError):
    pass


def parse_seed(value: Optional[str]) -> Optional[Union[int, str]]:
    """Numeric seeds stay integers; anything else is hashed as a string."""
    if value is None:
        return None
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def recipe_seed(seed: Union[int, str], name: str) -> int:
    """32-bit seed for one recipe, digested from the full seed and the recipe name."""
    digest = hashlib.sha1(f"{seed}-{name}".encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


def recipe_rng(seed: Optional[Union[int, str]], name: str) -> SeededRandom:
    """Per-recipe source so output for one recipe does not depend on the others run."""
    if seed is None:
        return SeededRandom.unseeded()
    return SeededRandom(recipe_seed(seed, name))


def build_background(
    name: str,
    base: SceneConfig,
    seed: Optional[Union[int, str]] = None,
    force_animation: bool = True,
) -> SceneConfig:
    config = apply_recipe(name, base, recipe_rng(seed, name))
    if force_animation and not config.animation.enabled:
        config = config.evolve(animation=config.animation.model_copy(update={"enabled": True}))
    return config


def generate(
    recipes: List[str],
    out_dir: str,
    base: SceneConfig,
    seed: Optional[Union[int, str]] = None,
    file_pattern: str = "bg-{recipe}.svg",
    force_animation: bool = True,
    blob_contrast: float = BLOB_CONTRAST,
    qa: bool = False,
    dry_run: bool = False,
) -> List[str]:
    """
    Generate one SVG per recipe.

    Returns:
        Paths written (or that would have been written on a dry run)

    Raises:
        KeyError: Unknown recipe name
        QAFailure: A scene failed the QA gates while qa=True
    """
    for name in recipes:
        get_recipe(name)

    if not dry_run:
        os.makedirs(out_dir, exist_ok=True)

    written = []
    for name in recipes:
        log.info(f"Generating BG for {name}...")
        config = build_background(name, base, seed, force_animation)
        doc = compile_scene(config, blob_contrast=blob_contrast)

        if qa:
            results = run_qa_suite(config, doc)
            if results["overall_status"] != "PASS":
                raise QAFailure(f"QA failed for {name}: {results['summary']}")

        out_path = os.path.join(out_dir, file_pattern.format(recipe=name))
        if dry_run:
            log.info(f"[dry-run] Would save {out_path} ({len(config.shapes)} shapes)")
        else:
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(doc.to_svg())
            log.info(f"Saved {out_path}")
        written.append(out_path)

    log.info("All backgrounds generated!")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate SVG backgrounds from recipes", parents=[build_common_parser()]
    )
    parser.add_argument("--out", default=None, help="Output directory (default: batch.output_dir)")
    parser.add_argument(
        "--recipe",
        action="append",
        default=None,
        help="Recipe to run; repeat for several (default: all)",
    )
    parser.add_argument("--qa", action="store_true", help="Run QA gates and fail on errors")
    args = parser.parse_args(argv)

    try:
        load_env()
        cfg = load_config(args.config)
        if cfg.batch.log_file:
            get_logger("aurawall.generate_backgrounds", cfg.batch.log_file)

        recipes = args.recipe or cfg.batch.recipes or list_recipes()
        seed = parse_seed(args.seed) if args.seed is not None else cfg.engine.seed
        base = cfg.default_scene(width=args.width, height=args.height)

        generate(
            recipes,
            args.out or cfg.batch.output_dir,
            base,
            seed=seed,
            file_pattern=cfg.batch.file_pattern,
            force_animation=cfg.batch.force_animation,
            blob_contrast=cfg.engine.blob_contrast,
            qa=args.qa,
            dry_run=args.dry_run,
        )
        return 0
    except KeyboardInterrupt:
        log.info("Generation interrupted by user")
        return 130
    except Exception as e:
        log.error(f"Background generation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
