import argparse


def build_common_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(add_help=False)
    ap.add_argument("--config", default=None, help="Path to a global YAML config (default: conf/global.yaml)")
    ap.add_argument("--seed", default=None, help="Integer or string seed; omit for non-reproducible output")
    ap.add_argument("--width", type=int, default=None, help="Canvas width override in px")
    ap.add_argument("--height", type=int, default=None, help="Canvas height override in px")
    ap.add_argument("--dry-run", action="store_true", help="Compile scenes but do not write files")
    return ap
