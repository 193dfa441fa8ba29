from __future__ import annotations

import argparse
import asyncio

from iconpipe import console
from iconpipe.config import get_build_config, get_release_config
from iconpipe.icons import Framework, build_framework
from iconpipe.release import load_context, run_release
from iconpipe.release.context import default_io


def build_main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate React/Vue icon components from SVG assets")
    ap.add_argument("target", choices=[f.value for f in Framework], help="Framework package to build")
    args = ap.parse_args(argv)

    cfg = get_build_config()
    target = Framework(args.target)
    console.info(f"Building {target.value} package...")
    try:
        count = asyncio.run(build_framework(target, cfg.assets_dir, cfg.packages_dir))
    except Exception as e:
        console.error(f"Build failed: {e}")
        return 1
    console.info(f"Finished building {target.value} package ({count} icons).")
    return 0


def release_main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Bump versions, tag, and publish the icon packages")
    ap.add_argument("version", nargs="?", default=None, help="Explicit target version (prompted when omitted)")
    ap.add_argument("--dry", action="store_true", help="Log git/publish side effects instead of running them")
    args = ap.parse_args(argv)

    cfg = get_release_config()
    try:
        ctx = load_context(cfg, target_version=args.version, dry_run=args.dry)
    except (OSError, ValueError) as e:
        console.error(f"Cannot start release: {e}")
        return 1
    return run_release(ctx, default_io(cfg, ctx))
