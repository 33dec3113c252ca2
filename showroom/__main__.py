"""Showroom - interior portfolio viewer.

Usage:
    showroom catalog.json
    showroom --previews catalog.json [out_dir]
"""

from __future__ import annotations
import os
import sys
import traceback

from .catalog import CatalogError, load_interiors
from .config import PREVIEW_DIR
from .logging import log


USAGE = "usage: showroom catalog.json | showroom --previews catalog.json [out_dir]"


def run_previews(catalog_path: str, out_dir: str) -> int:
    from .previews import attach_previews_file

    try:
        attach_previews_file(catalog_path, out_dir)
    except (OSError, ValueError) as e:
        log(f"[PREVIEW][CRITICAL] {e}")
        return 1
    return 0


def run_viewer(catalog_path: str) -> int:
    try:
        interiors = load_interiors(catalog_path)
    except CatalogError as e:
        log(f"[CATALOG][CRITICAL] {e}")
        return 1

    # raylib is only needed once a window is opened
    from .app import create_app

    base_dir = os.path.dirname(os.path.abspath(catalog_path))
    app = create_app(interiors, base_dir, catalog_path)
    if not app.initialize():
        return 1
    app.run()
    return 0


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    log(f"[MAIN] Starting with args {args}")

    if args and args[0] == "--previews":
        if len(args) not in (2, 3):
            print(USAGE, file=sys.stderr)
            return 2
        catalog_path = os.path.abspath(args[1])
        out_dir = args[2] if len(args) == 3 else os.path.join(os.path.dirname(catalog_path), PREVIEW_DIR)
        return run_previews(catalog_path, out_dir)

    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        return 2
    return run_viewer(os.path.abspath(args[0]))


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        log(f"[FATAL] Fatal error: {e!r}")
        log(f"[FATAL] Traceback:\n{traceback.format_exc()}")
        sys.exit(1)
