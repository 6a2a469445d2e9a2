from __future__ import annotations

import argparse
import copy
import logging
import os

from editor import EditorConfig, ImageEditor, setup_logging
from shapes import Dot
from plotting.renderer import render_to_file, render_scene_grid

logger = logging.getLogger("editor.edit_scene")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Load the example scene and group a stray dot into it.")
    p.add_argument("--stray", type=float, nargs=2, default=[1, 3], metavar=("X", "Y"), help="position of the dot to group")
    p.add_argument("--group-loaded", action="store_true", help="group the scene's own dot instead of a stray one")
    p.add_argument("--strict", action="store_true", help="refuse to group graphics that are not in the scene")
    p.add_argument("--out", type=str, default="", help="write before/after snapshots to this PNG or SVG path")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    p.add_argument("--log-file", type=str, default="", help="also write the log to this file")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file or None)

    editor = ImageEditor(EditorConfig(strict_grouping=args.strict))
    root = editor.load()
    before = copy.deepcopy(root)

    if args.group_loaded:
        selection = [root.children[0]]
    else:
        selection = [Dot(*args.stray)]
    editor.group_selected(selection)
    logger.info("Scene now has %d top-level graphic(s)", len(root))

    if args.out:
        out_dir = os.path.dirname(args.out)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        render_scene_grid([before, root], args.out, cols=2, titles=["loaded", "grouped"])
        base, ext = os.path.splitext(args.out)
        render_to_file(root, f"{base}_scene{ext or '.png'}")


if __name__ == "__main__":
    main()
