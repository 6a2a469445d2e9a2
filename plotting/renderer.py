from __future__ import annotations

from typing import Optional, Sequence, Tuple
import logging
import os
import matplotlib.pyplot as plt
from PIL import Image

from shapes import Graphic

from plotting.vectorizer import save_graphic_as_svg, save_graphic_as_png, draw_graphic_on_axis

logger = logging.getLogger(__name__)


def _infer_format(out_path: Optional[str]) -> str:
    if out_path is not None and out_path.lower().endswith(".svg"):
        return "svg"
    return "png"


def render_to_file(
    graphic: Graphic,
    out_path: Optional[str],
    resolution: int = 600,
    format: Optional[str] = None,
    return_image: bool = False,
) -> Optional[Image.Image]:
    """
    Render a graphic tree as PNG or SVG. The format defaults to the out_path
    extension. With return_image=True a PNG is rendered in memory and returned.
    """
    if format is None:
        format = _infer_format(out_path)

    if format == "svg":
        if out_path is None:
            raise ValueError("SVG rendering requires an output path (out_path).")
        save_graphic_as_svg(graphic, filename=out_path)
        logger.info("Saved %s", out_path)
        return None

    if format == "png":
        if return_image:
            return save_graphic_as_png(graphic, filename=None, resolution=resolution)
        if out_path is None:
            raise ValueError("PNG rendering requires an output path (out_path) when return_image is False.")
        save_graphic_as_png(graphic, filename=out_path, resolution=resolution)
        logger.info("Saved %s", out_path)
        return None

    raise ValueError(f"unsupported format: {format}")


def render_scene_grid(
    graphics: Sequence[Graphic],
    out_path: str,
    cols: int = 4,
    titles: Optional[Sequence[str]] = None,
    figsize_per_cell: Tuple[float, float] = (3.0, 3.0),
) -> None:
    """
    Renders several graphics side by side, e.g. snapshots of a scene before and after grouping.
    """
    n = len(graphics)
    cols = max(1, min(cols, max(n, 1)))
    rows = max(1, (n + cols - 1) // cols)
    fig_w = figsize_per_cell[0] * cols
    fig_h = figsize_per_cell[1] * rows

    fig, axes = plt.subplots(rows, cols, figsize=(fig_w, fig_h), constrained_layout=True, squeeze=False)
    fig.patch.set_facecolor('white')

    for idx, graphic in enumerate(graphics):
        ax = axes[idx // cols, idx % cols]
        ax.set_facecolor('white')
        draw_graphic_on_axis(ax, graphic)
        title = titles[idx] if titles is not None and idx < len(titles) else f"{idx}"
        ax.set_title(title, fontsize=10, color='black')

    for idx in range(n, rows * cols):
        axes[idx // cols, idx % cols].axis("off")

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    fig.savefig(out_path, dpi=200, format=_infer_format(out_path), transparent=False, facecolor='white')
    plt.close(fig)
    logger.info("Saved grid of %d scene(s) to %s", n, out_path)
