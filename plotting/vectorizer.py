import numpy as np
import matplotlib.pyplot as plt
from shapely.geometry import Polygon, Point, box
import shapely.ops
from typing import List, Tuple, Any, Optional
import io
import logging
from PIL import Image


from shapes import Graphic, Dot, Circle, CompoundGraphic

logger = logging.getLogger(__name__)

DOT_RADIUS = 0.25
DOT_COLOR = np.array([0.15, 0.15, 0.15])
CIRCLE_COLOR = np.array([0.2, 0.45, 0.8])
GROUP_EDGE_COLOR = np.array([0.85, 0.3, 0.2])
GROUP_PADDING = 0.4


def leaf_to_shapely(
    leaf: Graphic
) -> Any:
    if isinstance(leaf, Circle):
        # Radius is unvalidated; draw by magnitude
        return Point(leaf.x, leaf.y).buffer(abs(leaf.radius), resolution=64)
    if isinstance(leaf, Dot):
        return Point(leaf.x, leaf.y).buffer(DOT_RADIUS, resolution=16)
    raise TypeError(f"Unknown leaf graphic {type(leaf).__name__}")


def process_node(
    node: Graphic,
    depth: int = 0,
) -> Tuple[List[Tuple[Any, np.ndarray]], List[Tuple[Any, int]]]:
    """
    Returns ([(shapely_geometry, numpy_rgb_color)], [(group_outline, depth)]).
    Fills are listed in draw order; outlines are the padded bounds of each nested group.
    """
    if isinstance(node, CompoundGraphic):
        fills: List[Tuple[Any, np.ndarray]] = []
        outlines: List[Tuple[Any, int]] = []
        for child in node.children:
            child_fills, child_outlines = process_node(child, depth + 1)
            fills.extend(child_fills)
            outlines.extend(child_outlines)
        geoms = [g for g, _ in fills if not g.is_empty]
        # The outermost group is the scene itself and gets no outline
        if depth > 0 and geoms:
            minx, miny, maxx, maxy = shapely.ops.unary_union(geoms).bounds
            pad = GROUP_PADDING / depth
            outlines.append((box(minx - pad, miny - pad, maxx + pad, maxy + pad), depth))
        return fills, outlines

    geom = leaf_to_shapely(node)
    color = CIRCLE_COLOR if isinstance(node, Circle) else DOT_COLOR
    return [(geom, color)], []


def scene_bounds(
    graphic: Graphic
) -> Optional[Tuple[float, float, float, float]]:
    """
    (minx, miny, maxx, maxy) of everything drawn for `graphic`, or None when nothing is drawn.
    """
    fills, outlines = process_node(graphic)
    all_geoms = [g for g, _ in fills if not g.is_empty] + [g for g, _ in outlines]
    if not all_geoms:
        return None
    return tuple(float(v) for v in shapely.ops.unary_union(all_geoms).bounds)


def draw_graphic_on_axis(
    ax: plt.Axes,
    graphic: Graphic
) -> None:
    """
    Renders the graphic tree directly onto a given Matplotlib axis,
    framed by a square around its content.
    """
    fills, outlines = process_node(graphic)
    bounds = scene_bounds(graphic)

    ax.set_aspect('equal')
    ax.axis('off')
    if bounds is None:
        return

    minx, miny, maxx, maxy = bounds
    max_dim = max(maxx - minx, maxy - miny)
    center_x = (minx + maxx) / 2
    center_y = (miny + maxy) / 2

    margin = 0.1 * max(max_dim, 1.0)
    half_side = (max_dim / 2) + margin
    ax.set_xlim(center_x - half_side, center_x + half_side)
    ax.set_ylim(center_y - half_side, center_y + half_side)

    for geom, rgb in fills:
        if geom.is_empty:
            continue
        rgba = np.append(np.array(rgb).flatten()[:3], 0.85)
        parts = geom.geoms if hasattr(geom, 'geoms') else [geom]
        for part in parts:
            if isinstance(part, Polygon):
                x, y = part.exterior.xy
                ax.fill(x, y, fc=rgba, ec=rgba, linewidth=0.5, joinstyle='round')

    for outline, depth in outlines:
        x, y = outline.exterior.xy
        ax.plot(x, y, color=GROUP_EDGE_COLOR, linestyle='--', linewidth=max(0.6, 1.6 / depth))

    logger.debug("Drew %d shape(s) and %d group outline(s)", len(fills), len(outlines))


def save_graphic_as_svg(
    graphic: Graphic,
    filename: str
) -> None:
    """
    Saves the graphic as an SVG.
    Wraps draw_graphic_on_axis to create the figure and save.
    """
    fig, ax = plt.subplots(figsize=(6, 6))

    draw_graphic_on_axis(ax, graphic)

    fig.savefig(
        filename,
        format='svg',
        bbox_inches='tight',
        pad_inches=0
    )
    plt.close(fig)


def save_graphic_as_png(
    graphic: Graphic,
    filename: Optional[str] = None,
    resolution: int = 128
) -> Optional[Image.Image]:
    """
    Saves the graphic as a PNG, or returns the PIL Image object if filename is None
    (in-memory rendering).
    """
    dpi = resolution / 3.0

    fig, ax = plt.subplots(figsize=(3, 3))

    draw_graphic_on_axis(ax, graphic)

    if filename is None:
        buffer = io.BytesIO()
        fig.savefig(
            buffer,
            format='png',
            dpi=dpi,
            bbox_inches='tight',
            pad_inches=0,
            transparent=False,
            facecolor='white'
        )
        plt.close(fig)
        buffer.seek(0)
        return Image.open(buffer)

    fig.savefig(
        filename,
        format='png',
        dpi=dpi,
        bbox_inches='tight',
        pad_inches=0,
        transparent=False,
        facecolor='white'
    )
    plt.close(fig)
    return None
