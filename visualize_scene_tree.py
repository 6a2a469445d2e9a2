from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from typing import List, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch

from editor import ImageEditor, setup_logging
from shapes import Graphic, Circle, CompoundGraphic, Dot
from plotting.vectorizer import CIRCLE_COLOR, DOT_COLOR

logger = logging.getLogger("plotting.visualize_scene_tree")


@dataclass
class TreeNode:
    kind: str  # "group", "dot" or "circle"
    label: str
    children: List["TreeNode"] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0


def _parse_tree(graphic: Graphic) -> TreeNode:
    """
    Mirror a graphic tree as TreeNodes labelled for display.
    """
    if isinstance(graphic, CompoundGraphic):
        children = [_parse_tree(child) for child in graphic.children]
        return TreeNode(kind=graphic.kind, label=f"group({len(children)})", children=children)
    if isinstance(graphic, Circle):
        return TreeNode(kind=graphic.kind, label=f"({graphic.x:g}, {graphic.y:g})\nr={graphic.radius:g}")
    if isinstance(graphic, Dot):
        return TreeNode(kind=graphic.kind, label=f"({graphic.x:g}, {graphic.y:g})")
    raise TypeError(f"Unknown graphic {type(graphic).__name__}")


def _compute_depth(root: TreeNode) -> int:
    if not root.children:
        return 1
    return 1 + max(_compute_depth(ch) for ch in root.children)


def _assign_positions(root: TreeNode, y_step: float = 1.6) -> None:
    """
    Assign x/y positions to nodes for a tidy tree layout using a simple
    in-order leaf indexing. x spacing is uniform per leaf; y is depth-based.
    """
    def assign_x(node: TreeNode, depth: int, next_x: float) -> Tuple[float, List[float]]:
        if not node.children:
            node.x = next_x
            node.y = -depth * y_step
            return next_x + 1.0, [node.x]
        xs: List[float] = []
        for ch in node.children:
            next_x, child_xs = assign_x(ch, depth + 1, next_x)
            xs.extend(child_xs)
        node.x = sum(xs) / len(xs)
        node.y = -depth * y_step
        return next_x, [node.x]

    assign_x(root, 0, 0.0)


def _gather_edges(node: TreeNode) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    edges: List[Tuple[Tuple[float, float], Tuple[float, float]]] = []
    for ch in node.children:
        edges.append(((node.x, node.y), (ch.x, ch.y)))
        edges.extend(_gather_edges(ch))
    return edges


def _draw_tree(root: TreeNode,
               node_radius: float = 0.3,
               group_facecolor: Tuple[float, float, float] = (0.9, 0.9, 0.9),
               edgecolor: Tuple[float, float, float] = (0.2, 0.2, 0.2),
               font_size: int = 7,
               figsize_scale: float = 0.9) -> plt.Figure:
    leaves: List[TreeNode] = []

    def collect_leaves(n: TreeNode):
        if not n.children:
            leaves.append(n)
        for c in n.children:
            collect_leaves(c)
    collect_leaves(root)
    x_min = min(l.x for l in leaves) - 1.0
    x_max = max(l.x for l in leaves) + 1.0
    depth = _compute_depth(root)
    y_min = -depth * 1.6 - 0.6
    y_max = 0.6
    # Figure size follows content, clamped
    fig_w = max(4.0, min(18.0, figsize_scale * (x_max - x_min) * 1.2))
    fig_h = max(3.0, min(12.0, figsize_scale * (y_max - y_min) * 0.9))
    fig, ax = plt.subplots(figsize=(fig_w, fig_h))

    for (x0, y0), (x1, y1) in _gather_edges(root):
        ax.plot([x0, x1], [y0, y1], color=(0.5, 0.5, 0.5), linewidth=1.0, zorder=1)

    def draw_node(n: TreeNode):
        if n.kind == "group":
            facecolor = group_facecolor
            text_color = "black"
        else:
            facecolor = tuple(CIRCLE_COLOR if n.kind == "circle" else DOT_COLOR)
            text_color = "white"
        radius = node_radius if n.kind != "dot" else node_radius * 0.8
        ax.add_patch(CirclePatch((n.x, n.y), radius, facecolor=facecolor, edgecolor=edgecolor, linewidth=1.0, zorder=3))
        ax.text(n.x, n.y, n.label, ha="center", va="center", fontsize=font_size, color=text_color, zorder=4)
        for c in n.children:
            draw_node(c)
    draw_node(root)

    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_min, y_max)
    ax.set_aspect("equal")
    ax.axis("off")
    fig.tight_layout()
    return fig


def visualize_scene_tree(graphic: Graphic,
                         out_path: str,
                         dpi: int = 200,
                         show: bool = False) -> str:
    root = _parse_tree(graphic)
    _assign_positions(root)
    fig = _draw_tree(root)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    if show:
        fig2 = _draw_tree(root)
        plt.show()
        plt.close(fig2)
    return out_path


def main():
    parser = argparse.ArgumentParser(description="Visualize the composite tree of the example scene.")
    parser.add_argument("--group-loaded", action="store_true", help="group the scene's own dot before drawing the tree")
    parser.add_argument("--out", type=str, default="plots/scene_tree.png", help="Output PNG path")
    parser.add_argument("--dpi", type=int, default=200, help="Output image DPI (default: 200)")
    parser.add_argument("--show", action="store_true", help="Also display the tree window")
    args = parser.parse_args()
    setup_logging()

    editor = ImageEditor()
    scene = editor.load()
    if args.group_loaded:
        editor.group_selected([scene.children[0]])

    out_path = visualize_scene_tree(scene, out_path=args.out, dpi=args.dpi, show=args.show)
    logger.info("Wrote: %s", out_path)


if __name__ == "__main__":
    main()
