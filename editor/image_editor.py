from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Sequence, Tuple

from shapes import Circle, CompoundGraphic, Dot, Graphic, GraphicNotFoundError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorConfig:
    dot_position: Tuple[float, float] = (1, 2)
    circle_position: Tuple[float, float] = (5, 3)
    circle_radius: float = 10
    # Reject grouping of graphics that are not direct children of the root
    strict_grouping: bool = False


class ImageEditor:
    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config if config is not None else EditorConfig()
        self._root: Optional[CompoundGraphic] = None

    @property
    def root(self) -> Optional[CompoundGraphic]:
        return self._root

    def load(self) -> CompoundGraphic:
        """
        Start a fresh scene holding the example dot and circle.
        Any previously loaded scene is discarded.
        """
        cfg = self.config
        root = CompoundGraphic()
        root.add(Dot(*cfg.dot_position))
        root.add(Circle(*cfg.circle_position, cfg.circle_radius))
        self._root = root
        logger.debug("Loaded scene %r", root)
        return root

    def group_selected(self, components: Sequence[Graphic]) -> CompoundGraphic:
        """
        Move `components` from the root into a new group, append the group to
        the root and redraw everything. Returns the new group.

        A component that is not a child of the root still joins the group
        unless the editor is configured with strict_grouping.
        """
        if self._root is None:
            raise RuntimeError("no scene loaded")
        root = self._root
        if self.config.strict_grouping:
            missing = [c for c in components if c not in root]
            if missing:
                raise GraphicNotFoundError(f"not in the scene: {missing!r}")

        group = CompoundGraphic()
        for component in components:
            group.add(component)
            root.remove(component)
        root.add(group)
        logger.debug("Grouped %d graphic(s)", len(group))
        root.draw()
        return group
