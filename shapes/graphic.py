from __future__ import annotations

import logging
from typing import Iterator, List, Tuple
import numpy as np


logger = logging.getLogger(__name__)


class GraphicNotFoundError(LookupError):
    """
    Raised by strict removal when the graphic is not a member of the group.
    """


class Graphic:
    kind: str = "graphic"

    def move(self, dx: float, dy: float) -> None:
        raise NotImplementedError

    def draw(self) -> None:
        raise NotImplementedError


def _translate(leaf: "Dot | Circle", dx: float, dy: float) -> None:
    # Shared by every positioned leaf
    leaf.x += dx
    leaf.y += dy


class Dot(Graphic):
    kind = "dot"

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def move(self, dx: float, dy: float) -> None:
        _translate(self, dx, dy)

    def draw(self) -> None:
        logger.info("Dot drawing")

    def __repr__(self) -> str:
        return f"Dot(x={self.x}, y={self.y})"


class Circle(Graphic):
    """
    A dot with a radius. The radius is not validated; negative values are kept as given.
    """
    kind = "circle"

    def __init__(self, x: float, y: float, radius: float):
        self.x = x
        self.y = y
        self.radius = radius

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def move(self, dx: float, dy: float) -> None:
        _translate(self, dx, dy)

    def draw(self) -> None:
        logger.info("Circle drawing")

    def __repr__(self) -> str:
        return f"Circle(x={self.x}, y={self.y}, radius={self.radius})"


class CompoundGraphic(Graphic):
    """
    Ordered group of graphics. Operations are forwarded to every child in
    insertion order. The group owns list membership only; removing a child
    just unlinks it. Nothing prevents adding a group to itself.
    """
    kind = "group"

    def __init__(self, *children: Graphic):
        self._children: List[Graphic] = list(children)

    @property
    def children(self) -> Tuple[Graphic, ...]:
        return tuple(self._children)

    def add(self, child: Graphic) -> None:
        self._children.append(child)

    def remove(self, child: Graphic, strict: bool = False) -> None:
        """
        Unlink every occurrence of `child` (matched by identity).
        A non-member is ignored unless strict=True, which raises GraphicNotFoundError.
        """
        kept = [c for c in self._children if c is not child]
        if strict and len(kept) == len(self._children):
            raise GraphicNotFoundError(f"{child!r} is not a child of this group")
        self._children = kept

    def move(self, dx: float, dy: float) -> None:
        for child in self._children:
            child.move(dx, dy)

    def draw(self) -> None:
        for child in self._children:
            logger.info("DRAW - %r", child)
            child.draw()

    def leaves(self) -> Iterator[Graphic]:
        """
        Depth-first iteration over descendant leaves.
        """
        for child in self._children:
            if isinstance(child, CompoundGraphic):
                yield from child.leaves()
            else:
                yield child

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Graphic]:
        return iter(self.children)

    def __contains__(self, item: object) -> bool:
        return any(c is item for c in self._children)

    def __repr__(self) -> str:
        return f"CompoundGraphic({', '.join(repr(c) for c in self._children)})"
