# Re-export core graphic API for convenience
from .graphic import (
    Graphic,
    Dot,
    Circle,
    CompoundGraphic,
    GraphicNotFoundError,
)
