# Re-export rendering API for convenience
from .vectorizer import (
    draw_graphic_on_axis,
    scene_bounds,
)
from .renderer import (
    render_to_file,
    render_scene_grid,
)
