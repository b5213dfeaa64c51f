"""Graphics module for Clean Catch rendering."""

from cleancatch.graphics.primitives import (
    blend_rect,
    blit_mask,
    draw_centered_text,
    draw_circle,
    draw_line,
    draw_rect,
    draw_text,
    fill,
    measure_text,
)
from cleancatch.graphics.scene import SceneRenderer

__all__ = [
    "SceneRenderer",
    "blend_rect",
    "blit_mask",
    "draw_centered_text",
    "draw_circle",
    "draw_line",
    "draw_rect",
    "draw_text",
    "fill",
    "measure_text",
]
