# Per-category styling for the canvas front end

from archcanvas.visual.visual_style import COMPONENT_STYLE, DEFAULT_STYLE, style_for

__all__ = [
    "COMPONENT_STYLE",
    "DEFAULT_STYLE",
    "style_for",
]
