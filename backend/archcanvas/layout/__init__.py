from archcanvas.layout.auto_layout import (
    LAYERS,
    LayoutConfig,
    apply_auto_layout,
    classify_component,
    layout_bounds,
)

__all__ = [
    "LAYERS",
    "LayoutConfig",
    "apply_auto_layout",
    "classify_component",
    "layout_bounds",
]
