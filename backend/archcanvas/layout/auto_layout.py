"""
Auto-layout for system design diagrams.

Places components into horizontal layers that follow a request path
(presentation -> gateway -> application -> data). Every row is centered
on the canvas. Components whose type matches no layer go into a grid
anchored at the top-left corner.

Connections never influence placement.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from archcanvas.ir.categories import ComponentCategory, to_category
from archcanvas.ir.diagram import Component, Connection, Position


@dataclass(frozen=True)
class LayoutConfig:
    node_width: int = 220
    node_height: int = 120
    horizontal_spacing: int = 80
    vertical_spacing: int = 80
    canvas_width: int = 1400
    canvas_height: int = 900
    min_margin: int = 50
    overflow_origin: Tuple[int, int] = (50, 50)


@dataclass(frozen=True)
class Layer:
    name: str
    categories: Tuple[ComponentCategory, ...]
    y: int


# Single source of truth for category -> layer.
LAYERS: Tuple[Layer, ...] = (
    Layer("presentation", (ComponentCategory.FRONTEND, ComponentCategory.CDN), 100),
    Layer("gateway", (ComponentCategory.GATEWAY,), 300),
    Layer("application", (ComponentCategory.BACKEND, ComponentCategory.SERVICE), 500),
    Layer(
        "data",
        (ComponentCategory.DATABASE, ComponentCategory.CACHE, ComponentCategory.QUEUE),
        700,
    ),
)

_LAYER_BY_CATEGORY: Dict[str, Layer] = {
    category.value: layer for layer in LAYERS for category in layer.categories
}

DEFAULT_CONFIG = LayoutConfig()


def classify_component(component: Component) -> Optional[str]:
    """Layer name for the component, or None when ungrouped."""
    category = to_category(component.type)
    if category is None:
        return None
    return _LAYER_BY_CATEGORY[category.value].name


def assign_layers(
    components: Sequence[Component],
) -> Tuple[List[Tuple[Layer, List[Component]]], List[Component]]:
    members: Dict[str, List[Component]] = {layer.name: [] for layer in LAYERS}
    ungrouped: List[Component] = []

    for component in components:
        name = classify_component(component)
        if name is None:
            ungrouped.append(component)
        else:
            members[name].append(component)

    rows = [(layer, members[layer.name]) for layer in LAYERS if members[layer.name]]
    return rows, ungrouped


def row_start_x(count: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    total_width = count * config.node_width + (count - 1) * config.horizontal_spacing
    return max(config.min_margin, (config.canvas_width - total_width) / 2)


def pack_row(
    members: Sequence[Component],
    y: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[Component]:
    # Wide rows run past the canvas edge; there is no wrapping.
    if not members:
        return []

    start_x = row_start_x(len(members), config)
    step = config.node_width + config.horizontal_spacing

    return [
        _moved(component, start_x + index * step, y)
        for index, component in enumerate(members)
    ]


def place_overflow(
    members: Sequence[Component],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[Component]:
    """
    Square-ish grid for ungrouped components.

    The grid is not checked against the layered rows, so a large overflow
    set can overlap the presentation layer.
    """
    if not members:
        return []

    cols = math.ceil(math.sqrt(len(members)))
    origin_x, origin_y = config.overflow_origin
    cell_w = config.node_width + config.horizontal_spacing
    cell_h = config.node_height + config.vertical_spacing

    placed = []
    for index, component in enumerate(members):
        col = index % cols
        row = index // cols
        placed.append(_moved(component, origin_x + col * cell_w, origin_y + row * cell_h))
    return placed


def apply_auto_layout(
    components: Sequence[Component],
    connections: Optional[Iterable[Connection]] = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[Component]:
    """
    Return a new list with a position assigned to every component.

    Output order is layered rows top to bottom, then the overflow grid.
    ``connections`` is accepted for call-site symmetry and ignored.
    """
    rows, ungrouped = assign_layers(components)

    laid_out: List[Component] = []
    for layer, members in rows:
        laid_out.extend(pack_row(members, layer.y, config))
    laid_out.extend(place_overflow(ungrouped, config))

    return laid_out


def layout_bounds(
    components: Sequence[Component],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Dict[str, float]:
    if not components:
        return {"min_x": 0.0, "min_y": 0.0, "max_x": 0.0, "max_y": 0.0}

    xs = [c.position.x for c in components]
    ys = [c.position.y for c in components]
    return {
        "min_x": min(xs),
        "min_y": min(ys),
        "max_x": max(xs) + config.node_width,
        "max_y": max(ys) + config.node_height,
    }


def _moved(component: Component, x: float, y: float) -> Component:
    return component.model_copy(update={"position": Position(x=x, y=y)})
