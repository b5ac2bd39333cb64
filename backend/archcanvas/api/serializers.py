from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from archcanvas.ir.diagram import Component, Connection
from archcanvas.layout.auto_layout import layout_bounds
from archcanvas.store.state import DesignState, HistoryEntry
from archcanvas.visual.visual_style import style_for


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def serialize_value(obj: Any):
    """
    Turn state objects into JSON-compatible structures.
    Deterministic.
    Tolerant to primitives.
    """
    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, datetime):
        return obj.isoformat()

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")

    if isinstance(obj, (list, tuple)):
        return [serialize_value(item) for item in obj]

    if isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}

    # dataclass-like objects
    if hasattr(obj, "__dict__"):
        return {
            key: serialize_value(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)


# ----------------------------
# Canvas payloads
# ----------------------------

def serialize_node(component: Component) -> dict:
    return {
        "id": component.id,
        "type": component.type,
        "position": {"x": component.position.x, "y": component.position.y},
        "data": {
            "label": component.label,
            "description": component.description or "",
            "technology": component.technology,
            "componentType": component.type,
        },
        "style": style_for(component.type),
    }


def serialize_edge(connection: Connection) -> dict:
    return {
        "id": connection.id,
        "source": connection.source,
        "target": connection.target,
        "label": connection.label,
        "connectionType": connection.kind.value,
        "description": connection.description,
        "bidirectional": connection.bidirectional,
    }


def serialize_history_entry(entry: HistoryEntry) -> dict:
    return {
        "id": entry.id,
        "prompt": entry.prompt,
        "timestamp": serialize_value(entry.timestamp),
        "title": entry.diagram.title,
        "description": entry.diagram.description,
        "component_count": len(entry.diagram.components),
    }


def serialize_canvas(state: DesignState) -> dict:
    return {
        "prompt": state.prompt,
        "is_generating": state.is_generating,
        "title": state.title,
        "description": state.description,
        "nodes": [serialize_node(c) for c in state.components],
        "edges": [serialize_edge(c) for c in state.connections],
        "bounds": layout_bounds(state.components),
        "selected_component": state.selected_component,
        "viewport": serialize_value(state.viewport),
        "error": state.error,
    }
