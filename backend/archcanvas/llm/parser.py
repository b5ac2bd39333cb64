import json
import re
from typing import Any, Dict

from archcanvas.ir.categories import normalize_component_type, normalize_connection_kind
from archcanvas.ir.diagram import Component, Connection, Diagram, Position
from archcanvas.ir.errors import InvalidResponseFormatError


# ============================================================
# JSON EXTRACTION (LLM TRUST BOUNDARY)
# ============================================================

def extract_json(text: str) -> Dict[str, Any]:
    """
    Extract the design object from LLM output.

    Strategy:
    1. Direct json.loads (fast path)
    2. Fallback to the first {...} block

    Raises InvalidResponseFormatError when neither yields an object.
    """
    if not text or not isinstance(text, str):
        raise InvalidResponseFormatError()

    cleaned = re.sub(r"```(?:json)?|```", "", text).strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not match:
            raise InvalidResponseFormatError()
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise InvalidResponseFormatError() from e

    if not isinstance(data, dict):
        raise InvalidResponseFormatError()

    return data


# ============================================================
# FIELD HELPERS
# ============================================================

def _text(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value)


def _position(value) -> Position:
    if isinstance(value, dict):
        try:
            return Position(x=float(value.get("x", 0)), y=float(value.get("y", 0)))
        except (TypeError, ValueError):
            pass
    return Position()


# ============================================================
# DESIGN PARSER
# ============================================================

def parse_components(items: list) -> list[Component]:
    components = []
    for c in items:
        if not isinstance(c, dict):
            continue

        cid = _text(c.get("id"))
        if not cid:
            continue

        components.append(
            Component(
                id=cid,
                type=normalize_component_type(c.get("type")),
                label=_text(c.get("name")) or _text(c.get("label")) or cid,
                description=_text(c.get("description")),
                technology=_text(c.get("technology")),
                position=_position(c.get("position")),
            )
        )
    return components


def parse_connections(items: list) -> list[Connection]:
    connections = []
    for c in items:
        if not isinstance(c, dict):
            continue

        source = _text(c.get("source"))
        target = _text(c.get("target"))
        if not source or not target:
            continue

        connections.append(
            Connection(
                id=f"e{len(connections) + 1}",
                source=source,
                target=target,
                kind=normalize_connection_kind(c.get("type")),
                label=_text(c.get("label")),
                description=_text(c.get("description")),
                bidirectional=bool(c.get("bidirectional", False)),
            )
        )
    return connections


def parse_design_response(text: str) -> Diagram:
    data = extract_json(text)

    components = data.get("components")
    connections = data.get("connections")

    # Both keys are required; an empty list is fine, a missing key is not.
    if not isinstance(components, list) or not isinstance(connections, list):
        raise InvalidResponseFormatError()

    return Diagram(
        components=parse_components(components),
        connections=parse_connections(connections),
        title=_text(data.get("title")) or "System Architecture",
        description=_text(data.get("description")) or "AI-generated system design",
    )
