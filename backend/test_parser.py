"""LLM response parsing: normalisation at the boundary and hard failures."""

import json

import pytest

from archcanvas.ir.categories import ConnectionKind
from archcanvas.ir.errors import InvalidResponseFormatError
from archcanvas.layout.auto_layout import apply_auto_layout
from archcanvas.llm.parser import extract_json, parse_design_response
from archcanvas.llm.prompt import build_messages


SAMPLE = {
    "components": [
        {
            "id": "web",
            "name": "Web App",
            "type": "frontend",
            "description": "React SPA",
            "technology": "React",
            "position": {"x": 100, "y": 100},
        },
        {"id": "api", "name": "API", "type": "Backend"},
        {"id": "ml", "name": "Model Server", "type": "ml-inference"},
        "not a component",
    ],
    "connections": [
        {"source": "web", "target": "api", "label": "HTTPS", "type": "api"},
        {"source": "api", "target": "ml", "type": "grpc"},
        {"source": "api"},
    ],
    "title": "Shop",
    "description": "Online shop",
}


def test_parse_full_response():
    diagram = parse_design_response(json.dumps(SAMPLE))

    assert diagram.title == "Shop"
    assert diagram.description == "Online shop"
    assert [c.id for c in diagram.components] == ["web", "api", "ml"]

    web = diagram.components[0]
    assert web.label == "Web App"
    assert web.technology == "React"
    assert (web.position.x, web.position.y) == (100, 100)

    # Type tags are normalised, unknown ones are kept as-is
    assert diagram.components[1].type == "backend"
    assert diagram.components[2].type == "ml-inference"

    assert [c.id for c in diagram.connections] == ["e1", "e2"]
    assert diagram.connections[0].kind == ConnectionKind.API
    assert diagram.connections[0].label == "HTTPS"
    assert diagram.connections[1].kind == ConnectionKind.API


def test_fenced_and_wrapped_json_is_accepted():
    text = "Here you go:\n```json\n" + json.dumps(SAMPLE) + "\n```\nEnjoy"

    diagram = parse_design_response(text)

    assert len(diagram.components) == 3


def test_defaults_for_title_and_description():
    diagram = parse_design_response('{"components": [], "connections": []}')

    assert diagram.title == "System Architecture"
    assert diagram.description == "AI-generated system design"
    assert diagram.components == []


def test_missing_label_falls_back_to_id():
    diagram = parse_design_response(
        '{"components": [{"id": "db", "type": "database"}], "connections": []}'
    )

    assert diagram.components[0].label == "db"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not json at all",
        "[1, 2, 3]",
        '{"components": []}',
        '{"connections": []}',
        '{"components": {}, "connections": []}',
        '{"components": [',
    ],
)
def test_malformed_responses_raise(text):
    with pytest.raises(InvalidResponseFormatError) as exc:
        parse_design_response(text)

    assert str(exc.value) == "Invalid response format from AI"


def test_extract_json_finds_embedded_object():
    assert extract_json('prefix {"a": 1} suffix') == {"a": 1}


def test_long_form_names_are_normalised():
    text = json.dumps({
        "components": [
            {"id": "a", "type": "client-facing"},
            {"id": "b", "type": "gateway"},
            {"id": "c", "type": "Data-Store"},
        ],
        "connections": [
            {"source": "a", "target": "b", "type": "api-call"},
            {"source": "b", "target": "c", "type": "data-flow"},
            {"source": "c", "target": "a", "type": "streaming"},
        ],
    })

    diagram = parse_design_response(text)

    assert [c.type for c in diagram.components] == ["frontend", "gateway", "database"]
    assert [c.kind for c in diagram.connections] == [
        ConnectionKind.API,
        ConnectionKind.DATA,
        ConnectionKind.STREAM,
    ]

    laid_out = {c.id: (c.position.x, c.position.y) for c in apply_auto_layout(diagram.components)}
    assert laid_out == {"a": (590, 100), "b": (590, 300), "c": (590, 700)}


def test_build_messages():
    messages = build_messages("  a chat app  ")

    assert messages[0]["role"] == "system"
    assert "frontend|backend|database|cache|service|gateway|cdn|queue" in messages[0]["content"]
    assert messages[1] == {"role": "user", "content": "Design a system for: a chat app"}
