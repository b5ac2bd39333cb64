"""HTTP API checks with the LLM client swapped for a canned one."""

import json

import pytest
from fastapi.testclient import TestClient

from archcanvas.inference.config import get_llm_client
from archcanvas.ir.errors import UpstreamError
from archcanvas.main import create_app
from archcanvas.store.store import DesignStore


DESIGN = {
    "components": [
        {"id": "web", "name": "Web", "type": "frontend", "technology": "React"},
        {"id": "gw", "name": "Gateway", "type": "gateway"},
        {"id": "api", "name": "API", "type": "backend"},
        {"id": "db", "name": "Postgres", "type": "database"},
        {"id": "ml", "name": "Model", "type": "ml"},
    ],
    "connections": [
        {"source": "web", "target": "gw", "type": "api"},
        {"source": "gw", "target": "api", "type": "api"},
        {"source": "api", "target": "db", "type": "data"},
        {"source": "api", "target": "ghost", "type": "stream"},
    ],
    "title": "Shop",
    "description": "Online shop",
}


class CannedClient:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def generate(self, messages):
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def app():
    return create_app(DesignStore())


def client_for(app, llm) -> TestClient:
    app.dependency_overrides[get_llm_client] = lambda: llm
    return TestClient(app)


def test_health(app):
    assert TestClient(app).get("/health").json() == {"status": "ok"}


def test_generate_lays_out_and_validates(app):
    http = client_for(app, CannedClient(json.dumps(DESIGN)))

    response = http.post("/generate", json={"prompt": "an online shop"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["title"] == "Shop"

    nodes = {n["id"]: n for n in body["components"]}
    assert nodes["web"]["position"] == {"x": 590, "y": 100}
    assert nodes["gw"]["position"] == {"x": 590, "y": 300}
    assert nodes["api"]["position"] == {"x": 590, "y": 500}
    assert nodes["db"]["position"] == {"x": 590, "y": 700}
    assert nodes["ml"]["position"] == {"x": 50, "y": 50}
    assert nodes["web"]["data"]["technology"] == "React"
    assert nodes["web"]["style"]["borderColor"] == "#2196f3"
    assert nodes["ml"]["style"]["borderColor"] == "#666"

    assert [e["connectionType"] for e in body["connections"]] == ["api", "api", "data", "stream"]

    codes = {i["code"] for i in body["validation"]["issues"]}
    assert "MISSING_TARGET_COMPONENT" in codes
    assert "UNKNOWN_CATEGORY" in codes


def test_blank_prompt_is_rejected(app):
    http = client_for(app, CannedClient("{}"))

    response = http.post("/generate", json={"prompt": "  "})

    assert response.status_code == 400
    assert response.json()["error"] == "Prompt is required"
    assert http.get("/diagram").json()["error"] == "Prompt is required"


def test_upstream_failure(app):
    llm = CannedClient(error=UpstreamError("LLM API error: 500 Internal Server Error", 500))
    http = client_for(app, llm)

    response = http.post("/generate", json={"prompt": "anything"})

    assert response.status_code == 502
    assert response.json() == {"status": "error", "error": "LLM API error: 500 Internal Server Error"}
    assert http.get("/diagram").json()["error"] == "LLM API error: 500 Internal Server Error"


def test_invalid_format_keeps_previous_diagram(app):
    http = client_for(app, CannedClient(json.dumps(DESIGN)))
    http.post("/generate", json={"prompt": "shop"})

    app.dependency_overrides[get_llm_client] = lambda: CannedClient('{"title": "nope"}')
    response = http.post("/generate", json={"prompt": "broken"})

    assert response.status_code == 422
    assert response.json()["error"] == "Invalid response format from AI"

    canvas = http.get("/diagram").json()
    assert canvas["title"] == "Shop"
    assert len(canvas["nodes"]) == 5

    assert http.delete("/diagram/error").json() == {"error": None}
    assert http.get("/diagram").json()["error"] is None


def test_drag_then_reorganize(app):
    http = client_for(app, CannedClient(json.dumps(DESIGN)))
    http.post("/generate", json={"prompt": "shop"})

    moved = http.patch("/diagram/components/db/position", json={"x": 12, "y": 34})
    assert moved.json()["position"] == {"x": 12, "y": 34}

    canvas = http.post("/diagram/layout").json()
    nodes = {n["id"]: n for n in canvas["nodes"]}
    assert nodes["db"]["position"] == {"x": 590, "y": 700}


def test_drag_unknown_component(app):
    response = TestClient(app).patch("/diagram/components/nope/position", json={"x": 1, "y": 1})

    assert response.status_code == 404


def test_select_viewport_and_reset(app):
    http = client_for(app, CannedClient(json.dumps(DESIGN)))
    http.post("/generate", json={"prompt": "shop"})

    assert http.post("/diagram/select", json={"component_id": "api"}).json() == {
        "selected_component": "api"
    }
    assert http.put("/diagram/viewport", json={"x": 10, "y": 20, "zoom": 1.5}).json() == {
        "x": 10, "y": 20, "zoom": 1.5,
    }

    canvas = http.post("/diagram/reset").json()
    assert canvas["nodes"] == []
    assert canvas["edges"] == []
    assert canvas["selected_component"] is None
    assert canvas["viewport"] == {"x": 0, "y": 0, "zoom": 1}
    assert len(http.get("/history").json()["items"]) == 1


def test_invalid_zoom_rejected(app):
    assert TestClient(app).put("/diagram/viewport", json={"zoom": 0}).status_code == 422


def test_history_listing_and_replay(app):
    http = client_for(app, CannedClient(json.dumps(DESIGN)))
    http.post("/generate", json={"prompt": "first"})
    http.post("/generate", json={"prompt": "second"})

    items = http.get("/history").json()["items"]
    assert [i["prompt"] for i in items] == ["second", "first"]
    assert items[0]["component_count"] == 5
    assert items[0]["title"] == "Shop"

    http.post("/diagram/reset")
    canvas = http.post(f"/history/{items[1]['id']}/load").json()
    assert canvas["prompt"] == "first"
    assert len(canvas["nodes"]) == 5


def test_history_replay_unknown_id(app):
    assert TestClient(app).post("/history/missing/load").status_code == 404
