from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from archcanvas.api.serializers import (
    serialize_canvas,
    serialize_edge,
    serialize_history_entry,
    serialize_node,
)
from archcanvas.inference.config import get_llm_client
from archcanvas.ir.errors import InvalidResponseFormatError, UpstreamError
from archcanvas.pipeline.controller import DesignController
from archcanvas.schemas import (
    GenerateRequest,
    PositionUpdateRequest,
    SelectRequest,
    ViewportRequest,
)
from archcanvas.store.reducer import (
    ApplyAutoLayout,
    ClearError,
    ResetCanvas,
    SelectComponent,
    SetViewport,
    UpdatePosition,
)
from archcanvas.store.state import Viewport
from archcanvas.store.store import DesignStore
from archcanvas.validation import validate_diagram

router = APIRouter()


def get_store(request: Request) -> DesignStore:
    return request.app.state.store


def get_controller(
    store: DesignStore = Depends(get_store),
    client=Depends(get_llm_client),
) -> DesignController:
    return DesignController(store, client)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "error": message},
    )


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/generate")
def generate_design(
    request: GenerateRequest,
    controller: DesignController = Depends(get_controller),
):
    try:
        diagram = controller.generate(request.prompt)
    except UpstreamError as e:
        return _error(502, str(e))
    except InvalidResponseFormatError as e:
        return _error(422, str(e))
    except ValueError as e:
        # blank prompt
        return _error(400, str(e))

    validation = validate_diagram(diagram)
    print(f"[Generate] Validation: {validation.get_summary()}")

    return {
        "status": "success",
        "title": diagram.title,
        "description": diagram.description,
        "components": [serialize_node(c) for c in diagram.components],
        "connections": [serialize_edge(c) for c in diagram.connections],
        "validation": validation.to_dict(),
    }


# ============================
# Canvas
# ============================

@router.get("/diagram")
def get_diagram(store: DesignStore = Depends(get_store)):
    return serialize_canvas(store.state)


@router.post("/diagram/layout")
def reorganize(store: DesignStore = Depends(get_store)):
    state = store.dispatch(ApplyAutoLayout())
    print(f"[Layout] Reorganized {len(state.components)} components")
    return serialize_canvas(state)


@router.patch("/diagram/components/{component_id}/position")
def update_position(
    component_id: str,
    request: PositionUpdateRequest,
    store: DesignStore = Depends(get_store),
):
    if store.state.component(component_id) is None:
        raise HTTPException(status_code=404, detail=f"Component not found: {component_id}")

    state = store.dispatch(UpdatePosition(component_id, request.x, request.y))
    return serialize_node(state.component(component_id))


@router.post("/diagram/select")
def select_component(
    request: SelectRequest,
    store: DesignStore = Depends(get_store),
):
    state = store.dispatch(SelectComponent(request.component_id))
    return {"selected_component": state.selected_component}


@router.put("/diagram/viewport")
def set_viewport(
    request: ViewportRequest,
    store: DesignStore = Depends(get_store),
):
    state = store.dispatch(SetViewport(Viewport(x=request.x, y=request.y, zoom=request.zoom)))
    return serialize_canvas(state)["viewport"]


@router.post("/diagram/reset")
def reset_canvas(store: DesignStore = Depends(get_store)):
    return serialize_canvas(store.dispatch(ResetCanvas()))


@router.delete("/diagram/error")
def dismiss_error(store: DesignStore = Depends(get_store)):
    store.dispatch(ClearError())
    return {"error": None}


# ============================
# History
# ============================

@router.get("/history")
def list_history(store: DesignStore = Depends(get_store)):
    return {"items": [serialize_history_entry(h) for h in store.state.history]}


@router.post("/history/{entry_id}/load")
def load_history(
    entry_id: str,
    store: DesignStore = Depends(get_store),
):
    controller = DesignController(store)
    try:
        state = controller.load_history(entry_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")

    return serialize_canvas(state)
