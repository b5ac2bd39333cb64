"""
Canvas state transitions.

Each action is a small frozen dataclass; ``reduce`` is the only place a
DesignState changes. It is pure: same state + same action -> same result.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from archcanvas.ir.diagram import Diagram, Position
from archcanvas.layout.auto_layout import apply_auto_layout
from archcanvas.store.state import DesignState, HistoryEntry, Viewport, push_history


@dataclass(frozen=True)
class SetPrompt:
    prompt: str


@dataclass(frozen=True)
class StartGeneration:
    pass


@dataclass(frozen=True)
class FinishGeneration:
    pass


@dataclass(frozen=True)
class LoadDiagram:
    diagram: Diagram


@dataclass(frozen=True)
class RecordHistory:
    entry: HistoryEntry


@dataclass(frozen=True)
class FailGeneration:
    message: str


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class UpdatePosition:
    component_id: str
    x: float
    y: float


@dataclass(frozen=True)
class SelectComponent:
    component_id: Optional[str]


@dataclass(frozen=True)
class SetViewport:
    viewport: Viewport


@dataclass(frozen=True)
class ApplyAutoLayout:
    pass


@dataclass(frozen=True)
class ResetCanvas:
    pass


Action = Union[
    SetPrompt,
    StartGeneration,
    FinishGeneration,
    LoadDiagram,
    RecordHistory,
    FailGeneration,
    ClearError,
    UpdatePosition,
    SelectComponent,
    SetViewport,
    ApplyAutoLayout,
    ResetCanvas,
]


def reduce(state: DesignState, action: Action) -> DesignState:
    if isinstance(action, SetPrompt):
        return replace(state, prompt=action.prompt)

    if isinstance(action, StartGeneration):
        return replace(state, is_generating=True)

    if isinstance(action, FinishGeneration):
        return replace(state, is_generating=False)

    if isinstance(action, LoadDiagram):
        diagram = action.diagram
        components = apply_auto_layout(diagram.components, diagram.connections)
        return replace(
            state,
            components=tuple(components),
            connections=tuple(diagram.connections),
            title=diagram.title,
            description=diagram.description,
            selected_component=None,
            error=None,
        )

    if isinstance(action, RecordHistory):
        return replace(
            state,
            history=push_history(state.history, action.entry, state.history_limit),
        )

    if isinstance(action, FailGeneration):
        return replace(state, error=action.message)

    if isinstance(action, ClearError):
        return replace(state, error=None)

    if isinstance(action, UpdatePosition):
        position = Position(x=action.x, y=action.y)
        return replace(
            state,
            components=tuple(
                c.model_copy(update={"position": position}) if c.id == action.component_id else c
                for c in state.components
            ),
        )

    if isinstance(action, SelectComponent):
        return replace(state, selected_component=action.component_id)

    if isinstance(action, SetViewport):
        return replace(state, viewport=action.viewport)

    if isinstance(action, ApplyAutoLayout):
        components = apply_auto_layout(state.components, state.connections)
        return replace(state, components=tuple(components))

    if isinstance(action, ResetCanvas):
        return replace(
            state,
            components=(),
            connections=(),
            title="",
            description="",
            prompt="",
            selected_component=None,
            viewport=Viewport(),
        )

    raise TypeError(f"Unknown action: {type(action).__name__}")
