from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple
import uuid

from archcanvas.config import HISTORY_LIMIT
from archcanvas.ir.diagram import Component, Connection, Diagram


@dataclass(frozen=True)
class Viewport:
    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


@dataclass(frozen=True)
class HistoryEntry:
    prompt: str
    diagram: Diagram
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class DesignState:
    """
    Snapshot of the canvas. Never edited in place: every transition in
    ``archcanvas.store.reducer`` returns a new instance.
    """
    prompt: str = ""
    is_generating: bool = False

    components: Tuple[Component, ...] = ()
    connections: Tuple[Connection, ...] = ()
    title: str = ""
    description: str = ""

    error: Optional[str] = None
    selected_component: Optional[str] = None
    viewport: Viewport = field(default_factory=Viewport)

    # Newest first
    history: Tuple[HistoryEntry, ...] = ()
    history_limit: int = HISTORY_LIMIT

    def component(self, component_id: str) -> Optional[Component]:
        return next((c for c in self.components if c.id == component_id), None)

    def history_entry(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((h for h in self.history if h.id == entry_id), None)

    def as_diagram(self) -> Diagram:
        return Diagram(
            components=list(self.components),
            connections=list(self.connections),
            title=self.title,
            description=self.description,
        )


def push_history(
    history: Tuple[HistoryEntry, ...],
    entry: HistoryEntry,
    limit: int,
) -> Tuple[HistoryEntry, ...]:
    """Prepend ``entry`` and evict the oldest beyond ``limit``."""
    updated: List[HistoryEntry] = [entry, *history]
    return tuple(updated[: max(limit, 0)])
