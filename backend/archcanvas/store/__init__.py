from archcanvas.store.state import DesignState, HistoryEntry, Viewport
from archcanvas.store.store import DesignStore

__all__ = [
    "DesignState",
    "DesignStore",
    "HistoryEntry",
    "Viewport",
]
