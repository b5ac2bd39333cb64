import threading

from archcanvas.store.reducer import Action, reduce
from archcanvas.store.state import DesignState


class DesignStore:
    """
    Owns the single current DesignState.

    All transitions go through ``dispatch`` and are applied one at a time,
    so at most one layout runs against the active diagram.
    """

    def __init__(self, initial: DesignState | None = None):
        self._state = initial or DesignState()
        self._lock = threading.Lock()

    @property
    def state(self) -> DesignState:
        return self._state

    def dispatch(self, *actions: Action) -> DesignState:
        with self._lock:
            state = self._state
            for action in actions:
                state = reduce(state, action)
            self._state = state
            return state
