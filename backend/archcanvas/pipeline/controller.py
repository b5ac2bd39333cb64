from archcanvas.inference.chat_completions_client import ChatCompletionsClient
from archcanvas.ir.diagram import Diagram
from archcanvas.ir.errors import DiagramGenerationError
from archcanvas.pipeline.generator import generate_design
from archcanvas.store.reducer import (
    ClearError,
    FailGeneration,
    FinishGeneration,
    LoadDiagram,
    RecordHistory,
    SetPrompt,
    StartGeneration,
)
from archcanvas.store.state import DesignState, HistoryEntry
from archcanvas.store.store import DesignStore


class DesignController:
    """
    Runs one generation against the store.

    The LLM call happens outside the store lock; only the resulting
    transitions are dispatched.
    """

    def __init__(self, store: DesignStore, client: ChatCompletionsClient | None = None):
        self.store = store
        self.client = client

    def generate(self, prompt: str) -> Diagram:
        self.store.dispatch(ClearError(), SetPrompt(prompt), StartGeneration())

        try:
            diagram = generate_design(prompt, self.client)
        except (DiagramGenerationError, ValueError) as e:
            # Previous diagram stays on the canvas.
            print(f"[Generate] Failed: {e}")
            self.store.dispatch(FailGeneration(str(e)))
            raise
        finally:
            self.store.dispatch(FinishGeneration())

        state = self.store.dispatch(
            LoadDiagram(diagram),
            RecordHistory(HistoryEntry(prompt=prompt, diagram=diagram)),
        )
        print(f"[Generate] Loaded, history size={len(state.history)}")
        return state.as_diagram()

    def load_history(self, entry_id: str) -> DesignState:
        entry = self.store.state.history_entry(entry_id)
        if entry is None:
            raise KeyError(entry_id)

        return self.store.dispatch(
            SetPrompt(entry.prompt),
            LoadDiagram(entry.diagram),
        )
