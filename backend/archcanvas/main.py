from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from archcanvas.api.routes import router
from archcanvas.config import CORS_ORIGINS, HISTORY_LIMIT
from archcanvas.store.state import DesignState
from archcanvas.store.store import DesignStore


def create_app(store: DesignStore | None = None) -> FastAPI:
    app = FastAPI(
        title="AI System Design Canvas",
        version="0.1.0",
    )

    # Middleware FIRST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes AFTER middleware
    app.include_router(router)

    app.state.store = store or DesignStore(DesignState(history_limit=HISTORY_LIMIT))
    print(f"[Startup] Canvas store ready (history limit {app.state.store.state.history_limit})")

    return app


app = create_app()
