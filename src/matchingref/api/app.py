from __future__ import annotations

from fastapi import FastAPI

from matchingref.api.routes.health import router as health_router
from matchingref.api.routes.hints import router as hints_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="MatchingRef API",
        description="Learner-facing hints and reference links for compiler diagnostics.",
        version="0.1.0",
    )

    app.include_router(health_router, include_in_schema=False)
    app.include_router(hints_router)

    return app
