from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pickops.api.routes_classification import router as classification_router
from pickops.api.routes_picking import router as picking_router
from pickops.api.routes_returns import router as returns_router
from pickops.core.config import get_settings
from pickops.core.logging import configure_logging
from pickops.persistence.pg import init_db
from pickops.persistence.state_store import InMemoryKeyValueStore, PickingStateUnavailable

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title=settings.app_name)


@app.on_event("startup")
def on_startup() -> None:
    init_db()
    if settings.state_backend == "memory":
        app.state.memory_store = InMemoryKeyValueStore()
    logger.info("pickops ready: env=%s state_backend=%s", settings.env, settings.state_backend)


@app.exception_handler(PickingStateUnavailable)
async def picking_state_unavailable_handler(_: Request, exc: PickingStateUnavailable):
    return JSONResponse(
        status_code=503,
        content={
            "detail": str(exc),
            "error": "picking_state_unavailable",
        },
    )


@app.get("/healthz")
def healthz() -> dict:
    return {"status": "ok"}


app.include_router(classification_router)
app.include_router(picking_router)
app.include_router(returns_router)
