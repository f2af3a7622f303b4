from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pixcharge.constants import SERVER_NAME, SERVER_VERSION
from pixcharge.logging import configure_logging
from pixcharge.tools import get_dispatcher
from web.routes.tools import router as tools_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    owned = getattr(app.state, "dispatcher", None) is None
    if owned:
        app.state.dispatcher = get_dispatcher(mode="http")
    logger.info("Pix server started in HTTP mode")
    try:
        yield
    finally:
        # A dispatcher installed by the caller is theirs to close
        if owned:
            await app.state.dispatcher.aclose()
            app.state.dispatcher = None
            logger.info("Pix providers closed")


app = FastAPI(title=SERVER_NAME, version=SERVER_VERSION, docs_url=None, redoc_url=None, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(tools_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "service": SERVER_NAME,
        "version": SERVER_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
