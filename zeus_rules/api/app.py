"""FastAPI application hosting Zeus rules games."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..results import RulesError
from .routes import router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Zeus Rules",
    description="Rules engine service for the Quests of Zeus board game",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.exception_handler(RulesError)
async def rules_error_handler(request: Request, exc: RulesError):
    # Broken invariants are server faults, not bad requests.
    logger.error("rules invariant broken on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc), "error": type(exc).__name__})


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "zeus-rules"}
