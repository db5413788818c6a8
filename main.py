"""FastAPI application for the DOM simplification service.

Exports ``app`` for use with ``uvicorn main:app``.
"""

import json
import logging
import traceback
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

# Load .env from the service directory so SIMPLIFY_* settings are set
load_dotenv(Path(__file__).resolve().parent / ".env")

from config import Settings
from dom.geometry import Viewport
from models.request import SimplifyRequest
from models.response import ErrorResponse, SimplifyResponse
from simplify.errors import SimplifyError
from simplify.pipeline import simplify_html

settings = Settings.from_env()


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in ("event", "rule", "node", "moved", "source_nodes", "simplified_nodes", "budget"):
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


_handler = logging.StreamHandler()
_handler.setFormatter(StructuredFormatter())

logger = logging.getLogger("simplify")
logger.addHandler(_handler)
logger.setLevel(settings.log_level)
# Prevent propagation to root logger to avoid duplicate output
logger.propagate = False


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="DOM Simplifier")


# ---------------------------------------------------------------------------
# Exception handlers -- a failed pass is reported, never half-returned
# ---------------------------------------------------------------------------

@app.exception_handler(SimplifyError)
async def simplify_error_handler(request: Request, exc: SimplifyError) -> JSONResponse:
    """Report a failed simplification pass as a 422."""
    logger.error("simplification failed: %s: %s", type(exc).__name__, exc)
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log any other unhandled exception and answer with a 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
    )
    body = ErrorResponse(error=type(exc).__name__, detail="internal error")
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy"}


@app.post("/simplify", response_model=SimplifyResponse)
async def simplify_endpoint(request: SimplifyRequest) -> SimplifyResponse:
    """Simplify an HTML snapshot with the basic web rule set."""
    size = len(request.html.encode("utf-8"))
    if size > settings.max_html_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"snapshot is {size} bytes, limit is {settings.max_html_bytes}",
        )

    if request.viewport is not None:
        viewport = Viewport(request.viewport.width, request.viewport.height)
    else:
        viewport = Viewport(settings.viewport_width, settings.viewport_height)

    try:
        page = simplify_html(
            request.html,
            viewport=viewport,
            pretty=request.pretty,
            max_visits_per_node=settings.max_visits_per_node,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return SimplifyResponse(
        html=page.html,
        source_node_count=page.source_node_count,
        simplified_node_count=page.simplified_node_count,
        original_html=page.original_html if request.include_original else None,
    )
