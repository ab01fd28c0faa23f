"""FastAPI application serving a single pool.

Note: authentication is intentionally not implemented. Callers name the
account they act for; this service is meant for local development against
the in-memory ledger.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dex import __version__
from dex.api.endpoints import router
from dex.errors import InvariantViolation, PoolError
from dex.models.api import ErrorResponse
from dex.safe_int import SafeIntError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DEX_HOST", "127.0.0.1")
PORT = int(os.environ.get("DEX_PORT", "8000"))
DEBUG = os.environ.get("DEX_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="DEX pool",
    description="Two-asset constant-product pool",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(PoolError)
async def pool_error_handler(_request: Request, exc: PoolError) -> JSONResponse:
    """Map pool failures to 400, invariant violations to 500."""
    body = ErrorResponse(error=exc.code, detail=exc.reason).model_dump()
    if isinstance(exc, InvariantViolation):
        logger.error("invariant_violation_response", reason=exc.reason)
        return JSONResponse(status_code=500, content=body)
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(_request: Request, exc: SafeIntError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(debug: bool = DEBUG) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - DEX_HOST: Host to bind to (default: 127.0.0.1)
    - DEX_PORT: Port to bind to (default: 8000)
    - DEX_DEBUG: Enable debug logging and reload mode (default: false)
    - DEX_TOKEN_A, DEX_TOKEN_B, DEX_POOL_ADDRESS, DEX_FEE_BPS: see PoolConfig.from_env
    """
    configure_logging()
    uvicorn.run(
        "dex.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
