"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import anchor, health, merkle
from api.errors import (
    APIError,
    anchor_error_handler,
    api_error_handler,
    generic_error_handler,
)
from core.schemas.errors import AnchorException


def _resolve_log_level() -> int:
    """Resolve log level from ANCHOR_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv("ANCHOR_LOG_LEVEL")
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Anchor API",
        description="""
HTTP API for committing batches of content hashes to a ledger as a single
Merkle root, and for checking inclusion of one hash later.

## Endpoints

- **POST /anchor/batch** - Anchor a batch of leaf hashes, returns root, block and proofs
- **POST /anchor/check** - Recompute a root from leaf + proof and look it up on the ledger
- **POST /merkle/root** - Compute a root without anchoring
- **POST /merkle/verify** - Check a leaf + proof against a known root
- **GET /health** - Health check

Hashes are hex strings of exactly 32 bytes. A batch of one leaf has an
empty proof and its root is the leaf itself.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AnchorException, anchor_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(anchor.router)
    app.include_router(merkle.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
