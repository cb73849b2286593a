"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn arbor_api.app:app --reload

    # Or run directly
    python -m arbor_api.app
"""

import logging

from fastapi import FastAPI

from arbor.schemas.errors import ArborException
from arbor_api.deps import init_config
from arbor_api.errors import APIError, api_error_handler, arbor_error_handler, generic_error_handler
from arbor_api.routes import health, merkle


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = init_config()

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Arbor Merkle API",
        description="""
HTTP API for ordered binary Merkle trees.

## Endpoints

- **POST /merkle/root** - Compute the root of a leaf sequence
- **POST /merkle/proof** - Build an inclusion proof for one leaf
- **POST /merkle/verify** - Verify a leaf against a proof
- **GET /health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ArborException, arbor_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(merkle.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from arbor.config.runtime import get_default_config

    api_config = get_default_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
