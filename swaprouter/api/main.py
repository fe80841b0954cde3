"""FastAPI application for the swap router."""

import os

import uvicorn
from fastapi import FastAPI

from swaprouter import __version__
from swaprouter.api.endpoints import router
from swaprouter.log import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SWAPROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAPROUTER_PORT", "8000"))
DEBUG = os.environ.get("SWAPROUTER_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Swap Router",
    description="Multi-hop route discovery, quoting and universal router command planning",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the swap router API server.

    Configuration via environment variables:
    - SWAPROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - SWAPROUTER_PORT: Port to bind to (default: 8000)
    - SWAPROUTER_DEBUG: Enable debug logging and reload mode (default: false)
    """
    configure_logging(verbose=DEBUG)
    uvicorn.run(
        "swaprouter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
