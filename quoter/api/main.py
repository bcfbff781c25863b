"""HTTP front end for the quoting engine.

Serves /quote, /bribe and /health. Every request carries its own pool
snapshot, so the process holds no state between calls and can be scaled
horizontally behind any load balancer.
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quoter import __version__
from quoter.api.endpoints import router

# Bind settings, see run()
HOST = os.environ.get("QUOTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("QUOTER_PORT", "8000"))
DEBUG = os.environ.get("QUOTER_DEBUG", "false").lower() in ("true", "1", "yes")

# Upper bound on a request body; a full pool snapshot stays well below it
MAX_REQUEST_SIZE = 10 * 1024 * 1024

app = FastAPI(
    title="AMM Quoter",
    description="Exact-arithmetic trade quotes for Uniswap V2 style pools with protection fees",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Answer 413 when the declared Content-Length exceeds MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Liveness check reporting the package version."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Start uvicorn on the configured address.

    Read from the environment:
    - QUOTER_HOST: listen address (0.0.0.0)
    - QUOTER_PORT: listen port (8000)
    - QUOTER_DEBUG: auto-reload on code changes (false)
    - QUOTER_MAX_POOLS: most pools accepted in one quote request (1000)
    - QUOTER_SEARCH_TIMEOUT: seconds allowed for one route search (5.0)
    """
    uvicorn.run(
        "quoter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
