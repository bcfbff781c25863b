"""API endpoints for the quoting engine."""

import asyncio
import os

import structlog
from fastapi import APIRouter, Depends, HTTPException

from quoter.errors import InvariantViolation
from quoter.models.quote import BribeRequest, BribeResponse, QuoteRequest, QuoteResponse
from quoter.service import QuoteService

logger = structlog.get_logger()

router = APIRouter()

# Largest pool set accepted in one quote request
MAX_POOLS = int(os.environ.get("QUOTER_MAX_POOLS", "1000"))

# Wall-clock limit for one route search, in seconds
SEARCH_TIMEOUT = float(os.environ.get("QUOTER_SEARCH_TIMEOUT", "5.0"))

_default_service = QuoteService(search_timeout=SEARCH_TIMEOUT)


def get_quote_service() -> QuoteService:
    """Dependency provider for the quote service.

    Override this in tests to inject a mock service:
        app.dependency_overrides[get_quote_service] = lambda: mock_service
    """
    return _default_service


@router.post("/quote", response_model_exclude_none=True)
async def quote(
    request: QuoteRequest,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    """Best trades for a fixed input or output amount over the given pools.

    Error Handling:
        - Invalid request schema: 422 Validation Error (pydantic)
        - Too many pools or inconsistent data: 400 with the reason
        - No route: 200 with an empty trade list
    """
    logger.info(
        "received_quote_request",
        kind=request.kind.value,
        chain_id=request.chain_id,
        pool_count=len(request.pools),
    )
    if len(request.pools) > MAX_POOLS:
        raise HTTPException(status_code=400, detail=f"at most {MAX_POOLS} pools per request")

    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, service.quote, request)
    except InvariantViolation as err:
        logger.warning("invalid_quote_request", code=err.code, error=str(err))
        raise HTTPException(status_code=400, detail=str(err)) from err


@router.post("/bribe")
async def bribe(
    request: BribeRequest,
    service: QuoteService = Depends(get_quote_service),
) -> BribeResponse:
    """Protection fee estimates for every router method."""
    try:
        return service.estimate_bribes(request)
    except InvariantViolation as err:
        logger.warning("invalid_bribe_request", code=err.code, error=str(err))
        raise HTTPException(status_code=400, detail=str(err)) from err
