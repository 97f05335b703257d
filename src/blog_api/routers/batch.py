"""Batch router – load several collections in one call.

POST /batch
    Body names the collections to fetch and their filters.  Collections are
    fetched concurrently; failed ones are listed under ``errors`` and the
    rest are still returned.
"""

from fastapi import APIRouter, Request

from ..lib.wordpress import BatchRequest, BatchResult, fetch_many

router = APIRouter(tags=["batch"])


@router.post("/batch", response_model=BatchResult)
async def batch_fetch(request: Request, payload: BatchRequest) -> BatchResult:
    return await fetch_many(request.app.state.wp, payload)
