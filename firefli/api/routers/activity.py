"""
Activity ingestion endpoint.

Routes:
- POST /activity/bulk - Apply a batch of create/end events from a game agent

Dependencies: fastapi, firefli.application.services, firefli.models
System role: Attendance HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException

from firefli.api.deps import get_bulk_ingestor
from firefli.application.services import BulkEventIngestor
from firefli.core.exceptions import AuthorizationError
from firefli.models.activity import BulkEventRequest, BulkEventResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activity", tags=["activity"])


@router.post("/bulk", response_model=BulkEventResponse)
async def bulk_events(
    request: BulkEventRequest,
    authorization: str | None = Header(default=None),
    ingestor: BulkEventIngestor = Depends(get_bulk_ingestor),
) -> BulkEventResponse:
    """
    Apply a batch of activity events.

    Args:
        request: BulkEventRequest with the raw events
        authorization: Workspace activity token

    Returns:
        BulkEventResponse: Aggregate counts; per-event failures never fail the call

    Raises:
        HTTPException(400): Missing token or empty batch
        HTTPException(401): Token does not belong to any workspace
        HTTPException(500): Unexpected failure before events were processed
    """
    if not authorization:
        raise HTTPException(status_code=400, detail="Authorization key missing")
    if not isinstance(request.events, list) or not request.events:
        raise HTTPException(
            status_code=400,
            detail="Events array is required and must not be empty",
        )

    try:
        results = await ingestor.process_bulk_events(authorization, request.events)
    except AuthorizationError:
        raise HTTPException(status_code=401, detail="Unauthorized")
    except Exception as e:
        logger.exception(f"{__name__}:bulk_events - Batch failed")
        raise HTTPException(status_code=500, detail=str(e))

    return BulkEventResponse(success=True, results=results)
