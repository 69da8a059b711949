"""
Scheduler-triggered endpoints.

Routes:
- POST /cron/update-sessions - Run one session reconciliation pass
- POST /cron/birthdays - Announce today's birthdays

Both are guarded by the shared cron secret.

Dependencies: fastapi, firefli.application.services, firefli.models
System role: Periodic pass HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from firefli.api.deps import get_birthday_service, get_reconciler, verify_cron_secret
from firefli.application.services import BirthdayService, SessionReconciler
from firefli.models.cron import BirthdayRunResponse, ReconcileResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"], dependencies=[Depends(verify_cron_secret)])


@router.post("/update-sessions", response_model=ReconcileResponse)
async def update_sessions(
    reconciler: SessionReconciler = Depends(get_reconciler),
) -> ReconcileResponse:
    """
    Reconcile open sessions against the current time.

    Returns:
        ReconcileResponse: started/ended/status-updated/failed counts

    Raises:
        HTTPException(500): The pass could not run (e.g. database unavailable)
    """
    try:
        result = await reconciler.reconcile()
    except Exception as e:
        logger.exception(f"{__name__}:update_sessions - Reconciliation failed")
        raise HTTPException(status_code=500, detail=str(e))
    return ReconcileResponse(success=True, **result.model_dump())


@router.post("/birthdays", response_model=BirthdayRunResponse)
async def announce_birthdays(
    birthday_service: BirthdayService = Depends(get_birthday_service),
) -> BirthdayRunResponse:
    """
    Announce today's birthdays for every workspace.

    Raises:
        HTTPException(500): The pass could not run
    """
    try:
        return await birthday_service.announce()
    except Exception as e:
        logger.exception(f"{__name__}:announce_birthdays - Birthday pass failed")
        raise HTTPException(status_code=500, detail=str(e))
