"""Shared plans: store, fetch and update a planner state under a generated id.

The stored document is opaque JSON; the page decides what goes in it.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query
from fastapi.responses import JSONResponse

from middag.infra.Shared_Plan_Repository import SharedPlanRepository
from middag.infra.autosave import AutosaveScheduler
from middag.utilities.config import AUTOSAVE_DELAY_SECONDS

router = APIRouter()
logger = logging.getLogger(__name__)


def _write_shared_plan(plan_id: str, state: dict) -> bool:
    return SharedPlanRepository().update(plan_id, state)


autosave = AutosaveScheduler(_write_shared_plan, delay=AUTOSAVE_DELAY_SECONDS)


def load_shared_plan(plan_id: str) -> Optional[dict]:
    """Latest state for an id, including an autosave that has not been written yet."""
    pending = autosave.pending(plan_id)
    if pending is not None:
        return pending
    return SharedPlanRepository().get(plan_id)


def _storage_error(action: str, e: Exception) -> HTTPException:
    logger.error("Failed to %s shared plan: %s", action, e)
    return HTTPException(status_code=500, detail=f"Could not {action} shared plan: {e}")


@router.post("/api/shared-plan")
def create_shared_plan(payload: dict = Body(...)):
    try:
        plan_id = SharedPlanRepository().create(payload)
    except OSError as e:
        raise _storage_error("store", e)
    return {"id": plan_id}


@router.get("/api/shared-plan")
def get_shared_plan(id: Optional[str] = Query(default=None)):
    if not id:
        raise HTTPException(status_code=400, detail="Shared plan ID is required")
    try:
        state = load_shared_plan(id)
    except OSError as e:
        raise _storage_error("load", e)
    if state is None:
        raise HTTPException(status_code=404, detail="Shared plan not found")
    return state


@router.put("/api/shared-plan")
def update_shared_plan(payload: dict = Body(...),
                       id: Optional[str] = Query(default=None),
                       debounce: bool = Query(default=False, alias="autosave")):
    """Replace a shared plan.

    With ?autosave=true the write is coalesced with other autosaves of the same
    id and happens after a quiet period; the response is 202.
    """
    if not id:
        raise HTTPException(status_code=400, detail="Shared plan ID is required")
    repo = SharedPlanRepository()
    try:
        if debounce:
            if autosave.pending(id) is None and not repo.exists(id):
                raise HTTPException(status_code=404, detail="Shared plan not found")
            autosave.schedule(id, payload)
            return JSONResponse(status_code=202, content={"success": True, "scheduled": True})
        # An explicit save supersedes any queued or in-flight autosave
        updated = autosave.supersede(id, lambda: repo.update(id, payload))
    except OSError as e:
        raise _storage_error("save", e)
    if not updated:
        raise HTTPException(status_code=404, detail="Shared plan not found")
    return {"success": True}
