"""
Persisted run routes (read-only)
"""

from fastapi import APIRouter, Depends, HTTPException

from ..context import AppContext, get_context
from ..models import RunListResponse, StoredRun

router = APIRouter(prefix="/api", tags=["runs"])


@router.get("/runs", response_model=RunListResponse)
async def list_runs(context: AppContext = Depends(get_context)):
    """Stored run ids, newest first"""
    return RunListResponse(runs=context.runs.list_ids())


@router.get("/runs/{run_id}", response_model=StoredRun)
async def get_run(run_id: str, context: AppContext = Depends(get_context)):
    run = context.runs.get(run_id)
    if run is None:
        raise HTTPException(status_code=404, detail="Run not found")
    return run
