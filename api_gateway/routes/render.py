"""
Render endpoints.

Submit a render, poll its status, and a health check.
"""

import uuid
from datetime import datetime, timezone
from fastapi import APIRouter, BackgroundTasks, HTTPException, Path, status

from shared.errors import JobConflictError
from shared.logging import get_logger
from shared.models.job import RenderJob, RenderRequest
from api_gateway.orchestrator import execute_pipeline
from api_gateway.store import job_store

logger = get_logger(__name__)

router = APIRouter()


def new_render_id() -> str:
    """Render ids look like `r_` followed by 12 hex digits."""
    return f"r_{uuid.uuid4().hex[:12]}"


@router.post("/render", status_code=status.HTTP_202_ACCEPTED)
async def create_render(request: RenderRequest, background_tasks: BackgroundTasks):
    """
    Accept a render request and start the pipeline in the background.

    Returns:
        render_id and QUEUED status
    """
    render_id = request.render_id or new_render_id()
    job = RenderJob(render_id=render_id, request=request)

    try:
        job_store.insert(job)
    except JobConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info(
        "Render job created",
        extra={"job_id": render_id, "company": request.company, "engine": request.engine}
    )
    background_tasks.add_task(execute_pipeline, render_id)

    return {"render_id": render_id, "status": job.status.value}


@router.get("/render/{render_id}")
async def get_render_status(render_id: str = Path(...)):
    """
    Get render status.

    Returns:
        Status, video URL, intermediate artifacts and the debug trace
    """
    job = job_store.get(render_id)
    if job is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Render job not found"
        )

    return {
        "status": job.status.value,
        "video_url": job.final_video,
        "duration_s": job.request.target_duration_s,
        "error": job.error,
        "brief": job.brief.model_dump() if job.brief else None,
        "script": job.script.model_dump() if job.script else None,
        "shot_plan": job.shot_plan.model_dump() if job.shot_plan else None,
        "sales_pitch": job.sales_pitch,
        "debug": {
            "cost_cents": job.debug.cost_cents,
            "latency_s": job.debug.latency_s,
            "engine": job.debug.engine or job.request.engine,
            "steps": [step.model_dump() for step in job.debug.steps],
            "qc": job.debug.qc,
            "warnings": job.debug.warnings,
        },
    }


@router.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
