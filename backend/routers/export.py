import logging
from typing import List

from fastapi import APIRouter, HTTPException

from backend.jobs import job_manager
from backend.models import ExportInfo, ExportRequest, JobResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("", response_model=List[ExportInfo])
async def list_exports():
    """Exported GLB files with the mesh statistics of the job that wrote them.

    The files themselves are served from the ``/output`` static mount.
    """
    return [ExportInfo(**entry) for entry in job_manager.list_exports()]


@router.post("", response_model=JobResponse)
async def start_export(request: ExportRequest):
    """Start a GLB export of the served world.

    The export runs in a background task; the caller receives a job ID
    immediately and can poll ``/status/{job_id}`` for progress.
    """
    job = job_manager.create_job()
    job_manager.start_export(job, request.filename)

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
    )


@router.get("/status/{job_id}", response_model=JobResponse)
async def get_export_status(job_id: str):
    """Poll the status of a running or completed export job."""
    job = job_manager.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        result=job.result,
    )
