import asyncio
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from brickworld.export import export_glb

from backend import config
from backend.world_store import world_store

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    queued = "queued"
    running = "running"
    completed = "completed"
    failed = "failed"


@dataclass
class Job:
    id: str
    status: JobStatus = JobStatus.queued
    progress: float = 0.0
    message: str = "Queued"
    result: Optional[dict] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def safe_filename(name: str) -> str:
    """Filename-safe slug with a .glb suffix."""
    stem = re.sub(r"[^a-z0-9]+", "-", name.lower().replace(".glb", "")).strip("-")
    return f"{stem or 'world'}.glb"


def _sync_export(output_filename: str, progress_callback=None) -> dict:
    """Export the served world to GLB; runs in a worker thread."""
    bricks = world_store.get()
    output_path = config.OUTPUT_DIR / output_filename
    result = export_glb(bricks, str(output_path), progress_callback=progress_callback)
    result["model_url"] = f"/output/{output_filename}"
    return result


class JobManager:
    def __init__(self) -> None:
        self.jobs: dict[str, Job] = {}
        self._tasks: set[asyncio.Task] = set()

    def create_job(self) -> Job:
        job = Job(id=str(uuid.uuid4()))
        self.jobs[job.id] = job
        return job

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    def start_export(self, job: Job, name: str) -> asyncio.Task:
        """Schedule :meth:`run_export` on the running loop.

        The task is held until it finishes so it cannot be garbage
        collected mid-export.
        """
        task = asyncio.create_task(self.run_export(job, name))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def list_exports(self) -> list[dict]:
        """Every ``.glb`` in the output directory, newest job stats attached.

        Files written by an earlier process have no job and report ``None``
        for the mesh statistics.
        """
        stats: dict[str, dict] = {}
        for job in sorted(self.jobs.values(), key=lambda j: j.created_at):
            if job.status == JobStatus.completed and job.result:
                stats[Path(job.result["output_path"]).name] = job.result

        output_dir: Path = config.OUTPUT_DIR
        if not output_dir.exists():
            return []

        exports = []
        for glb_file in sorted(output_dir.glob("*.glb")):
            result = stats.get(glb_file.name, {})
            exports.append({
                "name": glb_file.stem.replace("-", " ").title(),
                "filename": glb_file.name,
                "model_url": f"/output/{glb_file.name}",
                "bricks": result.get("bricks"),
                "meshes": result.get("meshes"),
                "faces": result.get("faces"),
            })
        return exports

    async def run_export(self, job: Job, name: str) -> None:
        """Execute the GLB export, updating *job* with progress."""
        try:
            job.status = JobStatus.running
            job.progress = 5.0
            job.message = "Preparing bricks..."

            def _update_progress(pct: float, msg: str) -> None:
                job.progress = pct
                job.message = msg

            result = await asyncio.to_thread(
                _sync_export,
                safe_filename(name),
                progress_callback=_update_progress,
            )

            job.progress = 100.0
            job.message = "Export complete"
            job.status = JobStatus.completed
            job.result = result

        except Exception as exc:
            logger.exception("Export failed for job %s", job.id)
            job.status = JobStatus.failed
            job.progress = 0.0
            job.message = f"Export failed: {exc}"


# Singleton instance used across the application
job_manager = JobManager()
