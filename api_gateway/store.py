"""
In-memory job store.

Index of render jobs keyed by render id. The lock only guards the index;
each record is mutated by the single pipeline run that owns it.
"""

import threading
from typing import Dict, List, Optional

from shared.errors import JobConflictError, JobNotFoundError
from shared.logging import get_logger
from shared.models.job import JobStatus, RenderJob

logger = get_logger("api_gateway.store")


class JobStore:
    """Thread-safe map of render id to RenderJob."""

    def __init__(self):
        self._jobs: Dict[str, RenderJob] = {}
        self._lock = threading.Lock()

    def insert(self, job: RenderJob) -> RenderJob:
        """
        Add a new job.

        A finished job with the same id is replaced, which is how a re-render
        picks up clips left on disk by the previous run.

        Raises:
            JobConflictError: If a job with this id is still queued or running
        """
        with self._lock:
            existing = self._jobs.get(job.render_id)
            if existing is not None and not existing.status.is_terminal:
                raise JobConflictError(
                    f"Render {job.render_id} is already {existing.status.value}",
                    job_id=job.render_id
                )
            self._jobs[job.render_id] = job

        if existing is not None:
            logger.info(
                "Replaced finished render",
                extra={"job_id": job.render_id, "previous_status": existing.status.value}
            )
        return job

    def get(self, render_id: str) -> Optional[RenderJob]:
        with self._lock:
            return self._jobs.get(render_id)

    def require(self, render_id: str) -> RenderJob:
        """
        Raises:
            JobNotFoundError: If no job has this id
        """
        job = self.get(render_id)
        if job is None:
            raise JobNotFoundError(f"Render {render_id} not found", job_id=render_id)
        return job

    def save(self, job: RenderJob) -> None:
        with self._lock:
            self._jobs[job.render_id] = job

    def update_status(
        self,
        render_id: str,
        status: JobStatus,
        error: Optional[str] = None
    ) -> RenderJob:
        """
        Move a job to a new status.

        Raises:
            JobNotFoundError: If no job has this id
            InvalidTransitionError: If the change is not allowed
        """
        job = self.require(render_id)
        job.transition_to(status, error=error)
        self.save(job)
        logger.info(
            f"Render status changed to {status.value}",
            extra={"job_id": render_id, "status": status.value, "error": error}
        )
        return job

    def all(self) -> List[RenderJob]:
        with self._lock:
            return list(self._jobs.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


# Process-wide store
job_store = JobStore()
