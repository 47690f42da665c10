"""
Error taxonomy for the render pipeline.

Every error carries an optional job_id and a stable code so the orchestrator
can record the failure on the job without inspecting exception types.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline errors."""

    code = "PIPELINE_ERROR"

    def __init__(self, message: str, job_id: Optional[str] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.job_id = job_id
        if code:
            self.code = code

    def __str__(self) -> str:
        return self.message


class ConfigError(PipelineError):
    """Invalid or missing configuration."""

    code = "CONFIG_ERROR"


class ValidationError(PipelineError):
    """Malformed or incomplete collaborator response. Fatal."""

    code = "VALIDATION_ERROR"


class TransientExternalError(PipelineError):
    """Network or service failure talking to an external collaborator. Fatal for LLM stages."""

    code = "TRANSIENT_EXTERNAL_ERROR"


# Name used by the retry decorator.
RetryableError = TransientExternalError


class DegradableError(PipelineError):
    """Failure that the pipeline recovers from with a deterministic fallback."""

    code = "DEGRADABLE_ERROR"


class GenerationError(DegradableError):
    """Scene generation adapter failure."""

    code = "GENERATION_ERROR"


class PollTimeoutError(DegradableError):
    """Long-running operation did not finish within the poll ceiling."""

    code = "POLL_TIMEOUT"


class ResourceError(PipelineError):
    """Local subprocess or media tool failure. Fatal."""

    code = "RESOURCE_ERROR"


class CompositionError(ResourceError):
    """FFmpeg/ffprobe failure while composing the final asset."""

    code = "COMPOSITION_ERROR"


class QCError(PipelineError):
    """Quality-check issue. Downgraded to a warning, never fatal."""

    code = "QC_ERROR"


class InvalidTransitionError(PipelineError):
    """Attempted job status change that the state machine forbids."""

    code = "INVALID_TRANSITION"


class JobNotFoundError(PipelineError):
    code = "JOB_NOT_FOUND"


class JobConflictError(PipelineError):
    """A render with the same id is still queued or running."""

    code = "JOB_CONFLICT"
