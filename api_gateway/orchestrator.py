"""
Pipeline orchestrator.

Drives one render job through its ordered stages: parse, pitch (optional),
script, shot plan, scene generation, composition, QC and publish. Every
stage records its wall-clock duration on the debug trace whether it
succeeds or not. A failure in any stage moves the job to ERROR; the shot
planner, scene adapters, pitch and QC stages absorb their own failures.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

from shared.config import settings
from shared.errors import InvalidTransitionError, JobNotFoundError, QCError
from shared.logging import get_logger, set_job_id
from shared.models.job import JobStatus, RenderJob
from shared.models.media import CompositionResult, QCResult
from shared.storage import publish_render
from modules.brief_parser import parse_job_description
from modules.composer import compose
from modules.composer.config import END_CARD_DURATION
from modules.quality_check import perform_qc
from modules.sales_pitch import generate_sales_pitch
from modules.scene_generator import acquire_scenes, estimate_cost_cents
from modules.scene_generator.config import resolve_engine
from modules.script_generator import generate_script
from modules.shot_planner import generate_shot_plan
from api_gateway.store import JobStore, job_store

logger = get_logger("api_gateway.orchestrator")


@dataclass
class RunContext:
    """State handed from stage to stage during one run."""

    job: RenderJob
    composition: Optional[CompositionResult] = None
    qc: Optional[QCResult] = None


@dataclass
class Stage:
    """One named pipeline step."""

    name: str
    run: Callable[[RunContext], Awaitable[None]]
    enabled: bool = True


@dataclass
class StageOrchestrator:
    """
    Runs the render pipeline for jobs held in a JobStore.

    Collaborators default to the real modules and can be replaced for tests.
    """

    store: JobStore = field(default_factory=lambda: job_store)
    parse: Callable[..., Awaitable[Any]] = parse_job_description
    pitch: Callable[..., Awaitable[Any]] = generate_sales_pitch
    script: Callable[..., Awaitable[Any]] = generate_script
    shot_plan: Callable[..., Awaitable[Any]] = generate_shot_plan
    acquire: Callable[..., Awaitable[List[str]]] = acquire_scenes
    compose: Callable[..., Awaitable[CompositionResult]] = compose
    qc: Callable[..., Awaitable[QCResult]] = perform_qc
    publish: Callable[..., Awaitable[str]] = publish_render

    def build_stages(self) -> List[Stage]:
        """Stages in execution order."""
        return [
            Stage("parse", self._parse_stage),
            Stage("pitch", self._pitch_stage, enabled=settings.enable_sales_pitch),
            Stage("script", self._script_stage),
            Stage("shot_plan", self._shot_plan_stage),
            Stage("generate", self._generate_stage),
            Stage("compose", self._compose_stage),
            Stage("qc", self._qc_stage),
            Stage("publish", self._publish_stage),
        ]

    async def run(self, render_id: str) -> RenderJob:
        """
        Execute the pipeline for a queued job.

        Never raises for stage failures; the outcome is the job's final status.

        Raises:
            JobNotFoundError: If the render id is unknown
            InvalidTransitionError: If the job is not QUEUED
        """
        set_job_id(render_id)
        start_time = time.time()

        job = self.store.require(render_id)
        self.store.update_status(render_id, JobStatus.RUNNING)
        logger.info(
            "Processing render job",
            extra={
                "job_id": render_id,
                "engine": job.request.engine,
                "scene_count": job.request.resolved_scene_count
            }
        )

        context = RunContext(job=job)
        try:
            settings.tmp_path.mkdir(parents=True, exist_ok=True)
            settings.renders_path.mkdir(parents=True, exist_ok=True)
            for stage in self.build_stages():
                if not stage.enabled:
                    logger.info(f"Skipping stage {stage.name}", extra={"job_id": render_id})
                    continue
                await self._run_stage(stage, context)
        except Exception as e:
            self.handle_pipeline_error(job, e)
            return job

        job.debug.latency_s = int(round(time.time() - start_time))
        job.debug.cost_cents = estimate_cost_cents(job.request.engine, len(job.shot_plan.scenes))
        self.store.update_status(render_id, JobStatus.READY)

        logger.info(
            "Render job completed successfully",
            extra={
                "job_id": render_id,
                "latency_s": job.debug.latency_s,
                "cost_cents": job.debug.cost_cents,
                "video_url": job.final_video
            }
        )
        return job

    async def _run_stage(self, stage: Stage, context: RunContext) -> None:
        job = context.job
        logger.info(f"Starting stage {stage.name}", extra={"job_id": job.render_id, "stage": stage.name})
        stage_start = time.time()
        try:
            await stage.run(context)
        finally:
            duration_ms = int((time.time() - stage_start) * 1000)
            job.record_step(stage.name, duration_ms)
            self.store.save(job)
            logger.info(
                f"Finished stage {stage.name}",
                extra={"job_id": job.render_id, "stage": stage.name, "duration_ms": duration_ms}
            )

    def handle_pipeline_error(self, job: RenderJob, error: Exception) -> None:
        """Mark the job as failed with the causing message."""
        error_message = str(error) or type(error).__name__
        error_code = getattr(error, "code", "MODULE_FAILURE")
        logger.error(
            "Failed to process render job",
            exc_info=error,
            extra={"job_id": job.render_id, "error_code": error_code}
        )
        try:
            self.store.update_status(job.render_id, JobStatus.ERROR, error=error_message)
        except InvalidTransitionError as e:
            logger.error("Failed to mark render as failed", exc_info=e, extra={"job_id": job.render_id})

    async def _parse_stage(self, context: RunContext) -> None:
        job = context.job
        job.brief = await self.parse(
            job.request.job_description,
            locale=job.request.locale,
            job_id=job.render_id
        )

    async def _pitch_stage(self, context: RunContext) -> None:
        job = context.job
        pitch = await self.pitch(job.brief, job.request.resolved_scene_count, job_id=job.render_id)
        job.sales_pitch = list(pitch.segments)

    async def _script_stage(self, context: RunContext) -> None:
        job = context.job
        job.script = await self.script(
            job.brief,
            job.request.brand.tone,
            job.request.target_duration_s,
            job.request.resolved_scene_count,
            job_id=job.render_id
        )

    async def _shot_plan_stage(self, context: RunContext) -> None:
        job = context.job
        job.shot_plan = await self.shot_plan(
            job.script,
            job.brief,
            job.request.target_duration_s,
            job.request.brand.tone,
            job.request.resolved_scene_count,
            job_id=job.render_id
        )

    async def _generate_stage(self, context: RunContext) -> None:
        job = context.job
        job.debug.engine = resolve_engine(job.request.engine)
        job.scene_files = await self.acquire(
            job.shot_plan,
            job.render_id,
            job.request.engine,
            brand=job.request.brand,
            reuse_existing=job.request.overlay_only
        )

    async def _compose_stage(self, context: RunContext) -> None:
        job = context.job
        context.composition = await self.compose(
            job.render_id,
            job.scene_files,
            job.shot_plan,
            job.script,
            job.request.brand,
            pitch_segments=job.sales_pitch
        )

    async def _qc_stage(self, context: RunContext) -> None:
        job = context.job
        expected = job.request.target_duration_s + END_CARD_DURATION
        try:
            result = await self.qc(
                Path(context.composition.final_path),
                expected,
                brand=job.request.brand,
                job_id=job.render_id
            )
        except Exception as e:
            logger.warning("QC could not run", exc_info=e, extra={"job_id": job.render_id})
            result = QCResult(passed=False, issues=[f"QC could not run: {e}"])

        context.qc = result
        job.debug.qc = result.model_dump()
        try:
            result.raise_for_issues(job_id=job.render_id)
        except QCError as e:
            # Always deliver; issues only become warnings
            logger.warning(f"QC checks failed: {e}", extra={"job_id": job.render_id})
            job.debug.warnings.extend(result.issues)

    async def _publish_stage(self, context: RunContext) -> None:
        job = context.job
        job.final_video = await self.publish(Path(context.composition.final_path), job.render_id)


async def execute_pipeline(render_id: str, orchestrator: Optional[StageOrchestrator] = None) -> None:
    """
    Background entry point for one render.

    Args:
        render_id: Render id of a QUEUED job
        orchestrator: Orchestrator to use (defaults to one over the shared store)
    """
    orchestrator = orchestrator or StageOrchestrator()
    try:
        await orchestrator.run(render_id)
    except (JobNotFoundError, InvalidTransitionError) as e:
        logger.error("Render job could not start", exc_info=e, extra={"job_id": render_id})
    finally:
        set_job_id(None)
