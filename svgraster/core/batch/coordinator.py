"""Batch coordinator owning the renderer engine for one batch call."""

import uuid
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional, Union

from svgraster.config import Settings
from svgraster.config import settings as default_settings
from svgraster.core.conversion.task import run_conversion
from svgraster.core.exceptions import BatchConversionError, EngineError
from svgraster.core.renderer.base import RendererEngine
from svgraster.utils.logging import LoggingContext, get_logger

from .discovery import build_directory_mapping
from .models import BatchOutcome, BatchResult, ConversionJob
from .scheduler import OutcomeCallback, TaskPoolScheduler

logger = get_logger(__name__)

FileMap = Dict[Union[str, Path], Union[str, Path]]
EngineFactory = Callable[[], Awaitable[RendererEngine]]


def raise_for_outcome(outcome: BatchOutcome) -> None:
    """Turn a failed outcome into the matching exception.

    Raises:
        EngineError: If the engine never started
        BatchConversionError: If one or more files failed
    """
    if outcome.engine_error is not None:
        raise outcome.engine_error
    if outcome.result.failures:
        raise BatchConversionError(outcome.result.failures)


class BatchCoordinator:
    """Runs one batch against a single renderer engine.

    The engine is created once per call and shut down once, after every
    task has settled, whatever the outcome. A failing shutdown is logged
    and does not discard the per-file results.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine_factory: Optional[EngineFactory] = None,
    ):
        self.settings = settings or default_settings
        self._engine_factory = engine_factory or self._create_playwright_engine

    async def _create_playwright_engine(self) -> RendererEngine:
        from svgraster.core.renderer.playwright_engine import PlaywrightEngine

        return await PlaywrightEngine.create(self.settings)

    async def run(
        self,
        file_map: FileMap,
        progress_callback: Optional[OutcomeCallback] = None,
    ) -> BatchOutcome:
        """Convert every file of ``file_map`` and report the outcome.

        Per-file failures and engine start-up failure are reported through
        the returned outcome, never raised.

        Args:
            file_map: Source path to destination path
            progress_callback: Called with each task outcome as it settles

        Returns:
            BatchOutcome with an explicit ``ok`` flag
        """
        jobs = ConversionJob.from_mapping(file_map)
        outcome = BatchOutcome(
            batch_id=uuid.uuid4().hex[:12],
            result=BatchResult(total=len(jobs)),
            started_at=datetime.now(timezone.utc),
        )

        with LoggingContext(batch_id=outcome.batch_id):
            logger.info(
                "batch_started",
                total=len(jobs),
                concurrency_limit=self.settings.concurrency_limit,
            )

            try:
                engine = await self._engine_factory()
            except EngineError as e:
                logger.error("engine_start_failed", error=e)
                outcome.engine_error = e
                outcome.completed_at = datetime.now(timezone.utc)
                return outcome

            scheduler = TaskPoolScheduler(self.settings.concurrency_limit)
            try:
                outcome.result = await scheduler.run_all(
                    jobs, partial(self._convert_job, engine), progress_callback
                )
            finally:
                try:
                    await engine.exit()
                except Exception as e:
                    logger.error("engine_stop_failed", error=e)

            outcome.completed_at = datetime.now(timezone.utc)
            logger.info(
                "batch_finished",
                succeeded=len(outcome.result.succeeded),
                failed=len(outcome.result.failures),
                peak_in_flight=scheduler.peak_in_flight,
                elapsed_seconds=round(outcome.elapsed_seconds, 3),
            )
        return outcome

    async def _convert_job(self, engine: RendererEngine, job: ConversionJob) -> str:
        return await run_conversion(
            engine,
            job.source_path,
            job.destination_path,
            probe_height=self.settings.probe_height,
        )

    async def convert_files(
        self,
        file_map: FileMap,
        progress_callback: Optional[OutcomeCallback] = None,
    ) -> None:
        """Convert every file of ``file_map``.

        Raises:
            EngineError: If the engine could not be started
            BatchConversionError: If one or more files failed; raised only
                after the engine has been shut down
        """
        outcome = await self.run(file_map, progress_callback)
        raise_for_outcome(outcome)

    def directory_mapping(
        self, source_dir: Union[str, Path], destination_dir: Union[str, Path]
    ) -> Dict[str, str]:
        """Mapping for every source file of ``source_dir``."""
        return build_directory_mapping(
            source_dir,
            destination_dir,
            source_extension=self.settings.source_extension,
            output_extension=self.settings.output_extension,
        )

    async def convert_directory(
        self,
        source_dir: Union[str, Path],
        destination_dir: Union[str, Path],
        progress_callback: Optional[OutcomeCallback] = None,
    ) -> None:
        """Convert every source file of ``source_dir`` into ``destination_dir``."""
        file_map = self.directory_mapping(source_dir, destination_dir)
        Path(destination_dir).mkdir(parents=True, exist_ok=True)
        await self.convert_files(file_map, progress_callback)


async def convert_files(file_map: FileMap, settings: Optional[Settings] = None) -> None:
    """Convert ``{source: destination}`` files with a fresh coordinator."""
    await BatchCoordinator(settings).convert_files(file_map)


async def convert_directory(
    source_dir: Union[str, Path],
    destination_dir: Union[str, Path],
    settings: Optional[Settings] = None,
) -> None:
    """Convert a directory of SVG files with a fresh coordinator."""
    await BatchCoordinator(settings).convert_directory(source_dir, destination_dir)
