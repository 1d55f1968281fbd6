"""Bounded-concurrency execution of conversion jobs."""

import asyncio
from typing import Awaitable, Callable, Iterable, Optional

from svgraster.core.constants import DEFAULT_CONCURRENCY_LIMIT, MIN_CONCURRENCY_LIMIT
from svgraster.core.exceptions import ConfigurationError
from svgraster.utils.logging import LoggingContext, get_logger

from .models import BatchResult, ConversionJob, TaskFailure, TaskOutcome, TaskSuccess

logger = get_logger(__name__)

JobRunner = Callable[[ConversionJob], Awaitable[str]]
OutcomeCallback = Callable[[TaskOutcome], None]


class TaskPoolScheduler:
    """Runs jobs on a fixed pool of workers sharing one queue.

    At most ``concurrency_limit`` jobs are in flight at any instant. A failed
    job is recorded as a ``TaskFailure`` and never stops the other workers.
    """

    def __init__(self, concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT):
        if concurrency_limit < MIN_CONCURRENCY_LIMIT:
            raise ConfigurationError(
                f"concurrency_limit must be at least {MIN_CONCURRENCY_LIMIT}",
                details={
                    "config_key": "concurrency_limit",
                    "config_value": concurrency_limit,
                },
            )
        self.concurrency_limit = concurrency_limit

        # Instrumentation
        self.in_flight = 0
        self.peak_in_flight = 0
        self.outstanding = 0

    async def run_all(
        self,
        jobs: Iterable[ConversionJob],
        runner: JobRunner,
        progress_callback: Optional[OutcomeCallback] = None,
    ) -> BatchResult:
        """Run every job and collect successes and failures.

        Args:
            jobs: Jobs to run; order is not significant
            runner: Coroutine function converting one job, returning its
                destination path
            progress_callback: Called with each outcome as it settles

        Returns:
            BatchResult listing outcomes in completion order
        """
        jobs = list(jobs)
        result = BatchResult(total=len(jobs))
        if not jobs:
            return result

        queue: asyncio.Queue = asyncio.Queue()
        for job in jobs:
            queue.put_nowait(job)
        self.outstanding = len(jobs)

        num_workers = min(self.concurrency_limit, len(jobs))
        workers = [
            asyncio.create_task(
                self._worker(queue, runner, result, progress_callback)
            )
            for _ in range(num_workers)
        ]

        logger.debug("workers_started", workers=num_workers, jobs=len(jobs))
        try:
            await asyncio.gather(*workers)
        except BaseException:
            # Settle every running job before propagating
            for worker in workers:
                worker.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise
        return result

    async def _worker(
        self,
        queue: asyncio.Queue,
        runner: JobRunner,
        result: BatchResult,
        progress_callback: Optional[OutcomeCallback],
    ) -> None:
        """Worker coroutine that pulls jobs until the queue is drained."""
        while True:
            try:
                job = queue.get_nowait()
            except asyncio.QueueEmpty:
                break

            outcome = await self._run_job(job, runner)
            result.record(outcome)
            self.outstanding -= 1

            if progress_callback:
                try:
                    progress_callback(outcome)
                except Exception as e:
                    logger.error("progress_callback_error", error=e)

    async def _run_job(self, job: ConversionJob, runner: JobRunner) -> TaskOutcome:
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            with LoggingContext(source=job.source_path):
                destination = await runner(job)
        except Exception as e:
            logger.warning(
                "conversion_failed", source=job.source_path, error=e
            )
            return TaskFailure(job=job, error=e)
        finally:
            self.in_flight -= 1

        return TaskSuccess(job=job, destination_path=destination)
