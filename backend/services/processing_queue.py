"""Background processing queue.

A bounded asyncio.Queue drained by a fixed pool of worker tasks that run inside
the FastAPI process. Uploads and AI commands submit jobs here instead of
spawning one untracked task each; when the queue is full the caller gets
QueueFullError and the API answers 503.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

logger = logging.getLogger(__name__)


class QueueFullError(Exception):
    """Raised when a job is submitted to a queue that has no free slot."""
    pass


@dataclass
class Job:
    name: str
    run: Callable[[], Awaitable[Any]]


class ProcessingQueue:
    """Fixed-size worker pool over a bounded job queue."""

    def __init__(self, workers: int = 4, max_size: int = 100):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.worker_count = workers
        self.max_size = max_size
        self._queue: asyncio.Queue[Job] = asyncio.Queue(maxsize=max_size)
        self._workers: List[asyncio.Task] = []

    @property
    def is_running(self) -> bool:
        return any(not w.done() for w in self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def has_capacity(self, count: int = 1) -> bool:
        return self.max_size - self._queue.qsize() >= count

    def submit(self, name: str, run: Callable[[], Awaitable[Any]]) -> None:
        """Enqueue a job without waiting; raises QueueFullError when full."""
        try:
            self._queue.put_nowait(Job(name=name, run=run))
        except asyncio.QueueFull:
            raise QueueFullError(f"Processing queue is full ({self.max_size} jobs pending)")
        logger.debug(f"Queued job {name} ({self._queue.qsize()} pending)")

    def start(self) -> None:
        if self.is_running:
            return
        self._workers = [
            asyncio.create_task(self._worker_loop(i), name=f"processing-worker-{i}")
            for i in range(self.worker_count)
        ]
        logger.info(f"Processing queue started with {self.worker_count} workers (capacity {self.max_size})")

    async def join(self) -> None:
        """Wait until every queued job has finished."""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel the workers. Jobs still queued are dropped."""
        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        if self._queue.qsize():
            logger.warning(f"Processing queue stopped with {self._queue.qsize()} jobs still pending")
        logger.info("Processing queue stopped")

    async def _worker_loop(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await job.run()
            except Exception as e:
                logger.error(f"Worker {index}: job {job.name} failed: {e}")
            finally:
                self._queue.task_done()
