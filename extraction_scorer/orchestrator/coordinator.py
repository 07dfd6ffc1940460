"""Worker coordination and task execution."""

import asyncio
import os
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor

from ..analysis.metrics import MetricNormalizer
from ..analysis.scoring import ScoreAggregator
from ..models.data_models import ScoringTask
from ..workers.scoring_worker import ScoringWorker
from ..utils.config import Config
from ..utils.logging import get_logger


class WorkerCoordinator:
    """Runs scoring tasks on a fixed-size worker pool."""

    def __init__(self, config: Config):
        """Initialize worker coordinator.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.logger = get_logger("coordinator")
        self.workers: Dict[str, ScoringWorker] = {}
        self.pool_size = max(1, min(config.max_workers, os.cpu_count() or 1))
        self.executor: Optional[ThreadPoolExecutor] = None
        self._running = False

    async def start(self):
        """Start the coordinator."""
        if self.executor is None:
            self.executor = ThreadPoolExecutor(
                max_workers=self.pool_size, thread_name_prefix="scoring"
            )
        self._running = True
        self.logger.info(f"Worker coordinator started with {self.pool_size} workers")

    async def stop(self):
        """Stop the coordinator."""
        self._running = False

        for worker in self.workers.values():
            await worker.stop()
        self.workers.clear()

        if self.executor is not None:
            self.executor.shutdown(wait=True)
            self.executor = None

        self.logger.info("Worker coordinator stopped")

    async def create_worker(
        self, normalizer: MetricNormalizer, aggregator: ScoreAggregator, run_id: str
    ) -> ScoringWorker:
        """Create and start the scoring worker for one run.

        Args:
            normalizer: Metric normalizer for the run
            aggregator: Score aggregator for the run
            run_id: Identifier of the run

        Returns:
            Started worker bound to the coordinator's executor
        """
        if not self._running:
            await self.start()

        worker = ScoringWorker(normalizer, aggregator, executor=self.executor)
        await worker.start()
        self.workers[run_id] = worker
        return worker

    async def execute_tasks(self, tasks: List[ScoringTask], worker: ScoringWorker) -> List[ScoringTask]:
        """Execute a list of tasks.

        No task waits on another; a failed task does not stop the others.

        Args:
            tasks: List of tasks to execute
            worker: Worker executing the tasks

        Returns:
            List of finished tasks, in input order
        """
        if not tasks:
            return []

        self.logger.info(f"Executing {len(tasks)} scoring tasks")

        semaphore = asyncio.Semaphore(self.pool_size)

        async def execute_single_task(task: ScoringTask) -> ScoringTask:
            async with semaphore:
                return await worker.execute(task)

        ordered = sorted(tasks, key=lambda t: t.priority, reverse=True)
        await asyncio.gather(*(execute_single_task(task) for task in ordered))

        failed = len([t for t in tasks if t.status == "failed"])
        self.logger.info(f"Completed {len(tasks) - failed} tasks, {failed} failed")
        return list(tasks)

    async def release_worker(self, run_id: str):
        """Stop and forget the worker of a finished run."""
        worker = self.workers.pop(run_id, None)
        if worker is not None:
            await worker.stop()

    async def get_task_status(self, task_id: str) -> Optional[str]:
        """Get status of a specific task.

        Args:
            task_id: Task ID

        Returns:
            Task status or None if not found
        """
        for worker in self.workers.values():
            status = worker.get_task_status(task_id)
            if status:
                return status
        return None

    def get_worker_stats(self) -> Dict[str, Any]:
        """Get worker statistics.

        Returns:
            Worker statistics
        """
        stats = {
            'active_workers': len(self.workers),
            'running_workers': len([w for w in self.workers.values() if w.is_running()]),
            'pool_size': self.pool_size,
            'max_workers': self.config.max_workers,
            'running': self._running
        }

        total_tasks = 0
        completed_tasks = 0
        failed_tasks = 0

        for worker in self.workers.values():
            total_tasks += len(worker.get_tasks())
            completed_tasks += len(worker.get_completed_tasks())
            failed_tasks += len(worker.get_tasks("failed"))

        stats.update({
            'total_tasks': total_tasks,
            'completed_tasks': completed_tasks,
            'failed_tasks': failed_tasks
        })

        return stats
