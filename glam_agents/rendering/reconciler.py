"""
Reconciliation loop: keeps re-attempting filters that are not yet applied.

The loop is an asyncio task owned by the composition root; it stops when
every filter is applied, when each remaining filter has used its retry
budget, or when it is cancelled.
"""

import asyncio
from typing import Optional

from glam_agents.rendering.effect_applicator import AppliedLook, EffectApplicator
from setup_logging_optimized import get_logger

logger = get_logger(__name__)


class ReconciliationLoop:
    def __init__(self, applicator: EffectApplicator, interval: float = 2.0, max_attempts: int = 10):
        self.applicator = applicator
        self.interval = interval
        self.max_attempts = max_attempts
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, applied: AppliedLook) -> asyncio.Task:
        """Start reconciling a look, replacing any loop already running."""
        self.cancel()
        self._task = asyncio.create_task(self.run(applied))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Reconciliation loop cancelled")
        self._task = None

    async def stop(self) -> None:
        """Cancel and wait until the task has finished."""
        task = self._task
        self.cancel()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def run(self, applied: AppliedLook) -> AppliedLook:
        # First pass done by apply(); attempts beyond it are retries
        retries = {id(a): 0 for a in applied.applications}

        while True:
            pending = [
                a for a in applied.unapplied
                if retries[id(a)] < self.max_attempts
            ]
            if not pending:
                break

            await asyncio.sleep(self.interval)

            for application in pending:
                retries[id(application)] += 1
                await self.applicator.attempt_filter(application)

        if applied.all_applied:
            logger.info(f"Look '{applied.look.style}' fully applied")
        else:
            logger.info(f"Reconciliation gave up for look '{applied.look.style}': {applied.states}")
        return applied
