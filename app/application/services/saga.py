"""Minimal saga: ordered forward steps, each with an optional compensating action.

When a step fails, the steps that already committed are compensated in
reverse order and the original error is re-raised. If a compensation itself
fails, CompensationFailedException is raised instead so the partial state is
visible to operators.

Cancellation (request timeout, client disconnect, shutdown) counts as a
failure: compensation runs shielded so it completes before CancelledError
propagates.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from app.domain.exceptions import CompensationFailedException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SagaStep:
    """One forward action and its undo. committed is set once action returns."""

    name: str
    action: Callable[[], Awaitable[Any]]
    compensate: Callable[[], Awaitable[Any]] | None = None
    committed: bool = False
    result: Any = None


@dataclass
class Saga:
    name: str
    steps: list[SagaStep] = field(default_factory=list)

    def add_step(
        self,
        name: str,
        action: Callable[[], Awaitable[Any]],
        compensate: Callable[[], Awaitable[Any]] | None = None,
    ) -> SagaStep:
        step = SagaStep(name=name, action=action, compensate=compensate)
        self.steps.append(step)
        return step

    async def run(self) -> list[Any]:
        """Run all steps in order; return their results.

        Raises:
            The failing step's exception (CancelledError included), after
                successful compensation.
            CompensationFailedException: A compensating action failed.
        """
        for step in self.steps:
            try:
                step.result = await step.action()
            except asyncio.CancelledError as e:
                logger.warning("Saga %s: step %s cancelled", self.name, step.name)
                await self._compensate_shielded(step.name, e)
                raise
            except Exception as e:
                logger.warning("Saga %s: step %s failed: %s", self.name, step.name, e)
                await self._compensate(step.name, e)
                raise
            step.committed = True
        return [step.result for step in self.steps]

    async def _compensate_shielded(self, failed_step: str, error: BaseException) -> None:
        """Compensate in a task the pending cancellation cannot interrupt."""
        task = asyncio.ensure_future(self._compensate(failed_step, error))
        while not task.done():
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # Cancelled again while waiting; the compensation keeps running.
                continue
        task.result()

    async def _compensate(self, failed_step: str, error: BaseException) -> None:
        for step in reversed(self.steps):
            if not step.committed or step.compensate is None:
                continue
            try:
                await step.compensate()
            except Exception as comp_error:
                logger.error(
                    "Saga %s: compensation of %s failed after %s failed: %s",
                    self.name,
                    step.name,
                    failed_step,
                    comp_error,
                )
                raise CompensationFailedException(
                    step=step.name,
                    original_error=str(error) or type(error).__name__,
                    compensation_error=str(comp_error),
                ) from comp_error
            step.committed = False
            logger.info("Saga %s: compensated %s", self.name, step.name)
