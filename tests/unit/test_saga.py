"""Unit tests for the saga runner (forward steps, reverse compensation)."""

import asyncio

import pytest

from app.application.services.saga import Saga
from app.domain.exceptions import CompensationFailedException


class Boom(Exception):
    pass


def _recorder(log: list[str], name: str, result=None, error: BaseException | None = None):
    async def _run():
        log.append(name)
        if error is not None:
            raise error
        return result

    return _run


async def test_all_steps_succeed_returns_results_in_order() -> None:
    log: list[str] = []
    saga = Saga("ok")
    saga.add_step("a", _recorder(log, "a", 1), _recorder(log, "undo-a"))
    saga.add_step("b", _recorder(log, "b", 2))
    assert await saga.run() == [1, 2]
    assert log == ["a", "b"]
    assert all(step.committed for step in saga.steps)


async def test_failure_compensates_committed_steps_in_reverse() -> None:
    log: list[str] = []
    saga = Saga("fail")
    saga.add_step("a", _recorder(log, "a"), _recorder(log, "undo-a"))
    saga.add_step("b", _recorder(log, "b"), _recorder(log, "undo-b"))
    saga.add_step("c", _recorder(log, "c", error=Boom("c failed")), _recorder(log, "undo-c"))

    with pytest.raises(Boom):
        await saga.run()

    assert log == ["a", "b", "c", "undo-b", "undo-a"]
    assert not any(step.committed for step in saga.steps)


async def test_failed_compensation_raises_compensation_failed() -> None:
    log: list[str] = []
    saga = Saga("double-fault")
    saga.add_step("a", _recorder(log, "a"), _recorder(log, "undo-a", error=Boom("undo broke")))
    saga.add_step("b", _recorder(log, "b", error=Boom("b failed")))

    with pytest.raises(CompensationFailedException) as exc_info:
        await saga.run()

    details = exc_info.value.details
    assert details["step"] == "a"
    assert details["original_error"] == "b failed"
    assert details["compensation_error"] == "undo broke"


async def test_steps_after_failure_never_run() -> None:
    log: list[str] = []
    saga = Saga("stop")
    saga.add_step("a", _recorder(log, "a", error=Boom()))
    saga.add_step("b", _recorder(log, "b"))
    with pytest.raises(Boom):
        await saga.run()
    assert log == ["a"]


async def test_cancelled_step_still_compensates_and_propagates_cancellation() -> None:
    log: list[str] = []
    saga = Saga("cancelled")
    saga.add_step("a", _recorder(log, "a"), _recorder(log, "undo-a"))
    saga.add_step("b", _recorder(log, "b", error=asyncio.CancelledError()))

    with pytest.raises(asyncio.CancelledError):
        await saga.run()

    assert log == ["a", "b", "undo-a"]
    assert not saga.steps[0].committed


async def test_timeout_during_step_compensates_before_timeout_surfaces() -> None:
    log: list[str] = []
    compensated = asyncio.Event()

    async def slow_undo():
        await asyncio.sleep(0.05)
        log.append("undo-a")
        compensated.set()

    async def hang():
        log.append("b")
        await asyncio.sleep(10)

    saga = Saga("timed-out")
    saga.add_step("a", _recorder(log, "a"), slow_undo)
    saga.add_step("b", hang)

    with pytest.raises(TimeoutError):
        async with asyncio.timeout(0.01):
            await saga.run()

    assert compensated.is_set()
    assert log == ["a", "b", "undo-a"]
