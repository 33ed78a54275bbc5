"""
asyncio surfaces for the right-to-left fold.

``reduce_right_async`` awaits one step at a time instead of passing
continuations around. ``reduce_right_future`` wraps the callback folder so
its result can be awaited.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .fold import MISSING, Continuation, Iteratee, initial_state, reduce_right, validate
from .sequence import has_index, length_of

logger = logging.getLogger(__name__)


StepFunc = Callable[[Any, Any, int, Any], Awaitable[Any]]


async def reduce_right_async(sequence: Any, step: StepFunc, seed: Any = MISSING) -> Any:
    """
    Fold ``sequence`` right to left, awaiting ``step`` for each present index.

    ``step(accumulator, element, index, sequence)`` returns an awaitable of
    the next accumulator. Each step is awaited before the next one starts.

    Example:
        async def concat(acc, x, i, seq):
            await asyncio.sleep(0.1)
            return acc + x

        result = await reduce_right_async(["a", "b", "c"], concat)
        assert result == "cba"
    """
    validate(sequence, ("step", step))
    value, index = initial_state(sequence, seed)
    logger.debug(
        "async fold start: length=%d seeded=%s first_index=%d",
        length_of(sequence), seed is not MISSING, index,
    )

    while index >= 0:
        if has_index(sequence, index):
            value = await step(value, sequence[index], index, sequence)
        else:
            logger.debug("skipping hole at index %d", index)
        index -= 1

    logger.debug("async fold finished")
    return value


def reduce_right_future(
    sequence: Any, iteratee: Iteratee, seed: Any = MISSING
) -> asyncio.Future[Any]:
    """
    Run the callback folder and expose its result as a future.

    Argument errors raise immediately. A step that raises fails the future
    with that exception and the fold stops there. Must be called with a
    running event loop.
    """
    validate(sequence, ("iteratee", iteratee))
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def done(result: Any) -> None:
        if not future.done():
            future.set_result(result)

    def guarded(acc: Any, element: Any, index: int, seq: Any, next_: Continuation) -> None:
        if future.done():
            return
        try:
            iteratee(acc, element, index, seq, next_)
        except Exception as exc:
            logger.debug("step at index %d raised %r", index, exc)
            if not future.done():
                future.set_exception(exc)

    reduce_right(sequence, guarded, done, seed)
    return future


__all__ = ["StepFunc", "reduce_right_async", "reduce_right_future"]
