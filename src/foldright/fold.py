"""
Right-to-left fold driven by continuations.

Each combining step receives a ``next`` callback and the fold only moves on
once that callback fires, so steps never overlap and always run from the
highest index down to zero. ``next`` may be called before the step returns
or later from a timer, an I/O callback or any other deferred mechanism.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from .errors import InvalidArgumentError, type_name
from .sequence import has_index, is_array_like, length_of

logger = logging.getLogger(__name__)

A = TypeVar("A")

Continuation = Callable[..., None]
Iteratee = Callable[[Any, Any, int, Any, Continuation], Any]
Done = Callable[[Any], Any]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()
"""Marks an omitted seed. Every other value, ``None`` included, is a seed."""


def validate(sequence: Any, *functions: tuple[str, Any]) -> None:
    """
    Check fold arguments in order, raising on the first violation.

    ``functions`` are ``(name, value)`` pairs that must be callable.
    """
    if not is_array_like(sequence):
        raise InvalidArgumentError(
            f'Async reduce must be called on an array-like sequence. Got "{type_name(sequence)}".',
            sequence,
        )
    for name, fn in functions:
        if not callable(fn):
            raise InvalidArgumentError(
                f'"{name}" must be a function. Got "{type_name(fn)}".', fn
            )


def initial_state(sequence: Any, seed: Any = MISSING) -> tuple[Any, int]:
    """
    Resolve the starting accumulator and cursor.

    With a seed the cursor starts at the last index. Without one the
    rightmost present element becomes the accumulator and the cursor starts
    just below it.

    Raises:
        InvalidArgumentError: no seed and no present element.
    """
    index = length_of(sequence) - 1
    if seed is not MISSING:
        return seed, index

    while index >= 0 and not has_index(sequence, index):
        index -= 1
    if index < 0:
        raise InvalidArgumentError(
            "Async reduce of empty sequence with no initial value"
        )
    return sequence[index], index - 1


class _Fold(Generic[A]):
    """
    Control loop for one fold.

    Owns the accumulator and the cursor. Each continuation runs the rest of
    the fold before it returns, so a synchronous ``next`` call nests the
    following steps inside the current one. Holes are skipped in a loop and
    add no stack depth.
    """

    def __init__(self, sequence: Any, iteratee: Iteratee, done: Done, value: A, index: int):
        self._sequence = sequence
        self._iteratee = iteratee
        self._done = done
        self._value = value
        self._index = index

    def run(self) -> None:
        n = self._index
        while n >= 0 and not has_index(self._sequence, n):
            logger.debug("skipping hole at index %d", n)
            n -= 1
        self._index = n

        if n < 0:
            logger.debug("fold finished")
            self._done(self._value)
            return
        self._iteratee(self._value, self._sequence[n], n, self._sequence, self._continuation(n))

    def _continuation(self, n: int) -> Continuation:
        def next_(value: Any = None) -> None:
            self._value = value
            self._index = n - 1
            self.run()

        return next_


def reduce_right(sequence: Any, iteratee: Iteratee, done: Done, seed: Any = MISSING) -> None:
    """
    Fold ``sequence`` from right to left with an asynchronous combining step.

    ``iteratee(accumulator, element, index, sequence, next)`` is called once
    per present index, highest first. It reports its result by calling
    ``next(value)``; nothing happens until it does. Once index 0 has been
    handled ``done(accumulator)`` receives the result. Holes are skipped
    without calling the iteratee.

    ``next`` returns only after every later step (and ``done``) has run as
    far as it can without waiting. An iteratee that calls ``next`` before
    returning therefore sees the code after that call run last, and each
    such step adds stack depth; defer ``next`` (``loop.call_soon``, a timer)
    to fold very long sequences.

    Args:
        sequence: A ``Sequence`` or any array-like with ``length``.
        iteratee: Combining step taking five positional arguments.
        done: Called once with the final accumulator.
        seed: Initial accumulator. Omit to start from the rightmost
              present element; pass ``None`` to seed with ``None``.

    Raises:
        InvalidArgumentError: before any step runs, for a non array-like
            sequence, a non-callable iteratee or done, or an empty sequence
            with no seed.

    Example:
        reduce_right(["foo", "bar", "baz"],
                     lambda acc, x, i, seq, next: next(acc + x),
                     print)
        # prints "bazbarfoo"
    """
    validate(sequence, ("iteratee", iteratee), ("done", done))

    value, index = initial_state(sequence, seed)
    logger.debug(
        "fold start: length=%d seeded=%s first_index=%d",
        length_of(sequence), seed is not MISSING, index,
    )
    _Fold(sequence, iteratee, done, value, index).run()


__all__ = [
    "Continuation",
    "Done",
    "Iteratee",
    "MISSING",
    "initial_state",
    "reduce_right",
    "validate",
]
