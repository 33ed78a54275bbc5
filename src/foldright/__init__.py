"""
Foldright: sequential right-to-left folds with asynchronous steps.

Each combining step runs only after the previous one has reported its
result, walking the sequence from the last index to the first and skipping
holes in sparse sequences.

Usage:
    from foldright import reduce_right, reduce_right_async

    # Continuation style: the step calls next(value) when it is finished
    reduce_right(items, lambda acc, x, i, seq, next: next(acc + x), on_done)

    # asyncio style: the step returns an awaitable accumulator
    result = await reduce_right_async(items, combine_fn, seed)
"""

from .errors import InvalidArgumentError
from .sequence import HOLE, ArrayLike, SparseSequence
from .fold import MISSING, reduce_right
from .aio import reduce_right_async, reduce_right_future

__version__ = "0.1.0"
__all__ = [
    # Core
    "reduce_right",
    "MISSING",
    "InvalidArgumentError",
    # asyncio
    "reduce_right_async",
    "reduce_right_future",
    # Sparse sequences
    "ArrayLike",
    "SparseSequence",
    "HOLE",
]
