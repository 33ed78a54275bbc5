"""
Errors raised by the folds.

Every argument problem, whether a bad sequence, a non-callable step or an
empty sequence with no seed, surfaces as ``InvalidArgumentError`` before any
step runs. Nothing is raised once iteration has started; step errors belong
to the caller.
"""

from __future__ import annotations

from typing import Any


class InvalidArgumentError(TypeError):
    """Raised synchronously when a fold is started with unusable arguments."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


def type_name(value: Any) -> str:
    if value is None:
        return "None"
    return type(value).__name__


__all__ = ["InvalidArgumentError"]
