"""
Error taxonomy for the learning engine.

Every error is local and recoverable by the caller. The ``kind`` attribute is
stable and is what the HTTP layer maps to a status code.
"""
from __future__ import annotations

import math
from typing import Any


class LearningError(Exception):
    """Base class for all learning engine errors."""

    kind: str = "LearningError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class InvalidConfig(LearningError):
    """Bad creation parameters (strategy, epsilon, arm count, seed point)."""

    kind = "InvalidConfig"


class InvalidArm(LearningError):
    """Arm index outside ``[0, num_arms)``."""

    kind = "InvalidArm"


class InvalidValue(LearningError):
    """Non-finite numeric input."""

    kind = "InvalidValue"


class NotFound(LearningError):
    """Unknown or removed identifier."""

    kind = "NotFound"


class NoPendingSuggestion(LearningError):
    """Optimizer observation without an outstanding proposal."""

    kind = "NoPendingSuggestion"


def require_finite(value: Any, name: str = "value") -> float:
    """Return ``value`` as a float or raise InvalidValue if it is not a finite number."""
    if isinstance(value, bool):
        raise InvalidValue(f"{name} must be a number, got bool")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidValue(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number):
        raise InvalidValue(f"{name} must be finite, got {number}")
    return number
