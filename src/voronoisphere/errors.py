from __future__ import annotations

import operator
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    INSUFFICIENT_INPUT = "insufficient_input"
    INVALID_TOLERANCE = "invalid_tolerance"
    INCONSISTENT_HULL_OUTPUT = "inconsistent_hull_output"
    INDEX_OUT_OF_RANGE = "index_out_of_range"


class VoronoiSphereError(Exception):
    """
    Base class for every error raised by this package.
    `kind` lets callers branch without isinstance chains.
    """
    kind: ErrorKind


class InsufficientInputError(VoronoiSphereError, ValueError):
    kind = ErrorKind.INSUFFICIENT_INPUT

    def __init__(self, num_sites: int, minimum: int = 4):
        self.num_sites = int(num_sites)
        self.minimum = int(minimum)
        super().__init__(f"need at least {self.minimum} sites, got {self.num_sites}")


class InvalidToleranceError(VoronoiSphereError, ValueError):
    kind = ErrorKind.INVALID_TOLERANCE

    def __init__(self, eps: float):
        self.eps = eps
        super().__init__(f"eps must be positive, got {eps!r}")


class InconsistentHullOutputError(VoronoiSphereError, RuntimeError):
    kind = ErrorKind.INCONSISTENT_HULL_OUTPUT

    def __init__(
        self,
        reason: str,
        *,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        site_index: Optional[int] = None,
    ):
        self.reason = reason
        self.expected = expected
        self.actual = actual
        self.site_index = site_index

        msg = reason
        if expected is not None or actual is not None:
            msg += f" (expected={expected}, actual={actual})"
        if site_index is not None:
            msg += f" (site_index={site_index})"
        super().__init__(msg)


class IndexOutOfRangeError(VoronoiSphereError, IndexError):
    """
    `index` was outside `[0, size)` for the collection named by `what`.
    size is None when the domain is not a range (e.g. the vertex set of a triangle).
    """
    kind = ErrorKind.INDEX_OUT_OF_RANGE

    def __init__(self, what: str, index: int, size: Optional[int], message: Optional[str] = None):
        self.what = what
        self.index = index
        self.size = size
        if message is None:
            message = f"{what} index {index} out of range [0, {size})"
        super().__init__(message)


def check_index(what: str, index: int, size: int) -> int:
    """
    Validate a non-negative integer index (no Python-style negative wrapping).
    Floats raise TypeError instead of being truncated.
    """
    i = operator.index(index)
    if i < 0 or i >= int(size):
        raise IndexOutOfRangeError(what, i, int(size))
    return i
