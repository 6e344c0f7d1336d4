"""Exception hierarchy for the time-value engine.

Expected edge cases (no transactions, zero principal, cash flows without a
sign change) are reported through zero-valued or ``None`` results by the
public helpers. These exceptions cover the strict entry points and inputs
that cannot produce a meaningful figure at all.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class EngineError(Exception):
    """Base class for every error raised by ``timevalue``."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class InvalidInputError(EngineError, ValueError):
    """Malformed transaction records or arguments."""

    def __init__(self, errors: List[str], context: Optional[Dict[str, Any]] = None):
        super().__init__("; ".join(errors), context=context)
        self.errors = errors


class ConvergenceError(EngineError):
    """The rate solver exhausted its iteration budget without finding a root."""

    def __init__(self, message: str, iterations: int, last_rate: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.iterations = iterations
        self.last_rate = last_rate


class NoSignChangeError(EngineError):
    """Cash flows (or the search bracket) cannot contain a root."""
