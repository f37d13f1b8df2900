from __future__ import annotations

"""Centralised error types for evstats.

The counter itself never raises: unknown names simply read as zero.  Errors
only come from the collaborators around it (manual clocks, replay input) and
each one is JSON-serialisable via ``to_dict`` so callers can surface
machine-readable diagnostics.
"""

from typing import Any, Dict, Optional


class EvstatsError(Exception):
    """Base class for all structured evstats exceptions."""

    code: str = "EVSTATS_ERROR"
    status: str = "error"

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data or {}

    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ClockError(EvstatsError):
    code = "CLOCK_ERROR"


class ReplayError(EvstatsError):
    """Malformed replay input; ``data`` carries ``line_no`` and ``line`` when known."""

    code = "REPLAY_ERROR"
    status = "rejected"

    @property
    def line_no(self) -> Optional[int]:
        return self.data.get("line_no")
