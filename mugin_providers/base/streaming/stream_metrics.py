"""Streaming metrics collected by a vendor adapter for one chat turn."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters and timings for a single vendor stream.

    ``emitted`` counts canonical events produced, ``dropped`` counts native
    events with no mapping. ``terminal_event`` is the name of the terminal
    canonical event, ``None`` when the vendor stream ended without one.
    """

    emitted: int = 0
    dropped: int = 0
    deltas: int = 0
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    terminal_event: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emitted": self.emitted,
            "dropped": self.dropped,
            "deltas": self.deltas,
            "time_to_first_delta_ms": self.time_to_first_delta_ms,
            "total_duration_ms": self.total_duration_ms,
            "terminal_event": self.terminal_event,
        }


__all__ = ["StreamMetrics"]
