"""Pacing and statistics for replaying a recorded image sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

__all__ = ["TimingSummary", "frame_delay", "timing_summary"]


@dataclass(frozen=True)
class TimingSummary:
    """Per-frame tracking time statistics, in seconds."""

    median: float
    mean: float
    total: float
    count: int

    def __str__(self) -> str:
        return f"median tracking time: {self.median}\nmean tracking time: {self.mean}"


def frame_delay(timestamps: Sequence[float], index: int, elapsed: float) -> float:
    """Seconds to wait after frame ``index`` so playback follows the recording rate.

    The gap is measured to the next frame, or from the previous one for the last
    frame; a lone frame has no gap. Nothing is waited when tracking took longer.
    """
    n = len(timestamps)
    if not 0 <= index < n:
        raise IndexError(f"frame index {index} out of range for {n} timestamps")
    if index < n - 1:
        gap = timestamps[index + 1] - timestamps[index]
    elif index > 0:
        gap = timestamps[index] - timestamps[index - 1]
    else:
        gap = 0.0
    return gap - elapsed if elapsed < gap else 0.0


def timing_summary(times: Sequence[float]) -> TimingSummary:
    """Summarise tracking times; the median is the upper middle element."""
    ordered = sorted(times)
    if not ordered:
        raise ValueError("no tracking times to summarise")
    total = sum(ordered)
    return TimingSummary(
        median=ordered[len(ordered) // 2],
        mean=total / len(ordered),
        total=total,
        count=len(ordered),
    )