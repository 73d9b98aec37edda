"""
Session metrics: duration по сегментам, rate per hour, rollover-safe
счётчики прогресса и top-N разбивки.
"""

from goldph.metrics.duration import (
    duration_so_far,
    finalize_duration,
    fold_open_segment,
    open_segment,
    pause_clock,
    resume_clock,
    segment_length,
)
from goldph.metrics.progress import (
    TopBreakdown,
    add_gain,
    observe_rollover,
    observe_source,
    rollover_delta,
    top_contributors,
)
from goldph.metrics.snapshot import (
    MetricsConfig,
    MetricsSnapshot,
    ProgressSummary,
    compute_metrics,
)

__all__ = [
    # Duration
    "duration_so_far",
    "segment_length",
    "fold_open_segment",
    "open_segment",
    "pause_clock",
    "resume_clock",
    "finalize_duration",
    # Progress
    "rollover_delta",
    "observe_rollover",
    "observe_source",
    "add_gain",
    "TopBreakdown",
    "top_contributors",
    # Snapshot
    "MetricsConfig",
    "MetricsSnapshot",
    "ProgressSummary",
    "compute_metrics",
]
