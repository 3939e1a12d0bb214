"""Pure growth, health and target-weight calculations.

Nothing here does I/O; every function takes in-memory records and returns
fresh results.
"""

from herdweigh.analysis.growth import (
    NoTransactionsError,
    compute_adg,
    compute_growth_report,
    compute_total_gain,
    compute_weekly_gains,
    whole_days_between,
)
from herdweigh.analysis.health import (
    classify_loss,
    detect_consecutive_losses,
    detect_health_issues,
    detect_weight_loss,
)
from herdweigh.analysis.target import (
    compute_target_progress,
    is_ready_to_sell,
    progress_percent,
)

__all__ = [
    # growth
    "NoTransactionsError",
    "compute_adg",
    "compute_growth_report",
    "compute_total_gain",
    "compute_weekly_gains",
    "whole_days_between",
    # health
    "classify_loss",
    "detect_consecutive_losses",
    "detect_health_issues",
    "detect_weight_loss",
    # target
    "compute_target_progress",
    "is_ready_to_sell",
    "progress_percent",
]
