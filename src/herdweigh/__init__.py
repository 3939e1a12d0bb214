"""Livestock growth and health analytics.

Turns an animal's weigh history into growth, health and target-weight
insights.

Subpackages:
- herdweigh.core: Configuration, domain records, unit display
- herdweigh.analysis: Growth, health and target-weight calculations
- herdweigh.insights: Use cases that fetch from stores and run the analysis
- herdweigh.data: Store contracts plus local and HTTP store adapters
- herdweigh.cli: Command-line interface
"""

# Re-export common items for convenience
from herdweigh.analysis import (
    NoTransactionsError,
    compute_adg,
    compute_growth_report,
    detect_health_issues,
    compute_target_progress,
)
from herdweigh.core import settings
from herdweigh.insights import (
    FeedPerformanceUseCase,
    GrowthMetricsUseCase,
    HealthIssuesUseCase,
    ReadyToSellUseCase,
)

__all__ = [
    "settings",
    "NoTransactionsError",
    "compute_adg",
    "compute_growth_report",
    "detect_health_issues",
    "compute_target_progress",
    "FeedPerformanceUseCase",
    "GrowthMetricsUseCase",
    "HealthIssuesUseCase",
    "ReadyToSellUseCase",
]

__version__ = "0.1.0"
