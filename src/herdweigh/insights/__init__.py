"""Use cases - fetch from the stores, then delegate to herdweigh.analysis."""

from herdweigh.insights.feed_performance import FeedPerformanceUseCase
from herdweigh.insights.growth_metrics import GrowthMetricsUseCase
from herdweigh.insights.health_issues import HealthIssuesUseCase
from herdweigh.insights.ready_to_sell import ReadyToSellUseCase

__all__ = [
    "FeedPerformanceUseCase",
    "GrowthMetricsUseCase",
    "HealthIssuesUseCase",
    "ReadyToSellUseCase",
]
