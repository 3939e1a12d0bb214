"""Core module - configuration, domain records and unit display."""

from herdweigh.core import models, units
from herdweigh.core.config import settings
from herdweigh.core.models import (
    AnimalTargetProfile,
    DateRange,
    FeedComparisonResult,
    FeedPerformance,
    GrowthReport,
    HealthFlag,
    HealthFlagKind,
    RankedEntity,
    ReadyToSellFilters,
    Severity,
    TargetProgress,
    WeeklyGain,
    WeightRecord,
)
from herdweigh.core.units import (
    format_adg,
    format_percent,
    format_weight,
    get_weight_unit,
    is_imperial,
    weight_kg_to_display,
)

__all__ = [
    "models",
    "units",
    "settings",
    # Records
    "AnimalTargetProfile",
    "DateRange",
    "FeedComparisonResult",
    "FeedPerformance",
    "GrowthReport",
    "HealthFlag",
    "HealthFlagKind",
    "RankedEntity",
    "ReadyToSellFilters",
    "Severity",
    "TargetProgress",
    "WeeklyGain",
    "WeightRecord",
    # Unit conversion helpers
    "format_adg",
    "format_percent",
    "format_weight",
    "get_weight_unit",
    "is_imperial",
    "weight_kg_to_display",
]
