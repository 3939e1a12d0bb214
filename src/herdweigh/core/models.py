"""Domain records consumed and produced by the analytics engine.

All records are immutable and created fresh per calculation. Weights are
always kilograms; timestamps are timezone-aware datetimes (UTC when the
store does not say otherwise).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from functools import total_ordering
from typing import Any


def as_utc(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC."""
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class WeightRecord:
    """A single weigh event (transaction) as seen by the calculators."""

    id: str
    animal_id: str
    timestamp: datetime
    weight_kg: float
    metadata: dict[str, Any] = field(default_factory=dict)
    tenant_id: str | None = None
    batch_id: str | None = None


@dataclass(frozen=True)
class AnimalTargetProfile:
    """An animal with (optionally) a target sale weight."""

    animal_id: str
    target_weight_kg: float | None = None
    primary_tag: str | None = None
    species: str | None = None
    current_group: str | None = None
    status: str | None = None

    def to_dict(self) -> dict:
        return {
            "animal_id": self.animal_id,
            "primary_tag": self.primary_tag,
            "species": self.species,
            "current_group": self.current_group,
            "status": self.status,
            "target_weight_kg": self.target_weight_kg,
        }


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window."""

    start: datetime
    end: datetime

    def __contains__(self, moment: datetime) -> bool:
        return as_utc(self.start) <= as_utc(moment) <= as_utc(self.end)

    def to_dict(self) -> dict:
        return {"start": _iso(self.start), "end": _iso(self.end)}


@dataclass(frozen=True)
class ReadyToSellFilters:
    species: str | None = None
    group: str | None = None
    min_progress_percent: float | None = None


# =============================================================================
# Growth
# =============================================================================


@dataclass(frozen=True)
class WeeklyGain:
    """Gain over one rolling week window (or the trailing partial window)."""

    week_start: datetime
    week_end: datetime
    weight_start: float
    weight_end: float
    gain_kg: float
    adg_kg_per_day: float

    def to_dict(self) -> dict:
        return {
            "week_start": _iso(self.week_start),
            "week_end": _iso(self.week_end),
            "weight_start": self.weight_start,
            "weight_end": self.weight_end,
            "gain_kg": self.gain_kg,
            "adg_kg_per_day": self.adg_kg_per_day,
        }


@dataclass(frozen=True)
class GrowthReport:
    total_gain_kg: float
    total_days: int
    avg_daily_gain_kg_per_day: float
    first_weight_kg: float
    first_date: datetime
    latest_weight_kg: float
    latest_date: datetime
    weekly_gains: list[WeeklyGain] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_gain_kg": self.total_gain_kg,
            "total_days": self.total_days,
            "avg_daily_gain_kg_per_day": self.avg_daily_gain_kg_per_day,
            "first_weight_kg": self.first_weight_kg,
            "first_date": _iso(self.first_date),
            "latest_weight_kg": self.latest_weight_kg,
            "latest_date": _iso(self.latest_date),
            "weekly_gains": [w.to_dict() for w in self.weekly_gains],
        }


# =============================================================================
# Health
# =============================================================================


class HealthFlagKind(Enum):
    WEIGHT_LOSS = "weight_loss"
    CONSECUTIVE_LOSS = "consecutive_loss"


@total_ordering
class Severity(Enum):
    """Health flag severity, ordered by increasing risk."""

    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]

    def __lt__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.level < other.level


_SEVERITY_LEVELS = {Severity.MINOR: 1, Severity.MODERATE: 2, Severity.SEVERE: 3}


@dataclass(frozen=True)
class HealthFlag:
    kind: HealthFlagKind
    severity: Severity
    previous_weight_kg: float
    current_weight_kg: float
    weight_change_kg: float  # negative = loss
    weight_change_percent: float  # negative = loss
    days_between: int
    timestamp: datetime
    message: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "previous_weight_kg": self.previous_weight_kg,
            "current_weight_kg": self.current_weight_kg,
            "weight_change_kg": self.weight_change_kg,
            "weight_change_percent": self.weight_change_percent,
            "days_between": self.days_between,
            "timestamp": _iso(self.timestamp),
            "message": self.message,
        }


# =============================================================================
# Target weight
# =============================================================================


@dataclass(frozen=True)
class TargetProgress:
    current_weight_kg: float
    target_weight_kg: float
    progress_percent: float  # 0-100
    remaining_kg: float  # never negative
    is_ready: bool

    def to_dict(self) -> dict:
        return {
            "current_weight_kg": self.current_weight_kg,
            "target_weight_kg": self.target_weight_kg,
            "progress_percent": self.progress_percent,
            "remaining_kg": self.remaining_kg,
            "is_ready": self.is_ready,
        }


@dataclass(frozen=True)
class RankedEntity:
    """An animal in the ready-to-sell ranking."""

    profile: AnimalTargetProfile
    current_weight_kg: float
    target_weight_kg: float
    progress_percent: float
    remaining_kg: float
    is_ready: bool
    last_weighed: datetime

    @property
    def animal_id(self) -> str:
        return self.profile.animal_id

    def to_dict(self) -> dict:
        return {
            **self.profile.to_dict(),
            "current_weight_kg": self.current_weight_kg,
            "target_weight_kg": self.target_weight_kg,
            "progress_percent": self.progress_percent,
            "remaining_kg": self.remaining_kg,
            "is_ready": self.is_ready,
            "last_weighed": _iso(self.last_weighed),
        }


# =============================================================================
# Feed performance
# =============================================================================


@dataclass(frozen=True)
class FeedPerformance:
    feed_type: str
    feed_brand: str | None
    animal_count: int
    total_transactions: int
    avg_adg: float
    avg_total_gain: float
    avg_days_on_feed: float
    performance_rank: int

    def to_dict(self) -> dict:
        return {
            "feed_type": self.feed_type,
            "feed_brand": self.feed_brand,
            "animal_count": self.animal_count,
            "total_transactions": self.total_transactions,
            "avg_adg": self.avg_adg,
            "avg_total_gain": self.avg_total_gain,
            "avg_days_on_feed": self.avg_days_on_feed,
            "performance_rank": self.performance_rank,
        }


@dataclass(frozen=True)
class FeedComparisonResult:
    metrics: list[FeedPerformance]
    date_range: DateRange
    total_animals: int

    def to_dict(self) -> dict:
        return {
            "metrics": [m.to_dict() for m in self.metrics],
            "date_range": self.date_range.to_dict(),
            "total_animals": self.total_animals,
        }
