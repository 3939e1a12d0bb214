"""
Growth calculations from an animal's weigh history.

Provides:
- Average Daily Gain (ADG) between two weights
- Rolling weekly gains
- Total gain from first to latest weigh
- A combined growth report

Weeks are rolling windows anchored at the first weigh of each window, not
calendar weeks. A window closes when a weigh lands 7 or more whole days
after the window start; the closed window ends on the weigh *before* the
one that crossed the threshold, and the crossing weigh opens the next
window.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from herdweigh.core.models import GrowthReport, WeeklyGain, WeightRecord, as_utc

ONE_DAY = timedelta(days=1)

# Days in a closed rolling week (also the ADG denominator for closed weeks)
WEEK_DAYS = 7


class NoTransactionsError(ValueError):
    """Raised when a growth report is requested for an animal with no weigh records."""

    def __init__(self, animal_id: str | None = None):
        self.animal_id = animal_id
        if animal_id is None:
            message = "Cannot calculate growth metrics without transactions"
        else:
            message = f"No transactions found for animal {animal_id}"
        super().__init__(message)


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Elapsed whole days between two moments (floor, negative if reversed)."""
    return (as_utc(later) - as_utc(earlier)) // ONE_DAY


def sort_by_timestamp(records: Iterable[WeightRecord]) -> list[WeightRecord]:
    """Return a new list sorted oldest-first (stable for equal timestamps)."""
    return sorted(records, key=lambda r: as_utc(r.timestamp))


def compute_adg(weight_start: float, weight_end: float, days: float) -> float:
    """
    Calculate Average Daily Gain.

    Args:
        weight_start: Starting weight in kg
        weight_end: Ending weight in kg
        days: Days elapsed between the two weights

    Returns:
        ADG in kg/day, or 0 when days <= 0
    """
    if days <= 0:
        return 0.0
    return (weight_end - weight_start) / days


def compute_weekly_gains(records: Sequence[WeightRecord]) -> list[WeeklyGain]:
    """
    Calculate gains per rolling week from an animal's weigh history.

    Args:
        records: Weigh records for one animal, in any order

    Returns:
        One WeeklyGain per closed week, plus a trailing partial week when
        the last window spans at least one day. Empty for fewer than 2 records.
    """
    if len(records) < 2:
        return []

    ordered = sort_by_timestamp(records)

    weekly_gains: list[WeeklyGain] = []
    week_start = ordered[0].timestamp
    week_start_weight = ordered[0].weight_kg

    for i in range(1, len(ordered)):
        current = ordered[i]
        days_since_week_start = whole_days_between(week_start, current.timestamp)

        if days_since_week_start >= WEEK_DAYS:
            week_end_weight = ordered[i - 1].weight_kg
            weekly_gains.append(
                WeeklyGain(
                    week_start=week_start,
                    week_end=week_start + timedelta(days=WEEK_DAYS - 1),
                    weight_start=week_start_weight,
                    weight_end=week_end_weight,
                    gain_kg=week_end_weight - week_start_weight,
                    adg_kg_per_day=compute_adg(week_start_weight, week_end_weight, WEEK_DAYS),
                )
            )

            # Crossing weigh opens the next window
            week_start = current.timestamp
            week_start_weight = current.weight_kg

    # Trailing partial week uses its actual span
    last = ordered[-1]
    days_since_week_start = whole_days_between(week_start, last.timestamp)
    if days_since_week_start > 0:
        weekly_gains.append(
            WeeklyGain(
                week_start=week_start,
                week_end=last.timestamp,
                weight_start=week_start_weight,
                weight_end=last.weight_kg,
                gain_kg=last.weight_kg - week_start_weight,
                adg_kg_per_day=compute_adg(week_start_weight, last.weight_kg, days_since_week_start),
            )
        )

    return weekly_gains


def compute_total_gain(records: Sequence[WeightRecord]) -> float:
    """Latest weight minus first weight (0 for fewer than 2 records)."""
    if len(records) < 2:
        return 0.0

    ordered = sort_by_timestamp(records)
    return ordered[-1].weight_kg - ordered[0].weight_kg


def compute_growth_report(records: Sequence[WeightRecord]) -> GrowthReport:
    """
    Calculate a full growth report for one animal.

    Raises:
        NoTransactionsError: If records is empty
    """
    if not records:
        raise NoTransactionsError()

    ordered = sort_by_timestamp(records)
    first = ordered[0]
    last = ordered[-1]

    total_days = whole_days_between(first.timestamp, last.timestamp)

    return GrowthReport(
        total_gain_kg=last.weight_kg - first.weight_kg,
        total_days=total_days,
        avg_daily_gain_kg_per_day=compute_adg(first.weight_kg, last.weight_kg, total_days),
        first_weight_kg=first.weight_kg,
        first_date=first.timestamp,
        latest_weight_kg=last.weight_kg,
        latest_date=last.timestamp,
        weekly_gains=compute_weekly_gains(ordered),
    )
