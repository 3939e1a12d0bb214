"""
Health flags derived from weight patterns.

- Weight loss between consecutive weighs, graded by percent lost
- Runs of consecutive losses (three weighs each lower than the last)
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from herdweigh.analysis.growth import sort_by_timestamp, whole_days_between
from herdweigh.core.models import HealthFlag, HealthFlagKind, Severity, WeightRecord

# Loss thresholds (% of previous weight)
SEVERE_LOSS_PERCENT = 5.0  # above this = severe
MODERATE_LOSS_PERCENT = 2.0  # above this = moderate, otherwise minor

# Strict decreases in a row that trigger a consecutive-loss flag
CONSECUTIVE_LOSS_STREAK = 2

CONSECUTIVE_LOSS_MESSAGE = "Multiple consecutive weight losses detected - immediate attention required"


def classify_loss(loss_percent: float) -> Severity:
    """Grade a weight loss percentage."""
    if loss_percent > SEVERE_LOSS_PERCENT:
        return Severity.SEVERE
    elif loss_percent > MODERATE_LOSS_PERCENT:
        return Severity.MODERATE
    else:
        return Severity.MINOR


def detect_weight_loss(
    current: float,
    previous: float,
    days_between: int,
    timestamp: datetime | None = None,
) -> HealthFlag | None:
    """
    Detect weight loss between two weighs.

    Args:
        current: Current weight in kg
        previous: Previous weight in kg
        days_between: Whole days between the two weighs
        timestamp: When the current weight was taken (defaults to now)

    Returns:
        A weight_loss HealthFlag, or None if the weight held or went up
    """
    if current >= previous:
        return None

    loss = previous - current
    loss_percent = loss / previous * 100

    return HealthFlag(
        kind=HealthFlagKind.WEIGHT_LOSS,
        severity=classify_loss(loss_percent),
        previous_weight_kg=previous,
        current_weight_kg=current,
        weight_change_kg=-loss,
        weight_change_percent=-loss_percent,
        days_between=days_between,
        timestamp=timestamp if timestamp is not None else datetime.now(UTC),
        message=f"Weight decreased from {previous:.1f}kg to {current:.1f}kg ({loss_percent:.1f}% loss)",
    )


def detect_consecutive_losses(records: Sequence[WeightRecord]) -> bool:
    """True if any three consecutive weighs are each lower than the last."""
    if len(records) < 3:
        return False

    ordered = sort_by_timestamp(records)

    streak = 0
    for previous, current in zip(ordered, ordered[1:]):
        if current.weight_kg < previous.weight_kg:
            streak += 1
            if streak >= CONSECUTIVE_LOSS_STREAK:
                return True
        else:
            streak = 0

    return False


def detect_health_issues(records: Sequence[WeightRecord]) -> list[HealthFlag]:
    """
    Detect all health issues in an animal's weigh history.

    Returns per-pair weight-loss flags in chronological order, followed by a
    single consecutive-loss flag when a loss streak is present.
    """
    if len(records) < 2:
        return []

    ordered = sort_by_timestamp(records)
    flags: list[HealthFlag] = []

    for previous, current in zip(ordered, ordered[1:]):
        flag = detect_weight_loss(
            current.weight_kg,
            previous.weight_kg,
            whole_days_between(previous.timestamp, current.timestamp),
            timestamp=current.timestamp,
        )
        if flag is not None:
            flags.append(flag)

    if detect_consecutive_losses(ordered):
        flags.append(_consecutive_loss_flag(ordered[-2], ordered[-1]))

    return flags


def _consecutive_loss_flag(previous: WeightRecord, last: WeightRecord) -> HealthFlag:
    # Always severe, measured over the final pair
    change = last.weight_kg - previous.weight_kg
    return HealthFlag(
        kind=HealthFlagKind.CONSECUTIVE_LOSS,
        severity=Severity.SEVERE,
        previous_weight_kg=previous.weight_kg,
        current_weight_kg=last.weight_kg,
        weight_change_kg=change,
        weight_change_percent=change / previous.weight_kg * 100,
        days_between=whole_days_between(previous.timestamp, last.timestamp),
        timestamp=last.timestamp,
        message=CONSECUTIVE_LOSS_MESSAGE,
    )
