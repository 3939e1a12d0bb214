"""Target weight progress and ready-to-sell checks.

A missing or non-positive target is a normal state (no target set), so
every function here degrades to a neutral result instead of raising.
"""

from herdweigh.core.models import TargetProgress


def _has_target(target_weight_kg: float | None) -> bool:
    return target_weight_kg is not None and target_weight_kg > 0


def is_ready_to_sell(target_weight_kg: float | None, current_weight_kg: float) -> bool:
    """True once the current weight reaches the target."""
    if not target_weight_kg:
        return False
    return current_weight_kg >= target_weight_kg


def progress_percent(target_weight_kg: float | None, current_weight_kg: float) -> float:
    """Progress toward the target, clamped to 0-100 (0 if no target)."""
    if not _has_target(target_weight_kg):
        return 0.0
    progress = current_weight_kg / target_weight_kg * 100
    return min(100.0, max(0.0, progress))


def compute_target_progress(target_weight_kg: float | None, current_weight_kg: float) -> TargetProgress:
    """Full progress record for one animal."""
    if not _has_target(target_weight_kg):
        return TargetProgress(
            current_weight_kg=current_weight_kg,
            target_weight_kg=0.0,
            progress_percent=0.0,
            remaining_kg=0.0,
            is_ready=False,
        )

    return TargetProgress(
        current_weight_kg=current_weight_kg,
        target_weight_kg=target_weight_kg,
        progress_percent=progress_percent(target_weight_kg, current_weight_kg),
        remaining_kg=max(0.0, target_weight_kg - current_weight_kg),
        is_ready=is_ready_to_sell(target_weight_kg, current_weight_kg),
    )
