"""Health flags for a single animal, optionally against a weight not yet saved."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from herdweigh.analysis.growth import sort_by_timestamp, whole_days_between
from herdweigh.analysis.health import detect_health_issues, detect_weight_loss
from herdweigh.core.models import HealthFlag
from herdweigh.data.stores import TransactionStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class HealthIssuesUseCase:
    def __init__(self, transactions: TransactionStore, clock: Callable[[], datetime] = _utc_now):
        self.transactions = transactions
        self.clock = clock

    async def execute(self, animal_id: str, new_weight: float | None = None) -> list[HealthFlag]:
        """
        Detect health issues for one animal.

        Args:
            animal_id: The animal to check
            new_weight: Optional weight (kg) about to be recorded. When it is a
                loss against the newest saved weigh, only that flag is returned.

        Returns:
            Health flags, empty when the animal has fewer than 2 weigh records
        """
        records = await self.transactions.find_by_animal(animal_id)
        if len(records) < 2:
            return []

        ordered = sort_by_timestamp(records)

        if new_weight is not None:
            latest = ordered[-1]
            now = self.clock()
            flag = detect_weight_loss(
                new_weight,
                latest.weight_kg,
                whole_days_between(latest.timestamp, now),
                timestamp=now,
            )
            if flag is not None:
                logger.debug("Proposed weight %.1fkg for %s is a loss", new_weight, animal_id)
                return [flag]

        return detect_health_issues(ordered)
