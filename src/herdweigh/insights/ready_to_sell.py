"""Rank animals by progress toward their target sale weight."""

import asyncio
import logging

from herdweigh.analysis.target import compute_target_progress
from herdweigh.core.config import settings
from herdweigh.core.models import AnimalTargetProfile, RankedEntity, ReadyToSellFilters, WeightRecord
from herdweigh.data.stores import EntityStore, TransactionStore

logger = logging.getLogger(__name__)


class ReadyToSellUseCase:
    def __init__(
        self,
        entities: EntityStore,
        transactions: TransactionStore,
        max_concurrent_requests: int | None = None,
    ):
        self.entities = entities
        self.transactions = transactions
        if max_concurrent_requests is None:
            max_concurrent_requests = settings.max_concurrent_requests
        if max_concurrent_requests < 1:
            raise ValueError(f"max_concurrent_requests must be at least 1, got {max_concurrent_requests}")
        self.max_concurrent_requests = max_concurrent_requests

    async def execute(self, tenant_id: str, filters: ReadyToSellFilters | None = None) -> list[RankedEntity]:
        """
        List animals with a target weight, closest to ready first.

        Animals without any weigh record are left out. Ties keep store order.
        """
        filters = filters or ReadyToSellFilters()
        profiles = await self.entities.find_with_target_weight(tenant_id, filters)
        candidates = [p for p in profiles if p.target_weight_kg and _matches(p, filters)]

        semaphore = asyncio.Semaphore(self.max_concurrent_requests)

        async def fetch_latest(profile: AnimalTargetProfile) -> WeightRecord | None:
            async with semaphore:
                latest = await self.transactions.find_latest(profile.animal_id, 1)
            return latest[0] if latest else None

        # gather preserves input order
        latest_records = await asyncio.gather(*[fetch_latest(p) for p in candidates])

        results: list[RankedEntity] = []
        for profile, latest in zip(candidates, latest_records):
            if latest is None:
                logger.debug("Skipping %s: no weigh records", profile.animal_id)
                continue

            progress = compute_target_progress(profile.target_weight_kg, latest.weight_kg)

            if filters.min_progress_percent is not None and progress.progress_percent < filters.min_progress_percent:
                continue

            results.append(
                RankedEntity(
                    profile=profile,
                    current_weight_kg=latest.weight_kg,
                    target_weight_kg=progress.target_weight_kg,
                    progress_percent=progress.progress_percent,
                    remaining_kg=progress.remaining_kg,
                    is_ready=progress.is_ready,
                    last_weighed=latest.timestamp,
                )
            )

        # sorted() is stable, so ties keep encounter order
        ranked = sorted(results, key=lambda r: r.progress_percent, reverse=True)
        logger.debug("Ranked %d of %d candidates for tenant %s", len(ranked), len(candidates), tenant_id)
        return ranked


def _matches(profile: AnimalTargetProfile, filters: ReadyToSellFilters) -> bool:
    if filters.species and profile.species != filters.species:
        return False
    if filters.group and profile.current_group != filters.group:
        return False
    return True
