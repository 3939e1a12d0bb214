"""
Compare growth performance across feed types.

Transactions in a date range are grouped by the feed-type metadata key,
then by animal. Each animal with at least two weighs spanning one or more
whole days contributes its ADG, total gain and days on feed to its feed
type's averages. Feed types are ranked by mean ADG, best first.
"""

import logging
from collections import defaultdict

from herdweigh.analysis.growth import compute_adg, sort_by_timestamp, whole_days_between
from herdweigh.core.config import settings
from herdweigh.core.models import DateRange, FeedComparisonResult, FeedPerformance, WeightRecord
from herdweigh.data.stores import TransactionStore

logger = logging.getLogger(__name__)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class FeedPerformanceUseCase:
    def __init__(
        self,
        transactions: TransactionStore,
        feed_type_key: str | None = None,
        feed_brand_key: str | None = None,
    ):
        self.transactions = transactions
        self.feed_type_key = settings.feed_type_key if feed_type_key is None else feed_type_key
        self.feed_brand_key = settings.feed_brand_key if feed_brand_key is None else feed_brand_key

    async def execute(self, tenant_id: str, date_range: DateRange) -> FeedComparisonResult:
        records = await self.transactions.find_in_date_range(tenant_id, date_range)

        # Group by feed type (insertion order = first appearance)
        by_feed: dict[str, list[WeightRecord]] = defaultdict(list)
        for record in records:
            feed_type = record.metadata.get(self.feed_type_key)
            if feed_type:
                by_feed[feed_type].append(record)

        summaries = [self._summarize(feed_type, feed_records) for feed_type, feed_records in by_feed.items()]

        # Rank by ADG, best first
        summaries.sort(key=lambda s: s["avg_adg"], reverse=True)
        metrics = [FeedPerformance(**summary, performance_rank=rank) for rank, summary in enumerate(summaries, 1)]

        total_animals = len({r.animal_id for r in records})
        logger.debug(
            "Compared %d feed types over %d transactions (%d animals)", len(metrics), len(records), total_animals
        )

        return FeedComparisonResult(metrics=metrics, date_range=date_range, total_animals=total_animals)

    def _summarize(self, feed_type: str, records: list[WeightRecord]) -> dict:
        by_animal: dict[str, list[WeightRecord]] = defaultdict(list)
        for record in records:
            by_animal[record.animal_id].append(record)

        adg_values: list[float] = []
        total_gains: list[float] = []
        days_on_feed: list[float] = []

        for animal_records in by_animal.values():
            if len(animal_records) < 2:
                continue

            ordered = sort_by_timestamp(animal_records)
            first = ordered[0]
            last = ordered[-1]
            days = whole_days_between(first.timestamp, last.timestamp)

            if days > 0:
                adg_values.append(compute_adg(first.weight_kg, last.weight_kg, days))
                total_gains.append(last.weight_kg - first.weight_kg)
                days_on_feed.append(days)

        return {
            "feed_type": feed_type,
            # Brand is read from the first transaction, not aggregated
            "feed_brand": records[0].metadata.get(self.feed_brand_key),
            "animal_count": len(by_animal),
            "total_transactions": len(records),
            "avg_adg": _mean(adg_values),
            "avg_total_gain": _mean(total_gains),
            "avg_days_on_feed": _mean(days_on_feed),
        }
