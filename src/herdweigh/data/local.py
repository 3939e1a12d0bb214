"""In-memory stores, optionally loaded from a local JSON export.

Export shape:

    {
      "animals": [ { "entity_id": ..., "target_weight_kg": ..., ... } ],
      "transactions": [ { "tx_id": ..., "entity_id": ..., "weight_kg": ..., ... } ]
    }
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from herdweigh.core.models import AnimalTargetProfile, DateRange, ReadyToSellFilters, WeightRecord, as_utc
from herdweigh.data.records import normalize_animal, normalize_transaction

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "Active"


class InMemoryStore:
    """Transaction and entity store over in-memory lists."""

    def __init__(
        self,
        transactions: Iterable[WeightRecord] = (),
        animals: Iterable[AnimalTargetProfile] = (),
    ):
        self.transactions = list(transactions)
        self.animals = list(animals)

    async def find_by_animal(self, animal_id: str) -> list[WeightRecord]:
        return [t for t in self.transactions if t.animal_id == animal_id]

    async def find_latest(self, animal_id: str, limit: int = 1) -> list[WeightRecord]:
        records = [t for t in self.transactions if t.animal_id == animal_id]
        records.sort(key=lambda t: as_utc(t.timestamp), reverse=True)
        return records[:limit]

    async def find_in_date_range(self, tenant_id: str, date_range: DateRange) -> list[WeightRecord]:
        return [
            t
            for t in self.transactions
            if (t.tenant_id is None or t.tenant_id == tenant_id) and t.timestamp in date_range
        ]

    async def find_with_target_weight(
        self,
        tenant_id: str,
        filters: ReadyToSellFilters | None = None,
    ) -> list[AnimalTargetProfile]:
        # Animals carry no tenant in the local export; the whole file is one tenant
        results = []
        for animal in self.animals:
            if not animal.target_weight_kg or animal.target_weight_kg <= 0:
                continue
            if animal.status is not None and animal.status != ACTIVE_STATUS:
                continue
            if filters and filters.species and animal.species != filters.species:
                continue
            if filters and filters.group and animal.current_group != filters.group:
                continue
            results.append(animal)
        return results


def load_json_store(path: Path) -> InMemoryStore:
    """Load an InMemoryStore from a JSON export file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a record is malformed
    """
    with open(path) as f:
        data = json.load(f)

    transactions = [normalize_transaction(t) for t in data.get("transactions", [])]
    animals = [normalize_animal(a) for a in data.get("animals", [])]

    logger.debug("Loaded %d animals and %d transactions from %s", len(animals), len(transactions), path)
    return InMemoryStore(transactions=transactions, animals=animals)
