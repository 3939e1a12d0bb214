"""Store contracts the insights depend on.

Stores do I/O and hand back plain records; they make no ordering promise,
the calculators always sort.
"""

from typing import Protocol

from herdweigh.core.models import AnimalTargetProfile, DateRange, ReadyToSellFilters, WeightRecord


class TransactionStore(Protocol):
    async def find_by_animal(self, animal_id: str) -> list[WeightRecord]:
        """All weigh records for one animal."""
        ...

    async def find_latest(self, animal_id: str, limit: int = 1) -> list[WeightRecord]:
        """The newest `limit` weigh records for one animal, newest first."""
        ...

    async def find_in_date_range(self, tenant_id: str, date_range: DateRange) -> list[WeightRecord]:
        """All weigh records for a tenant inside an inclusive date range."""
        ...


class EntityStore(Protocol):
    async def find_with_target_weight(
        self,
        tenant_id: str,
        filters: ReadyToSellFilters | None = None,
    ) -> list[AnimalTargetProfile]:
        """Animals with a target weight configured."""
        ...
