"""Growth report for a single animal."""

import logging

from herdweigh.analysis.growth import NoTransactionsError, compute_growth_report
from herdweigh.core.models import GrowthReport
from herdweigh.data.stores import TransactionStore

logger = logging.getLogger(__name__)


class GrowthMetricsUseCase:
    def __init__(self, transactions: TransactionStore):
        self.transactions = transactions

    async def execute(self, animal_id: str) -> GrowthReport:
        """
        Build the growth report for one animal.

        Raises:
            NoTransactionsError: If the animal has no weigh records
        """
        records = await self.transactions.find_by_animal(animal_id)
        if not records:
            raise NoTransactionsError(animal_id)

        logger.debug("Computing growth report for %s from %d records", animal_id, len(records))
        return compute_growth_report(records)
