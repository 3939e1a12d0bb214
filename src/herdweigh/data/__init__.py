"""Data module - store contracts and the shipped store adapters."""

from herdweigh.data.local import InMemoryStore, load_json_store
from herdweigh.data.records import normalize_animal, normalize_transaction, parse_timestamp
from herdweigh.data.remote import (
    HerdAPIError,
    RemoteEntityStore,
    RemoteTransactionStore,
    RetryableError,
)
from herdweigh.data.stores import EntityStore, TransactionStore

__all__ = [
    "EntityStore",
    "TransactionStore",
    "InMemoryStore",
    "load_json_store",
    "RemoteEntityStore",
    "RemoteTransactionStore",
    "HerdAPIError",
    "RetryableError",
    "normalize_animal",
    "normalize_transaction",
    "parse_timestamp",
]
