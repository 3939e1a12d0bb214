"""Shared test fixtures."""

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import respx

# Add src/ to path so tests can import herdweigh
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from herdweigh.core.config import settings  # noqa: E402
from herdweigh.core.models import WeightRecord  # noqa: E402

HERD_API_URL = "https://herd.test/api/v1"

DAY_ZERO = datetime(2026, 1, 1, 8, 0, tzinfo=UTC)


def make_record(
    day: float,
    weight: float,
    animal_id: str = "A-001",
    metadata: dict | None = None,
    tenant_id: str | None = "farm-1",
) -> WeightRecord:
    """Create a weigh record `day` days after DAY_ZERO."""
    return WeightRecord(
        id=f"{animal_id}-{day}",
        animal_id=animal_id,
        timestamp=DAY_ZERO + timedelta(days=day),
        weight_kg=weight,
        metadata=metadata or {},
        tenant_id=tenant_id,
    )


@pytest.fixture
def records():
    """Factory for a weigh history from (day, weight) pairs."""

    def _records(*points: tuple[float, float], animal_id: str = "A-001") -> list[WeightRecord]:
        return [make_record(day, weight, animal_id=animal_id) for day, weight in points]

    return _records


@pytest.fixture
def mock_herd_api(monkeypatch):
    """Mock herd-records API responses."""
    monkeypatch.setattr(settings, "herd_api_url", HERD_API_URL)
    monkeypatch.setattr(settings, "herd_api_key", "test-key")
    with respx.mock(base_url=HERD_API_URL) as mock:
        yield mock


@pytest.fixture
def metric_units(monkeypatch):
    monkeypatch.setattr(settings, "display_units", "metric")


@pytest.fixture
def imperial_units(monkeypatch):
    monkeypatch.setattr(settings, "display_units", "imperial")


@pytest.fixture
def sample_transactions_payload():
    """Sample herd API transaction list response."""
    return {
        "data": [
            {
                "tx_id": "t1",
                "entity_id": "A-001",
                "tenant_id": "farm-1",
                "batch_id": "b1",
                "weight_kg": 300,
                "timestamp": "2026-01-01T08:00:00Z",
                "custom_field_values": {"feed_type": "Grower Pellets", "feed_brand": "Acme"},
            },
            {
                "tx_id": "t2",
                "entity_id": "A-001",
                "tenant_id": "farm-1",
                "batch_id": "b2",
                "weight_kg": 330,
                "timestamp": 1769932800000,  # 2026-02-01T08:00:00Z
                "custom_field_values": {"feed_type": "Grower Pellets", "feed_brand": "Acme"},
            },
        ]
    }
