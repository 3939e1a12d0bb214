"""Tests for the HTTP-backed stores."""

from datetime import timedelta

import httpx
import pytest
import respx
from conftest import DAY_ZERO
from tenacity import wait_none

from herdweigh.core.config import settings
from herdweigh.core.models import DateRange, ReadyToSellFilters
from herdweigh.data import remote
from herdweigh.data.remote import HerdAPIError, RemoteEntityStore, RemoteTransactionStore, RetryableError


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Retry immediately instead of backing off."""
    monkeypatch.setattr(remote, "api_get_with_retry", remote.api_get_with_retry.retry_with(wait=wait_none()))


class TestApiGet:
    """Tests for the low-level GET helper."""

    async def test_sends_api_key(self, mock_herd_api):
        mock_herd_api.get("/animals/A-001/transactions").mock(return_value=httpx.Response(200, json={"data": []}))

        await remote.api_get("/animals/A-001/transactions")

        request = mock_herd_api.calls[0].request
        assert request.headers["x-api-key"] == "test-key"

    async def test_drops_empty_params(self, mock_herd_api):
        route = mock_herd_api.get("/tenants/farm-1/animals").mock(return_value=httpx.Response(200, json={"data": []}))

        await remote.api_get("/tenants/farm-1/animals", {"species": None, "has_target_weight": "true"})

        params = route.calls[0].request.url.params
        assert params["has_target_weight"] == "true"
        assert "species" not in params

    async def test_raises_on_http_error(self, mock_herd_api):
        mock_herd_api.get("/animals/A-001/transactions").mock(return_value=httpx.Response(500))

        with pytest.raises(httpx.HTTPStatusError):
            await remote.api_get("/animals/A-001/transactions")

    async def test_raises_on_missing_data(self, mock_herd_api):
        mock_herd_api.get("/animals/A-001/transactions").mock(return_value=httpx.Response(200, json={"rows": []}))

        with pytest.raises(HerdAPIError, match="missing 'data'"):
            await remote.api_get("/animals/A-001/transactions")

    async def test_requires_base_url(self, monkeypatch):
        monkeypatch.setattr(settings, "herd_api_url", None)

        with pytest.raises(HerdAPIError, match="No herd API URL"):
            await remote.api_get("/animals/A-001/transactions")


class TestApiGetWithRetry:
    """Tests for retry behavior."""

    async def test_retries_server_errors(self, mock_herd_api, no_retry_wait):
        route = mock_herd_api.get("/animals/A-001/transactions").mock(
            side_effect=[
                httpx.Response(503, text="busy"),
                httpx.Response(200, json={"data": [{"tx_id": "t1"}]}),
            ]
        )

        result = await remote.api_get_with_retry("/animals/A-001/transactions")

        assert result == [{"tx_id": "t1"}]
        assert route.call_count == 2

    async def test_gives_up_after_max_retries(self, mock_herd_api, no_retry_wait):
        route = mock_herd_api.get("/animals/A-001/transactions").mock(return_value=httpx.Response(502))

        with pytest.raises(RetryableError, match="HTTP 502"):
            await remote.api_get_with_retry("/animals/A-001/transactions")

        assert route.call_count == remote.MAX_RETRIES

    async def test_retries_timeouts(self, mock_herd_api, no_retry_wait):
        route = mock_herd_api.get("/animals/A-001/transactions").mock(
            side_effect=[
                httpx.ReadTimeout("slow"),
                httpx.Response(200, json={"data": []}),
            ]
        )

        assert await remote.api_get_with_retry("/animals/A-001/transactions") == []
        assert route.call_count == 2

    async def test_client_errors_are_not_retried(self, mock_herd_api, no_retry_wait):
        route = mock_herd_api.get("/animals/A-404/transactions").mock(
            return_value=httpx.Response(404, text="not found")
        )

        with pytest.raises(HerdAPIError, match="HTTP 404: not found"):
            await remote.api_get_with_retry("/animals/A-404/transactions")

        assert route.call_count == 1


class TestRemoteTransactionStore:
    async def test_find_by_animal(self, mock_herd_api, sample_transactions_payload):
        mock_herd_api.get("/animals/A-001/transactions").mock(
            return_value=httpx.Response(200, json=sample_transactions_payload)
        )

        records = await RemoteTransactionStore().find_by_animal("A-001")

        assert [r.weight_kg for r in records] == [300, 330]
        assert records[0].timestamp == DAY_ZERO
        assert records[1].timestamp == DAY_ZERO + timedelta(days=31)
        assert records[0].metadata["feed_brand"] == "Acme"

    async def test_find_latest_requests_newest_first(self, mock_herd_api, sample_transactions_payload):
        route = mock_herd_api.get("/animals/A-001/transactions").mock(
            return_value=httpx.Response(200, json={"data": sample_transactions_payload["data"][1:]})
        )

        records = await RemoteTransactionStore().find_latest("A-001", 1)

        params = route.calls[0].request.url.params
        assert params["order"] == "desc"
        assert params["limit"] == "1"
        assert records[0].weight_kg == 330

    async def test_find_in_date_range(self, mock_herd_api, sample_transactions_payload):
        route = mock_herd_api.get("/tenants/farm-1/transactions").mock(
            return_value=httpx.Response(200, json=sample_transactions_payload)
        )
        date_range = DateRange(DAY_ZERO, DAY_ZERO + timedelta(days=60))

        records = await RemoteTransactionStore().find_in_date_range("farm-1", date_range)

        params = route.calls[0].request.url.params
        assert params["start"] == DAY_ZERO.isoformat()
        assert len(records) == 2

    async def test_explicit_base_url(self, sample_transactions_payload):
        with respx.mock(base_url="https://other.test") as mock:
            mock.get("/animals/A-001/transactions").mock(
                return_value=httpx.Response(200, json=sample_transactions_payload)
            )

            records = await RemoteTransactionStore(base_url="https://other.test/").find_by_animal("A-001")

        assert len(records) == 2


class TestRemoteEntityStore:
    async def test_find_with_target_weight(self, mock_herd_api):
        route = mock_herd_api.get("/tenants/farm-1/animals").mock(
            return_value=httpx.Response(
                200,
                json={"data": [{"entity_id": "A-001", "species": "cattle", "target_weight_kg": 550}]},
            )
        )

        profiles = await RemoteEntityStore().find_with_target_weight("farm-1", ReadyToSellFilters(species="cattle"))

        params = route.calls[0].request.url.params
        assert params["species"] == "cattle"
        assert "group" not in params
        assert profiles[0].animal_id == "A-001"
        assert profiles[0].target_weight_kg == 550
