"""HTTP-backed stores for a remote herd-records API.

Every endpoint answers with a JSON envelope ``{"data": [...]}`` holding raw
transaction or animal dicts (see herdweigh.data.records).
"""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from herdweigh.core.config import settings
from herdweigh.core.models import AnimalTargetProfile, DateRange, ReadyToSellFilters, WeightRecord
from herdweigh.data.records import normalize_animal, normalize_transaction

logger = logging.getLogger(__name__)

API_TIMEOUT_SECONDS = 30

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10


# =============================================================================
# Exceptions
# =============================================================================


class RetryableError(Exception):
    """Transient error that should be retried (timeouts, connection errors, 5xx)."""

    pass


class HerdAPIError(Exception):
    """Non-retryable error from the herd-records API."""

    pass


# =============================================================================
# Client Functions
# =============================================================================


def _base_url(base_url: str | None) -> str:
    url = base_url or settings.herd_api_url
    if not url:
        raise HerdAPIError("No herd API URL configured (set HERD_API_URL)")
    return url.rstrip("/")


async def api_get(
    path: str,
    params: dict | None = None,
    base_url: str | None = None,
    api_key: str | None = None,
) -> list[dict]:
    """Make a single GET request and return the ``data`` list.

    This is the low-level function that makes a single request without retry.
    Prefer `api_get_with_retry()` which handles transient errors.

    Raises:
        httpx.HTTPStatusError: If the HTTP request fails
        HerdAPIError: If the response has no ``data`` list
    """
    headers = {"Accept": "application/json"}
    key = api_key or settings.herd_api_key
    if key:
        headers["x-api-key"] = key

    async with httpx.AsyncClient() as client:
        response = await client.get(
            f"{_base_url(base_url)}{path}",
            headers=headers,
            params={k: v for k, v in (params or {}).items() if v is not None},
            timeout=API_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

        result = response.json()

    data = result.get("data") if isinstance(result, dict) else None
    if not isinstance(data, list):
        raise HerdAPIError(f"Unexpected response from {path}: missing 'data' list")
    return data


@retry(
    retry=retry_if_exception_type(RetryableError),
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
    reraise=True,
)
async def api_get_with_retry(
    path: str,
    params: dict | None = None,
    base_url: str | None = None,
    api_key: str | None = None,
) -> list[dict]:
    """GET with automatic retry on transient errors.

    Retries on timeouts, connection errors and HTTP 5xx. After MAX_RETRIES
    failures the last RetryableError is raised.

    Raises:
        RetryableError: If all retries fail
        HerdAPIError: On a non-retryable (4xx) error
    """
    try:
        return await api_get(path, params, base_url=base_url, api_key=api_key)
    except httpx.TimeoutException as e:
        raise RetryableError(f"Request timed out: {e}") from e
    except httpx.ConnectError as e:
        raise RetryableError(f"Connection failed: {e}") from e
    except httpx.HTTPStatusError as e:
        body = e.response.text
        if e.response.status_code >= 500:
            # Server error - retry with backoff
            raise RetryableError(f"HTTP {e.response.status_code}: {body}") from e
        # Client error (4xx) - don't retry
        raise HerdAPIError(f"HTTP {e.response.status_code}: {body}") from e


# =============================================================================
# Stores
# =============================================================================


class RemoteTransactionStore:
    """TransactionStore backed by the herd-records API."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None):
        self.base_url = base_url
        self.api_key = api_key

    async def _get(self, path: str, params: dict | None = None) -> list[WeightRecord]:
        rows = await api_get_with_retry(path, params, base_url=self.base_url, api_key=self.api_key)
        logger.debug("GET %s returned %d transactions", path, len(rows))
        return [normalize_transaction(row) for row in rows]

    async def find_by_animal(self, animal_id: str) -> list[WeightRecord]:
        return await self._get(f"/animals/{animal_id}/transactions")

    async def find_latest(self, animal_id: str, limit: int = 1) -> list[WeightRecord]:
        return await self._get(
            f"/animals/{animal_id}/transactions",
            {"order": "desc", "limit": limit},
        )

    async def find_in_date_range(self, tenant_id: str, date_range: DateRange) -> list[WeightRecord]:
        return await self._get(
            f"/tenants/{tenant_id}/transactions",
            {"start": date_range.start.isoformat(), "end": date_range.end.isoformat()},
        )


class RemoteEntityStore:
    """EntityStore backed by the herd-records API."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None):
        self.base_url = base_url
        self.api_key = api_key

    async def find_with_target_weight(
        self,
        tenant_id: str,
        filters: ReadyToSellFilters | None = None,
    ) -> list[AnimalTargetProfile]:
        params = {"has_target_weight": "true"}
        if filters:
            params["species"] = filters.species
            params["group"] = filters.group

        path = f"/tenants/{tenant_id}/animals"
        rows = await api_get_with_retry(path, params, base_url=self.base_url, api_key=self.api_key)
        logger.debug("GET %s returned %d animals", path, len(rows))
        return [normalize_animal(row) for row in rows]
