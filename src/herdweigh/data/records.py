"""Normalization helpers for raw store payloads.

Raw payloads use the herd application's field names:

    transaction: { tx_id, entity_id, tenant_id, batch_id, weight_kg,
                   timestamp, custom_field_values }
    animal:      { entity_id, primary_tag, species, current_group, status,
                   target_weight_kg }

Timestamps may be ISO-8601 strings or epoch milliseconds. Naive datetimes
are taken as UTC.
"""

from datetime import UTC, datetime

from herdweigh.core.models import AnimalTargetProfile, WeightRecord, as_utc


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 string, epoch milliseconds, or datetime into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    elif isinstance(value, int | float):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    return as_utc(parsed)


def _required(raw: dict, *keys: str):
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    raise ValueError(f"Missing required field {keys[0]!r} in {raw!r}")


def _optional_float(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def normalize_transaction(raw: dict) -> WeightRecord:
    """
    Convert a raw transaction dict into a WeightRecord.

    Raises:
        ValueError: If a required field is missing or the weight is not positive
    """
    weight = float(_required(raw, "weight_kg", "weightKg"))
    if weight <= 0:
        raise ValueError(f"Weight must be positive, got {weight} for transaction {raw.get('tx_id')!r}")

    return WeightRecord(
        id=str(_required(raw, "tx_id", "id")),
        animal_id=str(_required(raw, "entity_id", "animal_id")),
        timestamp=parse_timestamp(_required(raw, "timestamp")),
        weight_kg=weight,
        metadata=dict(raw.get("custom_field_values") or raw.get("metadata") or {}),
        tenant_id=raw.get("tenant_id"),
        batch_id=raw.get("batch_id"),
    )


def normalize_animal(raw: dict) -> AnimalTargetProfile:
    """Convert a raw animal dict into an AnimalTargetProfile."""
    return AnimalTargetProfile(
        animal_id=str(_required(raw, "entity_id", "animal_id")),
        target_weight_kg=_optional_float(raw.get("target_weight_kg")),
        primary_tag=raw.get("primary_tag"),
        species=raw.get("species"),
        current_group=raw.get("current_group"),
        status=raw.get("status"),
    )
