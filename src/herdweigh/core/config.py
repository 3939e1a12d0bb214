from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> herdweigh -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote herd-records API (optional - the CLI can run off a local JSON export)
    herd_api_url: str | None = None
    herd_api_key: str | None = None

    # Partition key passed through to the stores
    herd_tenant_id: str = "default"

    # Local JSON export of animals and transactions
    herd_data_file: Path | None = None

    # Transaction metadata keys used by the feed comparison
    feed_type_key: str = "feed_type"
    feed_brand_key: str = "feed_brand"

    # Max parallel per-animal store fetches (ready-to-sell ranking)
    max_concurrent_requests: int = 5

    # Display units for CLI output ("metric" = kg, "imperial" = lb)
    # Note: all calculations are done in kg
    display_units: Literal["imperial", "metric"] = "metric"


settings = Settings()
