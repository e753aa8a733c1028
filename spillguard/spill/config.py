from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from spillguard.spill.location import SpillLocation

DEFAULT_SPILL_PREFIX = "athena-spill"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class SpillConfig:
    bucket: Optional[str]
    prefix: str
    region: Optional[str]
    verify_enabled: bool

    def require_bucket(self) -> str:
        if not self.bucket:
            raise ValueError("SPILL_BUCKET is not configured")
        return self.bucket

    def location_for(self, query_id: str) -> SpillLocation:
        """Spill location for a query: `<bucket>/<prefix>/<query_id>`."""
        key = f"{self.prefix}/{query_id}" if self.prefix else query_id
        return SpillLocation(bucket=self.require_bucket(), key=key)


def load_spill_config() -> SpillConfig:
    """
    Load spill configuration from environment variables.

    - SPILL_BUCKET: spill bucket name (taken verbatim, no normalization)
    - SPILL_PREFIX: key prefix for spilled objects (default: athena-spill)
    - AWS_REGION / AWS_DEFAULT_REGION: region for the S3 client
    - SPILL_VERIFY_ENABLED: ownership check on/off (default: on)
    """
    # Bucket names are compared byte-exact downstream; only drop surrounding whitespace.
    bucket = (os.getenv("SPILL_BUCKET") or "").strip() or None
    prefix_raw = os.getenv("SPILL_PREFIX")
    prefix = DEFAULT_SPILL_PREFIX if prefix_raw is None else prefix_raw.strip().strip("/")
    region = (os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "").strip() or None

    return SpillConfig(
        bucket=bucket,
        prefix=prefix,
        region=region,
        verify_enabled=_env_bool("SPILL_VERIFY_ENABLED", True),
    )
