"""S3 bucket listing (read-only) used to decide spill bucket ownership."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, Optional, Protocol, Set, runtime_checkable

from botocore.exceptions import BotoCoreError, ClientError

from spillguard.spill.errors import ListingFailure

logger = logging.getLogger(__name__)

_s3_clients: Dict[str, Any] = {}
_client_lock = threading.Lock()


@runtime_checkable
class BucketLister(Protocol):
    """Protocol for listing the buckets visible under the current credentials."""

    def list_buckets(self) -> Set[str]:
        """
        Return the names of all buckets the effective credentials can enumerate.

        Raises ListingFailure (or any other exception) when the listing cannot be fetched.
        """
        ...


class StaticBucketLister:
    """Fixed bucket set. Useful for wiring local runs and tests."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names = frozenset(names)

    def list_buckets(self) -> Set[str]:
        return set(self._names)


def _get_s3_client(region: Optional[str]) -> Any:
    """
    Get cached boto3 S3 client for a region (None = default boto3 resolution).

    Uses the default credential chain (IAM role, env vars, etc.).
    """
    cache_key = region or ""

    if cache_key in _s3_clients:
        return _s3_clients[cache_key]

    with _client_lock:
        if cache_key in _s3_clients:
            return _s3_clients[cache_key]

        import boto3

        client = boto3.client("s3", region_name=region)
        _s3_clients[cache_key] = client
        return client


class S3BucketLister:
    """Default BucketLister using S3 ListBuckets via boto3."""

    def __init__(self, region: Optional[str] = None, client: Any = None) -> None:
        self.region = region
        self._client = client

    def _s3(self) -> Any:
        if self._client is None:
            self._client = _get_s3_client(self.region)
        return self._client

    def list_buckets(self) -> Set[str]:
        names: Set[str] = set()
        kwargs: Dict[str, Any] = {}
        try:
            s3 = self._s3()
            # Follow continuation tokens so a partial page is never taken as the full set.
            while True:
                response = s3.list_buckets(**kwargs)
                for b in response.get("Buckets") or []:
                    name = b.get("Name")
                    if name:
                        names.add(name)
                token = response.get("ContinuationToken")
                if not token:
                    break
                kwargs["ContinuationToken"] = token
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            error_message = e.response.get("Error", {}).get("Message", str(e))
            logger.warning(f"S3 ListBuckets failed: {error_code} - {error_message}")
            raise ListingFailure(f"ListBuckets failed: {error_code} - {error_message}", error_code=error_code) from e
        except BotoCoreError as e:
            logger.warning(f"Boto3 error listing S3 buckets: {e}")
            raise ListingFailure(f"ListBuckets failed: {e}", error_code="BotoError") from e

        logger.debug("ListBuckets returned %d buckets", len(names))
        return names


def get_bucket_lister(region: Optional[str] = None) -> BucketLister:
    """Factory function for the bucket lister (allows future swapping)."""
    return S3BucketLister(region=region)
