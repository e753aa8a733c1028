"""
Helpers for handlers that call the spill ownership guard.

- `check_result` turns the guard's outcome into a typed value instead of an exception
- `guard_spill_location` checks a SpillLocation before it is written to
- `LockedVerifier` serializes a verifier shared across threads
- `verifier_from_config` builds the per-handler verifier (or None when checks are off)
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from spillguard.spill.config import SpillConfig
from spillguard.spill.errors import InternalInvariant, ListingFailure, OwnershipDenied
from spillguard.spill.location import SpillLocation
from spillguard.spill.verifier import BucketState, SpillLocationVerifier

if TYPE_CHECKING:
    from spillguard.providers.s3_bucket_lister import BucketLister

CheckStatus = Literal["ok", "denied", "invariant", "listing_error"]


class CheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: str
    status: CheckStatus
    state: BucketState
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class LockedVerifier:
    """A SpillLocationVerifier whose check runs under a single mutex."""

    def __init__(self, verifier: SpillLocationVerifier) -> None:
        self._verifier = verifier
        self._lock = threading.Lock()

    @property
    def bucket(self) -> str:
        with self._lock:
            return self._verifier.bucket

    @property
    def state(self) -> BucketState:
        with self._lock:
            return self._verifier.state

    def check(self, spill_bucket: str) -> None:
        with self._lock:
            self._verifier.check(spill_bucket)

    def check_result(self, spill_bucket: str) -> CheckResult:
        with self._lock:
            return check_result(self._verifier, spill_bucket)


AnyVerifier = Union[SpillLocationVerifier, LockedVerifier]


def check_result(verifier: SpillLocationVerifier, spill_bucket: str) -> CheckResult:
    """
    Run the guard and report the outcome as a CheckResult.

    Only the guard's own failure kinds are mapped; anything else a custom lister raises
    still propagates.
    """
    status: CheckStatus = "ok"
    error: Optional[str] = None
    try:
        verifier.check(spill_bucket)
    except OwnershipDenied as e:
        status, error = "denied", str(e)
    except InternalInvariant as e:
        status, error = "invariant", str(e)
    except ListingFailure as e:
        status, error = "listing_error", str(e)
    return CheckResult(bucket=verifier.bucket, status=status, state=verifier.state, error=error)


def verifier_from_config(
    cfg: SpillConfig, lister: Optional["BucketLister"] = None
) -> Optional[SpillLocationVerifier]:
    """
    Build the verifier a handler keeps for its lifetime.

    Returns None when SPILL_VERIFY_ENABLED is off. Without an explicit lister the default
    S3 lister for `cfg.region` is used. No I/O happens here.
    """
    if not cfg.verify_enabled:
        return None
    if lister is None:
        from spillguard.providers.s3_bucket_lister import get_bucket_lister

        lister = get_bucket_lister(cfg.region)
    return SpillLocationVerifier(cfg.require_bucket(), lister)


def guard_spill_location(verifier: Optional[AnyVerifier], location: SpillLocation) -> SpillLocation:
    """
    Check ownership of `location.bucket`; return the location unchanged when owned.

    A None verifier (verification disabled) lets every location through.
    """
    if verifier is not None:
        verifier.check(location.bucket)
    return location
