"""Tracks the configured spill bucket and whether the calling account owns it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, Optional

from spillguard.spill.errors import InternalInvariant, OwnershipDenied

if TYPE_CHECKING:
    from spillguard.providers.s3_bucket_lister import BucketLister

logger = logging.getLogger(__name__)

BucketState = Literal["unchecked", "valid", "invalid"]


class SpillLocationVerifier:
    """
    Ownership guard for a spill bucket.

    The outcome of a listing is cached per bucket name: only the first check after
    construction (or after the bucket name changes) calls the lister. There is no TTL.

    Not thread-safe; wrap in `LockedVerifier` when shared across threads.
    """

    def __init__(self, bucket: str, lister: Optional["BucketLister"] = None) -> None:
        self._bucket = bucket
        self._state: BucketState = "unchecked"
        self._lister = lister

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def state(self) -> BucketState:
        return self._state

    def check(self, spill_bucket: str) -> None:
        """
        Raise unless the calling account owns `spill_bucket`.

        Raises:
            OwnershipDenied: the bucket is not in the caller's listing.
            InternalInvariant: a refresh returned without settling the state.
            ListingFailure: propagated from the lister; state is left unchanged.
        """
        if spill_bucket != self._bucket:
            logger.debug("Spill bucket has been changed from %s to %s", self._bucket, spill_bucket)
            self._bucket = spill_bucket
            self._state = "unchecked"

        if self._state == "unchecked":
            self._refresh()

        self._pass_or_fail()

    def _get_lister(self) -> "BucketLister":
        if self._lister is None:
            from spillguard.providers.s3_bucket_lister import get_bucket_lister

            self._lister = get_bucket_lister()
        return self._lister

    def _refresh(self) -> None:
        # Lister errors propagate before any assignment below.
        buckets = self._get_lister().list_buckets()
        previous = self._state
        self._state = "valid" if self._bucket in buckets else "invalid"
        logger.debug("The state of bucket %s has been updated to %s from %s", self._bucket, self._state, previous)

    def _pass_or_fail(self) -> None:
        if self._state == "valid":
            return
        if self._state == "invalid":
            raise OwnershipDenied(self._bucket)
        raise InternalInvariant(self._bucket)
