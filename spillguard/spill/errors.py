from __future__ import annotations

from typing import Optional


class SpillGuardError(RuntimeError):
    """Base class for spill guard failures."""


class OwnershipDenied(SpillGuardError):
    """The listing did not contain the configured spill bucket."""

    def __init__(self, bucket: str) -> None:
        super().__init__(f"You do NOT own the spill bucket with the name: {bucket}")
        self.bucket = bucket


class InternalInvariant(SpillGuardError):
    """State was still unchecked at the decision point (a bug, not a denial)."""

    def __init__(self, bucket: str) -> None:
        super().__init__("Bucket state should have been checked already.")
        self.bucket = bucket


class ListingFailure(SpillGuardError):
    """
    Raised by a BucketLister when the bucket set could not be fetched.

    `error_code` carries the service error code (e.g. "AccessDenied") when there is one.
    """

    def __init__(self, message: str, *, error_code: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_code = error_code
