"""
Spill bucket ownership guard.

Verifies, at query time, that the account running a federated query owns the S3 bucket
it is configured to spill intermediate results into.
"""

from spillguard.spill.errors import InternalInvariant, ListingFailure, OwnershipDenied, SpillGuardError
from spillguard.spill.verifier import BucketState, SpillLocationVerifier

__all__ = [
    "BucketState",
    "InternalInvariant",
    "ListingFailure",
    "OwnershipDenied",
    "SpillGuardError",
    "SpillLocationVerifier",
]
