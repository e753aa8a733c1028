#!/usr/bin/env python3
"""
Spill bucket ownership check - operator CLI.
Runs the same guard query handlers use, once, against the ambient AWS credentials.
"""

import argparse
import logging
import sys
from typing import List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)

EXIT_OK = 0
EXIT_DENIED = 1
EXIT_ERROR = 2


def run_check(bucket: Optional[str], region: Optional[str], *, as_json: bool = False) -> int:
    """
    Verify ownership of the spill bucket and print the verdict.

    Args:
        bucket: Bucket to check (default: SPILL_BUCKET)
        region: S3 client region (default: AWS_REGION / AWS_DEFAULT_REGION)
    """
    from spillguard.providers.s3_bucket_lister import get_bucket_lister
    from spillguard.spill.config import load_spill_config
    from spillguard.spill.guard import check_result
    from spillguard.spill.verifier import SpillLocationVerifier

    cfg = load_spill_config()
    bucket = bucket or cfg.bucket
    if not bucket:
        print("Error: no spill bucket (pass --bucket or set SPILL_BUCKET)", file=sys.stderr)
        return EXIT_ERROR

    verifier = SpillLocationVerifier(bucket, get_bucket_lister(region or cfg.region))
    result = check_result(verifier, bucket)

    if as_json:
        print(result.model_dump_json(indent=2))
    elif result.ok:
        print(f"OK: caller owns spill bucket {bucket}")
    else:
        print(f"{result.status.upper()}: {result.error}")

    if result.ok:
        return EXIT_OK
    if result.status == "denied":
        return EXIT_DENIED
    return EXIT_ERROR


def list_visible_buckets(region: Optional[str]) -> int:
    """Print the bucket names the current credentials can enumerate, one per line."""
    from spillguard.providers.s3_bucket_lister import get_bucket_lister
    from spillguard.spill.config import load_spill_config
    from spillguard.spill.errors import ListingFailure

    try:
        names = get_bucket_lister(region or load_spill_config().region).list_buckets()
    except ListingFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    for name in sorted(names):
        print(name)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check that the calling AWS account owns the configured spill bucket",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the bucket from SPILL_BUCKET
  python main.py --check

  # Check a specific bucket, JSON output
  python main.py --check --bucket my-spill-bucket --json

  # Show what ListBuckets returns for these credentials
  python main.py --list-buckets
        """,
    )
    parser.add_argument("--check", action="store_true", help="Run one ownership check and exit with its verdict")
    parser.add_argument("--list-buckets", action="store_true", help="List buckets visible to the current credentials")
    parser.add_argument("--bucket", help="Spill bucket name (default: SPILL_BUCKET)")
    parser.add_argument("--region", help="AWS region for the S3 client (default: AWS_REGION)")
    parser.add_argument("--json", action="store_true", help="Print the check result as JSON (with --check)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.check:
        return run_check(args.bucket, args.region, as_json=args.json)

    if args.list_buckets:
        return list_visible_buckets(args.region)

    parser.print_help()
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
