"""
Pytest config.

Local imports like `import spillguard` rely on the repo root being on sys.path. When invoking a
global `pytest` entrypoint without installing the package, that doesn't happen reliably during
collection, so we pin it here.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


@pytest.fixture(autouse=True)
def _clean_spill_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient spill/AWS settings from the developer shell out of unit tests."""
    for name in ("SPILL_BUCKET", "SPILL_PREFIX", "SPILL_VERIFY_ENABLED", "AWS_REGION", "AWS_DEFAULT_REGION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("spillguard.providers.s3_bucket_lister._s3_clients", {})
