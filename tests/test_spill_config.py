from __future__ import annotations

import pytest
from pydantic import ValidationError

from spillguard.spill.config import DEFAULT_SPILL_PREFIX, load_spill_config
from spillguard.spill.location import SpillLocation


def test_defaults_when_env_empty():
    cfg = load_spill_config()

    assert cfg.bucket is None
    assert cfg.prefix == DEFAULT_SPILL_PREFIX
    assert cfg.region is None
    assert cfg.verify_enabled is True


def test_reads_env(monkeypatch):
    monkeypatch.setenv("SPILL_BUCKET", " My-Spill ")
    monkeypatch.setenv("SPILL_PREFIX", "/spill/athena/")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("SPILL_VERIFY_ENABLED", "off")

    cfg = load_spill_config()

    # whitespace only; case is preserved
    assert cfg.bucket == "My-Spill"
    assert cfg.prefix == "spill/athena"
    assert cfg.region == "eu-west-1"
    assert cfg.verify_enabled is False


def test_aws_region_wins_over_default_region(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    assert load_spill_config().region == "us-west-2"


def test_require_bucket_raises_when_missing():
    with pytest.raises(ValueError):
        load_spill_config().require_bucket()


def test_location_for_query(monkeypatch):
    monkeypatch.setenv("SPILL_BUCKET", "b1")

    loc = load_spill_config().location_for("q-123")

    assert loc == SpillLocation(bucket="b1", key="athena-spill/q-123")
    assert loc.uri == "s3://b1/athena-spill/q-123"


def test_location_for_query_without_prefix(monkeypatch):
    monkeypatch.setenv("SPILL_BUCKET", "b1")
    monkeypatch.setenv("SPILL_PREFIX", "")

    assert load_spill_config().location_for("q-1").key == "q-1"


def test_spill_location_rejects_empty_bucket():
    with pytest.raises(ValidationError):
        SpillLocation(bucket="")
