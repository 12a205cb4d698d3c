"""Shared fixtures: a synthetic environment and a loguru capture sink."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from gdrive_oauth.paths import CREDENTIALS_PATH_ENV, LEGACY_PATH_ENV


@pytest.fixture
def keys_path(tmp_path: Path) -> Path:
    return tmp_path / "gcp-oauth.keys.json"


@pytest.fixture
def legacy_path(tmp_path: Path) -> Path:
    return tmp_path / "client_secret.json"


@pytest.fixture
def env(keys_path: Path, legacy_path: Path) -> dict[str, str]:
    """Environment with both file paths pointing into tmp_path (files not created)."""
    return {
        CREDENTIALS_PATH_ENV: str(keys_path),
        LEGACY_PATH_ENV: str(legacy_path),
    }


@pytest.fixture
def log_records() -> Iterator[list[Any]]:
    """Collect loguru records emitted during the test."""
    records: list[Any] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
