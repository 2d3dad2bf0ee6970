from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from property_dedupe.config import get_settings


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    # Keep a developer's .env and exported variables out of the tests.
    for name in (
        "PROPERTY_DEDUPE_LOG_LEVEL",
        "PROPERTY_DEDUPE_LOG_FORMAT",
        "PROPERTY_DEDUPE_OUTPUT_DIR",
        "PROPERTY_DEDUPE_EXPLAIN_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    get_settings.cache_clear()

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    get_settings.cache_clear()
