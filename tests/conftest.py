from __future__ import annotations

import pytest
from loguru import logger


@pytest.fixture
def log_records():
    """Collect loguru records emitted during a test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
