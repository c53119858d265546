"""Shared pytest fixtures."""

from collections.abc import Generator

import pytest
import structlog

from src.prioritizer.metrics import PrioritizerMetrics
from src.store.metrics import StoreMetrics


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None]:
    """Reset metrics singletons and logging configuration around each test."""
    PrioritizerMetrics.reset()
    StoreMetrics.reset()
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
