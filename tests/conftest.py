"""Shared fixtures for tollgate tests."""

import logging
from collections.abc import AsyncIterator, Iterator

import pytest

from tollgate.app import App
from tollgate.config import AppConfig
from tollgate.security.audit import set_security_event_sink
from tollgate.service import create_app
from tollgate.testing import TestClient

TOKEN = "mysecrettoken"


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(token=TOKEN, banner=False)


@pytest.fixture
def app(config: AppConfig) -> App:
    return create_app(config)


@pytest.fixture
async def client(app: App) -> AsyncIterator[TestClient]:
    async with TestClient(app) as client:
        yield client


@pytest.fixture(autouse=True)
def _reset_security_sink() -> Iterator[None]:
    yield
    set_security_event_sink(None)


@pytest.fixture(autouse=True)
def _restore_log_level() -> Iterator[None]:
    logger = logging.getLogger("tollgate")
    level = logger.level
    yield
    logger.setLevel(level)
