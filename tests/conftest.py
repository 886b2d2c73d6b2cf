from __future__ import annotations

import pytest

from pairing_bot.config import Settings
from pairing_bot.db.connection import FakeDatabase
from pairing_bot.db.repository import Repository
from pairing_bot.texts import build_texts

DEFAULT_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def cfg() -> Settings:
    return Settings(
        default_schedule=DEFAULT_DAYS,
        maintainer="@_**Test Maintainer**",
        admin_ids={1},
        allowed_user_ids=set(),
    )


@pytest.fixture
def texts(cfg):
    return build_texts(cfg)


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def repo(db) -> Repository:
    return Repository(db=db)
