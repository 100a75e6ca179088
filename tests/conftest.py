"""Shared fixtures: a throwaway SQLite database, tokens and item builders."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Dict

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from vyom.database import models  # noqa: F401  registers tables on Base.metadata
from vyom.database.connection import Base
from vyom.schemas.clothes import ClothingItem
from vyom.security import create_access_token


async def create_test_sessionmaker(path: Path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def override_get_db(session_factory):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return _get_db


@pytest.fixture()
def session_factory(tmp_path: Path):
    engine, factory = asyncio.run(create_test_sessionmaker(tmp_path / "test.db"))
    yield factory
    asyncio.run(engine.dispose())


def make_token(uuid: str = "user-1", email: str = "ada@example.com", user_id: int = 1) -> str:
    return create_access_token({"user_id": user_id, "uuid": uuid, "email": email, "role": "USER"})


@pytest.fixture()
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture()
def other_auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(uuid='user-2', email='bob@example.com', user_id=2)}"}


@pytest.fixture()
def make_item() -> Callable[..., ClothingItem]:
    counter = {"value": 0}

    def _make(
        name: str,
        category: str,
        occasions=("casual",),
        seasons=("summer",),
        user_id: str = "user-1",
        **extra,
    ) -> ClothingItem:
        counter["value"] += 1
        return ClothingItem(
            id=extra.pop("id", f"item-{counter['value']}"),
            user_id=user_id,
            name=name,
            category=category,
            occasions=list(occasions),
            seasons=list(seasons),
            **extra,
        )

    return _make


class StaticAccessor:
    """Catalog accessor serving a fixed wardrobe, or raising a fixed error"""

    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.calls = []

    async def fetch_items(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return [item for item in self.items if item.user_id == user_id]
