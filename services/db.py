"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup (SQLite by default)
* One key-value table holding stored profiles
* Small DAO helpers used by routers
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, AsyncGenerator

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings
from core.errors import InvalidInput
from core.migration import SCHEMA_VERSION, migrate_profile, profile_to_record
from core.models.profile import UserProfile

_LOG = logging.getLogger(__name__)

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = create_async_engine(settings.database_url, pool_pre_ping=True)
    return _ENGINE


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class StoredProfile(Base):
    __tablename__ = "stored_profiles"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    schema_version: Mapped[int] = mapped_column(Integer, default=SCHEMA_VERSION)
    payload: Mapped[dict] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


async def create_tables(eng: AsyncEngine | None = None) -> None:
    async with (eng or engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── DAO helpers ───────────────────────────────────────────────
async def save_profile(db: AsyncSession, key: str, profile: UserProfile) -> dict[str, Any]:
    record = profile_to_record(profile)
    row = await db.get(StoredProfile, key)
    if row is None:
        db.add(StoredProfile(key=key, schema_version=SCHEMA_VERSION, payload=record))
    else:
        row.schema_version = SCHEMA_VERSION
        row.payload = record
    await db.commit()
    return record


async def save_raw(db: AsyncSession, key: str, payload: dict[str, Any]) -> None:
    """Store a record as-is (legacy imports); migrated on the next read."""
    version = payload.get("schema_version", 1)
    row = await db.get(StoredProfile, key)
    if row is None:
        db.add(StoredProfile(key=key, schema_version=version, payload=payload))
    else:
        row.schema_version = version
        row.payload = payload
    await db.commit()


async def load_profile(db: AsyncSession, key: str) -> dict[str, Any] | None:
    """
    Migrated record for `key`, possibly partial. A record that cannot be
    migrated is removed and treated as absent.
    """
    row = await db.get(StoredProfile, key)
    if row is None:
        return None

    payload = dict(row.payload or {})
    payload.setdefault("schema_version", row.schema_version)
    try:
        return migrate_profile(payload)
    except InvalidInput as e:
        _LOG.error("Failed to migrate stored profile %r, dropping it: %s", key, e)
        await db.delete(row)
        await db.commit()
        return None


async def delete_profile(db: AsyncSession, key: str) -> bool:
    row = await db.get(StoredProfile, key)
    if row is None:
        return False
    await db.delete(row)
    await db.commit()
    return True


# ───────── session helper ────────────────────────────────────────────
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine(), expire_on_commit=False)
    async with async_session() as session:
        yield session
