from __future__ import annotations

import asyncio

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from core.models.profile import ActivityLevel, DietPreference, Gender, UserProfile
from services.db import (
    StoredProfile,
    create_tables,
    delete_profile,
    load_profile,
    save_profile,
    save_raw,
)

PROFILE = UserProfile(
    dob="1992-07-04",
    gender=Gender.FEMALE,
    height_cm=168,
    weight_kg=58.2,
    activity_level=ActivityLevel.SEDENTARY,
)


def _run(tmp_path, scenario):
    async def go():
        eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/store.db", poolclass=NullPool)
        await create_tables(eng)
        maker = async_sessionmaker(eng, expire_on_commit=False)
        async with maker() as db:
            result = await scenario(db)
        await eng.dispose()
        return result

    return asyncio.run(go())


def test_save_then_load(tmp_path):
    async def scenario(db):
        await save_profile(db, "me", PROFILE)
        return await load_profile(db, "me")

    rec = _run(tmp_path, scenario)
    assert rec["weight_kg"] == 58.2
    assert rec["gender"] == "Female"


def test_legacy_record_is_migrated_on_read(tmp_path):
    async def scenario(db):
        await save_raw(db, "old", {"dob": "1992-07-04", "heightCm": 168, "dietPreference": "VEGETARIAN"})
        return await load_profile(db, "old")

    rec = _run(tmp_path, scenario)
    assert rec["height_cm"] == 168
    assert rec["diet_preference"] == DietPreference.VEGETARIAN.value


def test_unreadable_record_is_dropped(tmp_path):
    async def scenario(db):
        await save_raw(db, "bad", {"schema_version": 99})
        first = await load_profile(db, "bad")
        return first, await db.get(StoredProfile, "bad")

    first, row = _run(tmp_path, scenario)
    assert first is None
    assert row is None


def test_delete(tmp_path):
    async def scenario(db):
        await save_profile(db, "me", PROFILE)
        return await delete_profile(db, "me"), await delete_profile(db, "me")

    assert _run(tmp_path, scenario) == (True, False)
