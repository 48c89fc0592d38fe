from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import InvalidInput, OutOfRange
from core.intake import build_profile
from services.db import delete_profile, get_session, load_profile, save_profile, save_raw
from api.v1.schemas import ProfileIn, StoredProfileOut

router = APIRouter()


# ───────────────────────── read ─────────────────────────────
@router.get("/{key}", response_model=StoredProfileOut)
async def get_profile(
    key: str,
    db: AsyncSession = Depends(get_session),
) -> StoredProfileOut:
    record = await load_profile(db, key)
    if record is None:
        raise HTTPException(status_code=404, detail="profile not stored")
    return StoredProfileOut(key=key, **record)


# ───────────────────────── upsert ───────────────────────────
@router.put("/{key}", response_model=StoredProfileOut)
async def put_profile(
    key: str,
    body: ProfileIn,
    db: AsyncSession = Depends(get_session),
) -> StoredProfileOut:
    try:
        profile = build_profile(body.to_form())
    except (InvalidInput, OutOfRange) as e:
        raise HTTPException(status_code=422, detail=str(e))

    record = await save_profile(db, key, profile)
    return StoredProfileOut(key=key, **record)


# ───────────────────────── legacy import ────────────────────
@router.put("/{key}/import", response_model=StoredProfileOut)
async def import_profile(
    key: str,
    payload: Dict[str, Any] = Body(..., examples=[{"dob": "1990-05-01", "heightCm": 165}]),
    db: AsyncSession = Depends(get_session),
) -> StoredProfileOut:
    """Store a browser-build `healthPlannerData` record; migrated on read."""
    await save_raw(db, key, payload)
    record = await load_profile(db, key)
    if record is None:
        raise HTTPException(status_code=422, detail="stored profile could not be migrated")
    try:
        return StoredProfileOut(key=key, **record)
    except ValidationError as e:
        await delete_profile(db, key)
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


# ───────────────────────── delete ───────────────────────────
@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_profile(
    key: str,
    db: AsyncSession = Depends(get_session),
) -> Response:
    if not await delete_profile(db, key):
        raise HTTPException(status_code=404, detail="profile not stored")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
