"""
core/migration.py
────────────────────────────────────────────────────────────────────────
Versioned schema for stored profiles.

    v1  unversioned camelCase record written by the browser build
        (dob, gender, heightCm, weightKg, activityLevel, dietPreference,
         allergies, customAllergies); enum fields may hold member names
        ("VEGAN") or the older short labels ("Vegan").
    v2  snake_case record with `schema_version`, enum fields hold the
        current values.

`migrate_profile` walks the registered steps from the record's version up
to SCHEMA_VERSION.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar

from core.errors import InvalidInput
from core.models.profile import (
    ActivityLevel,
    DietPreference,
    Gender,
    KnownAllergen,
    UserProfile,
)

_LOG = logging.getLogger(__name__)

SCHEMA_VERSION = 2

E = TypeVar("E", bound=Enum)

_V1_KEYS = {
    "dob": "dob",
    "gender": "gender",
    "heightCm": "height_cm",
    "weightKg": "weight_kg",
    "activityLevel": "activity_level",
    "dietPreference": "diet_preference",
    "allergies": "allergies",
    "customAllergies": "custom_allergies",
}
REQUIRED = ("dob", "gender", "height_cm", "weight_kg", "activity_level")


# ──────────────────────────────────────────────────────────────────────
#  Legacy enum resolution
# ──────────────────────────────────────────────────────────────────────
def resolve_enum(enum_cls: type[E], raw: Any) -> E | None:
    """Match a current value, a member name, or the label before " (" ."""
    if isinstance(raw, enum_cls):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    needle = raw.strip().lower()
    for member in enum_cls:
        value = str(member.value)
        if needle in (value.lower(), member.name.lower(), value.split(" (")[0].lower()):
            return member
    return None


# ──────────────────────────────────────────────────────────────────────
#  Steps
# ──────────────────────────────────────────────────────────────────────
def _v1_to_v2(rec: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {new: rec[old] for old, new in _V1_KEYS.items() if old in rec}
    # tolerate half-migrated records that already use snake_case
    for key in _V1_KEYS.values():
        if key in rec and key not in out:
            out[key] = rec[key]

    diet = resolve_enum(DietPreference, out.get("diet_preference"))
    out["diet_preference"] = (diet or DietPreference.NONE).value

    allergies = out.get("allergies")
    known = [resolve_enum(KnownAllergen, a) for a in allergies] if isinstance(allergies, list) else []
    out["allergies"] = [a.value for a in known if a is not None]

    custom = out.get("custom_allergies")
    out["custom_allergies"] = custom if isinstance(custom, str) else ""

    # unreadable values fall back to the form defaults
    for key, default in (("gender", Gender.MALE), ("activity_level", ActivityLevel.MODERATELY_ACTIVE)):
        out[key] = (resolve_enum(type(default), out.get(key)) or default).value

    return out


_MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    1: _v1_to_v2,
}


def record_version(raw: Mapping[str, Any]) -> int:
    version = raw.get("schema_version", 1)
    if not isinstance(version, int) or version < 1:
        raise InvalidInput(f"unreadable schema_version {version!r}")
    return version


def migrate_profile(raw: Mapping[str, Any]) -> dict[str, Any]:
    version = record_version(raw)
    if version > SCHEMA_VERSION:
        raise InvalidInput(
            f"stored profile is schema v{version}, this build reads up to v{SCHEMA_VERSION}"
        )

    rec = dict(raw)
    rec.pop("schema_version", None)
    while version < SCHEMA_VERSION:
        _LOG.info("migrating stored profile v%d → v%d", version, version + 1)
        rec = _MIGRATIONS[version](rec)
        version += 1

    rec["schema_version"] = SCHEMA_VERSION
    return rec


# ──────────────────────────────────────────────────────────────────────
#  (De)serialisation at the current version
# ──────────────────────────────────────────────────────────────────────
def profile_to_record(profile: UserProfile) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "dob": profile.dob,
        "gender": profile.gender.value,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level": profile.activity_level.value,
        "diet_preference": profile.diet_preference.value,
        "allergies": [a.value for a in profile.allergies],
        "custom_allergies": profile.custom_allergies,
    }


def profile_from_record(raw: Mapping[str, Any]) -> UserProfile | None:
    """Migrate and build a profile; None when a required field is missing."""
    rec = migrate_profile(raw)
    if any(rec.get(k) in (None, "") for k in REQUIRED):
        return None
    try:
        return UserProfile(
            dob=str(rec["dob"]),
            gender=Gender(rec["gender"]),
            height_cm=float(rec["height_cm"]),
            weight_kg=float(rec["weight_kg"]),
            activity_level=ActivityLevel(rec["activity_level"]),
            diet_preference=DietPreference(rec.get("diet_preference", DietPreference.NONE.value)),
            allergies=tuple(KnownAllergen(a) for a in rec.get("allergies", [])),
            custom_allergies=rec.get("custom_allergies", ""),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"stored profile is malformed: {exc}") from exc
