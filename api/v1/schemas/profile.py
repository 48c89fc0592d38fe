from __future__ import annotations
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from core.intake import ProfileForm
from core.models.profile import (
    ActivityLevel,
    BMICategory,
    CalculatedMetrics,
    DietPreference,
    Gender,
    KnownAllergen,
    UnitSystem,
    UserProfile,
)


class ProfileIn(BaseModel):
    """Raw form fields; height/weight in whichever unit system is active."""

    dob: str = Field("", examples=["1994-03-21"])
    gender: Gender = Gender.MALE
    unit_system: UnitSystem = UnitSystem.METRIC
    height_cm: float | None = Field(None, allow_inf_nan=False)
    weight_kg: float | None = Field(None, allow_inf_nan=False)
    height_ft: float | None = Field(None, allow_inf_nan=False)
    height_in: float | None = Field(None, allow_inf_nan=False)
    weight_lbs: float | None = Field(None, allow_inf_nan=False)
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    diet_preference: DietPreference = DietPreference.NONE
    allergies: List[KnownAllergen] = []
    custom_allergies: str = ""

    def to_form(self) -> ProfileForm:
        return ProfileForm(**self.model_dump())


class ProfileOut(BaseModel):
    """Normalised, metric-only profile."""

    dob: str
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    diet_preference: DietPreference
    allergies: List[KnownAllergen]
    custom_allergies: str

    @classmethod
    def from_profile(cls, p: UserProfile) -> "ProfileOut":
        return cls(
            dob=p.dob,
            gender=p.gender,
            height_cm=p.height_cm,
            weight_kg=p.weight_kg,
            activity_level=p.activity_level,
            diet_preference=p.diet_preference,
            allergies=list(p.allergies),
            custom_allergies=p.custom_allergies,
        )


class StoredProfileOut(BaseModel):
    """A stored record after migration; fields missing from old records stay null."""

    key: str
    schema_version: int
    dob: str | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None
    diet_preference: DietPreference = DietPreference.NONE
    allergies: List[KnownAllergen] = []
    custom_allergies: str = ""

    model_config = ConfigDict(extra="ignore")


class BMIOut(BaseModel):
    value: float
    category: BMICategory


class MetricsOut(BaseModel):
    age: int
    bmi: BMIOut
    bmr: int
    tdee: int

    @classmethod
    def from_metrics(cls, m: CalculatedMetrics) -> "MetricsOut":
        return cls(
            age=m.age,
            bmi=BMIOut(value=m.bmi.value, category=m.bmi.category),
            bmr=m.bmr,
            tdee=m.tdee,
        )


class MetricsResponse(BaseModel):
    profile: ProfileOut
    metrics: MetricsOut | None      # null ⇒ nothing to display yet
