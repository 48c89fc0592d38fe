"""
core/models/profile.py
────────────────────────────────────────────────────────────────────────
Profile enums plus the two value objects the metrics core works on:

* UserProfile        – always metric, built at the intake boundary
* CalculatedMetrics  – derived, immutable, recomputed in full
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActivityLevel(str, Enum):
    SEDENTARY = "Sedentary (little or no exercise)"
    LIGHTLY_ACTIVE = "Lightly active (light exercise/sports 1-3 days/week)"
    MODERATELY_ACTIVE = "Moderately active (moderate exercise/sports 3-5 days/week)"
    VERY_ACTIVE = "Very active (hard exercise/sports 6-7 days a week)"
    SUPER_ACTIVE = "Super active (very hard exercise/physical job & exercise 2x/day)"


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class DietPreference(str, Enum):
    NONE = "None (No specific preference)"
    VEGAN = "Vegan (No animal products at all)"
    VEGETARIAN = "Vegetarian (No meat, poultry, or fish)"
    PESCATARIAN = "Pescatarian (Vegetarian, but includes seafood)"
    POLLOTARIAN = "Pollotarian (No red meat or fish, only poultry)"
    CARNIVORE = "Carnivore (Primarily meat, fish, eggs; minimal plants)"


class KnownAllergen(str, Enum):
    PEANUTS = "Peanuts"
    DAIRY = "Dairy (Milk, Cheese, Yogurt)"
    GLUTEN = "Gluten (Wheat, Barley, Rye)"
    SHELLFISH = "Shellfish (Shrimp, Crab, Lobster)"
    SOY = "Soy (Soybeans, Tofu, Soy Milk)"
    EGGS = "Eggs"
    TREE_NUTS = "Tree Nuts (Almonds, Walnuts, Cashews, etc.)"
    FISH = "Fish (e.g., Salmon, Tuna, Cod)"
    SESAME = "Sesame Seeds"
    MUSTARD = "Mustard"
    CELERY = "Celery"
    SULPHITES = "Sulphites/Sulfites (often in dried fruits, wine)"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


# ──────────────────────────────────────────────────────────────────────
#  Value objects
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserProfile:
    dob: str                        # YYYY-MM-DD
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    diet_preference: DietPreference = DietPreference.NONE
    allergies: tuple[KnownAllergen, ...] = field(default_factory=tuple)
    custom_allergies: str = ""      # comma separated free text

    @property
    def custom_allergy_list(self) -> list[str]:
        return [a.strip() for a in self.custom_allergies.split(",") if a.strip()]

    @property
    def all_allergens(self) -> list[str]:
        return [a.value for a in self.allergies] + self.custom_allergy_list


@dataclass(frozen=True)
class BMIResult:
    value: float                    # one decimal place
    category: BMICategory


@dataclass(frozen=True)
class CalculatedMetrics:
    age: int
    bmi: BMIResult
    bmr: int                        # kcal/day
    tdee: int                       # kcal/day
