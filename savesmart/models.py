from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Store(str, Enum):
    ALDI = "Aldi"
    COLES = "Coles"
    WOOLWORTHS = "Woolworths"
    OTHER = "Other"

    @classmethod
    def from_source(cls, source: str) -> "Store":
        return _SOURCE_TO_STORE.get(source.lower(), cls.OTHER)


_SOURCE_TO_STORE = {
    "coles": Store.COLES,
    "woolworths": Store.WOOLWORTHS,
    "aldi": Store.ALDI,
}


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


class Ingredient(CamelModel):
    name: str
    quantity: float = Field(ge=0)
    unit: str  # "g", "ml", "L", "count", "whole", ... never converted
    price: float = Field(ge=0)
    source: str = "mock"  # "coles", "woolworths", "aldi", "mock", ...

    @property
    def store(self) -> Store:
        return Store.from_source(self.source)


class StorePricing(CamelModel):
    coles: float
    woolworths: float
    cheapest: str  # "coles" | "woolworths"
    savings: float


class Recipe(CamelModel):
    recipe_id: str
    name: str
    description: str = ""
    image_url: str = ""
    prep_time: int = 0  # minutes
    servings: int = Field(1, ge=1)
    dietary_tags: list[str] = []
    ingredients: list[Ingredient] = []
    instructions: list[str] = []
    total_cost: float = 0.0
    cached_at: Optional[datetime] = None
    store_pricing: Optional[StorePricing] = None


# ---------------------------------------------------------------------------
# Meal plans
# ---------------------------------------------------------------------------


class Meal(CamelModel):
    meal_type: MealType
    name: str
    description: str = ""
    recipe_id: Optional[str] = None  # None for a custom meal
    estimated_calories: float = 0
    estimated_cost: float = 0.0


class MealPlanDay(CamelModel):
    day: str  # "Monday" .. "Sunday"
    meals: list[Meal] = []


class MealPlanPreferences(CamelModel):
    allergies: list[str] = []
    calorie_goal: int = 2000
    cultural_preference: str = ""
    diet_type: str = ""
    notes: str = ""


class NutritionSummary(CamelModel):
    average_daily_calories: float = 0
    protein_grams: float = 0
    carbs_grams: float = 0
    fat_grams: float = 0


class ShoppingListItem(CamelModel):
    name: str
    quantity: float
    unit: str
    price: float
    recipe_ids: list[str]  # one entry per contributing occurrence


class ShoppingListStore(CamelModel):
    store_name: str
    items: list[ShoppingListItem]
    subtotal: float


class ShoppingList(CamelModel):
    stores: list[ShoppingListStore] = []
    total_cost: float = 0.0


class MealPlan(CamelModel):
    preferences: MealPlanPreferences = Field(default_factory=MealPlanPreferences)
    days: list[MealPlanDay] = []
    total_weekly_cost: float = 0.0
    nutrition_summary: NutritionSummary = Field(default_factory=NutritionSummary)
    shopping_list: ShoppingList = Field(default_factory=ShoppingList)
    notes: str = ""
    created_at: datetime
    updated_at: datetime


class AIMealPlanResponse(CamelModel):
    days: list[MealPlanDay]
    total_weekly_cost: float = 0.0
    nutrition_summary: NutritionSummary = Field(default_factory=NutritionSummary)
    notes: str = ""


DAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
