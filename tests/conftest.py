import re
from types import SimpleNamespace
from typing import Optional

import pytest

from savesmart.cache import TTLCache
from savesmart.grocery_prices import PriceData, PriceTable
from savesmart.meal_planner import MealPlanner
from savesmart.models import (
    AIMealPlanResponse,
    Ingredient,
    Meal,
    MealPlan,
    MealPlanDay,
    MealType,
    Recipe,
)
from savesmart.pricing import RecipePriceCalculator
from savesmart.recipes import RecipeService
from savesmart.sheets import SheetsClient


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def ingredient(name, quantity, unit, price, source="coles") -> Ingredient:
    return Ingredient(name=name, quantity=quantity, unit=unit, price=price, source=source)


def recipe(recipe_id: str, ingredients: list[Ingredient], **kwargs) -> Recipe:
    kwargs.setdefault("name", f"Recipe {recipe_id}")
    kwargs.setdefault("description", "Test recipe")
    kwargs.setdefault("servings", 4)
    return Recipe(recipe_id=recipe_id, ingredients=ingredients, **kwargs)


def meal(recipe_id: Optional[str], meal_type: MealType = MealType.DINNER) -> Meal:
    return Meal(
        meal_type=meal_type,
        name=f"Meal {recipe_id or 'custom'}",
        description="Test meal",
        recipe_id=recipe_id,
        estimated_calories=500,
        estimated_cost=5.0,
    )


def day(name: str, *meals: Meal) -> MealPlanDay:
    return MealPlanDay(day=name, meals=list(meals))


@pytest.fixture
def build():
    return SimpleNamespace(ingredient=ingredient, recipe=recipe, meal=meal, day=day)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeStore:
    """In-memory stand-in for SheetsClient."""

    def __init__(self, recipes: list[Recipe] = ()):
        self.recipes = {r.recipe_id: r for r in recipes}
        self.plans: dict[str, MealPlan] = {}
        self.recipe_reads = 0

    def get_all_recipes(self) -> list[Recipe]:
        self.recipe_reads += 1
        return list(self.recipes.values())

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        self.recipe_reads += 1
        return self.recipes.get(recipe_id)

    def save_recipe(self, r: Recipe) -> None:
        self.recipes[r.recipe_id] = r

    def get_meal_plan(self, user_id: str) -> Optional[MealPlan]:
        return self.plans.get(user_id)

    def save_meal_plan(self, user_id: str, plan: MealPlan) -> None:
        self.plans[user_id] = plan

    def delete_meal_plan(self, user_id: str) -> bool:
        return self.plans.pop(user_id, None) is not None


class FakeClaude:
    def __init__(self, response: Optional[AIMealPlanResponse] = None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []

    def draft_meal_plan(self, preferences, recipes, days=None):
        self.calls.append((preferences, recipes))
        if self.error:
            raise self.error
        return self.response


class FakeWorksheet:
    def __init__(self, header: list[str], rows: list[list] = ()):
        self.header = header
        self.rows = [list(r) for r in rows]

    def get_all_records(self) -> list[dict]:
        return [dict(zip(self.header, row)) for row in self.rows]

    def append_row(self, row, value_input_option=None):
        self.rows.append(list(row))

    def update(self, range_name, values, value_input_option=None):
        row_num = int(re.match(r"[A-Z]+(\d+):", range_name).group(1))
        self.rows[row_num - 2] = list(values[0])

    def delete_rows(self, index):
        del self.rows[index - 2]


class FakeSpreadsheet:
    def __init__(self):
        self.worksheets = {
            "recipes": FakeWorksheet(["recipe_id", "name", "dietary_tags", "data"]),
            "meal_plans": FakeWorksheet(["user_id", "data", "updated_at"]),
        }

    def worksheet(self, name):
        return self.worksheets[name]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def price_table() -> PriceTable:
    return PriceTable(
        {
            "milk": PriceData(3.50, 3.40, "2L"),
            "eggs": PriceData(6.00, 5.80, "12 pack"),
            "spaghetti": PriceData(2.50, 2.70, "500g"),
            "bacon": PriceData(8.00, 7.80, "250g"),
            "tofu": PriceData(3.50, 3.70, "300g"),
        }
    )


@pytest.fixture
def calculator(price_table) -> RecipePriceCalculator:
    return RecipePriceCalculator(price_table)


@pytest.fixture
def catalog() -> list[Recipe]:
    return [
        recipe(
            "carbonara",
            [
                ingredient("Spaghetti", 400, "g", 2.50, "coles"),
                ingredient("Bacon", 200, "g", 4.00, "woolworths"),
                ingredient("Eggs", 4, "whole", 1.50, "coles"),
            ],
            name="Budget Pasta Carbonara",
            dietary_tags=[],
        ),
        recipe(
            "stir-fry",
            [
                ingredient("Tofu", 300, "g", 3.50, "woolworths"),
                ingredient("Soy Sauce", 50, "ml", 1.00, "mock"),
            ],
            name="Vegetarian Stir Fry",
            dietary_tags=["vegetarian", "vegan"],
        ),
        recipe(
            "omelette",
            [
                ingredient("Eggs", 3, "whole", 1.20, "coles"),
                ingredient("Milk", 0.1, "L", 0.35, "coles"),
            ],
            name="Omelette",
            dietary_tags=["vegetarian", "gluten-free"],
        ),
    ]


@pytest.fixture
def store(catalog) -> FakeStore:
    return FakeStore(catalog)


@pytest.fixture
def recipe_service(store, calculator) -> RecipeService:
    return RecipeService(store=store, calculator=calculator, cache=TTLCache())


@pytest.fixture
def claude() -> FakeClaude:
    return FakeClaude(
        AIMealPlanResponse(
            days=[
                day("Monday", meal("omelette", MealType.BREAKFAST), meal("carbonara")),
                day("Tuesday", meal(None, MealType.LUNCH), meal("carbonara")),
            ],
            total_weekly_cost=42.0,
            notes="Carbonara twice keeps the bacon from going to waste.",
        )
    )


@pytest.fixture
def planner(store, recipe_service, claude) -> MealPlanner:
    return MealPlanner(store=store, recipes=recipe_service, claude=claude)


@pytest.fixture
def sheets() -> SheetsClient:
    return SheetsClient(spreadsheet_id="test", spreadsheet=FakeSpreadsheet())
