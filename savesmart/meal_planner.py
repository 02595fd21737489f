import logging
from datetime import datetime
from typing import Optional

from savesmart.claude_client import ClaudeClient
from savesmart.errors import InvalidArgumentError, MealPlanNotFoundError
from savesmart.models import (
    DAYS,
    Meal,
    MealPlan,
    MealPlanDay,
    MealPlanPreferences,
    MealType,
    ShoppingList,
)
from savesmart.recipes import RecipeService
from savesmart.sheets import SheetsClient
from savesmart.shopping_list import find_unresolved_recipe_ids, generate_shopping_list

log = logging.getLogger(__name__)


def _check_day(day: str) -> str:
    if day not in DAYS:
        raise InvalidArgumentError(f"Unknown day '{day}'. Expected one of: {', '.join(DAYS)}")
    return day


class MealPlanner:
    def __init__(
        self,
        store: SheetsClient,
        recipes: RecipeService,
        claude: ClaudeClient,
    ):
        self._store = store
        self._recipes = recipes
        self._claude = claude

    # ------------------------------------------------------------------
    # Plan lifecycle
    # ------------------------------------------------------------------

    def get_plan(self, user_id: str) -> MealPlan:
        plan = self._store.get_meal_plan(user_id)
        if plan is None:
            raise MealPlanNotFoundError(user_id, f"No meal plan for user '{user_id}'")
        return plan

    def generate_plan(self, user_id: str, preferences: MealPlanPreferences) -> MealPlan:
        catalog = self._recipes.list_recipes()
        draft = self._claude.draft_meal_plan(preferences, catalog)

        now = datetime.now()
        plan = MealPlan(
            preferences=preferences,
            days=draft.days,
            nutrition_summary=draft.nutrition_summary,
            notes=draft.notes,
            created_at=now,
            updated_at=now,
        )
        return self._refresh_and_save(user_id, plan)

    def create_plan(
        self,
        user_id: str,
        days: list[MealPlanDay],
        preferences: Optional[MealPlanPreferences] = None,
        notes: str = "",
    ) -> MealPlan:
        for d in days:
            _check_day(d.day)
        now = datetime.now()
        plan = MealPlan(
            preferences=preferences or MealPlanPreferences(),
            days=days,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        return self._refresh_and_save(user_id, plan)

    def update_plan(
        self,
        user_id: str,
        days: Optional[list[MealPlanDay]] = None,
        preferences: Optional[MealPlanPreferences] = None,
        notes: Optional[str] = None,
    ) -> MealPlan:
        plan = self.get_plan(user_id)
        update: dict = {}
        if days is not None:
            for d in days:
                _check_day(d.day)
            update["days"] = days
        if preferences is not None:
            update["preferences"] = preferences
        if notes is not None:
            update["notes"] = notes
        return self._refresh_and_save(user_id, plan.model_copy(update=update))

    def delete_plan(self, user_id: str) -> None:
        if not self._store.delete_meal_plan(user_id):
            raise MealPlanNotFoundError(user_id, f"No meal plan for user '{user_id}'")

    # ------------------------------------------------------------------
    # Slot editing
    # ------------------------------------------------------------------

    def add_meal(
        self,
        user_id: str,
        day: str,
        meal_type: MealType,
        recipe_id: str,
    ) -> MealPlan:
        _check_day(day)
        plan = self.get_plan(user_id)
        recipe = self._recipes.get_recipe(recipe_id)

        meal = Meal(
            meal_type=meal_type,
            name=recipe.name,
            description=recipe.description,
            recipe_id=recipe.recipe_id,
            estimated_cost=recipe.total_cost,
        )

        days = [d.model_copy(deep=True) for d in plan.days]
        target = next((d for d in days if d.day == day), None)
        if target is None:
            target = MealPlanDay(day=day, meals=[])
            days.append(target)
            days.sort(key=lambda d: DAYS.index(d.day) if d.day in DAYS else len(DAYS))

        # A slot holds at most one meal; adding replaces it
        target.meals = [m for m in target.meals if m.meal_type != meal_type]
        target.meals.append(meal)

        return self._refresh_and_save(user_id, plan.model_copy(update={"days": days}))

    def remove_meal(self, user_id: str, day: str, meal_type: MealType) -> MealPlan:
        _check_day(day)
        plan = self.get_plan(user_id)

        days = [d.model_copy(deep=True) for d in plan.days]
        target = next((d for d in days if d.day == day), None)
        if target is None or not any(m.meal_type == meal_type for m in target.meals):
            raise MealPlanNotFoundError(
                user_id, f"No {meal_type.value} planned for {day}"
            )
        target.meals = [m for m in target.meals if m.meal_type != meal_type]

        return self._refresh_and_save(user_id, plan.model_copy(update={"days": days}))

    # ------------------------------------------------------------------
    # Shopping list
    # ------------------------------------------------------------------

    def get_shopping_list(self, user_id: str) -> ShoppingList:
        plan = self.get_plan(user_id)
        return self._build_shopping_list(plan.days)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_shopping_list(self, days: list[MealPlanDay]) -> ShoppingList:
        recipe_ids = [m.recipe_id for d in days for m in d.meals if m.recipe_id]
        catalog = self._recipes.get_catalog(recipe_ids)

        unresolved = find_unresolved_recipe_ids(days, catalog)
        if unresolved:
            log.warning(
                "Skipping %d unknown recipe id(s) in meal plan: %s",
                len(unresolved),
                ", ".join(unresolved),
            )
        return generate_shopping_list(days, catalog)

    def _refresh_and_save(self, user_id: str, plan: MealPlan) -> MealPlan:
        shopping_list = self._build_shopping_list(plan.days)
        refreshed = plan.model_copy(
            update={
                "shopping_list": shopping_list,
                "total_weekly_cost": sum(
                    m.estimated_cost for d in plan.days for m in d.meals
                ),
                "updated_at": datetime.now(),
            }
        )
        self._store.save_meal_plan(user_id, refreshed)
        log.info(
            "Saved meal plan for %s: %d store(s), $%.2f",
            user_id,
            len(shopping_list.stores),
            shopping_list.total_cost,
        )
        return refreshed
