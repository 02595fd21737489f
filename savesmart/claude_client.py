import json
import re
from typing import Optional

import anthropic
from pydantic import ValidationError

from savesmart.errors import MealPlanDraftError
from savesmart.models import DAYS, AIMealPlanResponse, MealPlanPreferences, Recipe

_SYSTEM_PROMPT = """\
You are a budget-conscious meal planning assistant for Australian households. \
Always respond with valid JSON and nothing else.
"""


def _extract_json(text: str) -> str:
    """Strip markdown code fences if Claude wraps the response in them."""
    text = text.strip()
    match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if match:
        return match.group(1).strip()
    return text


def _describe_recipe(recipe: Recipe) -> str:
    tags = f" [{', '.join(recipe.dietary_tags)}]" if recipe.dietary_tags else ""
    ingredients = ", ".join(i.name for i in recipe.ingredients)
    return f"- {recipe.recipe_id}: {recipe.name}{tags} (${recipe.total_cost:.2f}; {ingredients})"


class ClaudeClient:
    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-6",
        client: Optional[anthropic.Anthropic] = None,
    ):
        self._client = client or anthropic.Anthropic(api_key=api_key)
        self._model = model

    def draft_meal_plan(
        self,
        preferences: MealPlanPreferences,
        recipes: list[Recipe],
        days: list[str] = DAYS,
    ) -> AIMealPlanResponse:
        prompt_parts = [
            f"Plan breakfast, lunch and dinner for: {', '.join(days)}.",
            f"Daily calorie goal: {preferences.calorie_goal}.",
        ]
        if preferences.allergies:
            prompt_parts.append(f"Allergies (never include): {', '.join(preferences.allergies)}.")
        if preferences.diet_type:
            prompt_parts.append(f"Diet: {preferences.diet_type}.")
        if preferences.cultural_preference:
            prompt_parts.append(f"Preferred cuisine: {preferences.cultural_preference}.")
        if preferences.notes:
            prompt_parts.append(f"Notes from the user: {preferences.notes}.")

        if recipes:
            catalog = "\n".join(_describe_recipe(r) for r in recipes)
            prompt_parts.append(
                "Prefer these recipes and reference them by id:\n" + catalog + "\n"
            )

        prompt_parts.append(
            """
Return a JSON object with:
- days: array of {day, meals}, day being the weekday name
  - meals: array of {mealType, name, description, recipeId, estimatedCalories, estimatedCost}
    - mealType is one of "breakfast", "lunch", "dinner", "snack"
    - recipeId is an id from the list above, or null for a custom meal
- totalWeeklyCost (number, AUD)
- nutritionSummary: {averageDailyCalories, proteinGrams, carbsGrams, fatGrams}
- notes (string, one or two sentences)
"""
        )

        message = self._client.messages.create(
            model=self._model,
            max_tokens=4096,
            system=_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": " ".join(prompt_parts)}],
        )

        raw = _extract_json(message.content[0].text)
        try:
            return AIMealPlanResponse.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            raise MealPlanDraftError(f"Unusable meal plan from model: {e}") from e
