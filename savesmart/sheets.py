import json
import logging
from datetime import datetime
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from pydantic import ValidationError

from savesmart.models import MealPlan, Recipe

log = logging.getLogger(__name__)


SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.readonly",
]


class SheetsClient:
    """Recipe and meal-plan item store backed by a Google spreadsheet.

    Each row holds the item key plus its full JSON document, so the sheet acts
    as a plain get/put store keyed by recipe id or user id.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: str = None,
        credentials_json: str = None,
        spreadsheet: Optional[gspread.Spreadsheet] = None,
    ):
        if spreadsheet is None:
            if credentials_json:
                info = json.loads(credentials_json)
                creds = Credentials.from_service_account_info(info, scopes=SCOPES)
            else:
                creds = Credentials.from_service_account_file(credentials_path, scopes=SCOPES)
            gc = gspread.authorize(creds)
            spreadsheet = gc.open_by_key(spreadsheet_id)
        self._spreadsheet = spreadsheet
        self._recipes_ws = self._spreadsheet.worksheet("recipes")
        self._plans_ws = self._spreadsheet.worksheet("meal_plans")

    # ------------------------------------------------------------------
    # Recipes
    # ------------------------------------------------------------------

    def get_all_recipes(self) -> list[Recipe]:
        recipes = []
        for r in self._recipes_ws.get_all_records():
            recipe = self._row_to_recipe(r)
            if recipe is not None:
                recipes.append(recipe)
        return recipes

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for r in self._recipes_ws.get_all_records():
            if str(r["recipe_id"]) == recipe_id:
                return self._row_to_recipe(r)
        return None

    def save_recipe(self, recipe: Recipe) -> None:
        row = [
            recipe.recipe_id,
            recipe.name,
            ",".join(recipe.dietary_tags),
            recipe.model_dump_json(by_alias=True),
        ]
        records = self._recipes_ws.get_all_records()
        for idx, r in enumerate(records):
            if str(r["recipe_id"]) == recipe.recipe_id:
                row_num = idx + 2  # 1-indexed + header
                self._recipes_ws.update(
                    f"A{row_num}:D{row_num}", [row], value_input_option="RAW"
                )
                return
        self._recipes_ws.append_row(row, value_input_option="RAW")

    # ------------------------------------------------------------------
    # Meal plans
    # ------------------------------------------------------------------

    def get_meal_plan(self, user_id: str) -> Optional[MealPlan]:
        for r in self._plans_ws.get_all_records():
            if str(r["user_id"]) == user_id:
                return self._row_to_plan(r)
        return None

    def save_meal_plan(self, user_id: str, plan: MealPlan) -> None:
        row = [
            user_id,
            plan.model_dump_json(by_alias=True),
            datetime.now().isoformat(),
        ]
        records = self._plans_ws.get_all_records()

        # One row per user, overwritten in place
        for idx, r in enumerate(records):
            if str(r["user_id"]) == user_id:
                row_num = idx + 2
                self._plans_ws.update(
                    f"A{row_num}:C{row_num}", [row], value_input_option="RAW"
                )
                return
        self._plans_ws.append_row(row, value_input_option="RAW")

    def delete_meal_plan(self, user_id: str) -> bool:
        records = self._plans_ws.get_all_records()
        for idx, r in enumerate(records):
            if str(r["user_id"]) == user_id:
                self._plans_ws.delete_rows(idx + 2)
                return True
        return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_recipe(r: dict) -> Optional[Recipe]:
        try:
            return Recipe.model_validate_json(r["data"])
        except ValidationError as e:
            log.warning("Skipping unreadable recipe row %s: %s", r.get("recipe_id"), e)
            return None

    @staticmethod
    def _row_to_plan(r: dict) -> Optional[MealPlan]:
        try:
            return MealPlan.model_validate_json(r["data"])
        except ValidationError as e:
            log.warning("Skipping unreadable meal plan row %s: %s", r.get("user_id"), e)
            return None
