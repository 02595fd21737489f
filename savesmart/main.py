import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import Field

from savesmart.cache import TTLCache
from savesmart.claude_client import ClaudeClient
from savesmart.config import settings
from savesmart.errors import (
    InvalidArgumentError,
    MealPlanDraftError,
    MealPlanNotFoundError,
    NotFoundError,
)
from savesmart.grocery_prices import australian_price_table
from savesmart.meal_planner import MealPlanner
from savesmart.models import CamelModel, MealPlanDay, MealPlanPreferences, MealType, Recipe
from savesmart.pricing import RecipePriceCalculator
from savesmart.recipes import RecipeService
from savesmart.sheets import SheetsClient

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=settings.log_level,
)
log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Services (shared singletons, built on startup)
# ---------------------------------------------------------------------------

_recipes: RecipeService | None = None
_planner: MealPlanner | None = None


def _build_services() -> tuple[RecipeService, MealPlanner]:
    sheets = SheetsClient(
        spreadsheet_id=settings.google_spreadsheet_id,
        credentials_json=settings.google_credentials_json,
        credentials_path=settings.google_credentials_path,
    )
    recipes = RecipeService(
        store=sheets,
        calculator=RecipePriceCalculator(australian_price_table),
        cache=TTLCache(),
        ttl=settings.recipe_cache_ttl,
    )
    claude = ClaudeClient(api_key=settings.anthropic_api_key, model=settings.anthropic_model)
    planner = MealPlanner(store=sheets, recipes=recipes, claude=claude)
    return recipes, planner


def get_recipe_service() -> RecipeService:
    return _recipes


def get_planner() -> MealPlanner:
    return _planner


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class GeneratePlanRequest(CamelModel):
    user_id: str
    preferences: MealPlanPreferences = Field(default_factory=MealPlanPreferences)


class UpdatePlanRequest(CamelModel):
    days: Optional[list[MealPlanDay]] = None
    preferences: Optional[MealPlanPreferences] = None
    notes: Optional[str] = None


class AddMealRequest(CamelModel):
    day: str
    meal_type: MealType
    recipe_id: str


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

fastapi_app = FastAPI(title="SaveSmart")
app = fastapi_app  # alias expected by ASGI servers


@fastapi_app.on_event("startup")
async def startup() -> None:
    global _recipes, _planner
    _recipes, _planner = _build_services()
    log.info("Services ready (spreadsheet %s)", settings.google_spreadsheet_id)


@fastapi_app.exception_handler(NotFoundError)
async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": "Resource not found",
            "resource": exc.resource,
            "id": exc.identifier,
            "message": str(exc),
        },
    )


@fastapi_app.exception_handler(InvalidArgumentError)
async def bad_request(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "message": str(exc)},
    )


@fastapi_app.exception_handler(MealPlanDraftError)
async def draft_failed(request: Request, exc: MealPlanDraftError) -> JSONResponse:
    log.error("Meal plan drafting failed: %s", exc)
    return JSONResponse(
        status_code=502,
        content={"error": "Failed to create meal plan", "message": str(exc)},
    )


@fastapi_app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# -- recipes ----------------------------------------------------------------


@fastapi_app.get("/api/recipes")
def list_recipes(
    dietary_tags: Optional[str] = Query(None, alias="dietaryTags"),
    recipes: RecipeService = Depends(get_recipe_service),
) -> dict:
    tags = dietary_tags.split(",") if dietary_tags else None
    return {"recipes": [r.model_dump(mode="json", by_alias=True) for r in recipes.list_recipes(tags)]}


@fastapi_app.get("/api/recipes/{recipe_id}")
def get_recipe(
    recipe_id: str,
    recipes: RecipeService = Depends(get_recipe_service),
) -> dict:
    return recipes.get_recipe(recipe_id).model_dump(mode="json", by_alias=True)


@fastapi_app.put("/api/recipes/{recipe_id}")
def save_recipe(
    recipe_id: str,
    body: Recipe,
    recipes: RecipeService = Depends(get_recipe_service),
) -> dict:
    saved = recipes.save_recipe(body.model_copy(update={"recipe_id": recipe_id}))
    return saved.model_dump(mode="json", by_alias=True)


# -- meal plans -------------------------------------------------------------


@fastapi_app.post("/api/meal-plan", status_code=201)
def generate_plan(
    body: GeneratePlanRequest,
    planner: MealPlanner = Depends(get_planner),
) -> dict:
    plan = planner.generate_plan(body.user_id, body.preferences)
    return {
        "message": "Meal plan created successfully",
        "mealPlan": plan.model_dump(mode="json", by_alias=True),
    }


@fastapi_app.get("/api/meal-plan/{user_id}")
def get_plan(user_id: str, planner: MealPlanner = Depends(get_planner)) -> dict:
    return {"mealPlan": planner.get_plan(user_id).model_dump(mode="json", by_alias=True)}


@fastapi_app.put("/api/meal-plan/{user_id}")
def put_plan(
    user_id: str,
    body: UpdatePlanRequest,
    planner: MealPlanner = Depends(get_planner),
) -> dict:
    try:
        planner.get_plan(user_id)
    except MealPlanNotFoundError:
        plan = planner.create_plan(
            user_id, body.days or [], body.preferences, body.notes or ""
        )
    else:
        plan = planner.update_plan(user_id, body.days, body.preferences, body.notes)
    return {"mealPlan": plan.model_dump(mode="json", by_alias=True)}


@fastapi_app.delete("/api/meal-plan/{user_id}", status_code=204)
def delete_plan(user_id: str, planner: MealPlanner = Depends(get_planner)) -> Response:
    planner.delete_plan(user_id)
    return Response(status_code=204)


@fastapi_app.post("/api/meal-plan/{user_id}/meals")
def add_meal(
    user_id: str,
    body: AddMealRequest,
    planner: MealPlanner = Depends(get_planner),
) -> dict:
    plan = planner.add_meal(user_id, body.day, body.meal_type, body.recipe_id)
    return {"mealPlan": plan.model_dump(mode="json", by_alias=True)}


@fastapi_app.delete("/api/meal-plan/{user_id}/meals/{day}/{meal_type}")
def remove_meal(
    user_id: str,
    day: str,
    meal_type: MealType,
    planner: MealPlanner = Depends(get_planner),
) -> dict:
    plan = planner.remove_meal(user_id, day, meal_type)
    return {"mealPlan": plan.model_dump(mode="json", by_alias=True)}


@fastapi_app.get("/api/meal-plan/{user_id}/shopping-list")
def get_shopping_list(user_id: str, planner: MealPlanner = Depends(get_planner)) -> dict:
    shopping_list = planner.get_shopping_list(user_id)
    return {"shoppingList": shopping_list.model_dump(mode="json", by_alias=True)}
