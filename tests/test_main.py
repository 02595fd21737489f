import pytest
from fastapi.testclient import TestClient

from savesmart.errors import MealPlanDraftError
from savesmart.main import app, get_planner, get_recipe_service
from savesmart.models import Recipe


@pytest.fixture
def client(planner, recipe_service):
    app.dependency_overrides[get_planner] = lambda: planner
    app.dependency_overrides[get_recipe_service] = lambda: recipe_service
    # no context manager: skip startup, which would connect to Google Sheets
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(client):
    response = client.put(
        "/api/meal-plan/user-1",
        json={
            "days": [
                {
                    "day": "Monday",
                    "meals": [
                        {"mealType": "dinner", "name": "Carbonara", "recipeId": "carbonara"},
                        {"mealType": "lunch", "name": "Sandwich", "recipeId": None},
                    ],
                }
            ]
        },
    )
    assert response.status_code == 200
    return response.json()["mealPlan"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_recipes(client):
    body = client.get("/api/recipes").json()

    assert [r["recipeId"] for r in body["recipes"]] == ["carbonara", "stir-fry", "omelette"]
    assert body["recipes"][0]["storePricing"] == {
        "coles": 16.5,
        "woolworths": 16.3,
        "cheapest": "woolworths",
        "savings": 0.2,
    }


def test_list_recipes_by_dietary_tags(client):
    body = client.get("/api/recipes", params={"dietaryTags": "vegan, gluten-free"}).json()

    assert [r["recipeId"] for r in body["recipes"]] == ["stir-fry", "omelette"]


def test_get_recipe(client):
    response = client.get("/api/recipes/omelette")

    assert response.status_code == 200
    assert response.json()["name"] == "Omelette"


def test_get_recipe_not_found(client):
    response = client.get("/api/recipes/ghost")

    assert response.status_code == 404
    assert response.json()["resource"] == "Recipe"
    assert response.json()["id"] == "ghost"


def test_put_creates_plan_with_shopping_list(seeded):
    stores = seeded["shoppingList"]["stores"]

    assert [s["storeName"] for s in stores] == ["Coles", "Woolworths"]
    assert seeded["shoppingList"]["totalCost"] == pytest.approx(8.0)


def test_put_updates_existing_plan(client, seeded):
    response = client.put("/api/meal-plan/user-1", json={"notes": "cheap week"})

    plan = response.json()["mealPlan"]
    assert plan["notes"] == "cheap week"
    assert plan["days"] == seeded["days"]


def test_put_rejects_unknown_day(client):
    response = client.put("/api/meal-plan/user-1", json={"days": [{"day": "Caturday", "meals": []}]})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_get_plan(client, seeded):
    response = client.get("/api/meal-plan/user-1")

    assert response.status_code == 200
    assert response.json()["mealPlan"]["shoppingList"] == seeded["shoppingList"]


def test_get_plan_missing(client):
    assert client.get("/api/meal-plan/nobody").status_code == 404


def test_generate_plan(client):
    response = client.post(
        "/api/meal-plan",
        json={"userId": "user-2", "preferences": {"allergies": ["Dairy"], "calorieGoal": 2500}},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Meal plan created successfully"
    assert body["mealPlan"]["preferences"]["calorieGoal"] == 2500
    assert body["mealPlan"]["shoppingList"]["stores"]


def test_generate_plan_requires_user_id(client):
    assert client.post("/api/meal-plan", json={}).status_code == 422


def test_generate_plan_draft_failure(client, claude):
    claude.error = MealPlanDraftError("model returned prose")

    response = client.post("/api/meal-plan", json={"userId": "user-2"})

    assert response.status_code == 502


def test_add_and_remove_meal(client, seeded):
    added = client.post(
        "/api/meal-plan/user-1/meals",
        json={"day": "Tuesday", "mealType": "dinner", "recipeId": "stir-fry"},
    )
    assert added.status_code == 200
    plan = added.json()["mealPlan"]
    assert [d["day"] for d in plan["days"]] == ["Monday", "Tuesday"]
    assert "Other" in [s["storeName"] for s in plan["shoppingList"]["stores"]]

    removed = client.delete("/api/meal-plan/user-1/meals/Tuesday/dinner")
    assert removed.status_code == 200
    assert removed.json()["mealPlan"]["shoppingList"] == seeded["shoppingList"]


def test_add_meal_unknown_recipe(client, seeded):
    response = client.post(
        "/api/meal-plan/user-1/meals",
        json={"day": "Monday", "mealType": "lunch", "recipeId": "ghost"},
    )

    assert response.status_code == 404


def test_add_meal_bad_meal_type(client, seeded):
    response = client.post(
        "/api/meal-plan/user-1/meals",
        json={"day": "Monday", "mealType": "brunch", "recipeId": "omelette"},
    )

    assert response.status_code == 422


def test_remove_empty_slot(client, seeded):
    assert client.delete("/api/meal-plan/user-1/meals/Monday/snack").status_code == 404


def test_shopping_list_endpoint(client, seeded):
    body = client.get("/api/meal-plan/user-1/shopping-list").json()

    assert body["shoppingList"] == seeded["shoppingList"]
    coles = body["shoppingList"]["stores"][0]
    assert {i["name"] for i in coles["items"]} == {"Spaghetti", "Eggs"}
    assert coles["items"][0]["recipeIds"] == ["carbonara"]


def test_delete_plan(client, seeded):
    assert client.delete("/api/meal-plan/user-1").status_code == 204
    assert client.get("/api/meal-plan/user-1").status_code == 404
    assert client.delete("/api/meal-plan/user-1").status_code == 404


def test_put_recipe_is_visible_to_list_and_meal_plan(client, seeded):
    client.get("/api/recipes")

    response = client.put(
        "/api/recipes/kale-salad",
        json={
            "recipeId": "ignored",
            "name": "Kale Salad",
            "dietaryTags": ["vegan"],
            "ingredients": [
                {"name": "Kale", "quantity": 1, "unit": "bunch", "price": 3.0, "source": "woolworths"}
            ],
        },
    )

    assert response.status_code == 200
    assert response.json()["recipeId"] == "kale-salad"
    assert response.json()["storePricing"] is not None
    listed = client.get("/api/recipes").json()["recipes"]
    assert "kale-salad" in [r["recipeId"] for r in listed]

    added = client.post(
        "/api/meal-plan/user-1/meals",
        json={"day": "Monday", "mealType": "lunch", "recipeId": "kale-salad"},
    ).json()["mealPlan"]
    woolworths = next(s for s in added["shoppingList"]["stores"] if s["storeName"] == "Woolworths")
    assert "Kale" in [i["name"] for i in woolworths["items"]]


def test_put_recipe_rejects_negative_price(client):
    response = client.put(
        "/api/recipes/bad",
        json={
            "recipeId": "bad",
            "name": "Bad",
            "ingredients": [{"name": "Kale", "quantity": 1, "unit": "bunch", "price": -1}],
        },
    )

    assert response.status_code == 422


class BrokenPlanner:
    """Planner whose stored data no longer fits the model."""

    def get_plan(self, user_id):
        return Recipe.model_validate({"recipeId": user_id})


def test_internal_validation_errors_are_not_reported_as_bad_requests():
    app.dependency_overrides[get_planner] = BrokenPlanner
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/meal-plan/user-1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
