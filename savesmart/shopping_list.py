"""
Shopping list generation.

Turns a weekly meal plan plus the recipes it references into a shopping list
grouped by store. Ingredients sharing a (name, unit) pair within one store are
merged: quantities and prices are summed and every contributing recipe id is
logged in ``recipe_ids``. Units are never converted and names are compared
case-sensitively, so "Flour"/g and "Flour"/kg stay separate items.

Meals without a recipe id, and recipe ids missing from the catalog, contribute
nothing. Use ``find_unresolved_recipe_ids`` to report the latter.
"""

from typing import Iterable

from savesmart.models import (
    MealPlanDay,
    Recipe,
    ShoppingList,
    ShoppingListItem,
    ShoppingListStore,
    Store,
)


def normalize_store_name(source: str) -> str:
    return Store.from_source(source).value


def generate_shopping_list(
    days: Iterable[MealPlanDay],
    recipes: Iterable[Recipe],
) -> ShoppingList:
    recipes_by_id = {r.recipe_id: r for r in recipes}

    # store name -> (name, unit) -> item; dicts keep first-occurrence order
    buckets: dict[str, dict[tuple[str, str], ShoppingListItem]] = {}

    for day in days:
        for meal in day.meals:
            if not meal.recipe_id:
                continue
            recipe = recipes_by_id.get(meal.recipe_id)
            if recipe is None:
                continue

            for ing in recipe.ingredients:
                items = buckets.setdefault(ing.store.value, {})
                key = (ing.name, ing.unit)
                item = items.get(key)
                if item is None:
                    items[key] = ShoppingListItem(
                        name=ing.name,
                        quantity=ing.quantity,
                        unit=ing.unit,
                        price=ing.price,
                        recipe_ids=[meal.recipe_id],
                    )
                else:
                    item.quantity += ing.quantity
                    item.price += ing.price
                    item.recipe_ids.append(meal.recipe_id)

    stores = [
        ShoppingListStore(
            store_name=store_name,
            items=list(items.values()),
            subtotal=sum(item.price for item in items.values()),
        )
        for store_name, items in buckets.items()
    ]
    stores.sort(key=lambda s: s.store_name)

    return ShoppingList(
        stores=stores,
        total_cost=sum(s.subtotal for s in stores),
    )


def find_unresolved_recipe_ids(
    days: Iterable[MealPlanDay],
    recipes: Iterable[Recipe],
) -> list[str]:
    known = {r.recipe_id for r in recipes}
    missing: list[str] = []
    for day in days:
        for meal in day.meals:
            if meal.recipe_id and meal.recipe_id not in known and meal.recipe_id not in missing:
                missing.append(meal.recipe_id)
    return missing
