import logging
from typing import Iterable, Optional

from savesmart.cache import RECIPES_TTL, TTLCache
from savesmart.errors import InvalidArgumentError, RecipeNotFoundError
from savesmart.models import Recipe
from savesmart.pricing import RecipePriceCalculator
from savesmart.sheets import SheetsClient

log = logging.getLogger(__name__)


class RecipeService:
    def __init__(
        self,
        store: SheetsClient,
        calculator: RecipePriceCalculator,
        cache: TTLCache,
        ttl: float = RECIPES_TTL,
    ):
        self._store = store
        self._calculator = calculator
        self._cache = cache
        self._ttl = ttl
        self._list_keys: set[str] = set()

    def list_recipes(self, dietary_tags: Optional[list[str]] = None) -> list[Recipe]:
        tags = [t.strip() for t in dietary_tags or [] if t.strip()]
        cache_key = f"recipes:{','.join(tags) or 'all'}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            log.debug("Returning cached recipes for %s", cache_key)
            return cached

        recipes = self._store.get_all_recipes()
        if tags:
            recipes = [r for r in recipes if any(t in r.dietary_tags for t in tags)]
        enriched = self._calculator.enrich_recipes_with_pricing(recipes)

        self._cache.set(cache_key, enriched, self._ttl)
        self._list_keys.add(cache_key)
        return enriched

    def get_recipe(self, recipe_id: str) -> Recipe:
        if not recipe_id or not recipe_id.strip():
            raise InvalidArgumentError("recipeId is required and must be a non-empty string")

        cache_key = f"recipe:{recipe_id}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        recipe = self._store.get_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        enriched = self._calculator.enrich_recipe_with_pricing(recipe)

        self._cache.set(cache_key, enriched, self._ttl)
        return enriched

    def get_catalog(self, recipe_ids: Iterable[str]) -> list[Recipe]:
        # Resolved one by one so the catalog agrees with get_recipe
        catalog = []
        for recipe_id in dict.fromkeys(rid for rid in recipe_ids if rid):
            try:
                catalog.append(self.get_recipe(recipe_id))
            except RecipeNotFoundError:
                continue
        return catalog

    def save_recipe(self, recipe: Recipe) -> Recipe:
        if not recipe.recipe_id.strip():
            raise InvalidArgumentError("recipeId is required and must be a non-empty string")
        self._store.save_recipe(recipe)
        self.invalidate(recipe.recipe_id)
        log.info("Saved recipe %s", recipe.recipe_id)
        return self.get_recipe(recipe.recipe_id)

    def invalidate(self, recipe_id: Optional[str] = None) -> None:
        if recipe_id is None:
            self._cache.clear()
            return
        self._cache.invalidate(f"recipe:{recipe_id}")
        list_keys, self._list_keys = self._list_keys, set()
        for key in list_keys:
            self._cache.invalidate(key)
