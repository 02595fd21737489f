from savesmart.grocery_prices import PriceTable
from savesmart.models import Recipe, StorePricing


class RecipePriceCalculator:
    """Prices whole recipes at Coles and Woolworths from a static price table.

    The comparison ignores each ingredient's own ``price``/``source``; it only
    looks the ingredient name up in the table.
    """

    def __init__(self, price_table: PriceTable):
        self._prices = price_table

    def calculate_store_pricing(self, recipe: Recipe) -> StorePricing:
        coles_total = 0.0
        woolworths_total = 0.0
        for ingredient in recipe.ingredients:
            price = self._prices.lookup(ingredient.name)
            coles_total += price.coles_price
            woolworths_total += price.woolworths_price

        coles_total = round(coles_total, 2)
        woolworths_total = round(woolworths_total, 2)

        # Ties go to Coles
        cheapest = "coles" if coles_total <= woolworths_total else "woolworths"

        return StorePricing(
            coles=coles_total,
            woolworths=woolworths_total,
            cheapest=cheapest,
            savings=round(abs(coles_total - woolworths_total), 2),
        )

    def enrich_recipe_with_pricing(self, recipe: Recipe) -> Recipe:
        pricing = self.calculate_store_pricing(recipe)
        return recipe.model_copy(
            update={
                "store_pricing": pricing,
                "total_cost": min(pricing.coles, pricing.woolworths),
            }
        )

    def enrich_recipes_with_pricing(self, recipes: list[Recipe]) -> list[Recipe]:
        return [self.enrich_recipe_with_pricing(r) for r in recipes]
