"""
Australian grocery price table.

Average shelf prices at Coles and Woolworths, keyed by lowercase product name.
To refresh, check current prices on coles.com.au / woolworths.com.au, edit the
entries below and bump LAST_UPDATED.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


LAST_UPDATED = "2026-02-12"


@dataclass(frozen=True)
class PriceData:
    coles_price: float
    woolworths_price: float
    unit: str


DEFAULT_PRICE = PriceData(5.00, 5.20, "item")


class PriceTable:
    """Read-only product-name -> PriceData lookup with loose name matching."""

    def __init__(
        self,
        prices: Mapping[str, PriceData],
        default: PriceData = DEFAULT_PRICE,
    ):
        self._prices = MappingProxyType(
            {name.lower().strip(): data for name, data in prices.items()}
        )
        self._default = default

    def __len__(self) -> int:
        return len(self._prices)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def find(self, name: str) -> Optional[PriceData]:
        normalized = name.lower().strip()
        if not normalized:
            return None

        exact = self._prices.get(normalized)
        if exact is not None:
            return exact

        # First entry in table order whose key and the name overlap
        for key, data in self._prices.items():
            if key in normalized or normalized in key:
                return data
        return None

    def lookup(self, name: str) -> PriceData:
        found = self.find(name)
        return found if found is not None else self._default


AUSTRALIAN_GROCERY_PRICES: dict[str, PriceData] = {
    # Pasta & Grains
    "spaghetti": PriceData(2.50, 2.70, "500g"),
    "pasta": PriceData(2.50, 2.70, "500g"),
    "penne": PriceData(2.50, 2.60, "500g"),
    "linguine": PriceData(3.00, 3.20, "500g"),
    "rice": PriceData(4.00, 3.80, "1kg"),
    "basmati rice": PriceData(5.00, 5.20, "1kg"),
    "rice noodles": PriceData(3.50, 3.70, "400g"),
    "egg noodles": PriceData(2.50, 2.40, "300g"),
    "quinoa": PriceData(6.00, 6.50, "400g"),
    "rolled oats": PriceData(3.00, 2.90, "1kg"),

    # Proteins - Meat
    "chicken breast": PriceData(12.00, 11.50, "1kg"),
    "chicken thighs": PriceData(10.00, 10.50, "1kg"),
    "ground beef": PriceData(14.00, 13.50, "1kg"),
    "beef": PriceData(18.00, 18.50, "1kg"),
    "bacon": PriceData(8.00, 7.80, "250g"),
    "ground lamb": PriceData(16.00, 16.50, "1kg"),

    # Proteins - Seafood
    "salmon fillets": PriceData(30.00, 29.00, "1kg"),
    "white fish fillets": PriceData(20.00, 21.00, "1kg"),
    "shrimp": PriceData(40.00, 38.50, "1kg"),
    "prawns": PriceData(40.00, 38.50, "1kg"),
    "mussels": PriceData(12.00, 12.50, "500g"),
    "canned tuna": PriceData(3.50, 3.30, "185g"),

    # Proteins - Vegetarian
    "tofu": PriceData(3.50, 3.70, "300g"),
    "chickpeas": PriceData(2.00, 1.90, "400g can"),
    "black beans": PriceData(2.00, 2.10, "400g can"),
    "cannellini beans": PriceData(2.00, 2.20, "400g can"),
    "red lentils": PriceData(3.00, 2.90, "500g"),
    "lentils": PriceData(3.00, 2.90, "500g"),

    # Dairy & Eggs
    "eggs": PriceData(6.00, 5.80, "12 pack"),
    "milk": PriceData(3.50, 3.40, "2L"),
    "almond milk": PriceData(4.00, 4.20, "1L"),
    "butter": PriceData(5.00, 5.20, "500g"),
    "cheese": PriceData(10.00, 9.80, "500g"),
    "cheddar cheese": PriceData(10.00, 9.80, "500g"),
    "parmesan cheese": PriceData(8.00, 8.50, "200g"),
    "mozzarella": PriceData(9.00, 9.20, "500g"),
    "feta cheese": PriceData(8.00, 7.80, "200g"),
    "cream": PriceData(4.00, 4.20, "300ml"),
    "coconut cream": PriceData(3.50, 3.30, "400ml"),
    "coconut milk": PriceData(3.50, 3.30, "400ml"),
    "yogurt": PriceData(5.00, 5.20, "1kg"),
    "sour cream": PriceData(3.00, 3.10, "300ml"),

    # Vegetables
    "tomatoes": PriceData(5.00, 4.80, "1kg"),
    "cherry tomatoes": PriceData(5.00, 5.20, "250g"),
    "onion": PriceData(3.00, 2.90, "1kg"),
    "onions": PriceData(3.00, 2.90, "1kg"),
    "garlic": PriceData(2.00, 2.10, "100g"),
    "carrots": PriceData(2.50, 2.40, "1kg"),
    "broccoli": PriceData(4.00, 4.20, "500g"),
    "bell peppers": PriceData(4.00, 3.80, "each"),
    "capsicum": PriceData(4.00, 3.80, "each"),
    "lettuce": PriceData(3.50, 3.30, "each"),
    "romaine lettuce": PriceData(3.50, 3.30, "each"),
    "cucumber": PriceData(2.50, 2.60, "each"),
    "celery": PriceData(3.00, 3.20, "bunch"),
    "mushrooms": PriceData(6.00, 5.80, "500g"),
    "sweet potato": PriceData(4.00, 4.20, "1kg"),
    "potatoes": PriceData(4.00, 3.80, "2kg"),
    "kale": PriceData(4.00, 4.20, "bunch"),
    "spinach": PriceData(4.00, 3.80, "120g"),
    "eggplant": PriceData(5.00, 5.20, "1kg"),
    "zucchini": PriceData(4.00, 3.90, "1kg"),
    "cauliflower": PriceData(5.00, 4.80, "each"),
    "asparagus": PriceData(8.00, 8.50, "250g"),
    "corn": PriceData(3.00, 3.20, "400g"),
    "avocado": PriceData(3.00, 2.80, "each"),
    "bean sprouts": PriceData(2.50, 2.60, "250g"),
    "edamame": PriceData(5.00, 5.20, "400g"),
    "mixed vegetables": PriceData(5.00, 4.80, "1kg frozen"),

    # Fruits
    "lemon": PriceData(1.00, 0.90, "each"),
    "lime": PriceData(1.00, 1.10, "each"),
    "mixed berries": PriceData(6.00, 6.50, "300g"),
    "dates": PriceData(8.00, 7.80, "400g"),

    # Pantry Staples
    "flour": PriceData(3.00, 2.90, "1kg"),
    "sugar": PriceData(3.00, 3.10, "1kg"),
    "salt": PriceData(1.50, 1.40, "500g"),
    "olive oil": PriceData(12.00, 11.50, "1L"),
    "oil": PriceData(8.00, 7.80, "1L"),
    "vegetable oil": PriceData(8.00, 7.80, "1L"),
    "sesame oil": PriceData(6.00, 6.20, "250ml"),
    "soy sauce": PriceData(3.50, 3.30, "250ml"),
    "tomato sauce": PriceData(4.00, 4.20, "500g"),
    "tomato paste": PriceData(2.50, 2.40, "200g"),
    "honey": PriceData(8.00, 8.50, "500g"),
    "peanut butter": PriceData(5.00, 4.80, "375g"),
    "tahini": PriceData(6.00, 6.20, "375g"),
    "bread": PriceData(3.50, 3.30, "loaf"),
    "sourdough bread": PriceData(5.00, 5.20, "loaf"),
    "tortillas": PriceData(4.00, 4.20, "8 pack"),
    "pita bread": PriceData(4.00, 3.80, "6 pack"),
    "taco shells": PriceData(4.50, 4.70, "12 pack"),
    "breadcrumbs": PriceData(3.00, 2.90, "300g"),
    "puff pastry": PriceData(4.50, 4.70, "400g"),

    # Sauces & Condiments
    "caesar dressing": PriceData(4.00, 4.20, "250ml"),
    "balsamic vinegar": PriceData(5.00, 5.20, "250ml"),
    "teriyaki sauce": PriceData(4.00, 3.80, "250ml"),
    "enchilada sauce": PriceData(4.00, 4.20, "400g"),
    "buffalo sauce": PriceData(4.50, 4.70, "250ml"),
    "salsa": PriceData(4.00, 3.80, "300g"),
    "vegan ranch": PriceData(5.00, 5.20, "250ml"),
    "gravy": PriceData(3.00, 3.10, "300ml"),
    "white wine": PriceData(12.00, 11.50, "750ml"),
    "beer": PriceData(5.00, 5.20, "375ml"),

    # Spices & Herbs
    "black pepper": PriceData(3.00, 3.10, "50g"),
    "pepper": PriceData(3.00, 3.10, "50g"),
    "cumin": PriceData(3.00, 3.20, "40g"),
    "turmeric": PriceData(3.00, 2.90, "40g"),
    "curry powder": PriceData(3.50, 3.70, "50g"),
    "garam masala": PriceData(4.00, 4.20, "50g"),
    "paprika": PriceData(3.00, 3.10, "50g"),
    "taco seasoning": PriceData(2.00, 2.10, "30g"),
    "biryani spices": PriceData(4.00, 4.20, "50g"),
    "fresh basil": PriceData(4.00, 3.80, "bunch"),
    "fresh herbs": PriceData(4.00, 3.80, "bunch"),
    "lemongrass": PriceData(3.00, 3.20, "3 stalks"),
    "thai chili paste": PriceData(4.00, 4.20, "100g"),
    "saffron": PriceData(15.00, 15.50, "1g"),
    "cocoa powder": PriceData(5.00, 5.20, "125g"),

    # Nuts & Seeds
    "almonds": PriceData(12.00, 11.50, "500g"),
    "peanuts": PriceData(6.00, 6.20, "500g"),
    "coconut flakes": PriceData(5.00, 5.20, "250g"),
    "sesame seeds": PriceData(4.00, 4.20, "150g"),

    # Stock & Broth
    "chicken stock": PriceData(3.00, 2.90, "1L"),
    "vegetable stock": PriceData(3.00, 2.90, "1L"),
    "beef stock": PriceData(3.00, 3.10, "1L"),

    # Specialty Items
    "paella rice": PriceData(5.00, 5.20, "500g"),
    "macaroni": PriceData(2.50, 2.60, "500g"),
    "béchamel sauce": PriceData(4.00, 4.20, "500ml"),
}

australian_price_table = PriceTable(AUSTRALIAN_GROCERY_PRICES)
