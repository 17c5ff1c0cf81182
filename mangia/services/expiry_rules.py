"""Default shelf lives by ingredient, after the USDA FoodKeeper guidelines."""

from typing import NamedTuple

from mangia.models.enums import IngredientCategory


class ExpiryRule(NamedTuple):
    keywords: tuple[str, ...]
    fridge_days: int | None  # None = not normally refrigerated
    pantry_days: int | None  # None = not normally kept at room temperature


# Items already frozen keep this long regardless of what they are
FROZEN_DEFAULT_DAYS = 180

EXPIRY_RULES: dict[IngredientCategory, tuple[ExpiryRule, ...]] = {
    IngredientCategory.PRODUCE: (
        ExpiryRule(("lettuce", "spinach", "kale", "arugula", "chard", "watercress", "endive", "bok choy"), 5, None),
        ExpiryRule(("strawberry", "blueberry", "raspberry", "blackberry", "berry"), 5, None),
        ExpiryRule(("basil", "cilantro", "parsley", "mint", "dill", "tarragon", "chive"), 7, None),
        ExpiryRule(("tomato", "avocado", "banana", "peach", "plum", "pear", "mango", "kiwi", "papaya"), 5, 3),
        ExpiryRule(("mushroom",), 7, None),
        ExpiryRule(("broccoli", "cauliflower", "asparagus", "green bean"), 5, None),
        ExpiryRule(("bell pepper", "pepper", "zucchini", "cucumber", "eggplant", "squash", "celery"), 7, None),
        ExpiryRule(("apple", "orange", "lemon", "lime", "grapefruit", "clementine"), 21, 7),
        ExpiryRule(("potato", "sweet potato", "yam"), None, 30),
        ExpiryRule(("onion", "shallot", "garlic", "ginger"), None, 30),
        ExpiryRule(("carrot", "beet", "turnip", "radish", "parsnip"), 21, None),
        ExpiryRule(("cabbage",), 14, None),
        ExpiryRule(("corn",), 3, None),
        ExpiryRule(("watermelon", "cantaloupe", "honeydew", "melon"), 5, 2),
        ExpiryRule(("grape", "cherry"), 7, None),
        ExpiryRule(("pineapple",), 5, 2),
    ),
    IngredientCategory.MEAT_SEAFOOD: (
        ExpiryRule(("chicken", "turkey", "duck", "poultry"), 2, None),
        ExpiryRule(("ground beef", "ground turkey", "ground pork", "ground meat", "ground"), 2, None),
        ExpiryRule(
            ("salmon", "tuna", "cod", "tilapia", "halibut", "trout", "bass", "snapper", "mahi", "swordfish", "fish"),
            2,
            None,
        ),
        ExpiryRule(
            ("shrimp", "scallop", "mussel", "clam", "oyster", "lobster", "crab", "crawfish", "squid", "calamari", "octopus"),
            2,
            None,
        ),
        ExpiryRule(("steak", "beef", "pork", "lamb", "veal", "bison", "venison"), 4, None),
        ExpiryRule(("bacon",), 7, None),
        ExpiryRule(("sausage",), 3, None),
        ExpiryRule(("ham", "prosciutto", "pancetta", "deli", "lunch meat"), 5, None),
    ),
    IngredientCategory.DAIRY_EGGS: (
        ExpiryRule(("milk", "half and half", "buttermilk", "cream"), 7, None),
        ExpiryRule(("egg", "eggs"), 28, None),
        ExpiryRule(("yogurt", "kefir"), 14, None),
        ExpiryRule(("butter", "ghee"), 30, None),
        ExpiryRule(("parmesan", "cheddar", "gouda", "gruyere", "swiss", "provolone"), 42, None),
        ExpiryRule(
            ("mozzarella", "brie", "ricotta", "cream cheese", "feta", "goat cheese", "mascarpone", "queso", "paneer"),
            7,
            None,
        ),
        ExpiryRule(("sour cream", "crème fraîche", "creme fraiche"), 14, None),
        ExpiryRule(("cottage cheese",), 7, None),
    ),
    IngredientCategory.BAKERY: (
        ExpiryRule(("bread", "baguette", "ciabatta", "sourdough", "brioche", "focaccia"), 14, 5),
        ExpiryRule(("tortilla", "pita", "naan", "flatbread", "wrap"), 14, 7),
        ExpiryRule(("bagel", "english muffin", "roll", "bun", "croissant"), 7, 3),
        ExpiryRule(("cake", "cupcake", "muffin", "danish", "pastry", "donut", "doughnut", "scone"), 5, 2),
    ),
    IngredientCategory.FROZEN: (
        ExpiryRule(("frozen",), None, None),
        ExpiryRule(("ice cream", "gelato", "sorbet", "sherbet"), None, None),
    ),
    IngredientCategory.CANNED: (
        ExpiryRule(("canned", "can of", "beans", "chickpeas", "lentils"), None, 730),
        ExpiryRule(("tomato sauce", "tomato paste", "diced tomatoes", "crushed tomatoes", "marinara", "salsa"), None, 730),
        ExpiryRule(("broth", "stock"), None, 730),
        ExpiryRule(("coconut milk",), None, 730),
        ExpiryRule(("olives", "capers", "artichoke hearts"), None, 730),
    ),
    IngredientCategory.PANTRY: (
        ExpiryRule(
            ("flour", "sugar", "brown sugar", "powdered sugar", "cornstarch", "baking powder", "baking soda"),
            None,
            365,
        ),
        ExpiryRule(("rice", "quinoa", "couscous", "oats", "cereal", "granola"), None, 365),
        ExpiryRule(
            ("pasta", "spaghetti", "penne", "fusilli", "macaroni", "lasagna", "noodle", "ramen", "udon", "soba"),
            None,
            730,
        ),
        ExpiryRule(("olive oil", "vegetable oil", "coconut oil", "sesame oil", "oil"), None, 180),
        ExpiryRule(("vinegar", "soy sauce", "fish sauce", "worcestershire", "hot sauce", "sriracha"), None, 730),
        ExpiryRule(("honey", "maple syrup", "molasses", "agave", "corn syrup"), None, 730),
        ExpiryRule(("peanut butter", "almond butter", "tahini"), None, 180),
        ExpiryRule(("jam", "jelly", "preserves"), 180, 365),
        ExpiryRule(("mustard", "ketchup", "mayonnaise", "bbq sauce", "hoisin", "teriyaki"), 180, None),
        ExpiryRule(
            (
                "salt", "pepper", "cinnamon", "cumin", "paprika", "oregano", "thyme", "turmeric", "cayenne",
                "chili powder", "garlic powder", "onion powder", "garam masala", "curry powder", "spice",
            ),
            None,
            730,
        ),
        ExpiryRule(("vanilla", "extract"), None, 730),
        ExpiryRule(("chocolate", "cocoa", "chocolate chip"), None, 365),
        ExpiryRule(("coffee", "tea"), None, 365),
        ExpiryRule(("almond", "walnut", "pecan", "cashew", "pistachio", "hazelnut", "pine nut", "nut"), None, 180),
        ExpiryRule(("raisin", "dried cranberry", "dried apricot", "prune", "dried fruit"), None, 180),
        ExpiryRule(("cracker", "chip", "tortilla chip", "breadcrumb", "panko"), None, 90),
        ExpiryRule(("yeast",), 120, None),
    ),
}
