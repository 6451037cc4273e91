# lookup_tables.py
"""
Read-only configuration data shared by the matching agents.

Everything here is built once at import time and wrapped so it cannot be
mutated afterwards (MappingProxyType / frozenset / tuple).
"""

from types import MappingProxyType

# Two normalized ingredient strings are "the same ingredient" above this.
SIMILARITY_THRESHOLD = 0.7

# Minimum composite score accepted by each mode (surprise has no floor).
NORMAL_MATCH_SCORE = 0.6
LOOSE_MATCH_SCORE = 0.3

# Surprise mode multiplies each score by a factor drawn from [low, high).
SURPRISE_FACTOR_RANGE = (0.7, 1.3)

# Rule-based strategy limits
RULE_LOOSE_MAX_MISSING = 3

SCORE_WEIGHTS = MappingProxyType({
    "compatibility": 0.20,
    "substitution": 0.15,
    "preference": 0.25,
    "cuisine": 0.10,
})

SUBSTITUTION_CREDIT = 0.5

PREFERENCE_POINTS = MappingProxyType({
    "cuisine": 0.3,
    "dietary": 0.3,
    "difficulty": 0.2,
    "cook_time": 0.2,
    "favorites": 0.2,
})

# ---------------------------------------------------------------------------
# Normalizer vocab
# ---------------------------------------------------------------------------
UNITS = (
    "tablespoon", "teaspoon", "ounce", "pound", "gram",
    "tbsp", "tsp", "cup", "oz", "kg", "lb", "ml", "g", "l",
)

CONNECTOR_WORDS = frozenset({
    "of", "and", "or", "with", "to", "for", "in", "on", "at", "by", "from",
    "into", "during", "including", "until", "against", "among", "throughout",
    "despite", "towards", "upon", "concerning",
})

PREPARATION_WORDS = frozenset({
    "chopped", "diced", "minced", "sliced", "grated", "shredded", "crushed",
    "ground", "fresh", "dried", "frozen", "canned", "raw", "cooked", "roasted",
    "grilled", "fried", "baked", "steamed", "boiled",
})

# ---------------------------------------------------------------------------
# Scoring tables
# ---------------------------------------------------------------------------
INGREDIENT_COMPATIBILITY = MappingProxyType({
    "chicken": ("onion", "garlic", "herbs", "lemon", "olive oil", "salt", "pepper"),
    "beef": ("onion", "garlic", "herbs", "red wine", "butter", "salt", "pepper"),
    "salmon": ("lemon", "dill", "garlic", "butter", "olive oil", "salt", "pepper"),
    "tomato": ("basil", "garlic", "onion", "olive oil", "cheese", "salt", "pepper"),
    "pasta": ("tomato", "garlic", "olive oil", "cheese", "basil", "salt", "pepper"),
    "rice": ("onion", "garlic", "butter", "herbs", "salt", "pepper"),
    "potato": ("onion", "garlic", "butter", "herbs", "salt", "pepper", "cheese"),
    "egg": ("cheese", "milk", "butter", "salt", "pepper", "herbs"),
    "mushroom": ("garlic", "onion", "butter", "herbs", "salt", "pepper", "wine"),
    "spinach": ("garlic", "onion", "olive oil", "lemon", "salt", "pepper", "cheese"),
})

# Keyed by lower-cased cuisine label.
CUISINE_INGREDIENTS = MappingProxyType({
    "italian": ("tomato", "basil", "olive oil", "garlic", "onion", "parmesan", "mozzarella", "pasta"),
    "mexican": ("tomato", "onion", "garlic", "cilantro", "lime", "chili", "tortilla", "cheese"),
    "asian": ("soy sauce", "ginger", "garlic", "sesame oil", "rice", "noodles", "vegetables"),
    "indian": ("onion", "garlic", "ginger", "turmeric", "cumin", "coriander", "rice", "lentils"),
    "mediterranean": ("olive oil", "garlic", "lemon", "herbs", "tomato", "cheese", "vegetables"),
    "american": ("butter", "onion", "garlic", "cheese", "potato", "bread", "meat"),
    "french": ("butter", "wine", "garlic", "onion", "herbs", "cheese", "cream"),
    "thai": ("coconut milk", "fish sauce", "lime", "garlic", "ginger", "chili", "rice"),
})

DIETARY_RESTRICTIONS = MappingProxyType({
    "vegetarian": MappingProxyType({
        "allowed": ("vegetables", "fruits", "grains", "dairy", "eggs", "nuts", "seeds"),
        "forbidden": ("meat", "fish", "poultry", "bacon", "sausage", "ham",
                      "chicken", "beef", "pork", "lamb", "turkey", "salmon", "tuna", "shrimp"),
    }),
    "vegan": MappingProxyType({
        "allowed": ("vegetables", "fruits", "grains", "nuts", "seeds", "legumes"),
        "forbidden": ("meat", "fish", "poultry", "dairy", "eggs", "honey",
                      "chicken", "beef", "pork", "milk", "cheese", "butter", "cream", "yogurt"),
    }),
    "gluten-free": MappingProxyType({
        "allowed": ("rice", "quinoa", "corn", "potato", "vegetables", "fruits", "meat", "fish"),
        "forbidden": ("wheat", "barley", "rye", "bread", "pasta", "flour"),
    }),
    "dairy-free": MappingProxyType({
        "allowed": ("vegetables", "fruits", "grains", "meat", "fish", "nuts", "seeds"),
        "forbidden": ("milk", "cheese", "yogurt", "butter", "cream"),
    }),
    "keto": MappingProxyType({
        "allowed": ("meat", "fish", "eggs", "dairy", "vegetables", "nuts", "seeds"),
        "forbidden": ("grains", "sugar", "fruits", "potato", "bread", "pasta", "rice", "flour"),
    }),
    "paleo": MappingProxyType({
        "allowed": ("meat", "fish", "eggs", "vegetables", "fruits", "nuts", "seeds"),
        "forbidden": ("grains", "dairy", "legumes", "processed foods",
                      "milk", "cheese", "beans", "rice", "bread", "pasta"),
    }),
})

# Plant-based products whose names contain an animal-product word.
PLANT_BASED_ITEMS = frozenset({
    "peanut butter", "almond butter", "cashew butter", "sunflower seed butter", "cocoa butter",
    "vegan butter", "coconut butter", "apple butter",
    "coconut cream", "cashew cream", "oat cream", "soy cream",
    "vegan cheese", "soy yogurt", "coconut yogurt", "oat yogurt",
    "almond milk", "soy milk", "oat milk", "coconut milk", "rice milk", "hemp milk",
    "nutritional yeast", "cashew cheese", "flax eggs", "chia eggs",
    "tofu", "tempeh", "seitan",
})

# Candidate order matters: the first one the user owns wins.
SUBSTITUTIONS = MappingProxyType({
    "milk": ("almond milk", "soy milk", "oat milk", "coconut milk"),
    "butter": ("olive oil", "coconut oil", "margarine"),
    "eggs": ("flax eggs", "chia eggs", "banana"),
    "flour": ("almond flour", "coconut flour", "oat flour"),
    "sugar": ("honey", "maple syrup", "stevia"),
    "cheese": ("nutritional yeast", "cashew cheese"),
    "meat": ("tofu", "tempeh", "seitan", "beans"),
    "pasta": ("zucchini noodles", "spaghetti squash", "rice"),
    "rice": ("quinoa", "cauliflower rice", "couscous"),
    "bread": ("lettuce wraps", "tortillas", "collard greens"),
})

# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------
DEFAULT_RECIPE_IMAGE = "https://images.unsplash.com/photo-1542010589005-d1eacc3918f2?w=400&fit=crop&crop=center"

CUISINE_DEFAULT_IMAGES = MappingProxyType({
    "italian": "https://images.unsplash.com/photo-1621996346565-e3dbc353d2e5?w=400&fit=crop",
    "mexican": "https://images.unsplash.com/photo-1551504734-5ee1c4a1479b?w=400&fit=crop",
    "asian": "https://images.unsplash.com/photo-1603133872878-684f208fb84b?w=400&fit=crop",
    "indian": "https://images.unsplash.com/photo-1455619452474-d2be8b1e70cd?w=400&fit=crop",
    "mediterranean": "https://images.unsplash.com/photo-1512621776951-a57141f2eefd?w=400&fit=crop",
    "american": "https://images.unsplash.com/photo-1567620905732-2d1ec7ab7445?w=400&fit=crop",
    "french": "https://images.unsplash.com/photo-1542010589005-d1eacc3918f2?w=400&fit=crop",
    "thai": "https://images.unsplash.com/photo-1542010589005-d1eacc3918f2?w=400&fit=crop",
})
