"""Query cleanup before catalog and reference searches.

Corrects common food misspellings token by token and strips tokens that never
help a nutrition search: stopwords, measurement units, and store or brand
filler words.
"""

import re

from ingredient_catalog.domain.search import NormalizedQuery

_TOKEN_SPLIT = re.compile(r"[\s,\-()/]+")

SPELLING_CORRECTIONS: dict[str, str] = {
    # Proteins
    "chkn": "chicken",
    "chiken": "chicken",
    "chicen": "chicken",
    "brest": "breast",
    "breat": "breast",
    "salman": "salmon",
    "samon": "salmon",
    "tunna": "tuna",
    "protien": "protein",
    # Peppers
    "jalopeno": "jalapeno",
    "jalapino": "jalapeno",
    "jalepeno": "jalapeno",
    "jalepenio": "jalapeno",
    # Cheese and dairy
    "parmesean": "parmesan",
    "parmasan": "parmesan",
    "parmezan": "parmesan",
    "mozerella": "mozzarella",
    "mozarella": "mozzarella",
    "yogart": "yogurt",
    "yougurt": "yogurt",
    "yoghert": "yogurt",
    # Vegetables
    "brocoli": "broccoli",
    "brocolli": "broccoli",
    "califlower": "cauliflower",
    "calliflower": "cauliflower",
    "cauliflour": "cauliflower",
    "zuchini": "zucchini",
    "zuchinni": "zucchini",
    "zuccini": "zucchini",
    "letuce": "lettuce",
    "lettuse": "lettuce",
    "tomatoe": "tomato",
    "tomatos": "tomatoes",
    "potatoe": "potato",
    "potatos": "potatoes",
    "aspargus": "asparagus",
    "asperagus": "asparagus",
    "artichoak": "artichoke",
    "spinich": "spinach",
    # Fruits
    "avacado": "avocado",
    "avacodo": "avocado",
    "avocato": "avocado",
    "bannana": "banana",
    "bananana": "banana",
    "straberry": "strawberry",
    "strawbery": "strawberry",
    "strwaberry": "strawberry",
    "bluberry": "blueberry",
    "blueburry": "blueberry",
    "rasberry": "raspberry",
    "raspbery": "raspberry",
    "pinapple": "pineapple",
    "pineaple": "pineapple",
    "watermelen": "watermelon",
    "watermellon": "watermelon",
    "cantalope": "cantaloupe",
    "cantelope": "cantaloupe",
    "pomegranite": "pomegranate",
    # Grains and pasta
    "spagetti": "spaghetti",
    "spageti": "spaghetti",
    "fettucine": "fettuccine",
    "fetuccine": "fettuccine",
    "tortila": "tortilla",
    "tortillia": "tortilla",
    "qinoa": "quinoa",
    "quiona": "quinoa",
    "maccaroni": "macaroni",
    "macoroni": "macaroni",
    # Condiments, sauces, spices
    "guacomole": "guacamole",
    "mayonaise": "mayonnaise",
    "mayonase": "mayonnaise",
    "katchup": "ketchup",
    "ketsup": "ketchup",
    "tumeric": "turmeric",
    "cinamon": "cinnamon",
    "cinimon": "cinnamon",
    "cinnimon": "cinnamon",
    "oregeno": "oregano",
    "origano": "oregano",
    "hummos": "hummus",
    "humus": "hummus",
}

STOPWORDS: frozenset[str] = frozenset(
    {"a", "an", "and", "the", "of", "with", "in", "for", "or", "some", "fresh"}
)

UNIT_WORDS: frozenset[str] = frozenset(
    {
        "g",
        "gram",
        "grams",
        "kg",
        "mg",
        "oz",
        "ounce",
        "ounces",
        "lb",
        "lbs",
        "pound",
        "pounds",
        "ml",
        "l",
        "cup",
        "cups",
        "tbsp",
        "tablespoon",
        "tablespoons",
        "tsp",
        "teaspoon",
        "teaspoons",
        "serving",
        "servings",
        "slice",
        "slices",
        "piece",
        "pieces",
    }
)

NON_FOOD_TOKENS: frozenset[str] = frozenset(
    {
        "costco",
        "kirkland",
        "trader",
        "joe's",
        "kroger",
        "safeway",
        "walmart",
        "aldi",
        "wegmans",
        "publix",
        "target",
        "sam's",
        "brand",
        "store",
        "generic",
    }
)

_DROPPED_TOKENS = STOPWORDS | UNIT_WORDS | NON_FOOD_TOKENS


def tokenize(text: str) -> list[str]:
    """Lowercase and split text into tokens without any corrections."""
    return [token for token in _TOKEN_SPLIT.split(text.lower().strip()) if token]


def correct_spelling(tokens: list[str]) -> list[str]:
    """Replace known misspellings token by token."""
    return [SPELLING_CORRECTIONS.get(token, token) for token in tokens]


def strip_noise(tokens: list[str]) -> list[str]:
    """Remove stopwords, units, numbers and store names.

    Falls back to the input tokens when every token would be removed.
    """
    kept = [
        token
        for token in tokens
        if token not in _DROPPED_TOKENS and not _is_number(token)
    ]
    return kept or tokens


def description_tokens(text: str) -> list[str]:
    """Tokenize a food description the same way queries are tokenized."""
    return strip_noise(correct_spelling(tokenize(text)))


def normalize_query(raw: str) -> NormalizedQuery:
    """Clean a raw search string into a query and its tokens."""
    tokens = description_tokens(raw)
    return NormalizedQuery(text=" ".join(tokens), tokens=tokens)


def _is_number(token: str) -> bool:
    return token.replace(".", "", 1).isdigit()
