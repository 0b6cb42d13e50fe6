"""
Food keyword set: matched as substrings to flag a food turn, and as whole tokens to pick the food item.
Multi-word entries ("hot dog", "ice cream") can only ever match as substrings.
"""

FOOD_KEYWORDS: tuple[str, ...] = (
    "pizza", "burger", "pasta", "sushi", "tacos", "chicken", "beef", "fish", "salad",
    "sandwich", "soup", "steak", "rice", "noodles", "curry", "lasagna", "spaghetti",
    "ramen", "burrito", "quesadilla", "hot dog", "hamburger", "fries", "wings",
    "seafood", "lobster", "crab", "shrimp", "salmon", "tuna", "turkey", "ham",
    "bacon", "sausage", "meatballs", "ribs", "barbecue", "bbq", "grilled",
    "fried", "baked", "roasted", "stir fry", "teriyaki", "korean", "chinese",
    "italian", "mexican", "indian", "thai", "japanese", "american", "french",
    "dessert", "cake", "pie", "ice cream", "cookies", "brownies", "cheesecake",
    "fruit", "apple", "banana", "orange", "strawberry", "blueberry", "grape",
    "vegetable", "carrot", "broccoli", "spinach", "lettuce", "tomato", "onion",
    "potato", "sweet potato", "corn", "peas", "beans", "lentils", "chickpeas",
)

FOOD_KEYWORD_SET: frozenset[str] = frozenset(FOOD_KEYWORDS)
