# labelscan/fallbacks.py
# Fixed substitutes returned when generation output cannot be parsed.
from __future__ import annotations

from typing import Any, Dict, List

PLACEHOLDER_PRODUCT_NAME = "Unknown Product"
FALLBACK_NAME_MAX_CHARS = 50

DEFAULT_RATED_PRODUCT_NAME = "Food product"
DEFAULT_BATCH_PRODUCT_NAME = "Unknown"

DEFAULT_RATING = 3
MIN_RATING = 1
MAX_RATING = 5
SUMMARY_TEMPLATE = "This product received a {rating} star rating."

FALLBACK_ASSESSMENT: Dict[str, Any] = {
    "rating": DEFAULT_RATING,
    "goodContents": [
        "Contains some nutritious ingredients",
        "Provides essential nutrients",
    ],
    "badContents": [
        "May contain processed ingredients",
        "Check sodium and sugar levels",
    ],
    "summary": "Moderately healthy product with room for improvement",
}

# ---------- Recipes ----------
RECIPE_DEFAULT_TIME = "30 min"
RECIPE_DEFAULT_DIFFICULTY = "medium"
RECIPE_DEFAULT_DESCRIPTION = "A delicious dish"
RECIPE_DEFAULT_INGREDIENTS: List[str] = ["Main ingredients as needed"]
RECIPE_DEFAULT_STEPS: List[str] = ["Prepare and cook ingredients"]

FALLBACK_RECIPE_IDEAS: List[Dict[str, str]] = [
    {"name": "Quick Stir Fry", "time": "15 min", "difficulty": "easy",
     "description": "A fast and healthy meal"},
    {"name": "Comfort Bowl", "time": "25 min", "difficulty": "medium",
     "description": "A hearty and satisfying dish"},
    {"name": "Gourmet Salad", "time": "10 min", "difficulty": "easy",
     "description": "Fresh and nutritious"},
]

FALLBACK_RECIPE_DETAILS: Dict[str, Any] = {
    "ingredients": [
        "2 cups main ingredient",
        "1 tablespoon seasoning",
        "Salt and pepper to taste",
    ],
    "steps": [
        "Prepare all ingredients",
        "Heat pan on medium heat",
        "Cook ingredients for 10-15 minutes",
        "Season to taste",
        "Serve hot and enjoy",
    ],
    "servings": "2-4 people",
    "prepTime": "10 min",
    "cookTime": "20 min",
}
