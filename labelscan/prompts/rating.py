# prompts/rating.py
from typing import List


def build_rating_prompt(ingredients: List[str], product_name: str) -> str:
    """
    Full health-rating prompt: 1-5 rubric, evidence lists, one-sentence summary.
    """
    ingredient_list = ", ".join(ingredients)
    return f"""
You are a nutrition expert. Analyze the health quality of a food product.

PRODUCT: {product_name}
INGREDIENTS: {ingredient_list}

Evaluate and provide:
1. Health Rating (integer 1-5 stars):
   - 5 stars: Very healthy, mostly natural, nutritious ingredients
   - 4 stars: Healthy with minor processed ingredients
   - 3 stars: Moderately healthy, some concerns
   - 2 stars: Several unhealthy ingredients
   - 1 star: Mostly unhealthy, many processed/harmful ingredients

2. Good Contents: list healthy/beneficial ingredients and nutrients
3. Bad Contents: list unhealthy/concerning ingredients (preservatives, artificial colours, excessive sugar/sodium, etc.)

Be specific and explain WHY each ingredient is good or bad.

Return ONLY valid JSON with this exact structure:
{{
  "rating": 3,
  "goodContents": [
    "Whole wheat (high fiber, complex carbs)",
    "Vitamin D (bone health)"
  ],
  "badContents": [
    "High sodium (680mg per serving)",
    "Artificial preservatives (BHA, BHT)"
  ],
  "summary": "Brief overall assessment in one sentence"
}}
""".strip()


def build_batch_rating_prompt(ingredients: List[str], product_name: str) -> str:
    """Terse single-item variant used for batch runs."""
    return (
        f"Rate this food product's health (1-5 stars). Product: {product_name}. "
        f"Ingredients: {', '.join(ingredients)}\n\n"
        'Return JSON only: {"rating": number, "goodContents": array, "badContents": array, "summary": string}'
    )
