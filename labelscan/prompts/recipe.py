# prompts/recipe.py
from typing import List


def build_recipe_ideas_prompt(ingredients: List[str]) -> str:
    return f"""
You are a creative chef. Generate 3 different recipe ideas using these ingredients: {", ".join(ingredients)}

For each recipe provide:
1. A creative and appealing recipe name
2. Estimated cooking time in minutes
3. Difficulty level (easy, medium, or hard)
4. Brief description (one sentence)

Make the recipes practical and delicious. Use common cooking methods.

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "name": "Recipe Name",
    "time": "25 min",
    "difficulty": "easy",
    "description": "Brief description"
  }}
]
""".strip()


def build_recipe_details_prompt(recipe_name: str, ingredient_list: str) -> str:
    return f"""
Create a detailed recipe for "{recipe_name}" using these ingredients: {ingredient_list}

Provide:
1. Complete ingredients list with measurements (be specific)
2. Step-by-step cooking instructions (numbered, clear, and detailed)
3. Make it realistic and cookable

Return ONLY valid JSON with this exact structure:
{{
  "ingredients": ["2 cups ingredient1", "1 tablespoon ingredient2", "250g ingredient3"],
  "steps": ["Step 1 detailed instruction", "Step 2 detailed instruction"],
  "servings": "2-4 people",
  "prepTime": "10 min",
  "cookTime": "20 min"
}}
""".strip()
