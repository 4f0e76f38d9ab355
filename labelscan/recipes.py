# labelscan/recipes.py
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from labelscan.engines.base import Generator
from labelscan.errors import InputValidationError
from labelscan.fallbacks import (
    FALLBACK_RECIPE_DETAILS, FALLBACK_RECIPE_IDEAS, RECIPE_DEFAULT_DESCRIPTION,
    RECIPE_DEFAULT_DIFFICULTY, RECIPE_DEFAULT_INGREDIENTS, RECIPE_DEFAULT_STEPS, RECIPE_DEFAULT_TIME,
)
from labelscan.models import RecipeDetails, RecipeIdea
from labelscan.normalize import string_list
from labelscan.prompts.recipe import build_recipe_details_prompt, build_recipe_ideas_prompt
from labelscan.sanitize import sanitize

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _text(v: Any, default: str) -> str:
    return v.strip() if isinstance(v, str) and v.strip() else default


def _optional_text(v: Any) -> Optional[str]:
    return v.strip() if isinstance(v, str) and v.strip() else None


# ---------- Ideas ----------

def _normalize_ideas(value: Any, stamp: int) -> List[RecipeIdea]:
    entries = value if isinstance(value, list) else [value]
    ideas = []
    for i, entry in enumerate(entries):
        entry = entry if isinstance(entry, dict) else {}
        ideas.append(RecipeIdea(
            id=f"recipe_{stamp}_{i}",
            name=_text(entry.get("name"), f"Recipe {i + 1}"),
            time=_text(entry.get("time"), RECIPE_DEFAULT_TIME),
            difficulty=_text(entry.get("difficulty"), RECIPE_DEFAULT_DIFFICULTY),
            description=_text(entry.get("description"), RECIPE_DEFAULT_DESCRIPTION),
        ))
    return ideas


def _fallback_ideas(stamp: int) -> List[RecipeIdea]:
    return [RecipeIdea(id=f"recipe_{stamp}_{i + 1}", **d) for i, d in enumerate(FALLBACK_RECIPE_IDEAS)]


def generate_recipes(ingredients: Any, generator: Generator, custom_ingredients: Any = None,
                     clock: Callable[[], int] = _now_ms) -> Dict[str, Any]:
    """Three recipe ideas from selected plus custom ingredients."""
    selected = string_list(ingredients)
    if not selected:
        raise InputValidationError("No ingredients provided", "Please select at least one ingredient")
    all_ingredients = selected + string_list(custom_ingredients)
    logger.info("Generating recipes for: %s", ", ".join(all_ingredients))

    raw = generator.generate(build_recipe_ideas_prompt(all_ingredients))
    stamp = clock()
    result = sanitize(
        raw,
        normalize=lambda v: _normalize_ideas(v, stamp),
        fallback=lambda: _fallback_ideas(stamp),
        expect=(list, dict),
        label="recipes",
    )
    logger.info("Generated %d recipe(s)", len(result.value))
    return {
        "success": True,
        "recipes": [r.to_dict() for r in result.value],
        "ingredientsUsed": all_ingredients,
    }


# ---------- Details ----------

def _normalize_details(name: str, value: Dict[str, Any]) -> RecipeDetails:
    return RecipeDetails(
        name=name,
        ingredients=string_list(value.get("ingredients")) or list(RECIPE_DEFAULT_INGREDIENTS),
        steps=string_list(value.get("steps")) or list(RECIPE_DEFAULT_STEPS),
        servings=_optional_text(value.get("servings")),
        prep_time=_optional_text(value.get("prepTime")),
        cook_time=_optional_text(value.get("cookTime")),
    )


def recipe_details(recipe_name: Any, generator: Generator, ingredients: Any = None) -> Dict[str, Any]:
    name = _optional_text(recipe_name)
    if not name:
        raise InputValidationError("Recipe name is required")
    items = string_list(ingredients)
    ingredient_list = ", ".join(items) if items else "available ingredients"
    logger.info("Getting recipe details for: %s", name)

    raw = generator.generate(build_recipe_details_prompt(name, ingredient_list))
    result = sanitize(
        raw,
        normalize=lambda v: _normalize_details(name, v),
        fallback=lambda: _normalize_details(name, FALLBACK_RECIPE_DETAILS),
        label="recipe details",
    )
    return {"success": True, "recipe": result.value.to_dict()}
