from __future__ import annotations

import json
import unittest

from fakes import FakeGenerator

from labelscan.errors import InputValidationError
from labelscan.fallbacks import FALLBACK_RECIPE_DETAILS
from labelscan.recipes import generate_recipes, recipe_details


def _clock() -> int:
    return 1700000000000


class TestGenerateRecipes(unittest.TestCase):
    def test_ideas_get_ids_and_defaults(self) -> None:
        reply = json.dumps([
            {"name": "Oat Pancakes", "time": "20 min", "difficulty": "easy", "description": "Fluffy."},
            {"name": "", "difficulty": "hard"},
        ])
        gen = FakeGenerator(reply)
        out = generate_recipes(["oats", "milk"], gen, ["banana"], clock=_clock)

        self.assertEqual(out["ingredientsUsed"], ["oats", "milk", "banana"])
        self.assertIn("oats, milk, banana", gen.prompts[0])
        self.assertEqual(out["recipes"][0]["id"], "recipe_1700000000000_0")
        self.assertEqual(out["recipes"][0]["name"], "Oat Pancakes")
        self.assertEqual(
            out["recipes"][1],
            {"id": "recipe_1700000000000_1", "name": "Recipe 2", "time": "30 min",
             "difficulty": "hard", "description": "A delicious dish"},
        )

    def test_single_object_is_wrapped(self) -> None:
        out = generate_recipes(["rice"], FakeGenerator('{"name": "Fried Rice"}'), clock=_clock)
        self.assertEqual(len(out["recipes"]), 1)
        self.assertEqual(out["recipes"][0]["name"], "Fried Rice")

    def test_unparseable_gives_three_fallback_ideas(self) -> None:
        out = generate_recipes(["rice"], FakeGenerator("no recipes today"), clock=_clock)
        self.assertEqual([r["name"] for r in out["recipes"]], ["Quick Stir Fry", "Comfort Bowl", "Gourmet Salad"])
        self.assertEqual(out["recipes"][0]["id"], "recipe_1700000000000_1")

    def test_requires_ingredients(self) -> None:
        gen = FakeGenerator("[]")
        with self.assertRaises(InputValidationError):
            generate_recipes([], gen, ["custom only"])
        self.assertEqual(gen.calls, 0)


class TestRecipeDetails(unittest.TestCase):
    def test_missing_lists_get_defaults(self) -> None:
        out = recipe_details("Oat Pancakes", FakeGenerator('{"servings": "2"}'))
        recipe = out["recipe"]
        self.assertEqual(recipe["name"], "Oat Pancakes")
        self.assertEqual(recipe["ingredients"], ["Main ingredients as needed"])
        self.assertEqual(recipe["steps"], ["Prepare and cook ingredients"])
        self.assertEqual(recipe["servings"], "2")

    def test_unparseable_gives_fallback_details(self) -> None:
        gen = FakeGenerator("```\nnope\n```")
        out = recipe_details("Soup", gen)
        self.assertEqual(out["recipe"]["steps"], FALLBACK_RECIPE_DETAILS["steps"])
        self.assertEqual(out["recipe"]["cookTime"], "20 min")
        self.assertIn("available ingredients", gen.prompts[0])

    def test_requires_name(self) -> None:
        with self.assertRaises(InputValidationError):
            recipe_details("  ", FakeGenerator("{}"))


if __name__ == "__main__":
    unittest.main()
