from __future__ import annotations

import json
import re
import unittest

from fakes import FakeGenerator

from labelscan.batch import rate_batch
from labelscan.errors import GenerationEngineError, InputValidationError, MalformedGenerationOutputError
from labelscan.fallbacks import FALLBACK_ASSESSMENT
from labelscan.rating import analyze_rating, rate_ingredients, rate_ingredients_strict

GOOD_REPLY = json.dumps({
    "rating": 4,
    "goodContents": ["Whole oats (fibre)"],
    "badContents": ["Added sugar"],
    "summary": "A fairly wholesome cereal.",
})


class TestRateIngredients(unittest.TestCase):
    def test_parsed_assessment(self) -> None:
        gen = FakeGenerator(f"```json\n{GOOD_REPLY}\n```")
        res = rate_ingredients(["oats", "sugar"], gen, "Porridge")
        self.assertFalse(res.is_fallback)
        self.assertEqual(res.value.rating, 4)
        self.assertEqual(res.value.bad_contents, ["Added sugar"])
        self.assertIn("PRODUCT: Porridge", gen.prompts[0])
        self.assertIn("INGREDIENTS: oats, sugar", gen.prompts[0])

    def test_unparseable_gives_fixed_fallback(self) -> None:
        res = rate_ingredients(["oats"], FakeGenerator("Sorry, I can't help with that."))
        self.assertTrue(res.is_fallback)
        self.assertEqual(res.value.to_dict(), FALLBACK_ASSESSMENT)

    def test_clamping_and_defaults(self) -> None:
        for raw, expected in ((7, 5), (-2, 1), ("4.6", 5)):
            with self.subTest(raw=raw):
                res = rate_ingredients(["salt"], FakeGenerator(json.dumps({"rating": raw})))
                self.assertEqual(res.value.rating, expected)
        huge = rate_ingredients(["salt"], FakeGenerator('{"rating": 1' + "0" * 400 + "}"))
        self.assertFalse(huge.is_fallback)
        self.assertEqual(huge.value.rating, 5)
        res = rate_ingredients(["salt"], FakeGenerator('{"goodContents": "n/a"}'))
        self.assertEqual(res.value.rating, 3)
        self.assertEqual(res.value.good_contents, [])
        self.assertEqual(res.value.summary, "This product received a 3 star rating.")

    def test_empty_ingredients_rejected_before_engine_call(self) -> None:
        gen = FakeGenerator(GOOD_REPLY)
        for bad in (None, [], ["", "  "], "oats"):
            with self.subTest(bad=bad):
                with self.assertRaises(InputValidationError):
                    rate_ingredients(bad, gen)
        self.assertEqual(gen.calls, 0)

    def test_engine_failure_propagates(self) -> None:
        with self.assertRaises(GenerationEngineError):
            rate_ingredients(["oats"], FakeGenerator(GenerationEngineError("quota exceeded")))

    def test_analyze_rating_response(self) -> None:
        out = analyze_rating(["oats", "sugar"], FakeGenerator(GOOD_REPLY))
        self.assertTrue(out["success"])
        self.assertEqual(out["productName"], "Food product")
        self.assertEqual(out["analyzedIngredients"], ["oats", "sugar"])
        self.assertEqual(out["analysis"]["rating"], 4)
        self.assertFalse(out["usedFallback"])

    def test_strict_variant_raises_on_bad_output(self) -> None:
        with self.assertRaises(MalformedGenerationOutputError):
            rate_ingredients_strict(["oats"], FakeGenerator("not json"))
        with self.assertRaises(MalformedGenerationOutputError):
            rate_ingredients_strict(["oats"], FakeGenerator("[4]"))


class TestBatch(unittest.TestCase):
    def test_one_bad_item_does_not_abort_the_batch(self) -> None:
        gen = FakeGenerator(GOOD_REPLY)
        products = [
            {"id": "p1", "productName": "Oats", "ingredients": ["oats"]},
            {"id": "p2", "productName": "Mystery", "ingredients": []},
            {"id": "p3", "ingredients": ["milk", "cocoa"]},
        ]
        report = rate_batch(products, gen)
        out = report.to_dict()

        self.assertEqual(out["summary"], {"total": 3, "succeeded": 2, "failed": 1})
        self.assertEqual([r["id"] for r in out["results"]], ["p1", "p2", "p3"])
        self.assertTrue(out["results"][0]["succeeded"])
        self.assertEqual(out["results"][0]["analysis"]["rating"], 4)
        self.assertFalse(out["results"][1]["succeeded"])
        self.assertEqual(out["results"][1]["error"], "No ingredients provided")
        self.assertNotIn("analysis", out["results"][1])
        self.assertTrue(out["results"][2]["succeeded"])
        self.assertIsNone(out["results"][2]["productName"])
        self.assertEqual(gen.calls, 2)
        self.assertIn("Product: Unknown.", gen.prompts[1])

    def test_parse_and_engine_failures_are_per_item(self) -> None:
        gen = FakeGenerator(GOOD_REPLY, "garbage", GenerationEngineError("engine down"), GOOD_REPLY)
        products = [{"id": i, "ingredients": ["x"]} for i in range(4)]
        report = rate_batch(products, gen)
        self.assertEqual([r.succeeded for r in report.results], [True, False, False, True])
        self.assertIn("JSON parse failed", report.results[1].error)
        self.assertEqual(report.results[2].error, "engine down")

    def test_non_object_entries_fail_alone(self) -> None:
        report = rate_batch(["oops", {"id": 2, "ingredients": ["tea"]}], FakeGenerator(GOOD_REPLY))
        self.assertEqual((report.succeeded, report.failed), (1, 1))
        self.assertIsNone(report.results[0].id)

    def test_empty_batch_rejected(self) -> None:
        for bad in (None, [], {"id": 1}):
            with self.subTest(bad=bad):
                with self.assertRaises(InputValidationError):
                    rate_batch(bad, FakeGenerator(GOOD_REPLY))

    def test_concurrent_batch_keeps_input_order(self) -> None:
        def reply(prompt: str) -> str:
            n = int(re.search(r"Product: item-(\d+)", prompt).group(1))
            return json.dumps({"rating": n})

        products = [{"id": n, "productName": f"item-{n}", "ingredients": ["x"]} for n in range(1, 6)]
        report = rate_batch(products, FakeGenerator(reply), max_workers=3)
        self.assertEqual([r.id for r in report.results], [1, 2, 3, 4, 5])
        self.assertEqual([r.analysis.rating for r in report.results], [1, 2, 3, 4, 5])


if __name__ == "__main__":
    unittest.main()
