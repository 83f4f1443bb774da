"""
Tests for slug generation and availability.
"""

import unittest

from services.slug_generator import (
    generate_slug,
    generate_slug_variations,
    get_available_slug,
    is_slug_optimal,
    is_slug_unique,
    suggest_slug_improvements,
)

SAMPLE_TITLES = [
    "Hello World!",
    "กันสาด พับได้ 2024",
    "  --Multiple   spaces -- here--  ",
    "Retractable Awning: Price & Installation Guide (2024)",
    " ".join(["word"] * 30),
    "a" * 100,
]


class TestGenerateSlug(unittest.TestCase):

    def test_basic(self):
        self.assertEqual(generate_slug("Hello World!"), "hello-world")

    def test_thai_kept(self):
        self.assertEqual(generate_slug("กันสาด พับได้ 2024"), "กันสาด-พับได้-2024")

    def test_separators_collapsed(self):
        self.assertEqual(generate_slug("  --Multiple   spaces -- here--  "), "multiple-spaces-here")

    def test_empty(self):
        self.assertEqual(generate_slug(""), "")
        self.assertEqual(generate_slug("   "), "")

    def test_cut_at_word_boundary(self):
        slug = generate_slug(" ".join(["word"] * 30))
        self.assertEqual(slug, "-".join(["word"] * 15))
        self.assertLessEqual(len(slug), 75)

    def test_hard_cut_without_hyphen(self):
        self.assertEqual(generate_slug("a" * 100), "a" * 75)

    def test_idempotent(self):
        for title in SAMPLE_TITLES:
            slug = generate_slug(title)
            self.assertEqual(generate_slug(slug), slug, title)

    def test_generated_slugs_are_optimal(self):
        for title in SAMPLE_TITLES:
            self.assertTrue(is_slug_optimal(generate_slug(title)), title)


class TestSlugValidation(unittest.TestCase):

    def test_optimal(self):
        self.assertTrue(is_slug_optimal("hello-world"))
        self.assertTrue(is_slug_optimal("กันสาด-2024"))

    def test_not_optimal(self):
        for slug in ("", "hello--world", "-hello", "hello-", "Hello", "hello_world", "a" * 76, "hello-world\n"):
            self.assertFalse(is_slug_optimal(slug), repr(slug))

    def test_improvements(self):
        suggestions = suggest_slug_improvements("Bad_Slug--", keyword="awning")
        self.assertEqual(len(suggestions), 5)

    def test_improvements_empty(self):
        self.assertEqual(suggest_slug_improvements(""), ["กรุณาระบุ URL slug"])

    def test_no_improvements_needed(self):
        self.assertEqual(suggest_slug_improvements("retractable-awning", keyword="retractable awning"), [])


class TestAvailableSlug(unittest.TestCase):

    def test_variations(self):
        self.assertEqual(generate_slug_variations("base"), ["base-1", "base-2", "base-3"])

    def test_unique(self):
        self.assertTrue(is_slug_unique("a", ["b"]))
        self.assertFalse(is_slug_unique("a", ["a"]))

    def test_free_base(self):
        self.assertEqual(get_available_slug("Hello World", []), "hello-world")

    def test_numbered_suffix(self):
        self.assertEqual(get_available_slug("Hello World", ["hello-world"]), "hello-world-1")
        self.assertEqual(
            get_available_slug("Hello World", ["hello-world", "hello-world-1", "hello-world-2"]),
            "hello-world-3",
        )

    def test_timestamp_fallback(self):
        taken = ["hello-world"] + [f"hello-world-{i}" for i in range(1, 11)]
        slug = get_available_slug("Hello World", taken, clock=lambda: 1700000000.0)
        self.assertEqual(slug, "hello-world-1700000000000")

    def test_title_without_allowed_characters(self):
        self.assertEqual(generate_slug("-"), "")
        self.assertEqual(generate_slug("!!! ???"), "")

        slug = get_available_slug("!!!", [""], clock=lambda: 1700000000.0)

        self.assertEqual(slug, "1700000000000")
        self.assertTrue(is_slug_optimal(slug))

    def test_current_slug_kept(self):
        self.assertEqual(
            get_available_slug("Hello World", ["hello-world"], current_slug="hello-world"),
            "hello-world",
        )


if __name__ == '__main__':
    unittest.main()
