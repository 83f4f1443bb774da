"""
Tests for the threshold settings.
"""

import unittest

from pydantic import ValidationError

from app.config import Settings, get_settings


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        cfg = Settings()
        self.assertEqual((cfg.title_min, cfg.title_optimal, cfg.title_max), (30, 60, 70))
        self.assertEqual(
            (cfg.description_min, cfg.description_optimal, cfg.description_max),
            (120, 155, 160),
        )
        self.assertEqual(cfg.slug_max, 75)
        self.assertEqual(cfg.min_internal_links, 2)
        self.assertEqual(cfg.publish_score_threshold, 70)

    def test_get_settings_is_cached(self):
        self.assertIs(get_settings(), get_settings())

    def test_override(self):
        cfg = Settings(min_internal_links=0, primary_keyword="awning")
        self.assertEqual(cfg.min_internal_links, 0)
        self.assertEqual(cfg.primary_keyword, "awning")

    def test_misordered_title_bounds_rejected(self):
        with self.assertRaises(ValidationError):
            Settings(title_min=80)

    def test_density_bounds_rejected(self):
        with self.assertRaises(ValidationError):
            Settings(optimal_keyword_density=3.0, max_keyword_density=2.5)

    def test_score_threshold_range(self):
        with self.assertRaises(ValidationError):
            Settings(publish_score_threshold=150)


if __name__ == '__main__':
    unittest.main()
