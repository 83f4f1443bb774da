"""
Tests for topic coverage detection.
"""

import unittest

from agents.topic_agent import (
    NO_HEADINGS_SUGGESTION,
    TOPIC_TAXONOMY,
    detect_topic_coverage,
    generate_heading_suggestions,
    get_recommended_topics,
    get_topic_coverage_label,
    is_content_comprehensive,
)
from models.topic_models import TopicCoverage, TopicDefinition


def _topic(label, trigger):
    return TopicDefinition(
        label=label,
        triggers=(trigger,),
        suggestion=f"add {label}",
        heading_suggestion=f"## {label}",
    )


class TestDetectTopicCoverage(unittest.TestCase):

    def test_empty_content(self):
        coverage = detect_topic_coverage("")
        self.assertEqual(set(coverage.topics), set(TOPIC_TAXONOMY))
        self.assertFalse(any(coverage.topics.values()))
        self.assertEqual(coverage.coverage_score, 0)
        self.assertEqual(coverage.missing_topics, [])
        self.assertEqual(coverage.suggestions, [])

    def test_price_and_faq_only(self):
        body = "ราคาเริ่มต้น 5,000 บาท\n\nคำถามที่พบบ่อย"

        coverage = detect_topic_coverage(body)

        self.assertTrue(coverage.topics["pricing"])
        self.assertTrue(coverage.topics["faq"])
        self.assertEqual(coverage.coverage_score, 25)
        self.assertEqual(len(coverage.missing_topics), 6)
        self.assertNotIn("ราคา", coverage.missing_topics)
        # 未カバー 6 件 + 見出しなし 1 件
        self.assertEqual(len(coverage.suggestions), 7)
        self.assertEqual(coverage.suggestions[-1], NO_HEADINGS_SUGGESTION)

    def test_headings_present_no_extra_suggestion(self):
        coverage = detect_topic_coverage("## ราคา\n\nรายละเอียด")
        self.assertNotIn(NO_HEADINGS_SUGGESTION, coverage.suggestions)
        self.assertEqual(len(coverage.suggestions), 7)

    def test_case_insensitive_english_triggers(self):
        coverage = detect_topic_coverage("Installation and FAQ")
        self.assertTrue(coverage.topics["installation"])
        self.assertTrue(coverage.topics["faq"])

    def test_custom_taxonomy(self):
        taxonomy = {"a": _topic("Alpha", "alpha"), "b": _topic("Beta", "beta"), "c": _topic("Gamma", "gamma")}

        coverage = detect_topic_coverage("alpha and beta", taxonomy)

        self.assertEqual(coverage.coverage_score, 67)
        self.assertEqual(coverage.missing_topics, ["Gamma"])
        self.assertEqual(coverage.suggestions, ["add Gamma", NO_HEADINGS_SUGGESTION])

    def test_full_coverage_has_no_suggestions(self):
        taxonomy = {"a": _topic("Alpha", "alpha")}
        coverage = detect_topic_coverage("alpha", taxonomy)
        self.assertEqual(coverage.coverage_score, 100)
        self.assertEqual(coverage.suggestions, [])


class TestTopicHelpers(unittest.TestCase):

    def test_labels(self):
        self.assertEqual(get_topic_coverage_label(85), "ครอบคลุมดีเยี่ยม")
        self.assertEqual(get_topic_coverage_label(5), "ควรเพิ่มเนื้อหา")

    def test_recommended_topics(self):
        self.assertEqual(len(get_recommended_topics("การติดตั้ง")), 2)
        generic = get_recommended_topics("unknown")
        self.assertEqual(len(generic), 1)
        self.assertIn(str(len(TOPIC_TAXONOMY)), generic[0])

    def test_comprehensive(self):
        self.assertTrue(is_content_comprehensive(TopicCoverage(coverage_score=50), 300))
        self.assertFalse(is_content_comprehensive(TopicCoverage(coverage_score=50), 299))
        self.assertFalse(is_content_comprehensive(TopicCoverage(coverage_score=49), 1000))

    def test_heading_suggestions(self):
        self.assertEqual(
            generate_heading_suggestions(["ราคา", "unknown"]),
            ["## ราคากันสาดพับได้แต่ละประเภท"],
        )


if __name__ == '__main__':
    unittest.main()
