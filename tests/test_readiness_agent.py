"""
Tests for the readiness checklist, scoring and derived report helpers.
"""

import unittest
from datetime import datetime, timezone

from agents.readiness_agent import (
    build_checks,
    calculate_score,
    classify_findings,
    export_analysis_report,
    get_quick_fixes,
    get_seo_status_label,
    is_ready_to_publish,
)
from app.config import Settings
from models.analysis_models import ContentMetrics
from models.content_models import ContentRecord
from models.keyword_models import KeywordAnalysis, KeywordPositions
from models.meta_models import AutoGeneratedMeta, FieldValidation, MetaValidation
from models.readiness_models import ReadinessChecks, ReadinessReport
from models.topic_models import TopicCoverage

ALL_PASSED = ReadinessChecks(
    title_optimal=True,
    description_optimal=True,
    keyword_in_title=True,
    keyword_in_first_paragraph=True,
    keyword_in_headings=True,
    has_internal_links=True,
    all_images_have_alt=True,
    no_duplicate_title=True,
    slug_optimal=True,
    readability_good=True,
)


class TestScoring(unittest.TestCase):

    def test_default_checks(self):
        # alt / 重複なし の 2 項目だけが初期値で通過
        self.assertEqual(calculate_score(ReadinessChecks()), 20)

    def test_all_passed(self):
        self.assertEqual(calculate_score(ALL_PASSED), 100)

    def test_one_failed(self):
        checks = ALL_PASSED.model_copy(update={"slug_optimal": False})
        self.assertEqual(calculate_score(checks), 90)

    def test_build_checks(self):
        metrics = ContentMetrics(internal_links=2, image_count=2, images_with_alt=1, readability_score=60)
        primary = KeywordAnalysis(
            keyword="awning",
            found=True,
            positions=KeywordPositions(in_title=True, in_headings=1, in_content=3),
        )
        meta = MetaValidation(
            title=FieldValidation(length=40, status="OPTIMAL", optimal=True),
            slug_optimal=True,
        )

        checks = build_checks(metrics, primary, meta, has_duplicate_title=True, settings=Settings())

        self.assertTrue(checks.title_optimal)
        self.assertFalse(checks.description_optimal)
        self.assertTrue(checks.keyword_in_title)
        self.assertFalse(checks.keyword_in_first_paragraph)
        self.assertTrue(checks.keyword_in_headings)
        self.assertTrue(checks.has_internal_links)
        self.assertFalse(checks.all_images_have_alt)
        self.assertFalse(checks.no_duplicate_title)
        self.assertTrue(checks.slug_optimal)
        self.assertTrue(checks.readability_good)


class TestClassifyFindings(unittest.TestCase):

    def test_short_title_is_warning_and_empty_slug_is_critical(self):
        record = ContentRecord(title="short", body="text", has_featured_image=True)
        meta = MetaValidation(
            title=FieldValidation(length=5, status="TOO_SHORT"),
            description=FieldValidation(length=130, status="OPTIMAL", optimal=True),
        )
        checks = ALL_PASSED.model_copy(update={"title_optimal": False, "slug_optimal": False})
        metrics = ContentMetrics(word_count=400, internal_links=3, image_count=1, images_with_alt=1)
        primary = KeywordAnalysis(
            keyword="awning", found=True, positions=KeywordPositions(in_content=4), density=1.5
        )

        critical, warnings, suggestions = classify_findings(
            record, checks, metrics, primary, TopicCoverage(coverage_score=75), meta, Settings()
        )

        self.assertEqual(critical, ["❌ ยังไม่มี URL slug"])
        self.assertEqual(len(warnings), 1)
        self.assertIn("สั้นเกินไป", warnings[0])
        self.assertEqual(suggestions, [])

    def test_missing_keyword_is_critical(self):
        record = ContentRecord(body="text", slug="some-slug", has_featured_image=True)
        primary = KeywordAnalysis(keyword="awning", found=False)
        checks = ALL_PASSED.model_copy(
            update={"keyword_in_title": False, "keyword_in_first_paragraph": False, "keyword_in_headings": False}
        )
        metrics = ContentMetrics(word_count=400, internal_links=3, image_count=1, images_with_alt=1)

        critical, _, suggestions = classify_findings(
            record, checks, metrics, primary, TopicCoverage(coverage_score=75), MetaValidation(), Settings()
        )

        self.assertIn('❌ ไม่พบคีย์เวิร์ด "awning" ในเนื้อหา', critical)
        self.assertEqual(len(suggestions), 3)

    def test_warnings_and_suggestion_order(self):
        record = ContentRecord(title="t", body="text", slug="ok-slug", has_featured_image=False)
        checks = ALL_PASSED.model_copy(
            update={
                "keyword_in_title": False,
                "keyword_in_headings": False,
                "has_internal_links": False,
                "readability_good": False,
            }
        )
        metrics = ContentMetrics(
            word_count=400,
            avg_words_per_sentence=40.0,
            internal_links=0,
            image_count=1,
            images_with_alt=1,
        )
        primary = KeywordAnalysis(
            keyword="awning", found=True, positions=KeywordPositions(in_content=20), density=5.0
        )
        coverage = TopicCoverage(coverage_score=25, suggestions=["topic A", "topic B", "topic C"])

        critical, warnings, suggestions = classify_findings(
            record, checks, metrics, primary, coverage, MetaValidation(), Settings()
        )

        self.assertEqual(critical, [])
        self.assertEqual(
            warnings,
            [
                "⚠️ ลิงก์ภายในน้อยเกินไป ควรเพิ่มอีก 2 ลิงก์",
                "⚠️ ยังไม่มีรูปหน้าปก",
                "⚠️ ความหนาแน่นของคีย์เวิร์ดสูงเกินไป (5.0%)",
                "⚠️ ครอบคลุมหัวข้อสำคัญเพียง 25%",
            ],
        )
        # 配置の提案 → 読みやすさ（上位 2 件）→ トピック（上位 2 件）
        self.assertEqual(
            suggestions,
            [
                '💡 เพิ่ม "awning" ในหัวข้อเพื่อ SEO ที่ดีขึ้น',
                '💡 เพิ่ม "awning" ในหัวข้อย่อย (H2 หรือ H3)',
                "ประโยคยาวเกินไป ควรแบ่งเป็นประโยคสั้นๆ (15-20 คำต่อประโยค)",
                "ควรเพิ่มหัวข้อย่อย (H2, H3) เพื่อแบ่งเนื้อหา",
                "topic A",
                "topic B",
            ],
        )


class TestReportHelpers(unittest.TestCase):

    def test_ready_to_publish(self):
        self.assertTrue(is_ready_to_publish(ReadinessReport(score=70)))
        self.assertFalse(is_ready_to_publish(ReadinessReport(score=69)))
        self.assertFalse(is_ready_to_publish(ReadinessReport(score=100, critical_issues=["❌ x"])))
        self.assertFalse(is_ready_to_publish(None))

    def test_status_labels(self):
        self.assertEqual(get_seo_status_label(95), "พร้อมเผยแพร่")
        self.assertEqual(get_seo_status_label(70), "ดี")
        self.assertEqual(get_seo_status_label(50), "พอใช้")
        self.assertEqual(get_seo_status_label(30), "ต้องปรับปรุง")
        self.assertEqual(get_seo_status_label(0), "ต้องแก้ไข")

    def test_quick_fixes(self):
        report = ReadinessReport(
            checks=ReadinessChecks(all_images_have_alt=False),
            auto_generated_meta=AutoGeneratedMeta(title="Generated title", description="d" * 80),
        )

        fixes = get_quick_fixes(report)

        self.assertEqual([f.action for f in fixes], ["auto", "auto", "manual", "manual"])
        self.assertIn("Generated title", fixes[0].fix)
        self.assertEqual(get_quick_fixes(None), [])

    def test_export_report(self):
        report = ReadinessReport(
            score=90,
            checks=ALL_PASSED,
            warnings=["⚠️ something"],
            analyzed_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )

        text = export_analysis_report(report, title="My article")

        self.assertTrue(text.startswith("# SEO Analysis Report"))
        self.assertIn("**Article**: My article", text)
        self.assertIn("**Score**: 90/100 (พร้อมเผยแพร่)", text)
        self.assertIn("## Warnings", text)
        self.assertNotIn("## Critical Issues", text)
        self.assertEqual(export_analysis_report(None), "")


if __name__ == '__main__':
    unittest.main()
