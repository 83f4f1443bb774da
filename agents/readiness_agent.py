# agents/readiness_agent.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from app.config import Settings, get_settings
from agents.readability_agent import get_readability_suggestions
from models.analysis_models import ContentMetrics
from models.content_models import ContentRecord
from models.keyword_models import KeywordAnalysis
from models.meta_models import AutoGeneratedMeta, FieldValidation, MetaValidation
from models.readiness_models import QuickFix, ReadinessChecks, ReadinessReport
from models.topic_models import TopicCoverage
from services.text_parser import round_half_up

logger = logging.getLogger(__name__)

# 読みやすさ / トピックの提案は上位何件まで載せるか
MAX_READABILITY_SUGGESTIONS = 2
MAX_TOPIC_SUGGESTIONS = 2

SEO_STATUS_LABELS = (
    (90, "พร้อมเผยแพร่"),
    (70, "ดี"),
    (50, "พอใช้"),
    (30, "ต้องปรับปรุง"),
)
SEO_STATUS_FLOOR = "ต้องแก้ไข"


# ============================================================
# チェックリストとスコア
# ============================================================

def build_checks(
    metrics: ContentMetrics,
    primary: KeywordAnalysis,
    meta: MetaValidation,
    has_duplicate_title: bool,
    settings: Optional[Settings] = None,
) -> ReadinessChecks:
    """10 項目の公開前チェックリストを作る。"""
    cfg = settings or get_settings()
    return ReadinessChecks(
        title_optimal=meta.title.optimal,
        description_optimal=meta.description.optimal,
        keyword_in_title=primary.positions.in_title,
        keyword_in_first_paragraph=primary.positions.in_first_paragraph,
        keyword_in_headings=primary.positions.in_headings > 0,
        has_internal_links=metrics.internal_links >= cfg.min_internal_links,
        all_images_have_alt=(
            metrics.image_count == 0 or metrics.images_with_alt == metrics.image_count
        ),
        no_duplicate_title=not has_duplicate_title,
        slug_optimal=meta.slug_optimal,
        readability_good=metrics.readability_score >= cfg.readability_pass_threshold,
    )


def calculate_score(checks: ReadinessChecks) -> int:
    """通過したチェックの割合（0〜100）。"""
    total = checks.total_count()
    if total == 0:
        return 0
    return int(round_half_up(checks.passed_count() / total * 100))


# ============================================================
# 指摘の分類
# ============================================================

def _length_findings(
    validation: FieldValidation,
    field: str,
    min_len: int,
    critical: List[str],
    warnings: List[str],
) -> None:
    if validation.status == "EMPTY":
        critical.append(f"❌ ยังไม่มี{field}")
    elif validation.status == "TOO_SHORT":
        warnings.append(f"⚠️ {field}สั้นเกินไป ({validation.length} ตัวอักษร) ควรมีอย่างน้อย {min_len} ตัวอักษร")
    elif validation.status == "LONG":
        warnings.append(f"⚠️ {field}ใช้ได้แต่ยาวไปนิด ({validation.length} ตัวอักษร)")
    elif validation.status == "TRUNCATED":
        warnings.append(f"⚠️ {field}ยาวเกินไป จะถูกตัดในผลค้นหา ({validation.length} ตัวอักษร)")


def classify_findings(
    record: ContentRecord,
    checks: ReadinessChecks,
    metrics: ContentMetrics,
    primary: KeywordAnalysis,
    topic_coverage: TopicCoverage,
    meta: MetaValidation,
    settings: Optional[Settings] = None,
) -> Tuple[List[str], List[str], List[str]]:
    """
    未達項目を critical / warning / suggestion に振り分ける。
    並び順はチェックリストの順。読みやすさ・トピックの提案は最後に付ける。
    """
    cfg = settings or get_settings()
    keyword = primary.keyword
    critical: List[str] = []
    warnings: List[str] = []
    suggestions: List[str] = []

    # ----- 1) タイトル / 2) ディスクリプション -----
    if not checks.title_optimal:
        _length_findings(meta.title, "หัวข้อ", cfg.title_min, critical, warnings)
    if not checks.description_optimal:
        _length_findings(meta.description, "คำอธิบาย (Description)", cfg.description_min, critical, warnings)

    # ----- 本文の量 -----
    if metrics.word_count == 0:
        critical.append("❌ ยังไม่มีเนื้อหา")
    elif metrics.word_count < cfg.min_word_count:
        warnings.append(
            f"⚠️ เนื้อหาสั้นเกินไป ({metrics.word_count} คำ) ควรมีอย่างน้อย {cfg.min_word_count} คำ"
        )

    # ----- 3〜5) キーワード配置 -----
    if not checks.keyword_in_title:
        suggestions.append(f'💡 เพิ่ม "{keyword}" ในหัวข้อเพื่อ SEO ที่ดีขึ้น')
    if not checks.keyword_in_first_paragraph:
        suggestions.append(f'💡 เพิ่ม "{keyword}" ในย่อหน้าแรก')
    if not checks.keyword_in_headings:
        suggestions.append(f'💡 เพิ่ม "{keyword}" ในหัวข้อย่อย (H2 หรือ H3)')

    # ----- 6) 内部リンク -----
    if not checks.has_internal_links:
        missing_links = cfg.min_internal_links - metrics.internal_links
        warnings.append(f"⚠️ ลิงก์ภายในน้อยเกินไป ควรเพิ่มอีก {missing_links} ลิงก์")

    # ----- 7) 画像 -----
    if metrics.image_count == 0:
        warnings.append("⚠️ ยังไม่มีรูปภาพประกอบ")
    elif not checks.all_images_have_alt:
        missing_alt = metrics.image_count - metrics.images_with_alt
        warnings.append(f"⚠️ รูปภาพ {missing_alt} รูปยังไม่มี alt text")
    if not record.has_featured_image:
        warnings.append("⚠️ ยังไม่มีรูปหน้าปก")

    # ----- 8) 重複タイトル -----
    if not checks.no_duplicate_title:
        critical.append("❌ มีบทความอื่นใช้หัวข้อนี้แล้ว")

    # ----- 9) スラッグ -----
    if not checks.slug_optimal:
        if not record.slug:
            critical.append("❌ ยังไม่มี URL slug")
        else:
            warnings.append("⚠️ URL slug ยังไม่เหมาะสมสำหรับ SEO")

    # ----- キーワード密度 -----
    if primary.positions.in_content == 0:
        critical.append(f'❌ ไม่พบคีย์เวิร์ด "{keyword}" ในเนื้อหา')
    elif primary.density > cfg.max_keyword_density:
        warnings.append(f"⚠️ ความหนาแน่นของคีย์เวิร์ดสูงเกินไป ({primary.density}%)")

    # ----- 10) 読みやすさ（提案は末尾） -----
    if not checks.readability_good:
        suggestions.extend(get_readability_suggestions(metrics, cfg)[:MAX_READABILITY_SUGGESTIONS])

    # ----- トピック網羅（提案は末尾） -----
    if topic_coverage.coverage_score < cfg.topic_coverage_warning_threshold:
        warnings.append(f"⚠️ ครอบคลุมหัวข้อสำคัญเพียง {topic_coverage.coverage_score}%")
        suggestions.extend(topic_coverage.suggestions[:MAX_TOPIC_SUGGESTIONS])

    return critical, warnings, suggestions


def build_report(
    record: ContentRecord,
    metrics: ContentMetrics,
    primary: KeywordAnalysis,
    keyword_analyses: Sequence[KeywordAnalysis],
    topic_coverage: TopicCoverage,
    meta: MetaValidation,
    has_duplicate_title: bool,
    auto_generated_meta: Optional[AutoGeneratedMeta] = None,
    settings: Optional[Settings] = None,
) -> ReadinessReport:
    """各ステップの結果を 1 つの ReadinessReport にまとめる。"""
    cfg = settings or get_settings()

    checks = build_checks(metrics, primary, meta, has_duplicate_title, cfg)
    score = calculate_score(checks)
    critical, warnings, suggestions = classify_findings(
        record, checks, metrics, primary, topic_coverage, meta, cfg
    )

    logger.info(
        "[readiness] score=%s passed=%s/%s critical=%s warnings=%s suggestions=%s",
        score,
        checks.passed_count(),
        checks.total_count(),
        len(critical),
        len(warnings),
        len(suggestions),
    )

    return ReadinessReport(
        score=score,
        checks=checks,
        critical_issues=critical,
        warnings=warnings,
        suggestions=suggestions,
        content_metrics=metrics,
        topic_coverage=topic_coverage,
        primary_keyword_analysis=primary,
        keyword_analyses=list(keyword_analyses),
        meta_validation=meta,
        auto_generated_meta=auto_generated_meta,
    )


# ============================================================
# レポートから導出する値
# ============================================================

def is_ready_to_publish(
    report: Optional[ReadinessReport],
    settings: Optional[Settings] = None,
) -> bool:
    """critical が 0 件かつスコアがしきい値以上なら公開可能。"""
    if report is None:
        return False
    cfg = settings or get_settings()
    return not report.critical_issues and report.score >= cfg.publish_score_threshold


def get_seo_status_label(score: int) -> str:
    for threshold, label in SEO_STATUS_LABELS:
        if score >= threshold:
            return label
    return SEO_STATUS_FLOOR


def get_quick_fixes(report: Optional[ReadinessReport]) -> List[QuickFix]:
    """よくある指摘への修正案（自動適用できるものは auto）。"""
    fixes: List[QuickFix] = []
    if report is None:
        return fixes

    checks = report.checks
    auto_meta = report.auto_generated_meta

    if not checks.title_optimal and auto_meta and auto_meta.title:
        fixes.append(QuickFix(issue="หัวข้อยังไม่เหมาะสม", fix=f'ใช้: "{auto_meta.title}"', action="auto"))

    if not checks.description_optimal and auto_meta and auto_meta.description:
        fixes.append(
            QuickFix(
                issue="คำอธิบายยังไม่เหมาะสม",
                fix=f'ใช้: "{auto_meta.description[:50]}..."',
                action="auto",
            )
        )

    if not checks.all_images_have_alt:
        fixes.append(
            QuickFix(issue="รูปภาพยังไม่มี alt text", fix="เพิ่ม alt text ให้กับรูปภาพทุกรูป", action="manual")
        )

    if not checks.has_internal_links:
        fixes.append(
            QuickFix(issue="ยังไม่มีลิงก์ภายใน", fix="เพิ่มลิงก์ไปยังบทความที่เกี่ยวข้อง", action="manual")
        )

    return fixes


def export_analysis_report(report: Optional[ReadinessReport], title: str = "") -> str:
    """レポートを Markdown テキストに書き出す。"""
    if report is None:
        return ""

    lines: List[str] = ["# SEO Analysis Report", ""]
    lines.append(f"**Article**: {title}")
    lines.append(f"**Score**: {report.score}/100 ({get_seo_status_label(report.score)})")
    if report.analyzed_at:
        lines.append(f"**Analyzed**: {report.analyzed_at.isoformat(timespec='seconds')}")
    lines.append("")

    lines.append("## Checks")
    lines.append("")
    for name, passed in report.checks.model_dump().items():
        lines.append(f"- {'✅' if passed else '❌'} {name}")

    for heading, items in (
        ("Critical Issues", report.critical_issues),
        ("Warnings", report.warnings),
        ("Suggestions", report.suggestions),
    ):
        if items:
            lines.append("")
            lines.append(f"## {heading}")
            lines.append("")
            lines.extend(items)

    return "\n".join(lines) + "\n"
