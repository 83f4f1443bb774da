# agents/topic_agent.py

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from app.config import Settings, get_settings
from models.topic_models import TopicCoverage, TopicDefinition
from services.text_parser import extract_headings, round_half_up

logger = logging.getLogger(__name__)

# ============================================================
# トピック定義（タクソノミー）
# ============================================================
# トピックを増やすときはここにエントリを足すだけでよい。
# 件数はどこにもハードコードしない（len(taxonomy) を使う）。

TOPIC_TAXONOMY: Mapping[str, TopicDefinition] = MappingProxyType({
    "pricing": TopicDefinition(
        label="ราคา",
        triggers=("ราคา", "ค่าใช้จ่าย", "งบประมาณ", "เท่าไหร่", "price", "cost"),
        suggestion='ลองเพิ่มหัวข้อ "ราคากันสาดพับได้" หรือ "งบประมาณที่ควรเตรียม"',
        heading_suggestion="## ราคากันสาดพับได้แต่ละประเภท",
    ),
    "types": TopicDefinition(
        label="ประเภท",
        triggers=("ประเภท", "ชนิด", "รุ่น", "มือหมุน", "types"),
        suggestion='ควรเพิ่มส่วน "ประเภทของกันสาดพับได้" เช่น ผ้าใบ, อะลูมิเนียม, มือหมุน, ไฟฟ้า',
        heading_suggestion="## ประเภทของกันสาดพับได้",
    ),
    "materials": TopicDefinition(
        label="วัสดุ",
        triggers=("วัสดุ", "ผ้าใบ", "อะลูมิเนียม", "อลูมิเนียม", "โครงสร้าง", "material", "fabric"),
        suggestion="แนะนำให้เพิ่มข้อมูลเกี่ยวกับวัสดุและคุณภาพของผ้าใบและโครงสร้าง",
        heading_suggestion="## วัสดุและคุณภาพกันสาดพับได้",
    ),
    "installation": TopicDefinition(
        label="การติดตั้ง",
        triggers=("ติดตั้ง", "install"),
        suggestion='เพิ่มส่วน "วิธีการติดตั้ง" หรือ "ขั้นตอนการติดตั้งกันสาดพับได้"',
        heading_suggestion="## วิธีการติดตั้งกันสาดพับได้",
    ),
    "maintenance": TopicDefinition(
        label="การดูแลรักษา",
        triggers=("ดูแล", "บำรุงรักษา", "ทำความสะอาด", "maintenance", "cleaning"),
        suggestion='ควรมีคำแนะนำเรื่อง "การดูแลรักษา" หรือ "วิธีทำความสะอาดกันสาดพับได้"',
        heading_suggestion="## การดูแลและบำรุงรักษากันสาดพับได้",
    ),
    "pros": TopicDefinition(
        label="ข้อดี/ประโยชน์",
        triggers=("ข้อดี", "ประโยชน์", "จุดเด่น", "advantage", "benefit"),
        suggestion='เพิ่มส่วน "ข้อดี" หรือ "ประโยชน์ของกันสาดพับได้"',
        heading_suggestion="## ข้อดีของกันสาดพับได้",
    ),
    "cons": TopicDefinition(
        label="ข้อจำกัด/ข้อเสีย",
        triggers=("ข้อเสีย", "ข้อจำกัด", "ข้อควรระวัง", "ข้อควรพิจารณา", "disadvantage", "drawback"),
        suggestion='ควรระบุ "ข้อจำกัด" หรือ "สิ่งที่ควรพิจารณา" เพื่อความน่าเชื่อถือ',
        heading_suggestion="## ข้อควรพิจารณาก่อนเลือก",
    ),
    "faq": TopicDefinition(
        label="คำถามที่พบบ่อย",
        triggers=("คำถามที่พบบ่อย", "faq", "ถาม-ตอบ", "q&a"),
        suggestion='เพิ่มส่วน "คำถามที่พบบ่อย (FAQ)" เพื่อครอบคลุมข้อสงสัยของผู้อ่าน',
        heading_suggestion="## คำถามที่พบบ่อย (FAQ)",
    ),
})

NO_HEADINGS_SUGGESTION = "💡 เริ่มต้นด้วยการเพิ่มหัวข้อย่อย (## หรือ ###) เพื่อแบ่งเนื้อหา"

COVERAGE_LABELS = (
    (80, "ครอบคลุมดีเยี่ยม"),
    (60, "ครอบคลุมดี"),
    (40, "ครอบคลุมพอใช้"),
    (20, "ครอบคลุมน้อย"),
)
COVERAGE_LABEL_FLOOR = "ควรเพิ่มเนื้อหา"

# 記事カテゴリ -> 推奨トピック
RECOMMENDED_TOPICS: Mapping[str, Sequence[str]] = MappingProxyType({
    "เทคนิคและคำแนะนำ": (
        "ควรครอบคลุม: ประเภท, วัสดุ, ข้อดี-ข้อเสีย",
        "แนะนำเพิ่ม FAQ สำหรับข้อสงสัยทั่วไป",
    ),
    "การดูแลรักษา": (
        "ควรครอบคลุม: การดูแล, วัสดุ, ข้อควรระวัง",
        "เพิ่มคำแนะนำการทำความสะอาดตามประเภทวัสดุ",
    ),
    "การติดตั้ง": (
        "ควรครอบคลุม: วิธีติดตั้ง, วัสดุ, ขั้นตอน",
        "แนะนำเพิ่มรูปภาพประกอบแต่ละขั้นตอน",
    ),
    "แนะนำผลิตภัณฑ์": (
        "ควรครอบคลุม: ประเภท, ราคา, ข้อดี-ข้อเสีย",
        "เพิ่มข้อมูลเปรียบเทียบกับคู่แข่ง",
    ),
})


# ============================================================
# メインロジック
# ============================================================

def is_topic_covered(content: str, triggers: Sequence[str]) -> bool:
    """トリガー語のどれか 1 つが本文に含まれていれば True（大文字小文字は無視）。"""
    if not content or not triggers:
        return False
    lower = content.lower()
    return any(t.lower() in lower for t in triggers)


def detect_topic_coverage(
    content: str,
    taxonomy: Mapping[str, TopicDefinition] = TOPIC_TAXONOMY,
) -> TopicCoverage:
    """
    本文がタクソノミーの各トピックをカバーしているか判定する。

    - coverage_score = カバー数 / トピック数 × 100（四捨五入）
    - missing_topics はラベル表示名
    - suggestions は未カバーのトピックごとの定型文
      + 見出しが 1 つも無ければ見出し追加の提案を 1 件
    """
    if not content:
        return TopicCoverage(topics={key: False for key in taxonomy})

    topics: Dict[str, bool] = {
        key: is_topic_covered(content, definition.triggers)
        for key, definition in taxonomy.items()
    }

    covered = sum(1 for v in topics.values() if v)
    total = len(taxonomy)
    coverage_score = int(round_half_up(covered / total * 100)) if total else 0

    missing_keys = [key for key, v in topics.items() if not v]
    missing_topics = [taxonomy[key].label for key in missing_keys]
    suggestions = [taxonomy[key].suggestion for key in missing_keys]

    if suggestions and not extract_headings(content):
        suggestions.append(NO_HEADINGS_SUGGESTION)

    logger.debug("[topic] covered=%s/%s score=%s", covered, total, coverage_score)

    return TopicCoverage(
        topics=topics,
        coverage_score=coverage_score,
        missing_topics=missing_topics,
        suggestions=suggestions,
    )


def get_topic_coverage_label(score: int) -> str:
    for threshold, label in COVERAGE_LABELS:
        if score >= threshold:
            return label
    return COVERAGE_LABEL_FLOOR


def get_recommended_topics(category: str) -> List[str]:
    """記事カテゴリに応じた推奨トピック。未知のカテゴリは汎用メッセージ。"""
    if category in RECOMMENDED_TOPICS:
        return list(RECOMMENDED_TOPICS[category])
    return [f"ครอบคลุมหัวข้อสำคัญอย่างน้อย 5 จาก {len(TOPIC_TAXONOMY)} หัวข้อ"]


def is_content_comprehensive(
    coverage: TopicCoverage,
    word_count: int,
    settings: Optional[Settings] = None,
) -> bool:
    """トピック網羅率 50% 以上かつ最低単語数を満たしていれば True。"""
    cfg = settings or get_settings()
    return (
        coverage.coverage_score >= cfg.topic_coverage_warning_threshold
        and word_count >= cfg.min_word_count
    )


def generate_heading_suggestions(
    missing_topics: Sequence[str],
    taxonomy: Mapping[str, TopicDefinition] = TOPIC_TAXONOMY,
) -> List[str]:
    """未カバーのトピック（ラベル）から見出し案を作る。"""
    by_label = {d.label: d.heading_suggestion for d in taxonomy.values()}
    return [by_label[label] for label in missing_topics if label in by_label]
