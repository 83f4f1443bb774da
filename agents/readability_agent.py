# agents/readability_agent.py

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from app.config import Settings, get_settings
from models.analysis_models import ContentMetrics
from services.text_parser import (
    count_images,
    count_keyword,
    count_links,
    count_sentences,
    count_words,
    extract_headings,
    round_half_up,
    split_paragraphs,
)

logger = logging.getLogger(__name__)

# ============================================================
# 読みやすさの判定パラメータ
# ============================================================

# 1 文あたりの理想の単語数は 15〜20。ここを外れると減点
IDEAL_WORDS_PER_SENTENCE_MAX = 20
LONG_SENTENCE_WORDS = 30
SHORT_SENTENCE_WORDS = 5

# ラベル用のしきい値（上から順に判定）
READABILITY_LABELS = (
    (80, "อ่านง่ายมาก"),
    (60, "อ่านง่าย"),
    (40, "ปานกลาง"),
    (20, "อ่านยาก"),
)
READABILITY_LABEL_FLOOR = "อ่านยากมาก"


# ============================================================
# スコア計算
# ============================================================

def calculate_keyword_density(
    content: str,
    keywords: Iterable[str],
) -> Dict[str, float]:
    """
    キーワードごとの密度(%)を返す。
    出現回数 / 推定総単語数 × 100 を小数 2 桁に丸める。
    """
    keywords = [kw for kw in keywords if kw and kw.strip()]
    if not content or not keywords:
        return {}

    total_words = count_words(content)
    if total_words == 0:
        return {}

    densities: Dict[str, float] = {}
    for kw in keywords:
        occurrences = count_keyword(content, kw)
        densities[kw] = round_half_up(occurrences / total_words * 100, 2)
    return densities


def calculate_readability_score(word_count: int, sentence_count: int) -> float:
    """
    タイ語向けに簡略化した読みやすさスコア（0〜100）。
    100 から始め、1 文あたりの平均単語数が理想帯から外れた分だけ減点する。
    """
    if word_count == 0 or sentence_count == 0:
        return 0.0

    avg = word_count / sentence_count
    score = 100.0

    if avg > LONG_SENTENCE_WORDS:
        score -= (avg - LONG_SENTENCE_WORDS) * 2
    elif avg < SHORT_SENTENCE_WORDS:
        score -= (SHORT_SENTENCE_WORDS - avg) * 3
    elif avg > IDEAL_WORDS_PER_SENTENCE_MAX:
        score -= (avg - IDEAL_WORDS_PER_SENTENCE_MAX) * 1

    return max(0.0, min(100.0, score))


def get_readability_label(score: float) -> str:
    """スコアを表示用ラベルに変換する。"""
    for threshold, label in READABILITY_LABELS:
        if score >= threshold:
            return label
    return READABILITY_LABEL_FLOOR


# ============================================================
# メインロジック
# ============================================================

def analyze_content(
    content: str,
    keywords: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> ContentMetrics:
    """
    本文から ContentMetrics を作る。

    - 単語数 / 文数 / 段落数とその平均
    - 見出し構造
    - 内部 / 外部リンク数
    - 画像数と alt 付き画像数
    - キーワード密度
    - 読みやすさスコア

    本文が空なら全項目ゼロの ContentMetrics を返す（例外は投げない）。
    """
    cfg = settings or get_settings()
    if not content:
        return ContentMetrics()

    word_count = count_words(content)
    sentence_count = count_sentences(content)
    paragraphs = split_paragraphs(content)
    headings = extract_headings(content)
    internal_links, external_links = count_links(content, cfg.site_domain)
    image_count, images_with_alt = count_images(content)
    keyword_density = calculate_keyword_density(content, keywords or [])

    avg_words = word_count / sentence_count if sentence_count else 0.0
    avg_sentences = sentence_count / len(paragraphs) if paragraphs else 0.0
    readability = calculate_readability_score(word_count, sentence_count)

    logger.debug(
        "[readability] words=%s sentences=%s paragraphs=%s score=%.1f",
        word_count,
        sentence_count,
        len(paragraphs),
        readability,
    )

    return ContentMetrics(
        word_count=word_count,
        sentence_count=sentence_count,
        paragraph_count=len(paragraphs),
        avg_words_per_sentence=round_half_up(avg_words, 1),
        avg_sentences_per_paragraph=round_half_up(avg_sentences, 1),
        heading_structure=[h.label() for h in headings],
        headings=headings,
        internal_links=internal_links,
        external_links=external_links,
        image_count=image_count,
        images_with_alt=images_with_alt,
        readability_score=int(round_half_up(readability)),
        keyword_density=keyword_density,
    )


def get_readability_suggestions(
    metrics: ContentMetrics,
    settings: Optional[Settings] = None,
) -> List[str]:
    """ContentMetrics から読みやすさ改善の提案を作る。"""
    cfg = settings or get_settings()
    suggestions: List[str] = []

    if metrics.avg_words_per_sentence > LONG_SENTENCE_WORDS:
        suggestions.append("ประโยคยาวเกินไป ควรแบ่งเป็นประโยคสั้นๆ (15-20 คำต่อประโยค)")

    # 本文が空のときは「短すぎる」扱いにしない
    if 0 < metrics.avg_words_per_sentence < SHORT_SENTENCE_WORDS:
        suggestions.append("ประโยคสั้นเกินไป ลองรวมประโยคที่เกี่ยวข้องกัน")

    if metrics.avg_sentences_per_paragraph > 8:
        suggestions.append("ย่อหน้ายาวเกินไป ควรแบ่งเป็น 3-5 ประโยคต่อย่อหน้า")

    if not metrics.heading_structure:
        suggestions.append("ควรเพิ่มหัวข้อย่อย (H2, H3) เพื่อแบ่งเนื้อหา")
    elif len(metrics.heading_structure) < 3 and metrics.word_count > 500:
        suggestions.append("บทความยาว ควรมีหัวข้อย่อยมากกว่า 3 หัวข้อ")

    if metrics.image_count == 0 and metrics.word_count > 300:
        suggestions.append("ควรเพิ่มรูปภาพประกอบเนื้อหา")

    if metrics.image_count > 0 and metrics.images_with_alt < metrics.image_count:
        missing = metrics.image_count - metrics.images_with_alt
        suggestions.append(f"รูปภาพ {missing} รูปยังไม่มี alt text")

    if metrics.internal_links == 0:
        suggestions.append(
            f"ควรเพิ่มลิงก์ภายในไปยังบทความที่เกี่ยวข้อง ({cfg.min_internal_links} ลิงก์ขึ้นไป)"
        )

    return suggestions
