# agents/keyword_agent.py

from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from app.config import Settings, get_settings
from models.keyword_models import KeywordAnalysis, KeywordPositions
from services.text_parser import (
    IMAGE_RE,
    LATIN_WORD_RE,
    THAI_RUN_RE,
    contains_keyword,
    count_images,
    first_paragraph,
    heading_lines,
    keyword_pattern,
    round_half_up,
    split_paragraphs,
)

logger = logging.getLogger(__name__)

# ============================================================
# 固定データ（差し替え可能）
# ============================================================

THAI_STOP_WORDS = frozenset({
    "และ", "ที่", "ใน", "ของ", "เป็น", "การ", "ได้", "มี", "จะ", "ไป", "มา",
    "แล้ว", "ให้", "กับ", "จาก", "โดย", "ซึ่ง", "ถ้า", "แต่", "เพราะ", "หรือ",
    "ว่า", "นี้", "นั้น", "เหล่า", "ทั้ง", "ผล", "ทำ", "อยู่", "นั่น", "คือ",
    "อัน", "ไว้", "ถึง", "ตาม", "เมื่อ", "ใช้", "แห่ง", "ตัว", "ขึ้น", "ลง",
})

ENGLISH_STOP_WORDS = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "as", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "should", "could", "may", "might", "must", "can",
    "of", "to", "in", "for", "with", "from", "by", "about", "into", "through",
})

# キーワードファミリー -> 関連キーワード
# 完全一致 → 部分一致の順で引く。見つからなければ空リスト
RELATED_KEYWORDS: Mapping[str, Sequence[str]] = MappingProxyType({
    "กันสาดพับได้": (
        "กันสาดผ้าใบ",
        "กันสาดหน้าร้าน",
        "กันสาดระเบียง",
        "retractable awning",
        "กันสาดไฟฟ้า",
        "กันสาดมือหมุน",
    ),
    "ราคา": ("ค่าใช้จ่าย", "เท่าไหร่", "งบประมาณ", "ต้นทุน"),
    "ติดตั้ง": ("การติดตั้ง", "วิธีติดตั้ง", "ขั้นตอนติดตั้ง", "installation"),
    "ดูแล": ("บำรุงรักษา", "ทำความสะอาด", "การดูแล", "maintenance"),
})

# 最短トークン長（これ以下は捨てる）
MIN_TOKEN_LENGTH = 2


# ============================================================
# トークン化
# ============================================================

def extract_words(text: str) -> List[str]:
    """
    小文字化したうえでタイ文字の塊と英単語をそのまま取り出す。
    （単語数の推定はしない。リテラルなトークンのみ）
    """
    if not text:
        return []
    lower = text.lower()
    return THAI_RUN_RE.findall(lower) + LATIN_WORD_RE.findall(lower)


def filter_stop_words(words: Sequence[str]) -> List[str]:
    return [
        w for w in words
        if len(w) > MIN_TOKEN_LENGTH
        and w not in THAI_STOP_WORDS
        and w not in ENGLISH_STOP_WORDS
    ]


def extract_keywords(
    text: str,
    max_keywords: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[str]:
    """
    テキストから頻出語を抽出する。

    - ストップワードと 2 文字以下のトークンを除外
    - 出現頻度の高い順（同数なら先に出た順）
    - メインキーワードが含まれていなければ先頭に差し込む
    """
    cfg = settings or get_settings()
    limit = max_keywords if max_keywords is not None else cfg.keywords_max
    if not text or limit <= 0:
        return []

    freq = Counter(filter_stop_words(extract_words(text)))
    ranked = [word for word, _ in sorted(freq.items(), key=lambda kv: kv[1], reverse=True)]
    ranked = ranked[:limit]

    primary = cfg.primary_keyword
    primary_head = primary.lower().split()[0] if primary.strip() else ""
    if primary_head and not any(primary_head in word for word in ranked):
        ranked.insert(0, primary)

    return ranked[:limit]


def find_related_keywords(
    keyword: str,
    table: Mapping[str, Sequence[str]] = RELATED_KEYWORDS,
) -> List[str]:
    """関連キーワードを固定テーブルから引く（完全一致 → 部分一致）。"""
    lower = (keyword or "").strip().lower()
    if not lower:
        return []

    # 差し替えテーブルのキーは大文字小文字を揃えずに渡されることがある
    families = [(key.strip().lower(), values) for key, values in table.items()]

    for key, values in families:
        if key == lower:
            return list(values)

    for key, values in families:
        if key and (key in lower or lower in key):
            return list(values)
    return []


# ============================================================
# キーワード配置分析
# ============================================================

def _not_found(keyword: str) -> KeywordAnalysis:
    return KeywordAnalysis(keyword=keyword or "", found=False, positions=KeywordPositions())


def analyze_keyword(
    content: str,
    keyword: str,
    settings: Optional[Settings] = None,
    related_table: Mapping[str, Sequence[str]] = RELATED_KEYWORDS,
) -> KeywordAnalysis:
    """
    本文中での 1 キーワードの使われ方を分析する。

    - 1 行目 / 最初の段落に含まれるか
    - キーワードを含む見出しの数
    - 本文全体の出現回数と密度
    - 目立ち度（prominence, 0〜100）
    - 未達項目ごとの改善提案
    """
    cfg = settings or get_settings()
    pattern = keyword_pattern(keyword)
    if not content or pattern is None:
        return _not_found(keyword)

    total = len(pattern.findall(content))

    first_line = content.split("\n", 1)[0]
    in_title = pattern.search(first_line) is not None
    in_first_paragraph = pattern.search(first_paragraph(content)) is not None
    in_headings = sum(1 for line in heading_lines(content) if pattern.search(line))

    words = extract_words(content)
    density = total / len(words) * 100 if words else 0.0

    # ------------------------------
    # 目立ち度
    # ------------------------------
    prominence = 0
    if in_title:
        prominence += 30
    if in_first_paragraph:
        prominence += 20
    if in_headings > 0:
        prominence += min(20, in_headings * 5)
    if cfg.optimal_keyword_density <= density <= cfg.max_keyword_density:
        prominence += 20
    if 0 < density < cfg.max_keyword_density:
        prominence += 10

    # ------------------------------
    # 改善提案
    # ------------------------------
    suggestions: List[str] = []
    if not in_title:
        suggestions.append(f'ลองเพิ่ม "{keyword}" ในหัวข้อหลัก (H1)')
    if not in_first_paragraph:
        suggestions.append(f'ควรมี "{keyword}" ในย่อหน้าแรก')
    if in_headings == 0:
        suggestions.append(f'เพิ่ม "{keyword}" ในหัวข้อย่อย (H2 หรือ H3)')

    if density == 0:
        suggestions.append(f'ไม่พบคีย์เวิร์ด "{keyword}" ในเนื้อหา - ควรเพิ่มเข้าไป')
    elif density < cfg.optimal_keyword_density:
        suggestions.append(
            f"ความหนาแน่นของคีย์เวิร์ดต่ำ ({density:.2f}%) - "
            f"ควรเพิ่มให้ถึง {cfg.optimal_keyword_density:g}-{cfg.max_keyword_density:g}%"
        )
    elif density > cfg.max_keyword_density:
        suggestions.append(
            f"ความหนาแน่นของคีย์เวิร์ดสูงเกินไป ({density:.2f}%) - อาจถูกมองว่ายัดคีย์เวิร์ด"
        )

    logger.debug(
        "[keyword] keyword=%s total=%s density=%.2f prominence=%s",
        keyword,
        total,
        density,
        prominence,
    )

    return KeywordAnalysis(
        keyword=keyword,
        found=total > 0,
        positions=KeywordPositions(
            in_title=in_title,
            in_first_paragraph=in_first_paragraph,
            in_headings=in_headings,
            in_content=total,
        ),
        density=round_half_up(density, 2),
        prominence=min(100, prominence),
        suggestions=suggestions,
        related_keywords=find_related_keywords(keyword, related_table),
    )


def suggest_keyword_placement(
    content: str,
    keyword: str,
    settings: Optional[Settings] = None,
) -> List[str]:
    """どこにキーワードを足せばよいか、例文付きで提案する。"""
    if not content or not (keyword or "").strip():
        return []

    analysis = analyze_keyword(content, keyword, settings=settings)
    suggestions: List[str] = []

    if not analysis.positions.in_title:
        suggestions.append(f'แนะนำ: เพิ่ม "{keyword}" ในหัวข้อหลัก เช่น: "{keyword}: คู่มือฉบับสมบูรณ์"')

    if not analysis.positions.in_first_paragraph and first_paragraph(content).strip():
        suggestions.append(f'แนะนำ: เพิ่ม "{keyword}" ในย่อหน้าแรก เช่น: "เมื่อพูดถึง{keyword}..."')

    # H2 / H3 のうちキーワードを含まないもの
    sub_headings = [
        line for line in heading_lines(content)
        if line.startswith("##") and not line.startswith("####")
    ]
    without_keyword = [h for h in sub_headings if not contains_keyword(h, keyword)]
    if without_keyword and analysis.positions.in_headings < 2:
        suggestions.append(f'แนะนำ: เพิ่ม "{keyword}" ในหัวข้อย่อย เช่น: "## ประเภทของ{keyword}"')

    image_total, _ = count_images(content)
    if image_total > 0 and not _all_alts_contain(content, keyword):
        suggestions.append(
            f'แนะนำ: เพิ่ม "{keyword}" ใน alt text ของรูปภาพ เช่น: "![{keyword}ติดผนังคอนกรีต](...)"'
        )

    return suggestions


def _all_alts_contain(content: str, keyword: str) -> bool:
    return all(contains_keyword(m.group(1), keyword) for m in IMAGE_RE.finditer(content))


def generate_title_suggestions(topic: str, keyword: Optional[str] = None) -> List[str]:
    """トピックとキーワードからタイトル案を作る。"""
    kw = keyword or get_settings().primary_keyword
    return [
        f"{kw}: {topic}",
        f"คู่มือเลือก{kw} - {topic}",
        f"5 เทคนิค{topic}สำหรับ{kw}",
        f"{topic} | {kw} ราคาถูก คุณภาพดี",
        f"วิธี{topic}ด้วย{kw} แบบมืออาชีพ",
        f"{kw} {topic} - แนะนำทุกอย่างที่ต้องรู้",
    ]


def has_good_keyword_distribution(content: str, keyword: str) -> bool:
    """キーワードが段落全体の 20〜50% に散らばっていれば True。"""
    paragraphs = split_paragraphs(content)
    if not paragraphs or keyword_pattern(keyword) is None:
        return False

    with_keyword = sum(1 for p in paragraphs if contains_keyword(p, keyword))
    percentage = with_keyword / len(paragraphs) * 100
    return 20 <= percentage <= 50
