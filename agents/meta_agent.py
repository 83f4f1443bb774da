# agents/meta_agent.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from app.config import Settings, get_settings
from agents.keyword_agent import extract_keywords
from models.meta_models import AutoGeneratedMeta, FieldValidation, MetaValidation
from services.slug_generator import is_slug_optimal, suggest_slug_improvements
from services.text_parser import extract_headings, split_paragraphs, strip_markup

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# 区分ごとの表示メッセージ
_STATUS_MESSAGES = {
    "EMPTY": "ยังไม่มี{field}",
    "TOO_SHORT": "สั้นเกินไป",
    "OPTIMAL": "ความยาวเหมาะสม",
    "LONG": "ใช้ได้แต่ยาวไปนิด",
    "TRUNCATED": "ยาวเกินไป จะถูกตัด",
}


# ============================================================
# 長さチェック
# ============================================================

def _classify_length(
    text: str,
    min_len: int,
    optimal_len: int,
    max_len: int,
    field: str,
) -> FieldValidation:
    """
    長さを 5 区分に分類する。
    optimal=True になるのは min〜optimal の真ん中の帯だけ。
    """
    length = len((text or "").strip())

    if length == 0:
        status = "EMPTY"
    elif length < min_len:
        status = "TOO_SHORT"
    elif length <= optimal_len:
        status = "OPTIMAL"
    elif length <= max_len:
        status = "LONG"
    else:
        status = "TRUNCATED"

    return FieldValidation(
        length=length,
        status=status,
        optimal=status == "OPTIMAL",
        message=_STATUS_MESSAGES[status].format(field=field),
    )


def validate_title(title: str, settings: Optional[Settings] = None) -> FieldValidation:
    cfg = settings or get_settings()
    return _classify_length(title, cfg.title_min, cfg.title_optimal, cfg.title_max, "หัวข้อ")


def validate_description(description: str, settings: Optional[Settings] = None) -> FieldValidation:
    cfg = settings or get_settings()
    return _classify_length(
        description,
        cfg.description_min,
        cfg.description_optimal,
        cfg.description_max,
        "คำอธิบาย",
    )


def validate_meta(
    title: str,
    description: str,
    slug: str,
    keyword: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> MetaValidation:
    """タイトル / ディスクリプション / スラッグをまとめて検証する。"""
    cfg = settings or get_settings()
    return MetaValidation(
        title=validate_title(title, cfg),
        description=validate_description(description, cfg),
        slug_optimal=is_slug_optimal(slug, cfg),
        slug_suggestions=suggest_slug_improvements(slug, keyword, cfg),
    )


# ============================================================
# 自動生成
# ============================================================

def truncate_text(text: str, max_len: int) -> str:
    """max_len を超えたら末尾を ... にして max_len 以内に収める。"""
    text = (text or "").strip()
    if len(text) <= max_len:
        return text
    if max_len <= len(ELLIPSIS):
        return text[:max_len]
    return text[: max_len - len(ELLIPSIS)].rstrip() + ELLIPSIS


def _fallback_title(title: str, content: str) -> str:
    if title and title.strip():
        return title
    headings = extract_headings(content)
    if headings:
        return headings[0].text
    first_line = content.strip().split("\n", 1)[0] if content else ""
    return strip_markup(first_line)


def _fallback_description(excerpt: str, content: str) -> str:
    if excerpt and excerpt.strip():
        return strip_markup(excerpt)
    # 見出しだけの段落は飛ばして、最初の本文段落を使う
    for paragraph in split_paragraphs(content):
        lines = [ln for ln in paragraph.split("\n") if not ln.lstrip().startswith("#")]
        plain = strip_markup("\n".join(lines))
        if plain:
            return plain
    return ""


def auto_generate_meta(
    title: str,
    content: str,
    excerpt: str = "",
    keywords: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> AutoGeneratedMeta:
    """
    SEO タイトル / ディスクリプションが未入力のときの代替値を作る。

    - title: タイトル → 最初の見出し → 本文 1 行目 の順
    - description: 抜粋 → 最初の本文段落 の順
    - keywords: 明示キーワードが無ければ本文から抽出
    いずれも上限文字数で切り詰める。
    """
    cfg = settings or get_settings()

    meta_keywords: List[str] = [kw for kw in (keywords or []) if kw and kw.strip()]
    if not meta_keywords:
        meta_keywords = extract_keywords(content, settings=cfg)

    generated = AutoGeneratedMeta(
        title=truncate_text(_fallback_title(title, content or ""), cfg.title_max),
        description=truncate_text(_fallback_description(excerpt, content or ""), cfg.description_max),
        keywords=meta_keywords,
    )
    logger.debug(
        "[meta] auto-generated title_len=%s description_len=%s keywords=%s",
        len(generated.title),
        len(generated.description),
        len(generated.keywords),
    )
    return generated
