# services/slug_generator.py

from __future__ import annotations

import re
import time
from typing import Callable, Iterable, List, Optional

from app.config import Settings, get_settings
from services.text_parser import THAI_CHARS

# タイ文字 / 英小文字 / 数字 / 空白 / ハイフン以外は落とす
_DISALLOWED_RE = re.compile(f"[^{THAI_CHARS}a-z0-9\\s-]")
_SEPARATOR_RUN_RE = re.compile(r"[\s-]+")
_OPTIMAL_SLUG_RE = re.compile(f"[{THAI_CHARS}a-z0-9-]+")

# 長すぎるスラッグをハイフン位置で切るのは、この位置より後ろにハイフンがある場合だけ
MIN_WORD_BOUNDARY_CUT = 20


def generate_slug(text: str, settings: Optional[Settings] = None) -> str:
    """
    タイトルなどから URL スラッグを作る。

    1) 小文字化
    2) 許可文字以外を除去
    3) 空白 / ハイフンの連続を 1 つのハイフンに
    4) 先頭・末尾のハイフンを除去
    5) slug_max を超えたらハイフン位置（無理なら文字数）で切る

    許可文字を 1 つも含まないタイトル（"-" や記号だけなど）は空文字になる。
    """
    cfg = settings or get_settings()
    if not text or not text.strip():
        return ""

    slug = _DISALLOWED_RE.sub("", text.lower().strip())
    slug = _SEPARATOR_RUN_RE.sub("-", slug).strip("-")

    if len(slug) > cfg.slug_max:
        truncated = slug[: cfg.slug_max]
        last_hyphen = truncated.rfind("-")
        slug = truncated[:last_hyphen] if last_hyphen > MIN_WORD_BOUNDARY_CUT else truncated

    return slug


def is_slug_optimal(slug: str, settings: Optional[Settings] = None) -> bool:
    """SEO 的に問題のないスラッグか。"""
    cfg = settings or get_settings()
    if not slug:
        return False
    if len(slug) > cfg.slug_max:
        return False
    if not _OPTIMAL_SLUG_RE.fullmatch(slug):
        return False
    if "--" in slug:
        return False
    if slug.startswith("-") or slug.endswith("-"):
        return False
    return True


def suggest_slug_improvements(
    slug: str,
    keyword: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[str]:
    """スラッグの改善提案。"""
    cfg = settings or get_settings()
    if not slug:
        return ["กรุณาระบุ URL slug"]

    suggestions: List[str] = []
    if len(slug) > cfg.slug_max:
        suggestions.append(
            f"URL slug ยาวเกินไป ({len(slug)} ตัวอักษร) ควรน้อยกว่า {cfg.slug_max} ตัวอักษร"
        )
    if "--" in slug:
        suggestions.append("พบเครื่องหมาย - ติดกันมากกว่า 1 ตัว ควรใช้เพียง 1 ตัว")
    if slug.startswith("-") or slug.endswith("-"):
        suggestions.append("URL slug ไม่ควรเริ่มหรือลงท้ายด้วยเครื่องหมาย -")
    if "_" in slug:
        suggestions.append("ควรใช้ - แทน _ ใน URL slug")
    if re.search(r"[A-Z]", slug):
        suggestions.append("URL slug ควรเป็นตัวพิมพ์เล็กทั้งหมด")

    if keyword and keyword.strip():
        keyword_slug = re.sub(r"\s+", "-", keyword.strip().lower())
        if keyword_slug not in slug:
            suggestions.append(f'ลองเพิ่ม "{keyword}" ใน URL slug เพื่อ SEO ที่ดีขึ้น')

    return suggestions


def generate_slug_variations(base_slug: str, count: int = 3) -> List[str]:
    """base-1, base-2, ... を count 件作る。"""
    return [f"{base_slug}-{i}" for i in range(1, count + 1)]


def is_slug_unique(slug: str, existing_slugs: Iterable[str]) -> bool:
    return slug not in set(existing_slugs)


def get_available_slug(
    title: str,
    existing_slugs: Iterable[str],
    current_slug: Optional[str] = None,
    settings: Optional[Settings] = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """
    重複しないスラッグを返す。

    - 編集中でスラッグが変わっていなければ current_slug をそのまま使う
    - base が空いていれば base
    - 空いていなければ base-1 〜 base-N
    - それも全部埋まっていればミリ秒タイムスタンプを付ける
    - タイトルから base が作れない（空）ときはタイムスタンプだけを使う

    使用済みスラッグは呼び出し側が渡す（ここでは取得しない）。
    """
    cfg = settings or get_settings()
    used = set(existing_slugs)
    base_slug = generate_slug(title, settings=cfg)
    if not base_slug:
        return str(int(clock() * 1000))

    if current_slug and current_slug == base_slug:
        return current_slug

    if is_slug_unique(base_slug, used):
        return base_slug

    for variation in generate_slug_variations(base_slug, cfg.slug_max_variations):
        if is_slug_unique(variation, used):
            return variation

    return f"{base_slug}-{int(clock() * 1000)}"
