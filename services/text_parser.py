# services/text_parser.py

from __future__ import annotations

import math
import re
from typing import List, Optional, Pattern, Tuple
from urllib.parse import urlsplit

from models.analysis_models import HeadingNode

# ============================================================
# 文字種パターン
# ============================================================

# タイ文字は単語間にスペースを入れないため、連続した塊ごとに扱う
THAI_CHARS = "\u0e00-\u0e7f"
THAI_RUN_RE = re.compile(f"[{THAI_CHARS}]+")
LATIN_WORD_RE = re.compile(r"[a-zA-Z]+")

# タイ語の平均単語長（文字数）。
# 形態素解析ではなく経験則による推定値なので、単語数はあくまで近似。
THAI_AVG_WORD_LENGTH = 3.5

SENTENCE_SPLIT_RE = re.compile(r"[.!?।]+|\n+")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")

HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$", re.MULTILINE)
# 画像 ![alt](url) はリンクとして数えない
LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")
IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")


# ============================================================
# 数値ユーティリティ
# ============================================================

def round_half_up(value: float, digits: int = 0) -> float:
    """0.5 を常に切り上げる四捨五入（組み込み round は偶数丸め）。"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


# ============================================================
# 単語 / 文 / 段落
# ============================================================

def count_words(text: str) -> int:
    """
    タイ語 + 英語の単語数を数える。

    - 英語: 英字の連続を 1 単語
    - タイ語: 連続したタイ文字の塊ごとに ceil(文字数 / 3.5) 単語と推定
    """
    if not text:
        return 0

    thai_words = sum(
        math.ceil(len(run) / THAI_AVG_WORD_LENGTH) for run in THAI_RUN_RE.findall(text)
    )
    english_words = len(LATIN_WORD_RE.findall(text))
    return thai_words + english_words


def count_sentences(text: str) -> int:
    """. ! ? と改行で文を区切って数える。文字があれば最低 1。"""
    if not text or not text.strip():
        return 0
    sentences = [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]
    return max(1, len(sentences))


def split_paragraphs(text: str) -> List[str]:
    """空行区切りで段落に分割する（空の段落は除く）。"""
    if not text:
        return []
    return [p for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def first_paragraph(text: str) -> str:
    """最初の空行までのテキストを返す。"""
    if not text:
        return ""
    return PARAGRAPH_SPLIT_RE.split(text, maxsplit=1)[0]


# ============================================================
# 見出し / リンク / 画像
# ============================================================

def extract_headings(text: str) -> List[HeadingNode]:
    """
    行頭の # 〜 ###### を見出しとして、出現順の HeadingNode リストにする。
    """
    if not text:
        return []
    return [
        HeadingNode(level=len(m.group(1)), text=m.group(2).strip())
        for m in HEADING_RE.finditer(text)
    ]


def heading_lines(text: str) -> List[str]:
    """見出し行（# を含む行全体）をそのまま返す。"""
    if not text:
        return []
    return [m.group(0) for m in HEADING_RE.finditer(text)]


def is_internal_url(url: str, site_domain: str) -> bool:
    """
    相対パス / ページ内アンカー / 自サイト（サブドメイン含む）なら True。
    ドメインはホスト名で比較する（クエリ文字列などの部分一致は内部扱いにしない）。
    """
    if url.startswith("#") or (url.startswith("/") and not url.startswith("//")):
        return True
    if not site_domain:
        return False
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    domain = site_domain.strip().lower()
    return bool(host) and (host == domain or host.endswith("." + domain))


def count_links(text: str, site_domain: str = "") -> Tuple[int, int]:
    """
    [label](url) 形式のリンクを内部 / 外部に分けて数える。

    内部: 相対パス、ページ内アンカー、自サイトのドメイン
    外部: 上記以外の http(s) で始まる URL
    """
    internal = 0
    external = 0
    if not text:
        return internal, external

    for m in LINK_RE.finditer(text):
        url = m.group(2).strip()
        if is_internal_url(url, site_domain):
            internal += 1
        elif url.startswith("http"):
            external += 1
    return internal, external


def count_images(text: str) -> Tuple[int, int]:
    """![alt](url) 形式の画像数と、alt が空でない画像数を返す。"""
    total = 0
    with_alt = 0
    if not text:
        return total, with_alt

    for m in IMAGE_RE.finditer(text):
        total += 1
        if m.group(1).strip():
            with_alt += 1
    return total, with_alt


# ============================================================
# キーワードマッチ
# ============================================================

def keyword_pattern(keyword: str) -> Optional[Pattern[str]]:
    """
    キーワード用の正規表現を作る。
    大文字小文字を無視し、複数語キーワードの空白は任意の空白列にマッチさせる。
    """
    parts = (keyword or "").split()
    if not parts:
        return None
    return re.compile(r"\s+".join(re.escape(p) for p in parts), re.IGNORECASE)


def count_keyword(text: str, keyword: str) -> int:
    pattern = keyword_pattern(keyword)
    if pattern is None or not text:
        return 0
    return len(pattern.findall(text))


def contains_keyword(text: str, keyword: str) -> bool:
    pattern = keyword_pattern(keyword)
    if pattern is None or not text:
        return False
    return pattern.search(text) is not None


def strip_markup(text: str) -> str:
    """見出し記号 / 画像 / リンク / 強調を落としてプレーンテキストにする。"""
    if not text:
        return ""
    text = IMAGE_RE.sub("", text)
    text = LINK_RE.sub(lambda m: m.group(1), text)
    text = re.sub(r"^#{1,6}[ \t]+", "", text, flags=re.MULTILINE)
    text = re.sub(r"[*_`~>]+", "", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()
