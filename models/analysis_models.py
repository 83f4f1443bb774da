# models/analysis_models.py

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class HeadingNode(BaseModel):
    """
    本文中の見出し 1 件（# 〜 ######）。
    - level: 見出しレベル (1〜6)
    - text: 見出しのテキスト
    """
    level: int
    text: str

    def label(self) -> str:
        """表示用の "H2: テキスト" 形式に変換する。"""
        return f"H{self.level}: {self.text}"


class ContentMetrics(BaseModel):
    """
    本文 1 件分の集計値。
    読みやすさスコアや各種チェックの材料として Readiness 集計に渡す。
    """

    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    avg_words_per_sentence: float = 0.0
    avg_sentences_per_paragraph: float = 0.0

    # 見出しは "H2: テキスト" の文字列リストと、構造化したノードの両方を持つ
    heading_structure: List[str] = Field(default_factory=list)
    headings: List[HeadingNode] = Field(default_factory=list)

    internal_links: int = 0
    external_links: int = 0
    image_count: int = 0
    images_with_alt: int = 0

    readability_score: int = 0

    # キーワード -> 密度(%)
    keyword_density: Dict[str, float] = Field(default_factory=dict)
