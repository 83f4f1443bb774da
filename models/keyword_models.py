# models/keyword_models.py

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class KeywordPositions(BaseModel):
    """キーワードが本文のどこに現れたか。"""

    in_title: bool = False            # 本文 1 行目（H1 想定）に含まれるか
    in_first_paragraph: bool = False  # 最初の段落に含まれるか
    in_headings: int = 0              # キーワードを含む見出しの数
    in_content: int = 0               # 本文全体での出現回数


class KeywordAnalysis(BaseModel):
    """
    1 キーワード分の配置 / 密度 / 目立ち度の分析結果。

    Attributes:
        keyword (str): 対象キーワード。
        found (bool): 本文中に 1 回以上現れたか。
        positions (KeywordPositions): 配置フラグと出現回数。
        density (float): 出現回数 / 総単語数 × 100（小数 2 桁）。
        prominence (int): 0〜100 の目立ち度スコア。
        suggestions (List[str]): 改善提案。
        related_keywords (List[str]): 関連キーワード候補。
    """

    keyword: str
    found: bool = False
    positions: KeywordPositions = Field(default_factory=KeywordPositions)
    density: float = 0.0
    prominence: int = Field(0, ge=0, le=100)
    suggestions: List[str] = Field(default_factory=list)
    related_keywords: List[str] = Field(default_factory=list)
