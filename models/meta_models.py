# models/meta_models.py

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


# -----------------------------------------
# 長さ判定の区分
# -----------------------------------------
LengthStatus = Literal[
    "EMPTY",       # 未入力
    "TOO_SHORT",   # min 未満
    "OPTIMAL",     # min〜optimal
    "LONG",        # optimal〜max（使えるが少し長い）
    "TRUNCATED",   # max 超え（検索結果で切れる）
]


class FieldValidation(BaseModel):
    """タイトル / ディスクリプション 1 項目分の長さ判定。"""

    length: int = 0
    status: LengthStatus = "EMPTY"
    optimal: bool = False
    message: str = ""


class MetaValidation(BaseModel):
    """メタ情報（タイトル / ディスクリプション / スラッグ）の構造チェック結果。"""

    title: FieldValidation = Field(default_factory=FieldValidation)
    description: FieldValidation = Field(default_factory=FieldValidation)
    slug_optimal: bool = False
    slug_suggestions: List[str] = Field(default_factory=list)


class AutoGeneratedMeta(BaseModel):
    """SEO タイトル / ディスクリプション未入力時に自動生成する代替値。"""

    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
