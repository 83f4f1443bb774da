# models/content_models.py

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentRecord(BaseModel):
    """
    分析対象となる記事 1 件分の入力データ。
    呼び出し側が所有し、分析中は変更しない前提なので frozen にしている。

    Attributes:
        id (str | None): 記事 ID（重複タイトルチェックの委譲にだけ使う）。
        title (str): 記事タイトル。
        body (str): 本文（見出し / リンク / 画像などの簡易マークダウンを含む）。
        excerpt (str): 抜粋。
        slug (str): URL スラッグ。
        meta_title (str | None): SEO タイトルの上書き。無ければ title を使う。
        meta_description (str | None): ディスクリプションの上書き。無ければ excerpt を使う。
        target_keywords (List[str]): 明示的な SEO キーワード。
        has_featured_image (bool): アイキャッチ画像の有無。
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    title: str = ""
    body: str = ""
    excerpt: str = ""
    slug: str = ""
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    target_keywords: List[str] = Field(default_factory=list)
    has_featured_image: bool = False

    # ------------------------------
    # None が来ても空文字として扱う
    # ------------------------------
    @field_validator("title", "body", "excerpt", "slug", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("target_keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return value
        # 空白だけのキーワードは捨てる（型の不一致は pydantic に任せる）
        return [kw for kw in value if not (isinstance(kw, str) and not kw.strip())]

    @property
    def effective_title(self) -> str:
        """SEO タイトル（上書きがあればそちら）。"""
        return self.meta_title or self.title

    @property
    def effective_description(self) -> str:
        """ディスクリプション（上書きが無ければ抜粋）。"""
        return self.meta_description or self.excerpt
