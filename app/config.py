# app/config.py

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    SEO 分析エンジン全体で使う設定クラス。
    .env / 環境変数 (SEO_ プレフィックス) から読み込み、しきい値を上書きできる。
    """

    # ---------- サイト / ドメイン ----------
    # 記事全体で狙うメインキーワード
    primary_keyword: str = "กันสาดพับได้"
    # 内部リンク判定に使う自サイトのドメイン
    site_domain: str = "siamrooftech.com"

    # ---------- タイトル / ディスクリプション ----------
    title_min: int = 30
    title_optimal: int = 60
    title_max: int = 70

    description_min: int = 120
    description_optimal: int = 155
    description_max: int = 160

    # ---------- スラッグ ----------
    slug_max: int = 75
    # 重複時に -1, -2 ... を試す回数
    slug_max_variations: int = 10

    # ---------- 本文 / キーワード ----------
    min_internal_links: int = 2
    optimal_keyword_density: float = 1.0
    max_keyword_density: float = 2.5
    min_word_count: int = 300
    keywords_max: int = 10

    # ---------- スコア判定 ----------
    readability_pass_threshold: int = 60
    publish_score_threshold: int = 70
    topic_coverage_warning_threshold: int = 50

    # ---------- 外部コラボレータ ----------
    # 重複タイトルチェックの待ち時間（秒）。None なら無制限
    duplicate_check_timeout: float | None = 2.0

    # ---------- Pydantic Settings 設定 ----------
    model_config = SettingsConfigDict(
        env_prefix="SEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        """しきい値の大小関係が崩れていたら構築時点でエラーにする。"""
        if not 0 < self.title_min <= self.title_optimal <= self.title_max:
            raise ValueError("title_min <= title_optimal <= title_max を満たしていません")
        if not 0 < self.description_min <= self.description_optimal <= self.description_max:
            raise ValueError(
                "description_min <= description_optimal <= description_max を満たしていません"
            )
        if self.slug_max <= 0:
            raise ValueError("slug_max は正の値である必要があります")
        if self.slug_max_variations < 0:
            raise ValueError("slug_max_variations は 0 以上である必要があります")
        if not 0 < self.optimal_keyword_density <= self.max_keyword_density:
            raise ValueError("optimal_keyword_density <= max_keyword_density を満たしていません")
        if self.min_internal_links < 0 or self.min_word_count < 0 or self.keywords_max <= 0:
            raise ValueError("min_internal_links / min_word_count / keywords_max が不正です")
        for name in ("readability_pass_threshold", "publish_score_threshold",
                     "topic_coverage_warning_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} は 0〜100 の範囲で指定してください")
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings をシングルトン的に使うためのヘルパ。"""
    return Settings()


# 他のモジュールからは `from app.config import settings` で利用
settings = get_settings()
