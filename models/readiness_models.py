# models/readiness_models.py

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from models.analysis_models import ContentMetrics
from models.keyword_models import KeywordAnalysis
from models.meta_models import AutoGeneratedMeta, MetaValidation
from models.topic_models import TopicCoverage


class ReadinessChecks(BaseModel):
    """
    公開前チェックリスト（10 項目）。
    フィールドの並び順がそのまま指摘の並び順になる。
    """

    title_optimal: bool = False
    description_optimal: bool = False
    keyword_in_title: bool = False
    keyword_in_first_paragraph: bool = False
    keyword_in_headings: bool = False
    has_internal_links: bool = False
    all_images_have_alt: bool = True
    no_duplicate_title: bool = True
    slug_optimal: bool = False
    readability_good: bool = False

    def passed_count(self) -> int:
        return sum(1 for v in self.model_dump().values() if v)

    def total_count(self) -> int:
        return len(type(self).model_fields)


class ReadinessReport(BaseModel):
    """
    Readiness 集計の唯一の出力。
    毎回ゼロから作り直し、後から書き換えない。
    """

    score: int = Field(0, ge=0, le=100)
    checks: ReadinessChecks = Field(default_factory=ReadinessChecks)

    critical_issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    # 画面表示用に中間結果もそのまま載せる
    content_metrics: ContentMetrics = Field(default_factory=ContentMetrics)
    topic_coverage: TopicCoverage = Field(default_factory=TopicCoverage)
    primary_keyword_analysis: Optional[KeywordAnalysis] = None
    keyword_analyses: List[KeywordAnalysis] = Field(default_factory=list)
    meta_validation: MetaValidation = Field(default_factory=MetaValidation)
    auto_generated_meta: Optional[AutoGeneratedMeta] = None

    processing_time_ms: int = 0
    analyzed_at: Optional[datetime] = None


class QuickFix(BaseModel):
    """よくある指摘に対するワンクリック修正案。"""

    issue: str
    fix: str
    action: Literal["auto", "manual"]
