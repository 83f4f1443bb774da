# app/graph/state.py

from typing import List, Optional

from pydantic import BaseModel, Field

from app.config import Settings
from models.analysis_models import ContentMetrics
from models.content_models import ContentRecord
from models.keyword_models import KeywordAnalysis
from models.meta_models import AutoGeneratedMeta, MetaValidation
from models.readiness_models import ReadinessReport
from models.topic_models import TopicCoverage


class WorkflowState(BaseModel):
    """
    Readiness 分析ワークフローの State。
    各ノードが担当フィールドだけを埋めていき、最後に report を組み立てる。
    呼び出しごとに新しく作り、使い回さない。
    """

    # 入力
    record: ContentRecord
    settings: Settings

    # Segmentation の出力
    content_metrics: Optional[ContentMetrics] = None

    # Keyword Analyzer の出力（メインキーワード + 明示キーワード）
    primary_keyword_analysis: Optional[KeywordAnalysis] = None
    keyword_analyses: List[KeywordAnalysis] = Field(default_factory=list)

    # Topic Coverage の出力
    topic_coverage: Optional[TopicCoverage] = None

    # Meta / Slug の出力
    meta_validation: Optional[MetaValidation] = None
    auto_generated_meta: Optional[AutoGeneratedMeta] = None

    # 重複タイトルチェックの結果（不明なら False）
    has_duplicate_title: bool = False

    # 最終結果
    report: Optional[ReadinessReport] = None

    # 進捗ログ
    progress_messages: List[str] = Field(default_factory=list)
    current_node: Optional[str] = None
