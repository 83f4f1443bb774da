# models/topic_models.py

from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TopicDefinition(BaseModel):
    """
    トピック網羅チェックの 1 エントリ（固定データ）。
    triggers のどれか 1 つでも本文に含まれていれば「カバー済み」とみなす。
    """

    model_config = ConfigDict(frozen=True)

    label: str
    triggers: Tuple[str, ...]
    suggestion: str
    heading_suggestion: str


class TopicCoverage(BaseModel):
    """トピック網羅率の判定結果。"""

    # トピックキー -> カバー済みか（キーの並びはタクソノミー順）
    topics: Dict[str, bool] = Field(default_factory=dict)
    coverage_score: int = 0
    missing_topics: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
