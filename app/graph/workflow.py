# app/graph/workflow.py
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.config import Settings, get_settings
from app.graph import nodes
from app.graph.state import WorkflowState
from models.content_models import ContentRecord
from models.readiness_models import ReadinessReport
from services.duplicate_checker import DuplicateTitleChecker, no_duplicate_title

logger = logging.getLogger(__name__)

# 開発中はワークフローの進捗を必ずコンソールに出したいので、ハンドラを直付け
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

logger.setLevel(logging.INFO)


def _run_sync_nodes(state: WorkflowState) -> WorkflowState:
    """
    入力レコードだけに依存する 4 ステップ。
    互いの途中結果は参照しないので順番は入れ替えても結果は同じ。
    """
    # 1) 本文の集計
    state = nodes.segmentation_node(state)
    # 2) キーワード配置
    state = nodes.keyword_node(state)
    # 3) トピック網羅
    state = nodes.topic_node(state)
    # 4) メタ / スラッグ
    state = nodes.meta_node(state)
    return state


def _finish(state: WorkflowState, started: float) -> ReadinessReport:
    # 6〜8) チェックリスト / スコア / 指摘分類
    state = nodes.readiness_node(state)
    report = state.report.model_copy(
        update={
            "processing_time_ms": int((time.perf_counter() - started) * 1000),
            "analyzed_at": datetime.now(timezone.utc),
        }
    )
    logger.info(
        "[readiness_workflow] done id=%s score=%s critical=%s",
        state.record.id,
        report.score,
        len(report.critical_issues),
    )
    return report


async def run_workflow(
    record: ContentRecord,
    duplicate_checker: Optional[DuplicateTitleChecker] = no_duplicate_title,
    settings: Optional[Settings] = None,
) -> ReadinessReport:
    """
    記事 1 件の SEO Readiness を分析する唯一のエントリポイント。

    segmentation → keyword → topic → meta → duplicate → readiness

    duplicate_checker は (title, current_id) -> bool の async 関数。
    None / 例外 / タイムアウトのときは「重複なし」として扱う。
    """
    started = time.perf_counter()
    cfg = settings or get_settings()
    logger.info(
        "[readiness_workflow] start id=%s title_len=%s body_len=%s keywords=%s",
        record.id,
        len(record.title),
        len(record.body),
        len(record.target_keywords),
    )

    state = WorkflowState(record=record, settings=cfg)
    state = _run_sync_nodes(state)

    # 5) 重複タイトル（唯一の非同期境界）
    state = await nodes.duplicate_check_node(state, duplicate_checker)

    return _finish(state, started)


# エイリアス
analyze_seo = run_workflow


def run_preview(
    record: ContentRecord,
    settings: Optional[Settings] = None,
) -> ReadinessReport:
    """
    プレビュー用の同期版。
    まだ保存されていない下書きなど、重複チェックができない場面で使う（重複なし扱い）。
    """
    started = time.perf_counter()
    cfg = settings or get_settings()
    logger.info("[readiness_workflow] preview id=%s", record.id)

    state = WorkflowState(record=record, settings=cfg)
    state = _run_sync_nodes(state)
    state = nodes.skip_duplicate_check_node(state)
    return _finish(state, started)


async def run_batch(
    records: Iterable[ContentRecord],
    duplicate_checker: Optional[DuplicateTitleChecker] = no_duplicate_title,
    settings: Optional[Settings] = None,
) -> List[ReadinessReport]:
    """複数記事をまとめて分析する。共有状態が無いので並行に流すだけ。"""
    return list(
        await asyncio.gather(
            *(run_workflow(r, duplicate_checker, settings) for r in records)
        )
    )
