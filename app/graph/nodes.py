# app/graph/nodes.py
from __future__ import annotations

import logging
from typing import List, Optional

from app.graph.state import WorkflowState
from agents.keyword_agent import analyze_keyword
from agents.meta_agent import auto_generate_meta, validate_meta
from agents.readability_agent import analyze_content
from agents.readiness_agent import build_report
from agents.topic_agent import detect_topic_coverage
from services.duplicate_checker import DuplicateTitleChecker, check_duplicate_title_safely

logger = logging.getLogger(__name__)


def _log_progress(state: WorkflowState, node: str, message: str) -> WorkflowState:
    """進捗ログを state に積むユーティリティ。"""
    line = f"[{node}] {message}"
    state.progress_messages.append(line)
    state.current_node = node
    logger.info(line)
    return state


def _analysis_keywords(state: WorkflowState) -> List[str]:
    """明示キーワード + メインキーワード（重複は除く、順序は保つ）。"""
    keywords: List[str] = []
    for kw in [*state.record.target_keywords, state.settings.primary_keyword]:
        if kw and kw not in keywords:
            keywords.append(kw)
    return keywords


# ---------- Segmentation ノード ----------


def segmentation_node(state: WorkflowState) -> WorkflowState:
    """本文の単語数 / 見出し / リンク / 画像 / 読みやすさを集計する。"""
    state = _log_progress(state, "segmentation", "start: measuring content")

    state.content_metrics = analyze_content(
        state.record.body,
        keywords=_analysis_keywords(state),
        settings=state.settings,
    )

    state = _log_progress(
        state,
        "segmentation",
        f"done: words={state.content_metrics.word_count} "
        f"readability={state.content_metrics.readability_score}",
    )
    return state


# ---------- Keyword ノード ----------


def keyword_node(state: WorkflowState) -> WorkflowState:
    """メインキーワードと明示キーワードそれぞれの配置を分析する。"""
    state = _log_progress(state, "keyword", "start: analyzing keyword placement")

    body = state.record.body
    state.primary_keyword_analysis = analyze_keyword(
        body, state.settings.primary_keyword, settings=state.settings
    )
    state.keyword_analyses = [
        analyze_keyword(body, kw, settings=state.settings)
        for kw in state.record.target_keywords
    ]

    state = _log_progress(
        state,
        "keyword",
        f"done: primary_prominence={state.primary_keyword_analysis.prominence} "
        f"explicit_keywords={len(state.keyword_analyses)}",
    )
    return state


# ---------- Topic ノード ----------


def topic_node(state: WorkflowState) -> WorkflowState:
    state = _log_progress(state, "topic", "start: detecting topic coverage")

    state.topic_coverage = detect_topic_coverage(state.record.body)

    state = _log_progress(state, "topic", f"done: coverage={state.topic_coverage.coverage_score}%")
    return state


# ---------- Meta ノード ----------


def meta_node(state: WorkflowState) -> WorkflowState:
    """
    実効タイトル / ディスクリプション / スラッグを検証し、
    SEO 上書きが欠けていれば代替メタを自動生成する。
    """
    state = _log_progress(state, "meta", "start: validating meta fields")

    record = state.record
    state.meta_validation = validate_meta(
        record.effective_title,
        record.effective_description,
        record.slug,
        keyword=state.settings.primary_keyword,
        settings=state.settings,
    )

    if not record.meta_title or not record.meta_description:
        state.auto_generated_meta = auto_generate_meta(
            record.title,
            record.body,
            record.excerpt,
            record.target_keywords,
            settings=state.settings,
        )

    state = _log_progress(
        state,
        "meta",
        f"done: title_optimal={state.meta_validation.title.optimal} "
        f"description_optimal={state.meta_validation.description.optimal} "
        f"slug_optimal={state.meta_validation.slug_optimal}",
    )
    return state


# ---------- Duplicate ノード ----------


async def duplicate_check_node(
    state: WorkflowState,
    checker: Optional[DuplicateTitleChecker],
) -> WorkflowState:
    """
    重複タイトルチェックを外部コラボレータに委譲する。
    失敗しても分析は止めず「重複なし」として続ける。
    """
    state = _log_progress(state, "duplicate", "start: delegating duplicate title check")

    state.has_duplicate_title = await check_duplicate_title_safely(
        checker,
        state.record.title,
        state.record.id,
        timeout=state.settings.duplicate_check_timeout,
    )

    state = _log_progress(state, "duplicate", f"done: duplicate={state.has_duplicate_title}")
    return state


def skip_duplicate_check_node(state: WorkflowState) -> WorkflowState:
    """プレビュー時は重複チェックを行わず「重複なし」のまま進める。"""
    state.has_duplicate_title = False
    return _log_progress(state, "duplicate", "skipped: preview mode")


# ---------- Readiness ノード ----------


def readiness_node(state: WorkflowState) -> WorkflowState:
    """チェックリスト / スコア / 指摘分類をまとめて ReadinessReport を作る。"""
    state = _log_progress(state, "readiness", "start: building readiness report")

    state.report = build_report(
        record=state.record,
        metrics=state.content_metrics,
        primary=state.primary_keyword_analysis,
        keyword_analyses=state.keyword_analyses,
        topic_coverage=state.topic_coverage,
        meta=state.meta_validation,
        has_duplicate_title=state.has_duplicate_title,
        auto_generated_meta=state.auto_generated_meta,
        settings=state.settings,
    )

    state = _log_progress(state, "readiness", f"done: score={state.report.score}")
    return state
