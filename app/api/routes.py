# app/api/routes.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from agents.keyword_agent import analyze_keyword, extract_keywords
from agents.readiness_agent import get_quick_fixes, get_seo_status_label, is_ready_to_publish
from app.config import get_settings
from app.graph.workflow import run_workflow
from models.content_models import ContentRecord
from models.keyword_models import KeywordAnalysis
from models.readiness_models import QuickFix, ReadinessReport
from services.duplicate_checker import make_title_index_checker, no_duplicate_title
from services.slug_generator import get_available_slug, is_slug_optimal, suggest_slug_improvements

logger = logging.getLogger(__name__)

router = APIRouter()


# --------- Request / Response モデル ---------


class AnalyzeRequest(BaseModel):
    record: ContentRecord
    # 既存記事の {id: title}。指定があれば重複タイトルチェックに使う
    existing_titles: Optional[dict[str, str]] = None


class AnalyzeResponse(BaseModel):
    report: ReadinessReport
    ready_to_publish: bool
    status_label: str
    quick_fixes: List[QuickFix] = []


class SlugRequest(BaseModel):
    title: str
    existing_slugs: List[str] = Field(default_factory=list)
    current_slug: Optional[str] = None
    keyword: Optional[str] = None


class SlugResponse(BaseModel):
    slug: str
    optimal: bool
    suggestions: List[str] = []


class ExtractKeywordsRequest(BaseModel):
    text: str
    max_keywords: Optional[int] = Field(None, ge=1)


class ExtractKeywordsResponse(BaseModel):
    keywords: List[str]


class AnalyzeKeywordRequest(BaseModel):
    content: str
    keyword: str


# --------- エンドポイント ---------


@router.post("/analyze", response_model=AnalyzeResponse)
async def api_analyze(payload: AnalyzeRequest) -> AnalyzeResponse:
    """
    記事 1 件の SEO Readiness を分析するメインAPI。
    existing_titles が無ければ重複チェックはスタブ（常に重複なし）。
    """
    logger.info(
        "[api.analyze] id=%s existing_titles=%s",
        payload.record.id,
        "YES" if payload.existing_titles else "NO",
    )

    checker = (
        make_title_index_checker(payload.existing_titles)
        if payload.existing_titles
        else no_duplicate_title
    )
    report = await run_workflow(payload.record, duplicate_checker=checker)

    return AnalyzeResponse(
        report=report,
        ready_to_publish=is_ready_to_publish(report),
        status_label=get_seo_status_label(report.score),
        quick_fixes=get_quick_fixes(report),
    )


@router.post("/slug", response_model=SlugResponse)
def api_slug(payload: SlugRequest) -> SlugResponse:
    """タイトルから重複しないスラッグを作って返す。"""
    slug = get_available_slug(payload.title, payload.existing_slugs, payload.current_slug)
    logger.info("[api.slug] slug=%s existing=%s", slug, len(payload.existing_slugs))
    return SlugResponse(
        slug=slug,
        optimal=is_slug_optimal(slug),
        suggestions=suggest_slug_improvements(slug, payload.keyword),
    )


@router.post("/keywords/extract", response_model=ExtractKeywordsResponse)
def api_extract_keywords(payload: ExtractKeywordsRequest) -> ExtractKeywordsResponse:
    keywords = extract_keywords(payload.text, max_keywords=payload.max_keywords)
    return ExtractKeywordsResponse(keywords=keywords)


@router.post("/keywords/analyze", response_model=KeywordAnalysis)
def api_analyze_keyword(payload: AnalyzeKeywordRequest) -> KeywordAnalysis:
    return analyze_keyword(payload.content, payload.keyword)


@router.get("/config")
def api_config() -> dict:
    """現在のしきい値設定（表示用）。"""
    return get_settings().model_dump()
