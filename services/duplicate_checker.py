# services/duplicate_checker.py

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Optional

logger = logging.getLogger(__name__)

# (title, current_id) -> 重複していれば True
DuplicateTitleChecker = Callable[[str, Optional[str]], Awaitable[bool]]


async def no_duplicate_title(title: str, current_id: Optional[str] = None) -> bool:
    """
    デフォルトの重複タイトルチェック。
    コンテンツストアを持たないので常に「重複なし」を返す。
    実運用では呼び出し側が DB 問い合わせ版を差し込む。
    """
    return False


def make_title_index_checker(titles_by_id: Mapping[str, str]) -> DuplicateTitleChecker:
    """
    既存記事の {id: title} から重複チェック関数を作る。
    自分自身（current_id）は除外し、前後の空白と大文字小文字は無視して比較する。
    """
    index = {k: (v or "").strip().lower() for k, v in titles_by_id.items()}

    async def _check(title: str, current_id: Optional[str] = None) -> bool:
        needle = (title or "").strip().lower()
        if not needle:
            return False
        return any(t == needle for article_id, t in index.items() if article_id != current_id)

    return _check


async def check_duplicate_title_safely(
    checker: Optional[DuplicateTitleChecker],
    title: str,
    current_id: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bool:
    """
    外部の重複チェックを 1 回だけ await する。
    未指定 / 例外 / タイムアウトのときは「重複なし」として分析を続ける。
    リトライはしない（コラボレータ側の責務）。
    """
    if checker is None:
        return False

    try:
        if timeout is None:
            result = await checker(title, current_id)
        else:
            result = await asyncio.wait_for(checker(title, current_id), timeout=timeout)
        return bool(result)
    except asyncio.TimeoutError:
        logger.warning(
            "[duplicate_checker] timed out after %ss title=%s; treating as not duplicate",
            timeout,
            title,
        )
    except Exception as e:
        logger.warning(
            "[duplicate_checker] check failed title=%s error=%s; treating as not duplicate",
            title,
            e,
        )
    return False
