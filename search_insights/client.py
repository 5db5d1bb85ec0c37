"""Zazzle 検索 API クライアント.

応答の想定構造:
  {"success": true, "data": {"search": {"searchResultsData": {"products": [...], "numRecs": 123}}}}
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests

from search_insights.config import REQUEST_TIMEOUT, SEARCH_URL_TEMPLATE, USER_AGENT
from search_insights.errors import UpstreamShapeError, UpstreamTransportError

logger = logging.getLogger(__name__)


def build_search_url(term: str) -> str:
    """検索語から検索 API の URL を組み立てる."""
    return SEARCH_URL_TEMPLATE.format(term=quote(term.strip(), safe=""))


def fetch_search_results(term: str) -> dict:
    """検索 API を呼び出して JSON を返す.

    Raises:
        UpstreamTransportError: 接続失敗・タイムアウト・2xx 以外のステータス
        UpstreamShapeError: 応答が JSON ではない
    """
    url = build_search_url(term)
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }

    try:
        resp = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.HTTPError as e:
        logger.error("検索 API エラー応答: term=%s, status=%s", term, e.response.status_code)
        raise UpstreamTransportError(
            f"Search API returned status: {e.response.status_code}"
        ) from e
    except requests.RequestException as e:
        logger.error("検索 API 接続失敗: term=%s, error=%s", term, e)
        raise UpstreamTransportError(f"Search API request failed: {e}") from e

    try:
        return resp.json(parse_constant=_reject_constant)
    except ValueError as e:
        logger.error("検索 API の応答が JSON ではありません: term=%s", term)
        raise UpstreamShapeError("Invalid data structure from search API") from e


def extract_search_results(payload: dict) -> tuple[list[dict], int]:
    """検索 API の応答から商品リストと総ヒット数を取り出す.

    Returns:
        (products, num_recs) のタプル。numRecs が無ければ 0。

    Raises:
        UpstreamShapeError: success が偽、products が無い、または商品が object ではない
    """
    if not isinstance(payload, dict) or not payload.get("success"):
        raise UpstreamShapeError("Invalid data structure from search API")

    search_results = _deep_get(payload, "data", "search", "searchResultsData")
    products = _deep_get(search_results, "products")
    if not isinstance(products, list) or not all(isinstance(p, dict) for p in products):
        raise UpstreamShapeError("Invalid data structure from search API")

    num_recs = search_results.get("numRecs") or 0
    return products, num_recs


def _reject_constant(name: str):
    """NaN / Infinity は JSON として不正なので受け付けない."""
    raise ValueError(f"Invalid JSON constant: {name}")


def _deep_get(d: dict, *keys: str):
    """ネストされた dict から安全に値を取得する."""
    for key in keys:
        if not isinstance(d, dict):
            return None
        d = d.get(key)
    return d
