"""検索インサイト API — Lambda エントリーポイント.

処理フロー:
  1. クエリパラメータ term を検証
  2. Zazzle 検索 API を呼び出し
  3. 応答の構造を検証して商品リストを取り出す
  4. 商品ごとの Stats 算出・各種集計
  5. JSON レスポンスを返す
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime

from search_insights.analysis import build_report
from search_insights.client import extract_search_results, fetch_search_results
from search_insights.config import CORS_HEADERS, LOG_DIR, LOG_LEVEL
from search_insights.errors import ClientInputError, SearchInsightsError
from search_insights.models import SearchReport

logger = logging.getLogger(__name__)


def setup_logging(stream=None) -> None:
    """ロギングの初期設定. stream 省略時は標準出力."""
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if LOG_DIR is not None:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"search_insights_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    # ルートにハンドラがあると basicConfig はレベルも変えない (Lambda ランタイム)
    logging.getLogger().setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))


def search(term: str | None) -> SearchReport:
    """検索語に対して検索 API を呼び出し、集計結果を返す.

    Raises:
        ClientInputError: term が未指定・空白のみ
        UpstreamTransportError / UpstreamShapeError: 検索 API の失敗
    """
    if not term or not term.strip():
        raise ClientInputError("Search term is missing")

    logger.info("検索開始: term=%s", term)
    start_time = time.time()

    payload = fetch_search_results(term)
    products, num_recs = extract_search_results(payload)
    report = build_report(products, num_recs)

    elapsed = time.time() - start_time
    logger.info(
        "検索完了: term=%s, 商品数=%d, saturation=%s, 所要時間=%.2f 秒",
        term, len(report.products), report.saturation, elapsed,
    )
    return report


def _response(status_code: int, body: dict | None = None) -> dict:
    headers = dict(CORS_HEADERS)
    if body is None:
        return {"statusCode": status_code, "headers": headers, "body": ""}

    headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, ensure_ascii=False, allow_nan=False),
    }


def lambda_handler(event, context):
    """API Gateway (プロキシ統合) からの呼び出しを処理する."""
    setup_logging()
    http_method = (event.get("httpMethod") or "GET").upper()

    if http_method == "OPTIONS":
        return _response(204)
    if http_method != "GET":
        return _response(405, {"error": f"Method {http_method} not allowed"})

    query_params = event.get("queryStringParameters") or {}

    try:
        report = search(query_params.get("term"))
    except SearchInsightsError as e:
        logger.error("API Error: %s", e.message)
        return _response(e.status_code, e.to_dict())
    except Exception:
        logger.exception("予期しないエラー")
        return _response(500, {"error": "Internal server error"})

    return _response(200, report.to_dict())


def main(argv: list[str] | None = None) -> int:
    """コマンドラインから検索を実行し、JSON を標準出力に書き出す."""
    setup_logging(sys.stderr)
    args = sys.argv[1:] if argv is None else argv
    term = " ".join(args)

    try:
        report = search(term)
    except SearchInsightsError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
