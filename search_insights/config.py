"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Zazzle 検索 ---
# 売上順 (orderitemcount_all) の 1 ページ目。{term} はエンコード済みの検索語
SEARCH_URL_TEMPLATE: str = os.environ.get(
    "SEARCH_URL_TEMPLATE",
    "https://www.zazzle.com/svc/z3/search/GetSearchWithProperties"
    "?cv=1&diffParameters=st%2Cpg%2Csd%2Cqs&diffProperties=ProductSearchTopIds"
    "&parameters=st%3Dorderitemcount_all%26pg%3D1%26sd%3Ddesc%26qs%3D{term}"
    "&properties=LightProductObjects%3Dfalse%26Maturity%3DR%26IsPublic%3Dtrue"
    "%26ShowFullSearchPages%3Dfalse%26LookAheadPages%3D16%26LimitTypesInSearch%3Dtrue"
    "%26MaxStoresPerPage%3D6%26IsHumanSearch%3Dfalse%26UserDefaultPageSize%3D120"
    "%26GetAggregations%3Dtrue%26LegoStoreAggregation%3Dfalse"
    "%26LegoStoreCategoryAggregation%3Dfalse%26UseCYOSearch%3Dfalse"
    "%26IgnoreCYOManual%3Dfalse%26GetGuidedSearch%3Dtrue%26IsBestSellerSearch%3Dtrue"
    "%26EnablePriceFilter%3Dfalse%26MinPrice%3D0%26MaxPrice%3D0%26ProductLimit%3D1"
    "%26DiversityMinScoreFactor%3D-1%26DiversityLimitWindowSize%3D16"
    "%26ProductDepartmentUrl%3D0%26IsBestGuessSearch%3Dfalse%26EnableNLS%3Dfalse"
    "&type=SearchResultsData&client=js",
)

# --- User-Agent ---
USER_AGENT: str = os.environ.get(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36",
)

# --- リクエスト設定 ---
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "15"))  # 秒

# --- 集計 ---
UNKNOWN_STORE = "Unknown Store"

# --- CORS ---
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# --- ログ ---
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
# Lambda 上ではファイル出力しない。指定時のみ日付別ログファイルを作成
LOG_DIR: Path | None = Path(os.environ["LOG_DIR"]) if os.environ.get("LOG_DIR") else None
