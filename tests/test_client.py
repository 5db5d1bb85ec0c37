"""client モジュールのモックテスト."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from search_insights.client import (
    build_search_url,
    extract_search_results,
    fetch_search_results,
)
from search_insights.errors import UpstreamShapeError, UpstreamTransportError

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


class TestBuildSearchUrl:
    """build_search_url のテスト."""

    def test_term_encoded(self):
        url = build_search_url("cat mug")
        assert "qs%3Dcat%20mug&properties=" in url

    def test_term_trimmed(self):
        assert build_search_url("  cat  ") == build_search_url("cat")

    def test_reserved_characters_encoded(self):
        url = build_search_url("a&b=c/d")
        assert "qs%3Da%26b%3Dc%2Fd&" in url

    def test_sorted_by_sales(self):
        url = build_search_url("cat")
        assert url.startswith("https://www.zazzle.com/svc/z3/search/GetSearchWithProperties?")
        assert "st%3Dorderitemcount_all" in url


class TestFetchSearchResults:
    """fetch_search_results のテスト."""

    @patch("search_insights.client.requests.get")
    def test_success(self, mock_get):
        payload = _load_fixture("search_response.json")
        mock_resp = MagicMock()
        mock_resp.json.return_value = payload
        mock_get.return_value = mock_resp

        assert fetch_search_results("cat") == payload

        args, kwargs = mock_get.call_args
        assert args[0] == build_search_url("cat")
        assert kwargs["headers"]["Accept"] == "application/json"
        assert "timeout" in kwargs

    @patch("search_insights.client.requests.get")
    def test_http_error_status(self, mock_get):
        mock_resp = MagicMock()
        mock_resp.status_code = 503
        mock_resp.raise_for_status.side_effect = requests.HTTPError(response=mock_resp)
        mock_get.return_value = mock_resp

        with pytest.raises(UpstreamTransportError, match="503") as exc_info:
            fetch_search_results("cat")
        assert exc_info.value.status_code == 502

    @patch("search_insights.client.requests.get")
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(UpstreamTransportError):
            fetch_search_results("cat")

    @patch("search_insights.client.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout("timed out")

        with pytest.raises(UpstreamTransportError):
            fetch_search_results("cat")

    @patch("search_insights.client.requests.get")
    def test_invalid_json(self, mock_get):
        mock_resp = MagicMock()
        mock_resp.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_resp

        with pytest.raises(UpstreamShapeError):
            fetch_search_results("cat")

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    @patch("search_insights.client.requests.get")
    def test_non_finite_constants_rejected(self, mock_get, constant):
        """NaN / Infinity を含む応答は構造エラーになること."""
        resp = requests.Response()
        resp.status_code = 200
        resp.encoding = "utf-8"
        resp._content = ('{"success": true, "price": %s}' % constant).encode("utf-8")
        mock_get.return_value = resp

        with pytest.raises(UpstreamShapeError):
            fetch_search_results("cat")


class TestExtractSearchResults:
    """extract_search_results のテスト."""

    def test_fixture(self):
        products, num_recs = extract_search_results(_load_fixture("search_response.json"))

        assert len(products) == 4
        assert products[0]["storeName"] == "PawPrintsShop"
        assert num_recs == 48213

    def test_missing_num_recs(self):
        payload = {"success": True, "data": {"search": {"searchResultsData": {"products": []}}}}
        assert extract_search_results(payload) == ([], 0)

    def test_not_success(self):
        payload = _load_fixture("search_response.json")
        payload["success"] = False

        with pytest.raises(UpstreamShapeError):
            extract_search_results(payload)

    def test_missing_success_flag(self):
        payload = _load_fixture("search_response.json")
        del payload["success"]

        with pytest.raises(UpstreamShapeError):
            extract_search_results(payload)

    @pytest.mark.parametrize("payload", [
        {"success": True},
        {"success": True, "data": None},
        {"success": True, "data": {"search": {}}},
        {"success": True, "data": {"search": {"searchResultsData": {"numRecs": 3}}}},
        {"success": True, "data": {"search": {"searchResultsData": {"products": "x"}}}},
        {"success": True, "data": {"search": {"searchResultsData": {"products": [None]}}}},
        {"success": True, "data": {"search": {"searchResultsData": {"products": [{}, "x"]}}}},
        [],
        None,
    ])
    def test_missing_products(self, payload):
        with pytest.raises(UpstreamShapeError, match="Invalid data structure"):
            extract_search_results(payload)
