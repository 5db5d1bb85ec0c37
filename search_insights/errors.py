"""エラー定義.

どのエラーもリクエスト単位で致命的。リトライ・部分的な結果返却は行わない。
"""


class SearchInsightsError(Exception):
    """HTTP ステータス付きの基底例外."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ClientInputError(SearchInsightsError):
    """検索語が未指定・空白のみ."""

    status_code = 400


class UpstreamTransportError(SearchInsightsError):
    """検索 API に到達できない、または 2xx 以外を返した."""

    status_code = 502


class UpstreamShapeError(SearchInsightsError):
    """検索 API の応答が想定の構造ではない."""

    status_code = 502
