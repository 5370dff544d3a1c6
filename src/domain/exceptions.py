"""開票速報ドメインの例外定義.

取得・正規化・議席配分の各段階で発生する失敗を表す。
いずれもポーリング境界で回復可能であり、プロセスを停止させるものではない。
"""

from __future__ import annotations


class TallyError(Exception):
    """開票速報処理の基底例外."""


class FetchError(TallyError):
    """速報データの取得失敗（ネットワーク / HTTPエラー / 非成功ステータス）."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class MalformedSnapshotError(TallyError):
    """速報ドキュメントの必須項目が欠落またはパース不能."""


class DegenerateApportionmentError(TallyError):
    """選挙商数が0などの理由で議席配分が計算できない."""


class ConstituencyNotFoundError(TallyError):
    """選挙区IDが名簿に存在しない."""

    def __init__(self, constituency_id: str) -> None:
        super().__init__(f"選挙区が見つかりません: {constituency_id}")
        self.constituency_id = constituency_id
