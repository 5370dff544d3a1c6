"""開票速報ドキュメントの正規化ドメインサービス.

選挙 → 連合 → 政党 → 候補者 の入れ子構造を持つ速報JSONを、
候補者単位のフラットな CandidateRecord 列と選挙全体のメタデータに変換する。

ドキュメント構造（TSE速報JSON）:
    {
        "dg": "06/10/2024", "hg": "21:35:12",
        "s": {"pst": "98,76"},
        "carg": [
            {"nv": "55", "agr": [
                {"par": [
                    {"sg": "PL", "cand": [
                        {"sqcand": "250001", "nmu": "FULANO",
                         "vap": "12345", "pvap": "1,23"}
                    ]}
                ]}
            ]}
        ]
    }

数値は文字列で届く。必須の数値項目が欠落・パース不能な場合は
スナップショット全体を MalformedSnapshotError として扱い、部分的な結果は返さない。
"""

from __future__ import annotations

import math

from collections.abc import Callable, Mapping
from typing import Any

from src.domain.exceptions import MalformedSnapshotError
from src.domain.value_objects.tally import (
    CandidateRecord,
    ContestKind,
    ContestSnapshot,
)


PortraitUrlFactory = Callable[[str], str]


class TallyNormalizer:
    """速報ドキュメントを ContestSnapshot に変換する."""

    def __init__(self, portrait_url_for: PortraitUrlFactory | None = None) -> None:
        """初期化.

        Args:
            portrait_url_for: 候補者IDから顔写真URLを組み立てる関数（省略時は空文字）
        """
        self._portrait_url_for = portrait_url_for

    def normalize(
        self,
        document: Mapping[str, Any],
        contest_kind: ContestKind,
        portrait_url_for: PortraitUrlFactory | None = None,
    ) -> ContestSnapshot:
        """1選挙分の速報ドキュメントを正規化する.

        Args:
            document: パース済みの速報JSON
            contest_kind: 選挙種別
            portrait_url_for: この呼び出しに限り使う顔写真URL関数

        Returns:
            ContestSnapshot

        Raises:
            MalformedSnapshotError: 必須項目の欠落・パース失敗・議席数の不一致
        """
        if not isinstance(document, Mapping):
            raise MalformedSnapshotError("速報ドキュメントがオブジェクトではありません")

        url_for = portrait_url_for or self._portrait_url_for
        groups = _as_list(document.get("carg"), "carg")

        candidates: list[CandidateRecord] = []
        for group in groups:
            for coalition in _as_list(group.get("agr"), "agr"):
                for party in _as_list(coalition.get("par"), "par"):
                    party_code = _require_str(party, "sg")
                    for raw in _as_list(party.get("cand"), "cand"):
                        candidates.append(
                            self._to_record(raw, party_code, url_for)
                        )

        return ContestSnapshot(
            contest_kind=contest_kind,
            seats_available=_read_seats(groups, contest_kind),
            candidates=tuple(candidates),
            percent_totalized=_read_percent_totalized(document),
            snapshot_timestamp=_read_timestamp(document),
        )

    @staticmethod
    def _to_record(
        raw: Mapping[str, Any],
        party_code: str,
        url_for: PortraitUrlFactory | None,
    ) -> CandidateRecord:
        """候補者リーフを CandidateRecord に変換する."""
        candidate_id = _require_str(raw, "sqcand")
        votes = _parse_int(raw.get("vap"), "vap")
        return CandidateRecord(
            candidate_id=candidate_id,
            name=str(raw.get("nmu") or ""),
            party_code=party_code,
            votes=votes,
            vote_percentage=_parse_percentage(raw.get("pvap"), "pvap"),
            portrait_url=url_for(candidate_id) if url_for else "",
        )


def _as_list(value: Any, field_name: str) -> list[Mapping[str, Any]]:
    """入れ子レベルの配列を取り出す（欠落時は空）."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedSnapshotError(f"{field_name} が配列ではありません")
    for item in value:
        if not isinstance(item, Mapping):
            raise MalformedSnapshotError(f"{field_name} の要素がオブジェクトではありません")
    return value


def _require_str(node: Mapping[str, Any], key: str) -> str:
    value = node.get(key)
    if value is None or str(value).strip() == "":
        raise MalformedSnapshotError(f"必須項目 {key} がありません")
    return str(value).strip()


def _parse_int(value: Any, field_name: str) -> int:
    """文字列の非負整数をパースする（数字のみ、符号・区切り文字は不可）."""
    if value is None:
        raise MalformedSnapshotError(f"必須項目 {field_name} がありません")
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise MalformedSnapshotError(
            f"{field_name} を非負整数として解釈できません: {value!r}"
        )
    return int(text)


def _parse_percentage(value: Any, field_name: str) -> float:
    """文字列の百分率をパースする（小数点のカンマ表記を許容、0〜100）."""
    if value is None:
        raise MalformedSnapshotError(f"必須項目 {field_name} がありません")
    try:
        number = float(str(value).strip().replace(",", "."))
    except ValueError as e:
        raise MalformedSnapshotError(
            f"{field_name} を数値として解釈できません: {value!r}"
        ) from e
    if not math.isfinite(number) or not 0.0 <= number <= 100.0:
        raise MalformedSnapshotError(
            f"{field_name} が0〜100の範囲外です: {value!r}"
        )
    return number


def _read_seats(groups: list[Mapping[str, Any]], contest_kind: ContestKind) -> int:
    """選挙単位の議席数を読む.

    全グループの nv が一致しない場合は不正なスナップショットとする。
    """
    seats = {_parse_int(g["nv"], "nv") for g in groups if g.get("nv") is not None}
    if len(seats) > 1:
        raise MalformedSnapshotError(
            f"グループ間で議席数が一致しません: {sorted(seats)}"
        )
    if not seats:
        if contest_kind is ContestKind.EXECUTIVE:
            return 1
        raise MalformedSnapshotError("議席数 (nv) がありません")

    value = seats.pop()
    if value <= 0:
        raise MalformedSnapshotError(f"議席数が正の整数ではありません: {value}")
    return value


def _read_percent_totalized(document: Mapping[str, Any]) -> float:
    summary = document.get("s")
    if not isinstance(summary, Mapping):
        raise MalformedSnapshotError("集計サマリ (s) がありません")
    return _parse_percentage(summary.get("pst"), "pst")


def _read_timestamp(document: Mapping[str, Any]) -> str:
    parts = [str(document[key]) for key in ("dg", "hg") if document.get(key)]
    return " ".join(parts)
