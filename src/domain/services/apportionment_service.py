"""議席配分ドメインサービス.

政党ごとの得票合計と議席数から、比例代表の議席配分を計算する。
状態を持たない純粋関数として実装し、同じ入力には常に同じ出力を返す。

対応方式:
    - 選挙商数 + 最大剰余方式（ブラジル市議会選挙の quociente eleitoral）
    - ドント式（最大平均法）
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from fractions import Fraction

from src.domain.exceptions import DegenerateApportionmentError
from src.domain.value_objects.apportionment_result import (
    ApportionmentMethod,
    PartyApportionmentResult,
)
from src.domain.value_objects.tally import CandidateRecord, ContestSnapshot


class ApportionmentService:
    """議席配分を計算するドメインサービス."""

    @staticmethod
    def party_vote_totals(candidates: Iterable[CandidateRecord]) -> dict[str, int]:
        """候補者の得票を政党ごとに合計する（初出順）."""
        totals: dict[str, int] = {}
        for candidate in candidates:
            totals[candidate.party_code] = (
                totals.get(candidate.party_code, 0) + candidate.votes
            )
        return totals

    @classmethod
    def apportion(
        cls,
        party_votes: Mapping[str, int],
        total_seats: int,
        method: ApportionmentMethod = ApportionmentMethod.LARGEST_REMAINDER,
    ) -> list[PartyApportionmentResult]:
        """指定方式で議席を配分する.

        Args:
            party_votes: 政党コード → 得票合計（入力順が同数時の優先順位）
            total_seats: 配分する議席数
            method: 配分方式

        Returns:
            議席数の降順（同数は入力順）に並んだ配分結果

        Raises:
            DegenerateApportionmentError: 最大剰余方式で選挙商数が0の場合など
            ValueError: 得票数・議席数が負の場合
        """
        if method is ApportionmentMethod.HIGHEST_AVERAGES:
            return cls.highest_averages(party_votes, total_seats)
        return cls.largest_remainder(party_votes, total_seats)

    @classmethod
    def apportion_snapshot(
        cls,
        snapshot: ContestSnapshot,
        method: ApportionmentMethod = ApportionmentMethod.LARGEST_REMAINDER,
    ) -> list[PartyApportionmentResult]:
        """議員選挙スナップショットから議席配分を計算する."""
        return cls.apportion(
            cls.party_vote_totals(snapshot.candidates),
            snapshot.seats_available,
            method,
        )

    @staticmethod
    def largest_remainder(
        party_votes: Mapping[str, int], total_seats: int
    ) -> list[PartyApportionmentResult]:
        """選挙商数 + 最大剰余方式.

        1. 選挙商数 Q = floor(総得票 / 議席数)
        2. 各党に floor(得票 / Q) 議席
        3. 残り議席を剰余 (得票 mod Q) の大きい順に1議席ずつ（同値は入力順）
        """
        parties = _validated(party_votes, total_seats)
        if total_seats == 0:
            raise DegenerateApportionmentError("議席数が0のため選挙商数を計算できません")

        total_votes = sum(votes for _, votes in parties)
        quota = total_votes // total_seats
        if quota == 0:
            raise DegenerateApportionmentError(
                f"選挙商数が0です（総得票={total_votes}, 議席数={total_seats}）"
            )

        seats = [votes // quota for _, votes in parties]
        remaining = total_seats - sum(seats)
        if remaining < 0:
            # 商数が小さすぎると基本配分だけで議席数を超える
            raise DegenerateApportionmentError(
                f"基本配分が議席数を超えています（選挙商数={quota}）"
            )

        by_remainder = sorted(
            range(len(parties)),
            key=lambda i: parties[i][1] % quota,
            reverse=True,
        )
        for i in by_remainder[:remaining]:
            seats[i] += 1

        return _ranked(parties, seats)

    @staticmethod
    def highest_averages(
        party_votes: Mapping[str, int], total_seats: int
    ) -> list[PartyApportionmentResult]:
        """ドント式.

        議席数の回数だけ、平均 得票 / (獲得議席 + 1) が最大の政党に1議席を与える。
        平均が同値の場合は入力順で先の政党を優先する。
        """
        parties = _validated(party_votes, total_seats)
        if total_seats == 0:
            return []

        seats = [0] * len(parties)
        for _ in range(total_seats):
            # max は最初に見つかった最大値を返すので同値は入力順になる
            winner = max(
                range(len(parties)),
                key=lambda i: Fraction(parties[i][1], seats[i] + 1),
            )
            seats[winner] += 1

        return _ranked(parties, seats)


def _validated(
    party_votes: Mapping[str, int], total_seats: int
) -> list[tuple[str, int]]:
    """入力を検証し、入力順を保った (政党, 得票) のリストを返す."""
    if total_seats < 0:
        raise ValueError(f"議席数が負の値です: {total_seats}")
    parties = list(party_votes.items())
    for party_code, votes in parties:
        if votes < 0:
            raise ValueError(f"得票数が負の値です: {party_code}={votes}")
    if total_seats > 0:
        if not parties:
            raise DegenerateApportionmentError("配分対象の政党がありません")
        if not any(votes > 0 for _, votes in parties):
            raise DegenerateApportionmentError("得票のある政党がありません（開票前）")
    return parties


def _ranked(
    parties: list[tuple[str, int]], seats: list[int]
) -> list[PartyApportionmentResult]:
    """議席数の降順（安定ソート）で結果を並べる."""
    results = [
        PartyApportionmentResult(party_code=party_code, votes=votes, seats=s)
        for (party_code, votes), s in zip(parties, seats, strict=True)
    ]
    return sorted(results, key=lambda r: r.seats, reverse=True)
