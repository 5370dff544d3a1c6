"""候補者一覧の絞り込みドメインサービス."""

from __future__ import annotations

from collections.abc import Iterable

from src.domain.value_objects.tally import CandidateRecord


class CandidateFilterService:
    """検索文字列・政党フィルタで候補者を絞り込む."""

    @staticmethod
    def filter(
        candidates: Iterable[CandidateRecord],
        search: str = "",
        party_code: str | None = None,
    ) -> list[CandidateRecord]:
        """候補者を絞り込む.

        Args:
            candidates: 対象候補者
            search: 候補者名の部分一致（大文字小文字を区別しない）
            party_code: 政党コード。Noneの場合はフィルタなし。

        Returns:
            条件に一致した候補者（元の順序を維持）
        """
        needle = search.strip().casefold()
        return [
            c
            for c in candidates
            if (party_code is None or c.party_code == party_code)
            and needle in c.name.casefold()
        ]

    @staticmethod
    def party_codes(candidates: Iterable[CandidateRecord]) -> list[str]:
        """候補者に含まれる政党コードを初出順で返す."""
        return list(dict.fromkeys(c.party_code for c in candidates))
