"""ApportionmentServiceのテスト."""

import pytest

from src.domain.exceptions import DegenerateApportionmentError
from src.domain.services.apportionment_service import ApportionmentService
from src.domain.value_objects.apportionment_result import (
    ApportionmentMethod,
    PartyApportionmentResult,
)
from src.domain.value_objects.tally import (
    CandidateRecord,
    ContestKind,
    ContestSnapshot,
)


def _seats(results: list[PartyApportionmentResult]) -> dict[str, int]:
    return {r.party_code: r.seats for r in results}


# 和の不変条件を確認する入力
PROPERTY_CASES = [
    ({"A": 47000, "B": 16000, "C": 15800, "D": 12000, "E": 6100, "F": 3100}, 10),
    ({"P1": 600, "P2": 400}, 5),
    ({"A": 100, "B": 80, "C": 30}, 4),
    ({"A": 1234, "B": 987, "C": 555, "D": 12, "E": 0}, 21),
    ({"A": 7, "B": 5, "C": 3}, 2),
    ({"X": 99999}, 55),
]


class TestLargestRemainder:
    """選挙商数 + 最大剰余方式のテスト."""

    def test_exact_quota(self) -> None:
        """P1=600, P2=400, 5議席 → Q=200, 剰余なしで 3:2."""
        results = ApportionmentService.largest_remainder({"P1": 600, "P2": 400}, 5)

        assert results == [
            PartyApportionmentResult("P1", 600, 3),
            PartyApportionmentResult("P2", 400, 2),
        ]

    def test_remaining_seats_by_largest_remainder(self) -> None:
        """残り議席は剰余の大きい順に配分される."""
        votes = {"A": 47000, "B": 16000, "C": 15800, "D": 12000, "E": 6100, "F": 3100}

        results = ApportionmentService.largest_remainder(votes, 10)

        assert _seats(results) == {"A": 5, "B": 2, "C": 1, "D": 1, "E": 1, "F": 0}
        assert [r.party_code for r in results] == ["A", "B", "C", "D", "E", "F"]

    def test_remainder_tie_broken_by_input_order(self) -> None:
        """剰余が同値の場合は入力順で先の政党が優先される."""
        assert _seats(ApportionmentService.largest_remainder({"X": 5, "Y": 5}, 3)) == {
            "X": 2,
            "Y": 1,
        }
        assert _seats(ApportionmentService.largest_remainder({"Y": 5, "X": 5}, 3)) == {
            "Y": 2,
            "X": 1,
        }

    def test_zero_quota_is_degenerate(self) -> None:
        """議席数が総得票を上回ると選挙商数0で計算不能."""
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.largest_remainder({"A": 2, "B": 1}, 5)

    def test_zero_votes_is_degenerate(self) -> None:
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.largest_remainder({"A": 0, "B": 0}, 3)

    def test_zero_seats_is_degenerate(self) -> None:
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.largest_remainder({"A": 10}, 0)

    def test_base_seats_exceeding_total_is_degenerate(self) -> None:
        """商数が小さく基本配分だけで議席数を超える場合も計算不能."""
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.largest_remainder({"A": 10, "B": 9}, 10)

    @pytest.mark.parametrize(("votes", "seats"), PROPERTY_CASES)
    def test_no_party_exceeds_base_plus_one(self, votes: dict[str, int], seats: int) -> None:
        """どの政党も floor(得票 / Q) + 1 を超えない."""
        quota = sum(votes.values()) // seats
        results = ApportionmentService.largest_remainder(votes, seats)

        for r in results:
            assert r.seats <= r.votes // quota + 1


class TestHighestAverages:
    """ドント式のテスト."""

    def test_rounds(self) -> None:
        """A=100, B=80, C=30, 4議席 → A:2, B:2, C:0."""
        results = ApportionmentService.highest_averages({"A": 100, "B": 80, "C": 30}, 4)

        assert results == [
            PartyApportionmentResult("A", 100, 2),
            PartyApportionmentResult("B", 80, 2),
            PartyApportionmentResult("C", 30, 0),
        ]

    def test_tie_goes_to_first_party(self) -> None:
        """平均が同値の場合は入力順で先の政党が議席を得る."""
        assert _seats(ApportionmentService.highest_averages({"A": 100, "B": 100}, 1)) == {
            "A": 1,
            "B": 0,
        }
        assert _seats(ApportionmentService.highest_averages({"A": 100, "B": 100}, 3)) == {
            "A": 2,
            "B": 1,
        }

    def test_output_ties_keep_input_order(self) -> None:
        results = ApportionmentService.highest_averages({"A": 10, "B": 50, "C": 50}, 2)

        assert [r.party_code for r in results] == ["B", "C", "A"]

    def test_zero_seats_returns_empty(self) -> None:
        assert ApportionmentService.highest_averages({"A": 10}, 0) == []

    def test_exact_comparison_of_averages(self) -> None:
        """浮動小数点誤差で同値判定が崩れない（3/3 と 1/1 は同値）."""
        results = ApportionmentService.highest_averages({"B": 1, "A": 3}, 3)

        # A:3/1 → A:3/2 → B:1/1 と A:3/3 は同値で入力順の B
        assert _seats(results) == {"A": 2, "B": 1}

    def test_deterministic(self) -> None:
        """同じ入力には同じ出力・同じ順序を返す."""
        votes = {"A": 1234, "B": 987, "C": 555, "D": 12, "E": 0}

        first = ApportionmentService.highest_averages(votes, 21)
        second = ApportionmentService.highest_averages(votes, 21)

        assert first == second
        assert repr(first) == repr(second)


class TestCommon:
    """両方式に共通のテスト."""

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    @pytest.mark.parametrize(("votes", "seats"), PROPERTY_CASES)
    def test_seat_sum_equals_total(
        self, votes: dict[str, int], seats: int, method: ApportionmentMethod
    ) -> None:
        results = ApportionmentService.apportion(votes, seats, method)

        assert sum(r.seats for r in results) == seats
        assert len(results) == len(votes)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_sorted_by_seats_descending(self, method: ApportionmentMethod) -> None:
        votes = {"small": 3100, "big": 47000, "mid": 16000}

        results = ApportionmentService.apportion(votes, 10, method)

        seats = [r.seats for r in results]
        assert seats == sorted(seats, reverse=True)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_input_not_mutated(self, method: ApportionmentMethod) -> None:
        votes = {"A": 100, "B": 80, "C": 30}
        original = dict(votes)

        ApportionmentService.apportion(votes, 4, method)

        assert votes == original
        assert list(votes) == list(original)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_negative_votes_rejected(self, method: ApportionmentMethod) -> None:
        with pytest.raises(ValueError):
            ApportionmentService.apportion({"A": -1, "B": 10}, 2, method)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_negative_seats_rejected(self, method: ApportionmentMethod) -> None:
        with pytest.raises(ValueError):
            ApportionmentService.apportion({"A": 10}, -1, method)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_all_zero_votes_is_degenerate(self, method: ApportionmentMethod) -> None:
        """開票前（全政党0票）はどちらの方式でも計算不能."""
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.apportion({"A": 0, "B": 0}, 5, method)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_all_zero_votes_with_zero_seats(self, method: ApportionmentMethod) -> None:
        if method is ApportionmentMethod.HIGHEST_AVERAGES:
            assert ApportionmentService.apportion({"A": 0}, 0, method) == []
        else:
            with pytest.raises(DegenerateApportionmentError):
                ApportionmentService.apportion({"A": 0}, 0, method)

    @pytest.mark.parametrize("method", list(ApportionmentMethod))
    def test_no_parties_is_degenerate(self, method: ApportionmentMethod) -> None:
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.apportion({}, 3, method)

    def test_default_method_is_largest_remainder(self) -> None:
        """デフォルトは選挙商数方式（商数0で例外になることで確認）."""
        with pytest.raises(DegenerateApportionmentError):
            ApportionmentService.apportion({"A": 1}, 2)


class TestSnapshotHelpers:
    """スナップショットからの配分のテスト."""

    @staticmethod
    def _candidate(cid: str, party: str, votes: int) -> CandidateRecord:
        return CandidateRecord(
            candidate_id=cid,
            name=f"CAND {cid}",
            party_code=party,
            votes=votes,
            vote_percentage=0.0,
        )

    def test_party_vote_totals_in_first_appearance_order(self) -> None:
        candidates = [
            self._candidate("1", "PT", 100),
            self._candidate("2", "PL", 250),
            self._candidate("3", "PT", 300),
        ]

        totals = ApportionmentService.party_vote_totals(candidates)

        assert totals == {"PT": 400, "PL": 250}
        assert list(totals) == ["PT", "PL"]

    def test_apportion_snapshot_uses_snapshot_seats(self) -> None:
        snapshot = ContestSnapshot(
            contest_kind=ContestKind.COUNCIL,
            seats_available=5,
            candidates=(
                self._candidate("1", "P1", 350),
                self._candidate("2", "P2", 400),
                self._candidate("3", "P1", 250),
            ),
        )

        results = ApportionmentService.apportion_snapshot(snapshot)

        assert _seats(results) == {"P1": 3, "P2": 2}
        assert results[0].votes == 600
