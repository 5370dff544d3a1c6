"""ConstituencyStateエンティティのテスト."""

from src.domain.entities.constituency_state import ConstituencyState
from src.domain.value_objects.tally import ContestKind, ContestSnapshot


def _state() -> ConstituencyState:
    return ConstituencyState(
        constituency_id="71072",
        display_name="SÃO PAULO",
        region="SP",
        candidate_search="silva",
        party_filter="PL",
    )


def test_merge_fills_matching_slot_only() -> None:
    state = _state()
    council = ContestSnapshot(contest_kind=ContestKind.COUNCIL, seats_available=55)

    state.merge_snapshot(council)

    assert state.snapshot_for(ContestKind.COUNCIL) == council
    assert state.snapshot_for(ContestKind.EXECUTIVE) is None
    assert state.candidate_search == "silva"
    assert state.party_filter == "PL"


def test_merge_replaces_wholesale() -> None:
    state = _state()
    state.merge_snapshot(
        ContestSnapshot(contest_kind=ContestKind.EXECUTIVE, seats_available=1, percent_totalized=10.0)
    )
    newer = ContestSnapshot(contest_kind=ContestKind.EXECUTIVE, seats_available=1, percent_totalized=55.0)

    state.merge_snapshot(newer)

    assert state.executive == newer


def test_str() -> None:
    assert str(_state()) == "SÃO PAULO - SP"
