"""議席配分結果の値オブジェクト — Domain layer."""

from dataclasses import dataclass
from enum import Enum


class ApportionmentMethod(str, Enum):
    """議席配分方式."""

    LARGEST_REMAINDER = "largest_remainder"  # 選挙商数 + 最大剰余
    HIGHEST_AVERAGES = "highest_averages"  # ドント式


@dataclass(frozen=True)
class PartyApportionmentResult:
    """政党ごとの配分結果."""

    party_code: str
    votes: int
    seats: int
