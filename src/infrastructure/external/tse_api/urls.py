"""TSE開票速報のURL組み立て."""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.value_objects.tally import ConstituencyInfo, ContestKind


# TSEの役職コード
CARGO_CODES: dict[ContestKind, int] = {
    ContestKind.COUNCIL: 13,  # vereador
    ContestKind.EXECUTIVE: 11,  # prefeito
}


@dataclass(frozen=True)
class TseUrlBuilder:
    """選挙区・選挙種別から速報JSON / 顔写真のURLを組み立てる.

    例: https://resultados.tse.jus.br/oficial/ele2024/619/dados/sp/sp71072-c0013-e000619-u.json
    """

    base_url: str = "https://resultados.tse.jus.br"
    environment: str = "oficial"
    election_path: str = "ele2024"
    election_code: int = 619

    @property
    def _root(self) -> str:
        return (
            f"{self.base_url.rstrip('/')}/{self.environment}"
            f"/{self.election_path}/{self.election_code}"
        )

    def contest_url(self, info: ConstituencyInfo, contest_kind: ContestKind) -> str:
        """速報JSONのURL."""
        uf = info.region.lower()
        cargo = CARGO_CODES[contest_kind]
        return (
            f"{self._root}/dados/{uf}/{uf}{info.constituency_id}"
            f"-c{cargo:04d}-e{self.election_code:06d}-u.json"
        )

    def portrait_url(self, info: ConstituencyInfo, candidate_id: str) -> str:
        """候補者顔写真のURL（存在しない場合もある）."""
        return f"{self._root}/fotos/{info.region.lower()}/{candidate_id}.jpeg"
