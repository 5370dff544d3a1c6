"""選挙区名簿の実装 — Infrastructure layer.

IConstituencyDirectoryService の実装。JSONファイル
（[{"id": "71072", "name": "SÃO PAULO", "state": "SP"}, ...]）から名簿を読み込む。
"""

from __future__ import annotations

import json
import logging
import unicodedata

from collections.abc import Iterable
from pathlib import Path

from src.domain.exceptions import ConstituencyNotFoundError
from src.domain.value_objects.tally import ConstituencyInfo


logger = logging.getLogger(__name__)


def _fold(text: str) -> str:
    """アクセント記号を除去して小文字化する（検索用）."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


class InMemoryConstituencyDirectory:
    """メモリ上の選挙区名簿."""

    def __init__(self, entries: Iterable[ConstituencyInfo]) -> None:
        self._entries: dict[str, ConstituencyInfo] = {
            e.constituency_id: e for e in entries
        }

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, constituency_id: str) -> ConstituencyInfo:
        info = self._entries.get(str(constituency_id))
        if info is None:
            raise ConstituencyNotFoundError(str(constituency_id))
        return info

    def search(self, text: str, limit: int | None = None) -> list[ConstituencyInfo]:
        """名称または地域コードの部分一致で検索する（アクセント・大小文字を無視）."""
        needle = _fold(text.strip())
        matches = [
            e
            for e in self._entries.values()
            if needle in _fold(e.name) or needle in _fold(e.region)
        ]
        return matches[:limit] if limit is not None else matches


class JsonConstituencyDirectory(InMemoryConstituencyDirectory):
    """JSONファイルから読み込む選挙区名簿."""

    def __init__(self, path: Path) -> None:
        self._path = path
        super().__init__(self._load(path))
        logger.info("選挙区名簿を読み込みました: %d件 (%s)", len(self), path)

    @staticmethod
    def _load(path: Path) -> list[ConstituencyInfo]:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"選挙区名簿の形式が不正です: {path}")

        entries: list[ConstituencyInfo] = []
        for item in raw:
            try:
                entries.append(
                    ConstituencyInfo(
                        constituency_id=str(item["id"]),
                        name=str(item["name"]),
                        region=str(item["state"]).upper(),
                    )
                )
            except (KeyError, TypeError):
                logger.warning("不正な名簿エントリをスキップ: %r", item)
        return entries
