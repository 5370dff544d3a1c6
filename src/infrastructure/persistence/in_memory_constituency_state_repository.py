"""追跡中選挙区のインメモリリポジトリ実装 — Infrastructure layer.

プロセス内でのみ状態を保持する。同一選挙区への更新は選挙区ごとの
asyncio.Lock で直列化し、異なる選挙区どうしは互いにブロックしない。
"""

from __future__ import annotations

import asyncio
import logging

from dataclasses import replace

from src.domain.entities.constituency_state import ConstituencyState
from src.domain.repositories.constituency_state_repository import (
    ConstituencyStateRepository,
)
from src.domain.value_objects.tally import (
    ConstituencyInfo,
    ContestKind,
    ContestSnapshot,
)


logger = logging.getLogger(__name__)


class InMemoryConstituencyStateRepository(ConstituencyStateRepository):
    """ConstituencyStateRepository のインメモリ実装."""

    def __init__(self) -> None:
        # dict の挿入順 = 追跡開始順
        self._records: dict[str, ConstituencyState] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, constituency_id: str) -> asyncio.Lock:
        lock = self._locks.get(constituency_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[constituency_id] = lock
        return lock

    async def add(self, info: ConstituencyInfo) -> ConstituencyState:
        async with self._lock_for(info.constituency_id):
            record = self._records.get(info.constituency_id)
            if record is None:
                record = ConstituencyState(
                    constituency_id=info.constituency_id,
                    display_name=info.name,
                    region=info.region,
                )
                self._records[info.constituency_id] = record
                logger.info("選挙区の追跡を開始: %s", record)
            return replace(record)

    async def upsert(
        self,
        constituency_id: str,
        contest_kind: ContestKind,
        snapshot: ContestSnapshot,
        *,
        info: ConstituencyInfo | None = None,
    ) -> bool:
        if snapshot.contest_kind is not contest_kind:
            raise ValueError(
                f"スナップショットの種別が一致しません: "
                f"{snapshot.contest_kind.value} != {contest_kind.value}"
            )

        if info is None and constituency_id not in self._records:
            logger.debug("未追跡の選挙区のためマージをスキップ: %s", constituency_id)
            return False

        async with self._lock_for(constituency_id):
            record = self._records.get(constituency_id)
            if record is None:
                if info is None:
                    logger.debug(
                        "未追跡の選挙区のためマージをスキップ: %s", constituency_id
                    )
                    return False
                record = ConstituencyState(
                    constituency_id=constituency_id,
                    display_name=info.name,
                    region=info.region,
                )
                self._records[constituency_id] = record

            record.merge_snapshot(snapshot)
            return True

    async def remove(self, constituency_id: str) -> None:
        async with self._lock_for(constituency_id):
            if self._records.pop(constituency_id, None) is not None:
                logger.info("選挙区の追跡を終了: %s", constituency_id)
        self._locks.pop(constituency_id, None)

    async def set_search(self, constituency_id: str, text: str) -> None:
        if constituency_id not in self._records:
            return
        async with self._lock_for(constituency_id):
            record = self._records.get(constituency_id)
            if record is not None:
                record.candidate_search = text

    async def set_party_filter(
        self, constituency_id: str, party_code: str | None
    ) -> None:
        if constituency_id not in self._records:
            return
        async with self._lock_for(constituency_id):
            record = self._records.get(constituency_id)
            if record is not None:
                record.party_filter = party_code

    async def get(self, constituency_id: str) -> ConstituencyState | None:
        record = self._records.get(constituency_id)
        return replace(record) if record is not None else None

    async def list_all(self) -> list[ConstituencyState]:
        return [replace(record) for record in self._records.values()]

    async def list_ids(self) -> list[str]:
        return list(self._records)
