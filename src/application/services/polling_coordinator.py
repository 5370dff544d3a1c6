"""開票速報ポーリングコーディネーター.

追跡中の全選挙区について、議員選挙・首長選挙の速報を取得し、
正規化してリポジトリにマージする。

処理フロー（1選挙区・1サイクル）:
    1. 同じ選挙区のサイクルが取得中ならスキップ（キューイングしない）
    2. 名簿で選挙区を解決（見つからなければ警告してスキップ）
    3. 議員選挙・首長選挙を並行取得し、両方の完了を待つ
    4. 成功した選挙のみ正規化してマージ（失敗した選挙の既存データは保持）

選挙区どうしは独立して並行実行し、1選挙区の失敗は他に影響しない。
"""

from __future__ import annotations

import asyncio
import inspect
import logging

from collections.abc import Awaitable, Callable
from functools import partial

from src.application.dtos.refresh_dto import (
    ConstituencyRefreshResult,
    ContestRefreshOutcome,
    RefreshCycleReport,
    RefreshStatus,
)
from src.domain.exceptions import (
    ConstituencyNotFoundError,
    FetchError,
    MalformedSnapshotError,
)
from src.domain.repositories.constituency_state_repository import (
    ConstituencyStateRepository,
)
from src.domain.services.interfaces.constituency_directory_service import (
    IConstituencyDirectoryService,
)
from src.domain.services.interfaces.tally_feed_service import ITallyFeedService
from src.domain.services.tally_normalizer import TallyNormalizer
from src.domain.value_objects.tally import ConstituencyInfo, ContestKind


logger = logging.getLogger(__name__)

# サイクル完了通知のコールバック型
CycleCallback = Callable[[RefreshCycleReport], Awaitable[None] | None]


class PollingCoordinator:
    """追跡中選挙区の定期取得とマージを調停する."""

    def __init__(
        self,
        repository: ConstituencyStateRepository,
        feed_service: ITallyFeedService,
        directory: IConstituencyDirectoryService,
        normalizer: TallyNormalizer | None = None,
        *,
        poll_interval: float = 60.0,
        max_concurrency: int = 8,
        on_cycle: CycleCallback | None = None,
    ) -> None:
        self._repo = repository
        self._feed = feed_service
        self._directory = directory
        self._normalizer = normalizer or TallyNormalizer()
        self._poll_interval = poll_interval
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._on_cycle = on_cycle

        self._in_flight: set[str] = set()
        self._cycle_tasks: set[asyncio.Task[RefreshCycleReport]] = set()
        self._stop_event: asyncio.Event | None = None

    @property
    def in_flight(self) -> frozenset[str]:
        """取得中の選挙区ID."""
        return frozenset(self._in_flight)

    async def track(self, constituency_id: str) -> ConstituencyRefreshResult:
        """選挙区の追跡を開始し、初回取得を行う.

        Raises:
            ConstituencyNotFoundError: 名簿に存在しない場合
        """
        info = self._directory.resolve(constituency_id)
        await self._repo.add(info)
        return await self.refresh_constituency(info.constituency_id)

    async def untrack(self, constituency_id: str) -> None:
        """選挙区の追跡を終了する."""
        await self._repo.remove(constituency_id)

    async def refresh_all(self) -> RefreshCycleReport:
        """追跡中の全選挙区を更新する（手動更新・タイマー共通）.

        呼び出し時点の追跡IDを確定してから処理するため、
        サイクル途中の追加・削除で重複や取りこぼしは起きない。
        """
        constituency_ids = await self._repo.list_ids()
        results = await asyncio.gather(
            *(self.refresh_constituency(cid) for cid in constituency_ids)
        )
        report = RefreshCycleReport(results=list(results))

        logger.info(
            "更新サイクル完了: 対象=%d, 成功=%d, 一部失敗=%d, 失敗=%d, スキップ=%d",
            len(report.results),
            report.count(RefreshStatus.SUCCESS),
            report.count(RefreshStatus.PARTIAL),
            report.count(RefreshStatus.FAILED),
            report.count(RefreshStatus.SKIPPED),
        )
        return report

    async def refresh_constituency(
        self, constituency_id: str
    ) -> ConstituencyRefreshResult:
        """1選挙区の取得・正規化・マージを行う（例外は送出しない）."""
        if constituency_id in self._in_flight:
            logger.info("取得中のためスキップ: %s", constituency_id)
            return ConstituencyRefreshResult(
                constituency_id=constituency_id,
                status=RefreshStatus.SKIPPED,
                skip_reason="in_flight",
            )

        self._in_flight.add(constituency_id)
        try:
            try:
                info = self._directory.resolve(constituency_id)
            except ConstituencyNotFoundError:
                logger.warning("名簿に存在しない選挙区をスキップ: %s", constituency_id)
                return ConstituencyRefreshResult(
                    constituency_id=constituency_id,
                    status=RefreshStatus.SKIPPED,
                    skip_reason="not_found",
                )

            outcomes = await asyncio.gather(
                *(self._refresh_contest(info, kind) for kind in ContestKind)
            )
        finally:
            self._in_flight.discard(constituency_id)

        return _summarize(constituency_id, list(outcomes))

    async def _refresh_contest(
        self, info: ConstituencyInfo, contest_kind: ContestKind
    ) -> ContestRefreshOutcome:
        """1選挙分を取得してマージする."""
        label = f"{info.name}/{contest_kind.value}"
        try:
            async with self._semaphore:
                document = await self._feed.fetch_contest(info, contest_kind)
            snapshot = self._normalizer.normalize(
                document,
                contest_kind,
                portrait_url_for=partial(self._feed.portrait_url, info),
            )
        except (FetchError, MalformedSnapshotError) as e:
            logger.warning("速報の取得に失敗（既存データを保持）: %s: %s", label, e)
            return ContestRefreshOutcome(
                contest_kind, merged=False, failed=True, error_message=_describe(e)
            )
        except Exception as e:
            logger.exception("速報処理中に予期しないエラー: %s", label)
            return ContestRefreshOutcome(
                contest_kind, merged=False, failed=True, error_message=_describe(e)
            )

        merged = await self._repo.upsert(info.constituency_id, contest_kind, snapshot)
        if merged:
            logger.debug(
                "マージ完了: %s (候補者%d名, 開票率%.2f%%)",
                label,
                len(snapshot.candidates),
                snapshot.percent_totalized,
            )
        return ContestRefreshOutcome(contest_kind, merged=merged)

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """停止されるまで一定間隔で refresh_all を起動する.

        各ティックでサイクルをバックグラウンド起動し完了を待たない。
        前回サイクルがまだ取得中の選挙区は refresh_constituency でスキップされる。
        """
        self._stop_event = stop_event or asyncio.Event()
        logger.info("ポーリング開始: 間隔 %.1f 秒", self._poll_interval)
        try:
            while not self._stop_event.is_set():
                self._launch_cycle()
                try:
                    await asyncio.wait_for(
                        self._stop_event.wait(), timeout=self._poll_interval
                    )
                except asyncio.TimeoutError:
                    pass
        finally:
            await self._drain()
            logger.info("ポーリング停止")

    def stop(self) -> None:
        """run ループを停止する."""
        if self._stop_event is not None:
            self._stop_event.set()

    def _launch_cycle(self) -> None:
        task = asyncio.create_task(self._run_cycle())
        self._cycle_tasks.add(task)
        task.add_done_callback(self._on_cycle_done)

    async def _run_cycle(self) -> RefreshCycleReport:
        report = await self.refresh_all()
        if self._on_cycle is not None:
            result = self._on_cycle(report)
            if inspect.isawaitable(result):
                await result
        return report

    def _on_cycle_done(self, task: asyncio.Task[RefreshCycleReport]) -> None:
        self._cycle_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("更新サイクルが異常終了しました: %s", error)

    async def _drain(self) -> None:
        """実行中のサイクルの完了を待つ."""
        if self._cycle_tasks:
            await asyncio.gather(*self._cycle_tasks, return_exceptions=True)


def _summarize(
    constituency_id: str, outcomes: list[ContestRefreshOutcome]
) -> ConstituencyRefreshResult:
    """選挙ごとの結果から選挙区全体のステータスを決める."""
    failed = sum(1 for o in outcomes if o.failed)
    merged = sum(1 for o in outcomes if o.merged)

    if failed == len(outcomes):
        status = RefreshStatus.FAILED
    elif failed:
        status = RefreshStatus.PARTIAL
    elif merged:
        status = RefreshStatus.SUCCESS
    else:
        # 取得中に追跡が解除された
        return ConstituencyRefreshResult(
            constituency_id=constituency_id,
            status=RefreshStatus.SKIPPED,
            outcomes=outcomes,
            skip_reason="untracked",
        )

    return ConstituencyRefreshResult(
        constituency_id=constituency_id, status=status, outcomes=outcomes
    )


def _describe(error: BaseException) -> str:
    """メッセージが空の例外でも失敗内容が分かる文字列にする."""
    return str(error) or type(error).__name__
