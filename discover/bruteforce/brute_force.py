"""Модуль для перебора скрытых ресурсов на сайте пулом асинхронных воркеров."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, List, Optional

from aiohttp import ClientSession

from discover.classifier import should_report
from discover.config import ScanConfig
from discover.errors import RequestBuildError
from discover.logger import get_logger
from discover.probe import create_session, probe
from discover.report import ResultSink
from discover.request import build_request

logger = get_logger("bruteforce")

#: how long in-flight probes may keep running after stop() before being cancelled
DEFAULT_GRACE = 5.0

_DONE = object()


@dataclass
class ScanStats:
    """Счётчики одного запуска."""

    words: int = 0
    probed: int = 0
    matched: int = 0
    failed: int = 0
    skipped: int = 0
    cancelled: bool = False


class BruteForcer:
    """Пул воркеров: один продюсер читает слова, N воркеров их проверяют.

    Every word is handed to exactly one worker through a queue of size one.
    ``run`` returns only after the source is exhausted and every worker has
    finished its last probe, or after ``stop()`` plus the grace period.
    """

    def __init__(
        self,
        config: ScanConfig,
        words: Iterable[str],
        sink: ResultSink,
        grace: float = DEFAULT_GRACE,
    ) -> None:
        self.config = config
        self.words = words
        self.sink = sink
        self.grace = grace
        self.policy = config.policy
        self.stats = ScanStats()
        self._stop = asyncio.Event()

    def stop(self) -> None:
        """Просит пул остановиться: новые слова не выдаются, текущие пробы дорабатывают."""
        if not self._stop.is_set():
            logger.warning("Stop requested, draining in-flight probes")
        self._stop.set()

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    async def _produce(self, queue: asyncio.Queue) -> None:
        for word in self.words:
            if self._stop.is_set():
                break
            await queue.put(word)
            self.stats.words += 1
        for _ in range(self.config.concurrency):
            await queue.put(_DONE)

    async def _work(self, session: ClientSession, queue: asyncio.Queue) -> None:
        while True:
            word = await queue.get()
            if word is _DONE:
                return
            if self._stop.is_set():
                # drain without probing so the producer reaches its end markers
                continue
            await self._handle(session, word)

    async def _handle(self, session: ClientSession, word: str) -> None:
        try:
            request = build_request(self.config, word)
        except RequestBuildError as exc:
            self.stats.skipped += 1
            logger.debug("%s", exc)
            return

        result = await probe(session, request)
        self.stats.probed += 1
        if not result.ok:
            self.stats.failed += 1
            return
        if should_report(result.status, self.policy):
            self.stats.matched += 1
            self.sink.emit(result)

    async def _join(self, tasks: List[asyncio.Task]) -> None:
        pending = set(tasks)
        stopper = asyncio.ensure_future(self._stop.wait())
        try:
            while pending:
                done, _ = await asyncio.wait(pending | {stopper}, return_when=asyncio.FIRST_COMPLETED)
                for task in done - {stopper}:
                    pending.discard(task)
                    task.result()
                if stopper.done() and pending:
                    finished, still_running = await asyncio.wait(pending, timeout=self.grace)
                    for task in finished:
                        task.result()
                    if still_running:
                        logger.warning(
                            "Grace period of %.1fs expired, aborting %d task(s)",
                            self.grace,
                            len(still_running),
                        )
                    return
        finally:
            stopper.cancel()

    async def run(self, session: Optional[ClientSession] = None) -> ScanStats:
        """Запускает перебор и ждёт, пока все воркеры закончат."""
        own_session = session is None
        if session is None:
            session = create_session(self.config)

        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        producer = asyncio.create_task(self._produce(queue), name="discover-producer")
        workers = [
            asyncio.create_task(self._work(session, queue), name=f"discover-worker-{i}")
            for i in range(self.config.concurrency)
        ]
        tasks = [producer, *workers]
        logger.info("Probing %s with %d workers", self.config.target, len(workers))

        try:
            await self._join(tasks)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            if own_session:
                await session.close()

        self.stats.cancelled = self._stop.is_set()
        if self.stats.words == 0 and not self.stats.cancelled:
            logger.warning("Word list is empty, nothing to probe")
        logger.info(
            "Done: %d words, %d probed, %d matched, %d failed, %d skipped",
            self.stats.words,
            self.stats.probed,
            self.stats.matched,
            self.stats.failed,
            self.stats.skipped,
        )
        return self.stats
