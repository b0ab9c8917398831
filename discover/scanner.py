# === FILE: discover/scanner.py ===
"""
Модуль-обёртка для запуска перебора из CLI.
"""
from __future__ import annotations

import asyncio
import signal
from typing import Optional

from aiohttp import ClientSession

from discover.bruteforce import DEFAULT_GRACE, BruteForcer, ScanStats
from discover.config import ScanConfig
from discover.logger import logger
from discover.report import ResultSink
from discover.wordlist import open_wordlist

__all__ = ["run_scan"]

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def run_scan(
    config: ScanConfig,
    sink: ResultSink,
    grace: float = DEFAULT_GRACE,
    session: Optional[ClientSession] = None,
) -> ScanStats:
    """
    Открывает словарь, запускает BruteForcer и возвращает статистику.

    Parameters
    ----------
    config : ScanConfig
        Конфигурация перебора.
    sink : ResultSink
        Куда писать найденные ресурсы.
    grace : float
        Сколько секунд после SIGINT/SIGTERM ждать текущие пробы.

    Raises
    ------
    SourceUnavailable
        Если словарь не открывается; ни одного запроса при этом не отправлено.
    """
    with open_wordlist(config.wordlist) as words:
        forcer = BruteForcer(config, words, sink, grace=grace)
        loop = asyncio.get_running_loop()
        installed = _install_stop_handlers(loop, forcer)
        try:
            return await forcer.run(session)
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)


def _install_stop_handlers(loop: asyncio.AbstractEventLoop, forcer: BruteForcer) -> list:
    installed = []
    for sig in _STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, _on_signal, forcer)
        except (NotImplementedError, RuntimeError, ValueError):
            # no signal support here (Windows loop, non-main thread)
            continue
        installed.append(sig)
    return installed


def _on_signal(forcer: BruteForcer) -> None:
    if forcer.stopping:
        # second signal: stop waiting for the grace period
        logger.warning("Second interrupt, aborting")
        raise KeyboardInterrupt
    forcer.stop()
