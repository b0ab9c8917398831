# File: discover/wordlist.py
"""discover.wordlist: Ленивое чтение словаря кандидатов построчно."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from discover.errors import SourceUnavailable
from discover.logger import get_logger

__all__ = ["WordSource", "open_wordlist"]

logger = get_logger("wordlist")


class WordSource:
    """Forward-only iterator over non-empty, trimmed lines of a word list.

    The file is opened eagerly so an unreadable list fails before any probe is
    sent, and closed as soon as the last line has been read. Exhausted sources
    stay exhausted.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()
        self.count = 0
        try:
            self._fh: Optional[TextIO] = self.path.open("r", encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceUnavailable(self.path, exc.strerror or str(exc)) from exc

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        while self._fh is not None:
            line = self._fh.readline()
            if not line:
                self.close()
                break
            word = line.strip()
            if word:
                self.count += 1
                return word
        raise StopIteration

    @property
    def closed(self) -> bool:
        return self._fh is None

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.debug("Read %d words from %s", self.count, self.path)

    def __enter__(self) -> "WordSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<WordSource path={self.path} read={self.count} closed={self.closed}>"


def open_wordlist(path: Union[str, Path]) -> WordSource:
    """Открывает словарь; при ошибке бросает SourceUnavailable."""
    return WordSource(path)
