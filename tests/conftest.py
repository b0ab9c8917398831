# File: tests/conftest.py
from __future__ import annotations

import socket
from collections.abc import Callable
from pathlib import Path

import pytest
from discover.config import ScanConfig


@pytest.fixture()
def make_wordlist(tmp_path) -> Callable[..., Path]:
    """
    Return a factory that writes a temporary word list file.
    Each positional argument becomes one line.
    """
    def _make(*lines: str, name: str = "words.txt") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        return path

    return _make


@pytest.fixture()
def make_config(tmp_path) -> Callable[..., ScanConfig]:
    """
    Return a factory for ScanConfig with test-friendly defaults.
    """
    default_wordlist = tmp_path / "default_words.txt"
    default_wordlist.touch()

    def _make(**overrides) -> ScanConfig:
        data = {
            "target": "http://example.com",
            "wordlist": default_wordlist,
            "concurrency": 2,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
        }
        data.update(overrides)
        return ScanConfig(**data)

    return _make


class CollectingSink:
    """ResultSink that keeps every emitted result in memory."""

    def __init__(self) -> None:
        self.results = []

    def emit(self, result) -> None:
        self.results.append(result)

    @property
    def paths(self) -> list[str]:
        return [r.request.path for r in self.results]


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()



def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture()
def unused_tcp_port() -> int:
    """A TCP port on 127.0.0.1 that nothing listens on right now."""
    return _free_port()


@pytest.fixture()
def unused_tcp_port_factory() -> Callable[[], int]:
    return _free_port
