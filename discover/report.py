# File: discover/report.py
"""discover.report: Emitters for matched probe results, one line per match."""

from __future__ import annotations

import json
from typing import IO, Optional, Protocol

import click

from discover.probe import ProbeResult

__all__ = ["ResultSink", "TextSink", "JsonLinesSink", "format_line"]


class ResultSink(Protocol):
    def emit(self, result: ProbeResult) -> None: ...


def format_line(result: ProbeResult, show_size: bool = True) -> str:
    """Format a result as ``/path status [size]``."""
    line = f"/{result.request.path} {result.status}"
    if show_size:
        line += f" {result.size}"
    return line


class TextSink:
    """Writes one plain-text line per result to *stream* (stdout by default)."""

    def __init__(self, stream: Optional[IO[str]] = None, show_size: bool = True) -> None:
        self.stream = stream
        self.show_size = show_size

    def emit(self, result: ProbeResult) -> None:
        click.echo(format_line(result, self.show_size), file=self.stream)


class JsonLinesSink:
    """Writes one JSON object per result; handy for piping into jq."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self.stream = stream

    def emit(self, result: ProbeResult) -> None:
        record = {
            "path": f"/{result.request.path}",
            "url": result.request.url,
            "status": result.status,
            "size": result.size,
        }
        click.echo(json.dumps(record, ensure_ascii=False), file=self.stream)
