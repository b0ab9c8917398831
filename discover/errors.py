# File: discover/errors.py
"""discover.errors: Exception taxonomy and transport-error categorisation."""

from __future__ import annotations

import asyncio
import socket
import ssl
from enum import Enum

import aiohttp

__all__ = [
    "DiscoverError",
    "ConfigError",
    "SourceUnavailable",
    "RequestBuildError",
    "ErrorCategory",
    "categorize_exception",
]


class DiscoverError(Exception):
    """Base class for every error raised by discover itself."""


class ConfigError(DiscoverError, ValueError):
    """Invalid or unreadable configuration; fatal at startup."""


class SourceUnavailable(DiscoverError):
    """The word list could not be opened; no probing is possible."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Word list {path} is unavailable: {reason}")
        self.path = path
        self.reason = reason


class RequestBuildError(DiscoverError):
    """A candidate word produced a malformed request; the word is skipped."""

    def __init__(self, word: str, reason: str) -> None:
        super().__init__(f"Cannot build request for {word!r}: {reason}")
        self.word = word
        self.reason = reason


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    DNS_ERROR = "DNS_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """Map aiohttp/asyncio/socket exceptions to an :class:`ErrorCategory`."""
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return ErrorCategory.TIMEOUT

    # ClientConnectorCertificateError/SSLError subclass ClientConnectorError
    if isinstance(exc, (aiohttp.ClientSSLError, ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, aiohttp.ClientConnectorError):
        if isinstance(exc.os_error, socket.gaierror):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, socket.gaierror):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (aiohttp.ClientConnectionError, aiohttp.ClientPayloadError, ConnectionError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR
