# File: discover/request.py
"""discover.request: Builds one GET request description per candidate word."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional
from urllib.parse import quote, urlsplit

from yarl import URL

from discover.config import ScanConfig
from discover.errors import RequestBuildError

__all__ = ["ProbeRequest", "build_path", "build_request"]

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")

#: left as-is in the path: reserved characters, existing %-escapes and dot segments
_PATH_SAFE = "/?#%:@!$&'()*+,;=-._~"


@dataclass(frozen=True, slots=True)
class ProbeRequest:
    """Immutable description of a single probe."""

    word: str
    path: str
    url: str
    target: URL
    headers: Mapping[str, str]
    server_hostname: Optional[str] = None

    def __repr__(self) -> str:
        return f"<ProbeRequest url={self.url}>"


def build_path(word: str, prefix: str = "", extension: str = "") -> str:
    """Return the effective path segment ``prefix + word[.extension]``."""
    path = prefix + word
    if extension:
        path = f"{path}.{extension}"
    return path


def _sni_name(host: str) -> Optional[str]:
    return urlsplit(f"//{host}").hostname


def build_request(config: ScanConfig, word: str) -> ProbeRequest:
    """
    Build the request for *word* against ``config.target``.

    Raises RequestBuildError when the resulting target or a header would be
    malformed; callers skip the word.
    """
    path = build_path(word, config.prefix, config.extension)
    if _CONTROL_CHARS_RE.search(path):
        raise RequestBuildError(word, "control character in path")

    # encoded=True keeps "a/../admin" and "%2e%2e/" exactly as written;
    # only characters that cannot appear in a request target get escaped
    try:
        base = str(URL(config.target))
        parsed = URL(base + quote(path, safe=_PATH_SAFE), encoded=True)
    except (ValueError, TypeError) as exc:
        raise RequestBuildError(word, str(exc)) from exc
    if not parsed.host:
        raise RequestBuildError(word, f"no host in {config.target}")
    url = str(parsed)

    headers: dict[str, str] = {}
    server_hostname = None
    if config.host:
        headers["Host"] = config.host
        if parsed.scheme == "https":
            server_hostname = _sni_name(config.host)
    if config.header_key and config.header_value:
        headers[config.header_key] = config.header_value
    if config.cookie:
        headers["Cookie"] = config.cookie
    headers["User-Agent"] = config.user_agent

    for name, value in headers.items():
        if _CONTROL_CHARS_RE.search(name) or "\r" in value or "\n" in value:
            raise RequestBuildError(word, f"invalid header {name!r}")

    return ProbeRequest(
        word=word,
        path=path,
        url=url,
        target=parsed,
        headers=MappingProxyType(headers),
        server_hostname=server_hostname,
    )
