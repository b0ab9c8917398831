# === FILE: discover/config.py ===
"""
Модуль для загрузки и валидации конфигурации discover.
Используется Pydantic для описания схемы и проверки данных; конфиг
строится один раз при старте и дальше только читается.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from discover import __version__
from discover.classifier import COMMON_SUCCESS_CODES, ClassificationPolicy
from discover.errors import ConfigError

__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "ScanConfig",
    "load_config",
    "parse_status_codes",
    "read_cookie_file",
]

DEFAULT_TIMEOUT = 5.0
DEFAULT_USER_AGENT = f"discover/{__version__} (+https://github.com/bruston/discover)"

#: keyword accepted inside a status-code list, expands to COMMON_SUCCESS_CODES
COMMON_CODES_KEYWORD = "common"


def _cpu_count() -> int:
    return os.cpu_count() or 1


def parse_status_codes(value: Union[str, Iterable[Any], None]) -> FrozenSet[int]:
    """
    Разбирает список HTTP-кодов: строку ``"200, 301"`` или итерируемое.
    Ключевое слово ``common`` раскрывается в COMMON_SUCCESS_CODES.
    Любое невалидное значение: ConfigError.
    """
    if value is None:
        return frozenset()
    items: Iterable[Any] = value.split(",") if isinstance(value, str) else value

    codes: set[int] = set()
    for item in items:
        token = str(item).strip()
        if not token:
            continue
        if token.lower() == COMMON_CODES_KEYWORD:
            codes.update(COMMON_SUCCESS_CODES)
            continue
        try:
            code = int(token)
        except ValueError:
            raise ConfigError(f"{token} is not a valid status code") from None
        if not 100 <= code <= 599:
            raise ConfigError(f"{token} is not a valid status code")
        codes.add(code)
    return frozenset(codes)


def read_cookie_file(path: Union[str, Path]) -> str:
    """Читает файл с готовым значением заголовка Cookie."""
    p = Path(path).expanduser()
    try:
        return p.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read cookie file {p}: {exc}") from exc


class ScanConfig(BaseModel):
    """Конфигурация одного запуска перебора."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = Field(..., description="Базовый URL цели, всегда оканчивается на '/'.")
    wordlist: Path = Field(..., description="Путь к файлу словаря.")
    concurrency: int = Field(default_factory=_cpu_count, ge=1, description="Число воркеров.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Таймаут на один запрос (секунд).")
    host: Optional[str] = Field(None, description="Подмена заголовка Host.")
    header_key: Optional[str] = Field(None, description="Имя произвольного заголовка.")
    header_value: Optional[str] = Field(None, description="Значение произвольного заголовка.")
    extension: str = Field("", description="Расширение файла без точки.")
    prefix: str = Field("", description="Префикс перед каждым словом.")
    success_codes: FrozenSet[int] = Field(default_factory=frozenset)
    failure_codes: FrozenSet[int] = Field(default_factory=frozenset)
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    cookie: Optional[str] = Field(None, description="Значение заголовка Cookie.")
    insecure: bool = Field(False, description="Не проверять TLS-сертификаты.")
    show_size: bool = Field(True, description="Выводить размер ответа.")

    @field_validator("target", mode="before")
    def _normalize_target(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"{v!r} is not an http(s) URL")
        if not v.endswith("/"):
            v += "/"
        return v

    @field_validator("success_codes", "failure_codes", mode="before")
    def _parse_codes(cls, v: Any) -> Any:
        return parse_status_codes(v)

    @field_validator("host", "header_key", "header_value", "cookie", mode="before")
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("extension", mode="before")
    def _strip_dot(cls, v: Any) -> Any:
        # "-e .php" and "-e php" mean the same thing
        if isinstance(v, str):
            return v.strip().lstrip(".")
        return v

    @property
    def policy(self) -> ClassificationPolicy:
        return ClassificationPolicy(self.success_codes, self.failure_codes)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def _read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    path_obj = Path(path).expanduser()
    if not path_obj.is_file():
        raise ConfigError(f"Config file not found: {path_obj}")

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ConfigError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScanConfig:
    """
    Собирает ScanConfig из YAML/JSON-файла (если указан) и переопределений.

    Переопределения со значением None игнорируются, поэтому CLI может
    передавать все свои опции как есть. Ключ ``cookies_file`` читается
    в ``cookie``. Любая ошибка: ConfigError.
    """
    data: dict[str, Any] = _read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})

    cookies_file = data.pop("cookies_file", None)
    if cookies_file:
        data["cookie"] = read_cookie_file(cookies_file)

    try:
        return ScanConfig(**data)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from exc


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
