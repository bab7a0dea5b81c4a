# === FILE: site_keeper/config.py ===
"""
Модуль настроек SiteKeeper и схемы описания сайтов.

Настройки сборки и проверки: неизменяемые значения, создаются один раз
при старте (CLI) и передаются в конструкторы компонентов.
Описание сайтов (sites.json / sites.yaml) валидируется через Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_keeper import __version__

_FORBIDDEN_TOKENS = ("/", "\\")


def _check_paths(paths: List[str]) -> List[str]:
    for p in paths:
        if not p.strip():
            raise ValueError("path must not be empty")
        if ".." in p.replace("\\", "/").split("/"):
            raise ValueError(f"path must not contain '..': {p!r}")
    return paths


class ContentMapping(BaseModel):
    """Static resource copied verbatim to one or more URL paths."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    paths: List[str] = Field(..., min_length=1, description="Целевые URL-пути.")
    address: str = Field(..., description="Адрес ресурса вида '<source>:<resource>'.")

    @field_validator("paths")
    def _validate_paths(cls, v: List[str]) -> List[str]:
        return _check_paths(v)

    @field_validator("address")
    def _check_address(cls, v: str) -> str:
        tokens = v.split(":")
        if len(tokens) != 2 or not all(tokens):
            raise ValueError(f"address must look like '<source>:<resource>', got {v!r}")
        for token in tokens:
            if token == ".." or any(sep in token for sep in _FORBIDDEN_TOKENS):
                raise ValueError(f"address token must be a plain name, got {token!r}")
        return v

    @property
    def source(self) -> str:
        return self.address.split(":")[0]

    @property
    def resource(self) -> str:
        return self.address.split(":")[1]

    def __str__(self) -> str:
        return f"paths={self.paths!r} address={self.address}"


class PageTemplate(BaseModel):
    """One template rendered once per path against the same data."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    paths: List[str] = Field(..., min_length=1, description="URL-пути страниц.")
    template: str = Field(..., min_length=1, description="Имя шаблона без расширения .html.")
    data: Dict[str, Any] = Field(default_factory=dict, description="Данные для шаблона.")

    @field_validator("paths")
    def _validate_paths(cls, v: List[str]) -> List[str]:
        return _check_paths(v)

    def __str__(self) -> str:
        return f"paths={self.paths!r} template={self.template}"


class Site(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    domains: List[str] = Field(..., min_length=1)
    content: List[ContentMapping] = Field(default_factory=list)
    pages: List[PageTemplate] = Field(default_factory=list)

    @field_validator("domains")
    def _check_domains(cls, v: List[str]) -> List[str]:
        for domain in v:
            host, sep, port = domain.partition(":")
            bad_port = sep and not port.isdigit()
            bad_host = not all(host.split(".")) or any(s in host for s in _FORBIDDEN_TOKENS)
            if bad_host or bad_port:
                raise ValueError(f"domain must be a host name, got {domain!r}")
        return v


class SiteDefinition(BaseModel):
    """Корневой объект файла описания сайтов: имя сайта → сайт."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sites: Dict[str, Site] = Field(default_factory=dict)


class BuildSettings(BaseModel):
    """Настройки одного запуска сборки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    config: Path = Field(Path("bin/sites.json"), description="Файл описания сайтов.")
    content: Path = Field(..., description="Каталог статического контента.")
    templates: Path = Field(..., description="Каталог шаблонов.")
    sites: Path = Field(..., description="Корень для сгенерированных сайтов.")
    monitor: Path = Field(..., description="Куда записать манифест проверки.")
    scheme: Literal["http", "https"] = Field("https", description="Схема URL в манифесте.")
    debug: bool = False


class VerifySettings(BaseModel):
    """Настройки одного запуска проверки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    monitor: Path = Field(Path("monitor.json"), description="Манифест проверки.")
    parallel: int = Field(16, ge=1, description="Число параллельных проверок.")
    timeout: float = Field(0.75, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(f"SiteKeeper/{__version__}", min_length=1)
    follow_redirects: bool = True
    debug: bool = False


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_site_definition(path: Union[str, Path]) -> SiteDefinition:
    """
    Читает описание сайтов из JSON или YAML и возвращает проверенный SiteDefinition.
    При отсутствии файла бросает FileNotFoundError.
    """
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат описания сайтов: {suffix}")

    return SiteDefinition(**data)
