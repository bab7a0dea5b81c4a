# File: site_keeper/utils.py
"""site_keeper.utils: helpers shared by the builder: URL construction, output paths, content lookup."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from site_keeper.logger import logger

__all__: Sequence[str] = (
    "INDEX_FILE",
    "endpoint_url",
    "reversed_domain",
    "local_file_path",
    "resolve_content",
)

#: file written for URL paths that end with a slash
INDEX_FILE = "index.html"


def endpoint_url(domain: str, path: str, scheme: str = "https") -> str:
    """Fully-qualified URL for *path* on *domain*; the path always starts with a single slash."""
    return f"{scheme}://{domain}/{path.lstrip('/')}"


def reversed_domain(domain: str) -> str:
    """``www.example.com`` → ``com.example.www``; a port is kept as ``_<port>``."""
    host, sep, port = domain.partition(":")
    name = ".".join(reversed(host.split(".")))
    return f"{name}_{port}" if sep else name


def local_file_path(sites_root: Union[str, Path], domain: str, path: str) -> Path:
    """Local filesystem file that backs *path* on *domain* under *sites_root*."""
    leaf = path.lstrip("/")
    if not leaf or leaf.endswith("/"):
        leaf += INDEX_FILE
    return Path(sites_root) / reversed_domain(domain) / leaf


def resolve_content(content_root: Union[str, Path], source: str, resource: str) -> Path:
    """Находит файл ресурса ``<source>:<resource>`` в каталоге контента."""
    p = Path(content_root) / source / resource
    if not p.is_file():
        logger.error("Content not found: %s", p)
        raise FileNotFoundError(f"Content file not found: {p}")
    return p
