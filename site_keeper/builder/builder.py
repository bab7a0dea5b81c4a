# === FILE: site_keeper/builder/builder.py ===
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple

from jinja2 import TemplateError

from site_keeper.builder.hashing import HashingWriter
from site_keeper.builder.renderer import ContentRenderer
from site_keeper.config import BuildSettings, ContentMapping, PageTemplate, SiteDefinition
from site_keeper.manifest import Endpoint, Manifest
from site_keeper.utils import endpoint_url, local_file_path, resolve_content

__all__ = ("BuildError", "DuplicateFileError", "DuplicateURLError", "ManifestBuilder")


class BuildError(RuntimeError):
    """Fatal build failure; nothing built so far may be published."""


class DuplicateURLError(BuildError):
    def __init__(self, url: str, first: str, second: str) -> None:
        super().__init__(f"Duplicate url={url} first={first} second={second}")
        self.url = url


class DuplicateFileError(BuildError):
    def __init__(self, path: Path, first: str, second: str) -> None:
        super().__init__(f"Duplicate file={path} first={first} second={second}")
        self.path = path


class ManifestBuilder:
    """Материализует сайты на диск и собирает манифест ожидаемых ответов.

    Traversal order is site, domain, content mappings, pages, then path order.
    The resulting manifest keeps that order; no sorting happens here.
    """

    def __init__(
        self,
        settings: BuildSettings,
        renderer: Optional[ContentRenderer] = None,
        mirror: Optional[BinaryIO] = None,
    ) -> None:
        self.settings = settings
        self.renderer = renderer or ContentRenderer(settings.templates)
        self.mirror = mirror
        self.logger = logging.getLogger("SiteKeeper")

    def build(self, definition: SiteDefinition) -> Manifest:
        self.check_unique_urls(definition)
        endpoints: List[Endpoint] = []
        for name, site in definition.sites.items():
            self.logger.debug("site=%s domains=%s", name, site.domains)
            for domain in site.domains:
                for content in site.content:
                    endpoints.extend(self._copy(content, domain))
                for page in site.pages:
                    endpoints.extend(self._generate(page, domain))
        self.logger.info("Built %d endpoints for %d sites", len(endpoints), len(definition.sites))
        return Manifest(endpoints=tuple(endpoints))

    def iter_urls(self, definition: SiteDefinition) -> Iterator[Tuple[str, Path, str]]:
        """Yield ``(url, file, unit)`` for every URL the build would publish, in build order."""
        for name, site in definition.sites.items():
            for domain in site.domains:
                for content in site.content:
                    for p in content.paths:
                        yield self._url(domain, p), self._file(domain, p), f"site={name} content=({content})"
                for page in site.pages:
                    for p in page.paths:
                        yield self._url(domain, p), self._file(domain, p), f"site={name} page=({page})"

    def check_unique_urls(self, definition: SiteDefinition) -> None:
        """Fail before any file is written if two units publish the same URL or file.

        Different URLs can still land on one file: ``/`` and ``/index.html``,
        or ``/x/y`` and ``/x//y``.
        """
        seen: Dict[str, str] = {}
        files: Dict[Path, str] = {}
        for url, target, unit in self.iter_urls(definition):
            if url in seen:
                raise DuplicateURLError(url, seen[url], unit)
            if target in files:
                raise DuplicateFileError(target, files[target], unit)
            seen[url] = unit
            files[target] = unit

    def _url(self, domain: str, path: str) -> str:
        return endpoint_url(domain, path, scheme=self.settings.scheme)

    def _file(self, domain: str, path: str) -> Path:
        return local_file_path(self.settings.sites, domain, path)

    def _target(self, domain: str, path: str) -> Path:
        target = self._file(domain, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def _copy(self, content: ContentMapping, domain: str) -> List[Endpoint]:
        try:
            src = resolve_content(self.settings.content, content.source, content.resource)
            endpoints = []
            for p in content.paths:
                dst = self._target(domain, p)
                with src.open("rb") as fsrc, dst.open("wb") as fdst:
                    writer = HashingWriter(fdst)
                    shutil.copyfileobj(fsrc, writer)
                endpoints.append(self._endpoint(domain, p, writer))
                self.logger.debug("src=%s dst=%s bytes=%d", src, dst, writer.written)
        except OSError as exc:
            raise BuildError(f"Cannot copy content=({content}) domain={domain} err={exc}") from exc
        return endpoints

    def _generate(self, page: PageTemplate, domain: str) -> List[Endpoint]:
        try:
            template = self.renderer.load(page.template)
            endpoints = []
            for p in page.paths:
                dst = self._target(domain, p)
                with dst.open("wb") as fdst:
                    sinks = (fdst,) if self.mirror is None else (fdst, self.mirror)
                    writer = HashingWriter(*sinks)
                    self.renderer.render(template, page.data, writer)
                endpoints.append(self._endpoint(domain, p, writer))
                self.logger.debug("template=%s dst=%s bytes=%d", page.template, dst, writer.written)
        except (OSError, UnicodeDecodeError, TemplateError) as exc:
            raise BuildError(f"Cannot generate page=({page}) domain={domain} err={exc}") from exc
        return endpoints

    def _endpoint(self, domain: str, path: str, writer: HashingWriter) -> Endpoint:
        return Endpoint(
            method="GET",
            url=self._url(domain, path),
            expected_status_code=200,
            expected_body_hash=writer.b64digest(),
        )
