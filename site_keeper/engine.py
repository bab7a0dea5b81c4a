# File: site_keeper/engine.py
"""site_keeper.engine: оркестрация сборки (build) и проверки (verify).

Build: описание сайтов → ManifestBuilder → манифест на диск.
Verify: манифест с диска → ProbeScheduler → VerifyReport.
"""

from __future__ import annotations

import asyncio
import sys
from typing import BinaryIO, List, Optional

from site_keeper.aggregator import VerifyReport, aggregate_results
from site_keeper.builder import ContentRenderer, ManifestBuilder
from site_keeper.config import BuildSettings, VerifySettings, load_site_definition
from site_keeper.logger import logger
from site_keeper.manifest import Manifest, read_manifest, write_manifest
from site_keeper.verifier import CheckResult, ProbeScheduler

__all__ = ["build_site", "start_verify", "verify_site"]


def build_site(settings: BuildSettings, mirror: Optional[BinaryIO] = None) -> Manifest:
    """Собирает сайты и записывает манифест; при любой ошибке манифест не пишется.

    With ``settings.debug`` and no explicit *mirror*, rendered pages are also
    written to stdout.
    """
    if mirror is None and settings.debug:
        mirror = sys.stdout.buffer
    definition = load_site_definition(settings.config)
    logger.debug("config=%s", settings.config)
    builder = ManifestBuilder(settings, renderer=ContentRenderer(settings.templates), mirror=mirror)
    manifest = builder.build(definition)
    path = write_manifest(manifest, settings.monitor)
    logger.info("Wrote monitor file %s (%d endpoints)", path, len(manifest))
    return manifest


async def start_verify(settings: VerifySettings, manifest: Manifest) -> List[CheckResult]:
    """Запускает пул проверок в контексте HTTP-сессии и возвращает результаты."""
    async with ProbeScheduler(settings) as scheduler:
        return await scheduler.run(manifest)


def verify_site(settings: VerifySettings) -> VerifyReport:
    """Читает манифест, проверяет все эндпоинты и возвращает упорядоченный отчёт."""
    manifest = read_manifest(settings.monitor)
    results = asyncio.run(start_verify(settings, manifest))
    report = aggregate_results(results)
    if report.failed:
        logger.warning("%d of %d checks failed", report.failed, len(report.results))
    return report
