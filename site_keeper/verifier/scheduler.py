# === FILE: site_keeper/verifier/scheduler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable, List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from site_keeper.config import VerifySettings
from site_keeper.manifest import Endpoint, Manifest
from site_keeper.verifier.checks import EndpointCheck
from site_keeper.verifier.models import CheckResult

__all__ = ("ProbeScheduler",)

# end-of-input marker, one per worker
_DONE = None


class ProbeScheduler:
    """Пул из ``parallel`` воркеров, которые проверяют эндпоинты манифеста.

    Endpoints are fed through a queue bounded at ``2 * parallel``; the feeder
    waits while it is full. A failing check never stops its siblings, a fatal
    :class:`~site_keeper.verifier.checks.ProbeError` cancels the whole run.
    """

    def __init__(self, settings: VerifySettings) -> None:
        self.settings = settings
        self.parallel: int = settings.parallel
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("SiteKeeper")

    async def __aenter__(self) -> ProbeScheduler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.settings.timeout),
            headers={"User-Agent": self.settings.user_agent},
            connector=TCPConnector(limit=self.parallel),
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def run(self, manifest: Manifest) -> List[CheckResult]:
        """Check every endpoint once; results are returned in completion order."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        self.logger.info("Checking %d endpoints, parallel=%d", len(manifest), self.parallel)
        start = time.monotonic()
        queue: asyncio.Queue[Optional[Endpoint]] = asyncio.Queue(maxsize=self.parallel * 2)
        results: List[CheckResult] = []
        tasks = [asyncio.create_task(self._feed(queue, manifest.endpoints))]
        tasks += [asyncio.create_task(self._worker(self.session, queue, results)) for _ in range(self.parallel)]
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            for task in done:
                task.result()
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        duration = time.monotonic() - start
        failed = sum(1 for r in results if not r.passed)
        self.logger.info("Finished %d checks in %.2f s, failed=%d", len(results), duration, failed)
        return results

    async def _feed(self, queue: asyncio.Queue[Optional[Endpoint]], endpoints: Iterable[Endpoint]) -> None:
        for endpoint in endpoints:
            await queue.put(endpoint)
        for _ in range(self.parallel):
            await queue.put(_DONE)

    async def _worker(
        self,
        session: ClientSession,
        queue: asyncio.Queue[Optional[Endpoint]],
        results: List[CheckResult],
    ) -> None:
        while True:
            endpoint = await queue.get()
            if endpoint is _DONE:
                return
            check = EndpointCheck(
                session,
                endpoint,
                timeout=self.settings.timeout,
                follow_redirects=self.settings.follow_redirects,
            )
            result = await check.execute()
            self.logger.debug("%s", result)
            results.append(result)
