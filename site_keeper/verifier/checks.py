# site_keeper/verifier/checks.py
"""
Endpoint check: one HTTP request compared against the manifest expectations.

Transport problems and mismatches are *check failures* and come back as a
failing :class:`CheckResult`. Only a response body that cannot be read is
raised as :class:`ProbeError`, because then the verifier itself is broken.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from site_keeper.builder.hashing import content_digest
from site_keeper.manifest import Endpoint
from site_keeper.verifier.models import CheckResult


class ProbeError(RuntimeError):
    """Fatal verifier failure."""


class EndpointCheck:
    """Issues the endpoint's request with the shared session and compares the body hash."""

    def __init__(self, session: ClientSession, endpoint: Endpoint, *, timeout: float, follow_redirects: bool = True) -> None:
        self.session = session
        self.endpoint = endpoint
        self.timeout = timeout
        self.follow_redirects = follow_redirects

    def context(self) -> tuple[str, str]:
        return self.endpoint.context

    def passed(self) -> CheckResult:
        return CheckResult(context=self.context(), passed=True)

    def fail(self, err: BaseException) -> CheckResult:
        if isinstance(err, asyncio.TimeoutError):
            message = f"timeout after {self.timeout}s"
        else:
            message = str(err) or type(err).__name__
        return CheckResult(context=self.context(), passed=False, message=message)

    def failf(self, fmt: str, *args: object) -> CheckResult:
        return CheckResult(context=self.context(), passed=False, message=fmt % args)

    async def execute(self) -> CheckResult:
        endpoint = self.endpoint
        try:
            async with self.session.request(
                endpoint.method, endpoint.url, allow_redirects=self.follow_redirects
            ) as resp:
                if resp.status != endpoint.expected_status_code:
                    return self.failf("http-status: %d<>%d", resp.status, endpoint.expected_status_code)
                try:
                    body = await resp.read()
                except asyncio.TimeoutError as exc:
                    return self.fail(exc)
                except ClientError as exc:
                    raise ProbeError(f"Cannot read result body url={endpoint.url} err={exc}") from exc
        except (ClientError, asyncio.TimeoutError) as exc:
            return self.fail(exc)

        body_hash = content_digest(body)
        if body_hash != endpoint.expected_body_hash:
            return self.failf("res-hash: %s<>%s", body_hash, endpoint.expected_body_hash)
        return self.passed()

    def __str__(self) -> str:
        return str(self.endpoint)
