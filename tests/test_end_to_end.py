# File: tests/test_end_to_end.py
"""Build a site, serve the built tree over HTTP and verify it against the manifest."""
from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port
from site_keeper.config import BuildSettings, VerifySettings
from site_keeper.engine import build_site, verify_site
from site_keeper.utils import local_file_path, reversed_domain


@pytest.fixture()
def live_domain() -> str:
    return f"127.0.0.1:{unused_port()}"


@pytest.fixture()
def live_settings(site_tree, live_domain):
    config = site_tree["root"] / "live.json"
    config.write_text(
        json.dumps(
            {
                "sites": {
                    "live": {
                        "domains": [live_domain],
                        "content": [{"paths": ["/logo.txt", "/img/logo.txt"], "address": "assets:logo.txt"}],
                        "pages": [{"paths": ["/home.html"], "template": "index", "data": {"title": "Live"}}],
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    build = BuildSettings(
        config=config,
        content=site_tree["content"],
        templates=site_tree["templates"],
        sites=site_tree["sites"],
        monitor=site_tree["monitor"],
        scheme="http",
    )
    verify = VerifySettings(monitor=site_tree["monitor"], parallel=2, timeout=2.0)
    return build, verify


@pytest_asyncio.fixture
async def built_site(live_settings, live_domain) -> AsyncIterator[tuple]:
    """Build into the sites root, then serve that domain's directory on the domain's port."""
    build, verify = live_settings
    manifest = build_site(build)
    app = web.Application()
    app.router.add_static("/", build.sites / reversed_domain(live_domain))
    host, _, port = live_domain.partition(":")
    async with TestServer(app, host=host, port=int(port)):
        yield build, verify, manifest


@pytest.mark.asyncio()
async def test_built_site_verifies_then_fails_after_one_byte_changes(built_site, live_domain):
    build, verify, manifest = built_site
    assert len(manifest) == 3

    # verify_site owns its event loop, so it runs off the loop serving the site
    report = await asyncio.to_thread(verify_site, verify)
    assert report.exit_code == 0, report.render()
    assert report.failed == 0
    assert len(report.results) == 3

    page = local_file_path(build.sites, live_domain, "/home.html")
    body = bytearray(page.read_bytes())
    body[0] ^= 0x01
    page.write_bytes(bytes(body))

    report = await asyncio.to_thread(verify_site, verify)
    assert report.exit_code == 1
    failed = [r for r in report.results if not r.passed]
    assert [r.context for r in failed] == [("GET", f"http://{live_domain}/home.html")]
    assert failed[0].message.startswith("res-hash: ")
    assert f"\nFAIL: GET | http://{live_domain}/home.html: res-hash: " in report.render()
