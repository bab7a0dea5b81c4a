# File: tests/conftest.py
import json
from pathlib import Path
from typing import Dict

import pytest
from site_keeper.config import BuildSettings, VerifySettings
from site_keeper.logger import configure


@pytest.fixture(autouse=True)
def fresh_logging():
    """Attach the project logger to the streams of the current test."""
    configure(level="DEBUG")
    yield


@pytest.fixture()
def site_tree(tmp_path) -> Dict[str, Path]:
    """
    Create a content root and a templates root for builder tests.
    Returns dict with names to directory paths.
    """
    content = tmp_path / "content"
    templates = tmp_path / "templates"
    (content / "assets").mkdir(parents=True)
    templates.mkdir()

    (content / "assets" / "logo.txt").write_bytes(b"static logo bytes\n")
    (content / "assets" / "robots.txt").write_bytes(b"User-agent: *\nDisallow:\n")
    (templates / "index.html").write_text(
        "<html><title>{{ title }}</title><body>{{ markdown_to_html('about') }}</body></html>\n",
        encoding="utf-8",
    )
    (templates / "about.md").write_text("# About\n\nHello *world*.\n", encoding="utf-8")
    (templates / "plain.html").write_text("<p>{{ text }}</p>\n", encoding="utf-8")
    return {
        "root": tmp_path,
        "content": content,
        "templates": templates,
        "sites": tmp_path / "www",
        "monitor": tmp_path / "mon.json",
    }


@pytest.fixture()
def site_definition_data() -> dict:
    """Two domains sharing static content and one templated page."""
    return {
        "sites": {
            "example": {
                "domains": ["www.example.com", "example.com"],
                "content": [
                    {"paths": ["/logo.txt", "/img/logo.txt"], "address": "assets:logo.txt"},
                    {"paths": ["/robots.txt"], "address": "assets:robots.txt"},
                ],
                "pages": [
                    {"paths": ["/", "/home.html"], "template": "index", "data": {"title": "Home"}},
                ],
            }
        }
    }


@pytest.fixture()
def site_config(site_tree, site_definition_data) -> Path:
    path = site_tree["root"] / "sites.json"
    path.write_text(json.dumps(site_definition_data), encoding="utf-8")
    return path


@pytest.fixture()
def build_settings(site_tree, site_config) -> BuildSettings:
    return BuildSettings(
        config=site_config,
        content=site_tree["content"],
        templates=site_tree["templates"],
        sites=site_tree["sites"],
        monitor=site_tree["monitor"],
    )


@pytest.fixture()
def verify_settings(tmp_path) -> VerifySettings:
    return VerifySettings(monitor=tmp_path / "monitor.json", parallel=4, timeout=2.0)

