"""site_keeper.builder.renderer: рендеринг страниц из Jinja2-шаблонов."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Union

import markdown
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape
from markupsafe import Markup

from site_keeper.builder.hashing import HashingWriter

TEMPLATE_SUFFIX = ".html"
MARKDOWN_SUFFIX = ".md"


class ContentRenderer:
    """Loads page templates from *templates_root* and streams rendered bytes into a writer.

    Templates are HTML files named ``<template-id>.html`` and are autoescaped.
    Inside a template ``markdown_to_html("<name>")`` inlines ``<name>.md`` from
    the same directory converted to HTML.
    """

    def __init__(self, templates_root: Union[Path, str]) -> None:
        self.templates_root = Path(templates_root)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_root)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.env.globals["markdown_to_html"] = self.markdown_to_html

    def load(self, template_id: str) -> Template:
        """Parse the template once; the result can be executed for every path."""
        return self.env.get_template(f"{template_id}{TEMPLATE_SUFFIX}")

    def markdown_to_html(self, name: str) -> Markup:
        filename = self.templates_root / f"{name}{MARKDOWN_SUFFIX}"
        text = filename.read_text(encoding="utf-8")
        return Markup(markdown.markdown(text))

    def render(self, template: Template, data: Mapping[str, Any], writer: HashingWriter) -> int:
        """Execute *template* against *data*, writing UTF-8 chunks as they are produced."""
        written = 0
        for chunk in template.generate(dict(data)):
            written += writer.write(chunk.encode("utf-8"))
        return written

    def render_bytes(self, template_id: str, data: Mapping[str, Any]) -> bytes:
        """Convenience wrapper: ``render(template, data) -> bytes``."""
        return self.load(template_id).render(dict(data)).encode("utf-8")
