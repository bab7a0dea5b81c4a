# File: tests/test_renderer.py
import hashlib
import io

import pytest
from jinja2 import TemplateNotFound, UndefinedError
from site_keeper.builder.hashing import HashingWriter, content_digest
from site_keeper.builder.renderer import ContentRenderer


def test_hashing_writer_fans_out():
    a, b = io.BytesIO(), io.BytesIO()
    writer = HashingWriter(a, b)
    writer.write(b"hello ")
    writer.write(b"world")
    assert a.getvalue() == b.getvalue() == b"hello world"
    assert writer.written == 11
    assert writer.digest() == hashlib.sha512(b"hello world").digest()
    assert writer.b64digest() == content_digest(b"hello world")


def test_render_bytes_autoescapes(site_tree):
    renderer = ContentRenderer(site_tree["templates"])
    assert renderer.render_bytes("plain", {"text": "A & <B>"}) == b"<p>A &amp; &lt;B&gt;</p>\n"


def test_markdown_is_not_escaped(site_tree):
    html = ContentRenderer(site_tree["templates"]).render_bytes("index", {"title": "T"}).decode("utf-8")
    assert "<h1>About</h1>" in html
    assert "&lt;h1&gt;" not in html


def test_render_streams_into_writer(site_tree):
    renderer = ContentRenderer(site_tree["templates"])
    template = renderer.load("plain")
    sink = io.BytesIO()
    writer = HashingWriter(sink)
    renderer.render(template, {"text": "one"}, writer)
    assert sink.getvalue() == b"<p>one</p>\n"
    assert writer.b64digest() == content_digest(b"<p>one</p>\n")


def test_same_template_executes_many_times(site_tree):
    renderer = ContentRenderer(site_tree["templates"])
    template = renderer.load("plain")
    outputs = []
    for text in ("a", "b", "a"):
        sink = io.BytesIO()
        renderer.render(template, {"text": text}, HashingWriter(sink))
        outputs.append(sink.getvalue())
    assert outputs[0] == outputs[2] != outputs[1]


def test_missing_template(site_tree):
    with pytest.raises(TemplateNotFound):
        ContentRenderer(site_tree["templates"]).load("nope")


def test_undefined_variable_is_an_error(site_tree):
    with pytest.raises(UndefinedError):
        ContentRenderer(site_tree["templates"]).render_bytes("plain", {})


def test_missing_markdown_file(site_tree):
    (site_tree["templates"] / "about.md").unlink()
    with pytest.raises(FileNotFoundError):
        ContentRenderer(site_tree["templates"]).render_bytes("index", {"title": "T"})
