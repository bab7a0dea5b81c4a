# File: tests/test_aggregator.py
import json

from site_keeper.aggregator import aggregate_results
from site_keeper.report.json_report import render_json
from site_keeper.verifier.models import CheckResult


def ok(url: str, method: str = "GET") -> CheckResult:
    return CheckResult(context=(method, url), passed=True)


def bad(url: str, message: str) -> CheckResult:
    return CheckResult(context=("GET", url), passed=False, message=message)


def test_results_are_sorted_by_context():
    report = aggregate_results([ok("https://b.test/"), ok("https://a.test/")])
    assert [r.context[1] for r in report.results] == ["https://a.test/", "https://b.test/"]
    assert report.render() == "PASS: GET | https://a.test/\nPASS: GET | https://b.test/\n"


def test_method_sorts_before_url():
    report = aggregate_results([ok("https://a.test/", "HEAD"), ok("https://z.test/")])
    assert [r.context for r in report.results] == [("GET", "https://z.test/"), ("HEAD", "https://a.test/")]


def test_equal_contexts_keep_arrival_order():
    first = bad("https://a.test/", "first")
    second = bad("https://a.test/", "second")
    report = aggregate_results([second, ok("https://0.test/"), first])
    assert [r.message for r in report.results] == ["", "second", "first"]


def test_exit_code():
    assert aggregate_results([]).exit_code == 0
    assert aggregate_results([ok("https://a.test/")]).exit_code == 0
    report = aggregate_results([ok("https://a.test/"), bad("https://b.test/", "http-status: 500<>200")])
    assert report.exit_code == 1
    assert report.failed == 1


def test_failures_stand_out():
    report = aggregate_results([bad("https://b.test/", "res-hash: x<>y"), ok("https://a.test/")])
    assert report.lines() == [
        "PASS: GET | https://a.test/\n",
        "\nFAIL: GET | https://b.test/: res-hash: x<>y\n\n",
    ]


def test_render_json(tmp_path):
    report = aggregate_results([bad("https://b.test/", "boom"), ok("https://a.test/")])
    path = render_json(report, tmp_path / "reports" / "verify.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["total"] == 2
    assert data["failed"] == 1
    assert data["results"][0] == {"context": ["GET", "https://a.test/"], "pass": True, "message": ""}
    assert json.loads(report.json(pretty=True)) == data
