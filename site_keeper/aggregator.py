# File: site_keeper/aggregator.py
"""site_keeper.aggregator: сводный отчёт по результатам проверки."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from site_keeper.verifier.models import CheckResult


@dataclass(slots=True)
class VerifyReport:
    """Результаты проверки в детерминированном порядке и итоговый код выхода."""

    results: List[CheckResult] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def exit_code(self) -> int:
        """0 если все проверки прошли, иначе 1."""
        return 1 if self.failed else 0

    def lines(self) -> List[str]:
        """Passing results are single lines; failures get a blank line above and below."""
        out: List[str] = []
        for res in self.results:
            if res.passed:
                out.append(f"{res}\n")
            else:
                out.append(f"\n{res}\n\n")
        return out

    def render(self) -> str:
        return "".join(self.lines())

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": len(self.results),
            "failed": self.failed,
            "results": [
                {
                    "context": list(r.context),
                    "pass": r.passed,
                    "message": r.message,
                }
                for r in self.results
            ],
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def sort_results(results: Iterable[CheckResult]) -> List[CheckResult]:
    """Stable sort by context tuple; equal contexts keep their arrival order."""
    return sorted(results, key=lambda r: tuple(r.context))


def aggregate_results(results: Iterable[CheckResult]) -> VerifyReport:
    """Собирает результаты проверок в VerifyReport."""
    return VerifyReport(results=sort_results(results))
