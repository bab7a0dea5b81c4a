# site_keeper/verifier/models.py
"""
Data models for the SiteKeeper verifier.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of one endpoint check; ``context`` is ``(method, url)``."""

    context: Tuple[str, ...]
    passed: bool
    message: str = ""

    def __str__(self) -> str:
        parts = ["PASS" if self.passed else "FAIL"]
        if self.context:
            parts.append(" | ".join(self.context))
        if self.message:
            parts.append(self.message)
        return ": ".join(parts)
