# File: site_keeper/verifier/__init__.py
"""site_keeper.verifier: параллельная проверка опубликованных эндпоинтов."""

from .checks import EndpointCheck, ProbeError
from .models import CheckResult
from .scheduler import ProbeScheduler

__all__ = ["CheckResult", "EndpointCheck", "ProbeError", "ProbeScheduler"]
