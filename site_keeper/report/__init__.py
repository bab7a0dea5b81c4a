# File: site_keeper/report/__init__.py
"""site_keeper.report: сохранение результатов проверки в файл."""

from .json_report import render_json

__all__ = ["render_json"]
