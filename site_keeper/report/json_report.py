# site_keeper/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteKeeper.

Сериализация объекта VerifyReport в файл.
"""
import json
from pathlib import Path

from site_keeper.aggregator import VerifyReport


def render_json(report: VerifyReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект VerifyReport с результатами проверки
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_keeper.report.json_report import render_json
    report_path = render_json(report, 'reports/verify.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2)

    return output
