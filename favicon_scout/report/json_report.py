# favicon_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта FaviconScout.

Сериализация объекта ScanReport в файл.
"""
import json
from dataclasses import asdict
from pathlib import Path

from favicon_scout.aggregator import ScanReport


def render_json(report: ScanReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект ScanReport с результатами сканирования
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from favicon_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/github.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(asdict(report), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
