# roastmap/report/json_report.py

"""
JSON report for Roastmap.

Serializes the ResultMap and its summary into a file.
"""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Mapping

from roastmap.aggregator import summarize
from roastmap.models import FetchOutcome


def report_data(results: Mapping[str, FetchOutcome]) -> dict:
    """Plain-dict form of the results, shared by the JSON and HTML reports."""
    return {
        'results': [
            {'url': url, 'status': o.status, 'body_length': o.body_length, 'error': o.error}
            for url, o in results.items()
        ],
        'summary': asdict(summarize(results)),
    }


def render_json(results: Mapping[str, FetchOutcome], output_path: Path | str) -> Path:
    """
    Save ``results`` as JSON at the given path.

    :param results: latest FetchOutcome per URL
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from roastmap.report.json_report import render_json
    report_path = render_json(results, 'reports/warmup.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report_data(results), f, ensure_ascii=False, indent=2)

    return output
