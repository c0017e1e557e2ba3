# File: roastmap/report/html_report.py
"""roastmap.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from roastmap.models import FetchOutcome
from roastmap.report.json_report import report_data

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    results: Mapping[str, FetchOutcome],
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from a template and save it at the given path.

    Args:
        results: latest FetchOutcome per URL.
        template_dir: directory holding ``report.html.j2``;
            *None* uses the template bundled with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from roastmap.report.html_report import render_html
    html_path = render_html(results, template_dir=None, output_path='reports/warmup.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    html_content = template.render(**report_data(results))
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
