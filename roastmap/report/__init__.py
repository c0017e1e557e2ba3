# File: roastmap/report/__init__.py
"""roastmap.report: console table, JSON and HTML reports for a warmup run."""

from __future__ import annotations

from roastmap.report.html_report import render_html
from roastmap.report.json_report import render_json
from roastmap.report.table import build_rows, render_table

__all__ = ["build_rows", "render_html", "render_json", "render_table"]
