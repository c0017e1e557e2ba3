# File: roastmap/report/table.py
"""roastmap.report.table: console table of per-URL results, rendered with rich."""

from __future__ import annotations

from typing import List, Mapping, Optional

from rich.console import Console
from rich.table import Column, Table

from roastmap.models import FetchOutcome

HEADERS = ("Url", "Status", "Body Length")


def build_rows(results: Mapping[str, FetchOutcome]) -> List[List[str]]:
    """One row per URL plus a closing ``Total`` row with the distinct URL count."""
    rows = [[url, str(outcome.status), str(outcome.body_length)] for url, outcome in results.items()]
    rows.append(["Total", "", str(len(results))])
    return rows


def render_table(results: Mapping[str, FetchOutcome], console: Optional[Console] = None) -> Table:
    """Print the results table to ``console`` (stdout by default) and return it."""
    table = Table(
        Column(HEADERS[0], overflow="fold"),
        Column(HEADERS[1], justify="right"),
        Column(HEADERS[2], justify="right"),
    )
    rows = build_rows(results)
    for url, status, length in rows[:-1]:
        style = "red" if status == "0" else None
        table.add_row(url, status, length, style=style)
    table.add_section()
    table.add_row(*rows[-1], style="bold")

    (console or Console()).print(table)
    return table
