"""Rich output helpers — tables and detail views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()


def severity_style(severity: str | None) -> str:
    return {
        "CRITICAL": "bold red",
        "HIGH": "red",
        "MEDIUM": "yellow",
        "LOW": "green",
    }.get((severity or "").upper(), "white")


def risk_style(level: int | None) -> str:
    if level is None:
        return "dim"
    if level >= 4:
        return "bold red"
    if level == 3:
        return "yellow"
    return "green"


def fmt_date(iso: str | None) -> str:
    if not iso:
        return "—"
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
        return dt.strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return iso


def cves_table(items: list[dict[str, Any]], pagination: dict[str, Any]) -> Table:
    table = Table(
        title=f"CVEs — page {pagination.get('currentPage')} of {pagination.get('totalPages')}",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("CVE", style="bold", no_wrap=True)
    table.add_column("Status")
    table.add_column("CVSS v3", justify="right")
    table.add_column("Risk", justify="center")
    table.add_column("Published", style="dim")
    table.add_column("Modified", style="dim")
    table.add_column("Analyzed", style="dim")

    for c in items:
        score = c.get("cvss_v3_base_score")
        severity = c.get("cvss_v3_base_severity")
        score_text = Text(
            f"{score:.1f} {severity or ''}".strip() if score is not None else "—",
            style=severity_style(severity),
        )
        risk = c.get("risk_level")
        risk_text = Text(str(risk) if risk is not None else "—", style=risk_style(risk))
        table.add_row(
            c.get("cve_id", ""),
            c.get("vulnerability_status") or "—",
            score_text,
            risk_text,
            fmt_date(c.get("published_date")),
            fmt_date(c.get("last_modified_date")),
            fmt_date(c.get("analysis_updated_at")),
        )
    return table


def cve_detail(c: dict[str, Any]) -> None:
    """Print detailed view of a single merged CVE."""
    console.rule(f"[bold cyan]{c.get('cve_id')}")

    fields = [
        ("Status", c.get("vulnerability_status")),
        ("Published", fmt_date(c.get("published_date"))),
        ("Modified", fmt_date(c.get("last_modified_date"))),
        ("CVSS v3", _score(c.get("cvss_v3_base_score"), c.get("cvss_v3_base_severity"))),
        ("CVSS v3 vector", c.get("cvss_v3_vector")),
        ("CVSS v4", _score(c.get("cvss_v4_base_score"), c.get("cvss_v4_base_severity"))),
        ("CVSS v4 vector", c.get("cvss_v4_vector")),
        ("CWE", ", ".join(c.get("cwe_ids") or [])),
    ]
    for label, value in fields:
        if value:
            console.print(f"  [dim]{label:<16}[/dim] {value}")

    if c.get("description"):
        console.print()
        console.print(c["description"])

    console.print()
    if c.get("analysis_updated_at") is None and c.get("analysis_summary") is None:
        console.print("[yellow]No analysis available yet.[/yellow]")
    else:
        console.rule("[bold]Analysis", style="dim")
        analysis = [
            ("Risk level", c.get("risk_level")),
            ("Type", c.get("vulnerability_type")),
            ("Affected systems", c.get("affected_systems")),
            ("Updated", fmt_date(c.get("analysis_updated_at"))),
        ]
        for label, value in analysis:
            if value is not None and value != "":
                console.print(f"  [dim]{label:<16}[/dim] {value}")
        for heading, key in (
            ("Summary", "analysis_summary"),
            ("Recommendation", "recommendation"),
            ("Technical details", "technical_details"),
        ):
            if c.get(key):
                console.print(f"\n[bold]{heading}[/bold]\n{c[key]}")

    products = c.get("cve_affected_products") or []
    if products:
        console.print()
        product_table = Table(title="Affected products (NVD)", header_style="bold cyan", border_style="dim")
        product_table.add_column("CPE")
        for p in products:
            product_table.add_row(p)
        console.print(product_table)

    links = c.get("reference_links") or []
    if links:
        console.print("\n[bold]References[/bold]")
        for link in links:
            console.print(f"  {link}")


def _score(score: float | None, severity: str | None) -> str | None:
    if score is None:
        return None
    return f"{score:.1f} ({severity})" if severity else f"{score:.1f}"
