"""CLI commands for browsing the CVE catalog."""

from __future__ import annotations

import click

from cvecatalog.cli.output import console, cve_detail, cves_table

_SORT_KEYS = ("published_date", "last_modified_date", "analysis_updated_at")


@click.group("cves")
def cves_cmd() -> None:
    """Browse CVEs and their analysis."""


@cves_cmd.command("list")
@click.option("--page", default=1, show_default=True, help="Page number (20 rows per page)")
@click.option("--filter", "cve_filter", default="", help="Substring of the CVE ID, e.g. 2021")
@click.option("--sort-by", type=click.Choice(_SORT_KEYS), default=None, help="Sort key")
@click.option(
    "--order",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default="desc",
    show_default=True,
)
@click.pass_context
def cves_list(
    ctx: click.Context, page: int, cve_filter: str, sort_by: str | None, order: str
) -> None:
    """List CVEs, newest modification first."""
    import httpx

    api_url: str = ctx.obj["api_url"]
    params: dict[str, str | int] = {"page": page, "sortOrder": order.upper()}
    if cve_filter:
        params["cveId"] = cve_filter
    if sort_by:
        params["sortBy"] = sort_by

    try:
        r = httpx.get(f"{api_url}/api/v1/cves", params=params, timeout=15)
        r.raise_for_status()
        body = r.json()
        pagination = body["pagination"]
        console.print(cves_table(body["data"], pagination))
        console.print(
            f"[dim]Showing {len(body['data'])} of {pagination['totalCount']} CVEs.[/dim]"
        )
    except httpx.ConnectError:
        console.print(f"[red]Cannot connect to API at {api_url}.[/red]")
        raise SystemExit(1)
    except httpx.HTTPStatusError as e:
        console.print(f"[red]Error {e.response.status_code}:[/red] {_message(e.response)}")
        raise SystemExit(1)


@cves_cmd.command("show")
@click.argument("cve_id")
@click.pass_context
def cves_show(ctx: click.Context, cve_id: str) -> None:
    """Show a CVE merged with its analysis."""
    import httpx

    api_url: str = ctx.obj["api_url"]
    try:
        r = httpx.get(f"{api_url}/api/v1/cves/{cve_id}", timeout=10)
        r.raise_for_status()
        cve_detail(r.json()["result"])
    except httpx.ConnectError:
        console.print(f"[red]Cannot connect to API at {api_url}.[/red]")
        raise SystemExit(1)
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            console.print(f"[yellow]CVE {cve_id!r} not found.[/yellow]")
        else:
            console.print(f"[red]Error {e.response.status_code}:[/red] {_message(e.response)}")
        raise SystemExit(1)


def _message(response) -> str:
    try:
        return response.json().get("message", response.text)
    except ValueError:
        return response.text
