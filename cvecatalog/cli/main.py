"""`cvecat` command group: run the API or browse a running one."""

from __future__ import annotations

import click

from cvecatalog.cli.commands.cves import cves_cmd
from cvecatalog.core.config import get_settings
from cvecatalog.core.logging import configure_logging


@click.group()
@click.version_option(package_name="cve-catalog-api")
@click.option(
    "--api-url",
    default="http://localhost:8000",
    envvar="CVECAT_API_URL",
    show_default=True,
    help="Base URL of the CVE catalog API server",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str) -> None:
    """Browse CVEs merged with their risk analysis.

    \b
    Quick start:
      cvecat serve
      cvecat cves list --filter 2021 --sort-by published_date
      cvecat cves show CVE-2021-44228
    """
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url.rstrip("/")


cli.add_command(cves_cmd)


@cli.command("serve")
@click.option("--host", default=None, help="Bind host  [default: APP_HOST]")
@click.option("--port", type=int, default=None, help="Bind port  [default: APP_PORT]")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload (dev mode)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the CVE catalog API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        "cvecatalog.api.app:app",
        host=host or settings.app_host,
        port=port if port is not None else settings.app_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
