from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from .config import LookupConfig, log_level
from .errors import DnsSweepError, UsageError
from .services.lookup_service import run_forward, run_reverse

app = typer.Typer(add_completion=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _fail(err: DnsSweepError, usage: str = "") -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(err.message)}")
    if usage:
        err_console.print(escape(usage))
    raise typer.Exit(code=err.exit_code)


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    domain: str = typer.Option("", "--domain", help="Domain name to query"),
    server: str = typer.Option(
        "",
        "--server",
        help="DNS server address (host:port). Leave empty to use system default resolver",
    ),
):
    """Dump the DNS records of a domain as JSON, or reverse-resolve an IP."""
    logging.basicConfig(level=log_level(), format="%(levelname)s:%(name)s:%(message)s")
    if ctx.invoked_subcommand is not None:
        return

    config = LookupConfig.from_args(domain=domain, server=server)
    try:
        out = run_forward(config)
    except UsageError as e:
        _fail(e, usage=ctx.get_usage())
    except DnsSweepError as e:
        _fail(e)
    typer.echo(out)


@app.command("reverse")
def reverse(ip: str | None = typer.Argument(None, help="IP address to resolve")):
    """Reverse-resolve an IP address to hostnames."""
    config = LookupConfig.from_args(ip=ip)
    try:
        names = run_reverse(config)
    except UsageError as e:
        err_console.print(f"Usage of `reverse`: {escape(e.usage)}")
        raise typer.Exit(code=e.exit_code)
    except DnsSweepError as e:
        _fail(e)

    typer.echo(f"\nhostnames for {config.ip}:")
    for name in names:
        typer.echo(f"   {name}")
    typer.echo(err=True)


def main():
    app()


if __name__ == "__main__":
    main()
