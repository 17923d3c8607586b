"""
helm-generate — CLI entrypoint.

Usage:
    python -m helmgen.main --help
    python -m helmgen.main generate ./mychart
    python -m helmgen.main config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from helmgen import __version__
from helmgen.core.observability.logging_config import setup_from_environment


@click.group()
@click.version_option(version=__version__, prog_name="helmgen")
@click.option("--verbose", "-v", is_flag=True, help="Log each generator as it runs.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to helmgen.yml (default: search upward from the directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """helm-generate — run the helm:generate directives found in source files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_environment(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.argument("directory", default=".", type=click.Path(file_okay=True, dir_okay=True))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--dry-run", is_flag=True, help="List and expand directives without running them.")
@click.option("--mock", is_flag=True, help="Use mock adapter (no real execution).")
@click.pass_context
def generate(
    ctx: click.Context,
    directory: str,
    as_json: bool,
    dry_run: bool,
    mock: bool,
) -> None:
    """Run generator directives under DIRECTORY (default: current directory).

    A directive is the first line of a file, in one of these forms:

    \b
        # helm:generate <command>
        // helm:generate <command>
        /* helm:generate <command> */

    Examples:

        helmgen generate ./mychart

        helmgen generate --dry-run ./mychart
    """
    from helmgen.core.use_cases.generate import run_generate

    result = run_generate(
        directory=directory,
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
        mock_mode=mock,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    walk_result = result.walk
    quiet = ctx.obj.get("quiet", False)

    if walk_result is not None and not quiet:
        mode_label = "[dry-run] " if dry_run else "[mock] " if mock else ""
        click.secho(f"\n⚡ {mode_label}generate — {directory}", fg="cyan", bold=True)
        for receipt in walk_result.receipts:
            if receipt.ok:
                click.secho(f"   ✓ {receipt.path}", fg="green", nl=False)
                timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
                click.echo(timing)
            elif receipt.failed:
                click.secho(f"   ✗ {receipt.path}", fg="red")
            else:
                click.secho(f"   ⊘ {receipt.path} ", fg="yellow", nl=False)
                click.echo(f"({receipt.output})")
            if ctx.obj.get("verbose") or dry_run:
                click.echo(f"     │ {receipt.command}")

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert walk_result is not None
    noun = "directive" if dry_run else "generator"
    plural = "" if walk_result.count == 1 else "s"
    if not quiet:
        click.echo()
    click.secho(f"   {walk_result.count} {noun}{plural} {'found' if dry_run else 'ran'}", bold=True)


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.argument("directory", default=".", type=click.Path(file_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, directory: str, as_json: bool) -> None:
    """Validate helmgen.yml (searched upward from DIRECTORY)."""
    from helmgen.core.use_cases.config_check import check_config

    result = check_config(
        config_path=ctx.obj.get("config_path"),
        start_dir=Path(directory),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Config: {result.config_path or '(defaults)'}")
        click.echo(f"   Keyword: {result.settings.keyword!r}")
        click.echo(f"   Skip prefixes: {', '.join(result.settings.skip_prefixes) or '(none)'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
