"""
wasmsplice — CLI entrypoint.

Usage:
    python -m wasmsplice.main --help
    wasmsplice expand src/main.rs -o src/main.expanded.rs
    wasmsplice status
    wasmsplice config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from wasmsplice import __version__
from wasmsplice.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="wasmsplice")
@click.option("--verbose", "-v", is_flag=True, help="Show toolchain diagnostics.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to wasmsplice.yml (default: auto-detect).",
)
@click.option(
    "--project-root",
    "project_root",
    type=click.Path(exists=False, file_okay=False),
    default=None,
    help="Enclosing project root (default: $WASMSPLICE_PROJECT_ROOT, "
    "$CARGO_MANIFEST_DIR, or the config file's directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    project_root: str | None,
) -> None:
    """wasmsplice — build inline Rust modules to wasm and embed the output."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["project_root"] = Path(project_root) if project_root else None

    setup_logging(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    "output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the expanded source here (default: stdout).",
)
@click.option("--in-place", is_flag=True, help="Overwrite SOURCE with the expanded source.")
@click.option("--mock", is_flag=True, help="Use the mock toolchain (no cargo/wasm-pack).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output a JSON summary.")
@click.pass_context
def expand(
    ctx: click.Context,
    source: str,
    output: str | None,
    in_place: bool,
    mock: bool,
    as_json: bool,
) -> None:
    """Build every annotated module in SOURCE and embed the artifacts.

    Examples:

        wasmsplice expand src/main.rs -o src/main.expanded.rs

        wasmsplice --project-root . expand src/lib.rs --in-place
    """
    from wasmsplice.core.use_cases.expand import expand_file

    if output and in_place:
        raise click.UsageError("--output and --in-place are mutually exclusive.")

    result = expand_file(
        source_path=Path(source),
        output_path=Path(output) if output else None,
        in_place=in_place,
        config_path=ctx.obj.get("config_path"),
        project_root=ctx.obj.get("project_root"),
        mock_mode=mock,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ [{result.error_kind}] {result.error}", fg="red", err=True)
        sys.exit(1)

    if result.output_path is None:
        click.echo(result.text, nl=False)
        return

    if not ctx.obj.get("quiet"):
        mode_label = "[mock] " if mock else ""
        click.secho(f"\n⚡ {mode_label}Expanded {source}", fg="cyan", bold=True)
        for module in result.modules:
            click.secho(f"   ✓ {module.module}", fg="green", nl=False)
            click.echo(f"  wasm {module.binary_size} B, loader {module.loader_size} B")
        if not result.modules:
            click.secho("   ⊘ No annotated modules found", fg="yellow")
        click.echo(f"   → {result.output_path}")
        click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show materialized sub-projects and their build outputs."""
    from wasmsplice.core.use_cases.status import get_status

    result = get_status(
        config_path=ctx.obj.get("config_path"),
        project_root=ctx.obj.get("project_root"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n📦 {result.staging_root}", fg="cyan", bold=True)
    if not result.modules:
        click.echo("   No sub-projects yet.")
    for module in result.modules:
        if module.built:
            click.secho(f"   ✓ {module.name}", fg="green", nl=False)
            click.echo(f"  wasm {module.binary_size} B")
        else:
            click.secho(f"   ✗ {module.name}", fg="yellow", nl=False)
            click.echo("  (not built)")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def toolchain(ctx: click.Context, as_json: bool) -> None:
    """Show whether the configured toolchain is installed."""
    from wasmsplice.adapters.registry import default_registry
    from wasmsplice.core.config.loader import ConfigError, find_config_file, load_config

    config_path: Path | None = ctx.obj.get("config_path") or find_config_file(
        ctx.obj.get("project_root")
    )
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    status_map = default_registry(config).toolchain_status()

    if as_json:
        click.echo(json.dumps(status_map, indent=2))
        return

    click.echo()
    for name, info in status_map.items():
        if info["available"]:
            version = f" {info['version']}" if info["version"] else ""
            click.secho(f"   ✓ {name}{version}", fg="green")
        else:
            click.secho(f"   ✗ {name} (not installed)", fg="red")
    click.echo()


@cli.group()
def config() -> None:
    """Splice configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate wasmsplice.yml configuration."""
    from wasmsplice.core.use_cases.config_check import check_config

    result = check_config(
        config_path=ctx.obj.get("config_path"),
        start_dir=ctx.obj.get("project_root"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Toolchain: {result.config.toolchain.name}")
        click.echo(f"   Staging:   {result.config.staging_dir}")
        click.echo(f"   Embedding: {result.config.embedding} ({result.config.loader_format} loader)")
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
