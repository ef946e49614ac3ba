"""Command-line entry point for spacetraveling."""

from __future__ import annotations

import logging
import sys

import click

from .commands import build as build_cmd
from .commands import paths as paths_cmd
from .commands import reading_time as reading_time_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.option(
    "--config",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="Path to config file (defaults to data_dir/config/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool) -> None:
    """spacetraveling - static blog post pages from a Prismic repository."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command("build")
@click.option("--slug", help="Render a single post (generated on demand if not listed)")
@click.pass_context
def build(ctx: click.Context, slug: str | None) -> None:
    """Fetch posts from the CMS and write their HTML pages."""
    try:
        written = build_cmd.run(ctx.obj["config_path"], slug)
        if slug:
            click.echo(f"✅ Page generated for post '{slug}': {written[0]}")
        else:
            click.echo(f"✅ {len(written)} post pages generated")
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Build failed: {exc}", err=True)
        sys.exit(1)


@cli.command("paths")
@click.pass_context
def paths(ctx: click.Context) -> None:
    """List the post slugs that a full build would render."""
    try:
        static_paths = paths_cmd.run(ctx.obj["config_path"])
        for entry in static_paths["paths"]:
            click.echo(f"/post/{entry['params']['slug']}")
        click.echo(f"fallback: {'on' if static_paths['fallback'] else 'off'}")
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Paths command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("reading-time")
@click.argument("slug")
@click.pass_context
def reading_time(ctx: click.Context, slug: str) -> None:
    """Print the estimated reading time of a post."""
    try:
        minutes = reading_time_cmd.run(ctx.obj["config_path"], slug)
        click.echo(f"{minutes} min")
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Reading-time command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show system status and configuration."""
    try:
        config_manager = ConfigManager(ctx.obj["config_path"])
        click.echo(f"📄 Config file: {config_manager.config_path}")

        if config_manager.validate_config():
            click.echo("✅ Configuration is valid")
        else:
            click.echo("❌ Configuration validation failed")
            return

        prismic_cfg = config_manager.get_prismic_settings()
        site_cfg = config_manager.get_site_settings()
        token = config_manager.resolve_access_token()
        click.echo(f"📡 Prismic API: {prismic_cfg['api_endpoint']}")
        click.echo(f"🔑 Access token: {'configured' if token else 'none (public API)'}")
        click.echo(f"🌐 Locale: {site_cfg.get('locale', 'pt-BR')}")
        click.echo(f"⏱️  Reading speed: {config_manager.get_words_per_minute()} words/min")

    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Error checking status: {exc}", err=True)


if __name__ == "__main__":  # pragma: no cover - script entry
    cli()
