"""lessbuild status command - show which cache backend would be used."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from buildless.cache.factory import CacheClientFactory
from buildless.cache.transports import redact_url
from buildless.config.loader import load_config
from buildless.config.models import TransportKind
from buildless.core.errors import BuildlessError
from buildless.core.logging import configure_logging


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config file (default: ~/.config/buildless/config.yaml)",
)
@click.option(
    "--transport",
    type=click.Choice([t.value for t in TransportKind]),
    help="Override the configured transport",
)
@click.option("--endpoint", help="Override the configured endpoint")
@click.option("--no-agent", is_flag=True, help="Ignore the local agent")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def status_command(
    ctx: click.Context,
    config_path: Path | None,
    transport: str | None,
    endpoint: str | None,
    no_agent: bool,
    as_json: bool,
) -> None:
    """Show the resolved cache backend without connecting to it."""
    try:
        config = load_config(config_path)
        # --verbose keeps the debug console setup from the group
        if not (ctx.obj or {}).get("verbose"):
            configure_logging(config=config.logging)

        cache = config.cache
        overrides: dict[str, Any] = {}
        if transport is not None:
            overrides["transport"] = TransportKind(transport)
        if endpoint is not None:
            overrides["endpoint"] = endpoint
        if no_agent:
            overrides["use_agent"] = False
        cache = cache.model_copy(update=overrides)

        resolution = CacheClientFactory().resolve(
            use_agent=cache.use_agent,
            transport=cache.transport,
            endpoint=cache.endpoint,
        )
    except BuildlessError as e:
        raise click.ClickException(str(e)) from e

    agent = resolution.agent
    resolved = resolution.endpoint
    if as_json:
        click.echo(
            json.dumps(
                {
                    "transport": resolution.transport.value,
                    "source": resolved.source.value,
                    "url": redact_url(resolved.url),
                    "path_prefix": resolved.path_prefix,
                    "agent": agent.model_dump() if agent else None,
                    "authenticated": cache.api_key is not None,
                }
            )
        )
        return

    if agent is None:
        click.echo("Agent: not detected")
    else:
        click.echo(f"Agent: running (PID {agent.pid}, port {agent.port})")
    click.echo(f"Transport: {resolution.transport.value}")
    click.echo(f"Endpoint: {redact_url(resolved.url)} ({resolved.source.value})")
    if resolved.path_prefix:
        click.echo(f"  Root: {resolved.path_prefix}")
    click.echo(f"API key: {'configured' if cache.api_key else 'not set'}")
