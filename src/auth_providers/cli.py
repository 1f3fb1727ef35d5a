"""CLI entry point for auth-providers."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from auth_providers.errors import ConfigurationError

app = typer.Typer(
    name="auth-providers",
    help="Normalize sign-in provider configuration into canonical descriptors.",
    no_args_is_help=True,
)
console = Console()

DEFAULT_CONFIG = Path.cwd() / "providers.yaml"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every merge step"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def catalog() -> None:
    """List every built-in provider with its default scope and endpoints."""
    from auth_providers.defaults import DEFAULTS
    from auth_providers.providers import REGISTRY

    table = Table(title="Built-in providers")
    table.add_column("id", no_wrap=True)
    table.add_column("type", no_wrap=True)
    table.add_column("scope")
    table.add_column("authorization URL", overflow="fold")

    for provider_id in REGISTRY.ids():
        spec = REGISTRY.spec(provider_id)
        defaults = DEFAULTS.get(provider_id)
        table.add_row(
            provider_id,
            spec.kind.value,
            defaults.scope if defaults else "",
            defaults.authorization_url if defaults else "",
        )
    console.print(table)


@app.command()
def check(
    config: Path = typer.Argument(DEFAULT_CONFIG, help="Path to providers YAML"),
) -> None:
    """Build every configured provider and report the result."""
    from auth_providers.config import ProvidersConfig

    try:
        collection = ProvidersConfig.from_yaml(config).build()
    except (ConfigurationError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if not len(collection):
        console.print("[dim]No providers configured.[/dim]")
        return

    table = Table(title=f"{len(collection)} provider(s)")
    table.add_column("id")
    table.add_column("name")
    table.add_column("type")
    for descriptor in collection:
        table.add_row(descriptor.id, descriptor.name, str(descriptor.type))
    console.print(table)
    console.print("[green]Configuration OK[/green]")


@app.command(name="export")
def export_cmd(
    config: Path = typer.Argument(DEFAULT_CONFIG, help="Path to providers YAML"),
    fmt: str = typer.Option("json", "--format", help="Export format: json or yaml"),
    output: Path = typer.Option(..., help="Output file path"),
    base_url: str | None = typer.Option(None, help="Overrides base_url from the config"),
) -> None:
    """Export the secret-free app-facing provider list."""
    from auth_providers.config import ProvidersConfig

    try:
        settings = ProvidersConfig.from_yaml(config)
        collection = settings.build()
    except (ConfigurationError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    url = base_url or settings.base_url
    if not url:
        console.print("[red]--base-url is required when the config has no base_url[/red]")
        raise typer.Exit(1)

    providers = collection.app_providers(url)
    if fmt == "yaml":
        from auth_providers.export.yaml import export_app_providers_yaml

        export_app_providers_yaml(providers, output)
    else:
        from auth_providers.export.json import export_app_providers_json

        export_app_providers_json(providers, output)

    console.print(f"[green]Exported {len(providers)} provider(s) to {output}[/green]")


if __name__ == "__main__":
    app()
