"""CLI for gql-introspect."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import config, parser, report, schema_loader, utils
from .errors import DecodeError
from .report import emit, print_kv

app = typer.Typer(help="Convert GraphQL introspection results into schema documents")
config_app = typer.Typer(help="Configuration operations")
app.add_typer(config_app, name="config")

console = Console()

FORMATS = ("sdl", "summary", "json")


def configure_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command("convert")
def convert_cmd(
    schema_file: Optional[str] = typer.Argument(None, help="Saved introspection response (JSON)"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    output: str = typer.Option("sdl", "--format", help="Output format (sdl|summary|json)"),
    out: Optional[str] = typer.Option(None, help="Write output to this file"),
    max_type_depth: Optional[int] = typer.Option(None, help="Maximum list/non-null nesting"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log ignored keys"),
):
    """Decode an introspection response and print it as SDL or a summary."""
    try:
        cfg = config.load()
        configure_logging("DEBUG" if verbose else cfg.log_level)

        if output not in FORMATS:
            console.print(f"[red]Error: Unknown format '{output}'. Use one of {', '.join(FORMATS)}.[/red]")
            raise typer.Exit(1)

        endpoint = url or cfg.default_url
        if not schema_file and not endpoint:
            console.print("[red]Error: No input provided. Pass a file, use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        profile = schema_loader.load_introspection(
            url=endpoint, schema_file=schema_file, cfg=cfg, allow_cache=True, token=token
        )
        result = parser.parse_with_diagnostics(profile.text, max_type_depth or cfg.max_type_depth)

        if out:
            if output == "summary":
                console.print("[red]Error: --out needs --format sdl or json.[/red]")
                raise typer.Exit(1)
            utils.write_text(out, report.render(result, output))
            print_kv("Schema written", {"source": profile.source, "hash": profile.hash, "path": out})
        else:
            emit(result, output)

    except typer.Exit:
        raise
    except DecodeError as e:
        console.print(f"[red]Decode error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if "--debug" in sys.argv:
            raise
        raise typer.Exit(1)


@app.command("validate")
def validate_cmd(
    query_file: str = typer.Argument(..., help="File containing a GraphQL operation"),
    schema_file: Optional[str] = typer.Argument(None, help="Saved introspection response (JSON)"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
):
    """Check a GraphQL operation against a decoded introspection schema."""
    try:
        cfg = config.load()
        configure_logging(cfg.log_level)

        endpoint = url or cfg.default_url
        if not schema_file and not endpoint:
            console.print("[red]Error: No input provided. Pass a file, use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        profile = schema_loader.load_introspection(
            url=endpoint, schema_file=schema_file, cfg=cfg, allow_cache=True, token=token
        )
        schema = parser.build_schema(parser.parse_introspection(profile.text, cfg.max_type_depth))
        query = parser.parse_query(utils.read_text(query_file))
        errors = parser.validate_query(query, schema)

        if errors:
            console.print(f"\n[bold red]{len(errors)} validation error(s):[/bold red]\n")
            for error in errors:
                console.print(f"  [red]✗[/red] {escape(error.message)}")
            console.print()
            raise typer.Exit(1)

        console.print("[green]✓ Query is valid[/green]")

    except typer.Exit:
        raise
    except DecodeError as e:
        console.print(f"[red]Decode error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command("pull")
def pull_cmd(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    profile_name: Optional[str] = typer.Option(None, "--profile", help="Named profile from config"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    out: Optional[str] = typer.Option(None, help="Output file path"),
):
    """Fetch and cache the raw introspection response from a server."""
    try:
        cfg = config.load()
        configure_logging(cfg.log_level)
        endpoint = url or (cfg.profile_url(profile_name) if profile_name else None) or cfg.default_url

        if not endpoint:
            console.print("[red]Error: No URL provided. Use --url, --profile or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching introspection from {endpoint}...[/cyan]")
        profile = schema_loader.load_introspection(url=endpoint, cfg=cfg, refresh=True, token=token)

        # Decode once so a broken response is reported now rather than at convert time.
        parser.parse_introspection(profile.text, cfg.max_type_depth)

        if out:
            utils.write_text(out, profile.text)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.source, cfg)

        print_kv("Introspection pulled", {**schema_loader.profile_metadata(profile), "path": path})
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@config_app.command("init")
def config_init(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example config file."""
    written = config.create_example_config(path)
    print_kv("Config created", {"path": written})


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
