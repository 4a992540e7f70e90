import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .config import ConfigStore, load_store
from .http_api import serve as serve_http
from .models import ScanRequest
from .report.jsonout import render_json
from .report.text import render_text
from .scanning.engine import run_scan
from .scanning.validation import ScanValidationError
from .utils.time import fmt_duration


app = typer.Typer(help="Portprobe — bounded-concurrency port range scanner")
config_app = typer.Typer(help="Set or retrieve configuration values.")
app.add_typer(config_app, name="config")

DEFAULT_CONFIG_FILE = Path(typer.get_app_dir("portprobe")) / "config.yaml"


def _version_callback(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True, callback=_version_callback
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    config_file: Path = typer.Option(
        DEFAULT_CONFIG_FILE,
        "--config-file",
        envvar="PORTPROBE_CONFIG",
        help="YAML file backing the configuration store.",
    ),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config_file": config_file}


def _store(ctx: typer.Context) -> ConfigStore:
    path = (ctx.obj or {}).get("config_file", DEFAULT_CONFIG_FILE)
    try:
        return load_store(path)
    except (ValidationError, yaml.YAMLError) as e:
        typer.echo(f"Error: cannot load config store {path}: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def scan(
    network: str = typer.Argument(..., help="Network: tcp or udp (optionally suffixed with 4 or 6)."),
    host: str = typer.Argument(..., help="Target IP address or hostname."),
    start_port: int = typer.Argument(..., help="First port of the range."),
    end_port: int = typer.Argument(..., help="Last port of the range (inclusive)."),
    concurrency: int = typer.Argument(..., help="Number of concurrent workers."),
    throttle: bool = typer.Argument(..., help="Throttle probes with a randomized, error-sensitive delay (true/false)."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-probe connect timeout in seconds (default: system)."),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format (text/json).", show_default=True),
):
    """Scan a range of ports on a host."""
    output_format = (output_format or "").lower()
    if output_format not in {"text", "json"}:
        typer.echo("--format must be one of: text, json", err=True)
        raise typer.Exit(2)

    request = ScanRequest(
        network=network,
        host=host,
        start_port=start_port,
        end_port=end_port,
        concurrency=concurrency,
        throttle=throttle,
        timeout=timeout,
    )
    try:
        report = run_scan(request)
    except ScanValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output_format == "json":
        typer.echo(render_json(report))
        return

    if report.results:
        typer.echo(render_text(report))
    typer.echo(f"Scan completed in {fmt_duration(report.elapsed_seconds)}")


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key."),
    value: str = typer.Argument(..., help="Configuration value."),
):
    """Set a configuration value."""
    store = _store(ctx)
    store.set(key, value)
    typer.echo(f"Configuration set: {key} = {value}")


@config_app.command("get")
def config_get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Configuration key."),
):
    """Print a configuration value."""
    store = _store(ctx)
    typer.echo(f"{key}: {store.get(key)}")


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Address to bind."),
    port: int = typer.Option(8080, "--port", help="Port to listen on."),
):
    """Serve configuration lookups over HTTP (GET /config?key=<k>)."""
    store = _store(ctx)
    typer.echo(f"Serving config from {store.path} on http://{host}:{port}/config")
    serve_http(store, host=host, port=port)


def main():
    app()


if __name__ == "__main__":
    main()
