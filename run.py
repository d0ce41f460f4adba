#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the intake forms service. All functionality is
accessible through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action delivery --hostname forms.example.com
    python run.py --action test --test-type unit
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from intake.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "delivery", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--hostname",
    default="localhost",
    help="Hostname whose delivery credentials to resolve (for delivery action).",
)
@click.option(
    "--base-url",
    default=None,
    help="Origin serving the delivery config when its source is http (for delivery action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    hostname: str,
    base_url: str | None,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Intake Forms Service Entry Point.

    Run the server, view configuration, check delivery credentials,
    or run tests.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config

        # Check which Telegram destination a hostname resolves to
        python run.py --action delivery --hostname forms.example.com

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "delivery":
        check_delivery(logger, hostname, base_url)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from intake.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "intake.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _echo_section(values: dict, indent: int = 2) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_section(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from intake.backend.core.config import get_app_config

        app_config = get_app_config()

        sections = [
            ("Application Settings", app_config.application),
            ("Logging Settings", app_config.logging),
            ("Feature Flags", app_config.features),
            ("Form Pages", app_config.forms),
            ("Delivery", app_config.delivery),
        ]
        for title, schema in sections:
            click.echo(f"{title} (from YAML):")
            click.echo("-" * 40)
            _echo_section(schema.model_dump())
            click.echo()

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def check_delivery(logger, hostname: str, base_url: str | None) -> None:
    """Resolve delivery credentials for a hostname without sending anything."""
    from intake.backend.core.config import get_app_config, get_server_base_url
    from intake.backend.services.delivery import build_config_source, resolve_delivery_config

    origin = base_url or get_server_base_url()[0]
    source = build_config_source(origin)
    default_key = get_app_config().delivery.default_key

    click.echo(f"Source: {source!r}")
    click.echo(f"Hostname: {hostname}")

    config = asyncio.run(resolve_delivery_config(source, hostname, default_key))

    token_state = "set" if config.bot_token else "missing"
    click.echo(f"Bot token: {token_state}")
    click.echo(f"Chat ID: {config.chat_id or 'missing'}")

    if config.is_complete:
        click.echo(click.style("\nDelivery configuration is complete.", fg="green"))
        logger.info("Delivery configuration complete", extra={"hostname": hostname})
    else:
        click.echo(click.style("\nDelivery configuration is incomplete.", fg="yellow"))
        logger.warning("Delivery configuration incomplete", extra={"hostname": hostname})
        sys.exit(1)


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=intake", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Intake Forms Service")
    click.echo("=" * 40)

    try:
        from intake.backend.core.config import get_app_config
        app_config = get_app_config()
        click.echo(f"Name: {app_config.application.name}")
        click.echo(f"Version: {app_config.application.version}")
        click.echo(f"Description: {app_config.application.description}")
    except Exception:
        click.echo("Name: Intake Forms Service")
        click.echo("Version: 0.1.0")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server     Start the development server")
    click.echo("  --action config     Display configuration")
    click.echo("  --action delivery   Resolve delivery credentials for --hostname")
    click.echo("  --action test       Run test suite")
    click.echo("  --action info       Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v       Enable INFO level logging")
    click.echo("  --debug, -d         Enable DEBUG level logging")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action server --reload --verbose")
    click.echo("  python run.py --action delivery --hostname forms.example.com")
    click.echo("  python run.py --action test --test-type unit --coverage")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
