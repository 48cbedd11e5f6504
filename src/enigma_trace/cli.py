import logging
import sys
from typing import Optional

import click
import requests
import structlog
from rich.console import Console

from enigma_trace.alphabet import filter_message
from enigma_trace.config import MachineConfiguration, load_configuration
from enigma_trace.errors import ConfigurationError
from enigma_trace.machine import EnigmaMachine
from enigma_trace.ui import group_letters, render_all, render_catalog, ui_loop

DEFAULT_ENDPOINT = "http://127.0.0.1:8000/api/process"


def _stderr_logger(*args) -> structlog.PrintLogger:
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Send structlog output to stderr so command output stays clean."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
    )


def _three_letters(value: str, option: str) -> list[str]:
    letters = list(filter_message(value))
    if len(letters) != 3:
        raise ConfigurationError(f"{option} needs exactly three letters, got {value!r}")
    return letters


def build_configuration(
    config_path: Optional[str] = None,
    rotors: Optional[str] = None,
    positions: Optional[str] = None,
    rings: Optional[str] = None,
    reflector: Optional[str] = None,
    plugboard: Optional[str] = None,
) -> MachineConfiguration:
    """ Start from a config file (or the default setup) and apply command line overrides.

    Rotors, positions and rings are given left to right, as read off the machine.
    """
    base = load_configuration(config_path) if config_path else MachineConfiguration.default()
    data = base.model_dump(mode="json")
    slots = list(reversed(data["rotors"]))  # left, middle, right

    if rotors:
        names = rotors.replace(",", " ").split()
        if len(names) != 3:
            raise ConfigurationError(f"--rotors needs exactly three rotor names, got {rotors!r}")
        for slot, name in zip(slots, names):
            slot["type"] = name
    if positions:
        for slot, letter in zip(slots, _three_letters(positions, "--positions")):
            slot["position"] = letter
    if rings:
        for slot, letter in zip(slots, _three_letters(rings, "--rings")):
            slot["ring"] = letter
    if reflector:
        data["reflector"] = reflector
    if plugboard is not None:
        data["plugboard_pairs"] = plugboard

    return MachineConfiguration.parse(data)


def machine_options(fn):
    options = [
        click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
                     help="JSON machine configuration"),
        click.option("--rotors", "-r", help="Three rotor names, left to right (e.g. 'I II III')"),
        click.option("--positions", "-p", help="Starting window letters, left to right (e.g. AAA)"),
        click.option("--rings", help="Ring settings, left to right (e.g. AAA)"),
        click.option("--reflector", help="Reflector name (B or C)"),
        click.option("--plugboard", help="Plugboard pairs (e.g. 'AV BS CG')"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def machine_from_options(**kwargs) -> EnigmaMachine:
    try:
        return EnigmaMachine(build_configuration(**kwargs))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log stepping and signal path details to stderr")
def cli(verbose: bool):
    configure_logging(verbose)


@cli.command()
@click.argument("text")
@machine_options
@click.option("--group", "-g", "group_size", default=0, show_default=True,
              help="Write the output in groups of N letters (0 for none)")
def encrypt(text: str, group_size: int, **machine_kwargs):
    """Encipher or decipher TEXT. Non-letters are dropped."""
    machine = machine_from_options(**machine_kwargs)
    click.echo(group_letters(machine.process_string(text), group_size))


@cli.command()
@click.argument("text")
@machine_options
@click.option("--animate", is_flag=True, help="Replay the letters one at a time")
@click.option("--delay", default=0.5, show_default=True, help="Seconds per letter when animating")
def trace(text: str, animate: bool, delay: float, **machine_kwargs):
    """Show the full signal path of every letter in TEXT."""
    machine = machine_from_options(**machine_kwargs)
    outcomes = machine.process_string_detailed(text)

    if animate:
        ui_loop(outcomes, delay=delay)
    else:
        Console().print(render_all(outcomes))
    click.echo("".join(outcome.output_letter for outcome in outcomes))


@cli.command()
def catalog():
    """List the available rotors and reflectors."""
    Console().print(render_catalog())


@cli.command()
@click.argument("text")
@machine_options
@click.option("--endpoint", "-e", default=DEFAULT_ENDPOINT, show_default=True)
def remote(text: str, endpoint: str, **machine_kwargs):
    """Process TEXT on a running API server."""
    try:
        config = build_configuration(**machine_kwargs)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    payload = {"config": config.model_dump(mode="json"), "text": text}
    try:
        response = requests.post(endpoint, json=payload, timeout=10)
    except requests.RequestException as e:
        raise click.ClickException(f"Request to {endpoint} failed: {e}") from e
    if response.status_code != 200:
        raise click.ClickException(f"Failed to post {endpoint}: {response.status_code} {response.text}")
    click.echo(response.json()["output"])


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind the server to")
@click.option("--port", default=8000, help="Port to bind the server to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str, port: int, reload: bool):
    """Start the HTTP API."""
    try:
        import uvicorn
        from enigma_api.api import app
    except ImportError as e:
        click.echo(f"Error: API dependencies not available: {e}")
        click.echo("Install with: pip install 'enigma-trace[api]'")
        raise click.Abort()

    click.echo(f"Starting API server on http://{host}:{port}")
    click.echo("Available endpoints:")
    click.echo("  - POST /api/process          - Process text, return the result")
    click.echo("  - POST /api/process-detailed - Process text, return every signal path")
    click.echo("  - GET  /api/catalog          - List rotors and reflectors")

    if reload:
        uvicorn.run("enigma_api.api:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    cli()
