"""Command-line interface for the MIDI bridge.

Provides commands for running the bridge and inspecting MIDI devices.
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import click
import structlog

from midibridge import __version__
from midibridge.core.config import BridgeConfig
from midibridge.midi.port import (
    DeviceUnavailable,
    list_input_names,
    list_output_names,
    open_output,
)
from midibridge.server import BridgeServer, ServerConfig

log = structlog.get_logger()


def _configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure structlog with appropriate log level filtering."""
    import logging

    if quiet:
        min_level = logging.WARNING
    elif verbose:
        min_level = logging.DEBUG
    else:
        min_level = logging.INFO

    def _filter_by_level(
        _logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        if getattr(logging, method_name.upper(), 0) < min_level:
            raise structlog.DropEvent
        return event_dict

    structlog.configure(
        processors=[
            _filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=True),
        ],
    )


def _load_config(
    config_path: Path | None,
    *,
    device: str | None = None,
    host: str | None = None,
    port: int | None = None,
) -> BridgeConfig:
    """Load the YAML file (if any) and apply command-line overrides."""
    config = BridgeConfig.from_yaml(config_path) if config_path is not None else BridgeConfig()
    return config.with_overrides(device=device, host=host, port=port)


def _log_devices() -> None:
    """Log the available MIDI ports for troubleshooting."""
    try:
        log.info("Available MIDI inputs", inputs=list_input_names())
        log.info("Available MIDI outputs", outputs=list_output_names())
    except Exception as e:
        # Advisory only; opening the output reports the real failure
        log.warning("Could not enumerate MIDI ports", error=str(e))


async def _serve(server: BridgeServer) -> None:
    """Run the server until SIGINT or SIGTERM."""
    # Must be inside async context to get the running loop
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(signum: int, _frame: object) -> None:
        log.info("Received signal, shutting down server", signal=signum)
        loop.call_soon_threadsafe(shutdown_event.set)

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        await server.start_background()
        log.info("WebSocket server listening", port=server.bound_port)
        await shutdown_event.wait()
    finally:
        await server.stop()


@click.group()
@click.version_option(version=__version__, prog_name="midibridge")
def cli() -> None:
    """midibridge - WebSocket to MIDI bridge.

    Plays note on / note off messages received over WebSocket on a MIDI output.
    """


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--device",
    "-d",
    envvar="MIDIBRIDGE_DEVICE",
    default=None,
    help="MIDI output device name (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Address to bind (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    envvar="PORT",
    default=None,
    help="WebSocket server port (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only show warnings and errors",
)
def run(
    config_path: Path | None,
    device: str | None,
    host: str | None,
    port: int | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Run the bridge until interrupted."""
    _configure_logging(verbose=verbose, quiet=quiet)

    try:
        config = _load_config(config_path, device=device, host=host, port=port)
    except Exception as e:
        log.error("Failed to load configuration", error=str(e))
        raise SystemExit(1) from e

    _log_devices()

    try:
        midi_out = open_output(config.midi.device)
    except DeviceUnavailable as e:
        log.error(
            "Failed to initialize MIDI output device",
            device=e.device,
            error=str(e),
            available=e.available,
        )
        log.error("Ensure the MIDI driver is running and the device is active", device=e.device)
        raise SystemExit(1) from e

    server = BridgeServer(
        midi_out,
        ServerConfig(host=config.server.host, port=config.server.port),
    )

    try:
        asyncio.run(_serve(server))
    except KeyboardInterrupt:
        log.info("Interrupted by user")
    except Exception as e:
        log.error("Bridge failed", error=str(e))
        if verbose:
            import traceback

            traceback.print_exc()
        raise SystemExit(1) from e
    finally:
        midi_out.close()

    log.info("Server closed.")


@cli.command("list-devices")
def list_devices() -> None:
    """List the MIDI input and output ports."""
    try:
        inputs = list_input_names()
        outputs = list_output_names()
    except Exception as e:
        log.error("Failed to query MIDI backend", error=str(e))
        raise SystemExit(1) from e

    click.echo("MIDI inputs:")
    for name in inputs:
        click.echo(f"  {name}")
    click.echo("MIDI outputs:")
    for name in outputs:
        click.echo(f"  {name}")


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, path_type=Path))
def validate(config_path: Path) -> None:
    """Validate configuration file.

    CONFIG_PATH: Path to YAML configuration file

    Exits with code 0 if valid, 1 if invalid.
    """
    try:
        config = BridgeConfig.from_yaml(config_path)
    except Exception as e:
        log.error("Configuration invalid", error=str(e))
        raise SystemExit(1) from e

    log.info("Configuration valid")
    click.echo(f"  Device: {config.midi.device}")
    click.echo(f"  Listen: {config.server.host}:{config.server.port}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
