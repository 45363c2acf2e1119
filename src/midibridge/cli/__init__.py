"""Command-line interface for the MIDI bridge."""

from midibridge.cli.main import cli, main

__all__ = ["cli", "main"]
