"""Core configuration for the MIDI bridge."""

from midibridge.core.config import (
    DEFAULT_DEVICE,
    DEFAULT_PORT,
    BridgeConfig,
    MidiConfig,
    ServerConfig,
)

__all__ = [
    "BridgeConfig",
    "MidiConfig",
    "ServerConfig",
    "DEFAULT_DEVICE",
    "DEFAULT_PORT",
]
