"""WebSocket server for the MIDI bridge.

This module provides the WebSocket server that:
- Accepts any number of independent client connections
- Decodes JSON control messages from each client
- Forwards note on / note off commands to the MIDI output
"""

from midibridge.server.websocket import (
    BridgeServer,
    ClientState,
    ConnectionState,
    ServerConfig,
)

__all__ = [
    "BridgeServer",
    "ClientState",
    "ConnectionState",
    "ServerConfig",
]
