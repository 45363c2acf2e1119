"""midibridge - WebSocket to MIDI bridge.

Receives JSON control messages from browser or script clients over
WebSocket and plays them as note on / note off commands on a MIDI output
device.
"""

__version__ = "0.1.0"

# Configuration
from midibridge.core.config import BridgeConfig

# MIDI output
from midibridge.midi.port import DeviceUnavailable, OutputPort, open_output

# Protocol messages
from midibridge.protocol.messages import (
    CommandType,
    ControlMessage,
    DecodeError,
    MessageKind,
    NoteCommand,
)
from midibridge.protocol.translator import Emit, Ignored, translate

# Server
from midibridge.server.websocket import BridgeServer

__all__ = [
    # Version
    "__version__",
    # Configuration
    "BridgeConfig",
    # MIDI
    "OutputPort",
    "DeviceUnavailable",
    "open_output",
    # Protocol
    "MessageKind",
    "CommandType",
    "ControlMessage",
    "NoteCommand",
    "DecodeError",
    "Emit",
    "Ignored",
    "translate",
    # Server
    "BridgeServer",
]
