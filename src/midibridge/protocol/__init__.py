"""Protocol definitions for the MIDI bridge.

This package defines the inbound control message format, the outbound
MIDI note commands, and the pure translation between them.
"""

from midibridge.protocol.messages import (
    CommandType,
    ControlMessage,
    DecodeError,
    MessageKind,
    NoteCommand,
    note_off,
    note_on,
)
from midibridge.protocol.translator import Emit, Ignored, TranslationResult, translate

__all__ = [
    # Messages
    "MessageKind",
    "CommandType",
    "ControlMessage",
    "NoteCommand",
    "DecodeError",
    "note_on",
    "note_off",
    # Translation
    "Emit",
    "Ignored",
    "TranslationResult",
    "translate",
]
