"""Translation of control messages into MIDI note commands.

The translator is a pure function: it has no access to the network or the
MIDI output, so the mapping can be tested on its own.

Mapping:
    ccNumber 144 → noteon  (velocity defaults to 127)
    ccNumber 128 → noteoff (velocity defaults to 0)
    anything else → ignored
"""

from __future__ import annotations

from dataclasses import dataclass

from midibridge.protocol.messages import (
    ControlMessage,
    MessageKind,
    NoteCommand,
    note_off,
    note_on,
)

NOTE_ON_DEFAULT_VELOCITY: int = 127
NOTE_OFF_DEFAULT_VELOCITY: int = 0


@dataclass(frozen=True)
class Emit:
    """Translation produced a command to send."""

    command: NoteCommand


@dataclass(frozen=True)
class Ignored:
    """Translation produced nothing.

    Attributes:
        reason: Human-readable explanation for the log
        cc_number: The message kind that was not handled
    """

    reason: str
    cc_number: int


TranslationResult = Emit | Ignored


def _velocity(value: int | None, default: int) -> int:
    # Explicit zero is a valid velocity; only a missing value takes the default
    return default if value is None else value


def translate(message: ControlMessage) -> TranslationResult:
    """Decide the outbound action for a control message.

    Args:
        message: Decoded control message

    Returns:
        Emit with the command to send, or Ignored with the reason
    """
    match message.cc_number:
        case MessageKind.NOTE_ON:
            return Emit(
                note_on(message.cc_value, _velocity(message.value, NOTE_ON_DEFAULT_VELOCITY))
            )
        case MessageKind.NOTE_OFF:
            return Emit(
                note_off(message.cc_value, _velocity(message.value, NOTE_OFF_DEFAULT_VELOCITY))
            )
        case _:
            return Ignored(
                reason=f"Unsupported MIDI message: {message.cc_number}",
                cc_number=message.cc_number,
            )
