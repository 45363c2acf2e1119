"""Wire message formats for the MIDI bridge.

This module defines the JSON message accepted from WebSocket clients and
the MIDI note command produced from it.

Message Types:
    Client → Server:
        - control: {"ccNumber": int, "ccValue": int, "value": int (optional)}

    Server → MIDI output:
        - noteon / noteoff: note, velocity, channel
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

# All commands go out on the first MIDI channel (0-based)
DEFAULT_CHANNEL: int = 0


class DecodeError(ValueError):
    """Raised when an inbound frame is not a valid control message."""


class MessageKind(IntEnum):
    """Recognised values of the ``ccNumber`` field."""

    NOTE_ON = 144  # 0x90
    NOTE_OFF = 128  # 0x80


class CommandType(str, Enum):
    """Outbound MIDI command types."""

    NOTE_ON = "noteon"
    NOTE_OFF = "noteoff"


def _require_int(parsed: dict[str, Any], key: str) -> int:
    if key not in parsed:
        raise DecodeError(f"Message missing '{key}' field")
    value = parsed[key]
    # bool is an int subclass but never a valid MIDI number
    if not isinstance(value, int) or isinstance(value, bool):
        raise DecodeError(f"'{key}' must be an integer")
    return value


@dataclass(frozen=True)
class ControlMessage:
    """Control message received from a client.

    Attributes:
        cc_number: Message kind discriminator (144 = note on, 128 = note off)
        cc_value: Note number
        value: Velocity, or None when the client omitted it
    """

    cc_number: int
    cc_value: int
    value: int | None = None

    @classmethod
    def from_dict(cls, parsed: Any) -> ControlMessage:
        """Build a message from an already-decoded JSON value.

        Unknown keys are ignored. A ``null`` value is treated as absent.

        Raises:
            DecodeError: If required fields are missing or not integers
        """
        if not isinstance(parsed, dict):
            raise DecodeError("Message must be a JSON object")

        cc_number = _require_int(parsed, "ccNumber")
        cc_value = _require_int(parsed, "ccValue")

        value = parsed.get("value")
        if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
            raise DecodeError("'value' must be an integer")

        return cls(cc_number=cc_number, cc_value=cc_value, value=value)

    @classmethod
    def from_json(cls, data: str | bytes) -> ControlMessage:
        """Parse a control message from a WebSocket frame.

        Args:
            data: Text frame, or binary frame holding UTF-8 JSON

        Returns:
            Parsed message

        Raises:
            DecodeError: If the frame is not valid JSON or not a valid message
        """
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            parsed = json.loads(data)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON: {e}") from e
        except (ValueError, RecursionError) as e:
            # Oversized integer literals or nesting deeper than the interpreter allows
            raise DecodeError(f"Invalid JSON: {e}") from e

        return cls.from_dict(parsed)

    def to_json(self) -> str:
        """Serialize to the wire format."""
        data: dict[str, int] = {"ccNumber": int(self.cc_number), "ccValue": self.cc_value}
        if self.value is not None:
            data["value"] = self.value
        return json.dumps(data)


@dataclass(frozen=True)
class NoteCommand:
    """MIDI note command destined for the output port.

    Attributes:
        type: noteon or noteoff
        note: Note number, passed through unchanged from the client
        velocity: Note velocity
        channel: MIDI channel (always 0)
    """

    type: CommandType
    note: int
    velocity: int
    channel: int = DEFAULT_CHANNEL

    def describe(self) -> dict[str, Any]:
        """Key-value form used for logging."""
        return {
            "command": self.type.value,
            "note": self.note,
            "velocity": self.velocity,
            "channel": self.channel,
        }


def note_on(note: int, velocity: int) -> NoteCommand:
    """Create a note-on command on the default channel."""
    return NoteCommand(type=CommandType.NOTE_ON, note=note, velocity=velocity)


def note_off(note: int, velocity: int) -> NoteCommand:
    """Create a note-off command on the default channel."""
    return NoteCommand(type=CommandType.NOTE_OFF, note=note, velocity=velocity)
