"""MIDI output port access.

Wraps mido so the rest of the bridge only deals with NoteCommand objects
and a small OutputPort protocol. Tests substitute their own OutputPort.

Example:
    port = open_output("loopMIDI Port")
    port.send(note_on(60, 100))
    port.close()
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import mido
import structlog

from midibridge.protocol.messages import CommandType, NoteCommand

log = structlog.get_logger()

# NoteCommand type -> mido message type
_MIDO_TYPES: dict[CommandType, str] = {
    CommandType.NOTE_ON: "note_on",
    CommandType.NOTE_OFF: "note_off",
}


class DeviceUnavailable(RuntimeError):
    """Raised when the named MIDI output cannot be opened.

    Attributes:
        device: Requested device name
        available: Output names the backend reported at the time
    """

    def __init__(self, device: str, available: list[str], cause: str = "") -> None:
        self.device = device
        self.available = available
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to open MIDI output '{device}'{detail}")


@runtime_checkable
class OutputPort(Protocol):
    """Subset of an output port used by the bridge."""

    @property
    def name(self) -> str:
        """Device name the port is bound to."""
        ...

    def send(self, command: NoteCommand) -> None:
        """Send a note command to the device."""
        ...

    def close(self) -> None:
        """Release the device."""
        ...


def to_mido(command: NoteCommand) -> mido.Message:
    """Convert a note command to a mido message.

    Raises:
        ValueError: If note, velocity or channel are outside the MIDI range
    """
    return mido.Message(
        _MIDO_TYPES[command.type],
        note=command.note,
        velocity=command.velocity,
        channel=command.channel,
    )


class MidoOutputPort:
    """OutputPort backed by a mido output port."""

    def __init__(self, port: mido.ports.BaseOutput, name: str) -> None:
        self._port = port
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return bool(self._port.closed)

    def send(self, command: NoteCommand) -> None:
        self._port.send(to_mido(command))

    def close(self) -> None:
        if not self._port.closed:
            self._port.close()
            log.info("MIDI output closed", device=self._name)


def list_output_names() -> list[str]:
    """Names of the MIDI outputs known to the backend."""
    return list(mido.get_output_names())


def list_input_names() -> list[str]:
    """Names of the MIDI inputs known to the backend."""
    return list(mido.get_input_names())


def open_output(device: str) -> MidoOutputPort:
    """Open the named MIDI output.

    Args:
        device: Exact port name as reported by list_output_names()

    Returns:
        Open output port

    Raises:
        DeviceUnavailable: If the backend cannot open the port
    """
    try:
        port = mido.open_output(device)
    except OSError as e:
        raise DeviceUnavailable(device, list_output_names(), str(e)) from e

    log.info("Using MIDI output device", device=device)
    return MidoOutputPort(port, device)
