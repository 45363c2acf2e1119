"""MIDI device access for the bridge."""

from midibridge.midi.port import (
    DeviceUnavailable,
    MidoOutputPort,
    OutputPort,
    list_input_names,
    list_output_names,
    open_output,
    to_mido,
)

__all__ = [
    "DeviceUnavailable",
    "OutputPort",
    "MidoOutputPort",
    "open_output",
    "list_output_names",
    "list_input_names",
    "to_mido",
]
