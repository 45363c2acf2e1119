"""Tests for MIDI output port access."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import mido
import pytest

from midibridge.midi.port import (
    DeviceUnavailable,
    MidoOutputPort,
    OutputPort,
    list_input_names,
    list_output_names,
    open_output,
    to_mido,
)
from midibridge.protocol.messages import note_off, note_on


class TestToMido:
    """Tests for NoteCommand -> mido.Message conversion."""

    def test_note_on(self) -> None:
        """Should build a note_on message."""
        msg = to_mido(note_on(60, 100))

        assert msg.type == "note_on"
        assert msg.note == 60
        assert msg.velocity == 100
        assert msg.channel == 0

    def test_note_off(self) -> None:
        """Should build a note_off message."""
        msg = to_mido(note_off(60, 0))

        assert msg.type == "note_off"
        assert msg.velocity == 0

    def test_zero_velocity_note_on_stays_note_on(self) -> None:
        """A zero-velocity note on is not rewritten as note off."""
        assert to_mido(note_on(60, 0)).type == "note_on"

    def test_out_of_range_rejected(self) -> None:
        """mido should reject data bytes above 127."""
        with pytest.raises(ValueError):
            to_mido(note_on(200, 100))


class TestMidoOutputPort:
    """Tests for the mido-backed output port."""

    def test_satisfies_protocol(self) -> None:
        """Should implement OutputPort."""
        port = MidoOutputPort(MagicMock(), "Synth")
        assert isinstance(port, OutputPort)
        assert port.name == "Synth"

    def test_send_converts_command(self) -> None:
        """Should send the equivalent mido message."""
        backend = MagicMock()
        port = MidoOutputPort(backend, "Synth")

        port.send(note_on(64, 90))

        backend.send.assert_called_once_with(
            mido.Message("note_on", note=64, velocity=90, channel=0)
        )

    def test_close_once(self) -> None:
        """Closing twice should close the backend port once."""
        backend = MagicMock()
        backend.closed = False

        def _close() -> None:
            backend.closed = True

        backend.close.side_effect = _close
        port = MidoOutputPort(backend, "Synth")

        port.close()
        port.close()

        backend.close.assert_called_once()
        assert port.closed


class TestOpenOutput:
    """Tests for open_output."""

    def test_open_success(self) -> None:
        """Should wrap the opened mido port."""
        backend = MagicMock()
        with patch("midibridge.midi.port.mido.open_output", return_value=backend) as opener:
            port = open_output("loopMIDI Port")

        opener.assert_called_once_with("loopMIDI Port")
        assert port.name == "loopMIDI Port"

    def test_open_failure_raises_device_unavailable(self) -> None:
        """Backend errors should become DeviceUnavailable."""
        with (
            patch(
                "midibridge.midi.port.mido.open_output",
                side_effect=OSError("unknown port 'Missing'"),
            ),
            patch("midibridge.midi.port.mido.get_output_names", return_value=["Synth A"]),
        ):
            with pytest.raises(DeviceUnavailable) as excinfo:
                open_output("Missing")

        assert excinfo.value.device == "Missing"
        assert excinfo.value.available == ["Synth A"]
        assert "Missing" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, OSError)


class TestListNames:
    """Tests for port enumeration."""

    def test_list_outputs(self) -> None:
        """Should return output names as a list."""
        with patch("midibridge.midi.port.mido.get_output_names", return_value=("A", "B")):
            assert list_output_names() == ["A", "B"]

    def test_list_inputs(self) -> None:
        """Should return input names as a list."""
        with patch("midibridge.midi.port.mido.get_input_names", return_value=["Keys"]):
            assert list_input_names() == ["Keys"]
