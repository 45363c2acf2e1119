"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from midibridge.protocol.messages import NoteCommand


class FakeOutputPort:
    """In-memory output port for testing."""

    def __init__(self, name: str = "Test Port") -> None:
        self._name = name
        self.sent: list[NoteCommand] = []
        self.closed = False

    @property
    def name(self) -> str:
        return self._name

    def send(self, command: NoteCommand) -> None:
        # Mirror the MIDI data byte range check of the real backend
        for attr in ("note", "velocity"):
            if not 0 <= getattr(command, attr) <= 127:
                raise ValueError(f"{attr} must be in range 0..127")
        self.sent.append(command)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_port() -> FakeOutputPort:
    """Create an empty fake output port."""
    return FakeOutputPort()
