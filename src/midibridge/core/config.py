"""Configuration schema and loading for the MIDI bridge.

This module defines the Pydantic models for the optional YAML
configuration file. Every field has a default, so the bridge runs
without a file; CLI options and environment variables override it.

Example YAML::

    midi:
      device: loopMIDI Port
    server:
      host: 0.0.0.0
      port: 3001
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_DEVICE: str = "loopMIDI Port"
DEFAULT_PORT: int = 3001


class MidiConfig(BaseModel):
    """MIDI output settings."""

    device: str = DEFAULT_DEVICE
    """Exact name of the MIDI output to open."""

    @field_validator("device")
    @classmethod
    def _validate_device(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("device name must not be empty")
        return v


class ServerConfig(BaseModel):
    """WebSocket server settings."""

    host: str = "0.0.0.0"
    """Server bind address."""

    port: int = DEFAULT_PORT
    """Server port (0 picks a free port)."""

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 <= v <= 65535:
            raise ValueError(f"port must be between 0 and 65535, got {v}")
        return v


class BridgeConfig(BaseModel):
    """Root bridge configuration."""

    midi: MidiConfig = Field(default_factory=MidiConfig)
    """MIDI output settings."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    """WebSocket server settings."""

    @classmethod
    def from_yaml(cls, path: Path | str) -> BridgeConfig:
        """Load configuration from YAML file.

        An empty file yields the defaults.

        Args:
            path: Path to YAML configuration file

        Returns:
            Parsed configuration

        Raises:
            FileNotFoundError: If file doesn't exist
            pydantic.ValidationError: If configuration invalid
        """
        import yaml

        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f)

        return cls.model_validate(data or {})

    def with_overrides(
        self,
        *,
        device: str | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> BridgeConfig:
        """Return a copy with the given non-None values applied.

        Raises:
            pydantic.ValidationError: If an override is invalid
        """
        data = self.model_dump()
        if device is not None:
            data["midi"]["device"] = device
        if host is not None:
            data["server"]["host"] = host
        if port is not None:
            data["server"]["port"] = port
        return BridgeConfig.model_validate(data)
