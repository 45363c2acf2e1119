"""WebSocket server that forwards client control messages to MIDI.

This module provides the BridgeServer class. Each connected client sends
JSON control messages; every frame is decoded, translated and sent to the
shared MIDI output independently of every other frame and client.

Architecture:
    ┌─────────────────────────────────────────┐
    │              BridgeServer               │
    ├─────────────────────────────────────────┤
    │  ┌─────────────┐    ┌────────────────┐  │
    │  │   Clients   │───▶│   translate()  │  │
    │  │   (dict)    │    │                │  │
    │  └─────────────┘    └────────────────┘  │
    │                             │           │
    │                             ▼           │
    │  ┌─────────────────────────────────────┐│
    │  │        OutputPort (MIDI)            ││
    │  └─────────────────────────────────────┘│
    └─────────────────────────────────────────┘

Nothing is ever sent back to the client; outcomes are only logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog
import websockets
from websockets.asyncio.server import Server, ServerConnection, serve

from midibridge.protocol.messages import ControlMessage, DecodeError, NoteCommand
from midibridge.protocol.translator import Emit, Ignored, TranslationResult, translate

if TYPE_CHECKING:
    from midibridge.midi.port import OutputPort


log = structlog.get_logger()


@dataclass
class ServerConfig:
    """Configuration for BridgeServer.

    Attributes:
        host: Host to bind to
        port: Port to listen on
    """

    host: str = "0.0.0.0"
    port: int = 3001


class ConnectionState(str, Enum):
    """Lifecycle of a client connection."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass
class ClientState:
    """Per-client state tracking.

    Attributes:
        ws: WebSocket connection
        remote: Remote address for logging
        state: Connection lifecycle state
        frames: Frames received on this connection
        sent: Commands forwarded to the MIDI output
    """

    ws: ServerConnection
    remote: str = ""
    state: ConnectionState = ConnectionState.OPEN
    frames: int = 0
    sent: int = 0


class BridgeServer:
    """WebSocket server for the MIDI bridge.

    Handles client connections and forwards each valid control message to
    the injected output port.

    Example:
        server = BridgeServer(open_output("loopMIDI Port"))
        await server.start_background()
        ...
        await server.stop()
    """

    def __init__(
        self,
        port: OutputPort | None,
        config: ServerConfig | None = None,
    ) -> None:
        """Initialize the bridge server.

        Args:
            port: MIDI output to send commands to, or None to drop them
            config: Server configuration
        """
        self._port = port
        self._config = config or ServerConfig()

        self._clients: dict[ServerConnection, ClientState] = {}
        self._server: Server | None = None
        self._running = False

    @property
    def client_count(self) -> int:
        """Number of connected clients."""
        return len(self._clients)

    @property
    def is_running(self) -> bool:
        """Whether the server is currently running."""
        return self._running

    @property
    def bound_port(self) -> int | None:
        """TCP port actually bound, or None if not listening."""
        if self._server is None:
            return None
        return int(self._server.sockets[0].getsockname()[1])

    async def start_background(self) -> None:
        """Start the server without blocking.

        Returns immediately; use stop() to shut down.
        """
        self._running = True

        self._server = await serve(
            self._handle_client,
            self._config.host,
            self._config.port,
        )
        log.info(
            "Server started",
            host=self._config.host,
            port=self.bound_port,
        )

    async def stop(self) -> None:
        """Stop accepting connections and close existing ones."""
        log.info("Stopping server")
        self._running = False

        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    async def _handle_client(self, ws: ServerConnection) -> None:
        """Handle a new client connection."""
        remote = str(ws.remote_address) if ws.remote_address else "unknown"
        client = ClientState(ws=ws, remote=remote)
        self._clients[ws] = client

        log.info("WebSocket client connected", remote=remote, clients=len(self._clients))

        try:
            async for message in ws:
                self.handle_frame(client, message)

        except websockets.exceptions.ConnectionClosed as e:
            log.info("Client connection closed", remote=remote, code=e.code)
        except Exception as e:
            log.error("Client handler error", remote=remote, error=str(e))
        finally:
            client.state = ConnectionState.CLOSED
            del self._clients[ws]
            log.info(
                "WebSocket client disconnected",
                remote=remote,
                frames=client.frames,
                sent=client.sent,
                clients=len(self._clients),
            )

    def handle_frame(self, client: ClientState, message: str | bytes) -> TranslationResult | None:
        """Decode, translate and dispatch one inbound frame.

        Failures are confined to this frame; the connection stays open.

        Returns:
            The translation result, or None if the frame could not be decoded
        """
        client.frames += 1
        log.debug("Raw message received", remote=client.remote, message=message)

        try:
            msg = ControlMessage.from_json(message)
        except DecodeError as e:
            log.warning("Error parsing message", remote=client.remote, error=str(e))
            return None

        log.debug(
            "Parsed data",
            remote=client.remote,
            cc_number=msg.cc_number,
            cc_value=msg.cc_value,
            value=msg.value,
        )

        result = translate(msg)
        match result:
            case Emit(command=command):
                if self._send(command):
                    client.sent += 1
            case Ignored(reason=reason, cc_number=cc_number):
                log.info(reason, remote=client.remote, cc_number=cc_number)

        return result

    def _send(self, command: NoteCommand) -> bool:
        """Send a command to the output port.

        Returns:
            True if the command reached the port
        """
        if self._port is None:
            log.warning("No MIDI output available", **command.describe())
            return False

        try:
            self._port.send(command)
        except ValueError as e:
            # mido rejects data bytes outside 0..127
            log.warning("MIDI backend rejected command", error=str(e), **command.describe())
            return False

        log.info("Sent MIDI command", device=self._port.name, **command.describe())
        return True
