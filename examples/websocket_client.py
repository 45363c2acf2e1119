#!/usr/bin/env python3
"""WebSocket client example for the MIDI bridge.

This script plays a C major scale through a running bridge.

Usage:
    1. Start the bridge: midibridge run --device "loopMIDI Port"
    2. Run this client: python examples/websocket_client.py

The client will:
    1. Connect to the bridge
    2. Send a note on / note off pair for each scale degree
    3. Send one malformed frame to show it is ignored
"""

from __future__ import annotations

import asyncio
import sys

from midibridge.protocol.messages import ControlMessage, MessageKind


C_MAJOR = [60, 62, 64, 65, 67, 69, 71, 72]


async def main(host: str = "127.0.0.1", port: int = 3001) -> int:
    """Connect to the bridge and play a scale."""
    import websockets

    uri = f"ws://{host}:{port}"
    print(f"Connecting to {uri}...")

    try:
        async with websockets.connect(uri) as ws:
            for note in C_MAJOR:
                print(f"Note {note}")
                await ws.send(ControlMessage(MessageKind.NOTE_ON, note, 100).to_json())
                await asyncio.sleep(0.25)
                await ws.send(ControlMessage(MessageKind.NOTE_OFF, note).to_json())

            # Logged by the bridge and dropped; the connection stays open
            await ws.send("not valid json")
            await ws.send(ControlMessage(MessageKind.NOTE_ON, 72, 0).to_json())

    except ConnectionRefusedError:
        print(f"Error: Could not connect to {uri}")
        print("Make sure the bridge is running with: midibridge run")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
