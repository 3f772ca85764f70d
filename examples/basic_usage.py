#!/usr/bin/env python3
"""Basic usage example for transit.

This example demonstrates:
1. Defining a payload with Pydantic
2. Binding two transports on loopback
3. Sending and receiving typed values
4. Comparing encoded sizes across codecs
5. Handling a datagram of the wrong type
"""

from __future__ import annotations

from pydantic import Field

from transit import DeserializeError, Transport, TransitModel, encoded_size


class StatusReport(TransitModel):
    """Vehicle status report."""

    vehicle_id: int = Field(ge=0, le=255, description="Vehicle ID (0-255)")
    depth_cm: int = Field(ge=0, le=10000, description="Depth in centimeters (0-100m)")
    battery_pct: int = Field(ge=0, le=100, description="Battery percentage (0-100)")
    active: bool = Field(description="Vehicle active flag")


class Command(TransitModel):
    """A payload with a different shape."""

    target_depth_cm: int


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("transit Basic Usage Example")
    print("=" * 60)
    print()

    msg = StatusReport(vehicle_id=42, depth_cm=2500, battery_pct=87, active=True)

    print("1. Encoded sizes...")
    for codec in ("msgpack", "json"):
        print(f"   {codec}: {encoded_size(msg, codec)} bytes")
    print()

    print("2. Sending a status report over loopback...")
    with Transport("127.0.0.1:0", StatusReport, codec="msgpack") as rx, Transport(
        "127.0.0.1:0", StatusReport, codec="msgpack"
    ) as tx:
        rx.socket.settimeout(2.0)
        tx.send_to(msg, rx.local_addr())
        received, sender = rx.recv_from()
        print(f"   From {sender}: {received}")
        print(f"   Round-trip {'successful' if received == msg else 'FAILED'}")
        print()

        print("3. Sending a Command to the StatusReport receiver...")
        with Transport("127.0.0.1:0", Command, codec="msgpack") as other:
            other.send_to(Command(target_depth_cm=100), rx.local_addr())
            try:
                rx.recv_from()
            except DeserializeError as err:
                print(f"   Rejected: {err.kind}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
