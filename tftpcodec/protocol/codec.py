"""Datagram encoding and decoding for TFTP.

This module is the boundary between raw datagram payloads and typed
packets. Decoding reads the opcode once, hands the buffer to the matching
packet class and returns the :data:`Packet` union; callers narrow the result
with ``match``::

    match decode(datagram):
        case DataPacket(block_number, payload):
            ...
        case ErrorPacket(error_code, error_message):
            ...

Every malformed buffer is rejected with :class:`IllegalOperation`, which can
be reported back to the peer via :func:`tftpcodec.protocol.encoding.error_to_packet`.
"""

from __future__ import annotations

import logging

from ..config.settings import CodecConfig
from ..errors import IllegalOperation
from ..util import log_hexdump
from . import protocol
from .structures import PACKET_TYPES, Packet

logger = logging.getLogger(__name__)


def read_opcode(data: bytes | bytearray | memoryview) -> protocol.Opcode:
    """Return the opcode of *data* or raise :class:`IllegalOperation`."""
    raw = bytes(data[: protocol.OPCODE_SIZE])
    if len(raw) < protocol.MIN_PACKET_SIZE:
        raise IllegalOperation("no data in packet")
    opcode = protocol.OPCODE_STRUCT.parse(raw)
    try:
        return protocol.Opcode(opcode)
    except ValueError as exc:
        raise IllegalOperation(f"unknown opcode {opcode}") from exc


def decode(data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Packet:
    """Parse a datagram payload into a typed packet."""
    try:
        opcode = read_opcode(data)
        packet_type = PACKET_TYPES[opcode]
        packet: Packet = packet_type.decode(data, config)  # type: ignore[assignment]
    except IllegalOperation as exc:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Rejected datagram (%d bytes): %s", len(data), exc.reason)
            log_hexdump(logger, logging.DEBUG, "rejected", bytes(data))
        raise
    return packet


def encode(packet: Packet, config: CodecConfig | None = None) -> bytes:
    """Serialise *packet*; equivalent to ``packet.encode(config)``."""
    return packet.encode(config)


__all__ = ["decode", "encode", "read_opcode"]
