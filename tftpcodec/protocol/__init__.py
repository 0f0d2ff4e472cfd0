"""Wire protocol for tftpcodec."""

from . import protocol, structures, codec, encoding
from .codec import decode, encode, read_opcode
from .encoding import error_to_packet
from .protocol import ErrorCode, Opcode
from .structures import (
    AckPacket,
    DataPacket,
    ErrorPacket,
    Packet,
    ReadRequestPacket,
    WriteRequestPacket,
)

__all__ = [
    "AckPacket",
    "DataPacket",
    "ErrorCode",
    "ErrorPacket",
    "Opcode",
    "Packet",
    "ReadRequestPacket",
    "WriteRequestPacket",
    "decode",
    "encode",
    "error_to_packet",
    "read_opcode",
    "protocol",
    "structures",
    "codec",
    "encoding",
]
