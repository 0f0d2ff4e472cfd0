"""tftpcodec: RFC1350 (TFTP) packet codec.

Turns typed packets into exact datagram payloads and back, and maps
application errors onto TFTP ERROR packets. Transport, sessions and
retransmission are left to the caller.
"""

# protocol first: errors imports protocol.protocol
from .protocol import (
    AckPacket,
    DataPacket,
    ErrorCode,
    ErrorPacket,
    Opcode,
    Packet,
    ReadRequestPacket,
    WriteRequestPacket,
    decode,
    encode,
    error_to_packet,
)
from .errors import (
    AccessViolation,
    DiskFull,
    FileExists,
    FileNotFound,
    IllegalOperation,
    NoSuchUser,
    PacketEncodeError,
    TftpError,
    UnknownTransferID,
)
from .config import CodecConfig, configure_logging, load_config

__version__ = "1.0.0"

__all__ = [
    "AccessViolation",
    "AckPacket",
    "CodecConfig",
    "DataPacket",
    "DiskFull",
    "ErrorCode",
    "ErrorPacket",
    "FileExists",
    "FileNotFound",
    "IllegalOperation",
    "NoSuchUser",
    "Opcode",
    "Packet",
    "PacketEncodeError",
    "ReadRequestPacket",
    "TftpError",
    "UnknownTransferID",
    "WriteRequestPacket",
    "configure_logging",
    "decode",
    "encode",
    "error_to_packet",
    "load_config",
]
