"""RFC1350 protocol constants and shared wire field definitions."""
from __future__ import annotations
from construct import GreedyBytes, Int16ub, NullTerminated, Struct as BinStruct  # type: ignore
from enum import IntEnum
from typing import Final

UINT16_MAX: Final[int] = 65535
STRING_TERMINATOR: Final[bytes] = bytes([0])

# RFC1350 block size; a shorter DATA payload ends the transfer.
BLOCK_SIZE: Final[int] = 512


class Opcode(IntEnum):
    RRQ = 1  # Read request
    WRQ = 2  # Write request
    DATA = 3  # Data block
    ACK = 4  # Acknowledgement
    ERROR = 5  # Error


class ErrorCode(IntEnum):
    NOT_DEFINED = 0  # Not defined, see error message
    FILE_NOT_FOUND = 1  # File not found
    ACCESS_VIOLATION = 2  # Access violation
    DISK_FULL = 3  # Disk full or allocation exceeded
    ILLEGAL_OPERATION = 4  # Illegal TFTP operation
    UNKNOWN_TRANSFER_ID = 5  # Unknown transfer ID
    FILE_EXISTS = 6  # File already exists
    NO_SUCH_USER = 7  # No such user


ERROR_CODE_MIN: Final[int] = int(min(ErrorCode))
ERROR_CODE_MAX: Final[int] = int(max(ErrorCode))

OPCODE_STRUCT: Final = Int16ub
BLOCK_NUMBER_STRUCT: Final = Int16ub
ERROR_CODE_STRUCT: Final = Int16ub
NUL_TERMINATED_STRUCT: Final = NullTerminated(GreedyBytes, term=STRING_TERMINATOR)
NUMBERED_HEADER_STRUCT: Final = BinStruct(
    "opcode" / Int16ub,
    "number" / Int16ub,
)

OPCODE_SIZE: Final[int] = OPCODE_STRUCT.sizeof()  # type: ignore
TERMINATOR_SIZE: Final[int] = len(STRING_TERMINATOR)
NUMBERED_HEADER_SIZE: Final[int] = NUMBERED_HEADER_STRUCT.sizeof()  # type: ignore

MIN_PACKET_SIZE: Final[int] = OPCODE_SIZE
# opcode + 1 byte filename + NUL + 1 byte mode + NUL
MIN_REQUEST_SIZE: Final[int] = OPCODE_SIZE + 2 * (1 + TERMINATOR_SIZE)
MIN_DATA_SIZE: Final[int] = NUMBERED_HEADER_SIZE
ACK_SIZE: Final[int] = NUMBERED_HEADER_SIZE
# opcode + error code + NUL of an empty message
MIN_ERROR_SIZE: Final[int] = NUMBERED_HEADER_SIZE + TERMINATOR_SIZE
