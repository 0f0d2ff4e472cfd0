"""Error conditions that can be reported to a TFTP peer.

Each kind carries the RFC1350 error code it is reported under as the class
attribute ``code``. Errors outside this hierarchy are reported under
:attr:`ErrorCode.NOT_DEFINED` by :func:`tftpcodec.protocol.encoding.error_to_packet`.
"""

from __future__ import annotations

from typing import ClassVar

from tftpcodec.protocol.protocol import ErrorCode

__all__ = [
    "TftpError",
    "FileNotFound",
    "AccessViolation",
    "DiskFull",
    "IllegalOperation",
    "UnknownTransferID",
    "FileExists",
    "NoSuchUser",
    "PacketEncodeError",
]


class TftpError(Exception):
    """Base class for errors that have a dedicated TFTP error code."""

    code: ClassVar[ErrorCode]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FileNotFound(TftpError):
    code = ErrorCode.FILE_NOT_FOUND

    def __init__(self, file: str) -> None:
        super().__init__(f"Error File Not Found - {file}")
        self.file = file


class AccessViolation(TftpError):
    code = ErrorCode.ACCESS_VIOLATION

    def __init__(self) -> None:
        super().__init__("Error Access Violation")


class DiskFull(TftpError):
    code = ErrorCode.DISK_FULL

    def __init__(self) -> None:
        super().__init__("Error Disk Full")


class IllegalOperation(TftpError, ValueError):
    """Raised for malformed datagrams and protocol violations."""

    code = ErrorCode.ILLEGAL_OPERATION

    def __init__(self, reason: str) -> None:
        super().__init__(f"Error Illegal Operation - {reason}")
        self.reason = reason


class UnknownTransferID(TftpError):
    code = ErrorCode.UNKNOWN_TRANSFER_ID

    def __init__(self, transfer_id: str) -> None:
        super().__init__(f"Error Unknown Transfer ID - {transfer_id}")
        self.transfer_id = transfer_id


class FileExists(TftpError):
    code = ErrorCode.FILE_EXISTS

    def __init__(self, file: str) -> None:
        super().__init__(f"Error File Exists: {file}")
        self.file = file


class NoSuchUser(TftpError):
    code = ErrorCode.NO_SUCH_USER

    def __init__(self, user: str) -> None:
        super().__init__(f"Error No Such User: {user}")
        self.user = user


class PacketEncodeError(ValueError):
    """Raised when a packet value cannot be serialised."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
