"""TFTP packet structures and schemas.

Every packet is an immutable Msgspec struct paired with a declarative
Construct schema describing its exact wire layout (RFC1350, big-endian).
"""

from __future__ import annotations

import io
from typing import Any, ClassVar, Self, TypeAlias

import msgspec
from construct import (  # type: ignore
    Const,
    Construct,
    ConstructError,
    GreedyBytes,
    Struct as BinStruct,
)

from ..config.settings import DEFAULT_CONFIG, CodecConfig
from ..errors import IllegalOperation, PacketEncodeError
from . import protocol
from .protocol import NUL_TERMINATED_STRUCT, Opcode


def _request_schema(opcode: Opcode) -> Construct:
    return BinStruct(
        "opcode" / Const(int(opcode), protocol.OPCODE_STRUCT),
        "filename" / NUL_TERMINATED_STRUCT,
        "mode" / NUL_TERMINATED_STRUCT,
    )


def _encode_text(value: str, field: str, config: CodecConfig) -> bytes:
    if not isinstance(value, str):
        raise PacketEncodeError(f"{field} must be str, not {type(value).__name__}")
    encoding = config.string_encoding
    try:
        encoded = value.encode(encoding, config.text_errors)
    except UnicodeEncodeError as exc:
        raise PacketEncodeError(f"{field} cannot be encoded as {encoding}: {exc.reason}") from exc
    if protocol.STRING_TERMINATOR in encoded:
        raise PacketEncodeError(f"{field} contains an embedded terminator byte")
    return encoded


def _decode_text(value: bytes, field: str, config: CodecConfig) -> str:
    try:
        return value.decode(config.string_encoding, config.text_errors)
    except UnicodeDecodeError as exc:
        raise IllegalOperation(f"{field} is not valid {config.string_encoding}") from exc


def _require_bytes(value: bytes, field: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise PacketEncodeError(f"{field} must be bytes-like, not {type(value).__name__}")
    return bytes(value)


def _read_terminated(stream: io.BytesIO, missing_reason: str) -> bytes:
    """Read one NUL-terminated field from *stream*, dropping the terminator."""
    try:
        return NUL_TERMINATED_STRUCT.parse_stream(stream)
    except ConstructError as exc:
        raise IllegalOperation(missing_reason) from exc


def _require_uint16(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= protocol.UINT16_MAX:
        raise PacketEncodeError(f"{field} {value} outside 16-bit range")


def _expect_opcode(raw: bytes, expected: Opcode) -> None:
    if len(raw) < protocol.MIN_PACKET_SIZE:
        raise IllegalOperation("no data in packet")
    opcode = protocol.OPCODE_STRUCT.parse(raw[: protocol.OPCODE_SIZE])
    if opcode != expected:
        raise IllegalOperation(f"expected opcode {int(expected)}, got {opcode}")


class BasePacket(msgspec.Struct, frozen=True):
    """Base class for hybrid Msgspec/Construct packets."""

    # Subclasses must define these
    OPCODE: ClassVar[Opcode]
    _SCHEMA: ClassVar[Construct]

    def _wire_fields(self, config: CodecConfig) -> dict[str, Any]:
        raise NotImplementedError

    def encode(self, config: CodecConfig | None = None) -> bytes:
        """Serialise the packet into its exact wire representation."""
        fields = self._wire_fields(config or DEFAULT_CONFIG)
        try:
            return self._SCHEMA.build(fields)
        except ConstructError as exc:
            raise PacketEncodeError(f"Cannot encode {type(self).__name__}: {exc}") from exc

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Self:
        raise NotImplementedError


class _RequestPacket(BasePacket, frozen=True):
    filename: str
    mode: str

    def _wire_fields(self, config: CodecConfig) -> dict[str, Any]:
        if not self.filename:
            raise PacketEncodeError("filename must not be empty")
        if not self.mode:
            raise PacketEncodeError("mode must not be empty")
        return {
            "filename": _encode_text(self.filename, "filename", config),
            "mode": _encode_text(self.mode, "mode", config),
        }

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Self:
        cfg = config or DEFAULT_CONFIG
        raw = bytes(data)
        _expect_opcode(raw, cls.OPCODE)
        if len(raw) < protocol.MIN_REQUEST_SIZE:
            raise IllegalOperation("request not long enough")

        stream = io.BytesIO(raw[protocol.OPCODE_SIZE :])
        filename = _read_terminated(stream, "non-terminated filename")
        if not filename:
            raise IllegalOperation("blank filename")
        mode = _read_terminated(stream, "non-terminated mode")
        if not mode:
            raise IllegalOperation("blank mode")

        # Anything after the mode (e.g. RFC2347 options) is ignored unless strict.
        if cfg.strict_request_framing and stream.tell() != len(raw) - protocol.OPCODE_SIZE:
            raise IllegalOperation("trailing bytes after mode")

        return cls(
            filename=_decode_text(filename, "filename", cfg),
            mode=_decode_text(mode, "mode", cfg),
        )


class ReadRequestPacket(_RequestPacket, frozen=True):
    OPCODE = Opcode.RRQ
    _SCHEMA = _request_schema(Opcode.RRQ)


class WriteRequestPacket(_RequestPacket, frozen=True):
    OPCODE = Opcode.WRQ
    _SCHEMA = _request_schema(Opcode.WRQ)


class DataPacket(BasePacket, frozen=True):
    block_number: int
    payload: bytes = b""

    OPCODE = Opcode.DATA
    _SCHEMA = BinStruct(
        "opcode" / Const(int(Opcode.DATA), protocol.OPCODE_STRUCT),
        "block_number" / protocol.BLOCK_NUMBER_STRUCT,
        "payload" / GreedyBytes,
    )

    @property
    def is_final(self) -> bool:
        """True when the payload is shorter than a full block."""
        return len(self.payload) < protocol.BLOCK_SIZE

    def _wire_fields(self, config: CodecConfig) -> dict[str, Any]:
        _require_uint16(self.block_number, "block_number")
        return {"block_number": self.block_number, "payload": _require_bytes(self.payload, "payload")}

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Self:
        raw = bytes(data)
        _expect_opcode(raw, cls.OPCODE)
        if len(raw) < protocol.MIN_DATA_SIZE:
            raise IllegalOperation("data packet too short")
        try:
            container: Any = cls._SCHEMA.parse(raw)
        except ConstructError as exc:
            raise IllegalOperation(f"data packet parsing failed: {exc}") from exc
        return cls(block_number=container.block_number, payload=container.payload)


class AckPacket(BasePacket, frozen=True):
    block_number: int

    OPCODE = Opcode.ACK
    _SCHEMA = BinStruct(
        "opcode" / Const(int(Opcode.ACK), protocol.OPCODE_STRUCT),
        "block_number" / protocol.BLOCK_NUMBER_STRUCT,
    )

    def _wire_fields(self, config: CodecConfig) -> dict[str, Any]:
        _require_uint16(self.block_number, "block_number")
        return {"block_number": self.block_number}

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Self:
        raw = bytes(data)
        _expect_opcode(raw, cls.OPCODE)
        if len(raw) != protocol.ACK_SIZE:
            raise IllegalOperation(f"invalid ack length {len(raw)} - must be {protocol.ACK_SIZE} bytes")
        try:
            container: Any = cls._SCHEMA.parse(raw)
        except ConstructError as exc:
            raise IllegalOperation(f"ack packet parsing failed: {exc}") from exc
        return cls(block_number=container.block_number)


class ErrorPacket(BasePacket, frozen=True):
    error_code: int
    error_message: str = ""

    OPCODE = Opcode.ERROR
    _SCHEMA = BinStruct(
        "opcode" / Const(int(Opcode.ERROR), protocol.OPCODE_STRUCT),
        "error_code" / protocol.ERROR_CODE_STRUCT,
        "error_message" / NUL_TERMINATED_STRUCT,
    )

    def _wire_fields(self, config: CodecConfig) -> dict[str, Any]:
        _require_uint16(self.error_code, "error_code")
        if not protocol.ERROR_CODE_MIN <= self.error_code <= protocol.ERROR_CODE_MAX:
            raise PacketEncodeError(
                f"Invalid error code {self.error_code} - must be between "
                f"{protocol.ERROR_CODE_MIN} and {protocol.ERROR_CODE_MAX}"
            )
        return {
            "error_code": int(self.error_code),
            "error_message": _encode_text(self.error_message, "error_message", config),
        }

    @classmethod
    def decode(cls, data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> Self:
        cfg = config or DEFAULT_CONFIG
        raw = bytes(data)
        _expect_opcode(raw, cls.OPCODE)
        if len(raw) < protocol.MIN_ERROR_SIZE:
            raise IllegalOperation(
                f"invalid error packet length {len(raw)} - must be at least {protocol.MIN_ERROR_SIZE} bytes"
            )

        header: Any = protocol.NUMBERED_HEADER_STRUCT.parse(raw[: protocol.NUMBERED_HEADER_SIZE])
        error_code = header.number
        if not protocol.ERROR_CODE_MIN <= error_code <= protocol.ERROR_CODE_MAX:
            raise IllegalOperation(
                f"invalid error code {error_code} - must be between "
                f"{protocol.ERROR_CODE_MIN} and {protocol.ERROR_CODE_MAX}"
            )

        stream = io.BytesIO(raw[protocol.NUMBERED_HEADER_SIZE :])
        message = _read_terminated(stream, "error message not terminated")
        return cls(
            error_code=error_code,
            error_message=_decode_text(message, "error_message", cfg),
        )


Packet: TypeAlias = ReadRequestPacket | WriteRequestPacket | DataPacket | AckPacket | ErrorPacket

PACKET_TYPES: dict[Opcode, type[BasePacket]] = {
    Opcode.RRQ: ReadRequestPacket,
    Opcode.WRQ: WriteRequestPacket,
    Opcode.DATA: DataPacket,
    Opcode.ACK: AckPacket,
    Opcode.ERROR: ErrorPacket,
}


__all__ = [
    "AckPacket",
    "BasePacket",
    "DataPacket",
    "ErrorPacket",
    "PACKET_TYPES",
    "Packet",
    "ReadRequestPacket",
    "WriteRequestPacket",
]
