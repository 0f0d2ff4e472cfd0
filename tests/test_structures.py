import pytest

from tftpcodec.config.settings import CodecConfig
from tftpcodec.errors import PacketEncodeError
from tftpcodec.protocol import protocol
from tftpcodec.protocol.structures import (
    PACKET_TYPES,
    AckPacket,
    DataPacket,
    ErrorPacket,
    ReadRequestPacket,
    WriteRequestPacket,
)
from tests.test_constants import TEST_BLOCK_NUMBER, TEST_FILENAME, TEST_MODE, TEST_PAYLOAD


def test_read_request_layout() -> None:
    raw = ReadRequestPacket(filename=TEST_FILENAME, mode=TEST_MODE).encode()

    assert raw == b"\x00\x01./testfile\x00octet\x00"


def test_write_request_layout() -> None:
    raw = WriteRequestPacket(filename=TEST_FILENAME, mode=TEST_MODE).encode()

    assert raw == b"\x00\x02./testfile\x00octet\x00"


def test_data_layout() -> None:
    raw = DataPacket(block_number=TEST_BLOCK_NUMBER, payload=TEST_PAYLOAD).encode()

    assert raw == bytes([0x00, 0x03, 0x00, 0x32, 0x54, 0x65, 0x73, 0x74])


def test_data_with_empty_payload_is_header_only() -> None:
    raw = DataPacket(block_number=protocol.UINT16_MAX).encode()

    assert raw == b"\x00\x03\xff\xff"
    assert len(raw) == protocol.MIN_DATA_SIZE


def test_ack_layout() -> None:
    assert AckPacket(block_number=1).encode() == b"\x00\x04\x00\x01"
    assert AckPacket(block_number=protocol.UINT16_MAX).encode() == b"\x00\x04\xff\xff"


def test_error_layout() -> None:
    raw = ErrorPacket(error_code=protocol.ErrorCode.FILE_NOT_FOUND, error_message="Test").encode()

    assert raw == b"\x00\x05\x00\x01Test\x00"


def test_error_with_empty_message_keeps_terminator() -> None:
    raw = ErrorPacket(error_code=0).encode()

    assert raw == b"\x00\x05\x00\x00\x00"
    assert len(raw) == protocol.MIN_ERROR_SIZE


def test_encode_is_deterministic() -> None:
    packet = ErrorPacket(error_code=4, error_message="again")

    assert packet.encode() == packet.encode()


def test_opcodes_match_packet_types() -> None:
    for opcode, packet_type in PACKET_TYPES.items():
        assert packet_type.OPCODE is opcode


@pytest.mark.parametrize("error_code", [8, 65535, -1])
def test_encode_rejects_out_of_range_error_code(error_code: int) -> None:
    with pytest.raises(PacketEncodeError):
        ErrorPacket(error_code=error_code, error_message="x").encode()


@pytest.mark.parametrize(
    "packet",
    [
        ReadRequestPacket(filename="", mode=TEST_MODE),
        WriteRequestPacket(filename=TEST_FILENAME, mode=""),
        ReadRequestPacket(filename="bad\x00name", mode=TEST_MODE),
        WriteRequestPacket(filename=TEST_FILENAME, mode="oct\x00et"),
        ErrorPacket(error_code=0, error_message="embedded\x00nul"),
    ],
)
def test_encode_rejects_invalid_strings(packet) -> None:
    with pytest.raises(PacketEncodeError):
        packet.encode()


@pytest.mark.parametrize("block_number", [-1, protocol.UINT16_MAX + 1])
def test_encode_rejects_block_number_outside_16_bits(block_number: int) -> None:
    with pytest.raises(PacketEncodeError):
        DataPacket(block_number=block_number).encode()
    with pytest.raises(PacketEncodeError):
        AckPacket(block_number=block_number).encode()


def test_encode_rejects_unrepresentable_text(ascii_config: CodecConfig) -> None:
    packet = ReadRequestPacket(filename="café.bin", mode=TEST_MODE)

    with pytest.raises(PacketEncodeError):
        packet.encode(ascii_config)

    # The default encoding handles it.
    assert packet.encode() == b"\x00\x01caf\xc3\xa9.bin\x00octet\x00"


def test_encode_failure_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        ErrorPacket(error_code=99).encode()


def test_data_is_final() -> None:
    assert DataPacket(block_number=1, payload=b"").is_final
    assert DataPacket(block_number=1, payload=b"x" * (protocol.BLOCK_SIZE - 1)).is_final
    assert not DataPacket(block_number=1, payload=b"x" * protocol.BLOCK_SIZE).is_final


def test_packets_are_immutable() -> None:
    packet = AckPacket(block_number=3)

    with pytest.raises(AttributeError):
        packet.block_number = 4  # type: ignore[misc]


@pytest.mark.parametrize("payload", [5, "abc", None, [1, 2]])
def test_encode_rejects_non_bytes_payload(payload) -> None:
    with pytest.raises(PacketEncodeError, match="payload must be bytes-like"):
        DataPacket(block_number=1, payload=payload).encode()


def test_encode_accepts_bytes_like_payload() -> None:
    assert DataPacket(block_number=1, payload=bytearray(b"ab")).encode() == b"\x00\x03\x00\x01ab"
    assert DataPacket(block_number=1, payload=memoryview(b"ab")).encode() == b"\x00\x03\x00\x01ab"


@pytest.mark.parametrize(
    "packet",
    [
        ReadRequestPacket(filename=b"file", mode=TEST_MODE),
        WriteRequestPacket(filename=TEST_FILENAME, mode=7),
        ErrorPacket(error_code=1, error_message=b"Test"),
    ],
)
def test_encode_rejects_non_str_text(packet) -> None:
    with pytest.raises(PacketEncodeError, match="must be str"):
        packet.encode()


@pytest.mark.parametrize("value", [True, False])
def test_encode_rejects_bool_numbers(value: bool) -> None:
    with pytest.raises(PacketEncodeError):
        AckPacket(block_number=value).encode()
    with pytest.raises(PacketEncodeError):
        DataPacket(block_number=value).encode()
    with pytest.raises(PacketEncodeError):
        ErrorPacket(error_code=value).encode()


def test_encode_restores_undecodable_filename_bytes() -> None:
    filename = b"caf\xe9".decode("utf-8", "surrogateescape")

    raw = ReadRequestPacket(filename=filename, mode=TEST_MODE).encode()

    assert raw == b"\x00\x01caf\xe9\x00octet\x00"


def test_encode_rejects_escaped_bytes_when_strict() -> None:
    filename = b"caf\xe9".decode("utf-8", "surrogateescape")

    with pytest.raises(PacketEncodeError):
        ReadRequestPacket(filename=filename, mode=TEST_MODE).encode(CodecConfig(strict_text=True))
