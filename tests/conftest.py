"""Pytest configuration for tftpcodec tests."""

from __future__ import annotations

import pytest

from tftpcodec.config.settings import CodecConfig


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: randomised robustness tests for the decoder")


@pytest.fixture
def strict_config() -> CodecConfig:
    return CodecConfig(strict_request_framing=True)


@pytest.fixture
def ascii_config() -> CodecConfig:
    return CodecConfig(string_encoding="ascii")
