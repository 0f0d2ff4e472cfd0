"""Settings for the TFTP codec.

Configuration is read from ``TFTPCODEC_*`` environment variables, falling
back to defaults suitable for interoperating with stock TFTP peers.
"""

from __future__ import annotations

import codecs
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from ..util import parse_bool


logger = logging.getLogger(__name__)

ENV_PREFIX: Final[str] = "TFTPCODEC_"
DEFAULT_STRING_ENCODING: Final[str] = "utf-8"
DEFAULT_STRICT_REQUEST_FRAMING: Final[bool] = False
DEFAULT_STRICT_TEXT: Final[bool] = False


@dataclass(slots=True)
class CodecConfig:
    """Strongly typed configuration for encoding and decoding."""

    string_encoding: str = DEFAULT_STRING_ENCODING
    strict_request_framing: bool = DEFAULT_STRICT_REQUEST_FRAMING
    strict_text: bool = DEFAULT_STRICT_TEXT

    @property
    def text_errors(self) -> str:
        """Codec error handler for text fields; surrogateescape keeps arbitrary bytes."""
        return "strict" if self.strict_text else "surrogateescape"

    def __post_init__(self) -> None:
        encoding = (self.string_encoding or "").strip()
        if not encoding:
            raise ValueError("string_encoding must be a non-empty codec name")
        try:
            self.string_encoding = codecs.lookup(encoding).name
        except LookupError as exc:
            raise ValueError(f"Unknown string encoding: {encoding}") from exc
        if self.strict_request_framing:
            logger.debug("Strict request framing enabled; trailing request bytes will be rejected.")


DEFAULT_CONFIG: Final[CodecConfig] = CodecConfig()


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(f"{ENV_PREFIX}{name}")
    if value is None or not value.strip():
        return None
    return value


def load_config(environ: Mapping[str, str] | None = None) -> CodecConfig:
    """Build a :class:`CodecConfig` from ``TFTPCODEC_*`` variables."""

    source: Mapping[str, str] = os.environ if environ is None else environ

    encoding = _env(source, "STRING_ENCODING")
    strict = _env(source, "STRICT_REQUEST_FRAMING")
    strict_text = _env(source, "STRICT_TEXT")

    return CodecConfig(
        string_encoding=encoding if encoding is not None else DEFAULT_STRING_ENCODING,
        strict_request_framing=parse_bool(strict) if strict is not None else DEFAULT_STRICT_REQUEST_FRAMING,
        strict_text=parse_bool(strict_text) if strict_text is not None else DEFAULT_STRICT_TEXT,
    )


__all__ = [
    "CodecConfig",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "load_config",
]
