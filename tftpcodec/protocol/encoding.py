"""Error reporting helpers for tftpcodec.

:func:`error_to_packet` is the single translation point from application
exceptions to the 0-7 error code space of RFC1350.
"""

from __future__ import annotations

import logging

from ..errors import TftpError
from .protocol import ErrorCode
from .structures import ErrorPacket

logger = logging.getLogger(__name__)


def _error_text(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        logger.warning("str() failed for %s; reporting class name instead", type(exc).__name__, exc_info=True)
        return type(exc).__name__


def error_to_packet(exc: BaseException) -> ErrorPacket:
    """Convert any exception into the ERROR packet reported to a peer.

    Classified errors keep their own code and formatted message; anything
    else is reported as :attr:`ErrorCode.NOT_DEFINED` with its message
    unchanged.
    """
    if isinstance(exc, TftpError):
        return ErrorPacket(error_code=int(exc.code), error_message=_error_text(exc))
    return ErrorPacket(error_code=int(ErrorCode.NOT_DEFINED), error_message=_error_text(exc))


__all__ = ["error_to_packet"]
