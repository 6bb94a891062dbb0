"""Validation and opening of output redirection targets."""

from __future__ import annotations

import logging
import os

from .command import OutputTarget
from .exceptions import BadFile

logger = logging.getLogger(__name__)

_FILE_MODE = 0o644


def verify_output_target(filename: str) -> str:
    """Make sure ``filename`` can be opened for writing, creating it if absent.

    The file is never truncated here; a later error on the same line must not
    destroy its contents. Truncation happens in :func:`open_output_target`.
    """

    try:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT, _FILE_MODE)
    except (OSError, ValueError) as exc:
        logger.debug("Rejected redirect target %r: %s", filename, exc)
        raise BadFile(filename) from exc
    os.close(fd)
    return filename


def open_output_target(target: OutputTarget) -> int:
    """Open a verified target for execution, truncating it. Caller owns the fd."""

    return os.open(target.filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)


__all__ = ["open_output_target", "verify_output_target"]
