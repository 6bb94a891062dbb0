"""Exception hierarchy for sshell."""

from __future__ import annotations

from enum import Enum


class ShellError(Exception):
    """Base class for every error raised by sshell."""


class CapacityExceeded(ShellError):
    """Raised when a bounded container is pushed past its capacity."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"capacity of {capacity} exceeded")
        self.capacity = capacity


class ScanMode(Enum):
    """What the scanner was looking for when an error surfaced."""

    ARGUMENT = "argument"
    FILENAME = "filename"


class ParseError(ShellError):
    """A grammar or limit violation; the line is rejected before execution."""

    message = "Error: invalid command line"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class MissingToken(ParseError):
    def __init__(self, context: ScanMode, *, empty_line: bool = False) -> None:
        self.context = context
        self.empty_line = empty_line
        if context is ScanMode.FILENAME:
            super().__init__("Error: no output file")
        else:
            super().__init__("Error: missing command")


class BadFile(ParseError):
    message = "Error: cannot open output file"

    def __init__(self, filename: str) -> None:
        super().__init__()
        self.filename = filename


class ArgOverflow(ParseError):
    message = "Error: too many process arguments"


class PipeOverflow(ParseError):
    message = "Error: too many pipes"


class MislocatedRedirect(ParseError):
    message = "Error: mislocated output redirection"


class TokenOverflow(ParseError):
    message = "Error: token too long"


class LineOverflow(ParseError):
    message = "Error: command line too long"


__all__ = [
    "ArgOverflow",
    "BadFile",
    "CapacityExceeded",
    "LineOverflow",
    "MislocatedRedirect",
    "MissingToken",
    "ParseError",
    "PipeOverflow",
    "ScanMode",
    "ShellError",
    "TokenOverflow",
]
