"""Single-pass scanner turning a raw command line into a :class:`Pipeline`.

The scanner never backtracks. Each character moves a small state machine
(:class:`ScanState`) and completed tokens are flushed into the active fill
slot, which is either the next argument of the current command or the
current command's output filename. Errors are raised at the first character
where they become observable, so the leftmost violation always wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

from .command import Command, OutputMode, OutputTarget, ParseOutcome, Pipeline
from .exceptions import (
    ArgOverflow,
    CapacityExceeded,
    LineOverflow,
    MislocatedRedirect,
    MissingToken,
    ParseError,
    PipeOverflow,
    ScanMode,
    TokenOverflow,
)
from .limits import DEFAULT_LIMITS, ShellLimits
from .redirect import verify_output_target

logger = logging.getLogger(__name__)

PIPE = "|"
REDIRECT = ">"
AMPERSAND = "&"


class ScanState(Enum):
    BEFORE_FIRST_TOKEN = auto()
    IN_TOKEN = auto()
    BETWEEN_TOKENS = auto()


@dataclass(frozen=True)
class NextArgument:
    index: int
    mode: ClassVar[ScanMode] = ScanMode.ARGUMENT


@dataclass(frozen=True)
class OutputFilename:
    mode: ClassVar[ScanMode] = ScanMode.FILENAME


FillSlot = NextArgument | OutputFilename


class _Scanner:
    def __init__(self, line: str, limits: ShellLimits) -> None:
        self.line = line
        self.limits = limits
        self.pipeline = Pipeline.empty(limits.max_commands)
        self.current = self._start_command()
        self.slot: FillSlot = NextArgument(0)
        self.state = ScanState.BEFORE_FIRST_TOKEN
        self.output_mode = OutputMode.STDOUT
        self._token: list[str] = []

    def run(self) -> Pipeline:
        pos = 0
        while pos < len(self.line):
            self._check_position(pos)
            char = self.line[pos]
            if char == PIPE:
                pos += self._pipe(pos)
            elif char == REDIRECT:
                pos += self._redirect(pos)
            elif char.isspace():
                self._whitespace()
            else:
                self._character(char)
            pos += 1
        self._end_of_line()
        logger.debug(
            "Parsed %r into %d command(s), %d pipe(s)",
            self.line,
            len(self.pipeline),
            self.pipeline.pipe_count,
        )
        return self.pipeline

    def _check_position(self, pos: int) -> None:
        if pos >= self.limits.max_line_length:
            raise LineOverflow()

    def _ampersand_follows(self, pos: int) -> bool:
        nxt = pos + 1
        if nxt < len(self.line) and self.line[nxt] == AMPERSAND:
            self._check_position(nxt)
            return True
        return False

    def _start_command(self) -> Command:
        try:
            return self.pipeline.commands.push(Command.empty(self.limits.max_arguments))
        except CapacityExceeded as exc:
            raise PipeOverflow() from exc

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _pipe(self, pos: int) -> int:
        self._flush()
        if self.current.output_target is not None:
            raise MislocatedRedirect()
        left = self.current
        self.current = self._start_command()
        consumed = 0
        if self._ampersand_follows(pos):
            left.stderr_to_pipe = True
            consumed = 1
        self.slot = NextArgument(0)
        self.state = ScanState.BEFORE_FIRST_TOKEN
        return consumed

    def _redirect(self, pos: int) -> int:
        self._flush()
        consumed = 0
        self.output_mode = OutputMode.STDOUT
        if self._ampersand_follows(pos):
            self.output_mode = OutputMode.STDOUT_AND_STDERR
            consumed = 1
        self.slot = OutputFilename()
        self.state = ScanState.BEFORE_FIRST_TOKEN
        return consumed

    def _whitespace(self) -> None:
        if self.state is ScanState.IN_TOKEN:
            self.state = ScanState.BETWEEN_TOKENS

    def _character(self, char: str) -> None:
        if self.state is ScanState.BETWEEN_TOKENS:
            self._flush()
            self.slot = NextArgument(len(self.current.arguments))
        self._token.append(char)
        if len(self._token) > self.limits.max_token_length:
            raise TokenOverflow()
        self.state = ScanState.IN_TOKEN

    def _end_of_line(self) -> None:
        if self.state is ScanState.BEFORE_FIRST_TOKEN:
            first = self.pipeline.commands[0]
            raise MissingToken(self.slot.mode, empty_line=len(first.arguments) == 0)
        self._flush()

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------
    def _flush(self) -> None:
        if self.state is ScanState.BEFORE_FIRST_TOKEN:
            raise MissingToken(self.slot.mode)
        token = "".join(self._token)
        self._token.clear()
        if isinstance(self.slot, OutputFilename):
            verify_output_target(token)
            self.current.output_target = OutputTarget(token, self.output_mode)
            logger.debug("Output of %r goes to %r", self.current.argv, token)
            return
        try:
            self.current.arguments.push(token)
        except CapacityExceeded as exc:
            raise ArgOverflow() from exc


def parse_pipeline(line: str, limits: ShellLimits | None = None) -> Pipeline:
    """Scan ``line`` and return its pipeline, raising the first :class:`ParseError`."""

    return _Scanner(line, limits or DEFAULT_LIMITS).run()


def scan_line(line: str, limits: ShellLimits | None = None) -> ParseOutcome:
    try:
        return ParseOutcome(pipeline=parse_pipeline(line, limits))
    except ParseError as exc:
        return ParseOutcome(error=exc)


__all__ = [
    "FillSlot",
    "NextArgument",
    "OutputFilename",
    "ScanState",
    "parse_pipeline",
    "scan_line",
]
