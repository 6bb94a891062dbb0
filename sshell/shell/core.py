"""Core Shell implementation."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ..command import Pipeline
from ..exceptions import MissingToken, ParseError
from ..executor import run_pipeline
from ..limits import DEFAULT_LIMITS, ShellLimits
from ..parser import parse_pipeline
from .common import BuiltinCommand, CompletionReport
from .registry import BUILTINS

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "sshell@ucd$ "


class Shell:
    """Turns command lines into process pipelines and reports their completion."""

    def __init__(
        self,
        *,
        limits: ShellLimits | None = None,
        prompt: str = DEFAULT_PROMPT,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        # Import builtin modules for their side effects (registration)
        from . import commands  # noqa: F401

        self.limits = limits or DEFAULT_LIMITS
        self.prompt = prompt
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.exit_requested = False

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def _emit(self, stream: TextIO, text: str) -> None:
        if text:
            stream.write(text)
            stream.flush()

    def _flush_streams(self) -> None:
        # children write straight to the inherited descriptors
        self.stdout.flush()
        self.stderr.flush()

    def _report_parse_error(self, error: ParseError) -> None:
        if isinstance(error, MissingToken) and error.empty_line:
            return
        logger.debug("Rejected line: %s", error.message)
        self._emit(self.stderr, f"{error.message}\n")

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    def exec(self, line: str) -> CompletionReport | None:
        """Run one command line; ``None`` means it was rejected by the parser."""

        try:
            pipeline = parse_pipeline(line, self.limits)
        except ParseError as exc:
            self._report_parse_error(exc)
            return None
        name, args = pipeline.head
        handler = BUILTINS.get(name)
        if handler is not None:
            self._run_builtin(pipeline, name, handler, args)
        else:
            self._flush_streams()
            # stages that inherit stderr report spawn failures on our stream
            run_pipeline(pipeline, diagnostics=self.stderr)
        report = CompletionReport(line, tuple(pipeline.exit_statuses))
        self._emit(self.stderr, report.render())
        return report

    def _run_builtin(
        self,
        pipeline: Pipeline,
        name: str,
        handler: BuiltinCommand,
        args: list[str],
    ) -> None:
        if len(pipeline) > 1:
            logger.warning("Builtin %r runs alone; %d later stage(s) skipped", name, len(pipeline) - 1)
        result = handler(self, args)
        self._emit(self.stdout, result.stdout)
        self._emit(self.stderr, result.stderr)
        pipeline.record_builtin_status(result.exit_code)


__all__ = ["DEFAULT_PROMPT", "Shell"]
