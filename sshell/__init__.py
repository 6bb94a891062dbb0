"""sshell package: a small command interpreter running real process pipelines."""

from .command import BoundedList, Command, OutputMode, OutputTarget, ParseOutcome, Pipeline
from .exceptions import (
    ArgOverflow,
    BadFile,
    LineOverflow,
    MislocatedRedirect,
    MissingToken,
    ParseError,
    PipeOverflow,
    ShellError,
    TokenOverflow,
)
from .executor import run_pipeline
from .limits import ShellLimits
from .parser import parse_pipeline, scan_line
from .shell import CommandResult, CompletionReport, Shell

__all__ = [
    "Shell",
    "CommandResult",
    "CompletionReport",
    "ShellLimits",
    "parse_pipeline",
    "scan_line",
    "run_pipeline",
    "BoundedList",
    "Command",
    "Pipeline",
    "OutputMode",
    "OutputTarget",
    "ParseOutcome",
    "ShellError",
    "ParseError",
    "MissingToken",
    "BadFile",
    "ArgOverflow",
    "PipeOverflow",
    "MislocatedRedirect",
    "TokenOverflow",
    "LineOverflow",
]
