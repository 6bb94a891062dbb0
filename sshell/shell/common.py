"""Shared shell types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Shell


@dataclass(slots=True)
class CommandResult:
    """Output of a builtin, written by the shell to its own streams."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0


@dataclass(frozen=True)
class CompletionReport:
    line: str
    exit_statuses: tuple[int, ...]

    def render(self) -> str:
        codes = "".join(f"[{status}]" for status in self.exit_statuses)
        return f"+ completed '{self.line}' {codes}\n"


BuiltinCommand = Callable[["Shell", list[str]], CommandResult]


__all__ = ["BuiltinCommand", "CommandResult", "CompletionReport"]
