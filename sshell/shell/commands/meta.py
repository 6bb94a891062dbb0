"""Builtins that control the shell itself."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import builtin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@builtin("exit")
def exit_shell(shell: "Shell", _: list[str]) -> CommandResult:
    shell.exit_requested = True
    return CommandResult(stderr="Bye...\n")
