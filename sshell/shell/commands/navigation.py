"""Working-directory builtins."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import builtin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


def _entry_size(entry: os.DirEntry[str]) -> int:
    try:
        return entry.stat().st_size
    except OSError:
        # dangling symlink
        return entry.stat(follow_symlinks=False).st_size


@builtin("pwd")
def pwd(shell: "Shell", _: list[str]) -> CommandResult:
    return CommandResult(stdout=f"{os.getcwd()}\n")


@builtin("cd")
def cd(shell: "Shell", args: list[str]) -> CommandResult:
    if not args:
        return CommandResult(stderr="Error: cannot cd into directory\n", exit_code=1)
    try:
        os.chdir(args[0])
    except OSError:
        return CommandResult(stderr="Error: cannot cd into directory\n", exit_code=1)
    return CommandResult()


@builtin("sls")
def sls(shell: "Shell", _: list[str]) -> CommandResult:
    try:
        with os.scandir(".") as it:
            entries = sorted((entry for entry in it if not entry.name.startswith(".")), key=lambda e: e.name)
            lines = [f"{entry.name} ({_entry_size(entry)} bytes)\n" for entry in entries]
    except OSError:
        return CommandResult(stderr="Error: cannot open directory\n", exit_code=1)
    return CommandResult(stdout="".join(lines))
