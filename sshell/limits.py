"""Fixed upper bounds enforced while scanning a command line."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShellLimits:
    """Hard limits; exceeding any of them is a parse error, never growth."""

    max_commands: int = 4
    max_arguments: int = 16
    max_token_length: int = 31
    max_line_length: int = 511

    @property
    def max_pipes(self) -> int:
        return self.max_commands - 1


DEFAULT_LIMITS = ShellLimits()


__all__ = ["DEFAULT_LIMITS", "ShellLimits"]
