"""Interactive shell package."""

from .common import CommandResult, CompletionReport
from .core import Shell

__all__ = ["Shell", "CommandResult", "CompletionReport"]
