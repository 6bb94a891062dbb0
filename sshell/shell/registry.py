"""Name to handler mapping for builtins."""

from __future__ import annotations

from collections.abc import Callable

from .common import BuiltinCommand

BUILTINS: dict[str, BuiltinCommand] = {}


def builtin(name: str) -> Callable[[BuiltinCommand], BuiltinCommand]:
    """Register the decorated function as the builtin ``name``."""

    def decorator(func: BuiltinCommand) -> BuiltinCommand:
        BUILTINS[name] = func
        return func

    return decorator


__all__ = ["BUILTINS", "builtin"]
