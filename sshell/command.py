"""Record types holding the parsed state of a command line."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, overload

from .exceptions import CapacityExceeded, ParseError

T = TypeVar("T")


class BoundedList(Sequence[T], Generic[T]):
    """Sequence with a fixed capacity; pushing past it raises instead of growing."""

    __slots__ = ("capacity", "_items")

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._items: list[T] = []
        for item in items:
            self.push(item)

    def push(self, item: T) -> T:
        if len(self._items) >= self.capacity:
            raise CapacityExceeded(self.capacity)
        self._items.append(item)
        return item

    @property
    def full(self) -> bool:
        return len(self._items) >= self.capacity

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedList):
            return NotImplemented
        return self.capacity == other.capacity and self._items == other._items

    def __repr__(self) -> str:
        return f"BoundedList({self.capacity}, {self._items!r})"


class OutputMode(Enum):
    STDOUT = ">"
    STDOUT_AND_STDERR = ">&"


@dataclass(frozen=True)
class OutputTarget:
    filename: str
    mode: OutputMode = OutputMode.STDOUT

    @property
    def includes_stderr(self) -> bool:
        return self.mode is OutputMode.STDOUT_AND_STDERR


@dataclass(slots=True)
class Command:
    """One pipeline stage; ``arguments[0]`` is the program name."""

    arguments: BoundedList[str]
    output_target: OutputTarget | None = None
    stderr_to_pipe: bool = False
    exit_status: int = 0

    @classmethod
    def empty(cls, max_arguments: int) -> "Command":
        return cls(arguments=BoundedList(max_arguments))

    @property
    def program(self) -> str:
        return self.arguments[0]

    @property
    def argv(self) -> list[str]:
        return list(self.arguments)


@dataclass(slots=True)
class Pipeline:
    commands: BoundedList[Command]

    @classmethod
    def empty(cls, max_commands: int) -> "Pipeline":
        return cls(commands=BoundedList(max_commands))

    @property
    def pipe_count(self) -> int:
        return max(len(self.commands) - 1, 0)

    @property
    def head(self) -> tuple[str, list[str]]:
        """Program name and remaining arguments of the first stage."""

        first = self.commands[0]
        return first.program, first.argv[1:]

    def record_builtin_status(self, status: int) -> None:
        self.commands[0].exit_status = status

    @property
    def exit_statuses(self) -> list[int]:
        return [command.exit_status for command in self.commands]

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)


@dataclass
class ParseOutcome:
    """Either a completed pipeline or the first violation found while scanning."""

    pipeline: Pipeline | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "BoundedList",
    "Command",
    "OutputMode",
    "OutputTarget",
    "ParseOutcome",
    "Pipeline",
]
