import pytest

from sshell import BoundedList, Command, OutputMode, OutputTarget, Pipeline
from sshell.exceptions import CapacityExceeded


def test_bounded_list_push_within_capacity():
    items = BoundedList(2)
    items.push("a")
    items.push("b")
    assert list(items) == ["a", "b"]
    assert items.full


def test_bounded_list_push_past_capacity_raises():
    items = BoundedList(1, ["a"])
    with pytest.raises(CapacityExceeded) as exc:
        items.push("b")
    assert exc.value.capacity == 1
    assert len(items) == 1


def test_bounded_list_equality_includes_capacity():
    assert BoundedList(3, [1, 2]) == BoundedList(3, [1, 2])
    assert BoundedList(3, [1, 2]) != BoundedList(4, [1, 2])


def test_pipeline_pipe_count_and_head():
    pipeline = Pipeline.empty(4)
    first = pipeline.commands.push(Command.empty(16))
    first.arguments.push("ls")
    first.arguments.push("-l")
    second = pipeline.commands.push(Command.empty(16))
    second.arguments.push("wc")
    assert pipeline.pipe_count == 1
    assert pipeline.head == ("ls", ["-l"])


def test_record_builtin_status_only_touches_first_command():
    pipeline = Pipeline.empty(4)
    for name in ("cd", "ls"):
        pipeline.commands.push(Command.empty(16)).arguments.push(name)
    pipeline.record_builtin_status(1)
    assert pipeline.exit_statuses == [1, 0]


def test_output_target_stderr_flag():
    assert OutputTarget("out.txt", OutputMode.STDOUT_AND_STDERR).includes_stderr
    assert not OutputTarget("out.txt").includes_stderr
