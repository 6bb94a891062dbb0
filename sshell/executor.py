"""Execution engine: wire pipes and redirections, spawn every stage, then wait."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import TextIO

from .command import OutputTarget, Pipeline
from .redirect import open_output_target

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = "Error: command not found\n"
CANNOT_OPEN_OUTPUT = "Error: cannot open output file\n"
FAILED_STATUS = 1

PipeEnds = tuple[int, int]


@dataclass(slots=True)
class StageWiring:
    """Descriptors a stage is started with; ``None`` inherits the shell's stream."""

    index: int
    argv: list[str]
    stdin: int | None = None
    stdout: int | None = None
    stderr: int | None = None
    output_target: OutputTarget | None = None


@dataclass(slots=True)
class StageProcess:
    """Handle returned by :func:`spawn_stage` before anything is waited on."""

    index: int
    process: subprocess.Popen[bytes] | None = None

    @property
    def pid(self) -> int | None:
        return self.process.pid if self.process is not None else None

    def wait(self) -> int:
        if self.process is None:
            return FAILED_STATUS
        returncode = self.process.wait()
        if returncode < 0:
            # killed by a signal
            return 128 - returncode
        return returncode


def open_pipes(count: int) -> list[PipeEnds]:
    pipes: list[PipeEnds] = []
    try:
        for _ in range(count):
            pipes.append(os.pipe())
    except OSError:
        close_pipes(pipes)
        raise
    return pipes


def close_pipes(pipes: list[PipeEnds]) -> None:
    for read_end, write_end in pipes:
        os.close(read_end)
        os.close(write_end)


def plan_wiring(pipeline: Pipeline, pipes: list[PipeEnds]) -> list[StageWiring]:
    """Describe how every stage connects to its neighbours.

    Stage ``i`` writes into pipe ``i`` unless it is last and reads from pipe
    ``i - 1`` unless it is first. A file target overrides the pipe at spawn time.
    """

    last = len(pipeline) - 1
    plan: list[StageWiring] = []
    for index, command in enumerate(pipeline):
        wiring = StageWiring(index=index, argv=command.argv, output_target=command.output_target)
        if index < last:
            wiring.stdout = pipes[index][1]
            if command.stderr_to_pipe:
                wiring.stderr = pipes[index][1]
        if index > 0:
            wiring.stdin = pipes[index - 1][0]
        plan.append(wiring)
    return plan


def _write_diagnostic(fd: int | None, message: str, diagnostics: TextIO | None) -> None:
    if fd is None:
        stream = diagnostics or sys.stderr
        stream.write(message)
        stream.flush()
        return
    os.write(fd, message.encode())


def spawn_stage(wiring: StageWiring, diagnostics: TextIO | None = None) -> StageProcess:
    """Start one stage and return immediately without waiting for it.

    Messages about a stage that cannot start go to its own error target, or to
    ``diagnostics`` (default ``sys.stderr``) when the stage inherits stderr.
    """

    stdout = wiring.stdout
    stderr = wiring.stderr
    file_fd: int | None = None
    try:
        if wiring.output_target is not None:
            try:
                file_fd = open_output_target(wiring.output_target)
            except (OSError, ValueError) as exc:
                logger.info("Cannot open %r for stage %d: %s", wiring.output_target.filename, wiring.index, exc)
                _write_diagnostic(stderr, CANNOT_OPEN_OUTPUT, diagnostics)
                return StageProcess(wiring.index)
            stdout = file_fd
            if wiring.output_target.includes_stderr:
                stderr = file_fd
        try:
            # close_fds leaves the child with nothing but its own 0, 1 and 2
            process = subprocess.Popen(
                wiring.argv,
                stdin=wiring.stdin,
                stdout=stdout,
                stderr=stderr,
                close_fds=True,
            )
        except (OSError, ValueError) as exc:
            # ValueError: embedded null byte in argv
            logger.info("Cannot execute %r for stage %d: %s", wiring.argv[0], wiring.index, exc)
            _write_diagnostic(stderr, COMMAND_NOT_FOUND, diagnostics)
            return StageProcess(wiring.index)
    finally:
        if file_fd is not None:
            os.close(file_fd)
    logger.debug("Spawned stage %d as pid %d: %s", wiring.index, process.pid, wiring.argv)
    return StageProcess(wiring.index, process)


def run_pipeline(pipeline: Pipeline, diagnostics: TextIO | None = None) -> list[int]:
    """Run every stage concurrently and record exit statuses in stage order."""

    pipes = open_pipes(pipeline.pipe_count)
    stages: list[StageProcess] = []
    try:
        for wiring in plan_wiring(pipeline, pipes):
            stages.append(spawn_stage(wiring, diagnostics))
    except BaseException:
        close_pipes(pipes)
        for stage in stages:
            stage.wait()
        raise
    close_pipes(pipes)
    for command, stage in zip(pipeline, stages):
        command.exit_status = stage.wait()
        logger.debug("Stage %d (pid %s) exited with %d", stage.index, stage.pid, command.exit_status)
    return pipeline.exit_statuses


__all__ = [
    "StageProcess",
    "StageWiring",
    "close_pipes",
    "open_pipes",
    "plan_wiring",
    "run_pipeline",
    "spawn_stage",
]
