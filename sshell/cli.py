"""Command-line interface for sshell."""

from __future__ import annotations

import argparse
import logging
import sys

from .shell import Shell
from .shell.core import DEFAULT_PROMPT

PARSE_ERROR_EXIT = 2


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--prompt",
        default=DEFAULT_PROMPT,
        help="Prompt printed before each line is read.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parser and process events to stderr.",
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _stdin_is_terminal() -> bool:
    isatty = getattr(sys.stdin, "isatty", None)
    return bool(isatty and isatty())


def _run_exec(args: argparse.Namespace) -> int:
    shell = Shell(prompt=args.prompt)
    report = shell.exec(args.line)
    if report is None:
        return PARSE_ERROR_EXIT
    return report.exit_statuses[-1]


def _run_shell(args: argparse.Namespace) -> int:
    shell = Shell(prompt=args.prompt)
    echo = not _stdin_is_terminal()
    try:
        while not shell.exit_requested:
            line = input(shell.prompt).rstrip("\n")
            if echo:
                sys.stdout.write(f"{line}\n")
                sys.stdout.flush()
            shell.exec(line)
    except (EOFError, KeyboardInterrupt):
        return 0
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="sshell")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("line", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


__all__ = ["main"]
