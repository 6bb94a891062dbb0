import io
import os

import pytest

from sshell import Shell, ShellLimits
from sshell.shell.registry import BUILTINS


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def shell(workdir) -> Shell:
    return Shell(stdout=io.StringIO(), stderr=io.StringIO())


def test_builtins_are_registered(shell):
    assert sorted(BUILTINS) == ["cd", "exit", "pwd", "sls"]


def test_pwd(shell):
    report = shell.exec("pwd")
    assert report.exit_statuses == (0,)
    assert shell.stdout.getvalue() == f"{os.getcwd()}\n"
    assert shell.stderr.getvalue() == "+ completed 'pwd' [0]\n"


def test_cd_changes_directory(shell, workdir):
    (workdir / "sub").mkdir()
    report = shell.exec("cd sub")
    assert report.exit_statuses == (0,)
    assert os.path.samefile(os.getcwd(), workdir / "sub")


@pytest.mark.parametrize("line", ["cd missing-dir", "cd"])
def test_cd_failure(shell, line):
    report = shell.exec(line)
    assert report.exit_statuses == (1,)
    assert "Error: cannot cd into directory\n" in shell.stderr.getvalue()
    assert f"+ completed '{line}' [1]" in shell.stderr.getvalue()


def test_sls_lists_visible_files_with_sizes(shell, workdir):
    (workdir / "b.txt").write_text("12345")
    (workdir / "a.txt").write_text("")
    (workdir / ".hidden").write_text("secret")
    report = shell.exec("sls")
    assert report.exit_statuses == (0,)
    assert shell.stdout.getvalue() == "a.txt (0 bytes)\nb.txt (5 bytes)\n"


def test_exit_requests_stop(shell):
    report = shell.exec("exit")
    assert shell.exit_requested
    assert report.exit_statuses == (0,)
    assert shell.stderr.getvalue() == "Bye...\n+ completed 'exit' [0]\n"


def test_completion_report_for_pipeline(shell):
    report = shell.exec("false | true")
    assert report.line == "false | true"
    assert report.exit_statuses == (1, 0)
    assert shell.stderr.getvalue() == "+ completed 'false | true' [1][0]\n"


def test_parse_error_skips_execution(shell, workdir):
    assert shell.exec("touch made.txt | b | c | d | e") is None
    assert shell.stderr.getvalue() == "Error: too many pipes\n"
    assert not (workdir / "made.txt").exists()


def test_empty_line_is_silent(shell):
    assert shell.exec("   ") is None
    assert shell.stderr.getvalue() == ""


def test_custom_limits(workdir):
    shell = Shell(limits=ShellLimits(max_commands=2), stdout=io.StringIO(), stderr=io.StringIO())
    assert shell.exec("true | true | true") is None
    assert shell.stderr.getvalue() == "Error: too many pipes\n"


def test_builtin_first_stage_skips_remaining_stages(shell, workdir):
    # Known limitation: only the builtin runs, later stages are dropped.
    report = shell.exec("pwd | touch made.txt")
    assert report.exit_statuses == (0, 0)
    assert shell.stdout.getvalue() == f"{os.getcwd()}\n"
    assert not (workdir / "made.txt").exists()


def test_cd_with_pipe_only_changes_directory(shell, workdir):
    (workdir / "sub").mkdir()
    report = shell.exec("cd sub | touch made.txt")
    assert report.exit_statuses == (0, 0)
    assert os.path.samefile(os.getcwd(), workdir / "sub")
    assert not (workdir / "sub" / "made.txt").exists()


def test_spawn_failure_reported_on_shell_stderr(shell):
    report = shell.exec("no-such-program-xyz")
    assert report.exit_statuses == (1,)
    assert shell.stderr.getvalue() == (
        "Error: command not found\n+ completed 'no-such-program-xyz' [1]\n"
    )


def test_null_byte_in_arguments_fails_only_that_stage(shell):
    report = shell.exec("true | echo a\x00b")
    assert report.exit_statuses == (0, 1)
    assert "Error: command not found\n" in shell.stderr.getvalue()


def test_null_byte_in_filename_is_bad_file(shell):
    assert shell.exec("echo hi > a\x00b") is None
    assert shell.stderr.getvalue() == "Error: cannot open output file\n"
