import os

import pytest

from sshell.command import OutputTarget
from sshell.exceptions import BadFile, MislocatedRedirect
from sshell.parser import parse_pipeline
from sshell.redirect import open_output_target, verify_output_target


def test_verify_creates_missing_file(tmp_path):
    target = tmp_path / "out.txt"
    verify_output_target(str(target))
    assert target.exists()
    assert target.read_text() == ""


def test_verify_does_not_truncate(tmp_path):
    target = tmp_path / "keep.txt"
    target.write_text("precious\n")
    verify_output_target(str(target))
    assert target.read_text() == "precious\n"


def test_verify_rejects_path_in_missing_directory(tmp_path):
    target = tmp_path / "missing" / "out.txt"
    with pytest.raises(BadFile) as exc:
        verify_output_target(str(target))
    assert exc.value.filename == str(target)
    assert str(exc.value) == "Error: cannot open output file"
    assert not target.exists()


def test_verify_rejects_directory(tmp_path):
    with pytest.raises(BadFile):
        verify_output_target(str(tmp_path))


def test_failed_parse_leaves_existing_target_intact(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "keep.txt").write_text("precious\n")
    with pytest.raises(MislocatedRedirect):
        parse_pipeline("echo hi > keep.txt | cat")
    assert (tmp_path / "keep.txt").read_text() == "precious\n"


def test_open_output_target_truncates(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("old contents\n")
    fd = open_output_target(OutputTarget(str(target)))
    try:
        assert target.read_text() == ""
    finally:
        os.close(fd)
