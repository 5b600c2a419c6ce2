import os
import sys

from swaprouter.paths import (
    absolute_path,
    current_dir,
    execute_dir,
    file_exist,
    make_name,
)


def test_make_name_layout():
    parts = make_name("swaprouter", "1.0").split("/")
    assert parts[0] == "swaprouter"
    assert parts[1] == "v1.0"
    assert parts[2] == sys.platform
    assert len(parts) == 4


def test_file_exist(tmp_path):
    target = tmp_path / "present.txt"
    target.write_text("data")
    assert file_exist(str(target)) is True
    assert file_exist(str(tmp_path)) is True
    assert file_exist(str(tmp_path / "missing.txt")) is False


def test_absolute_path_keeps_absolute(tmp_path):
    absolute = str(tmp_path / "config.toml")
    assert absolute_path("/somewhere/else", absolute) == absolute


def test_absolute_path_joins_relative(tmp_path):
    result = absolute_path(str(tmp_path), "config.toml")
    assert result == os.path.join(str(tmp_path), "config.toml")
    assert os.path.isabs(result)


def test_execute_dir(tmp_path, monkeypatch):
    program = tmp_path / "bin" / "prog"
    monkeypatch.setattr(sys, "argv", [str(program)])
    assert execute_dir() == str(tmp_path / "bin")


def test_current_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert os.path.realpath(current_dir()) == os.path.realpath(str(tmp_path))