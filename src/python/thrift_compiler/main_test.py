# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import sys
from typing import Iterator

import pytest

from thrift_compiler import main as main_module
from thrift_compiler.compiler import ThriftCompiler
from thrift_compiler.execution_result import ExecutionResult
from thrift_compiler.main import main, run


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    logger = logging.getLogger("thrift_compiler")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def native_thrift(monkeypatch, fake_thrift: str) -> str:
    monkeypatch.setenv("THRIFT_COMPILER_NATIVE", "true")
    monkeypatch.setenv("THRIFT_COMPILER_EXECUTABLE", fake_thrift)
    return fake_thrift


def test_run_echoes_output(native_thrift: str, capsys) -> None:
    assert run(["-gen", "py", "tutorial.thrift"]) == 3
    captured = capsys.readouterr()
    assert captured.out == "args: -gen py tutorial.thrift\n"
    assert captured.err == "warning: generated\n"


def test_main_exits_with_compiler_exit_code(native_thrift: str, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["thrift-compiler", "-version"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0
    assert capsys.readouterr().out == "  Thrift version 0.10.0  \n"


def test_main_reports_launch_failure(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.setenv("THRIFT_COMPILER_NATIVE", "true")
    monkeypatch.setenv("THRIFT_COMPILER_EXECUTABLE", str(tmp_path / "missing-thrift"))
    monkeypatch.setattr(sys, "argv", ["thrift-compiler", "-version"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
    assert "Problem executing" in capsys.readouterr().err


def test_main_rejects_bad_log_level(monkeypatch, capsys) -> None:
    monkeypatch.setenv("THRIFT_COMPILER_LOG_LEVEL", "chatty")
    monkeypatch.setattr(sys, "argv", ["thrift-compiler"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
    assert "Unknown log level 'chatty'" in capsys.readouterr().err


def test_run_reraises_captured_failure(monkeypatch, capsys) -> None:
    failure = OSError("stdout went away")

    class BrokenCompiler(ThriftCompiler):
        @property
        def is_native_executable(self) -> bool:
            return True

        def execute(self, *args: str) -> ExecutionResult:
            return ExecutionResult(0, False, "partial", "", failure=failure)

    monkeypatch.setattr(main_module, "new_compiler", lambda: BrokenCompiler())
    with pytest.raises(OSError) as exc_info:
        run(["-version"])
    assert exc_info.value is failure
    assert capsys.readouterr().out == ""
