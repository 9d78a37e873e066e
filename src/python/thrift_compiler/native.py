# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

from typing import Optional

from thrift_compiler.compiler import ThriftCompiler
from thrift_compiler.execution_result import ExecutionResult
from thrift_compiler.process import run_process


class NativeThriftCompiler(ThriftCompiler):
    """Runs a natively built thrift executable in a subprocess."""

    def __init__(self, executable: str, *, timeout: Optional[float] = None) -> None:
        """
        :param executable: a path to the thrift executable, or a name to look up on the `PATH`.
        :param timeout: kill the compiler, marking the result interrupted, after this many seconds.
        """
        self._executable = executable
        self._timeout = timeout

    @property
    def executable(self) -> str:
        return self._executable

    @property
    def is_native_executable(self) -> bool:
        return True

    def execute(self, *args: str) -> ExecutionResult:
        if any(arg is None for arg in args):
            raise ValueError(f"args cannot be None, given: {args}")
        return run_process([self._executable, *args], timeout=self._timeout)

    def __repr__(self) -> str:
        return f"NativeThriftCompiler(executable={self._executable!r})"
