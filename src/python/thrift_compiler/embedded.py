# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
import string
from typing import List, Optional, Sequence

from thrift_compiler.compiler import ThriftCompiler
from thrift_compiler.errors import EmbeddedRuntimeError
from thrift_compiler.execution_result import ExecutionResult
from thrift_compiler.java.distribution import Distribution
from thrift_compiler.java.executor import Executor, SubprocessExecutor
from thrift_compiler.runtime import RUNTIME_MAIN, extract_runtime

logger = logging.getLogger(__name__)


PROGRAM_NAME = "thrift"

# Options whose value is a file path.
FILE_PATH_FLAGS = frozenset(("-out", "-o", "-I"))

_DRIVE_LETTERS = frozenset(string.ascii_letters)


def cygwinify_file_path(filepath: str) -> str:
    """Converts absolute Windows file paths (i.e., `C:\\somedir\\somefile.thrift`) to Cygwin-style
    file paths (i.e., `/cygdrive/c/somedir/somefile.thrift`).

    Backslashes are turned into forward slashes whether or not the path starts with a drive letter.
    """
    if (
        len(filepath) >= 3
        and filepath[0] in _DRIVE_LETTERS
        and filepath[1] == ":"
        and filepath[2] in "/\\"
    ):
        prefix = f"/cygdrive/{filepath[0].lower()}/"
        filepath = filepath[3:]
    else:
        prefix = ""
    return prefix + filepath.replace("\\", "/")


def create_vm_args(args: Sequence[str], is_windows: bool) -> List[str]:
    """Converts compiler arguments into the argv the embedded runtime expects.

    The translated compiler is a C program, so it expects its program name in argv[0].

    The embedded runtime cannot resolve absolute Windows paths either, so if `is_windows` the values
    of the file path flags (`-o`, `-out` and `-I`) and the trailing IDL file are converted to
    Cygwin-style paths, which its `realpath` emulation does handle.
    """
    vm_args = [PROGRAM_NAME]
    if not is_windows:
        vm_args.extend(args)
        return vm_args

    last = len(args) - 1
    expects_file_path = False
    for i, arg in enumerate(args):
        if expects_file_path or i == last:
            vm_args.append(cygwinify_file_path(arg))
            expects_file_path = False
        else:
            vm_args.append(arg)
            expects_file_path = arg in FILE_PATH_FLAGS
    return vm_args


class EmbeddedThriftCompiler(ThriftCompiler):
    """Runs the embedded, JVM bytecode translation of the thrift compiler."""

    def __init__(
        self,
        *,
        runtime: Optional[str] = None,
        java: Optional[str] = None,
        executor: Optional[Executor] = None,
        timeout: Optional[float] = None,
        jvm_options: Sequence[str] = (),
    ) -> None:
        """
        :param runtime: a path to the runtime archive; defaults to the packaged one, extracted.
        :param java: the java binary to run the runtime with; see `Distribution`.
        :param executor: runs the runtime; defaults to a `SubprocessExecutor` for `java`.
        :param timeout: kill the compiler, marking the result interrupted, after this many seconds.
        :param jvm_options: extra options for the JVM.
        """
        self._runtime = runtime
        self._java = java
        self._executor = executor
        self._timeout = timeout
        self._jvm_options = tuple(jvm_options)

    @property
    def is_native_executable(self) -> bool:
        return False

    def is_windows(self) -> bool:
        return os.sep == "\\"

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            self._executor = SubprocessExecutor(Distribution(self._java))
        return self._executor

    def runtime_path(self) -> str:
        if self._runtime is None:
            return extract_runtime()
        if not os.path.isfile(self._runtime):
            raise EmbeddedRuntimeError(
                f"The configured thrift compiler runtime {self._runtime} does not exist."
            )
        return self._runtime

    def execute(self, *args: str) -> ExecutionResult:
        vm_args = create_vm_args(args, self.is_windows())
        executor = self.executor
        runtime = self.runtime_path()
        logger.debug(f"Running the embedded thrift compiler from {runtime} with {vm_args}")
        return executor.execute(
            classpath=[runtime],
            main=RUNTIME_MAIN,
            jvm_options=self._jvm_options,
            args=vm_args,
            timeout=self._timeout,
        )

    def __str__(self) -> str:
        return f"[{type(self).__name__}]"
