# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import platform
from abc import ABC, abstractmethod
from typing import Optional

from thrift_compiler.execution_result import ExecutionResult

WINDOWS_EXECUTABLE = "thrift.exe"
DEFAULT_EXECUTABLE = "thrift"


def default_executable_name(system: Optional[str] = None) -> str:
    """Finds the default executable name for the host platform.

    (`thrift.exe` on Windows, `thrift` on all others).
    """
    system = platform.system() if system is None else system
    return WINDOWS_EXECUTABLE if system.startswith("Windows") else DEFAULT_EXECUTABLE


class ThriftCompiler(ABC):
    """A way of running the thrift IDL compiler.

    Arguments are the thrift compiler's own command line, e.g.:

        compiler.execute("-gen", "py", "-out", "build/gen", "tutorial.thrift")
    """

    @abstractmethod
    def execute(self, *args: str) -> ExecutionResult:
        """Executes the compiler with the supplied arguments.

        :raises: :class:`thrift_compiler.errors.ThriftCompilerError` if the compiler could not be
                 launched at all.
        """

    @property
    @abstractmethod
    def is_native_executable(self) -> bool:
        """True if the compiler is a native executable."""

    def version(self) -> str:
        """Returns the output of the compiler run with the `-version` flag."""
        return self.execute("-version").stdout.strip()

    def help(self) -> str:
        """Returns the usage text of the compiler run with the `-help` flag."""
        return self.execute("-help").stderr.strip()
