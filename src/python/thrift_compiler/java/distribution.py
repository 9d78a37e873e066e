# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
import shutil
from typing import Mapping, Optional

from thrift_compiler.errors import EmbeddedRuntimeError

logger = logging.getLogger(__name__)


class Distribution:
    """Represents the local java installation used to launch the embedded compiler runtime.

    The `java` binary is located, in order, from an explicitly given path or command name, from
    `$JAVA_HOME/bin`, and finally from the `PATH`.
    """

    class Error(EmbeddedRuntimeError):
        """Indicates an invalid java distribution."""

    @staticmethod
    def _is_executable(path: str) -> bool:
        return os.path.isfile(path) and os.access(path, os.X_OK)

    def __init__(self, java: Optional[str] = None, *, env: Optional[Mapping[str, str]] = None):
        """
        :param java: a path to a java binary, or a command name to look up on the `PATH`.
        :param env: the environment to consult for `JAVA_HOME` and `PATH`; defaults to `os.environ`.
        """
        self._requested = java
        self._env = os.environ if env is None else env
        self._java: Optional[str] = None

    def _locate(self) -> Optional[str]:
        path = self._env.get("PATH", "")
        if self._requested:
            if os.path.dirname(self._requested):
                return self._requested if self._is_executable(self._requested) else None
            return shutil.which(self._requested, path=path)

        java_home = self._env.get("JAVA_HOME")
        if java_home:
            for name in ("java", "java.exe"):
                candidate = os.path.join(java_home, "bin", name)
                if self._is_executable(candidate):
                    return candidate
            logger.warning(f"No java binary found under JAVA_HOME={java_home}, trying the PATH.")
        return shutil.which("java", path=path)

    def validate(self) -> None:
        """Raises Distribution.Error if no usable java binary can be found."""
        if self._java:
            return
        java = self._locate()
        if not java:
            raise self.Error(
                f"Failed to locate a java binary (requested: {self._requested or 'java'}). The "
                f"embedded thrift compiler needs a JVM: install one, set JAVA_HOME or configure "
                f"thrift.compiler.java."
            )
        logger.debug(f"Using java binary {java}")
        self._java = java

    @property
    def java(self) -> str:
        """Returns the path to this distribution's java command.

        If this distribution has no valid java command raises Distribution.Error.
        """
        self.validate()
        assert self._java is not None
        return self._java

    def __repr__(self) -> str:
        return f"Distribution(java={self._java or self._requested!r})"
