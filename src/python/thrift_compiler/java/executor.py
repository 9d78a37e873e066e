# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from thrift_compiler.errors import ThriftCompilerError
from thrift_compiler.execution_result import ExecutionResult
from thrift_compiler.process import run_process

logger = logging.getLogger(__name__)


class Executor(ABC):
    """Executes java programs."""

    @staticmethod
    def _scrub_args(classpath, main, jvm_options, args):
        if isinstance(classpath, str):
            classpath = [classpath]
        if not isinstance(main, str) or not main:
            raise ValueError(f"A non-empty main classname is required, given: {main}")
        return list(classpath), main, list(jvm_options or ()), list(args or ())

    class Error(ThriftCompilerError):
        """Indicates an error launching a java program."""

    class InvalidDistribution(ValueError):
        """Indicates an invalid Distribution was used to construct this runner."""

    class Runner(ABC):
        """A re-usable executor that can run a configured java command line."""

        @property
        @abstractmethod
        def executor(self) -> Executor:
            """Returns the executor this runner uses to run itself."""

        @property
        def cmd(self) -> str:
            """Returns a string representation of the command that will be run."""
            return " ".join(self.command)

        @property
        @abstractmethod
        def command(self) -> List[str]:
            """Returns a copy of the command line that will be run as a list of command line
            tokens."""

        @abstractmethod
        def run(
            self, timeout: Optional[float] = None, cwd: Optional[str] = None
        ) -> ExecutionResult:
            """Runs the configured java command, capturing its output.

            If there is a problem executing the java program subclasses should raise Executor.Error.

            :param timeout: optionally kill the program after this many seconds
            :param cwd: optionally set the working directory
            """

    def __init__(self, distribution):
        """Constructs an Executor that can be used to launch java programs.

        :param distribution: a validated java distribution to use when launching java programs.
        """
        if not hasattr(distribution, "java") or not hasattr(distribution, "validate"):
            raise self.InvalidDistribution(
                f"A valid distribution is required, given: {distribution}"
            )
        distribution.validate()
        self._distribution = distribution

    @property
    def distribution(self):
        """Returns the `Distribution` this executor runs via."""
        return self._distribution

    def runner(
        self,
        classpath: Sequence[str],
        main: str,
        jvm_options: Optional[Sequence[str]] = None,
        args: Optional[Sequence[str]] = None,
    ) -> Executor.Runner:
        """Returns an `Executor.Runner` for the given java command."""
        return self._runner(*self._scrub_args(classpath, main, jvm_options, args))

    def execute(
        self,
        classpath: Sequence[str],
        main: str,
        jvm_options: Optional[Sequence[str]] = None,
        args: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        cwd: Optional[str] = None,
    ) -> ExecutionResult:
        """Launches the java program defined by the classpath and main.

        :param list classpath: the classpath for the java program
        :param string main: the fully qualified class name of the java program's entry point
        :param list jvm_options: an optional sequence of options for the underlying jvm
        :param list args: an optional sequence of args to pass to the java program
        :param timeout: optionally kill the program after this many seconds
        :param string cwd: optionally set the working directory

        Returns the result of the java program.
        Raises Executor.Error if there was a problem launching java itself.
        """
        runner = self.runner(classpath=classpath, main=main, jvm_options=jvm_options, args=args)
        return runner.run(timeout=timeout, cwd=cwd)

    @abstractmethod
    def _runner(self, classpath, main, jvm_options, args) -> Executor.Runner:
        """Subclasses should return a `Runner` that can execute the given java main."""

    def _create_command(self, classpath, main, jvm_options, args) -> List[str]:
        cmd = [self._distribution.java]
        cmd.extend(jvm_options)
        cmd.extend(["-cp", os.pathsep.join(classpath), main])
        cmd.extend(args)
        return cmd


class CommandLineGrabber(Executor):
    """Doesn't actually execute anything, just captures the cmd line."""

    def __init__(self, distribution):
        super().__init__(distribution=distribution)
        self._command: Optional[List[str]] = None  # Initialized when we run something.

    def _runner(self, classpath, main, jvm_options, args):
        self._command = self._create_command(classpath, main, jvm_options, args)

        class Runner(self.Runner):
            @property
            def executor(_):
                return self

            @property
            def command(_):
                return list(self._command)

            def run(_, timeout=None, cwd=None):
                return ExecutionResult(exit_code=0, interrupted=False, stdout="", stderr="")

        return Runner()

    @property
    def cmd(self) -> Optional[List[str]]:
        return self._command


class SubprocessExecutor(Executor):
    """Executes java programs by launching a jvm in a subprocess."""

    _SCRUBBED_ENV = (
        # The classpath is exactly the embedded runtime archive; CLASSPATH must not leak in.
        "CLASSPATH",
        # JVM options come only from our own configuration.
        "_JAVA_OPTIONS",
        "JAVA_TOOL_OPTIONS",
    )

    @classmethod
    def _scrubbed_env(cls) -> Dict[str, str]:
        env = dict(os.environ)
        for env_var in cls._SCRUBBED_ENV:
            value = env.pop(env_var, None)
            if value:
                logger.warning(f"Scrubbing {env_var}={value}")
        return env

    def _runner(self, classpath, main, jvm_options, args):
        command = self._create_command(classpath, main, jvm_options, args)

        class Runner(self.Runner):
            @property
            def executor(_):
                return self

            @property
            def command(_):
                return list(command)

            def run(_, timeout=None, cwd=None):
                return self._spawn(command, timeout=timeout, cwd=cwd)

        return Runner()

    def _spawn(
        self, cmd: List[str], timeout: Optional[float] = None, cwd: Optional[str] = None
    ) -> ExecutionResult:
        try:
            return run_process(cmd, timeout=timeout, cwd=cwd, env=self._scrubbed_env())
        except ThriftCompilerError as e:
            raise self.Error(f"Problem executing {self._distribution.java}: {e.__cause__}") from e
