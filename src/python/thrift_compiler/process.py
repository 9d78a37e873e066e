# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import io
import logging
import os
import shlex
import subprocess
import threading
from typing import IO, Mapping, Optional, Sequence

import psutil

from thrift_compiler.errors import ThriftCompilerError
from thrift_compiler.execution_result import ExecutionResult

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


class _StreamDrainer:
    """Copies one output stream of a child process into memory on a daemon thread."""

    def __init__(self, name: str, stream: IO[bytes]) -> None:
        self._stream = stream
        self._buffer = io.BytesIO()
        self.failure: BaseException | None = None
        self._thread = threading.Thread(target=self._drain, name=f"drain-{name}", daemon=True)

    def start(self) -> _StreamDrainer:
        self._thread.start()
        return self

    def _drain(self) -> None:
        try:
            for chunk in iter(lambda: self._stream.read1(_CHUNK_SIZE), b""):  # type: ignore
                self._buffer.write(chunk)
        except Exception as e:
            # Surfaced to the caller through `ExecutionResult.failure`.
            self.failure = e
        finally:
            self._stream.close()

    def join(self) -> str:
        self._thread.join()
        return self._buffer.getvalue().decode("utf-8", errors="replace")


class SubprocessProcessHandler:
    """Waits on, kills and drains the output of a subprocess.Popen object."""

    def __init__(self, process: subprocess.Popen) -> None:
        self._process = process

    def wait(self, timeout: Optional[float] = None) -> int:
        return self._process.wait(timeout=timeout)

    def kill(self) -> None:
        """Kills the process along with any processes it spawned."""
        try:
            parent = psutil.Process(self._process.pid)
            victims = parent.children(recursive=True) + [parent]
        except psutil.NoSuchProcess:
            return
        for victim in victims:
            try:
                victim.kill()
            except psutil.NoSuchProcess:
                pass

    def communicate_draining(self, timeout: Optional[float] = None) -> ExecutionResult:
        """Like `subprocess.communicate`, but drains stdout and stderr on two threads.

        Both drainer threads are joined before the exit code is read. If the process outlives the
        `timeout` it is killed and the result is marked interrupted, keeping whatever output was
        produced up to that point.
        """
        assert self._process.stdout is not None and self._process.stderr is not None
        stdout = _StreamDrainer("stdout", self._process.stdout).start()
        stderr = _StreamDrainer("stderr", self._process.stderr).start()

        interrupted = False
        try:
            self.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {self._process.pid} timed out after {timeout}s, killing it.")
            interrupted = True
            self.kill()
        except BaseException:
            self.kill()
            raise

        out = stdout.join()
        err = stderr.join()
        exit_code = self.wait()
        return ExecutionResult(
            exit_code=exit_code,
            interrupted=interrupted,
            stdout=out,
            stderr=err,
            failure=stdout.failure or stderr.failure,
        )


def run_process(
    argv: Sequence[str],
    *,
    timeout: Optional[float] = None,
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExecutionResult:
    """Runs `argv` to completion with an empty stdin, capturing its stdout and stderr.

    :raises: :class:`ThriftCompilerError` if the process could not be spawned.
    """
    logger.debug(f"Executing: {shlex.join(argv)} at cwd={cwd or os.getcwd()}")
    try:
        process = subprocess.Popen(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=None if env is None else dict(env),
        )
    except OSError as e:
        raise ThriftCompilerError(f"Problem executing {argv[0]}: {e}") from e
    return SubprocessProcessHandler(process).communicate_draining(timeout=timeout)
