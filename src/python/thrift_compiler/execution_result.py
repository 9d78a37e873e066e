# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionResult:
    """The outcome of a single thrift compiler execution.

    The `exit_code` is only meaningful if the execution was not interrupted and no `failure` was
    captured; see `successful`.
    """

    exit_code: int
    interrupted: bool
    stdout: str
    stderr: str
    failure: BaseException | None = None

    @property
    def successful(self) -> bool:
        return self.exit_code == 0 and not self.interrupted and self.failure is None

    def raise_for_failure(self) -> None:
        """Re-raises the failure captured during execution, if any."""
        if self.failure is not None:
            raise self.failure

    def __str__(self) -> str:
        return (
            f"ExecutionResult[exit code: {self.exit_code}, stderr:{self.stderr}, "
            f"stdout:{self.stdout}, interrupted:{self.interrupted}]"
        )
