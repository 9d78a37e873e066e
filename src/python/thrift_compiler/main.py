# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

from colors import red

from thrift_compiler.errors import ThriftCompilerError
from thrift_compiler.factory import new_compiler
from thrift_compiler.util.logging import LogLevel, initialize_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "THRIFT_COMPILER_LOG_LEVEL"


def run(args: Sequence[str]) -> int:
    """Runs the thrift compiler with `args`, echoing its output, and returns its exit code."""
    compiler = new_compiler()
    logger.debug(f"Running {compiler!r} with {list(args)}")
    result = compiler.execute(*args)
    result.raise_for_failure()
    if result.interrupted:
        logger.warning("The thrift compiler was interrupted before it finished.")
    sys.stdout.write(result.stdout)
    sys.stderr.write(result.stderr)
    return result.exit_code


def main() -> None:
    try:
        level = LogLevel.parse(os.environ.get(LOG_LEVEL_ENV_VAR, LogLevel.WARN.value))
    except ValueError as e:
        sys.stderr.write(red(f"{e}\n"))
        sys.exit(1)
    initialize_logging(level)

    try:
        exit_code = run(sys.argv[1:])
    except ThriftCompilerError as e:
        sys.stderr.write(red(f"{e}\n"))
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
