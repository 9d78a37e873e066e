# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).


class ThriftCompilerError(Exception):
    """Indicates the thrift compiler could not be run at all.

    A compiler that runs and fails is not an error: its exit code and stderr are reported in an
    `ExecutionResult` instead.
    """


class EmbeddedRuntimeError(ThriftCompilerError):
    """Indicates the embedded compiler runtime, or the JVM needed to run it, is unavailable."""


class ConfigError(ThriftCompilerError):
    """Indicates a malformed config file or an invalid option value."""
