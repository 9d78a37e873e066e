# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from thrift_compiler.compiler import ThriftCompiler, default_executable_name
from thrift_compiler.embedded import EmbeddedThriftCompiler
from thrift_compiler.errors import ThriftCompilerError
from thrift_compiler.native import NativeThriftCompiler
from thrift_compiler.options import (
    PROPERTY_EXECUTABLE,
    PROPERTY_NATIVE,
    CompilerOptions,
    load_config,
    native_configured,
)
from thrift_compiler.runtime import embedded_compiler_version, extract_runtime_in_background

logger = logging.getLogger(__name__)

# Bounds the `-version` probe of whatever `thrift` happens to be on the PATH.
PROBE_TIMEOUT = 30.0

_default_properties_lock = threading.Lock()
_default_properties: Optional[Tuple[Tuple[str, str], ...]] = None


def new_compiler(check_path_for_native: bool = True) -> ThriftCompiler:
    """Returns a new `ThriftCompiler`.

    Unless the native switch is configured in the environment or the config file, and if
    `check_path_for_native`, a native thrift on the `PATH` is used when it is the same version as
    the embedded compiler; otherwise the embedded compiler is used.
    """
    config = load_config()
    if check_path_for_native and not native_configured(config=config):
        return create_compiler(default_properties(), config=config)
    return create_compiler(None, config=config)


def create_compiler(
    properties: Optional[Mapping[str, Any]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> ThriftCompiler:
    """Returns a new `ThriftCompiler` as dictated first by `properties`, then by the environment and
    the config file.

    See `CompilerOptions.resolve` for the meaning of `env` and `config`.
    """
    options = CompilerOptions.resolve(properties, env=env, config=config)
    if options.native:
        executable = options.executable or default_executable_name()
        logger.debug(f"Using the native thrift compiler {executable}")
        return NativeThriftCompiler(executable, timeout=options.timeout)
    logger.debug("Using the embedded thrift compiler")
    return EmbeddedThriftCompiler(
        runtime=options.runtime, java=options.java, timeout=options.timeout
    )


def default_properties() -> Dict[str, str]:
    """Returns the properties to use when none are configured, probing for them on first use.

    First `-version` is run using the default executable name. If that executable is missing or
    reports a different version than the embedded compiler, the embedded compiler is the fallback
    and its (large) runtime archive starts extracting in the background.
    """
    global _default_properties
    if _default_properties is None:
        with _default_properties_lock:
            if _default_properties is None:
                _default_properties = _find_default_properties()
    return dict(_default_properties)


def _find_default_properties() -> Tuple[Tuple[str, str], ...]:
    default_executable = default_executable_name()
    native_compiler = NativeThriftCompiler(default_executable, timeout=PROBE_TIMEOUT)
    try:
        native_version: Optional[str] = native_compiler.version()
    except ThriftCompilerError as e:
        logger.debug(f"No native thrift compiler available: {e}")
        native_version = None

    embedded_version = embedded_compiler_version()
    if native_version is not None and native_version == embedded_version:
        logger.debug(f"Found native {default_executable} matching {embedded_version!r}")
        return ((PROPERTY_NATIVE, "true"), (PROPERTY_EXECUTABLE, default_executable))

    if native_version is not None:
        logger.info(
            f"Ignoring native {default_executable} ({native_version!r}), the embedded compiler is "
            f"{embedded_version!r}."
        )
    extract_runtime_in_background()
    return ()
