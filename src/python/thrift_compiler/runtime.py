# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Access to the embedded thrift compiler runtime packaged with this distribution.

The embedded compiler is a translation of the native thrift compiler to JVM bytecode, produced by
an external toolchain and dropped into `thrift_compiler/resources` at build time along with the
version banner it prints. Since this package may be imported from a zip (e.g. a PEX), the archive is
copied out to a content addressed cache directory before a JVM can be pointed at it.
"""

from __future__ import annotations

import hashlib
import importlib.resources
import logging
import os
import threading
from typing import Any, Dict, Mapping, Optional

from thrift_compiler.errors import EmbeddedRuntimeError, ThriftCompilerError
from thrift_compiler.util.dirutil import safe_concurrent_creation

logger = logging.getLogger(__name__)


RUNTIME_ARCHIVE = "thrift-compiler.jar"
VERSION_RESOURCE = "thrift.compiler.version"

# The entry point of the translated compiler; it expects a C-style argv, program name first.
RUNTIME_MAIN = "org.apache.thrift.compiler.internal.Runtime"

CACHE_DIR_ENV_VAR = "THRIFT_COMPILER_CACHE_DIR"

_extracted: Dict[str, str] = {}
_extract_lock = threading.Lock()


def _resource(name: str) -> Any:
    return importlib.resources.files("thrift_compiler").joinpath("resources").joinpath(name)


def embedded_compiler_version() -> str:
    """Returns the `-version` banner of the embedded compiler, e.g. `Thrift version 0.10.0`."""
    resource = _resource(VERSION_RESOURCE)
    if not resource.is_file():
        raise ThriftCompilerError(f"{VERSION_RESOURCE} not found")
    return resource.read_text(encoding="utf-8").strip()


def default_cache_dir(env: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if env is None else env
    if env.get(CACHE_DIR_ENV_VAR):
        return env[CACHE_DIR_ENV_VAR]
    cache_home = env.get("XDG_CACHE_HOME") or os.path.join(os.path.expanduser("~"), ".cache")
    return os.path.join(cache_home, "thrift-compiler")


def extract_runtime(cache_dir: Optional[str] = None, *, archive: Any = None) -> str:
    """Returns the path of the embedded runtime archive on the local filesystem.

    :param cache_dir: Where to extract to; defaults to `default_cache_dir()`.
    :param archive: The archive resource to extract; defaults to the one packaged with us.
    :raises: :class:`EmbeddedRuntimeError` if there is no archive to extract.
    """
    archive = archive if archive is not None else _resource(RUNTIME_ARCHIVE)
    if not archive.is_file():
        raise EmbeddedRuntimeError(
            f"The embedded thrift compiler runtime {RUNTIME_ARCHIVE} is not packaged with this "
            f"distribution. Build it, configure its path or use a native thrift executable."
        )
    cache_dir = cache_dir or default_cache_dir()
    key = f"{cache_dir}:{archive}"

    with _extract_lock:
        if key in _extracted:
            return _extracted[key]
        payload = archive.read_bytes()
        fingerprint = hashlib.sha256(payload).hexdigest()
        target = os.path.join(cache_dir, fingerprint, RUNTIME_ARCHIVE)
        if not os.path.isfile(target):
            logger.debug(f"Extracting the embedded thrift compiler runtime to {target}")
            with safe_concurrent_creation(target) as tmp_path:
                with open(tmp_path, "wb") as fp:
                    fp.write(payload)
        _extracted[key] = target
        return target


def extract_runtime_in_background() -> threading.Thread:
    """Starts extracting the (large) runtime archive so a later execution finds it ready."""

    def extract() -> None:
        try:
            extract_runtime()
        except ThriftCompilerError as e:
            # Raised again, to the caller, by the first embedded execution.
            logger.debug(f"Could not pre-extract the embedded thrift compiler runtime: {e}")

    thread = threading.Thread(target=extract, name="thrift-runtime-extractor", daemon=True)
    thread.start()
    return thread
