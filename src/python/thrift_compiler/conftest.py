# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from thrift_compiler import factory, runtime

WriteScript = Callable[[str, str], str]


@pytest.fixture(autouse=True)
def hermetic_environment(monkeypatch, tmp_path: Path) -> Iterator[None]:
    """Keeps the caller's config, caches and default properties out of every test."""
    for name in list(os.environ):
        if name.startswith("THRIFT_COMPILER_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("THRIFT_COMPILER_CACHE_DIR", str(tmp_path / "cache"))
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    factory._default_properties = None
    runtime._extracted.clear()
    yield
    factory._default_properties = None
    runtime._extracted.clear()


@pytest.fixture
def write_script(tmp_path: Path) -> WriteScript:
    """Returns a function that writes an executable shell script into a `bin` dir."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def write(name: str, body: str) -> str:
        path = bin_dir / name
        path.write_text("#!/bin/sh\n" + textwrap.dedent(body).strip() + "\n")
        path.chmod(0o755)
        return str(path)

    return write


FAKE_THRIFT = """
    case "$1" in
      -version) echo "  Thrift version 0.10.0  " ;;
      -help) echo "Usage: thrift [options] file" >&2 ; echo "Options:" >&2 ; exit 1 ;;
      *) echo "args: $*" ; echo "warning: generated" >&2 ; exit 3 ;;
    esac
"""


@pytest.fixture
def fake_thrift(write_script: WriteScript) -> str:
    return write_script("thrift", FAKE_THRIFT)


@pytest.fixture
def fake_java(write_script: WriteScript) -> str:
    """A `java` that reports the argv it was run with, one token per line."""
    return write_script(
        "java",
        """
        for arg in "$@"; do
          echo "$arg"
        done
        echo "CLASSPATH=${CLASSPATH}" >&2
        """,
    )
