# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import pytest

from thrift_compiler.embedded import EmbeddedThriftCompiler, create_vm_args, cygwinify_file_path
from thrift_compiler.errors import EmbeddedRuntimeError
from thrift_compiler.java.distribution import Distribution
from thrift_compiler.java.executor import CommandLineGrabber
from thrift_compiler.runtime import RUNTIME_MAIN


def test_windows_args() -> None:
    inputs = [
        "-debug",
        "-o", "A:\\test\\o",
        "-I", "Z:/test/I",
        "-I", "include",
        "-I", "@:\\test\\offbyone",
        "-I", "[:\\test\\offbyone",
        "-I", "`:\\test\\offbyone",
        "-I", "{:\\test\\offbyone",
        "-out", "a:/test\\out",
        "z:\\test/test.thrift",
    ]  # fmt: skip
    assert create_vm_args(inputs, is_windows=True) == [
        "thrift",
        "-debug",
        "-o", "/cygdrive/a/test/o",
        "-I", "/cygdrive/z/test/I",
        "-I", "include",
        "-I", "@:/test/offbyone",
        "-I", "[:/test/offbyone",
        "-I", "`:/test/offbyone",
        "-I", "{:/test/offbyone",
        "-out", "/cygdrive/a/test/out",
        "/cygdrive/z/test/test.thrift",
    ]  # fmt: skip


def test_non_windows_args_are_copied() -> None:
    inputs = ["-gen", "py", "-o", "C:\\out", "C:\\idl\\a.thrift"]
    assert create_vm_args(inputs, is_windows=False) == ["thrift", *inputs]
    assert create_vm_args([], is_windows=False) == ["thrift"]
    assert create_vm_args([], is_windows=True) == ["thrift"]


def test_windows_only_path_positions_are_rewritten() -> None:
    # The generator option is not a path, but the rewritten `-o` value must not arm the next token.
    inputs = ["-gen", "java:beans", "-o", "C:\\gen", "-strict", "C:\\idl\\a.thrift"]
    assert create_vm_args(inputs, is_windows=True) == [
        "thrift",
        "-gen",
        "java:beans",
        "-o",
        "/cygdrive/c/gen",
        "-strict",
        "/cygdrive/c/idl/a.thrift",
    ]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("C:\\a\\b", "/cygdrive/c/a/b"),
        ("c:/a/b", "/cygdrive/c/a/b"),
        ("Q:\\", "/cygdrive/q/"),
        ("relative\\dir\\file.thrift", "relative/dir/file.thrift"),
        ("/already/unix", "/already/unix"),
        ("C:relative", "C:relative"),
        ("1:\\a", "1:/a"),
        ("C:", "C:"),
        ("", ""),
    ],
)
def test_cygwinify_file_path(path: str, expected: str) -> None:
    assert cygwinify_file_path(path) == expected


def test_cygwinify_only_ascii_drive_letters() -> None:
    assert cygwinify_file_path("\u00e9:\\a") == "\u00e9:/a"


def test_execute_runs_runtime(fake_java: str, tmp_path) -> None:
    jar = tmp_path / "thrift-compiler.jar"
    jar.write_bytes(b"PK")
    compiler = EmbeddedThriftCompiler(runtime=str(jar), java=fake_java, jvm_options=["-Xss4m"])
    assert not compiler.is_native_executable

    result = compiler.execute("-gen", "py", "tutorial.thrift")
    assert result.successful
    assert result.stdout.splitlines() == [
        "-Xss4m",
        "-cp",
        str(jar),
        RUNTIME_MAIN,
        "thrift",
        "-gen",
        "py",
        "tutorial.thrift",
    ]


def test_execute_munges_paths_on_windows(fake_java: str, tmp_path) -> None:
    jar = tmp_path / "thrift-compiler.jar"
    jar.write_bytes(b"PK")

    class WindowsCompiler(EmbeddedThriftCompiler):
        def is_windows(self) -> bool:
            return True

    grabber = CommandLineGrabber(Distribution(fake_java))
    compiler = WindowsCompiler(runtime=str(jar), executor=grabber)
    result = compiler.execute("-o", "D:\\gen", "x.thrift")
    assert result.exit_code == 0
    assert grabber.cmd == [
        fake_java,
        "-cp",
        str(jar),
        RUNTIME_MAIN,
        "thrift",
        "-o",
        "/cygdrive/d/gen",
        "x.thrift",
    ]


def test_missing_configured_runtime(fake_java: str, tmp_path) -> None:
    compiler = EmbeddedThriftCompiler(runtime=str(tmp_path / "nope.jar"), java=fake_java)
    with pytest.raises(EmbeddedRuntimeError, match="does not exist"):
        compiler.execute("-version")


def test_missing_java(tmp_path) -> None:
    jar = tmp_path / "thrift-compiler.jar"
    jar.write_bytes(b"PK")
    compiler = EmbeddedThriftCompiler(runtime=str(jar), java=str(tmp_path / "no" / "java"))
    with pytest.raises(EmbeddedRuntimeError, match="Failed to locate a java binary"):
        compiler.execute("-version")


def test_str() -> None:
    assert str(EmbeddedThriftCompiler()) == "[EmbeddedThriftCompiler]"
