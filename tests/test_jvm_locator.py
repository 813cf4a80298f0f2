"""Tests for native JVM library discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from veriharness.errors import AmbiguousDependencyError, DependencyNotFoundError
from veriharness.toolchain.jvm import JvmLocator, native_jvm_library_name


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_locate_returns_parent_of_single_match(tmp_path: Path) -> None:
    library = _touch(tmp_path / "jre" / "lib" / "amd64" / "server" / "libjvm.so")
    _touch(tmp_path / "jre" / "lib" / "amd64" / "libjava.so")

    located = JvmLocator(library_name="libjvm.so").locate(tmp_path)

    assert located == library.parent.resolve()


def test_locate_without_match_raises_not_found(tmp_path: Path) -> None:
    _touch(tmp_path / "bin" / "java")

    with pytest.raises(DependencyNotFoundError):
        _ = JvmLocator(library_name="libjvm.so").locate(tmp_path)


def test_locate_with_two_matches_raises_ambiguous(tmp_path: Path) -> None:
    _touch(tmp_path / "lib" / "server" / "libjvm.so")
    _touch(tmp_path / "lib" / "client" / "libjvm.so")

    with pytest.raises(AmbiguousDependencyError) as excinfo:
        _ = JvmLocator(library_name="libjvm.so").locate(tmp_path)

    assert len(excinfo.value.candidates) == 2


def test_locate_missing_root_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(DependencyNotFoundError):
        _ = JvmLocator(library_name="libjvm.so").locate(tmp_path / "no-such-jvm")


def test_locate_resolves_symlinked_root(tmp_path: Path) -> None:
    real_root = tmp_path / "java-11-openjdk"
    library = _touch(real_root / "lib" / "server" / "libjvm.so")
    link = tmp_path / "default-java"
    link.symlink_to(real_root, target_is_directory=True)

    located = JvmLocator(library_name="libjvm.so").locate(link)

    assert located == library.parent.resolve()


def test_native_library_name_per_platform() -> None:
    assert native_jvm_library_name("linux") == "libjvm.so"
    assert native_jvm_library_name("darwin") == "libjvm.dylib"
    assert native_jvm_library_name("win32") == "jvm.dll"
