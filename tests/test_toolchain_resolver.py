"""Tests for pinned version reading and toolchain path construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from veriharness.errors import ConfigurationMissingError
from veriharness.toolchain.resolver import ToolchainResolver, read_pinned_version


def test_resolve_joins_root_version_and_triple() -> None:
    resolver = ToolchainResolver(target_triple="x86_64-unknown-linux-gnu")

    lib_dir = resolver.resolve("nightly-2018-06-27", Path("/opt/toolchains"))

    assert lib_dir == Path(
        "/opt/toolchains/nightly-2018-06-27-x86_64-unknown-linux-gnu/lib"
    )


def test_resolve_is_pure_and_never_touches_filesystem(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _forbidden(*args: object, **kwargs: object) -> None:
        raise AssertionError("filesystem access")

    for name in ("exists", "is_dir", "is_file", "stat", "resolve", "iterdir"):
        monkeypatch.setattr(Path, name, _forbidden)

    resolver = ToolchainResolver()
    first = resolver.resolve("nightly", Path("/does/not/exist"))
    second = resolver.resolve("nightly", Path("/does/not/exist"))

    assert first == second


def test_target_lib_dir_points_at_rustlib_for_triple() -> None:
    resolver = ToolchainResolver(target_triple="aarch64-unknown-linux-gnu")
    lib_dir = resolver.resolve("stable", Path("/tc"))

    assert resolver.target_lib_dir(lib_dir) == Path(
        "/tc/stable-aarch64-unknown-linux-gnu/lib/rustlib/aarch64-unknown-linux-gnu/lib"
    )


def test_resolve_rejects_blank_version() -> None:
    with pytest.raises(ConfigurationMissingError):
        _ = ToolchainResolver().resolve("   ", Path("/tc"))


def test_read_pinned_version_uses_first_non_blank_line(tmp_path: Path) -> None:
    pin = tmp_path / "rust-toolchain"
    pin.write_text("\n  nightly-2018-06-27  \nignored\n", encoding="utf-8")

    assert read_pinned_version(pin) == "nightly-2018-06-27"


def test_read_pinned_version_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationMissingError, match="Cannot read"):
        _ = read_pinned_version(tmp_path / "rust-toolchain")


def test_read_pinned_version_blank_file(tmp_path: Path) -> None:
    pin = tmp_path / "rust-toolchain"
    pin.write_text("\n   \n", encoding="utf-8")

    with pytest.raises(ConfigurationMissingError, match="empty"):
        _ = read_pinned_version(pin)
