"""Harness settings resolved from the environment and an optional YAML file.

Resolution order for every setting: environment variable > workspace
``.veriharness/config.yaml`` > built-in default. The result is an immutable
``HarnessSettings`` value that callers pass explicitly into each component.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from veriharness.config.paths import HarnessPaths

logger = logging.getLogger(__name__)

DEFAULT_JAVA_HOME = Path("/usr/lib/jvm/default-java")
DEFAULT_TARGET_TRIPLE = "x86_64-unknown-linux-gnu"
DEFAULT_DRIVER_NAME = "prusti-driver"
DEFAULT_EXTERN_CRATE = "prusti_contracts"
DEFAULT_RUST_LOG = "prusti=info"
DEFAULT_TEST_THREADS = "1"
DEFAULT_RUN_FILE = Path("prusti/tests/typecheck/pass/lint.rs")
DEFAULT_SOURCE_EXTENSION = ".rs"

# Environment variable -> settings field
ENV_OVERRIDES: dict[str, str] = {
    "JAVA_HOME": "java_home",
    "RUST_LOG": "rust_log",
    "RUST_TEST_THREADS": "test_threads",
    "RUN_FILE": "run_file",
    "VERIHARNESS_CASE_TIMEOUT_SECONDS": "case_timeout_seconds",
}

_PATH_FIELDS = {"java_home", "toolchain_root", "run_file", "timings_log"}
_STR_FIELDS = {
    "target_triple",
    "driver_name",
    "extern_crate",
    "rust_log",
    "test_threads",
    "source_extension",
}


def _default_toolchain_root(environ: Mapping[str, str]) -> Path:
    """Toolchain installation root: $RUSTUP_HOME/toolchains or ~/.rustup."""
    rustup_home = environ.get("RUSTUP_HOME")
    if rustup_home:
        return Path(rustup_home).expanduser() / "toolchains"
    return Path.home() / ".rustup" / "toolchains"


@dataclass(frozen=True, slots=True)
class HarnessSettings:
    """Immutable configuration for one harness invocation."""

    java_home: Path = DEFAULT_JAVA_HOME
    toolchain_root: Path = Path.home() / ".rustup" / "toolchains"
    target_triple: str = DEFAULT_TARGET_TRIPLE
    driver_name: str = DEFAULT_DRIVER_NAME
    extern_crate: str = DEFAULT_EXTERN_CRATE
    rust_log: str = DEFAULT_RUST_LOG
    test_threads: str = DEFAULT_TEST_THREADS
    run_file: Path = DEFAULT_RUN_FILE
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    case_timeout_seconds: float | None = None
    timings_log: Path | None = None

    def with_overrides(self, **changes: Any) -> "HarnessSettings":
        """Return a copy with the given fields replaced (None values ignored)."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


def load_settings(
    paths: HarnessPaths,
    environ: Mapping[str, str] | None = None,
) -> HarnessSettings:
    """Resolve settings for a workspace.

    Args:
        paths: Workspace path layout (locates the YAML config file).
        environ: Environment to read overrides from. Defaults to os.environ.

    Returns:
        The resolved, immutable settings value.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {"toolchain_root": _default_toolchain_root(env)}

    values.update(_load_config_file(paths.config_file))

    for variable, field_name in ENV_OVERRIDES.items():
        raw = env.get(variable)
        if raw:
            coerced = _coerce(field_name, raw)
            if coerced is not None:
                values[field_name] = coerced

    settings = HarnessSettings(**values)
    logger.debug("Resolved harness settings: %s", settings)
    return settings


def _load_config_file(path: Path) -> dict[str, Any]:
    """Load known settings from the YAML config file, if present."""
    if not path.exists():
        return {}

    try:
        raw_data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Failed to load harness config from %s: %s", path, e)
        return {}

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        logger.warning("Harness config %s must contain a mapping", path)
        return {}

    values: dict[str, Any] = {}
    for key, raw in raw_data.items():
        if key not in _PATH_FIELDS | _STR_FIELDS | {"case_timeout_seconds"}:
            logger.warning("Ignoring unknown harness setting %r in %s", key, path)
            continue
        coerced = _coerce(key, raw)
        if coerced is not None:
            values[key] = coerced

    logger.debug("Loaded harness config from %s: %s", path, sorted(values))
    return values


def _coerce(field_name: str, raw: object) -> Any:
    """Coerce a raw config value to the field's type, or None if invalid."""
    if field_name in _PATH_FIELDS:
        if isinstance(raw, str) and raw.strip():
            return Path(raw).expanduser()
    elif field_name in _STR_FIELDS:
        if isinstance(raw, (str, int)) and not isinstance(raw, bool):
            return str(raw)
    elif field_name == "case_timeout_seconds":
        try:
            timeout = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            timeout = -1.0
        if math.isfinite(timeout) and timeout > 0:
            return timeout

    logger.warning("Ignoring invalid value for %s: %r", field_name, raw)
    return None
