"""Configuration management for the harness."""
from __future__ import annotations

from veriharness.config.paths import HarnessPaths, get_paths, reset_paths
from veriharness.config.settings import HarnessSettings, load_settings

__all__ = [
    "HarnessPaths",
    "HarnessSettings",
    "get_paths",
    "load_settings",
    "reset_paths",
]
