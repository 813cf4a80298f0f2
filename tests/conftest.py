from __future__ import annotations

from collections.abc import Iterator

import pytest

from veriharness.config.paths import reset_paths


@pytest.fixture(autouse=True)
def isolate_paths() -> Iterator[None]:
    """Give every test a fresh workspace paths singleton."""
    reset_paths()
    try:
        yield
    finally:
        reset_paths()
