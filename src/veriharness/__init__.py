"""veriharness: toolchain resolution and fail-fast verifier test harness."""

__version__ = "0.1.0"
