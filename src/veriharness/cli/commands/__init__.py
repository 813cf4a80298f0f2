"""CLI command handlers."""

from .cargo import cmd_cargo
from .env import cmd_env
from .run import cmd_run
from .suite import cmd_suite

__all__ = [
    "cmd_cargo",
    "cmd_env",
    "cmd_run",
    "cmd_suite",
]
