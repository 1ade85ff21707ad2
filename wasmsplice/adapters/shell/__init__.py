"""Shell adapters — subprocess execution."""

from wasmsplice.adapters.shell.command import run_command

__all__ = ["run_command"]
