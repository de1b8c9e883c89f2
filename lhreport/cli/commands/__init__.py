"""CLI subcommands."""

from lhreport.cli.commands.categories import categories_command

__all__ = ["categories_command"]
