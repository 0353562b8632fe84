"""CLI command implementations for the tilesetup application.

This package contains subcommands for the tilesetup CLI:
- validate: Validate a project file
"""

from tilesetup.cli.commands.validate import validate_command

__all__ = ["validate_command"]
