"""CLI command implementations for the cutplan application.

This package contains subcommands for the cutplan CLI, including:
- validate: Validate a cutting configuration file
"""

from cutplan.cli.commands.validate import display_config_error, validate_command

__all__ = ["display_config_error", "validate_command"]
