"""Command-line interface for the DokuWiki client.

This package provides the `dokuwiki-client` CLI tool that exposes namespace,
page and attachment operations of the DokuWiki XML-RPC API with colored
output, verbosity control and typed exit codes.
"""

from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'ExitCode',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
