"""Git integration for gitkeeper.

This package builds git command lines from option mappings, runs them in a
repository directory, and wraps common repository operations in a session.

Exports:
    GitRepo: Session bound to one repository directory.
    GitResult: Captured output and exit status of one git invocation.
    CommandOptions: Mapping of flag names to values.
    build_command: Render options onto a base command.
    quote_options: Shell-quote the values of an options mapping.
    execute: Run a composed git command line in a directory.
    GitkeeperError: Base class for gitkeeper errors.
    RepositoryDestroyedError: Raised when using a destroyed session.
"""

from gitkeeper.git.core import GitResult, execute
from gitkeeper.git.errors import GitkeeperError, RepositoryDestroyedError
from gitkeeper.git.options import CommandOptions, build_command, quote_options
from gitkeeper.git.repo import GitRepo

__all__ = [
    "CommandOptions",
    "GitRepo",
    "GitResult",
    "GitkeeperError",
    "RepositoryDestroyedError",
    "build_command",
    "execute",
    "quote_options",
]
