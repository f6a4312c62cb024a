"""gitkeeper: a typed façade over the git command line.

gitkeeper lets a host program drive repository operations (checkout, commit,
fetch, push, remote management, credential setup) through a GitRepo session
instead of hand-built shell strings.
"""

from gitkeeper.core.workspace import Workspace
from gitkeeper.git import (
    CommandOptions,
    GitRepo,
    GitResult,
    GitkeeperError,
    RepositoryDestroyedError,
    build_command,
)

__all__ = [
    "CommandOptions",
    "GitRepo",
    "GitResult",
    "GitkeeperError",
    "RepositoryDestroyedError",
    "Workspace",
    "build_command",
]
