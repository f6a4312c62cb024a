"""gitkeeper core components.

The core package holds the Workspace, which owns a directory of repositories
and opens logged GitRepo sessions on them.

Typical usage:
    from gitkeeper.core import Workspace

    workspace = Workspace(repos_dir="repos/")
    repo = workspace.open("site")
    repo.init()
    repo.add_remote(repo.ORIGIN, "https://github.com/example/site.git")
"""

from gitkeeper.core.workspace import Workspace

__all__ = ["Workspace"]
