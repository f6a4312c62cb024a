"""Git session error types.

Failures of the git tool itself are not exceptions: they come back as data on
a GitResult. The exceptions here cover misuse of a session.
"""


class GitkeeperError(Exception):
    """Base class for all errors raised by gitkeeper."""


class RepositoryDestroyedError(GitkeeperError):
    """Raised when a command is run against a destroyed repository session.

    A GitRepo is destroyed exactly once, which removes its directory from
    disk. Any later attempt to execute a command against it raises this
    error before git is invoked.

    Example:
        >>> repo.destroy()
        >>> repo.init()
        Traceback (most recent call last):
        ...
        RepositoryDestroyedError: Repository already destroyed.
    """
