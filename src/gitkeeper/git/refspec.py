"""Call shapes for the fetch and push overloads.

``push`` and ``fetch`` accept a variable number of branch names, optionally
followed by an options mapping. The positional arguments are resolved here,
once, into explicit targets.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from gitkeeper.git.options import CommandOptions


@dataclass(frozen=True)
class CurrentBranch:
    """Push the current branch to a remote branch of the same name."""


@dataclass(frozen=True)
class RemoteBranch:
    """Push the current branch to the named remote branch."""

    branch: str


@dataclass(frozen=True)
class BranchPair:
    """Push an explicit local branch to an explicit remote branch.

    An empty ``local`` deletes ``remote`` on the remote side.
    """

    local: str
    remote: str


type PushTarget = CurrentBranch | RemoteBranch | BranchPair


def _split_options(args: tuple) -> tuple[tuple, CommandOptions | None]:
    if args and isinstance(args[-1], Mapping):
        return args[:-1], args[-1]
    return args, None


def _check_names(names: tuple, limit: int, operation: str) -> None:
    if len(names) > limit:
        raise TypeError(f"{operation}() takes at most {limit} branch names ({len(names)} given)")
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{operation}() branch names must be str, not {type(name).__name__}")


def resolve_push(args: tuple) -> tuple[PushTarget, CommandOptions | None]:
    """Resolve ``push`` positional arguments into a target and options.

    Args:
        args: Everything after the remote: up to two branch names, optionally
            followed by an options mapping.

    Returns:
        tuple[PushTarget, CommandOptions | None]: The push target and options.

    Raises:
        TypeError: On more than two branch names or a non-string name.

    Example:
        >>> resolve_push(("feat",))
        (RemoteBranch(branch='feat'), None)
        >>> resolve_push(("", "old", {"force": True}))
        (BranchPair(local='', remote='old'), {'force': True})
    """
    names, options = _split_options(args)
    _check_names(names, 2, "push")
    match names:
        case ():
            return CurrentBranch(), options
        case (branch,):
            return RemoteBranch(branch), options
        case (local, remote):
            return BranchPair(local, remote), options


def resolve_fetch(args: tuple) -> tuple[str, CommandOptions | None]:
    """Resolve ``fetch`` positional arguments into a branch and options.

    A mapping in the branch position is taken as the options and the branch
    defaults to an empty string.

    Raises:
        TypeError: On more than one branch name or a non-string name.
    """
    names, options = _split_options(args)
    _check_names(names, 1, "fetch")
    return (names[0] if names else ""), options
