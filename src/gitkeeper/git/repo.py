"""Repository sessions.

A GitRepo binds git commands to one working directory and exposes the
repository operations a host program needs (checkout, commit, fetch, push,
remote management, credential setup) without hand-built shell strings.
"""

import logging
import os
import re
import shlex
import shutil
import sys
import time
from collections.abc import Sequence

from gitkeeper.git.core import GitResult, execute
from gitkeeper.git.errors import RepositoryDestroyedError
from gitkeeper.git.msg_filter import NEWLINE_PLACEHOLDER
from gitkeeper.git.options import ARGS_KEY, CommandOptions
from gitkeeper.git.refspec import BranchPair, CurrentBranch, RemoteBranch, resolve_fetch, resolve_push

_SHELL_SPECIAL = re.compile(r'(["\\$`])')


def _double_quote(value: str) -> str:
    return '"' + _SHELL_SPECIAL.sub(r"\\\1", value) + '"'


class GitRepo:
    """A git repository on disk, driven through the git CLI.

    Every command runs with the repository directory as its working
    directory. Command failures are returned as GitResult data; the only
    exception raised by the session itself is RepositoryDestroyedError.

    Attributes:
        directory (str): Absolute path to the repository.
        name (str): Final path segment of ``directory``.
        git (str): The git executable used to build commands.
        credentials_path (str): Credentials file written by set_user_info().
        logger (logging.Logger): Receives DEBUG lines for every command.
    """

    ORIGIN = "origin"
    UPSTREAM = "upstream"

    def __init__(self, directory: str, logger: logging.Logger | None = None, git: str = "git") -> None:
        """Bind a session to an existing directory.

        Args:
            directory (str): Path to the repository directory. The directory
                itself is created by the caller.
            logger (logging.Logger | None): Logger for command output.
                Defaults to the "gitkeeper.git.repo" logger.
            git (str): The git executable. Defaults to "git".
        """
        self.directory = os.path.realpath(directory)
        self.name = os.path.basename(self.directory)
        self.git = git
        self.logger = logger or logging.getLogger("gitkeeper.git.repo")
        self.credentials_path = os.path.join(
            self.directory, ".git", f".git-credentials--{int(time.time() * 1000)}"
        )
        self._destroyed = False

    def __repr__(self) -> str:
        return f"GitRepo({self.directory!r})"

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def current_branch(self) -> str:
        """The branch HEAD points at, or "HEAD" when detached."""
        return self.execute("rev-parse --abbrev-ref HEAD").stdout.strip()

    def execute(
        self,
        partial_cmd: str,
        options: CommandOptions | None = None,
        env: dict[str, str] | None = None,
    ) -> GitResult:
        """Run a git subcommand in this repository.

        Args:
            partial_cmd (str): The subcommand and its arguments, without the
                git executable (e.g. ``"checkout main"``).
            options (CommandOptions | None): Flags to append.
            env (dict[str, str] | None): Extra environment for this call only.

        Returns:
            GitResult: The captured result, whatever the exit status.

        Raises:
            RepositoryDestroyedError: If destroy() has been called.
        """
        if self._destroyed:
            raise RepositoryDestroyedError("Repository already destroyed.")
        cmd = f"{shlex.quote(self.git)} {partial_cmd.strip()}"
        return execute(self.directory, cmd, options, env, log=self.logger)

    def add_remote(self, name: str, url: str) -> GitResult:
        self.execute(f"remote remove {name} || true")
        return self.execute(f"remote add {name} {url}")

    def checkout(self, ref: str, options: CommandOptions | None = None) -> GitResult:
        return self.execute(f"checkout {ref}", options)

    def commit(self, message: str, options: CommandOptions | None = None) -> GitResult:
        """Commit with a possibly multi-line message.

        The message is committed with its newlines replaced by a placeholder,
        then the most recent commit alone is rewritten through
        ``git filter-branch`` to restore them.

        Args:
            message (str): The commit message. Surrounding whitespace is trimmed.
            options (CommandOptions | None): Extra flags for ``git commit``.

        Returns:
            GitResult: The result of the message rewrite step.
        """
        flat = NEWLINE_PLACEHOLDER.join(re.split(r"\r?\n", message.strip()))
        self.execute("commit", {**(options or {}), "message": _double_quote(flat)})

        has_parent = self.execute("rev-parse --verify --quiet @~1").ok
        revisions = "@~1..@" if has_parent else "@"
        msg_filter = f"{shlex.quote(sys.executable)} -m gitkeeper.git.msg_filter"
        return self.execute(
            f'filter-branch --force --msg-filter "{msg_filter}" {revisions}',
            env={"FILTER_BRANCH_SQUELCH_WARNING": "1"},
        )

    def config(self, key: str, value: str) -> GitResult:
        return self.execute(f"config {key} {value}")

    def delete_remote_branch(self, remote: str, branch: str) -> GitResult:
        return self.push(remote, "", branch)

    def destroy(self) -> None:
        """Remove the repository directory. Safe to call more than once."""
        if self._destroyed:
            return
        shutil.rmtree(self.directory, ignore_errors=True)
        self._destroyed = True
        self.logger.debug(f"Repository destroyed: {self.directory}")

    def fetch(self, remote: str, *args: str | CommandOptions) -> GitResult:
        """Fetch from ``remote``.

        Call as ``fetch(remote)``, ``fetch(remote, branch)``, either optionally
        followed by an options mapping.
        """
        branch, options = resolve_fetch(args)
        return self.execute(f"fetch {remote} {branch}", options)

    def get_remote_branches(self, remote: str) -> list[str]:
        """List the branch names of ``remote`` after a shallow fetch.

        Returns:
            list[str]: Branch names with the ``<remote>/`` prefix removed.
        """
        self.fetch(remote, {"depth": "1", "no-tags": True})
        prefix = f"{remote}/"
        return [
            line.removeprefix(prefix)
            for line in self.execute("branch", {"remote": True}).lines()
            if line.startswith(prefix)
        ]

    def init(self, options: CommandOptions | None = None) -> GitResult:
        return self.execute("init", options)

    def push(self, remote: str, *args: str | CommandOptions) -> GitResult:
        """Push to ``remote``.

        Call shapes, each optionally followed by an options mapping:

        - ``push(remote)``: current branch to the same name.
        - ``push(remote, remote_branch)``: current branch to ``remote_branch``.
        - ``push(remote, local_branch, remote_branch)``: explicit refspec.
        """
        target, options = resolve_push(args)
        match target:
            case BranchPair(local, remote_branch):
                refspec = f"{local}:{remote_branch}"
            case RemoteBranch(remote_branch):
                refspec = f"{self.current_branch}:{remote_branch}"
            case CurrentBranch():
                current = self.current_branch
                refspec = f"{current}:{current}"
        return self.execute(f"push {remote} {refspec}", options)

    def set_user_info(self, name: str, email: str, token: str | None = None) -> GitResult:
        """Configure the commit identity and, optionally, GitHub credentials.

        With a token, a credentials file readable only by the owner is written
        under ``.git/`` and registered through the ``store`` credential helper.
        The file is skipped when there is no ``.git/`` directory yet; the
        helper configuration then fails and its result is returned.
        """
        self.config("user.name", _double_quote(name))
        result = self.config("user.email", _double_quote(email))
        if token:
            if os.path.isdir(os.path.dirname(self.credentials_path)):
                fd = os.open(self.credentials_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
                with os.fdopen(fd, "w") as f:
                    f.write(f"https://{token}:@github.com")
                os.chmod(self.credentials_path, 0o600)
            result = self.config("credential.helper", f'"store --file={self.credentials_path}"')
        return result

    def stage(self, files: Sequence[str], options: CommandOptions | None = None) -> GitResult:
        return self.execute("add", {**(options or {}), ARGS_KEY: list(files)})
