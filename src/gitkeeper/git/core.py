"""Core git command execution utilities.

This module runs composed git command lines via subprocess in an explicit
working directory. It captures output, logs it line by line at DEBUG level,
and hands the exit status back to the caller as data.
"""

import json
import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass

from gitkeeper.git.options import CommandOptions, build_command

logger = logging.getLogger("gitkeeper.git.core")


@dataclass(frozen=True)
class GitResult:
    """Outcome of a single git invocation.

    A non-zero exit is not an error at this layer; callers that care inspect
    ``returncode`` or ``ok``.

    Attributes:
        command (str): The fully composed command line that was run.
        env (dict[str, str] | None): Extra environment variables for the call.
        stdout (str): Captured standard output.
        stderr (str): Captured standard error.
        returncode (int): Exit status of the command.
    """

    command: str
    env: dict[str, str] | None
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def lines(self) -> list[str]:
        """Return the non-blank stdout lines, stripped."""
        return [line.strip() for line in self.stdout.split("\n") if line.strip()]

    def __str__(self) -> str:
        return self.stdout


def format_env(env: Mapping[str, str] | None) -> str:
    """Render extra environment variables for the command log line.

    Args:
        env: Extra variables, or None.

    Returns:
        str: ``' (KEY="value", ...)'`` or an empty string when env is None.
    """
    if env is None:
        return ""
    return " (" + ", ".join(f"{key}={json.dumps(val)}" for key, val in env.items()) + ")"


def execute(
    directory: str,
    partial_cmd: str,
    options: CommandOptions | None = None,
    env: Mapping[str, str] | None = None,
    *,
    log: logging.Logger = logger,
) -> GitResult:
    """Run a git command line in ``directory`` and capture its output.

    The command runs through the shell with ``cwd=directory``, so the
    process-wide working directory is never changed. Extra environment
    variables are merged over a copy of ``os.environ`` for this call only.

    Args:
        directory (str): Working directory for the command.
        partial_cmd (str): Command without options, e.g. ``"git checkout main"``.
        options (CommandOptions | None): Flags appended via build_command().
        env (Mapping[str, str] | None): Extra environment variables.
        log (logging.Logger): Logger receiving the command and output lines.

    Returns:
        GitResult: Captured stdout, stderr and exit status. Never raises on a
            non-zero exit.
    """
    cmd = build_command(partial_cmd, options)
    extra_env = dict(env) if env is not None else None
    full_env = {**os.environ, **extra_env} if extra_env is not None else None

    log.debug(f"GIT: {cmd}{format_env(extra_env)}")
    result = subprocess.run(
        cmd,
        shell=True,
        cwd=directory,
        env=full_env,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
    )
    for line in result.stdout.split("\n"):
        if line.strip():
            log.debug(f"GIT: {line}")

    return GitResult(
        command=cmd,
        env=extra_env,
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )
