"""Workspace of repository sessions.

A Workspace is a directory holding any number of repositories. It creates
repository directories on demand and hands out GitRepo sessions, each with
its own DEBUG file log.
"""
from __future__ import annotations

import logging
import os
import threading
from datetime import datetime

from gitkeeper.git.repo import GitRepo

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class Workspace:
    """Directory of repositories plus logging configuration.

    Typical usage:
        workspace = Workspace(repos_dir="repos/", log_dir="logs/")
        repo = workspace.open("docs-site")
        repo.init()

    Attributes:
        repos_dir: Absolute directory under which repositories live.
        log_dir: Directory where each session writes its log file.
        git_binary: The git executable passed to every session.
    """
    def __init__(self, repos_dir: str = "repos/", log_dir: str = "logs/", git_binary: str = "git") -> None:
        """Initialize a workspace.

        Args:
            repos_dir: Directory for repositories. Defaults to "repos/".
            log_dir: Directory for session log files. Defaults to "logs/".
            git_binary: The git executable. Defaults to "git".
        """
        self.repos_dir = os.path.realpath(repos_dir)
        self.log_dir = log_dir
        self.git_binary = git_binary
        self._sessions: dict[str, GitRepo] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def path(self, name: str) -> str:
        """Return the absolute path of repository ``name``.

        Raises:
            ValueError: If ``name`` is empty, ``.``/``..`` or contains a path separator.
        """
        if not name or name in (".", "..") or "/" in name or os.sep in name:
            raise ValueError(f"Invalid repository name: {name!r}")
        return os.path.join(self.repos_dir, name)

    def list(self) -> list[str]:
        """Names of the repositories currently in the workspace, sorted."""
        if not os.path.isdir(self.repos_dir):
            return []
        return sorted(
            entry for entry in os.listdir(self.repos_dir)
            if os.path.isdir(os.path.join(self.repos_dir, entry))
        )

    def open(self, name: str) -> GitRepo:
        """Create (if needed) and open the repository directory ``name``.

        An open session for ``name`` is reused until it is destroyed; after
        that a fresh session (and directory) is created. A new session gets a
        dedicated DEBUG logger named ``gitkeeper.repo.<name>`` writing
        to ``<log_dir>/<YYYYmmddHHMMSS>-<name>.log``.

        Args:
            name: Repository name, used as its directory name.

        Returns:
            GitRepo: A session bound to the repository directory.

        Raises:
            ValueError: If ``name`` is not a valid repository name.
        """
        directory = self.path(name)
        with self._guard:
            repo = self._sessions.get(name)
            if repo is not None and not repo.destroyed:
                return repo
            os.makedirs(directory, exist_ok=True)
            repo = GitRepo(directory, logger=self._session_logger(name), git=self.git_binary)
            self._sessions[name] = repo
            return repo

    def lock(self, name: str) -> threading.Lock:
        """Return the lock serialising operations on repository ``name``.

        Sessions are not thread-safe; callers running operations from several
        threads hold this lock around each one.

        Raises:
            ValueError: If ``name`` is not a valid repository name.
        """
        self.path(name)
        with self._guard:
            return self._locks.setdefault(name, threading.Lock())

    def _session_logger(self, name: str) -> logging.Logger:
        os.makedirs(self.log_dir, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d%H%M%S')
        log_path = os.path.join(self.log_dir, f"{timestamp}-{name}.log")

        session_logger = logging.getLogger(f"gitkeeper.repo.{name}")
        session_logger.setLevel(logging.DEBUG)
        for handler in list(session_logger.handlers):
            session_logger.removeHandler(handler)
            handler.close()
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        session_logger.addHandler(file_handler)
        session_logger.propagate = False

        session_logger.debug(f"Session opened: {name} ({log_path})")
        return session_logger
