"""Runtime configuration for gitkeeper.

Settings are read from environment variables, after loading a ``.env`` file
from the current directory if one exists.

Environment variables:
    GITKEEPER_REPOS_DIR   Directory holding repositories (default: repos/)
    GITKEEPER_LOG_DIR     Directory for session log files (default: logs/)
    GITKEEPER_GIT_BINARY  git executable (default: git)
    GITKEEPER_LOG_LEVEL   Console log level for the CLI (default: INFO)
    GIT_USER_NAME         Default commit author name
    GIT_USER_EMAIL        Default commit author email
    GITHUB_TOKEN          Token written to the credentials file by set-user
"""
import logging
import os

import dotenv
from pydantic import BaseModel, field_validator

from gitkeeper.core.workspace import Workspace


class Settings(BaseModel):
    """gitkeeper configuration values.

    Attributes:
        repos_dir: Directory under which repositories are created.
        log_dir: Directory where session log files are written.
        git_binary: git executable used to build commands.
        log_level: Name of the console log level.
        user_name: Default commit author name, if any.
        user_email: Default commit author email, if any.
        token: GitHub token for the credential helper, if any.
    """
    repos_dir: str = "repos/"
    log_dir: str = "logs/"
    git_binary: str = "git"
    log_level: str = "INFO"
    user_name: str | None = None
    user_email: str | None = None
    token: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, loading ``.env`` first."""
        dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
        env = os.environ
        return cls(
            repos_dir=env.get("GITKEEPER_REPOS_DIR", "repos/"),
            log_dir=env.get("GITKEEPER_LOG_DIR", "logs/"),
            git_binary=env.get("GITKEEPER_GIT_BINARY", "git"),
            log_level=env.get("GITKEEPER_LOG_LEVEL", "INFO"),
            user_name=env.get("GIT_USER_NAME") or None,
            user_email=env.get("GIT_USER_EMAIL") or None,
            token=env.get("GITHUB_TOKEN") or None,
        )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    def workspace(self) -> Workspace:
        return Workspace(repos_dir=self.repos_dir, log_dir=self.log_dir, git_binary=self.git_binary)
