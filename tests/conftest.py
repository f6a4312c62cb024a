"""Shared pytest fixtures.

Provides bare remotes for push/fetch tests and Settings pointing at isolated
temporary directories.
"""

import tempfile

import pytest

from gitkeeper.config import Settings
from tests.helpers import run_git


@pytest.fixture
def remote_repo():
    """Provide a bare repository usable as a push/fetch remote.

    Yields:
        str: Absolute path to the bare repository.
    """
    remote_dir = tempfile.mkdtemp()
    run_git(remote_dir, "init", "--bare", "-b", "main")
    yield remote_dir


@pytest.fixture
def settings():
    """Provide Settings pointing at fresh temporary repos and log directories."""
    return Settings(repos_dir=tempfile.mkdtemp(), log_dir=tempfile.mkdtemp())
