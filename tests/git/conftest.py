"""Fixtures for git integration tests."""

import os

import pytest

from gitkeeper.git.repo import GitRepo
from tests.helpers import make_repo


@pytest.fixture
def git_repo():
    """Create a temporary git repository with an initial commit.

    Sets up a repository on branch main with user config and an initial
    commit containing init.txt. The current working directory is left
    untouched.

    Yields:
        str: Absolute path to the temporary git repository.
    """
    yield os.path.realpath(make_repo())


@pytest.fixture
def repo(git_repo):
    """Provide a GitRepo session bound to the git_repo fixture."""
    return GitRepo(git_repo)
