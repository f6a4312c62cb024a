"""Helpers for driving git directly in tests, bypassing gitkeeper."""

import subprocess
import tempfile


def run_git(cwd: str, *args: str) -> str:
    """Run git in ``cwd`` and return its stripped stdout, failing on error."""
    result = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout.strip()


def make_repo(directory: str | None = None) -> str:
    """Create a git repository on branch main with one commit of init.txt.

    Args:
        directory: Directory to initialise. Defaults to a new temp directory.

    Returns:
        str: Path to the repository.
    """
    repo_dir = directory or tempfile.mkdtemp()
    run_git(repo_dir, "init", "-b", "main")
    run_git(repo_dir, "config", "user.name", "Test")
    run_git(repo_dir, "config", "user.email", "test@test.com")
    with open(f"{repo_dir}/init.txt", "w") as f:
        f.write("init\n")
    run_git(repo_dir, "add", ".")
    run_git(repo_dir, "commit", "-m", "init")
    return repo_dir
