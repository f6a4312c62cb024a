"""CLI parsing and integration tests.

Tests command-line argument parsing and end-to-end execution of repository
subcommands against a temporary workspace.
"""

import os
import tempfile

import pytest

from gitkeeper.cli import build_parser, main
from tests.helpers import run_git


@pytest.fixture
def workspace_env(monkeypatch, tmp_path):
    """Point the CLI at temporary repos/log directories and a clean environment.

    Returns:
        str: The repos directory.
    """
    repos_dir = tempfile.mkdtemp()
    monkeypatch.setenv("GITKEEPER_REPOS_DIR", repos_dir)
    monkeypatch.setenv("GITKEEPER_LOG_DIR", tempfile.mkdtemp())
    for var in ("GIT_USER_NAME", "GIT_USER_EMAIL", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return repos_dir


def run_cli(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr("sys.argv", ["gitkeeper", *argv])
    main()


class TestArgParsing:
    """Test suite for command-line argument parsing."""

    def test_push_branches_are_optional(self):
        args = build_parser().parse_args(["push", "--repo", "site", "origin"])
        assert args.remote == "origin"
        assert args.branches == []

    def test_push_accepts_local_and_remote_branch(self):
        args = build_parser().parse_args(["push", "--repo", "site", "origin", "main", "gh-pages", "--force"])
        assert args.branches == ["main", "gh-pages"]
        assert args.force is True

    def test_fetch_branch_and_depth(self):
        args = build_parser().parse_args(["fetch", "--repo", "site", "origin", "main", "--depth", "1"])
        assert args.branch == "main"
        assert args.depth == "1"
        assert args.no_tags is False

    def test_repo_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["init"])

    def test_stage_requires_files(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["stage", "--repo", "site"])

    def test_server_defaults(self):
        args = build_parser().parse_args(["server"])
        assert args.host == "127.0.0.1"
        assert args.port == 8000
        assert args.reload is False


class TestMain:
    def test_no_command_prints_help(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch)
        assert exc_info.value.code == 0
        assert "usage: gitkeeper" in capsys.readouterr().out

    def test_init_creates_repository(self, monkeypatch, workspace_env):
        run_cli(monkeypatch, "init", "--repo", "site")
        assert os.path.isdir(os.path.join(workspace_env, "site", ".git"))

    def test_invalid_repo_name_exits_1(self, monkeypatch, workspace_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "init", "--repo", "..")
        assert exc_info.value.code == 1
        assert "Invalid repository name" in capsys.readouterr().err

    def test_git_failure_exit_status_and_stderr(self, monkeypatch, workspace_env, capsys):
        run_cli(monkeypatch, "init", "--repo", "site")
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "checkout", "--repo", "site", "no-such-branch")
        assert exc_info.value.code != 0
        assert "no-such-branch" in capsys.readouterr().err

    def test_push_with_three_branches_is_usage_error(self, monkeypatch, workspace_env):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "push", "--repo", "site", "origin", "a", "b", "c")
        assert exc_info.value.code == 2

    def test_set_user_without_name_exits_1(self, monkeypatch, workspace_env, capsys):
        run_cli(monkeypatch, "init", "--repo", "site")
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "set-user", "--repo", "site")
        assert exc_info.value.code == 1
        assert "GIT_USER_NAME" in capsys.readouterr().err

    def test_set_user_defaults_from_environment(self, monkeypatch, workspace_env):
        monkeypatch.setenv("GIT_USER_NAME", "Release Bot")
        monkeypatch.setenv("GIT_USER_EMAIL", "bot@example.com")
        run_cli(monkeypatch, "init", "--repo", "site")
        run_cli(monkeypatch, "set-user", "--repo", "site")
        directory = os.path.join(workspace_env, "site")
        assert run_git(directory, "config", "user.name") == "Release Bot"
        assert run_git(directory, "config", "user.email") == "bot@example.com"

    def test_commit_push_and_list_remote_branches(self, monkeypatch, workspace_env, remote_repo, capsys):
        """Test a full publish flow through the CLI."""
        directory = os.path.join(workspace_env, "site")
        run_cli(monkeypatch, "init", "--repo", "site")
        run_cli(monkeypatch, "set-user", "--repo", "site", "Jane Doe", "jane@example.com")
        with open(os.path.join(directory, "index.html"), "w") as f:
            f.write("<h1>hi</h1>\n")
        run_cli(monkeypatch, "stage", "--repo", "site", "index.html")
        run_cli(monkeypatch, "commit", "--repo", "site", "-m", "Publish\n\nFirst version")
        assert run_git(directory, "log", "-1", "--format=%B") == "Publish\n\nFirst version"

        run_cli(monkeypatch, "add-remote", "--repo", "site", "origin", remote_repo)
        run_cli(monkeypatch, "push", "--repo", "site", "origin", "gh-pages")
        capsys.readouterr()
        run_cli(monkeypatch, "remote-branches", "--repo", "site", "origin")
        assert capsys.readouterr().out.split() == ["gh-pages"]

    def test_config_prints_nothing_on_success(self, monkeypatch, workspace_env, capsys):
        run_cli(monkeypatch, "init", "--repo", "site")
        capsys.readouterr()
        run_cli(monkeypatch, "config", "--repo", "site", "core.autocrlf", "false")
        assert capsys.readouterr().out == ""
        assert run_git(os.path.join(workspace_env, "site"), "config", "core.autocrlf") == "false"

    def test_destroy_removes_repository(self, monkeypatch, workspace_env):
        run_cli(monkeypatch, "init", "--repo", "site")
        run_cli(monkeypatch, "destroy", "--repo", "site")
        assert not os.path.exists(os.path.join(workspace_env, "site"))

    def test_stage_path_with_space(self, monkeypatch, workspace_env):
        directory = os.path.join(workspace_env, "site")
        run_cli(monkeypatch, "init", "--repo", "site")
        with open(os.path.join(directory, "my file.txt"), "w") as f:
            f.write("x\n")
        run_cli(monkeypatch, "stage", "--repo", "site", "my file.txt")
        assert run_git(directory, "diff", "--cached", "--name-only") == "my file.txt"

    def test_shell_metacharacters_are_not_executed(self, monkeypatch, workspace_env, tmp_path):
        marker = tmp_path / "marker"
        run_cli(monkeypatch, "init", "--repo", "site")
        with pytest.raises(SystemExit):
            run_cli(monkeypatch, "checkout", "--repo", "site", f"main; touch {marker}")
        assert not marker.exists()

    def test_config_value_with_space(self, monkeypatch, workspace_env):
        run_cli(monkeypatch, "init", "--repo", "site")
        run_cli(monkeypatch, "config", "--repo", "site", "user.name", "Jane Doe")
        assert run_git(os.path.join(workspace_env, "site"), "config", "user.name") == "Jane Doe"

    def test_unknown_log_level_exits_1(self, monkeypatch, workspace_env, capsys):
        monkeypatch.setenv("GITKEEPER_LOG_LEVEL", "LOUD")
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "init", "--repo", "site")
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
