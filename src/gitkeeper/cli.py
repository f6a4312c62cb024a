"""Command-line interface for gitkeeper.

This module exposes the GitRepo operations as subcommands. Each repository
subcommand takes ``--repo NAME`` and runs against ``<repos_dir>/<NAME>`` in
the workspace configured through the environment (see gitkeeper.config).

The captured stdout of git is printed, stderr is forwarded, and the process
exits with git's exit status.
"""
import argparse
import logging
import shlex
import sys

from gitkeeper.config import Settings
from gitkeeper.git.core import GitResult
from gitkeeper.git.errors import GitkeeperError
from gitkeeper.git.repo import GitRepo

logger = logging.getLogger("gitkeeper.cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the ``gitkeeper`` argument parser.

    Returns:
        argparse.ArgumentParser: Parser with one subparser per operation.
    """
    parser = argparse.ArgumentParser(prog="gitkeeper")
    subparsers = parser.add_subparsers(dest="command")

    repo_opts = argparse.ArgumentParser(add_help=False)
    repo_opts.add_argument("--repo", required=True, help="Repository name inside the workspace")

    subparsers.add_parser("init", parents=[repo_opts])

    checkout_parser = subparsers.add_parser("checkout", parents=[repo_opts])
    checkout_parser.add_argument("ref")

    commit_parser = subparsers.add_parser("commit", parents=[repo_opts])
    commit_parser.add_argument("-m", "--message", required=True)
    commit_parser.add_argument("--allow-empty", action="store_true")

    fetch_parser = subparsers.add_parser("fetch", parents=[repo_opts])
    fetch_parser.add_argument("remote")
    fetch_parser.add_argument("branch", nargs="?", default=None)
    fetch_parser.add_argument("--depth", default=None)
    fetch_parser.add_argument("--no-tags", action="store_true")

    push_parser = subparsers.add_parser("push", parents=[repo_opts])
    push_parser.add_argument("remote")
    push_parser.add_argument("branches", nargs="*", help="[REMOTE_BRANCH] or LOCAL_BRANCH REMOTE_BRANCH")
    push_parser.add_argument("--force", action="store_true")

    delete_parser = subparsers.add_parser("delete-remote-branch", parents=[repo_opts])
    delete_parser.add_argument("remote")
    delete_parser.add_argument("branch")

    branches_parser = subparsers.add_parser("remote-branches", parents=[repo_opts])
    branches_parser.add_argument("remote")

    remote_parser = subparsers.add_parser("add-remote", parents=[repo_opts])
    remote_parser.add_argument("name")
    remote_parser.add_argument("url")

    config_parser = subparsers.add_parser("config", parents=[repo_opts])
    config_parser.add_argument("key")
    config_parser.add_argument("value")

    user_parser = subparsers.add_parser("set-user", parents=[repo_opts])
    user_parser.add_argument("name", nargs="?", default=None, help="Defaults to GIT_USER_NAME")
    user_parser.add_argument("email", nargs="?", default=None, help="Defaults to GIT_USER_EMAIL")
    user_parser.add_argument("--token", default=None, help="Defaults to GITHUB_TOKEN")

    stage_parser = subparsers.add_parser("stage", parents=[repo_opts])
    stage_parser.add_argument("files", nargs="+")

    subparsers.add_parser("destroy", parents=[repo_opts])

    server_parser = subparsers.add_parser("server")
    server_parser.add_argument("--host", default="127.0.0.1")
    server_parser.add_argument("--port", type=int, default=8000)
    server_parser.add_argument("--reload", action="store_true")

    return parser


def run_command(repo: GitRepo, args: argparse.Namespace, settings: Settings) -> GitResult | list[str] | None:
    """Dispatch a parsed repository subcommand to the GitRepo.

    Positional values are shell-quoted here, so paths and names with spaces
    or shell metacharacters reach git as single arguments.

    Args:
        repo: The session to operate on.
        args: Parsed command-line arguments.
        settings: Active settings, used for set-user defaults.

    Returns:
        GitResult | list[str] | None: The operation's result; a list of names
            for remote-branches, None for destroy.
    """
    q = shlex.quote
    match args.command:
        case "init":
            return repo.init()
        case "checkout":
            return repo.checkout(q(args.ref))
        case "commit":
            return repo.commit(args.message, {"allow-empty": args.allow_empty})
        case "fetch":
            options = {"depth": args.depth and q(args.depth), "no-tags": args.no_tags}
            if args.branch is None:
                return repo.fetch(q(args.remote), options)
            return repo.fetch(q(args.remote), q(args.branch), options)
        case "push":
            return repo.push(q(args.remote), *map(q, args.branches), {"force": args.force})
        case "delete-remote-branch":
            return repo.delete_remote_branch(q(args.remote), q(args.branch))
        case "remote-branches":
            return repo.get_remote_branches(q(args.remote))
        case "add-remote":
            return repo.add_remote(q(args.name), q(args.url))
        case "config":
            return repo.config(q(args.key), q(args.value))
        case "set-user":
            name = args.name or settings.user_name
            email = args.email or settings.user_email
            if not name or not email:
                raise ValueError("set-user needs NAME and EMAIL (or GIT_USER_NAME and GIT_USER_EMAIL)")
            return repo.set_user_info(name, email, args.token or settings.token)
        case "stage":
            return repo.stage([q(f) for f in args.files])
        case "destroy":
            repo.destroy()
            return None
    raise ValueError(f"Unknown command: {args.command}")


def main() -> None:
    """Main entry point for the gitkeeper CLI.

    Raises:
        SystemExit: git's exit status for repository commands; 1 for invalid
            repository names, missing set-user values or destroyed sessions;
            2 for usage errors.

    Examples:
        gitkeeper init --repo site
        gitkeeper add-remote --repo site origin https://github.com/example/site.git
        gitkeeper stage --repo site index.html
        gitkeeper commit --repo site -m "Publish site"
        gitkeeper push --repo site origin main gh-pages
        gitkeeper remote-branches --repo site origin
        gitkeeper server --port 8000
    """
    parser = build_parser()
    args = parser.parse_args()
    if args.command == "push" and len(args.branches) > 2:
        parser.error("push takes at most two branch names")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s - %(message)s")
    logger.debug(f"CLI args parsed: command={args.command}")

    if args.command == "server":
        import uvicorn

        uvicorn.run("gitkeeper.server:app", host=args.host, port=args.port, reload=args.reload)
        return

    try:
        repo = settings.workspace().open(args.repo)
        result = run_command(repo, args, settings)
    except (ValueError, GitkeeperError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if isinstance(result, list):
        for branch in result:
            print(branch)
    elif isinstance(result, GitResult):
        print(result.stdout, end="")
        print(result.stderr, end="", file=sys.stderr)
        if not result.ok:
            sys.exit(result.returncode)


if __name__ == "__main__":
    main()
