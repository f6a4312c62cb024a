"""FastAPI server for gitkeeper.

This module defines the FastAPI application exposing GitRepo operations over
HTTP. Each request opens a session on ``<repos_dir>/<name>`` in the configured
workspace and returns the captured git result. git failures are reported in
the response body, not as HTTP errors.

Request values are shell-quoted before they reach a command line, and
operations on the same repository run one at a time.
"""
import os
import shlex
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, HTTPException

from gitkeeper.config import Settings
from gitkeeper.git.options import quote_options
from gitkeeper.git.repo import GitRepo
from gitkeeper.http import (
    BranchesResponse,
    CheckoutRequest,
    CommitRequest,
    ConfigRequest,
    FetchRequest,
    InitRequest,
    OperationResponse,
    PushRequest,
    RemoteRequest,
    ReposResponse,
    StageRequest,
    UserRequest,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application for gitkeeper.

    Args:
        settings: Settings to use. Defaults to Settings.from_env(), which also
            loads a ``.env`` file if present.

    Returns:
        FastAPI: Configured application with the repository routes.
    """
    settings = settings or Settings.from_env()
    workspace = settings.workspace()
    api = FastAPI(title="gitkeeper")

    @contextmanager
    def session(name: str, must_exist: bool = False) -> Iterator[GitRepo]:
        """Open ``name`` and hold its lock for the duration of one operation.

        Invalid repository or option names become 400 responses.
        """
        try:
            with workspace.lock(name):
                if must_exist and not os.path.isdir(workspace.path(name)):
                    raise HTTPException(status_code=404, detail=f"Repository not found: {name}")
                yield workspace.open(name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @api.get("/repos", response_model=ReposResponse)
    def list_repos():
        """List the repositories in the workspace."""
        return ReposResponse(repos=workspace.list())

    @api.post("/repos/{name}/init", response_model=OperationResponse)
    def init(name: str, request: InitRequest):
        with session(name) as repo:
            return OperationResponse.from_result(repo.init(quote_options(request.options)))

    @api.post("/repos/{name}/checkout", response_model=OperationResponse)
    def checkout(name: str, request: CheckoutRequest):
        with session(name) as repo:
            result = repo.checkout(shlex.quote(request.ref), quote_options(request.options))
            return OperationResponse.from_result(result)

    @api.post("/repos/{name}/commit", response_model=OperationResponse)
    def commit(name: str, request: CommitRequest):
        """Commit staged changes; the response describes the message rewrite step."""
        with session(name) as repo:
            return OperationResponse.from_result(repo.commit(request.message, quote_options(request.options)))

    @api.post("/repos/{name}/fetch", response_model=OperationResponse)
    def fetch(name: str, request: FetchRequest):
        branch = () if request.branch is None else (shlex.quote(request.branch),)
        with session(name) as repo:
            result = repo.fetch(shlex.quote(request.remote), *branch, quote_options(request.options))
            return OperationResponse.from_result(result)

    @api.post("/repos/{name}/push", response_model=OperationResponse)
    def push(name: str, request: PushRequest):
        branches = [shlex.quote(branch) for branch in request.branches]
        with session(name) as repo:
            result = repo.push(shlex.quote(request.remote), *branches, quote_options(request.options))
            return OperationResponse.from_result(result)

    @api.post("/repos/{name}/stage", response_model=OperationResponse)
    def stage(name: str, request: StageRequest):
        files = [shlex.quote(f) for f in request.files]
        with session(name) as repo:
            return OperationResponse.from_result(repo.stage(files, quote_options(request.options)))

    @api.post("/repos/{name}/config", response_model=OperationResponse)
    def config(name: str, request: ConfigRequest):
        with session(name) as repo:
            result = repo.config(shlex.quote(request.key), shlex.quote(request.value))
            return OperationResponse.from_result(result)

    @api.post("/repos/{name}/remotes", response_model=OperationResponse)
    def add_remote(name: str, request: RemoteRequest):
        with session(name) as repo:
            result = repo.add_remote(shlex.quote(request.name), shlex.quote(request.url))
            return OperationResponse.from_result(result)

    @api.post("/repos/{name}/user", response_model=OperationResponse)
    def set_user(name: str, request: UserRequest):
        with session(name) as repo:
            result = repo.set_user_info(request.name, request.email, request.token or settings.token)
            return OperationResponse.from_result(result)

    @api.get("/repos/{name}/remotes/{remote}/branches", response_model=BranchesResponse)
    def remote_branches(name: str, remote: str):
        with session(name) as repo:
            return BranchesResponse(branches=repo.get_remote_branches(shlex.quote(remote)))

    @api.delete("/repos/{name}/remotes/{remote}/branches/{branch:path}", response_model=OperationResponse)
    def delete_remote_branch(name: str, remote: str, branch: str):
        with session(name) as repo:
            result = repo.delete_remote_branch(shlex.quote(remote), shlex.quote(branch))
            return OperationResponse.from_result(result)

    @api.delete("/repos/{name}", status_code=204)
    def destroy(name: str):
        """Remove the repository directory from the workspace."""
        with session(name, must_exist=True) as repo:
            repo.destroy()

    return api


app = create_app()
"""FastAPI application instance configured with the gitkeeper routes.

Created with settings read from the environment (and .env).

Example:
    Run with uvicorn:
        uvicorn gitkeeper.server:app --reload
"""
