"""HTTP package for the gitkeeper server.

Provides the request and response models shared by the route handlers.
"""
from pydantic import BaseModel, Field

from gitkeeper.git.core import GitResult

OptionsBody = dict[str, bool | str | list[str] | None]


class OperationResponse(BaseModel):
    """Captured result of the last git invocation of an operation.

    A non-zero ``returncode`` is reported here rather than as an HTTP error.

    Attributes:
        command: The composed command line.
        returncode: git's exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """
    command: str
    returncode: int
    stdout: str
    stderr: str

    @classmethod
    def from_result(cls, result: GitResult) -> "OperationResponse":
        return cls(command=result.command, returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)


class InitRequest(BaseModel):
    options: OptionsBody = {}


class CheckoutRequest(BaseModel):
    ref: str
    options: OptionsBody = {}


class CommitRequest(BaseModel):
    message: str
    options: OptionsBody = {}


class FetchRequest(BaseModel):
    remote: str
    branch: str | None = None
    options: OptionsBody = {}


class PushRequest(BaseModel):
    """Push request.

    ``branches`` holds zero, one (remote branch) or two (local, remote)
    branch names; omitted names default to the current branch.
    """
    remote: str
    branches: list[str] = Field(default=[], max_length=2)
    options: OptionsBody = {}


class StageRequest(BaseModel):
    files: list[str]
    options: OptionsBody = {}


class ConfigRequest(BaseModel):
    key: str
    value: str


class RemoteRequest(BaseModel):
    name: str
    url: str


class UserRequest(BaseModel):
    name: str
    email: str
    token: str | None = None


class BranchesResponse(BaseModel):
    branches: list[str]


class ReposResponse(BaseModel):
    repos: list[str]
