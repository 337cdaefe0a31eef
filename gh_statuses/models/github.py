from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class GithubModel(BaseModel):
    """Base for records returned by the Github API. These are never mutated after being deserialized."""

    model_config = ConfigDict(frozen=True)


class User(GithubModel):
    login: str
    id: int
    avatar_url: str | None = None
    html_url: str
    type: str | None = None
    site_admin: bool = False


class Repository(GithubModel):
    id: int
    name: str
    full_name: str
    private: bool
    owner: User
    description: str | None = None
    html_url: str | None = None
    default_branch: str | None = None


class CommitState(StrEnum):
    """The states a commit status can be reported in"""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    FAILURE = "failure"


class CommitStatus(GithubModel):
    id: int
    node_id: str | None = None
    url: str
    avatar_url: str | None = None
    state: CommitState
    description: str | None = None
    target_url: str | None = None
    context: str = "default"
    created_at: datetime
    updated_at: datetime
    creator: User | None = None


class CombinedCommitStatus(GithubModel):
    """
    The rollup of every status reported against a reference. The state is `failure` if any context reports an error
    or failure, `pending` if there are no statuses or a context is still pending, and `success` otherwise.
    """

    state: CommitState
    sha: str
    total_count: int
    statuses: list[CommitStatus] = []
    repository: Repository
    commit_url: str | None = None
    url: str | None = None


class NewCommitStatus(GithubModel):
    """A commit status to be created against a reference"""

    state: CommitState
    target_url: str | None = None
    description: str | None = None
    context: str | None = None
