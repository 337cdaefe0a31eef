"""
Endpoint paths for the Github commit status API. Paths are relative to the configured API base URL, and references
(commit SHAs, branch names or tag names) are inserted exactly as given.
"""


def _repo_path(owner: str, name: str) -> str:
    return f"repos/{owner}/{name}"


def _repo_id_path(repository_id: int) -> str:
    return f"repositories/{repository_id}"


def commit_statuses(owner: str, name: str, reference: str) -> str:
    """Lists the statuses reported against a reference"""
    return f"{_repo_path(owner, name)}/commits/{reference}/statuses"


def commit_statuses_by_id(repository_id: int, reference: str) -> str:
    return f"{_repo_id_path(repository_id)}/commits/{reference}/statuses"


def combined_commit_status(owner: str, name: str, reference: str) -> str:
    """The rollup of every status reported against a reference"""
    return f"{_repo_path(owner, name)}/commits/{reference}/status"


def combined_commit_status_by_id(repository_id: int, reference: str) -> str:
    return f"{_repo_id_path(repository_id)}/commits/{reference}/status"


def create_commit_status(owner: str, name: str, reference: str) -> str:
    """Where new statuses for a reference are posted"""
    return f"{_repo_path(owner, name)}/statuses/{reference}"


def create_commit_status_by_id(repository_id: int, reference: str) -> str:
    return f"{_repo_id_path(repository_id)}/statuses/{reference}"
