from typing import Awaitable

from gh_statuses.lib.ensure import argument_not_null, argument_not_null_or_empty_string
from gh_statuses.lib.github import urls
from gh_statuses.lib.github.connection import ApiConnectionProtocol
from gh_statuses.models.github import CombinedCommitStatus, CommitStatus, NewCommitStatus
from gh_statuses.models.options import ApiOptions


class CommitStatusClient:
    """
    A client for Github's commit status API. A reference can be a commit SHA, a branch name or a tag name, and every
    operation is available both by repository owner and name, and by repository ID.

    Arguments are validated as soon as a method is called, so an InvalidArgument error is raised before any request
    is started. The returned awaitable performs a single request; errors from the connection are not caught.

    See https://docs.github.com/en/rest/commits/statuses
    """

    def __init__(self, connection: ApiConnectionProtocol) -> None:
        self.connection = connection

    def get_all(
        self, owner: str, name: str, reference: str, options: ApiOptions = ApiOptions.NONE
    ) -> Awaitable[list[CommitStatus]]:
        """Lists the statuses for a reference, most recent first"""
        argument_not_null_or_empty_string(owner, "owner")
        argument_not_null_or_empty_string(name, "name")
        argument_not_null_or_empty_string(reference, "reference")
        argument_not_null(options, "options")

        return self.connection.get_all(urls.commit_statuses(owner, name, reference), CommitStatus, options)

    def get_all_by_id(
        self, repository_id: int, reference: str, options: ApiOptions = ApiOptions.NONE
    ) -> Awaitable[list[CommitStatus]]:
        argument_not_null_or_empty_string(reference, "reference")
        argument_not_null(options, "options")

        return self.connection.get_all(urls.commit_statuses_by_id(repository_id, reference), CommitStatus, options)

    def get_combined(self, owner: str, name: str, reference: str) -> Awaitable[CombinedCommitStatus]:
        """Retrieves the combined view of every status reported against a reference"""
        argument_not_null_or_empty_string(owner, "owner")
        argument_not_null_or_empty_string(name, "name")
        argument_not_null_or_empty_string(reference, "reference")

        return self.connection.get(urls.combined_commit_status(owner, name, reference), CombinedCommitStatus)

    def get_combined_by_id(self, repository_id: int, reference: str) -> Awaitable[CombinedCommitStatus]:
        argument_not_null_or_empty_string(reference, "reference")

        return self.connection.get(urls.combined_commit_status_by_id(repository_id, reference), CombinedCommitStatus)

    def create(
        self, owner: str, name: str, reference: str, new_commit_status: NewCommitStatus
    ) -> Awaitable[CommitStatus]:
        """Reports a new status against a reference"""
        argument_not_null_or_empty_string(owner, "owner")
        argument_not_null_or_empty_string(name, "name")
        argument_not_null_or_empty_string(reference, "reference")
        argument_not_null(new_commit_status, "new_commit_status")

        return self.connection.post(urls.create_commit_status(owner, name, reference), CommitStatus, new_commit_status)

    def create_by_id(
        self, repository_id: int, reference: str, new_commit_status: NewCommitStatus
    ) -> Awaitable[CommitStatus]:
        argument_not_null_or_empty_string(reference, "reference")
        argument_not_null(new_commit_status, "new_commit_status")

        return self.connection.post(
            urls.create_commit_status_by_id(repository_id, reference), CommitStatus, new_commit_status
        )
