from enum import StrEnum
from typing import Any, Protocol

Headers = dict[str, str]
QueryParams = dict[str, str]


class BackendType(StrEnum):
    RAW_HTTP = "RAW_HTTP"
    GITHUB_CLI = "GITHUB_CLI"


class GithubApiRequestFailed(Exception):
    pass


class GithubApiResponse(Protocol):
    def is_success(self) -> bool: ...
    def json(self) -> Any: ...
    def raise_for_status(self) -> None: ...

    @property
    def text(self) -> str: ...

    @property
    def headers(self) -> dict[str, str]: ...


class GithubApiBackend(Protocol):
    async def get(
        self,
        url: str,
        headers: Headers | None = None,
        params: QueryParams | None = None,
    ) -> GithubApiResponse: ...

    async def post(
        self,
        url: str,
        headers: Headers | None = None,
        json: dict[str, Any] | None = None,
    ) -> GithubApiResponse: ...

    async def aclose(self) -> None: ...