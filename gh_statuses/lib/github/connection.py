import re
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from gh_statuses.lib.config import Config
from gh_statuses.lib.constants import JSON_CONTENT_ACCEPT_TYPE
from gh_statuses.lib.ensure import argument_not_null, argument_not_null_or_empty_string
from gh_statuses.lib.github.auth import get_api_token
from gh_statuses.lib.github.backends.cli import GithubCliBackend
from gh_statuses.lib.github.backends.http import HttpGithubApiBackend
from gh_statuses.lib.github.backends.protocol import (
    BackendType,
    GithubApiBackend,
    GithubApiRequestFailed,
    GithubApiResponse,
    Headers,
    QueryParams,
)
from gh_statuses.lib.logging import lg
from gh_statuses.models.options import ApiOptions

ModelT = TypeVar("ModelT", bound=BaseModel)

_NEXT_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="next"')

# Upper bound on the pages read by a single get_all call, whatever the Link headers say
MAX_PAGES = 100


class ApiConnectionProtocol(Protocol):
    """The generic operations the resource clients need from a connection to the Github API"""

    async def get_all(
        self, path: str, model: type[ModelT], options: ApiOptions = ApiOptions.NONE
    ) -> list[ModelT]: ...

    async def get(self, path: str, model: type[ModelT]) -> ModelT: ...

    async def post(self, path: str, model: type[ModelT], body: BaseModel) -> ModelT: ...


class OfflineModeEnabledError(GithubApiRequestFailed):
    def __init__(self) -> None:
        super().__init__("You are offline")


def next_page_url(headers: dict[str, str]) -> str | None:
    """Pulls the URL of the next page out of a response's Link header, if there is one"""
    link_header = next((value for key, value in headers.items() if key.lower() == "link"), None)
    if not link_header:
        return None
    if match := _NEXT_LINK_RE.search(link_header):
        return match.group(1)
    return None


def is_same_origin(url: str, base_url: str) -> bool:
    """Relative URLs always stay on the API host; absolute ones must share its scheme, host and port"""
    target = httpx.URL(url)
    if target.is_relative_url:
        return True
    base = httpx.URL(base_url)
    return (target.scheme, target.host, target.port) == (base.scheme, base.host, base.port)


class ApiConnection:
    """
    Typed access to the Github REST API on top of one of the request backends. Responses are checked for success and
    deserialized into the requested pydantic model; any failure is raised to the caller untouched.
    """

    def __init__(self, config: Config, backend: GithubApiBackend, offline: bool = False) -> None:
        self.config = config
        self.backend = backend
        self.offline = offline

    @classmethod
    def cli(cls, config: Config) -> "ApiConnection":
        backend = GithubCliBackend(config)
        return ApiConnection(config, backend, config.api.offline)

    @classmethod
    def http(cls, config: Config, access_token: str) -> "ApiConnection":
        backend = HttpGithubApiBackend(config, access_token)
        return ApiConnection(config, backend, config.api.offline)

    @classmethod
    def from_config(cls, config: Config) -> "ApiConnection":
        """Builds a connection using whichever backend the config asks for"""
        match config.api.client_type:
            case BackendType.GITHUB_CLI:
                return cls.cli(config)
            case BackendType.RAW_HTTP:
                return cls.http(config, get_api_token())

    async def __aenter__(self) -> "ApiConnection":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.backend.aclose()

    def github_headers(self, accept: str = JSON_CONTENT_ACCEPT_TYPE) -> Headers:
        """Helper function to build the headers sent with every request"""
        return {"Accept": accept, "X-GitHub-Api-Version": self.config.api.api_version}

    async def _get(self, url: str, params: QueryParams | None = None) -> GithubApiResponse:
        if self.offline:
            raise OfflineModeEnabledError()
        lg.debug(f"Requesting {url} (params: {params})")
        response = await self.backend.get(url, headers=self.github_headers(), params=params)
        response.raise_for_status()
        return response

    async def get_all(self, path: str, model: type[ModelT], options: ApiOptions = ApiOptions.NONE) -> list[ModelT]:
        """
        Reads every item from a paged list endpoint, following the Link header from one page to the next until the
        server stops reporting more pages or `options.page_count` pages have been read. Items are returned in the order
        the server sent them. Paging also stops at MAX_PAGES or when a next link repeats an earlier page, and a next
        link to a host other than the configured API is refused so the access token never leaves it.
        """
        argument_not_null_or_empty_string(path, "path")
        argument_not_null(options, "options")

        adapter = TypeAdapter(list[model])
        results: list[ModelT] = []
        url: str | None = path
        params: QueryParams | None = options.query_params() or None
        pages_read = 0
        requested: set[str] = set()

        while url is not None and pages_read < MAX_PAGES:
            requested.add(self._page_key(url, params))
            response = await self._get(url, params)
            results.extend(adapter.validate_python(response.json()))
            pages_read += 1

            if options.page_count is not None and pages_read >= options.page_count:
                break

            # The next link already carries the paging query parameters
            url = next_page_url(response.headers)
            params = None
            if url is not None and self._page_key(url) in requested:
                lg.warning(f"Stopped paging {path}: the next link points back at {url}")
                break
            if url is not None and not is_same_origin(url, self.config.api.base_url):
                raise GithubApiRequestFailed(f"Refusing to follow a next page link to another host: {url}")

        lg.debug(f"Read {len(results)} items across {pages_read} page(s) from {path}")
        return results

    def _page_key(self, url: str, params: QueryParams | None = None) -> str:
        page_url = httpx.URL(self.config.api.base_url).join(url)
        return str(page_url.copy_merge_params(params or {}))

    async def get(self, path: str, model: type[ModelT]) -> ModelT:
        argument_not_null_or_empty_string(path, "path")

        response = await self._get(path)
        return model.model_validate(response.json())

    async def post(self, path: str, model: type[ModelT], body: BaseModel) -> ModelT:
        """Sends the body as JSON, leaving out unset fields, and deserializes the created resource"""
        argument_not_null_or_empty_string(path, "path")
        argument_not_null(body, "body")

        if self.offline:
            raise OfflineModeEnabledError()
        lg.debug(f"Posting to {path}")
        response = await self.backend.post(
            path, headers=self.github_headers(), json=body.model_dump(mode="json", exclude_none=True)
        )
        response.raise_for_status()
        return model.model_validate(response.json())
