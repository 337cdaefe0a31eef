from typing import Any

import httpx
from httpx import HTTPStatusError, Response

from gh_statuses.lib.config import Config
from gh_statuses.lib.github.backends.protocol import (
    GithubApiBackend,
    GithubApiRequestFailed,
    GithubApiResponse,
    Headers,
    QueryParams,
)
from gh_statuses.lib.logging import lg


class HttpApiResponse(GithubApiResponse):
    def __init__(self, api_response: Response) -> None:
        self.api_response = api_response

    def raise_for_status(self) -> None:
        try:
            self.api_response.raise_for_status()
        except HTTPStatusError as e:
            raise GithubApiRequestFailed(e) from e

    def is_success(self) -> bool:
        return self.api_response.is_success

    def json(self) -> Any:
        return self.api_response.json()

    @property
    def text(self) -> str:
        return self.api_response.text

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.api_response.headers)


class HttpGithubApiBackend(GithubApiBackend):
    """Sends requests straight to the Github REST API with httpx, authenticating with a bearer token"""

    def __init__(self, config: Config, access_token: str, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self.access_token = access_token
        self.api_client = http_client or httpx.AsyncClient(base_url=config.api.base_url, timeout=config.api.timeout)

    def _with_auth(self, headers: Headers | None) -> Headers:
        return {**(headers or {}), "Authorization": f"Bearer {self.access_token}"}

    async def get(
        self,
        url: str,
        headers: Headers | None = None,
        params: QueryParams | None = None,
    ) -> HttpApiResponse:
        try:
            response = await self.api_client.get(
                url, headers=self._with_auth(headers), params=params, follow_redirects=True
            )
        except httpx.TransportError as e:
            raise GithubApiRequestFailed(e) from e
        lg.debug(f"GET {response.request.url} -> {response.status_code}")
        return HttpApiResponse(response)

    async def post(
        self,
        url: str,
        headers: Headers | None = None,
        json: dict[str, Any] | None = None,
    ) -> HttpApiResponse:
        try:
            response = await self.api_client.post(url, headers=self._with_auth(headers), json=json)
        except httpx.TransportError as e:
            raise GithubApiRequestFailed(e) from e
        lg.debug(f"POST {response.request.url} -> {response.status_code}")
        return HttpApiResponse(response)

    async def aclose(self) -> None:
        await self.api_client.aclose()
