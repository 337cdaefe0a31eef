"""Github API payloads and a recording connection shared across the tests."""

import asyncio
import random
from typing import Any

from pydantic import BaseModel

from gh_statuses.models.options import ApiOptions


_USER = {
    "login": "octocat",
    "id": 1,
    "avatar_url": "https://github.com/images/error/octocat_happy.gif",
    "html_url": "https://github.com/octocat",
    "type": "User",
    "site_admin": False,
}


def status_payload(status_id: int, state: str = "success", context: str = "continuous-integration/jenkins") -> dict:
    return {
        "id": status_id,
        "node_id": f"MDY6U3RhdHVz{status_id}",
        "url": f"https://api.github.com/repos/octocat/Hello-World/statuses/{status_id}",
        "avatar_url": "https://github.com/images/error/hubot_happy.gif",
        "state": state,
        "description": "Build has completed successfully",
        "target_url": "https://ci.example.com/1000/output",
        "context": context,
        "created_at": "2012-07-20T01:19:13Z",
        "updated_at": "2012-07-20T01:19:13Z",
        "creator": _USER,
    }


def combined_payload(sha: str = "6dcb09b5b57875f334f61aebed695e2e4193db5e", state: str = "success") -> dict:
    return {
        "state": state,
        "sha": sha,
        "total_count": 2,
        "statuses": [status_payload(1, context="ci/build"), status_payload(2, context="security/brakeman")],
        "repository": {
            "id": 1296269,
            "name": "Hello-World",
            "full_name": "octocat/Hello-World",
            "private": False,
            "owner": _USER,
            "description": "This your first repo!",
            "html_url": "https://github.com/octocat/Hello-World",
        },
        "commit_url": f"https://api.github.com/repos/octocat/Hello-World/commits/{sha}",
        "url": f"https://api.github.com/repos/octocat/Hello-World/commits/{sha}/status",
    }


class RecordingConnection:
    """Stands in for the API connection, recording each call and answering with canned results"""

    def __init__(self, result: Any = None, delay: bool = False) -> None:
        self.result = result
        self.delay = delay
        self.calls: list[tuple[Any, ...]] = []

    async def _respond(self, *call: Any) -> Any:
        self.calls.append(call)
        if self.delay:
            await asyncio.sleep(random.uniform(0, 0.01))
        return self.result(*call) if callable(self.result) else self.result

    async def get_all(self, path: str, model: type[BaseModel], options: ApiOptions = ApiOptions.NONE) -> Any:
        return await self._respond("get_all", path, model, options)

    async def get(self, path: str, model: type[BaseModel]) -> Any:
        return await self._respond("get", path, model)

    async def post(self, path: str, model: type[BaseModel], body: BaseModel) -> Any:
        return await self._respond("post", path, model, body)
