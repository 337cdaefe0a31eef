import asyncio
import json
import re
import tempfile
from pathlib import Path
from typing import Any

import httpx

from gh_statuses.lib.config import Config
from gh_statuses.lib.constants import CONFIG_FOLDER
from gh_statuses.lib.github.backends.protocol import (
    GithubApiBackend,
    GithubApiRequestFailed,
    GithubApiResponse,
    Headers,
    QueryParams,
)
from gh_statuses.lib.logging import lg

_HEADER_RE = re.compile(r"^([a-zA-Z0-9-]+)\:(.+)$")
_TEMPORARY_JSON_BODY_DIRECTORY = CONFIG_FOLDER / "request_bodies"
_GITHUB_DOT_COM_API_HOST = "api.github.com"


class CliApiResponse(GithubApiResponse):
    def __init__(self, return_code: int, http_status: int, stdout: str, stderr: str, headers: dict[str, str]) -> None:
        self.return_code = return_code
        self.http_status = http_status
        self.stdout = stdout
        self.stderr = stderr
        self._headers = headers

    def is_success(self) -> bool:
        return self.return_code == 0 and 200 <= self.http_status < 300

    def raise_for_status(self) -> None:
        if not self.is_success():
            raise GithubApiRequestFailed({"error": self.stderr, "http_status": self.http_status})

    def json(self) -> Any:
        return json.loads(self.stdout)

    @property
    def text(self) -> str:
        return self.stdout

    @property
    def headers(self) -> dict[str, str]:
        return self._headers


def _parse_cli_api_response(return_code: int, stdout: str, stderr: str) -> CliApiResponse:
    """Splits the output of `gh api -i` into the status line, the response headers and the body"""
    headers: dict[str, str] = {}
    http_status: int = 0
    response_content = []
    in_body = False
    for line in stdout.splitlines():
        if in_body:
            response_content.append(line)
        elif not line.strip():
            # The first blank line after the status line ends the headers
            in_body = http_status != 0
        elif line.lower().startswith("http/"):
            http_status = int(line.split(" ")[1])
        elif header_components := _HEADER_RE.match(line):
            headers[header_components.group(1)] = header_components.group(2).strip()
        else:
            in_body = True
            response_content.append(line)
    return CliApiResponse(return_code, http_status, "\n".join(response_content), stderr, headers)


async def run_gh_cli_command(command: list[str]) -> CliApiResponse:
    """Simple wrapper around running a Github CLI command"""
    lg.debug(f"Running Github CLI command: gh {' '.join(command)}")

    try:
        proc = await asyncio.create_subprocess_exec(
            "gh", *command, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
        )
    except FileNotFoundError as e:
        raise GithubApiRequestFailed("The Github CLI (gh) could not be found") from e

    raw_stdout, raw_stderr = await proc.communicate()
    stderr = raw_stderr.decode()
    if raw_stderr:
        lg.debug(f"Error output from Github CLI: {stderr.strip()}")

    return_code = proc.returncode if proc.returncode is not None else 255
    return _parse_cli_api_response(return_code, raw_stdout.decode(), stderr)


def _create_request_body_tempfile(body: dict[str, Any]) -> Path:
    _TEMPORARY_JSON_BODY_DIRECTORY.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(delete=False, dir=_TEMPORARY_JSON_BODY_DIRECTORY, suffix=".json") as temp:
        temp.write(json.dumps(body).encode())
    return Path(temp.name)


def gh_hostname(base_url: str) -> str | None:
    """
    The `gh` host matching an API base URL. Github Enterprise servers are addressed by their own host name, while
    api.github.com is what gh already targets by default, so no host is needed for it.
    """
    host = httpx.URL(base_url).host
    if not host or host == _GITHUB_DOT_COM_API_HOST:
        return None
    return host


def _build_command(
    url: str,
    method: str = "GET",
    headers: Headers | None = None,
    query_params: QueryParams | None = None,
    body_file: Path | None = None,
    hostname: str | None = None,
) -> list[str]:
    command = ["api", "-i", "-X", method]

    if hostname:
        command.extend(["--hostname", hostname])

    if headers:
        for header_name, header_value in headers.items():
            command.extend(["-H", f"{header_name}: {header_value}"])

    if query_params:
        for param_name, param_value in query_params.items():
            command.extend(["-F", f"{param_name}={param_value}"])

    if body_file:
        command.extend(["--input", str(body_file)])

    command.append(url)

    return command


class GithubCliBackend(GithubApiBackend):
    """Sends requests through `gh api`, reusing whatever authentication the Github CLI already has"""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.hostname = gh_hostname(config.api.base_url)

    async def get(
        self,
        url: str,
        headers: Headers | None = None,
        params: QueryParams | None = None,
    ) -> CliApiResponse:
        command = _build_command(url, headers=headers, query_params=params, hostname=self.hostname)
        return await run_gh_cli_command(command)

    async def post(
        self,
        url: str,
        headers: Headers | None = None,
        json: dict[str, Any] | None = None,
    ) -> CliApiResponse:
        body_file = _create_request_body_tempfile(json or {})
        try:
            command = _build_command(url, headers=headers, body_file=body_file, method="POST", hostname=self.hostname)
            return await run_gh_cli_command(command)
        finally:
            body_file.unlink(missing_ok=True)

    async def aclose(self) -> None:
        # Each command runs in its own subprocess
        pass
