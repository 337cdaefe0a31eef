import asyncio
from typing import Awaitable, Callable, TypeVar

import click
import rich
from pydantic import BaseModel, ValidationError

from gh_statuses.lib.config import _CONFIG_FILE_LOCATION, Config
from gh_statuses.lib.ensure import InvalidArgument
from gh_statuses.lib.github.auth import GithubAuthenticationRequired, clear_access_token, save_access_token
from gh_statuses.lib.github.backends.protocol import BackendType, GithubApiRequestFailed
from gh_statuses.lib.github.commit_statuses import CommitStatusClient
from gh_statuses.lib.github.connection import ApiConnection
from gh_statuses.lib.logging import lg, setup_file_logging
from gh_statuses.models.github import CommitState, NewCommitStatus
from gh_statuses.models.options import ApiOptions

_CLI_CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
_COMMIT_STATES = [state.value for state in CommitState]

ResultT = TypeVar("ResultT")


def parse_repository(repository: str) -> tuple[str, str] | int:
    """Repositories are given either as owner/name or as a numeric repository ID"""
    if repository.isdigit():
        return int(repository)
    owner, _, name = repository.partition("/")
    if not owner or not name or "/" in name:
        raise click.BadParameter(f"Expected owner/name or a repository ID, got {repository!r}", param_hint="REPO")
    return owner, name


def _run_with_client(config: Config, operation: Callable[[CommitStatusClient], Awaitable[ResultT]]) -> ResultT:
    async def _run() -> ResultT:
        async with ApiConnection.from_config(config) as connection:
            return await operation(CommitStatusClient(connection))

    try:
        return asyncio.run(_run())
    except InvalidArgument as e:
        raise click.UsageError(str(e)) from e
    except (GithubApiRequestFailed, GithubAuthenticationRequired) as e:
        lg.exception("Request to the Github API failed")
        raise click.ClickException(str(e)) from e
    except ValidationError as e:
        lg.exception("Unexpected response from the Github API")
        raise click.ClickException(f"Unexpected response from the Github API: {e}") from e


def _print_result(result: BaseModel | list[BaseModel]) -> None:
    if isinstance(result, list):
        rich.print_json(data=[item.model_dump(mode="json") for item in result])
    else:
        rich.print_json(result.model_dump_json())


@click.group(context_settings=_CLI_CONTEXT_SETTINGS)
@click.option(
    "--backend",
    help="Specifies which backend requests are sent through",
    envvar="GH_STATUSES_BACKEND",
    type=click.Choice(list(BackendType)),
)
@click.pass_context
def cli(ctx: click.Context, backend: BackendType | None) -> None:
    """Read and report Github commit statuses"""
    config = Config.load_config()
    setup_file_logging(config.core.logfile_path, config.core.logfile_max_bytes, config.core.logfile_count)
    if backend:
        config.api.client_type = BackendType(backend)
    ctx.obj = config


@cli.command(name="list")
@click.argument("repo")
@click.argument("ref")
@click.option("--page-size", type=click.IntRange(min=1), help="How many statuses to request per page")
@click.option("--page-count", type=click.IntRange(min=1), help="The maximum number of pages to read")
@click.option("--start-page", type=click.IntRange(min=1), help="The first page to read")
@click.pass_obj
def list_statuses(
    config: Config, repo: str, ref: str, page_size: int | None, page_count: int | None, start_page: int | None
) -> None:
    """List the statuses reported against REF (a commit SHA, branch or tag) in REPO"""
    repository = parse_repository(repo)
    options = ApiOptions(page_size=page_size, page_count=page_count, start_page=start_page)

    def _operation(client: CommitStatusClient) -> Awaitable:
        if isinstance(repository, int):
            return client.get_all_by_id(repository, ref, options)
        return client.get_all(*repository, ref, options)

    _print_result(_run_with_client(config, _operation))


@cli.command
@click.argument("repo")
@click.argument("ref")
@click.pass_obj
def combined(config: Config, repo: str, ref: str) -> None:
    """Show the combined status of REF in REPO"""
    repository = parse_repository(repo)

    def _operation(client: CommitStatusClient) -> Awaitable:
        if isinstance(repository, int):
            return client.get_combined_by_id(repository, ref)
        return client.get_combined(*repository, ref)

    _print_result(_run_with_client(config, _operation))


@cli.command
@click.argument("repo")
@click.argument("ref")
@click.option("--state", required=True, type=click.Choice(_COMMIT_STATES), help="The state of the status")
@click.option("--target-url", help="A link to the details of the status")
@click.option("--description", help="A short description of the status")
@click.option("--context", help="A label that separates this status from those reported by other systems")
@click.pass_obj
def create(
    config: Config,
    repo: str,
    ref: str,
    state: str,
    target_url: str | None,
    description: str | None,
    context: str | None,
) -> None:
    """Report a new status against REF in REPO"""
    repository = parse_repository(repo)
    new_status = NewCommitStatus(
        state=CommitState(state), target_url=target_url, description=description, context=context
    )

    def _operation(client: CommitStatusClient) -> Awaitable:
        if isinstance(repository, int):
            return client.create_by_id(repository, ref, new_status)
        return client.create(*repository, ref, new_status)

    _print_result(_run_with_client(config, _operation))


@cli.command
@click.option("--token", prompt=True, hide_input=True, help="A Github access token with the repo:status scope")
def login(token: str) -> None:
    """Save an access token for the raw HTTP backend"""
    save_access_token(token)
    print("Access token saved")


@cli.command
def logout() -> None:
    """Remove the saved access token"""
    clear_access_token()
    print("Access token removed")


@cli.command
@click.pass_obj
def dump_config(config: Config) -> None:
    """Dump the current configuration, as it would be loaded by gh-statuses"""
    print(f"Config file location: {_CONFIG_FILE_LOCATION} (exists => {_CONFIG_FILE_LOCATION.exists()})")
    rich.print_json(config.model_dump_json())


@cli.command
def clear_config() -> None:
    """Reset the user's settings"""
    _CONFIG_FILE_LOCATION.unlink(missing_ok=True)
    print("Your settings have been cleared")
