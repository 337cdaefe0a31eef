import os

from gh_statuses.lib.constants import CONFIG_FOLDER, TOKEN_ENVIRONMENT_VARIABLES

_AUTHENTICATION_CACHE_LOCATION = CONFIG_FOLDER / "auth.text"


class GithubAuthenticationRequired(Exception):
    def __init__(self) -> None:
        super().__init__(
            f"No Github access token found. Set one of {', '.join(TOKEN_ENVIRONMENT_VARIABLES)}, "
            "run `gh-statuses login`, or switch to the GITHUB_CLI backend"
        )


def save_access_token(token: str) -> None:
    """Writes the access token to the config location"""
    if not token.strip():
        raise ValueError("Invalid access token! Cannot save")

    _AUTHENTICATION_CACHE_LOCATION.parent.mkdir(parents=True, exist_ok=True)
    # Created owner-only so the token is never readable by others, even briefly
    fd = os.open(_AUTHENTICATION_CACHE_LOCATION, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w") as token_file:
        token_file.write(token.strip())


def clear_access_token() -> None:
    _AUTHENTICATION_CACHE_LOCATION.unlink(missing_ok=True)


def get_api_token() -> str:
    """
    Loads the access token used by the raw HTTP backend. Environment variables win over the token saved on disk. If
    neither is present, a GithubAuthenticationRequired exception is raised.
    """
    for variable in TOKEN_ENVIRONMENT_VARIABLES:
        if token := os.environ.get(variable, "").strip():
            return token

    saved_token = _AUTHENTICATION_CACHE_LOCATION.read_text().strip() if _AUTHENTICATION_CACHE_LOCATION.exists() else ""
    if not saved_token:
        raise GithubAuthenticationRequired()
    return saved_token
