from pathlib import Path

# Content types
JSON_CONTENT_ACCEPT_TYPE = "application/vnd.github+json"

# Sent as X-GitHub-Api-Version unless overridden in the config
DEFAULT_API_VERSION = "2022-11-28"

CONFIG_FOLDER = Path.home() / ".config/gh-statuses"

# Environment variables checked for an access token, in order
TOKEN_ENVIRONMENT_VARIABLES = ["GITHUB_TOKEN", "GH_TOKEN"]
