import json
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from pydantic import BaseModel, PositiveFloat

from gh_statuses.lib.constants import CONFIG_FOLDER, DEFAULT_API_VERSION
from gh_statuses.lib.github.backends.protocol import BackendType

_CONFIG_FILE_LOCATION = CONFIG_FOLDER / "config.json"


class CoreConfig(BaseModel):
    logfile_path: Path = CONFIG_FOLDER / "gh_statuses.log"
    """Controls where the application logs should be stored"""

    logfile_max_bytes: int = 5000000
    """Controls large the application log can grow before being rotated"""

    logfile_count: int = 5
    """Controls how many rotated application logs to keep"""


class ApiConfig(BaseModel):
    """Controlling how the GitHub API is accessed"""

    base_url: str = "https://api.github.com"
    """Controls which URL we're going to be sending HTTP requests to"""

    client_type: BackendType = BackendType.RAW_HTTP
    """Controls what mechanism we will be using to send API requests to Github"""

    api_version: str = DEFAULT_API_VERSION
    """The REST API version requested through the X-GitHub-Api-Version header"""

    timeout: PositiveFloat = 30.0
    """How many seconds a single HTTP request may take before it is abandoned"""

    offline: bool = False
    """When enabled, every API request fails immediately instead of touching the network"""


_CONFIG_INSTANCE: Optional["Config"] = None


class Config(BaseModel):
    core: CoreConfig = CoreConfig()
    """Customizing shared core behaviors, such as logging"""

    api: ApiConfig = ApiConfig()
    """Customizing how we will interact with the Github APIs"""

    @classmethod
    def load_config(cls) -> "Config":
        global _CONFIG_INSTANCE
        if _CONFIG_INSTANCE is None:
            if _CONFIG_FILE_LOCATION.exists():
                _CONFIG_INSTANCE = cls(**json.loads(_CONFIG_FILE_LOCATION.read_text()))
            else:
                _CONFIG_INSTANCE = cls()
        return _CONFIG_INSTANCE

    def save(self) -> None:
        _CONFIG_FILE_LOCATION.parent.mkdir(parents=True, exist_ok=True)
        _CONFIG_FILE_LOCATION.write_text(self.model_dump_json(indent=4))

    @classmethod
    @contextmanager
    def to_edit(cls) -> Generator["Config", None, None]:
        current_config = cls.load_config()
        yield current_config
        current_config.save()
