import pytest
from helpers import RecordingConnection

from gh_statuses.lib.config import ApiConfig, Config, CoreConfig


@pytest.fixture()
def config(tmp_path) -> Config:
    return Config(
        core=CoreConfig(logfile_path=tmp_path / "gh_statuses.log"),
        api=ApiConfig(base_url="https://api.github.test"),
    )


@pytest.fixture()
def connection() -> RecordingConnection:
    return RecordingConnection()
