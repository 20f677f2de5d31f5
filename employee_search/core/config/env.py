"""Connection strings live in the environment (optionally a .env file), never in the JSON config."""
import os
from pathlib import Path

from dotenv import load_dotenv

from employee_search.core.config.models import DataSourceConfig
from employee_search.core.exceptions import ConfigError


def load_env_file(env_file_path: str | None, project_root: Path | None = None) -> Path | None:
    """Load the .env file if present, without overriding variables already set. Returns the path loaded."""
    if not env_file_path:
        return None
    path = (project_root or Path.cwd()) / env_file_path
    if not path.exists():
        return None
    load_dotenv(path, override=False)
    return path


def connection_url(
    data_source: DataSourceConfig,
    env_file_path: str | None = None,
    project_root: Path | None = None,
) -> str:
    load_env_file(env_file_path, project_root)
    url = os.environ.get(data_source.connection_id)
    if not url:
        raise ConfigError(f"{data_source.connection_id} not set (data source {data_source.id})")
    return url
