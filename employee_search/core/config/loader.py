import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as SchemaError

from employee_search.core.config.env import load_env_file
from employee_search.core.config.models import SearchConfig
from employee_search.core.exceptions import ConfigError


def _resolve(config_path: str | Path, root: Path) -> Path:
    path = Path(config_path)
    return path if path.is_absolute() else root / path


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_search_config(config_path: str | Path, project_root: Path | None = None) -> SearchConfig:
    """Read and validate the search config, then load its .env so connection ids resolve."""
    root = project_root or Path.cwd()
    path = _resolve(config_path, root)
    try:
        config = SearchConfig.model_validate(_read_json(path))
    except SchemaError as e:
        raise ConfigError(f"Invalid config schema in {path}: {e}") from e
    load_env_file(config.env_file_path, root)
    return config
