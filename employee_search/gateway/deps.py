from __future__ import annotations

import os
from pathlib import Path

from employee_search.core.config.loader import load_search_config
from employee_search.core.config.models import SearchConfig
from employee_search.data_access.factory import build_store
from employee_search.gateway.service import SearchGateway


def get_config_path() -> str:
    return os.environ.get("CONFIG_PATH", "config/search.json")


def build_gateway(config: SearchConfig, project_root: Path | None = None) -> SearchGateway:
    store = build_store(config, project_root)
    return SearchGateway(store, config.search)


def load_gateway(project_root: Path | None = None) -> SearchGateway:
    config = load_search_config(get_config_path(), project_root=project_root)
    return build_gateway(config, project_root)
