from employee_search.core.config.loader import load_search_config
from employee_search.core.config.models import DataSourceConfig, SearchConfig, SearchSettings
from employee_search.core.exceptions import (
    ConfigError,
    SearchError,
    StoreQueryError,
    StoreUnavailable,
    ValidationError,
)

__all__ = [
    "load_search_config",
    "SearchConfig",
    "SearchSettings",
    "DataSourceConfig",
    "ConfigError",
    "SearchError",
    "ValidationError",
    "StoreUnavailable",
    "StoreQueryError",
]
