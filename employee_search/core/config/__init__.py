from employee_search.core.config.loader import load_search_config
from employee_search.core.config.models import DataSourceConfig, SearchConfig, SearchSettings
from employee_search.core.config.env import connection_url

__all__ = ["load_search_config", "SearchConfig", "SearchSettings", "DataSourceConfig", "connection_url"]
