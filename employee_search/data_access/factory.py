from __future__ import annotations

from pathlib import Path

from employee_search.core.config.env import connection_url
from employee_search.core.config.models import SearchConfig
from employee_search.data_access.relational.engine import create_engine
from employee_search.data_access.relational.procedure import ProcedureStore
from employee_search.data_access.relational.table import TableStore
from employee_search.data_access.store import DataStore


def build_store(
    config: SearchConfig,
    project_root: Path | None = None,
) -> DataStore:
    """Build the configured data store. The engine is cached under data_source.id."""
    ds = config.data_source
    engine = create_engine(connection_url(ds, config.env_file_path, project_root), key=ds.id)
    if ds.mode == "table":
        return TableStore(engine, ds.table, source_id=ds.id)
    return ProcedureStore(engine, ds.procedure, source_id=ds.id)
