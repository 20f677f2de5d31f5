"""Stored-procedure store: the procedure renders the final JSON/XML payload itself."""
from __future__ import annotations

import logging

from sqlalchemy import Boolean, Integer, String, bindparam, text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql.elements import TextClause

from employee_search.core.contracts.search import QueryResult, SearchRequest
from employee_search.data_access.store import translate_store_errors

log = logging.getLogger("store")

# procedure argument name, bind name, bind type
_ARGUMENTS = (
    ("DepartmentID", "department_id", Integer),
    ("IsActive", "is_active", Boolean),
    ("Search", "search", String),
    ("Page", "page", Integer),
    ("PageSize", "page_size", Integer),
    ("OutputFormat", "output_format", String),
)


def build_procedure_call(procedure: str, dialect_name: str) -> TextClause:
    """Statement invoking the procedure with every argument as a bind parameter."""
    if dialect_name == "mssql":
        args = ", ".join(f"@{arg} = :{name}" for arg, name, _ in _ARGUMENTS)
        sql = f"EXEC {procedure} {args}"
    else:
        args = ", ".join(f":{name}" for _, name, _ in _ARGUMENTS)
        sql = f"SELECT * FROM {procedure}({args})"
    return text(sql).bindparams(*(bindparam(name, type_=type_) for _, name, type_ in _ARGUMENTS))


class ProcedureStore:
    def __init__(self, engine: AsyncEngine, procedure: str, source_id: str = "default"):
        self._engine = engine
        self._procedure = procedure
        self._source_id = source_id

    async def query(self, request: SearchRequest) -> QueryResult:
        stmt = build_procedure_call(self._procedure, self._engine.dialect.name)
        with translate_store_errors(self._source_id):
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt, request.as_bound_params())
                # SQL Server splits FOR JSON / FOR XML output across rows of ~2033 chars
                chunks = [str(row[0]) for row in result if row[0] is not None]
        payload = "".join(chunks) if chunks else None
        log.info("%s: %s returned %s chars", self._source_id, self._procedure, len(payload) if payload else 0)
        return QueryResult(payload=payload)
