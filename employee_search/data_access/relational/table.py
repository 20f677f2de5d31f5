"""Table store: filters and pages an employees table, returns typed rows."""
from __future__ import annotations

import logging

from sqlalchemy import Boolean, Column, Date, Integer, MetaData, Select, String, Table, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from employee_search.core.contracts.search import EmployeeRow, QueryResult, SearchRequest
from employee_search.data_access.store import translate_store_errors

log = logging.getLogger("store")

LIKE_ESCAPE = "\\"
_SEARCH_COLUMNS = ("first_name", "last_name", "email", "job_title")


def employees_table(name: str = "employees", metadata: MetaData | None = None) -> Table:
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("employee_id", Integer, primary_key=True),
        Column("first_name", String(100), nullable=False),
        Column("last_name", String(100), nullable=False),
        Column("email", String(255)),
        Column("job_title", String(150)),
        Column("department_id", Integer, index=True),
        Column("is_active", Boolean, nullable=False, default=True),
        Column("hire_date", Date),
    )


def escape_like(value: str) -> str:
    """Make LIKE metacharacters in user text match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_search_statement(table: Table, request: SearchRequest) -> Select:
    stmt = select(table)
    if request.department_id is not None:
        stmt = stmt.where(table.c.department_id == request.department_id)
    if request.is_active is not None:
        stmt = stmt.where(table.c.is_active == request.is_active)
    if request.search is not None:
        pattern = f"%{escape_like(request.search)}%"
        stmt = stmt.where(or_(*(table.c[col].ilike(pattern, escape=LIKE_ESCAPE) for col in _SEARCH_COLUMNS)))
    return (
        stmt.order_by(table.c.last_name, table.c.first_name, table.c.employee_id)
        .offset(request.offset)
        .limit(request.page_size)
    )


class TableStore:
    def __init__(self, engine: AsyncEngine, table: Table | str = "employees", source_id: str = "default"):
        self._engine = engine
        self._table = employees_table(table) if isinstance(table, str) else table
        self._source_id = source_id

    @property
    def table(self) -> Table:
        return self._table

    async def query(self, request: SearchRequest) -> QueryResult:
        stmt = build_search_statement(self._table, request)
        with translate_store_errors(self._source_id):
            async with self._engine.connect() as conn:
                result = await conn.execute(stmt)
                rows = [EmployeeRow.model_validate(dict(r._mapping)) for r in result]
        log.info("%s: %s rows from %s", self._source_id, len(rows), self._table.name)
        return QueryResult(rows=rows)
