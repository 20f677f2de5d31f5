"""Shared fixtures: a recording stub store and a seeded SQLite employees database."""
from __future__ import annotations

import asyncio
import json
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import MetaData, func, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from employee_search.core.config.models import SearchSettings
from employee_search.core.contracts.search import QueryResult, SearchRequest
from employee_search.data_access.relational.table import employees_table
from employee_search.gateway.service import SearchGateway

EMPLOYEES = [
    {"employee_id": 1, "first_name": "Ada", "last_name": "Lovelace", "email": "ada.lovelace@example.com",
     "job_title": "Principal Engineer", "department_id": 1, "is_active": True, "hire_date": date(2015, 3, 1)},
    {"employee_id": 2, "first_name": "Grace", "last_name": "Hopper", "email": "grace.hopper@example.com",
     "job_title": "Engineering Manager", "department_id": 1, "is_active": True, "hire_date": date(2012, 7, 15)},
    {"employee_id": 3, "first_name": "Alan", "last_name": "Turing", "email": "alan.turing@example.com",
     "job_title": "Research Scientist", "department_id": 2, "is_active": False, "hire_date": date(2010, 1, 11)},
    {"employee_id": 4, "first_name": "Siobhan", "last_name": "O'Brien", "email": "siobhan.obrien@example.com",
     "job_title": "Payroll Analyst", "department_id": 3, "is_active": True, "hire_date": date(2019, 9, 30)},
    {"employee_id": 5, "first_name": "Katherine", "last_name": "Johnson", "email": "katherine.johnson@example.com",
     "job_title": "Data Analyst", "department_id": 2, "is_active": True, "hire_date": date(2021, 5, 4)},
    {"employee_id": 6, "first_name": "John", "last_name": "Doe", "email": "j_doe@example.com",
     "job_title": "Sales_Ops", "department_id": 3, "is_active": False, "hire_date": None},
]

# last_name order
ORDERED_IDS = [6, 2, 5, 1, 4, 3]


class RecordingStore:
    """Stub store: records every request, then returns a canned result or raises."""

    def __init__(self, result: QueryResult | None = None, error: Exception | None = None, delay: float = 0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: list[SearchRequest] = []
        self.started = asyncio.Event()
        self.cancelled = False

    async def query(self, request: SearchRequest) -> QueryResult:
        self.calls.append(request)
        self.started.set()
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.result if self.result is not None else QueryResult(payload=None)


class EchoStore:
    """Returns the bound parameter values it received as a JSON payload."""

    def __init__(self):
        self.calls: list[dict] = []

    async def query(self, request: SearchRequest) -> QueryResult:
        params = request.as_bound_params()
        self.calls.append(params)
        return QueryResult(payload=json.dumps(params))


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(default_page_size=20, max_page_size=100)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def gateway(store: RecordingStore, settings: SearchSettings) -> SearchGateway:
    return SearchGateway(store, settings)


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}"


async def seed_employees(url: str, table_name: str = "employees") -> AsyncEngine:
    """Create and fill the employees table. Call inside the event loop that will use the engine."""
    engine = create_async_engine(url)
    metadata = MetaData()
    table = employees_table(table_name, metadata)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        if not await conn.scalar(select(func.count()).select_from(table)):
            await conn.execute(insert(table), EMPLOYEES)
    return engine
