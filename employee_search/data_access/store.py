"""Data store protocol and translation of driver failures into search errors."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy import exc as sa_exc

from employee_search.core.contracts.search import QueryResult, SearchRequest
from employee_search.core.exceptions import SearchError, StoreQueryError, StoreUnavailable

log = logging.getLogger("store")

_UNAVAILABLE = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.TimeoutError,
    sa_exc.DisconnectionError,
    asyncio.TimeoutError,
    OSError,
)


class DataStore(Protocol):
    async def query(self, request: SearchRequest) -> QueryResult:
        ...


def classify_db_error(error: BaseException) -> SearchError:
    if isinstance(error, _UNAVAILABLE):
        return StoreUnavailable(str(error))
    if isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated:
        return StoreUnavailable(str(error))
    return StoreQueryError(str(error))


@contextmanager
def translate_store_errors(source_id: str) -> Iterator[None]:
    try:
        yield
    except (sa_exc.SQLAlchemyError, asyncio.TimeoutError, OSError, OverflowError) as e:
        error = classify_db_error(e)
        log.warning("%s: %s (%s)", source_id, type(error).__name__, e)
        raise error from e
