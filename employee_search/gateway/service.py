"""SearchGateway: normalize input, make one bound store call, render the result."""
from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

from employee_search.core.config.models import SearchSettings
from employee_search.core.contracts.search import RenderedResponse, SearchRequest
from employee_search.core.exceptions import StoreUnavailable
from employee_search.data_access.store import DataStore
from employee_search.gateway.normalize import normalize_request
from employee_search.gateway.render import render_result

log = logging.getLogger("gateway")


def _preview(value: str | None, max_len: int = 60) -> str:
    if value is None:
        return "-"
    return (value[:max_len] + "…") if len(value) > max_len else value


class SearchGateway:
    def __init__(self, store: DataStore, settings: SearchSettings | None = None):
        self._store = store
        self._settings = settings or SearchSettings()

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    def normalize(self, raw: Mapping[str, Any]) -> SearchRequest:
        return normalize_request(raw, self._settings)

    async def search(self, raw: Mapping[str, Any]) -> RenderedResponse:
        request = self.normalize(raw)
        return await self.execute(request)

    async def execute(self, request: SearchRequest) -> RenderedResponse:
        log.info(
            "SEARCH: dept=%s active=%s search=%r page=%s size=%s format=%s",
            request.department_id,
            request.is_active,
            _preview(request.search),
            request.page,
            request.page_size,
            request.output_format.value,
        )
        start = time.perf_counter()
        timeout = self._settings.query_timeout_seconds
        try:
            if timeout is None:
                result = await self._store.query(request)
            else:
                result = await asyncio.wait_for(self._store.query(request), timeout=timeout)
        except asyncio.TimeoutError:
            latency_ms = int((time.perf_counter() - start) * 1000)
            log.warning("store timed out after %s ms", latency_ms)
            detail = f"Data store did not respond within {timeout}s" if timeout else "Data store timed out"
            raise StoreUnavailable(detail) from None
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            log.warning("store failed: %s (%s ms)", e, latency_ms)
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        response = render_result(result, request.output_format)
        log.info("RESULT: %s, %s chars (%s ms)", response.media_type, len(response.body), latency_ms)
        return response
