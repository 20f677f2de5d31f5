import asyncio
import json
from xml.etree import ElementTree as ET

import pytest

from employee_search.core.config.models import SearchSettings
from employee_search.core.contracts.search import EmployeeRow, OutputFormat, QueryResult
from employee_search.core.exceptions import StoreQueryError, StoreUnavailable, ValidationError
from employee_search.gateway.service import SearchGateway
from tests.conftest import EchoStore, RecordingStore


def test_single_store_call_with_normalized_parameters(gateway, store):
    asyncio.run(gateway.search({"departmentId": "3", "isActive": "false", "search": "ana", "page": "2", "pageSize": "10"}))

    assert len(store.calls) == 1
    assert store.calls[0].as_bound_params() == {
        "department_id": 3,
        "is_active": False,
        "search": "ana",
        "page": 2,
        "page_size": 10,
        "output_format": "JSON",
    }


def test_absent_filters_reach_store_as_none(gateway, store):
    asyncio.run(gateway.search({}))

    params = store.calls[0].as_bound_params()
    assert params["department_id"] is None
    assert params["is_active"] is None
    assert params["search"] is None
    assert params["page"] == 1
    assert params["page_size"] == 20


def test_clamped_xml_scenario(gateway, store, settings):
    rendered = asyncio.run(gateway.search({"page": "0", "pageSize": "500", "outputFormat": "xml", "search": "O'Brien"}))

    request = store.calls[0]
    assert request.page == 1
    assert request.page_size == settings.max_page_size
    assert request.search == "O'Brien"
    assert rendered.media_type == "application/xml"


def test_null_payload_renders_empty_json_array(gateway):
    rendered = asyncio.run(gateway.search({}))

    assert rendered.status_code == 200
    assert rendered.body == "[]"
    assert rendered.media_type == "application/json"


def test_null_payload_renders_empty_employees_element(gateway):
    rendered = asyncio.run(gateway.search({"outputFormat": "XML"}))

    assert rendered.body == "<Employees></Employees>"
    assert ET.fromstring(rendered.body).tag == "Employees"


def test_payload_forwarded_verbatim(settings):
    payload = "<Employees><Employee><EmployeeID>4</EmployeeID></Employee></Employees>"
    gateway = SearchGateway(RecordingStore(QueryResult(payload=payload)), settings)

    rendered = asyncio.run(gateway.search({"outputFormat": "Xml"}))

    assert rendered.body == payload
    assert rendered.media_type == "application/xml"


@pytest.mark.parametrize("variants", [("json", "JSON", "Json"), ("xml", "XML", "Xml")])
def test_format_spellings_render_identically(settings, variants):
    rows = [EmployeeRow(employee_id=1, first_name="Ada", last_name="Lovelace")]
    gateway = SearchGateway(RecordingStore(QueryResult(rows=rows)), settings)

    responses = [asyncio.run(gateway.search({"outputFormat": v})) for v in variants]

    assert len({(r.body, r.media_type) for r in responses}) == 1


def test_repeated_calls_are_identical(settings):
    rows = [EmployeeRow(employee_id=2, first_name="Grace", last_name="Hopper", department_id=1)]
    gateway = SearchGateway(RecordingStore(QueryResult(rows=rows)), settings)
    raw = {"departmentId": "1", "page": "1", "outputFormat": "xml"}

    first = asyncio.run(gateway.search(raw))
    second = asyncio.run(gateway.search(raw))

    assert first == second


def test_search_text_reaches_store_as_bound_value(settings):
    echo = EchoStore()
    gateway = SearchGateway(echo, settings)
    hostile = "O'Brien%_'; DROP TABLE employees; --"

    rendered = asyncio.run(gateway.search({"search": hostile}))

    assert echo.calls[0]["search"] == hostile
    assert json.loads(rendered.body)["search"] == hostile


def test_validation_error_happens_before_store_call(gateway, store):
    with pytest.raises(ValidationError):
        asyncio.run(gateway.search({"page": "abc"}))
    assert store.calls == []


@pytest.mark.parametrize("error", [StoreUnavailable("connection refused"), StoreQueryError("bad parameter")])
def test_store_errors_are_surfaced(settings, error):
    gateway = SearchGateway(RecordingStore(error=error), settings)

    with pytest.raises(type(error)):
        asyncio.run(gateway.search({}))


def test_slow_store_times_out_as_unavailable():
    store = RecordingStore(delay=5)
    gateway = SearchGateway(store, SearchSettings(query_timeout_seconds=0.05))

    with pytest.raises(StoreUnavailable):
        asyncio.run(gateway.search({}))
    assert store.cancelled is True


def test_cancellation_propagates_to_store(settings):
    store = RecordingStore(delay=5)
    gateway = SearchGateway(store, settings)

    async def run():
        task = asyncio.create_task(gateway.search({}))
        await store.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())
    assert store.cancelled is True


def test_concurrent_calls_do_not_share_state(settings):
    echo = EchoStore()
    gateway = SearchGateway(echo, settings)

    async def run():
        return await asyncio.gather(*(gateway.search({"page": str(p)}) for p in range(1, 21)))

    responses = asyncio.run(run())

    assert [json.loads(r.body)["page"] for r in responses] == list(range(1, 21))
    assert len(echo.calls) == 20


def test_injected_settings_drive_clamping():
    store = RecordingStore()
    gateway = SearchGateway(store, SearchSettings(default_page_size=5, max_page_size=10))

    asyncio.run(gateway.search({}))
    asyncio.run(gateway.search({"pageSize": "50"}))

    assert [c.page_size for c in store.calls] == [5, 10]
    assert gateway.settings.max_page_size == 10


def test_normalize_exposes_request(gateway):
    assert gateway.normalize({"outputFormat": "xml"}).output_format is OutputFormat.XML


def test_oversized_integers_never_reach_store(gateway, store):
    with pytest.raises(ValidationError):
        asyncio.run(gateway.search({"page": str(10**30), "departmentId": str(10**30)}))
    assert store.calls == []
