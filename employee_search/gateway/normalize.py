"""Turn raw, untyped caller input into a validated SearchRequest."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from employee_search.core.config.models import SearchSettings
from employee_search.core.contracts.search import OutputFormat, SearchRequest
from employee_search.core.exceptions import ValidationError

# HTTP parameter name -> accepted spellings
_KEYS = {
    "departmentId": ("departmentId", "department_id"),
    "isActive": ("isActive", "is_active"),
    "search": ("search", "search_text"),
    "page": ("page",),
    "pageSize": ("pageSize", "page_size"),
    "outputFormat": ("outputFormat", "output_format"),
}

# Stored procedure arguments are int32
INT32_MAX = 2**31 - 1

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _pick(raw: Mapping[str, Any], field: str) -> Any:
    for key in _KEYS[field]:
        if key in raw:
            value = raw[key]
            if value is None or (isinstance(value, str) and value == ""):
                return None
            return value
    return None


def _parse_int(field: str, value: Any) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; "isActive=true" in a numeric slot is a caller error
    if isinstance(value, bool):
        raise ValidationError(field, "must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValidationError(field, f"must be an integer, got {value!r}") from None
    raise ValidationError(field, f"must be an integer, got {type(value).__name__}")


def _check_upper_bound(field: str, value: int | None) -> int | None:
    if value is not None and value > INT32_MAX:
        raise ValidationError(field, f"must be at most {INT32_MAX}, got {value}")
    return value


def _parse_bool(field: str, value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValidationError(field, f"must be a boolean, got {value!r}")


def clamp_page(page: int | None) -> int:
    if page is None or page < 1:
        return 1
    return page


def clamp_page_size(page_size: int | None, settings: SearchSettings) -> int:
    if page_size is None:
        page_size = settings.default_page_size
    return max(1, min(page_size, settings.max_page_size))


def parse_output_format(value: Any, settings: SearchSettings) -> OutputFormat:
    if value is None:
        return OutputFormat.JSON
    if isinstance(value, OutputFormat):
        return value
    normalized = str(value).strip().upper()
    try:
        return OutputFormat(normalized)
    except ValueError:
        if settings.unknown_format == "reject":
            raise ValidationError("outputFormat", f"must be JSON or XML, got {value!r}") from None
        return OutputFormat.JSON


def normalize_request(raw: Mapping[str, Any], settings: SearchSettings) -> SearchRequest:
    department_id = _check_upper_bound("departmentId", _parse_int("departmentId", _pick(raw, "departmentId")))
    if department_id is not None and department_id < 1:
        raise ValidationError("departmentId", f"must be positive, got {department_id}")

    search = _pick(raw, "search")
    if search is not None and not isinstance(search, str):
        raise ValidationError("search", f"must be a string, got {type(search).__name__}")

    return SearchRequest(
        department_id=department_id,
        is_active=_parse_bool("isActive", _pick(raw, "isActive")),
        search=search,
        page=clamp_page(_check_upper_bound("page", _parse_int("page", _pick(raw, "page")))),
        page_size=clamp_page_size(_parse_int("pageSize", _pick(raw, "pageSize")), settings),
        output_format=parse_output_format(_pick(raw, "outputFormat"), settings),
    )
