from employee_search.core.contracts.search import (
    EmployeeRow,
    OutputFormat,
    QueryResult,
    RenderedResponse,
    SearchRequest,
)

__all__ = [
    "EmployeeRow",
    "OutputFormat",
    "QueryResult",
    "RenderedResponse",
    "SearchRequest",
]
