from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    JSON = "JSON"
    XML = "XML"


class SearchRequest(BaseModel):
    """Normalized search input. Built once per call, never mutated."""

    model_config = ConfigDict(frozen=True)

    department_id: int | None = None
    is_active: bool | None = None
    search: str | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    output_format: OutputFormat = OutputFormat.JSON

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def as_bound_params(self) -> dict[str, Any]:
        """The six values handed to the store as bind parameters."""
        return {
            "department_id": self.department_id,
            "is_active": self.is_active,
            "search": self.search,
            "page": self.page,
            "page_size": self.page_size,
            "output_format": self.output_format.value,
        }


class EmployeeRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    employee_id: int = Field(alias="EmployeeID")
    first_name: str = Field(alias="FirstName")
    last_name: str = Field(alias="LastName")
    email: str | None = Field(default=None, alias="Email")
    job_title: str | None = Field(default=None, alias="JobTitle")
    department_id: int | None = Field(default=None, alias="DepartmentID")
    is_active: bool = Field(default=True, alias="IsActive")
    hire_date: date | None = Field(default=None, alias="HireDate")


class QueryResult(BaseModel):
    """What a store hands back: a pre-rendered payload, or typed rows."""

    payload: str | None = None
    rows: list[EmployeeRow] | None = None

    @property
    def is_passthrough(self) -> bool:
        return self.rows is None


class RenderedResponse(BaseModel):
    body: str
    media_type: str
    status_code: int = 200
