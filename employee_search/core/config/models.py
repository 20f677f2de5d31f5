from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class SearchSettings(BaseModel):
    """Paging and format policy applied by the gateway before any store call."""

    model_config = ConfigDict(frozen=True)

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    unknown_format: Literal["default", "reject"] = "default"
    query_timeout_seconds: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _default_within_max(self) -> SearchSettings:
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds max_page_size ({self.max_page_size})"
            )
        return self


class DataSourceConfig(BaseModel):
    id: str
    mode: Literal["procedure", "table"] = "procedure"
    connection_id: str  # env var name
    procedure: str = "dbo.usp_SearchEmployees"  # procedure mode
    table: str = "employees"  # table mode

    @field_validator("procedure", "table")
    @classmethod
    def _identifier(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"not a valid identifier: {value!r}")
        return value


class SearchConfig(BaseModel):
    service_name: str = "employee-search"
    env_file_path: str | None = None
    data_source: DataSourceConfig
    search: SearchSettings = Field(default_factory=SearchSettings)
