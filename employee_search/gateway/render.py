"""Serialize store results into the caller's requested format."""
from __future__ import annotations

import json
from xml.etree import ElementTree as ET

from employee_search.core.contracts.search import EmployeeRow, OutputFormat, QueryResult, RenderedResponse

MEDIA_TYPES = {
    OutputFormat.JSON: "application/json",
    OutputFormat.XML: "application/xml",
}

EMPTY_BODIES = {
    OutputFormat.JSON: "[]",
    OutputFormat.XML: "<Employees></Employees>",
}


def rows_to_json(rows: list[EmployeeRow]) -> str:
    return json.dumps([row.model_dump(mode="json", by_alias=True) for row in rows], ensure_ascii=False)


def rows_to_xml(rows: list[EmployeeRow]) -> str:
    root = ET.Element("Employees")
    for row in rows:
        item = ET.SubElement(root, "Employee")
        for name, value in row.model_dump(mode="json", by_alias=True).items():
            # FOR XML PATH leaves NULL columns out; do the same
            if value is None:
                continue
            child = ET.SubElement(item, name)
            child.text = ("true" if value else "false") if isinstance(value, bool) else str(value)
    return ET.tostring(root, encoding="unicode", short_empty_elements=False)


def render_empty(output_format: OutputFormat) -> RenderedResponse:
    return RenderedResponse(body=EMPTY_BODIES[output_format], media_type=MEDIA_TYPES[output_format])


def render_result(result: QueryResult, output_format: OutputFormat) -> RenderedResponse:
    """Passthrough payloads go out verbatim; rows are serialized here. Empty -> well-formed empty body."""
    if result.is_passthrough:
        if result.payload is None or not result.payload.strip():
            return render_empty(output_format)
        return RenderedResponse(body=result.payload, media_type=MEDIA_TYPES[output_format])
    if not result.rows:
        return render_empty(output_format)
    if output_format is OutputFormat.XML:
        body = rows_to_xml(result.rows)
    else:
        body = rows_to_json(result.rows)
    return RenderedResponse(body=body, media_type=MEDIA_TYPES[output_format])
