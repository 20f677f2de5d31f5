"""Employee search API. Run with: python -m employee_search.gateway.main --config-path config/search.json"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")

from employee_search.core.exceptions import StoreQueryError, StoreUnavailable, ValidationError
from employee_search.data_access.relational.engine import dispose_engines
from employee_search.gateway.deps import load_gateway
from employee_search.gateway.middleware import RequestIDMiddleware
from employee_search.gateway.service import SearchGateway

app = FastAPI(title="Employee Search")
app.add_middleware(RequestIDMiddleware)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Set at startup
GATEWAY: SearchGateway | None = None


@app.on_event("startup")
def startup():
    global GATEWAY
    GATEWAY = load_gateway(project_root=PROJECT_ROOT)


@app.on_event("shutdown")
async def shutdown():
    await dispose_engines()


def get_gateway() -> SearchGateway:
    if GATEWAY is None:
        raise HTTPException(status_code=503, detail="Search gateway not initialized")
    return GATEWAY


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/employee/search")
async def search_employees(
    department_id: str | None = Query(None, alias="departmentId"),
    is_active: str | None = Query(None, alias="isActive"),
    search: str | None = Query(None),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    output_format: str | None = Query(None, alias="outputFormat"),
    gateway: SearchGateway = Depends(get_gateway),
):
    # Parameters arrive as raw strings; the gateway owns parsing and clamping.
    raw = {
        "departmentId": department_id,
        "isActive": is_active,
        "search": search,
        "page": page,
        "pageSize": page_size,
        "outputFormat": output_format,
    }
    try:
        rendered = await gateway.search(raw)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Employee store unavailable: {e}")
    except StoreQueryError as e:
        raise HTTPException(status_code=500, detail=f"Employee query failed: {e}")
    return Response(content=rendered.body, media_type=rendered.media_type, status_code=rendered.status_code)


if __name__ == "__main__":
    import uvicorn
    parser = argparse.ArgumentParser()
    parser.add_argument("--config-path", default=None)
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8080")))
    args = parser.parse_args()
    if args.config_path:
        os.environ["CONFIG_PATH"] = args.config_path
    uvicorn.run(app, host=args.host, port=args.port)
