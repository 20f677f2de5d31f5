#!/usr/bin/env python3
"""Search employees through the HTTP API from the command line. Prints the rendered JSON or XML body."""
import argparse
import os
import sys

import httpx

SEARCH_URL = os.environ.get("EMPLOYEE_SEARCH_BASE_URL", "http://127.0.0.1:8080")


def _trunc(s: str, max_len: int = 2000) -> str:
    s = str(s)
    return (s[:max_len] + "\n… (truncated)") if len(s) > max_len else s


def build_params(args: argparse.Namespace) -> dict[str, str]:
    params: dict[str, str] = {}
    if args.department_id is not None:
        params["departmentId"] = str(args.department_id)
    if args.active is not None:
        params["isActive"] = "true" if args.active else "false"
    if args.search:
        params["search"] = args.search
    if args.page is not None:
        params["page"] = str(args.page)
    if args.page_size is not None:
        params["pageSize"] = str(args.page_size)
    if args.format:
        params["outputFormat"] = args.format
    return params


def _trace_request(url: str, params: dict[str, str], trace: bool) -> None:
    if not trace:
        return
    print(f"[REQUEST] GET {url}", flush=True)
    for k, v in params.items():
        print(f"  {k}={v}", flush=True)
    print(flush=True)


def _trace_response(r: httpx.Response, trace: bool) -> None:
    if not trace:
        return
    print(f"[RESPONSE] {r.status_code}", flush=True)
    for k, v in list(r.headers.items())[:10]:
        print(f"  {k}: {v}", flush=True)
    print("---", flush=True)


def main():
    parser = argparse.ArgumentParser(description="Search employees by department, status and keyword.")
    parser.add_argument("search", nargs="?", help="Keyword matched against name, email and job title")
    parser.add_argument("--department-id", type=int, default=None)
    status = parser.add_mutually_exclusive_group()
    status.add_argument("--active", dest="active", action="store_true", default=None)
    status.add_argument("--inactive", dest="active", action="store_false")
    parser.add_argument("--page", type=int, default=None)
    parser.add_argument("--page-size", type=int, default=None)
    parser.add_argument("--format", choices=["json", "xml", "JSON", "XML"], default=None)
    parser.add_argument("--url", default=SEARCH_URL, help="Employee search base URL")
    parser.add_argument("--trace", action="store_true", help="Print the request parameters and response headers")
    args = parser.parse_args()

    url = f"{args.url.rstrip('/')}/api/employee/search"
    params = build_params(args)
    try:
        _trace_request(url, params, args.trace)
        r = httpx.get(url, params=params, timeout=60)
        _trace_response(r, args.trace)
        if r.status_code != 200:
            print(f"HTTP {r.status_code}: {r.text}", file=sys.stderr)
            sys.exit(1)
        print(_trunc(r.text), flush=True)
    except httpx.ConnectError:
        print(f"Cannot reach employee search at {args.url}. Is it running?", file=sys.stderr)
        sys.exit(1)
    except httpx.HTTPError as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
