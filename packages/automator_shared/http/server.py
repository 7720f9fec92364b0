"""Minimal FastAPI and uvicorn helpers for JSON request handling."""

from __future__ import annotations

import json
from typing import Any

import uvicorn
from fastapi import FastAPI, Request

from .errors import InvalidBodyError, InvalidJsonBodyError


def create_app(*, title: str = "task-automator", version: str = "0.0.0") -> FastAPI:
    """Create a FastAPI app with project defaults."""
    return FastAPI(title=title, version=version)


def run_app(
    app: FastAPI,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
    log_level: str = "info",
) -> None:
    """Run one FastAPI app through uvicorn."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)


async def read_raw_body(request: Request) -> bytes:
    """Read raw request body bytes without interpretation."""
    return await request.body()


async def read_json_body(request: Request, *, allow_empty: bool = False) -> Any:
    """Read and decode one request body as JSON.

    With ``allow_empty`` an absent body decodes to ``{}``.
    """
    body = await read_raw_body(request)
    if allow_empty and body.strip() == b"":
        return {}
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidBodyError(message="Body must be UTF-8 encoded JSON") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidJsonBodyError(message="Body is not valid JSON") from exc
