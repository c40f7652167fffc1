"""
Storefront — RPC server.

A FastAPI app exposing every procedure in ``storefront.router`` behind one
endpoint, ``/rpc/{procedure}``. Queries may be sent as
``GET /rpc/users.getById?input={"id":1}`` or POSTed; mutations are POSTed
with a ``{"input": {...}}`` body.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.config import (
    CORS_ORIGINS, DATABASE_URL, DEBUG, LOG_LEVEL, SERVER_HOST, SERVER_PORT,
)
from storefront.database import Database
from storefront.errors import StorefrontError
from storefront.router import dispatch, healthcheck
from storefront.serialization import serialize
from storefront.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the app around one storage client, opened and closed with the app."""
    db = database or Database(DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.connect()
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title="Storefront API", version=__version__, lifespan=lifespan)
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_api_route("/rpc/{procedure}", rpc, methods=["GET", "POST"])
    app.add_api_route("/health", health, methods=["GET"])
    return app


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

def _error_response(error: StorefrontError) -> JSONResponse:
    return JSONResponse({"error": error.to_dict()}, status_code=error.status)


async def _read_input(request: Request):
    """Pull the raw procedure input from the query string or JSON body."""
    if request.method == "GET":
        raw = request.query_params.get("input")
        return json.loads(raw) if raw else None
    body = await request.body()
    if not body:
        return None
    payload = json.loads(body)
    if isinstance(payload, dict):
        return payload.get("input")
    return None


async def rpc(procedure: str, request: Request):
    try:
        raw_input = await _read_input(request)
    except ValueError:
        return JSONResponse(
            {"error": {"code": "PARSE_ERROR", "message": "Request input is not valid JSON"}},
            status_code=400,
        )

    try:
        result = await run_in_threadpool(
            dispatch, request.app.state.db, procedure, raw_input, request.method,
        )
    except StorefrontError as e:
        logger.info("%s rejected: %s", procedure, e.message)
        return _error_response(e)
    except Exception as e:
        logger.exception("%s failed", procedure)
        return _error_response(StorefrontError(str(e)))

    return {"result": {"data": serialize(result)}}


async def health():
    return healthcheck()


app = create_app()


def main():
    """Run the server with uvicorn on the configured host and port."""
    import uvicorn

    setup_logging("DEBUG" if DEBUG else LOG_LEVEL)
    logger.info("Storefront RPC server listening at port: %s", SERVER_PORT)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    main()
