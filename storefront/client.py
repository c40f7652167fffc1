"""
Storefront RPC client. Wraps the ``/rpc`` HTTP API for front ends.

    async with StorefrontClient("http://localhost:2022") as client:
        user = await client.users.create({"name": "Ada", "email": "ada@example.com"})
        items = await client.orderItems.getByOrderId({"id": 1})
"""

import json
from typing import Optional

import httpx

from storefront.serialization import deserialize

DEFAULT_BASE = "http://localhost:2022"

# Procedures sent as GET; everything else is POSTed.
QUERIES = {"getAll", "getById", "getByOrderId", "healthcheck"}


class RemoteError(Exception):
    """An error reported by the server for one procedure call."""

    def __init__(self, code: str, message: str, status: int, issues: Optional[list] = None):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status = status
        self.issues = issues or []


class _Namespace:
    """``client.users.getAll()`` style access to ``users.getAll``."""

    def __init__(self, client: "StorefrontClient", prefix: str):
        self._client = client
        self._prefix = prefix

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        procedure = f"{self._prefix}.{name}"

        async def call(input: Optional[dict] = None):
            if name in QUERIES:
                return await self._client.query(procedure, input)
            return await self._client.mutate(procedure, input)

        return call


class StorefrontClient:
    NAMESPACES = ("users", "categories", "products", "orders", "orderItems")

    def __init__(self, base_url: str = DEFAULT_BASE,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    def __getattr__(self, name: str):
        if name in self.NAMESPACES:
            return _Namespace(self, name)
        raise AttributeError(name)

    async def query(self, procedure: str, input: Optional[dict] = None):
        """Call a read-only procedure over GET."""
        params = {"input": json.dumps(input)} if input is not None else None
        resp = await self._http.get(f"/rpc/{procedure}", params=params)
        return self._unwrap(resp)

    async def mutate(self, procedure: str, input: Optional[dict] = None):
        """Call a procedure over POST."""
        resp = await self._http.post(f"/rpc/{procedure}", json={"input": input})
        return self._unwrap(resp)

    async def healthcheck(self) -> dict:
        return await self.query("healthcheck")

    @staticmethod
    def _unwrap(resp: httpx.Response):
        try:
            body = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise RemoteError("PARSE_ERROR", "Response is not JSON", resp.status_code)

        if "error" in body:
            err = body["error"]
            raise RemoteError(
                err.get("code", "INTERNAL_SERVER_ERROR"),
                err.get("message", ""),
                resp.status_code,
                err.get("issues"),
            )
        return deserialize(body["result"]["data"])
