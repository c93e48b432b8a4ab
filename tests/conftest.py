from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from recipeshare.main import create_app
from recipeshare.services.supabase import set_client

PNG_HEADER = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


# ================================
# IN-MEMORY SUPABASE STAND-IN
# ================================
class FakeAPIError(Exception):
    """Shaped like postgrest's APIError: message + Postgres code."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class FakeResponse:
    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.filters: List[Tuple[str, Any]] = []
        self.order_by: Optional[Tuple[str, bool]] = None
        self.single = False
        self.payload: Optional[Dict[str, Any]] = None

    def select(self, columns: str) -> "FakeQuery":
        self.client.selects.append((self.table, columns))
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def maybe_single(self) -> "FakeQuery":
        self.single = True
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.payload = payload
        return self

    def execute(self):
        error = self.client.errors.get(self.table)
        if error is not None:
            raise error

        if self.payload is not None:
            self.client.inserts.append((self.table, self.payload))
            return FakeResponse([dict(self.payload, id=len(self.client.inserts))])

        rows = [
            row
            for row in self.client.tables.get(self.table, [])
            if all(str(row.get(col)) == str(val) for col, val in self.filters)
        ]
        if self.order_by:
            col, desc = self.order_by
            rows = sorted(rows, key=lambda r: r.get(col), reverse=desc)
        if self.single:
            return FakeResponse(rows[0]) if rows else None
        return FakeResponse(rows)


class FakeRPC:
    def __init__(self, client: "FakeSupabase", name: str, params: Dict[str, Any]) -> None:
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append((self.name, self.params))
        if self.client.rpc_error is not None:
            raise self.client.rpc_error
        return FakeResponse(self.client.rpc_result)


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.errors: Dict[str, Exception] = {}
        self.selects: List[Tuple[str, str]] = []
        self.inserts: List[Tuple[str, Dict[str, Any]]] = []
        self.rpc_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.rpc_result: Any = []
        self.rpc_error: Optional[Exception] = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]) -> FakeRPC:
        return FakeRPC(self, name, params)


# ================================
# FIXTURES
# ================================
@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    set_client(fake)
    yield fake
    set_client(None)


@pytest.fixture
def app(fake_supabase):
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
