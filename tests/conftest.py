from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from postgrest.exceptions import APIError

from veille.config import KeywordCatalog, LanguageGroup
from veille.ingestion import SerpApiFetcher

FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


def api_error(code: str, message: str) -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class FakeQuery:
    """Just enough of the postgrest query builder."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.rows: List[Dict[str, Any]] = []
        self.ignore_duplicates = False
        self.on_conflict = ""
        self.order_by: Optional[tuple] = None
        self.limit_n: Optional[int] = None

    def select(self, *columns):
        self.op = "select"
        return self

    def upsert(self, rows, on_conflict="", ignore_duplicates=False):
        self.op = "upsert"
        self.rows = list(rows)
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def execute(self):
        self.db.calls.append((self.op, self.table))
        if self.table not in self.db.tables:
            raise api_error("42P01", f'relation "public.{self.table}" does not exist')
        if self.op == "upsert":
            return self._upsert()
        return self._select()

    def _select(self):
        if self.db.select_error is not None:
            raise self.db.select_error
        rows = list(self.db.tables[self.table])
        if self.order_by:
            column, desc = self.order_by
            rows.sort(key=lambda r: r[column], reverse=desc)
        if self.limit_n is not None:
            rows = rows[: self.limit_n]
        return SimpleNamespace(data=rows)

    def _upsert(self):
        if self.db.upsert_error is not None:
            raise self.db.upsert_error
        urls = [r[self.on_conflict] for r in self.rows]
        if len(urls) != len(set(urls)):
            raise api_error("21000", "ON CONFLICT DO NOTHING command cannot affect row a second time")
        self.db.upsert_options.append((self.on_conflict, self.ignore_duplicates))
        stored = self.db.tables[self.table]
        existing = {r["url"] for r in stored}
        inserted = []
        for row in self.rows:
            if row["url"] in existing:
                continue
            self.db.next_id += 1
            record = dict(row, id=self.db.next_id)
            stored.append(record)
            inserted.append(record)
        return SimpleNamespace(data=inserted)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        if self.db.rpc_error is not None:
            raise self.db.rpc_error
        self.db.tables.setdefault("articles", [])
        return SimpleNamespace(data=None)


class FakeSupabase:
    """In-memory stand-in for supabase.Client."""

    def __init__(self, tables=("articles",)):
        self.tables: Dict[str, List[Dict[str, Any]]] = {t: [] for t in tables}
        self.calls: List[tuple] = []
        self.rpc_calls: List[tuple] = []
        self.upsert_options: List[tuple] = []
        self.next_id = 0
        self.select_error: Optional[Exception] = None
        self.upsert_error: Optional[Exception] = None
        self.rpc_error: Optional[Exception] = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]) -> FakeRpc:
        return FakeRpc(self, name, params)

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.tables["articles"]


def news_item(link: str, **kwargs) -> Dict[str, Any]:
    item = {
        "title": f"Title {link}",
        "link": link,
        "snippet": f"Snippet {link}",
        "date": "2025-03-13T08:00:00Z",
        "source": {"title": "Hespress"},
    }
    item.update(kwargs)
    return item


class SerpApiStub:
    """MockTransport handler answering per query string."""

    def __init__(self, responses: Dict[str, Any]):
        self.responses = responses
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.responses.get(request.url.params["q"], [])
        if isinstance(answer, httpx.Response):
            return answer
        if isinstance(answer, Exception):
            raise answer
        return httpx.Response(200, json={"news_results": answer})

    @property
    def queries(self) -> List[str]:
        return [r.url.params["q"] for r in self.requests]


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def small_catalog() -> KeywordCatalog:
    return KeywordCatalog(
        groups=(
            LanguageGroup(tag="arabic", keywords=("البحرية المغربية",)),
            LanguageGroup(tag="french", keywords=("Marine royale", "Frégate marocaine")),
            LanguageGroup(tag="spanish", keywords=("fragata marroquí",)),
        )
    )


@pytest.fixture
def make_fetcher() -> Callable[[SerpApiStub], SerpApiFetcher]:
    def factory(stub: SerpApiStub) -> SerpApiFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        return SerpApiFetcher(api_key="test-key", client=client, clock=lambda: FIXED_NOW)

    return factory


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()
