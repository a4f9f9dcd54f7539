"""
Pytest fixtures - fake search engine, client (TDD/BDD support).
Challenge: Isolated tests; no real Elasticsearch in unit tests.
"""

import pytest
import pytest_asyncio
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import BadRequestError
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.search.elasticsearch_client import get_elasticsearch


def _tokens(text: str) -> set[str]:
    return set(text.lower().split())


class FakeIndices:
    def __init__(self, owner: "FakeElasticsearch"):
        self.owner = owner
        self.created: dict[str, dict] = {}

    async def exists(self, index: str) -> bool:
        if self.owner.error is not None:
            raise self.owner.error
        return index in self.created

    async def create(self, index: str, settings: dict | None = None, mappings: dict | None = None):
        self.created[index] = {"settings": settings, "mappings": mappings}
        return {"acknowledged": True, "index": index}


class FakeElasticsearch:
    """In-memory stand-in for AsyncElasticsearch.

    Understands only what the service sends: completion prefix suggestions
    (case-insensitive, no fuzziness), bool/should/match on name, price range
    filters, price sort and from/size.
    """

    def __init__(self):
        self.up = True
        self.docs: dict[str, dict] = {}
        self.reject_ids: set[str] = set()
        self.omit_suggest = False
        self.error: Exception | None = None
        self.calls: list[tuple[str, dict]] = []
        self.indices = FakeIndices(self)

    def _record(self, method: str, kwargs: dict) -> None:
        self.calls.append((method, kwargs))
        if self.error is not None:
            raise self.error

    async def ping(self) -> bool:
        return self.up

    async def index(self, **kwargs):
        self._record("index", kwargs)
        self.docs[kwargs["id"]] = kwargs["document"]
        return {"_id": kwargs["id"], "result": "created"}

    async def bulk(self, operations: list[dict], **kwargs):
        self._record("bulk", {"operations": operations, **kwargs})
        items = []
        for action, doc in zip(operations[::2], operations[1::2]):
            doc_id = action["index"]["_id"]
            if doc_id in self.reject_ids:
                items.append({"index": {
                    "_id": doc_id,
                    "status": 400,
                    "error": {"type": "mapper_parsing_exception", "reason": f"bad document {doc_id}"},
                }})
            else:
                self.docs[doc_id] = doc
                items.append({"index": {"_id": doc_id, "status": 201, "result": "created"}})
        return {"took": 1, "errors": any("error" in i["index"] for i in items), "items": items}

    async def search(self, **kwargs):
        self._record("search", kwargs)
        if "suggest" in kwargs:
            return self._suggest(kwargs["suggest"])
        return self._query(kwargs)

    def _suggest(self, suggest: dict) -> dict:
        if self.omit_suggest:
            return {"hits": {"total": {"value": 0}, "hits": []}}
        result = {}
        for name, spec in suggest.items():
            prefix = spec["prefix"]
            options = []
            for doc_id, doc in self.docs.items():
                for term in doc["nameSuggest"]["input"]:
                    if term.lower().startswith(prefix.lower()):
                        options.append({"text": term, "_id": doc_id, "_score": 1.0, "_source": doc})
                        break
            result[name] = [{"text": prefix, "offset": 0, "length": len(prefix), "options": options}]
        return {"hits": {"total": {"value": 0}, "hits": []}, "suggest": result}

    def _query(self, kwargs: dict) -> dict:
        bool_query = kwargs["query"]["bool"]
        matched = []
        for doc in self.docs.values():
            should_hits = sum(
                1 for clause in bool_query["should"]
                if _tokens(clause["match"]["name"]) & _tokens(doc["name"])
            )
            if should_hits < bool_query.get("minimum_should_match", 0):
                continue
            if any(doc["price"] > f["range"]["price"]["lte"] for f in bool_query.get("filter", [])):
                continue
            matched.append(doc)
        matched.sort(key=lambda d: d["price"])
        start = kwargs.get("from_", 0)
        page = matched[start:start + kwargs.get("size", 10)]
        return {"hits": {
            "total": {"value": len(matched), "relation": "eq"},
            "hits": [{"_id": str(d["id"]), "_source": d, "sort": [d["price"]]} for d in page],
        }}


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest_asyncio.fixture
async def client(fake_es: FakeElasticsearch):
    app.dependency_overrides[get_elasticsearch] = lambda: fake_es
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def mapping_error() -> BadRequestError:
    """A 400 as raised by the client when a document does not fit the mapping."""
    meta = ApiResponseMeta(
        status=400,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.01,
        node=NodeConfig("http", "localhost", 9200),
    )
    body = {
        "error": {
            "root_cause": [{"type": "mapper_parsing_exception", "reason": "failed to parse field [price]"}],
            "type": "mapper_parsing_exception",
            "reason": "failed to parse field [price]",
            "caused_by": {"type": "number_format_exception", "reason": "For input string: \"cheap\""},
        },
        "status": 400,
    }
    return BadRequestError(message="mapper_parsing_exception", meta=meta, body=body)
