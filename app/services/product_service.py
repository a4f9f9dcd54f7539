"""
Product service - business logic for catalog items (SOLID: Single Responsibility).
Challenge: Shape engine requests, reshape engine responses; keep controllers thin.
Design: Service depends on an injected client; easy to test with a fake engine.
"""

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from app.core.exceptions import BulkIndexError, SearchEngineError, engine_diagnostic
from app.schemas.product import CompletionField, Product
from app.schemas.search import SearchPage, parse_suggest_entries
from app.search.elasticsearch_client import NAME_SUGGEST, response_body

logger = logging.getLogger(__name__)


def single_suggestion_terms(name: str) -> list[str]:
    """Suggestion input for POST /products: the whole name only."""
    return [name]


def bulk_suggestion_terms(name: str) -> list[str]:
    """Suggestion input for POST /products/bulk: each word, then the whole name.

    Words are concatenated, not merged, so a one-word name appears twice.
    """
    return name.split() + [name]


def build_name_suggest(prefix: str) -> dict[str, Any]:
    """Fuzzy completion suggestion on nameSuggest."""
    return {
        NAME_SUGGEST: {
            "prefix": prefix,
            "completion": {
                "field": "nameSuggest",
                "fuzzy": {"fuzziness": "AUTO"},
            },
        }
    }


def build_search_query(names: list[str], max_price: float | None = None) -> dict[str, Any]:
    """Match any of the suggested names; price ceiling as a non-scoring filter."""
    bool_query: dict[str, Any] = {
        "should": [{"match": {"name": name}} for name in names],
        "minimum_should_match": 1,
    }
    if max_price is not None:
        bool_query["filter"] = [{"range": {"price": {"lte": max_price}}}]
    return {"bool": bool_query}


def unique_in_order(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class ProductService:
    """Handles all product use cases: indexing, search, autocomplete."""

    def __init__(self, es: AsyncElasticsearch, index: str, verbose_errors: bool = False):
        self.es = es
        self.index = index
        self.verbose_errors = verbose_errors

    def _engine_error(self, exc: Exception) -> SearchEngineError:
        return SearchEngineError(engine_diagnostic(exc, self.verbose_errors))

    async def ping(self) -> bool:
        """Liveness probe; unreachable engine counts as down."""
        try:
            return bool(await self.es.ping())
        except (ApiError, TransportError) as exc:
            logger.warning("Elasticsearch ping failed: %s", exc)
            return False

    async def create(self, product: Product) -> Product:
        """Index one product under its id, replacing any previous version."""
        product.name_suggest = CompletionField(input=single_suggestion_terms(product.name))
        try:
            await self.es.index(index=self.index, id=str(product.id), document=product.to_document())
        except (ApiError, TransportError) as exc:
            raise self._engine_error(exc) from exc
        return product

    async def bulk_create(self, products: list[Product]) -> list[Product]:
        """Index many products in one _bulk request. No rollback on partial failure."""
        if not products:
            return products
        operations: list[dict[str, Any]] = []
        for product in products:
            product.name_suggest = CompletionField(input=bulk_suggestion_terms(product.name))
            operations.append({"index": {"_index": self.index, "_id": str(product.id)}})
            operations.append(product.to_document())
        try:
            body = response_body(await self.es.bulk(operations=operations))
        except (ApiError, TransportError) as exc:
            raise self._engine_error(exc) from exc

        if body.get("errors"):
            failures = []
            for item in body.get("items", []):
                result = item.get("index", {})
                if "error" in result:
                    failures.append((result.get("_id"), result["error"]))
            for doc_id, error in failures:
                logger.error("Failed to index document %s: %s", doc_id, error)
            raise BulkIndexError(failures)
        return products

    async def suggest_names(self, prefix: str) -> list[str] | None:
        """Suggested full names in engine order, or None if the suggestion is absent."""
        try:
            response = await self.es.search(index=self.index, suggest=build_name_suggest(prefix), size=0)
        except (ApiError, TransportError) as exc:
            raise self._engine_error(exc) from exc
        entries = parse_suggest_entries(response_body(response), NAME_SUGGEST)
        if entries is None:
            return None
        return [option.text for entry in entries for option in entry.options]

    async def suggest(self, prefix: str) -> list[str]:
        """Autocomplete: distinct suggested names, first occurrence wins."""
        names = await self.suggest_names(prefix)
        if names is None:
            return []
        return unique_in_order(names)

    async def search(
        self,
        name: str,
        page: int = 1,
        page_size: int = 10,
        max_price: float | None = None,
    ) -> SearchPage:
        """Search by suggested names, cheapest first, one page at a time."""
        names = await self.suggest_names(name) or []
        if not names:
            # No should-clauses would leave minimum_should_match unsatisfiable
            logger.info("search: name=%r produced no suggestions", name)
            return SearchPage(total=0, page=page, page_size=page_size, items=[])

        try:
            response = await self.es.search(
                index=self.index,
                query=build_search_query(names, max_price),
                from_=(page - 1) * page_size,
                size=page_size,
                sort=[{"price": {"order": "asc"}}],
                track_total_hits=True,
            )
        except (ApiError, TransportError) as exc:
            raise self._engine_error(exc) from exc

        hits = response_body(response)["hits"]
        total = hits.get("total")
        total_val = total.get("value", 0) if isinstance(total, dict) else int(total or 0)
        items = [Product.model_validate(hit["_source"]) for hit in hits["hits"]]
        return SearchPage(total=total_val, page=page, page_size=page_size, items=items)
