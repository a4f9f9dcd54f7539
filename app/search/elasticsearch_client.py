"""
Elasticsearch client - the one connection to the search engine, shared process-wide.
Challenge: Index management, async operations, bounded request time, no hidden retries.
"""

import logging
from typing import Any
from urllib.parse import urlparse

from elasticsearch import AsyncElasticsearch

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Name of the completion suggestion used by search and autocomplete
NAME_SUGGEST = "name-suggest"

_es_client: AsyncElasticsearch | None = None


def es_client_options(settings: Settings) -> dict:
    """Build Elasticsearch client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    if settings.elasticsearch_username and settings.elasticsearch_password:
        basic_auth = (settings.elasticsearch_username, settings.elasticsearch_password)
    parsed = urlparse(url)
    if parsed.username and parsed.password:
        if basic_auth is None:
            basic_auth = (parsed.username, parsed.password)
        # Remove auth from URL for the client (it uses basic_auth separately)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": settings.elasticsearch_request_timeout,
        "max_retries": 0,
        "retry_on_timeout": False,
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    """Get Elasticsearch client. Dependency injection for tests."""
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**es_client_options(get_settings()))
    return _es_client


async def close_elasticsearch() -> None:
    """Release the shared client's connection pool (app shutdown)."""
    global _es_client
    if _es_client is not None:
        await _es_client.close()
        _es_client = None


def products_index_mappings() -> dict:
    """Mapping for the products index (shared with scripts/create_es_products_index.py)."""
    return {
        "properties": {
            "id": {"type": "integer"},
            "name": {"type": "text", "analyzer": "standard"},
            "nameSuggest": {"type": "completion"},
            "price": {"type": "double"},
            "description": {"type": "text", "analyzer": "standard"},
            "category": {"type": "text"},
            "isActive": {"type": "boolean"},
        }
    }


async def ensure_products_index(es: AsyncElasticsearch, index: str) -> bool:
    """Create the products index with mapping if not exists. Returns True when created."""
    if await es.indices.exists(index=index):
        return False
    await es.indices.create(
        index=index,
        settings={"index": {"number_of_replicas": 0}},
        mappings=products_index_mappings(),
    )
    logger.info("Created Elasticsearch index %r", index)
    return True


def response_body(response: Any) -> dict[str, Any]:
    """Response may be ObjectApiResponse; support both .body and dict access."""
    return getattr(response, "body", response)
