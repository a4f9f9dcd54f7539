"""
FastAPI dependencies - injection for settings, Elasticsearch and services (SOLID: Dependency Inversion).
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends

from app.config import Settings, get_settings
from app.search.elasticsearch_client import get_elasticsearch
from app.services.product_service import ProductService

AppSettings = Annotated[Settings, Depends(get_settings)]
ElasticsearchClient = Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]


def get_product_service(es: ElasticsearchClient, settings: AppSettings) -> ProductService:
    """Factory for service with client injection."""
    return ProductService(es, settings.elasticsearch_index, settings.elasticsearch_debug)


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
