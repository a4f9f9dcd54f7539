"""Search schemas - typed views of engine responses and the paged search result."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.product import CamelModel, Product


class SuggestOption(BaseModel):
    """One completion returned by the suggester."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    text: str
    id: str | None = Field(None, alias="_id")
    score: float | None = Field(None, alias="_score")


class SuggestEntry(BaseModel):
    """Suggester output for one piece of input text."""

    model_config = ConfigDict(extra="ignore")

    text: str = ""
    offset: int = 0
    length: int = 0
    options: list[SuggestOption] = Field(default_factory=list)


def parse_suggest_entries(body: dict[str, Any], name: str) -> list[SuggestEntry] | None:
    """Entries of one named suggestion, or None when the response has no such entry."""
    suggest = body.get("suggest") or {}
    if name not in suggest:
        return None
    return [SuggestEntry.model_validate(entry) for entry in suggest[name]]


class SearchPage(CamelModel):
    """GET /products/search response."""

    total: int
    page: int
    page_size: int
    items: list[Product]
