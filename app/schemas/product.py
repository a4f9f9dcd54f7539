"""Product request/response schemas - REST API contract and index document shape."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire and in the index, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompletionField(CamelModel):
    """Input terms for the Elasticsearch completion suggester."""

    input: list[str] = Field(default_factory=list)


class Product(CamelModel):
    id: int
    name: str = ""
    # Derived from name before every write; any value sent by the caller is replaced
    name_suggest: CompletionField = Field(default_factory=CompletionField)
    price: float = Field(0.0, ge=0)
    description: str = ""
    category: str = ""
    is_active: bool = False

    def to_document(self) -> dict:
        """Serialize for Elasticsearch (same field names as the API)."""
        return self.model_dump(by_alias=True)
