"""Job Board Schemas — batch import payload and listing responses.

Invariants:
    - url must be an absolute http(s) URL; one bad item rejects the whole batch
    - url is stored exactly as sent (no trailing-slash or case normalisation):
      it is the natural key importers re-send
    - publishedAt parsed as ISO-8601 datetime when present
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError

from app.schemas.base import CamelModel


_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an absolute http(s) URL, keep the original text."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be an absolute http(s) URL") from None
    return value


JobUrl = Annotated[str, AfterValidator(_check_http_url)]


class JobItem(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    company: str | None = Field(None, max_length=300)
    location: str | None = Field(None, max_length=300)
    source: str = Field(min_length=1, max_length=100)
    url: JobUrl
    published_at: datetime | None = None
    tags: str | None = None


class JobImportRequest(CamelModel):
    items: list[JobItem]


class JobImportResponse(CamelModel):
    imported: int


class JobListingResponse(CamelModel):
    id: UUID
    title: str
    company: str | None = None
    location: str | None = None
    source: str
    url: str
    published_at: datetime | None = None
    tags: str | None = None
    created_at: datetime
