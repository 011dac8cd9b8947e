import re
from typing import List

from pydantic import BaseModel, Field, field_validator

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def is_valid_uuid(value: str) -> bool:
    return bool(UUID_PATTERN.match(value))


class RelatedItemsQuery(BaseModel):
    limit: int = Field(default=5, gt=0)


class RelatedItemSchema(BaseModel):
    id: str
    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    score: int = Field(ge=0)

    @field_validator("id")
    @classmethod
    def id_must_be_uuid(cls, value: str) -> str:
        if not is_valid_uuid(value):
            raise ValueError("id must be a valid UUID")
        return value


class RelatedItemsResponse(BaseModel):
    data: List[RelatedItemSchema]
