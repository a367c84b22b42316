"""Shared schema building blocks: camelCase base model and response envelopes."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys; accepts either casing on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(CamelModel):
    """CamelModel that can be built from SQLAlchemy instances."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserBrief(ORMModel):
    """Public identity of a user embedded in other resources."""

    id: int
    name: str
    email: str


class MessageResponse(CamelModel):
    """Mutation acknowledgement without a payload."""

    success: bool = True
    message: str


class DataResponse(CamelModel, Generic[T]):
    """Single-resource envelope."""

    success: bool = True
    message: str | None = None
    data: T


class ListResponse(CamelModel, Generic[T]):
    """Unpaginated collection envelope."""

    success: bool = True
    count: int
    data: list[T]


class PaginatedResponse(CamelModel, Generic[T]):
    """Paginated collection envelope."""

    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    data: list[T]


class LikeResult(CamelModel):
    """Outcome of a like toggle."""

    likes: int
    is_liked: bool
