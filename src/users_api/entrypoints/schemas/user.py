from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateUserRequest(CamelModel):
    login: Optional[str] = Field(default=None, description="Letters and digits only", examples=["johndoe375"])
    first_name: Optional[str] = Field(default=None, examples=["John"])
    last_name: Optional[str] = Field(default=None, examples=["Doe"])


class UpsertUserRequest(CamelModel):
    login: Optional[str] = Field(default=None, examples=["johndoe375"])
    first_name: Optional[str] = Field(default=None, examples=["John"])
    last_name: Optional[str] = Field(default=None, examples=["Doe"])


class UserDto(CamelModel):
    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    id: UUID


class PatchOperation(BaseModel):
    op: str = Field(..., examples=["replace"])
    path: str = Field(..., examples=["/firstName"])
    from_: Optional[str] = Field(default=None, alias="from")
    value: Any = None

    model_config = ConfigDict(populate_by_name=True)


class PaginationMetadata(CamelModel):
    previous_page_link: Optional[str] = None
    next_page_link: Optional[str] = None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int
