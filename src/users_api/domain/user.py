from __future__ import annotations

from typing import Optional
from uuid import UUID

from .base import IDomain


class UserEntity(IDomain):
    def __init__(
        self,
        id: Optional[UUID] = None,
        login: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> None:
        self.id = id
        self.login = login
        self.first_name = first_name
        self.last_name = last_name

    def copy(self) -> UserEntity:
        return UserEntity(
            id=self.id,
            login=self.login,
            first_name=self.first_name,
            last_name=self.last_name,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserEntity):
            return NotImplemented
        return (
            self.id == other.id
            and self.login == other.login
            and self.first_name == other.first_name
            and self.last_name == other.last_name
        )

    def __repr__(self) -> str:
        return f"UserEntity(id={self.id!r}, login={self.login!r})"
