import abc
from typing import Optional
from uuid import UUID

from users_api.domain.base import IDomain
from users_api.domain.page import Page


class IRepository(abc.ABC):
    @abc.abstractmethod
    def add(self, data: IDomain) -> IDomain:
        raise NotImplementedError


class IUserRepository(IRepository):
    @abc.abstractmethod
    def get(self, user_id: UUID) -> Optional[IDomain]:
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, data: IDomain) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def update_or_insert(self, data: IDomain) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, user_id: UUID) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_page(self, *, page: int, size: int) -> Page:
        raise NotImplementedError
