from __future__ import annotations

import logging
import threading
from typing import Dict, Optional
from uuid import UUID, uuid4

from users_api.domain.page import Page
from users_api.domain.user import UserEntity

from .base import IUserRepository

logger = logging.getLogger(__name__)


class StoreInvariantError(RuntimeError):
    pass


class InMemoryUserRepository(IUserRepository):
    """Process-local user store.

    Entities are kept in insertion order; every call hands out copies so that
    callers never hold a reference to the stored record. A single lock
    serializes mutations and page scans.
    """

    def __init__(self) -> None:
        self._entities: Dict[UUID, UserEntity] = {}
        self._lock = threading.RLock()

    def get(self, user_id: UUID) -> Optional[UserEntity]:
        with self._lock:
            entity = self._entities.get(user_id)
            return entity.copy() if entity is not None else None

    def add(self, data: UserEntity) -> UserEntity:  # type: ignore[override]
        with self._lock:
            user_id = uuid4()
            if user_id in self._entities:
                raise StoreInvariantError(f"generated identifier {user_id} is already taken")
            stored = data.copy()
            stored.id = user_id
            self._entities[user_id] = stored
            logger.debug("inserted user %s", user_id)
            return stored.copy()

    def update(self, data: UserEntity) -> bool:  # type: ignore[override]
        with self._lock:
            if data.id not in self._entities:
                return False
            self._entities[data.id] = data.copy()
            logger.debug("updated user %s", data.id)
            return True

    def update_or_insert(self, data: UserEntity) -> bool:  # type: ignore[override]
        if data.id is None:
            raise StoreInvariantError("upsert requires an identifier")
        with self._lock:
            inserted = data.id not in self._entities
            self._entities[data.id] = data.copy()
            logger.debug("%s user %s", "inserted" if inserted else "replaced", data.id)
            return inserted

    def delete(self, user_id: UUID) -> None:
        with self._lock:
            if self._entities.pop(user_id, None) is not None:
                logger.debug("deleted user %s", user_id)

    def fetch_page(self, *, page: int, size: int) -> Page[UserEntity]:
        with self._lock:
            entities = list(self._entities.values())
            start = (page - 1) * size
            items = [entity.copy() for entity in entities[start:start + size]]
            return Page(items, current_page=page, page_size=size, total_count=len(entities))
