"""BaseService — foundation for all careride services.

Every service receives a :class:`Store` at construction time. Reads go
through the store's repositories; writes through
``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from careride.config.settings import CareSettings
    from careride.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SearchService(BaseService):
            def search(self, query: str) -> ServiceResult:
                doctors = self._store.doctors.list_all()
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def settings(self) -> CareSettings:
        return self._store.settings

    def _now(self) -> int:
        return self._store.now()
