from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from pickops.core.config import Settings, get_settings
from pickops.persistence.models import PickingStateEntryModel


class PickingStateUnavailable(RuntimeError):
    pass


class KeyValueStore(Protocol):
    backend_name: str

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    backend_name = "memory"

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data.keys())


class SqlKeyValueStore:
    backend_name = "sql"

    def __init__(self, session: Session):
        self.session = session

    def _row(self, key: str) -> PickingStateEntryModel | None:
        # Session autoflush is disabled globally; flush so rows added earlier
        # in this unit of work are visible to the lookup.
        self.session.flush()
        return self.session.scalar(select(PickingStateEntryModel).where(PickingStateEntryModel.key == key))

    def get(self, key: str) -> str | None:
        row = self._row(key)
        return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        row = self._row(key)
        if row is None:
            self.session.add(PickingStateEntryModel(key=key, value=value, updated_at=now))
        else:
            row.value = value
            row.updated_at = now
        self.session.flush()

    def delete(self, key: str) -> None:
        self.session.execute(delete(PickingStateEntryModel).where(PickingStateEntryModel.key == key))


def build_key_value_store(session: Session | None = None, settings: Settings | None = None) -> KeyValueStore:
    cfg = settings or get_settings()
    if cfg.state_backend == "sql":
        if session is None:
            raise PickingStateUnavailable("sql state backend requires a database session")
        return SqlKeyValueStore(session)
    return InMemoryKeyValueStore()
