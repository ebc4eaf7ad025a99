from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from pickops.core.config import get_settings
from pickops.persistence.pg import get_session
from pickops.persistence.state_store import InMemoryKeyValueStore, KeyValueStore, build_key_value_store
from pickops.picking.limiter import LimiterPreferences
from pickops.picking.progress import ProgressTracker


def get_state_store(request: Request, session: Session = Depends(get_session)) -> KeyValueStore:
    settings = get_settings()
    if settings.state_backend == "memory":
        store = getattr(request.app.state, "memory_store", None)
        if store is None:
            store = InMemoryKeyValueStore()
            request.app.state.memory_store = store
        return store
    return build_key_value_store(session=session, settings=settings)


def get_tracker(store: KeyValueStore = Depends(get_state_store)) -> ProgressTracker:
    return ProgressTracker(store, namespace=get_settings().state_namespace)


def get_limiter_preferences(store: KeyValueStore = Depends(get_state_store)) -> LimiterPreferences:
    settings = get_settings()
    return LimiterPreferences(store, default=settings.default_picking_limit, namespace=settings.state_namespace)
