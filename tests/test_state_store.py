from __future__ import annotations

import pytest

import pickops.persistence.pg as pg
from pickops.core.config import Settings
from pickops.persistence.state_store import (
    InMemoryKeyValueStore,
    PickingStateUnavailable,
    SqlKeyValueStore,
    build_key_value_store,
)
from pickops.picking.progress import ProgressTracker


def test_sql_store_upserts_and_deletes(session):
    store = SqlKeyValueStore(session)

    assert store.get("kv-test") is None
    store.set("kv-test", '["A"]')
    store.set("kv-test", '["A","B"]')
    assert store.get("kv-test") == '["A","B"]'

    store.delete("kv-test")
    assert store.get("kv-test") is None


def test_tracker_state_survives_a_new_session(configure_test_engine):
    with pg.session_scope() as s:
        ProgressTracker(SqlKeyValueStore(s)).toggle_item_picked("wh-sql", "SKU-1")

    with pg.session_scope() as s:
        state = ProgressTracker(SqlKeyValueStore(s)).load("wh-sql")
        assert state.picked_skus == {"SKU-1"}
        ProgressTracker(SqlKeyValueStore(s)).clear("wh-sql")


def test_build_store_by_backend(session):
    assert isinstance(build_key_value_store(session, Settings(state_backend="sql")), SqlKeyValueStore)
    assert isinstance(build_key_value_store(None, Settings(state_backend="memory")), InMemoryKeyValueStore)
    with pytest.raises(PickingStateUnavailable):
        build_key_value_store(None, Settings(state_backend="sql"))


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        Settings(state_backend="redis")
