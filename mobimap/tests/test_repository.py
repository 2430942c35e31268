"""
Test snapshot persistence against an in-memory SQLite database.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import get_db, init_db
from mobimap.logic import Weights
from mobimap.models import OptionRecord
from mobimap.repository import load_snapshot, persisting_hook, sync_snapshot
from mobimap.state import AppSnapshot, AppStore

from .factories import build_option


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    engine.dispose()


def test_empty_database_seeds_builtin_presets(session_factory):
    with get_db(session_factory) as session:
        snapshot = load_snapshot(session)
    assert snapshot.options == []
    assert len(snapshot.presets) == 4

    with get_db(session_factory) as session:
        assert load_snapshot(session, seed_defaults=False).presets == []


def test_sync_then_load_round_trip(session_factory):
    store = AppStore()
    store.add_option(build_option("a", monthly_rent=900, stem_focus=["Robotics"]))
    store.add_option(build_option("b", monthly_rent=1100))
    store.add_diary_entry("a", "Great labs")
    store.set_weights(Weights(total_cost=10, climate=1))
    store.set_compare_ids(["b", "a"])

    with get_db(session_factory) as session:
        sync_snapshot(session, store.snapshot())

    with get_db(session_factory) as session:
        loaded = load_snapshot(session)

    assert [u.id for u in loaded.options] == ["a", "b"]
    assert loaded.options[0].stem_focus == ["Robotics"]
    assert loaded.options[0].diary[0].text == "Great labs"
    assert loaded.weights == Weights(total_cost=10, climate=1)
    assert loaded.compare_ids == ["b", "a"]
    assert loaded.version == store.version


def test_sync_removes_deleted_rows(session_factory):
    first = AppSnapshot(version=1, options=[build_option("a"), build_option("b")])
    second = AppSnapshot(version=2, options=[build_option("b")])

    with get_db(session_factory) as session:
        sync_snapshot(session, first)
    with get_db(session_factory) as session:
        sync_snapshot(session, second)

    with get_db(session_factory) as session:
        assert [r.id for r in session.query(OptionRecord).all()] == ["b"]


def test_store_hook_persists_every_commit(session_factory):
    store = AppStore(on_commit=persisting_hook(session_factory))
    store.add_option(build_option("a"))
    store.toggle_favorite("a")

    with get_db(session_factory) as session:
        loaded = load_snapshot(session)

    assert loaded.version == 2
    assert loaded.options[0].is_favorite is True


def test_failed_transaction_rolls_back(session_factory):
    with pytest.raises(RuntimeError):
        with get_db(session_factory) as session:
            sync_snapshot(session, AppSnapshot(version=1, options=[build_option("a")]))
            session.flush()
            raise RuntimeError("boom")

    with get_db(session_factory) as session:
        assert session.query(OptionRecord).count() == 0
