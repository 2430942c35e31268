"""
Snapshot Repository

Moves AppSnapshot values in and out of the database. Each option and preset
is one row holding its JSON document; weights and the compare list are
key/value settings rows. The scoring engine never touches this module.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from db import get_db
from .logic.contracts import UniversityOption, WeightPreset, Weights
from .models import AppSettingRecord, OptionRecord, PresetRecord
from .state import AppSnapshot, builtin_presets

logger = logging.getLogger(__name__)

WEIGHTS_KEY = "weights"
COMPARE_IDS_KEY = "compare_ids"
VERSION_KEY = "version"


def _setting(session: Session, key: str):
    record = session.get(AppSettingRecord, key)
    return record.value if record is not None else None


def load_snapshot(session: Session, seed_defaults: bool = True) -> AppSnapshot:
    """
    Read the persisted state.

    Args:
        session: Open SQLAlchemy session
        seed_defaults: Use the built-in presets when no preset is stored

    Returns:
        AppSnapshot (empty collection when nothing is stored)
    """
    options = [
        UniversityOption(**record.payload)
        for record in session.query(OptionRecord).order_by(OptionRecord.position).all()
    ]
    presets = [
        WeightPreset(id=record.id, name=record.name, weights=Weights(**record.weights),
                     **({"created_at": record.created_at} if record.created_at else {}))
        for record in session.query(PresetRecord).order_by(PresetRecord.position).all()
    ]
    if not presets and seed_defaults:
        presets = builtin_presets()

    weights = _setting(session, WEIGHTS_KEY)
    known = {option.id for option in options}
    compare_ids = [i for i in (_setting(session, COMPARE_IDS_KEY) or []) if i in known]

    snapshot = AppSnapshot(
        version=_setting(session, VERSION_KEY) or 0,
        options=options,
        weights=Weights(**weights) if weights else Weights(),
        presets=presets,
        compare_ids=compare_ids,
    )
    logger.info(
        "Loaded snapshot v%d: %d options, %d presets",
        snapshot.version, len(snapshot.options), len(snapshot.presets),
    )
    return snapshot


def _put_setting(session: Session, key: str, value) -> None:
    record = session.get(AppSettingRecord, key)
    if record is None:
        session.add(AppSettingRecord(key=key, value=value))
    else:
        record.value = value


def sync_snapshot(session: Session, snapshot: AppSnapshot) -> None:
    """Replace the stored state with the snapshot. The caller commits."""
    option_ids = [option.id for option in snapshot.options]
    preset_ids = [preset.id for preset in snapshot.presets]
    session.query(OptionRecord).filter(OptionRecord.id.notin_(option_ids)).delete()
    session.query(PresetRecord).filter(PresetRecord.id.notin_(preset_ids)).delete()

    for position, option in enumerate(snapshot.options):
        session.merge(OptionRecord(
            id=option.id,
            position=position,
            name=option.name,
            country=option.country,
            status=option.status,
            payload=option.model_dump(mode="json"),
            updated_at=option.updated_at,
        ))
    for position, preset in enumerate(snapshot.presets):
        session.merge(PresetRecord(
            id=preset.id,
            position=position,
            name=preset.name,
            weights=preset.weights.model_dump(),
            created_at=preset.created_at,
        ))

    _put_setting(session, WEIGHTS_KEY, snapshot.weights.model_dump())
    _put_setting(session, COMPARE_IDS_KEY, list(snapshot.compare_ids))
    _put_setting(session, VERSION_KEY, snapshot.version)
    logger.debug("Synced snapshot v%d", snapshot.version)


def persisting_hook(session_factory: Optional[Callable[[], Session]] = None) -> Callable[[AppSnapshot], None]:
    """An AppStore on_commit hook writing each snapshot in its own transaction."""
    def _on_commit(snapshot: AppSnapshot) -> None:
        with get_db(session_factory) as session:
            sync_snapshot(session, snapshot)
    return _on_commit
