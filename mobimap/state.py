"""
Application State

Injectable state container for the option collection, weights, presets and
compare list. Commands produce a new immutable snapshot with a bumped
version; the scoring functions only ever see snapshots, never the store.
"""

import logging
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from .logic.adapter import default_checklist
from .logic.constants import BUILTIN_PRESETS, MAX_COMPARE_OPTIONS, Status
from .logic.contracts import ChecklistItem, DiaryEntry, UniversityOption, WeightPreset, Weights

logger = logging.getLogger(__name__)


class MobiMapError(Exception):
    """Base error of the application layer."""


class OptionNotFoundError(MobiMapError, LookupError):
    def __init__(self, option_id: str):
        super().__init__(f"Option not found: {option_id}")
        self.option_id = option_id


class PresetNotFoundError(MobiMapError, LookupError):
    def __init__(self, preset_id: str):
        super().__init__(f"Preset not found: {preset_id}")
        self.preset_id = preset_id


class DuplicateOptionError(MobiMapError, ValueError):
    def __init__(self, option_id: str):
        super().__init__(f"Option already exists: {option_id}")
        self.option_id = option_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def builtin_presets() -> List[WeightPreset]:
    return [WeightPreset(**preset) for preset in BUILTIN_PRESETS]


class AppSnapshot(BaseModel):
    """Immutable view of the state at one version."""
    version: int = 0
    options: List[UniversityOption] = Field(default_factory=list)
    weights: Weights = Field(default_factory=Weights)
    presets: List[WeightPreset] = Field(default_factory=list)
    compare_ids: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    def find_option(self, option_id: str) -> Optional[UniversityOption]:
        return next((u for u in self.options if u.id == option_id), None)

    def find_preset(self, preset_id: str) -> Optional[WeightPreset]:
        return next((p for p in self.presets if p.id == preset_id), None)

    @property
    def compared_options(self) -> List[UniversityOption]:
        by_id = {u.id: u for u in self.options}
        return [by_id[i] for i in self.compare_ids if i in by_id]


class AppStore:
    """
    Single-writer command/query service.

    Commands are serialized by a lock and each one commits a new snapshot.
    An optional on_commit hook receives every new snapshot before it becomes
    current (the persistence adapter plugs in here); if the hook raises, the
    command is not applied.
    """

    def __init__(
        self,
        snapshot: Optional[AppSnapshot] = None,
        on_commit: Optional[Callable[[AppSnapshot], None]] = None,
    ):
        self._snapshot = snapshot if snapshot is not None else AppSnapshot(presets=builtin_presets())
        self._on_commit = on_commit
        self._lock = threading.RLock()

    # =========================================================================
    # QUERIES
    # =========================================================================

    def snapshot(self) -> AppSnapshot:
        return self._snapshot

    @property
    def version(self) -> int:
        return self._snapshot.version

    def get_option(self, option_id: str) -> UniversityOption:
        option = self._snapshot.find_option(option_id)
        if option is None:
            raise OptionNotFoundError(option_id)
        return option

    def get_preset(self, preset_id: str) -> WeightPreset:
        preset = self._snapshot.find_preset(preset_id)
        if preset is None:
            raise PresetNotFoundError(preset_id)
        return preset

    def diary_recent_first(self, option_id: str) -> List[DiaryEntry]:
        return list(reversed(self.get_option(option_id).diary))

    # =========================================================================
    # COMMIT
    # =========================================================================

    def _commit(self, command: str, **changes: Any) -> AppSnapshot:
        current = self._snapshot
        updated = AppSnapshot(
            version=current.version + 1,
            options=changes.get("options", current.options),
            weights=changes.get("weights", current.weights),
            presets=changes.get("presets", current.presets),
            compare_ids=changes.get("compare_ids", current.compare_ids),
        )
        if self._on_commit is not None:
            self._on_commit(updated)
        self._snapshot = updated
        logger.info("%s committed (version %d)", command, updated.version)
        return updated

    def _replace_option(self, command: str, option: UniversityOption) -> UniversityOption:
        options = [option if u.id == option.id else u for u in self._snapshot.options]
        self._commit(command, options=options)
        return option

    # =========================================================================
    # OPTION COMMANDS
    # =========================================================================

    def set_options(self, options: Iterable[UniversityOption]) -> AppSnapshot:
        with self._lock:
            options = list(options)
            known = {u.id for u in options}
            compare_ids = [i for i in self._snapshot.compare_ids if i in known]
            return self._commit("set_options", options=options, compare_ids=compare_ids)

    def add_option(self, option: UniversityOption) -> UniversityOption:
        with self._lock:
            if self._snapshot.find_option(option.id) is not None:
                raise DuplicateOptionError(option.id)
            now = _utcnow()
            option = option.model_copy(update={
                "checklist": option.checklist or default_checklist(),
                "created_at": now,
                "updated_at": now,
            })
            self._commit("add_option", options=[*self._snapshot.options, option])
            return option

    def import_options(self, options: Iterable[UniversityOption]) -> List[UniversityOption]:
        """Add several options in one commit; nothing is added if any id is taken."""
        with self._lock:
            known = {u.id for u in self._snapshot.options}
            now = _utcnow()
            imported: List[UniversityOption] = []
            for option in options:
                if option.id in known:
                    raise DuplicateOptionError(option.id)
                known.add(option.id)
                imported.append(option.model_copy(update={
                    "checklist": option.checklist or default_checklist(),
                    "created_at": option.created_at or now,
                    "updated_at": option.updated_at or now,
                }))
            self._commit("import_options", options=[*self._snapshot.options, *imported])
            return imported

    def update_option(self, option: UniversityOption) -> UniversityOption:
        """Full replace; id and created_at are kept."""
        with self._lock:
            current = self.get_option(option.id)
            option = option.model_copy(update={
                "created_at": current.created_at,
                "updated_at": _utcnow(),
            })
            return self._replace_option("update_option", option)

    def patch_option(self, option_id: str, changes: Dict[str, Any]) -> UniversityOption:
        """Partial update, re-validated through the contract."""
        with self._lock:
            current = self.get_option(option_id)
            data = current.model_dump()
            data.update({k: v for k, v in changes.items() if k not in ("id", "created_at")})
            data["updated_at"] = _utcnow()
            return self._replace_option("patch_option", UniversityOption(**data))

    def delete_option(self, option_id: str) -> None:
        with self._lock:
            self.get_option(option_id)
            self._commit(
                "delete_option",
                options=[u for u in self._snapshot.options if u.id != option_id],
                compare_ids=[i for i in self._snapshot.compare_ids if i != option_id],
            )

    def duplicate_option(self, option_id: str) -> UniversityOption:
        with self._lock:
            original = self.get_option(option_id)
            now = _utcnow()
            copy = original.model_copy(update={
                "id": f"{original.id}-copy-{int(now.timestamp() * 1000)}",
                "name": f"{original.name} (Copy)",
                "status": Status.INTERESTED.value,
                "priority": None,
                "is_favorite": False,
                "diary": [],
                "checklist": default_checklist(),
                "created_at": now,
                "updated_at": now,
            }, deep=True)
            self._commit("duplicate_option", options=[*self._snapshot.options, copy])
            return copy

    def toggle_favorite(self, option_id: str) -> UniversityOption:
        with self._lock:
            current = self.get_option(option_id)
            option = current.model_copy(update={"is_favorite": not current.is_favorite})
            return self._replace_option("toggle_favorite", option)

    # =========================================================================
    # CHECKLIST & DIARY
    # =========================================================================

    def set_checklist(self, option_id: str, checklist: List[ChecklistItem]) -> UniversityOption:
        with self._lock:
            ids = [item.id for item in checklist]
            if len(ids) != len(set(ids)):
                raise ValueError("Checklist item ids must be distinct")
            current = self.get_option(option_id)
            option = current.model_copy(update={"checklist": list(checklist), "updated_at": _utcnow()})
            return self._replace_option("set_checklist", option)

    def toggle_checklist_item(self, option_id: str, item_id: str) -> UniversityOption:
        with self._lock:
            current = self.get_option(option_id)
            if not any(item.id == item_id for item in current.checklist):
                raise LookupError(f"Checklist item not found: {item_id}")
            checklist = [
                item.model_copy(update={"completed": not item.completed}) if item.id == item_id else item
                for item in current.checklist
            ]
            option = current.model_copy(update={"checklist": checklist, "updated_at": _utcnow()})
            return self._replace_option("toggle_checklist_item", option)

    def add_diary_entry(self, option_id: str, text: str, entry_date: Optional[date] = None) -> DiaryEntry:
        with self._lock:
            current = self.get_option(option_id)
            entry = DiaryEntry(id=uuid.uuid4().hex, date=entry_date or date.today(), text=text)
            option = current.model_copy(update={
                "diary": [*current.diary, entry],
                "updated_at": _utcnow(),
            })
            self._replace_option("add_diary_entry", option)
            return entry

    # =========================================================================
    # WEIGHTS & PRESETS
    # =========================================================================

    def set_weights(self, weights: Weights) -> Weights:
        with self._lock:
            self._commit("set_weights", weights=weights)
            return weights

    def save_preset(self, name: str, weights: Optional[Weights] = None, preset_id: Optional[str] = None) -> WeightPreset:
        with self._lock:
            preset = WeightPreset(
                id=preset_id or uuid.uuid4().hex,
                name=name,
                weights=weights if weights is not None else self._snapshot.weights,
            )
            presets = [p for p in self._snapshot.presets if p.id != preset.id]
            self._commit("save_preset", presets=[*presets, preset])
            return preset

    def update_preset(self, preset_id: str, name: Optional[str] = None, weights: Optional[Weights] = None) -> WeightPreset:
        with self._lock:
            current = self.get_preset(preset_id)
            preset = current.model_copy(update={
                "name": name if name is not None else current.name,
                "weights": weights if weights is not None else current.weights,
            })
            presets = [preset if p.id == preset_id else p for p in self._snapshot.presets]
            self._commit("update_preset", presets=presets)
            return preset

    def delete_preset(self, preset_id: str) -> None:
        with self._lock:
            self.get_preset(preset_id)
            self._commit("delete_preset", presets=[p for p in self._snapshot.presets if p.id != preset_id])

    def apply_preset(self, preset_id: str) -> Weights:
        with self._lock:
            weights = self.get_preset(preset_id).weights
            self._commit("apply_preset", weights=weights)
            return weights

    # =========================================================================
    # COMPARE LIST
    # =========================================================================

    def set_compare_ids(self, option_ids: Iterable[str]) -> List[str]:
        """Unknown and repeated ids are dropped; at most five are kept."""
        with self._lock:
            known = {u.id for u in self._snapshot.options}
            compare_ids: List[str] = []
            for option_id in option_ids:
                if option_id in known and option_id not in compare_ids:
                    compare_ids.append(option_id)
            compare_ids = compare_ids[:MAX_COMPARE_OPTIONS]
            self._commit("set_compare_ids", compare_ids=compare_ids)
            return compare_ids

    def toggle_compare(self, option_id: str) -> List[str]:
        with self._lock:
            self.get_option(option_id)
            current = list(self._snapshot.compare_ids)
            if option_id in current:
                current.remove(option_id)
            elif len(current) >= MAX_COMPARE_OPTIONS:
                return current
            else:
                current.append(option_id)
            self._commit("toggle_compare", compare_ids=current)
            return current
