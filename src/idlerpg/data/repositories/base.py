"""Base repository implementation for JSON definition data."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Generic, Mapping, TypeVar

from idlerpg.data.errors import DataValidationError
from idlerpg.data.json_loader import load_json
from idlerpg.data import paths

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories.

    Definitions are loaded lazily on first access and cached for the lifetime
    of the repository; callers only ever see frozen definition objects.
    """

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            raw = self._load_raw()
            self._definitions = self._build(raw)
            logger.debug("%s: %d definitions cached", self._filename, len(self._definitions))

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def find(self, def_id: str) -> T | None:
        """Return a definition by id, or None when it is unknown."""
        self._ensure_loaded()
        assert self._definitions is not None
        return self._definitions.get(def_id)

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    def ids(self) -> list[str]:
        """Return definition ids in file order."""
        self._ensure_loaded()
        assert self._definitions is not None
        return list(self._definitions.keys())

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise DataValidationError(f"{context} must be a finite number.")
        return float(value)

    @staticmethod
    def _require_str_list(value: object, context: str) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        result: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise DataValidationError(f"{context} entries must be strings.")
            result.append(item)
        return result

    @classmethod
    def _require_stat_map(cls, value: object, context: str) -> Mapping[str, float]:
        """Validate a sparse stat map; the ``resistance`` sub-map is kept as-is."""
        if value is None:
            return MappingProxyType({})
        payload = cls._require_mapping(value, context)
        stats: dict[str, object] = {}
        for stat, amount in payload.items():
            if stat == "resistance":
                resistances = cls._require_mapping(amount, f"{context} resistance")
                stats[stat] = MappingProxyType(
                    {
                        element: cls._require_number(res, f"{context} resistance '{element}'")
                        for element, res in resistances.items()
                    }
                )
                continue
            stats[stat] = cls._require_number(amount, f"{context} stat '{stat}'")
        return MappingProxyType(stats)

    @staticmethod
    def _assert_exact_fields(
        payload: dict[str, object],
        expected_keys: set[str],
        context: str,
        *,
        optional_fields: set[str] | None = None,
    ) -> None:
        actual_keys = set(payload.keys())
        optional = optional_fields or set()
        missing = expected_keys - actual_keys
        unknown = actual_keys - expected_keys - optional
        if missing or unknown:
            msg_parts = []
            if missing:
                msg_parts.append(f"missing fields: {sorted(missing)}")
            if unknown:
                msg_parts.append(f"unknown fields: {sorted(unknown)}")
            raise DataValidationError(f"{context} has schema issues ({'; '.join(msg_parts)}).")
