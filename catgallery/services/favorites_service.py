"""Избранное: локальное хранилище «ключ → строка» и операции над списком.

Принципы:
- DIP: `FavoritesStore` зависит от абстрактного хранилища с методами
  `get_item`/`set_item`; в тестах подставляется `MemoryStorage`.
- Список избранного — последовательность с уникальными `id`, новые записи
  добавляются в начало.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Protocol, Sequence

from catgallery.errors import StorageError
from catgallery.models.cat_model import FavoriteRecord, ImageItem

_logger = logging.getLogger(__name__)

FAVORITES_KEY = "cat-gallery-favorites"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Хранилище в памяти; используется в тестах и как запасной вариант."""
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Один JSON-файл с объектом «строковый ключ → строковое значение».

    Нечитаемый или повреждённый файл ведёт себя как пустое хранилище при
    чтении. Запись идёт через временный файл и `os.replace`.
    """
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Не удалось прочитать {self._path}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Неожиданный формат {self._path}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            _logger.warning("Overwriting unreadable storage file %s", self._path)
            data = {}
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".storage-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Не удалось записать {self._path}") from exc


def add_favorite(item: ImageItem | FavoriteRecord, current: Sequence[FavoriteRecord]) -> List[FavoriteRecord]:
    """Добавляет запись в начало; если `id` уже есть, список не меняется."""
    if contains(current, item.id):
        return list(current)
    return [FavoriteRecord.from_item(item), *current]


def remove_favorite(item_id: str, current: Sequence[FavoriteRecord]) -> List[FavoriteRecord]:
    return [rec for rec in current if rec.id != item_id]


def toggle_favorite(item: ImageItem | FavoriteRecord, current: Sequence[FavoriteRecord]) -> List[FavoriteRecord]:
    """Убирает запись с `item.id`, если она есть, иначе добавляет её в начало.

    Порядок остальных записей сохраняется. Два вызова подряд с тем же `id`
    возвращают исходный состав.
    """
    if contains(current, item.id):
        return remove_favorite(item.id, current)
    return add_favorite(item, current)


def contains(current: Iterable[FavoriteRecord], item_id: str) -> bool:
    return any(rec.id == item_id for rec in current)


def favorite_ids(current: Iterable[FavoriteRecord]) -> FrozenSet[str]:
    return frozenset(rec.id for rec in current)


class FavoritesStore:
    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> List[FavoriteRecord]:
        """Читает избранное; при любой проблеме с данными возвращает пустой список.

        Битые записи пропускаются, повторы по `id` схлопываются (первая побеждает).
        """
        try:
            raw = self._storage.get_item(self._key)
        except StorageError:
            _logger.warning("Favorites storage unavailable, starting empty", exc_info=True)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Malformed favorites JSON, starting empty")
            return []
        if not isinstance(data, list):
            _logger.warning("Favorites payload is not a list, starting empty")
            return []

        records: List[FavoriteRecord] = []
        seen = set()
        for entry in data:
            try:
                rec = FavoriteRecord.from_dict(entry)
            except ValueError:
                _logger.warning("Skipping malformed favorite entry: %r", entry)
                continue
            if rec.id in seen:
                continue
            seen.add(rec.id)
            records.append(rec)
        return records

    def save(self, records: Sequence[FavoriteRecord]) -> None:
        """Перезаписывает слот полным списком.

        Raises:
            StorageError: если хранилище не удалось записать.
        """
        payload = json.dumps([rec.to_dict() for rec in records], ensure_ascii=False)
        self._storage.set_item(self._key, payload)
