"""Модели данных The Cat API: порода, изображение, запись избранного.

Принципы:
- SRP: только структура данных и (де)сериализация JSON, без сетевой логики.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _required_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Поле '{key}' отсутствует или пустое")
    return value


@dataclass(frozen=True)
class Weight:
    metric: Optional[str] = None
    imperial: Optional[str] = None


@dataclass(frozen=True)
class Breed:
    """Статическое описание породы; приходит один раз из `/breeds`.

    Fields:
        id: Идентификатор породы, например "abys".
        name: Отображаемое имя.
        temperament, origin, life_span, description: Текстовые поля API;
            `None`, если API их не прислал.
        weight: Вес, интересует только `metric`.
        wikipedia_url: Ссылка на статью, если есть.
    """
    id: str
    name: str
    temperament: Optional[str] = None
    origin: Optional[str] = None
    life_span: Optional[str] = None
    weight: Weight = field(default_factory=Weight)
    description: Optional[str] = None
    wikipedia_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Breed":
        """Строит породу из JSON-объекта API.

        Raises:
            ValueError: если объект не словарь или в нём нет `id`.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Порода должна быть JSON-объектом")
        breed_id = _required_str(data, "id")
        raw_weight = data.get("weight")
        weight = Weight()
        if isinstance(raw_weight, Mapping):
            weight = Weight(metric=_opt_str(raw_weight, "metric"), imperial=_opt_str(raw_weight, "imperial"))
        return cls(
            id=breed_id,
            name=_opt_str(data, "name") or breed_id,
            temperament=_opt_str(data, "temperament"),
            origin=_opt_str(data, "origin"),
            life_span=_opt_str(data, "life_span"),
            weight=weight,
            description=_opt_str(data, "description"),
            wikipedia_url=_opt_str(data, "wikipedia_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name}
        for key in ("temperament", "origin", "life_span", "description", "wikipedia_url"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        weight = {k: v for k, v in (("metric", self.weight.metric), ("imperial", self.weight.imperial)) if v is not None}
        if weight:
            out["weight"] = weight
        return out


def _parse_breeds(data: Mapping[str, Any]) -> Tuple[Breed, ...]:
    raw = data.get("breeds")
    if not isinstance(raw, list):
        return ()
    return tuple(Breed.from_dict(b) for b in raw)


@dataclass(frozen=True)
class ImageItem:
    """Один результат поиска изображений. Идентичность определяется `id`.

    `breeds` хранит ровно то, что прислал API. `display_breed` подставляется
    из каталога только для показа и в избранное не попадает.
    """
    id: str
    url: str
    breeds: Tuple[Breed, ...] = ()
    width: Optional[int] = None
    height: Optional[int] = None
    display_breed: Optional[Breed] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageItem":
        if not isinstance(data, Mapping):
            raise ValueError("Изображение должно быть JSON-объектом")
        return cls(
            id=_required_str(data, "id"),
            url=_required_str(data, "url"),
            breeds=_parse_breeds(data),
            width=_opt_int(data, "width"),
            height=_opt_int(data, "height"),
        )

    @property
    def primary_breed(self) -> Optional[Breed]:
        if self.breeds:
            return self.breeds[0]
        return self.display_breed

    def with_breed(self, breed: Breed) -> "ImageItem":
        return replace(self, display_breed=breed)


@dataclass(frozen=True)
class FavoriteRecord:
    """Минимальное подмножество `ImageItem`, которое сохраняется на диск."""
    id: str
    url: str
    breeds: Tuple[Breed, ...] = ()

    @classmethod
    def from_item(cls, item: "ImageItem | FavoriteRecord") -> "FavoriteRecord":
        return cls(id=item.id, url=item.url, breeds=tuple(item.breeds or ()))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FavoriteRecord":
        if not isinstance(data, Mapping):
            raise ValueError("Запись избранного должна быть JSON-объектом")
        return cls(id=_required_str(data, "id"), url=_required_str(data, "url"), breeds=_parse_breeds(data))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "url": self.url, "breeds": [b.to_dict() for b in self.breeds]}

    @property
    def primary_breed(self) -> Optional[Breed]:
        return self.breeds[0] if self.breeds else None
