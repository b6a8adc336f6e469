"""Состояние фильтров галереи.

Каждое изменение возвращает новое значение; ни одно из них само по себе
не запускает загрузку. Загрузку запускает только «Aplicar».
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Tuple, Union

MIME_TYPES: Tuple[str, ...] = ("jpg", "png", "gif")


class Order(str, Enum):
    DESC = "DESC"
    ASC = "ASC"
    RANDOM = "RANDOM"


@dataclass(frozen=True)
class FilterState:
    """Выбор пользователя: порода, типы файлов, порядок.

    Fields:
        breed_id: Идентификатор породы; пустая строка означает «все породы».
        mime_types: Подмножество `MIME_TYPES`; может быть пустым.
        order: Порядок выдачи API.
        has_breeds: Запрашивать только изображения с данными о породе.
    """
    breed_id: str = ""
    mime_types: FrozenSet[str] = field(default_factory=lambda: frozenset({"jpg"}))
    order: Order = Order.RANDOM
    has_breeds: bool = False

    @classmethod
    def default(cls) -> "FilterState":
        return cls()

    def with_breed(self, breed_id: str) -> "FilterState":
        return replace(self, breed_id=(breed_id or "").strip())

    def with_order(self, order: Union[Order, str]) -> "FilterState":
        """Raises ValueError для неизвестного порядка."""
        return replace(self, order=Order(order))

    def toggle_mime(self, mime: str) -> "FilterState":
        """Добавляет тип, если его нет, иначе убирает.

        Raises:
            ValueError: если тип не из `MIME_TYPES`.
        """
        if mime not in MIME_TYPES:
            raise ValueError(f"Неизвестный тип изображения: {mime!r}")
        if mime in self.mime_types:
            return replace(self, mime_types=self.mime_types - {mime})
        return replace(self, mime_types=self.mime_types | {mime})

    def with_has_breeds(self, flag: bool) -> "FilterState":
        return replace(self, has_breeds=bool(flag))

    @property
    def ordered_mime_types(self) -> Tuple[str, ...]:
        # stable order for the query string
        return tuple(m for m in MIME_TYPES if m in self.mime_types)
