"""Тексты карточек, модального окна и статусов.

Чистые функции без зависимостей от customtkinter, чтобы их можно было
проверять без дисплея.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from catgallery.models.cat_model import Breed, FavoriteRecord, ImageItem
from catgallery.models.filter_state import Order

NOT_AVAILABLE = "No disponible"
ALL_BREEDS = "Todas las razas"
LOADING_TEXT = "Cargando..."
EMPTY_GALLERY = "No encontramos gatos con esos filtros. Prueba con otra combinación."
EMPTY_FAVORITES = "Aún no hay favoritos guardados."
NO_EXTRA_INFO = "Este gato no tiene información adicional registrada en la API."

ORDER_OPTIONS: Tuple[Tuple[str, Order], ...] = (
    ("Populares", Order.DESC),
    ("Recientes", Order.ASC),
    ("Aleatorio", Order.RANDOM),
)
MIME_OPTIONS: Tuple[Tuple[str, str], ...] = (("JPG", "jpg"), ("PNG", "png"), ("GIF", "gif"))


def order_label(order: Order) -> str:
    for label, value in ORDER_OPTIONS:
        if value is order:
            return label
    return order.value


def order_from_label(label: str) -> Order:
    for text, value in ORDER_OPTIONS:
        if text == label:
            return value
    raise ValueError(f"Неизвестный порядок: {label!r}")


def breed_options(breeds: Sequence[Breed]) -> List[str]:
    """Подписи для выпадающего списка пород: «все» + имена в порядке каталога."""
    return [ALL_BREEDS, *(b.name for b in breeds)]


def breed_id_from_label(label: str, breeds: Sequence[Breed]) -> str:
    if label == ALL_BREEDS:
        return ""
    for breed in breeds:
        if breed.name == label:
            return breed.id
    return ""


def breed_label(breed_id: str, breeds: Sequence[Breed]) -> str:
    for breed in breeds:
        if breed.id == breed_id:
            return breed.name
    return ALL_BREEDS


def card_lines(item: ImageItem | FavoriteRecord) -> Dict[str, str]:
    """Подписи карточки галереи."""
    breed = item.primary_breed
    if breed is None:
        return {
            "title": "Gato sin raza definida",
            "subtitle": "Personalidad misteriosa",
            "origin": "Origen desconocido",
            "life_span": "Edad promedio N/D",
        }
    return {
        "title": breed.name,
        "subtitle": breed.temperament or "Personalidad misteriosa",
        "origin": breed.origin or "Origen desconocido",
        "life_span": f"{breed.life_span} años" if breed.life_span else "Edad promedio N/D",
    }


def detail_fields(item: ImageItem | FavoriteRecord) -> Dict[str, str]:
    """Содержимое модального окна с подробностями о породе."""
    breed: Optional[Breed] = item.primary_breed
    if breed is None:
        return {
            "title": "Sin información",
            "Personalidad": NOT_AVAILABLE,
            "Procedencia": NOT_AVAILABLE,
            "Peso": f"{NOT_AVAILABLE} kg",
            "Esperanza de vida": f"{NOT_AVAILABLE} años",
            "description": NO_EXTRA_INFO,
        }
    return {
        "title": breed.name,
        "Personalidad": breed.temperament or NOT_AVAILABLE,
        "Procedencia": breed.origin or NOT_AVAILABLE,
        "Peso": f"{breed.weight.metric or NOT_AVAILABLE} kg",
        "Esperanza de vida": f"{breed.life_span or NOT_AVAILABLE} años",
        "description": breed.description or NO_EXTRA_INFO,
    }


def status_text(loading: bool, error: Optional[str], notice: Optional[str] = None) -> str:
    if loading:
        return LOADING_TEXT
    return error or notice or ""


def favorite_glyph(is_favorite: bool) -> str:
    return "❤️" if is_favorite else "🤍"
