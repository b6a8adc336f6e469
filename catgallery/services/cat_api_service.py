"""Клиент The Cat API: каталог пород и постраничный поиск изображений.

Принципы:
- SRP: только HTTP и разбор JSON в модели; состояние галереи здесь не хранится.
- Ошибки `requests` и неразборчивые ответы превращаются в `NetworkError`
  с сообщением, готовым для показа пользователю.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

from catgallery.config import Settings
from catgallery.errors import NetworkError
from catgallery.models.cat_model import Breed, ImageItem
from catgallery.models.filter_state import FilterState

_logger = logging.getLogger(__name__)

BREEDS_ERROR = "No se pudieron cargar las razas"
IMAGES_ERROR = "No pudimos cargar las imágenes. Intenta nuevamente."


def build_search_params(filters: FilterState, page: int, limit: int) -> Dict[str, str]:
    """Параметры запроса `/images/search` для заданных фильтров и страницы."""
    params = {
        "limit": str(limit),
        "page": str(page),
        "order": filters.order.value,
    }
    if filters.breed_id:
        params["breed_ids"] = filters.breed_id
    mimes = filters.ordered_mime_types
    if mimes:
        params["mime_types"] = ",".join(mimes)
    if filters.has_breeds:
        params["has_breeds"] = "1"
    return params


def enrich_with_breed(items: Iterable[ImageItem], breed: Optional[Breed]) -> List[ImageItem]:
    """Подставляет породу из каталога туда, где API её не прислал.

    Применяется только к данным для показа; избранное не меняется.
    """
    if breed is None:
        return list(items)
    return [item if item.breeds else item.with_breed(breed) for item in items]


class CatApiService:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        if settings.api_key:
            self._session.headers["x-api-key"] = settings.api_key

    @property
    def page_size(self) -> int:
        return self._settings.page_size

    def fetch_breeds(self) -> List[Breed]:
        """Загружает полный каталог пород (один запрос при старте).

        Raises:
            NetworkError: при неуспешном ответе, сбое сети или битом JSON.
        """
        data = self._get_json("/breeds", params=None, error_message=BREEDS_ERROR)
        try:
            breeds = [Breed.from_dict(raw) for raw in data]
        except ValueError as exc:
            raise NetworkError(BREEDS_ERROR) from exc
        _logger.info("Loaded %d breeds", len(breeds))
        return breeds

    def search_images(
        self,
        filters: FilterState,
        page: int,
        breeds_by_id: Optional[Mapping[str, Breed]] = None,
    ) -> List[ImageItem]:
        """Загружает одну страницу результатов поиска.

        Args:
            filters: Применённые фильтры.
            page: Номер страницы, начиная с 0.
            breeds_by_id: Каталог пород для подстановки породы в элементы,
                которые API вернул без неё (только при активном фильтре породы).

        Raises:
            NetworkError: при неуспешном ответе, сбое сети или битом JSON.
        """
        params = build_search_params(filters, page, self._settings.page_size)
        data = self._get_json("/images/search", params=params, error_message=IMAGES_ERROR)
        try:
            items = [ImageItem.from_dict(raw) for raw in data]
        except ValueError as exc:
            raise NetworkError(IMAGES_ERROR) from exc
        if filters.breed_id and breeds_by_id:
            items = enrich_with_breed(items, breeds_by_id.get(filters.breed_id))
        _logger.info("Loaded page %d with %d images (%s)", page, len(items), params)
        return items

    def _get_json(self, path: str, params: Optional[Mapping[str, str]], error_message: str) -> List[Any]:
        url = f"{self._settings.api_base}{path}"
        try:
            resp = self._session.get(url, params=params, timeout=self._settings.request_timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as exc:
            _logger.warning("Request to %s failed: %s", url, exc)
            raise NetworkError(error_message) from exc
        except ValueError as exc:
            # requests' JSONDecodeError is also a RequestException on newer versions
            _logger.warning("Malformed JSON from %s", url)
            raise NetworkError(error_message) from exc
        if not isinstance(data, list):
            _logger.warning("Unexpected payload from %s: %r", url, type(data).__name__)
            raise NetworkError(error_message)
        return data
