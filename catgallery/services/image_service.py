"""Загрузка изображений по URL и подготовка миниатюр.

Принципы:
- SRP: класс отвечает только за скачивание, декодирование и кэш миниатюр.
- LSP/ISP: возвращает `PIL.Image.Image` в режиме RGBA; интерфейс узкий.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from io import BytesIO
from typing import Optional, Tuple

import requests
from PIL import Image, UnidentifiedImageError

from catgallery.errors import NetworkError

_logger = logging.getLogger(__name__)

THUMBNAIL_SIZE: Tuple[int, int] = (240, 200)
DETAIL_SIZE: Tuple[int, int] = (640, 420)
CACHE_SIZE = 128
IMAGE_ERROR = "No se pudo descargar la imagen."


class ImageService:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
        cache_size: int = CACHE_SIZE,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout
        self._cache_size = max(1, cache_size)
        self._cache: "OrderedDict[Tuple[str, Tuple[int, int]], Image.Image]" = OrderedDict()
        # jobs run on dispatcher threads
        self._lock = threading.Lock()

    def load_from_url(self, url: str) -> Image.Image:
        """Скачивает изображение и декодирует его.

        Args:
            url: Адрес изображения.

        Returns:
            `PIL.Image.Image` в режиме RGBA.

        Raises:
            NetworkError: если скачивание не удалось.
            ValueError: если ответ не является изображением.
        """
        try:
            resp = self._session.get(url, timeout=self._timeout)
            resp.raise_for_status()
        except requests.exceptions.RequestException as exc:
            _logger.warning("Failed to download %s: %s", url, exc)
            raise NetworkError(IMAGE_ERROR) from exc

        try:
            pil_image = Image.open(BytesIO(resp.content))
            pil_image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError(f"Ответ не является изображением: {url}") from exc
        # animated GIFs: first frame is enough for a card
        return pil_image.convert("RGBA")

    def thumbnail(self, url: str, size: Tuple[int, int] = THUMBNAIL_SIZE) -> Image.Image:
        """Возвращает копию изображения, вписанную в `size`, с LRU-кэшем по (url, size)."""
        key = (url, size)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return cached

        image = self.load_from_url(url)
        image.thumbnail(size, Image.Resampling.LANCZOS)

        with self._lock:
            self._cache[key] = image
            self._cache.move_to_end(key)
            while len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        return image

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
