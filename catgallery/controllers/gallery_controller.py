"""Контроллер постраничной загрузки галереи.

Владеет `GalleryState`, запускает запросы через `Dispatcher` и применяет
ответы чистыми переходами из `gallery_state`. Одновременно «в полёте»
не больше одного запроса; сигнал конца списка во время загрузки
игнорируется, устаревшие ответы отбрасываются.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from catgallery.errors import CatGalleryError
from catgallery.models.cat_model import ImageItem
from catgallery.models.filter_state import FilterState
from catgallery.models.gallery_state import (
    GalleryState,
    PageRequest,
    reject,
    resolve,
    start_append,
    start_reset,
)
from catgallery.services.cat_api_service import IMAGES_ERROR
from catgallery.services.dispatcher import Dispatcher

_logger = logging.getLogger(__name__)

SearchFn = Callable[[FilterState, int], Sequence[ImageItem]]
StateListener = Callable[[GalleryState], None]


class GalleryController:
    def __init__(self, search: SearchFn, dispatcher: Dispatcher, initial: Optional[GalleryState] = None) -> None:
        self._search = search
        self._dispatcher = dispatcher
        self._state = initial or GalleryState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> GalleryState:
        return self._state

    def on_change(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def apply_filters(self, filters: FilterState) -> PageRequest:
        """Сбрасывает галерею на страницу 0 и загружает её заново с `filters`."""
        self._state, request = start_reset(self._state, filters)
        self._notify()
        self._submit(request)
        return request

    def advance(self) -> Optional[PageRequest]:
        """Сигнал «конец списка»: запросить следующую страницу.

        Returns:
            Запущенный запрос или `None`, если загрузка уже идёт.
        """
        new_state, request = start_append(self._state)
        if request is None:
            _logger.debug("Ignoring end-of-list signal while loading page %s", self._state.pending)
            return None
        self._state = new_state
        self._notify()
        self._submit(request)
        return request

    # ---- Internals ----
    def _submit(self, request: PageRequest) -> None:
        self._dispatcher.submit(
            lambda: self._search(request.filters, request.page),
            on_success=lambda items: self._handle_loaded(request, items),
            on_error=lambda exc: self._handle_failed(request, exc),
        )

    def _handle_loaded(self, request: PageRequest, items: Sequence[ImageItem]) -> None:
        new_state = resolve(self._state, request, items)
        if new_state is self._state:
            _logger.info("Discarding stale page %d of session %d", request.page, request.session)
            return
        self._state = new_state
        self._notify()

    def _handle_failed(self, request: PageRequest, exc: Exception) -> None:
        if isinstance(exc, CatGalleryError):
            message = str(exc)
        else:
            _logger.error("Unexpected error while loading page %d", request.page, exc_info=exc)
            message = IMAGES_ERROR
        new_state = reject(self._state, request, message)
        if new_state is self._state:
            _logger.info("Discarding stale failure for page %d of session %d", request.page, request.session)
            return
        self._state = new_state
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)
