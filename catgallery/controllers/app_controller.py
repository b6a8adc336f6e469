"""Контроллер приложения: оркестрация UI, сервисов и контроллера галереи.

SOLID:
- SRP: класс связывает события UI с сервисами; сетевой логики и разметки в нём нет.
- DIP: виджеты используются через узкий набор методов `set_*` и колбэков `on_*`,
  поэтому в тестах их заменяют моки.
Политика фильтров: изменения копятся в черновике и применяются только по «Aplicar».
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from catgallery.errors import CatGalleryError, StorageError
from catgallery.models.cat_model import Breed, FavoriteRecord, ImageItem
from catgallery.models.filter_state import FilterState
from catgallery.models.gallery_state import GalleryState
from catgallery.services.cat_api_service import BREEDS_ERROR, CatApiService
from catgallery.services.dispatcher import Dispatcher
from catgallery.services.favorites_service import FavoritesStore, favorite_ids, toggle_favorite
from catgallery.services.image_service import DETAIL_SIZE, THUMBNAIL_SIZE, ImageService
from catgallery.controllers.gallery_controller import GalleryController
from catgallery.ui import text

if TYPE_CHECKING:
    from catgallery.ui.bottom_bar import BottomBar
    from catgallery.ui.detail_modal import DetailModal
    from catgallery.ui.favorites_panel import FavoritesPanel
    from catgallery.ui.filter_bar import FilterBar
    from catgallery.ui.gallery_grid import GalleryGrid
    from catgallery.ui.header import Header

_logger = logging.getLogger(__name__)

SAVE_FAVORITES_ERROR = "No se pudieron guardar los favoritos."


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Загрузка каталога пород и избранного при старте.
    - Черновик фильтров и их применение через `GalleryController`.
    - Переключение избранного с немедленным сохранением.
    - Подгрузка миниатюр и открытие модального окна.
    """
    header: "Header"
    filter_bar: "FilterBar"
    gallery_view: "GalleryGrid"
    bottom: "BottomBar"
    favorites_panel: "FavoritesPanel"
    detail: "DetailModal"
    api: CatApiService
    images: ImageService
    favorites_store: FavoritesStore
    dispatcher: Dispatcher

    gallery: GalleryController = field(init=False)
    _filters: FilterState = field(init=False, default_factory=FilterState.default)
    _breeds: Tuple[Breed, ...] = field(init=False, default=())
    _breeds_by_id: Dict[str, Breed] = field(init=False, default_factory=dict)
    _favorites: List[FavoriteRecord] = field(init=False, default_factory=list)
    _favorite_ids: FrozenSet[str] = field(init=False, default=frozenset())
    _favorites_open: bool = field(init=False, default=False)
    _selected: Optional[ImageItem | FavoriteRecord] = field(init=False, default=None)
    _notice: Optional[str] = field(init=False, default=None)
    _shown_items: Tuple[ImageItem, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        self.gallery = GalleryController(search=self._search, dispatcher=self.dispatcher)
        self.gallery.on_change(self._render_gallery)

    # ---- Public API ----
    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def favorites(self) -> List[FavoriteRecord]:
        return list(self._favorites)

    @property
    def breeds(self) -> Tuple[Breed, ...]:
        return self._breeds

    @property
    def notice(self) -> Optional[str]:
        return self._notice

    @property
    def selected(self) -> Optional[ImageItem | FavoriteRecord]:
        return self._selected

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.header.on_toggle_favorites = self.toggle_favorites_panel

        self.filter_bar.on_breed_change = self._handle_breed_change
        self.filter_bar.on_order_change = self._handle_order_change
        self.filter_bar.on_mime_toggle = self._handle_mime_toggle
        self.filter_bar.on_has_breeds_change = self._handle_has_breeds_change
        self.filter_bar.on_apply = self.apply_filters
        self.filter_bar.on_reset = self.reset_filters

        self.gallery_view.on_toggle_favorite = self.toggle_favorite
        self.gallery_view.on_select = self.select
        self.gallery_view.on_end_reached = self.gallery.advance

        self.bottom.on_load_more = self.gallery.advance

        self.favorites_panel.on_toggle_favorite = self.toggle_favorite
        self.favorites_panel.on_select = self.select
        self.favorites_panel.on_close = self.close_favorites_panel

        self.detail.on_close = self.close_detail

    def start(self) -> None:
        """Начальная загрузка: избранное с диска, каталог пород, страница 0."""
        self._set_favorites(self.favorites_store.load(), persist=False)
        self.filter_bar.set_breeds(text.breed_options(()), enabled=False)
        self._sync_filter_bar()
        self.dispatcher.submit(self.api.fetch_breeds, on_success=self._handle_breeds_loaded, on_error=self._handle_breeds_failed)
        self.gallery.apply_filters(self._filters)

    def apply_filters(self) -> None:
        self.gallery.apply_filters(self._filters)

    def reset_filters(self) -> None:
        # defaults only; the user still has to press "Aplicar"
        self._filters = FilterState.default()
        self._sync_filter_bar()

    def toggle_favorite(self, item: ImageItem | FavoriteRecord) -> None:
        self._set_favorites(toggle_favorite(item, self._favorites), persist=True)

    def toggle_favorites_panel(self) -> None:
        if self._favorites_open:
            self.close_favorites_panel()
            return
        self._favorites_open = True
        self.favorites_panel.show()

    def close_favorites_panel(self) -> None:
        self._favorites_open = False
        self.favorites_panel.hide()

    def select(self, item: ImageItem | FavoriteRecord) -> None:
        self._selected = item
        self.detail.show(item)
        self._load_image(item, DETAIL_SIZE, self.detail.set_image)

    def close_detail(self) -> None:
        self._selected = None
        self.detail.hide()

    # ---- Handlers ----
    def _handle_breed_change(self, label: str) -> None:
        self._filters = self._filters.with_breed(text.breed_id_from_label(label, self._breeds))

    def _handle_order_change(self, label: str) -> None:
        try:
            self._filters = self._filters.with_order(text.order_from_label(label))
        except ValueError:
            _logger.warning("Ignoring unknown order label %r", label)

    def _handle_mime_toggle(self, mime: str) -> None:
        self._filters = self._filters.toggle_mime(mime)

    def _handle_has_breeds_change(self, flag: bool) -> None:
        self._filters = self._filters.with_has_breeds(flag)

    def _handle_breeds_loaded(self, breeds: Sequence[Breed]) -> None:
        self._breeds = tuple(breeds)
        # lookup is rebuilt whenever the catalog is replaced
        self._breeds_by_id = {b.id: b for b in self._breeds}
        self.filter_bar.set_breeds(text.breed_options(self._breeds), enabled=bool(self._breeds))
        self._sync_filter_bar()

    def _handle_breeds_failed(self, exc: Exception) -> None:
        if not isinstance(exc, CatGalleryError):
            _logger.error("Unexpected error while loading breeds", exc_info=exc)
        self._notice = str(exc) if isinstance(exc, CatGalleryError) else BREEDS_ERROR
        self._render_status(self.gallery.state)

    # ---- Helpers ----
    def _search(self, filters: FilterState, page: int) -> List[ImageItem]:
        return self.api.search_images(filters, page, breeds_by_id=self._breeds_by_id)

    def _set_favorites(self, records: List[FavoriteRecord], persist: bool) -> None:
        known = self._favorite_ids
        self._favorites = records
        self._favorite_ids = favorite_ids(records)
        if persist:
            try:
                self.favorites_store.save(records)
            except StorageError:
                _logger.exception("Failed to persist %d favorites", len(records))
                self._notice = SAVE_FAVORITES_ERROR
            else:
                if self._notice == SAVE_FAVORITES_ERROR:
                    self._notice = None
            self._render_status(self.gallery.state)
        self.header.set_favorites_count(len(records))
        self.favorites_panel.set_records(records)
        self.gallery_view.set_favorite_ids(self._favorite_ids)
        for rec in records:
            if rec.id in known:
                continue
            self._load_image(rec, THUMBNAIL_SIZE, self.favorites_panel.set_record_image)

    def _sync_filter_bar(self) -> None:
        self.filter_bar.set_filters(
            breed=text.breed_label(self._filters.breed_id, self._breeds),
            order=text.order_label(self._filters.order),
            mime_types=self._filters.mime_types,
            has_breeds=self._filters.has_breeds,
        )

    def _render_gallery(self, state: GalleryState) -> None:
        if state.items is not self._shown_items:
            previous = self._shown_items
            self._shown_items = state.items
            self.gallery_view.set_items(state.items, self._favorite_ids)
            appended = len(previous) if state.items[: len(previous)] == previous else 0
            for item in state.items[appended:]:
                self._load_image(item, THUMBNAIL_SIZE, self.gallery_view.set_item_image)
        self.gallery_view.set_empty(state.is_empty)
        self._render_status(state)

    def _render_status(self, state: GalleryState) -> None:
        message = text.status_text(state.loading, state.error, self._notice)
        self.bottom.set_status(message, is_error=bool(not state.loading and (state.error or self._notice)))
        self.bottom.set_load_more_enabled(not state.loading)

    def _load_image(self, item: ImageItem | FavoriteRecord, size: Tuple[int, int], deliver: Any) -> None:
        def on_error(exc: Exception) -> None:
            if not isinstance(exc, (CatGalleryError, ValueError)):
                _logger.error("Unexpected error while loading %s", item.url, exc_info=exc)
            deliver(item.id, None)

        self.dispatcher.submit(
            lambda: self.images.thumbnail(item.url, size),
            on_success=lambda image: deliver(item.id, image),
            on_error=on_error,
        )
