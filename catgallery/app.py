from __future__ import annotations

import customtkinter as ctk

from catgallery.config import Settings
from catgallery.controllers.app_controller import AppController
from catgallery.services.cat_api_service import CatApiService
from catgallery.services.dispatcher import TkDispatcher
from catgallery.services.favorites_service import FavoritesStore, JsonFileStorage
from catgallery.services.image_service import ImageService
from catgallery.ui.bottom_bar import BottomBar
from catgallery.ui.detail_modal import DetailModal
from catgallery.ui.favorites_panel import FavoritesPanel
from catgallery.ui.filter_bar import FilterBar
from catgallery.ui.gallery_grid import GalleryGrid
from catgallery.ui.header import Header


class CatGalleryApp(ctk.CTk):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("CatGallery")
        self.geometry("1180x820")
        self.minsize(900, 600)

        # root layout: header, filters, gallery | favorites, status bar
        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=0)
        self.grid_rowconfigure(2, weight=1)

        self._header = Header(self)
        self._header.grid(row=0, column=0, columnspan=2, sticky="ew", padx=12, pady=(12, 6))

        self._filters = FilterBar(self)
        self._filters.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=6)

        self._gallery = GalleryGrid(self)
        self._gallery.grid(row=2, column=0, sticky="nsew", padx=(12, 6), pady=6)

        self._favorites = FavoritesPanel(self)
        self._favorites.grid(row=2, column=1, sticky="ns", padx=(6, 12), pady=6)
        self._favorites.hide()

        self._bottom = BottomBar(self)
        self._bottom.grid(row=3, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._dispatcher = TkDispatcher(self)
        self._controller = AppController(
            header=self._header,
            filter_bar=self._filters,
            gallery_view=self._gallery,
            bottom=self._bottom,
            favorites_panel=self._favorites,
            detail=DetailModal(self),
            api=CatApiService(settings),
            images=ImageService(timeout=settings.request_timeout),
            favorites_store=FavoritesStore(JsonFileStorage(settings.storage_path)),
            dispatcher=self._dispatcher,
        )
        self._controller.bind_events()
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        # first fetch once the main loop is running
        self.after(0, self._controller.start)

    def _on_close(self) -> None:
        self._dispatcher.close()
        self.destroy()
