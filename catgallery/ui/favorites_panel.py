"""Выдвижная панель «Mis favoritos»."""
from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

import customtkinter as ctk
from PIL import Image

from catgallery.models.cat_model import FavoriteRecord
from catgallery.ui import text

COLUMNS = 2


class FavoritesPanel(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.on_toggle_favorite: Optional[Callable[[FavoriteRecord], None]] = None
        self.on_select: Optional[Callable[[FavoriteRecord], None]] = None
        self.on_close: Optional[Callable[[], None]] = None

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._title = ctk.CTkLabel(self, text="Mis favoritos", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")
        self._close_btn = ctk.CTkButton(self, text="Cerrar", width=70, fg_color="transparent", border_width=1, command=self._emit_close)
        self._close_btn.grid(row=0, column=1, padx=8, pady=(8, 4), sticky="e")

        self._list = ctk.CTkScrollableFrame(self)
        self._list.grid(row=1, column=0, columnspan=2, padx=8, pady=(0, 8), sticky="nsew")
        for col in range(COLUMNS):
            self._list.grid_columnconfigure(col, weight=1)

        self._records: Sequence[FavoriteRecord] = ()
        self._thumbs: Dict[str, ctk.CTkLabel] = {}
        # images survive list rebuilds
        self._images: Dict[str, ctk.CTkImage] = {}
        self._visible = False

    # ---- Public API ----
    def show(self) -> None:
        self._visible = True
        self.grid()

    def hide(self) -> None:
        self._visible = False
        self.grid_remove()

    @property
    def visible(self) -> bool:
        return self._visible

    def set_records(self, records: Sequence[FavoriteRecord]) -> None:
        for child in self._list.winfo_children():
            child.destroy()
        self._thumbs.clear()
        ids = {rec.id for rec in records}
        for stale in [k for k in self._images if k not in ids]:
            del self._images[stale]
        self._records = tuple(records)

        if not records:
            ctk.CTkLabel(self._list, text=text.EMPTY_FAVORITES).grid(row=0, column=0, columnspan=COLUMNS, padx=6, pady=12)
            return

        for index, rec in enumerate(records):
            row, col = divmod(index, COLUMNS)
            tile = ctk.CTkFrame(self._list, corner_radius=12)
            tile.grid(row=row, column=col, padx=4, pady=4, sticky="nsew")
            tile.grid_columnconfigure(0, weight=1)

            thumb = ctk.CTkLabel(tile, text="…", width=120, height=100, cursor="hand2")
            thumb.grid(row=0, column=0, columnspan=2, padx=4, pady=(4, 2), sticky="ew")
            thumb.bind("<Button-1>", lambda _e, r=rec: self._emit_select(r))
            if rec.id in self._images:
                thumb.configure(image=self._images[rec.id], text="")
            self._thumbs[rec.id] = thumb

            lines = text.card_lines(rec)
            ctk.CTkLabel(tile, text=lines["title"], anchor="w").grid(row=1, column=0, padx=6, sticky="ew")
            ctk.CTkButton(tile, text="✕", width=28, fg_color="#f43f5e", command=lambda r=rec: self._emit_toggle(r)).grid(
                row=1, column=1, padx=4, pady=4
            )

    def set_record_image(self, record_id: str, image: Optional[Image.Image]) -> None:
        thumb = self._thumbs.get(record_id)
        if image is None:
            if thumb is not None:
                thumb.configure(text="🐱")
            return
        ctk_image = ctk.CTkImage(light_image=image, dark_image=image, size=(120, int(120 * image.height / max(1, image.width))))
        self._images[record_id] = ctk_image
        if thumb is not None:
            thumb.configure(image=ctk_image, text="")

    # ---- Events ----
    def _emit_toggle(self, record: FavoriteRecord) -> None:
        if self.on_toggle_favorite:
            self.on_toggle_favorite(record)

    def _emit_select(self, record: FavoriteRecord) -> None:
        if self.on_select:
            self.on_select(record)

    def _emit_close(self) -> None:
        if self.on_close:
            self.on_close()
