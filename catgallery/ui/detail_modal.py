"""Модальное окно с подробностями о породе выбранного кота."""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
from PIL import Image

from catgallery.models.cat_model import FavoriteRecord, ImageItem
from catgallery.ui import text

DETAIL_KEYS = ("Personalidad", "Procedencia", "Peso", "Esperanza de vida")


class DetailModal:
    """Обёртка над `CTkToplevel`: окно создаётся при показе и уничтожается при закрытии."""
    def __init__(self, master: ctk.CTk) -> None:
        self._master = master
        self._window: Optional[ctk.CTkToplevel] = None
        self._image_label: Optional[ctk.CTkLabel] = None
        self._image: Optional[ctk.CTkImage] = None
        self._item_id: Optional[str] = None

        self.on_close: Optional[Callable[[], None]] = None

    # ---- Public API ----
    def show(self, item: ImageItem | FavoriteRecord) -> None:
        self.hide()
        self._item_id = item.id
        fields = text.detail_fields(item)

        window = ctk.CTkToplevel(self._master)
        window.title(fields["title"])
        window.transient(self._master)
        window.protocol("WM_DELETE_WINDOW", self._emit_close)
        window.bind("<Escape>", lambda _e: self._emit_close())
        window.grid_columnconfigure((0, 1), weight=1)
        self._window = window

        ctk.CTkLabel(window, text="Detalle completo").grid(row=0, column=0, padx=16, pady=(16, 0), sticky="w")
        ctk.CTkLabel(window, text=fields["title"], font=ctk.CTkFont(size=22, weight="bold")).grid(
            row=1, column=0, padx=16, sticky="w"
        )
        ctk.CTkButton(window, text="Cerrar", width=80, command=self._emit_close).grid(row=0, column=1, rowspan=2, padx=16, pady=16, sticky="e")

        self._image_label = ctk.CTkLabel(window, text="Cargando...", width=640, height=420)
        self._image_label.grid(row=2, column=0, columnspan=2, padx=16, pady=8)

        for index, key in enumerate(DETAIL_KEYS):
            row, col = divmod(index, 2)
            cell = ctk.CTkFrame(window, fg_color="transparent")
            cell.grid(row=3 + row, column=col, padx=16, pady=4, sticky="w")
            ctk.CTkLabel(cell, text=key, font=ctk.CTkFont(weight="bold"), anchor="w").grid(row=0, column=0, sticky="w")
            ctk.CTkLabel(cell, text=fields[key], anchor="w", wraplength=300, justify="left").grid(row=1, column=0, sticky="w")

        ctk.CTkLabel(window, text=fields["description"], wraplength=640, justify="left").grid(
            row=5, column=0, columnspan=2, padx=16, pady=(8, 16), sticky="w"
        )
        # grab after the window is mapped
        window.after(50, window.grab_set)

    def set_image(self, item_id: str, image: Optional[Image.Image]) -> None:
        if self._image_label is None or item_id != self._item_id:
            return
        if image is None:
            self._image_label.configure(text="🐱")
            return
        self._image = ctk.CTkImage(light_image=image, dark_image=image, size=image.size)
        self._image_label.configure(image=self._image, text="")

    def hide(self) -> None:
        if self._window is not None:
            self._window.grab_release()
            self._window.destroy()
        self._window = None
        self._image_label = None
        self._image = None
        self._item_id = None

    def _emit_close(self) -> None:
        if self.on_close:
            self.on_close()
        else:
            self.hide()
