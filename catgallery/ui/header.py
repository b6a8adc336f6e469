from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class Header(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, fg_color="transparent", **kwargs)

        # callbacks
        self.on_toggle_favorites: Optional[Callable[[], None]] = None

        self.grid_columnconfigure(0, weight=1)

        self._title = ctk.CTkLabel(self, text="CatGallery", font=ctk.CTkFont(size=28, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(4, 0), sticky="w")
        self._subtitle = ctk.CTkLabel(self, text="Explorador de gatos usando The Cat API")
        self._subtitle.grid(row=1, column=0, padx=8, pady=(0, 4), sticky="w")

        self._count = 0
        self._favorites_btn = ctk.CTkButton(
            self,
            text=self._button_text(),
            fg_color="#f43f5e",
            hover_color="#fb7185",
            command=self._emit_toggle,
        )
        self._favorites_btn.grid(row=0, column=1, rowspan=2, padx=8, pady=4, sticky="e")

    # public API (sync from controller)
    def set_favorites_count(self, count: int) -> None:
        self._count = count
        self._favorites_btn.configure(text=self._button_text())

    def _button_text(self) -> str:
        return f"❤️ Mis favoritos ({self._count})"

    def _emit_toggle(self) -> None:
        if self.on_toggle_favorites:
            self.on_toggle_favorites()
