from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

ERROR_COLOR = "#fda4af"


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        # callbacks
        self.on_load_more: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        self._status_value = ctk.StringVar(value="")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_value, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")
        self._default_color = self._status_label.cget("text_color")

        self._load_more_btn = ctk.CTkButton(self, text="Cargar más", width=120, command=self._on_load_more)
        self._load_more_btn.grid(row=0, column=1, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_status(self, message: str, is_error: bool = False) -> None:
        self._status_value.set(message)
        self._status_label.configure(text_color=ERROR_COLOR if is_error else self._default_color)

    def set_load_more_enabled(self, enabled: bool) -> None:
        self._load_more_btn.configure(state="normal" if enabled else "disabled")

    # events
    def _on_load_more(self) -> None:
        if self.on_load_more:
            self.on_load_more()
