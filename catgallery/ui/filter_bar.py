"""Панель фильтров: порода, порядок, типы файлов, «Limpiar» и «Aplicar».

Принципы:
- SRP: управляет только виджетами фильтров; состояние фильтров хранит контроллер.
- ISP: события наружу через `on_*`, синхронизация внутрь через `set_*`.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Sequence

import customtkinter as ctk

from catgallery.ui import text


class FilterBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)

        # Callbacks
        self.on_breed_change: Optional[Callable[[str], None]] = None
        self.on_order_change: Optional[Callable[[str], None]] = None
        self.on_mime_toggle: Optional[Callable[[str], None]] = None
        self.on_has_breeds_change: Optional[Callable[[bool], None]] = None
        self.on_apply: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None

        for col in range(3):
            self.grid_columnconfigure(col, weight=1)

        self._title = ctk.CTkLabel(self, text="Filtros", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        actions = ctk.CTkFrame(self, fg_color="transparent")
        actions.grid(row=0, column=2, padx=8, pady=(8, 4), sticky="e")
        self._reset_btn = ctk.CTkButton(actions, text="Limpiar", width=90, fg_color="transparent", border_width=1, command=self._emit_reset)
        self._reset_btn.grid(row=0, column=0, padx=(0, 6))
        self._apply_btn = ctk.CTkButton(actions, text="Aplicar", width=90, fg_color="#f43f5e", hover_color="#fb7185", command=self._emit_apply)
        self._apply_btn.grid(row=0, column=1)

        # Raza
        self._breed_label = ctk.CTkLabel(self, text="Raza")
        self._breed_label.grid(row=1, column=0, padx=8, pady=(4, 0), sticky="w")
        self._breed_menu = ctk.CTkOptionMenu(self, values=[text.ALL_BREEDS], command=self._emit_breed_change)
        self._breed_menu.set(text.ALL_BREEDS)
        self._breed_menu.grid(row=2, column=0, padx=8, pady=(0, 8), sticky="ew")

        # Orden
        self._order_label = ctk.CTkLabel(self, text="Orden")
        self._order_label.grid(row=1, column=1, padx=8, pady=(4, 0), sticky="w")
        self._order_menu = ctk.CTkOptionMenu(
            self, values=[label for label, _ in text.ORDER_OPTIONS], command=self._emit_order_change
        )
        self._order_menu.grid(row=2, column=1, padx=8, pady=(0, 8), sticky="ew")

        # Tipo
        self._mime_label = ctk.CTkLabel(self, text="Tipo")
        self._mime_label.grid(row=1, column=2, padx=8, pady=(4, 0), sticky="w")
        mime_frame = ctk.CTkFrame(self, fg_color="transparent")
        mime_frame.grid(row=2, column=2, padx=8, pady=(0, 8), sticky="w")
        self._mime_vars: Dict[str, ctk.BooleanVar] = {}
        for col, (label, value) in enumerate(text.MIME_OPTIONS):
            var = ctk.BooleanVar(value=False)
            box = ctk.CTkCheckBox(mime_frame, text=label, variable=var, width=60, command=lambda v=value: self._emit_mime_toggle(v))
            box.grid(row=0, column=col, padx=(0, 8), sticky="w")
            self._mime_vars[value] = var

        self._has_breeds_var = ctk.BooleanVar(value=False)
        self._has_breeds_switch = ctk.CTkSwitch(
            self, text="Solo con raza", variable=self._has_breeds_var, command=self._emit_has_breeds_change
        )
        self._has_breeds_switch.grid(row=3, column=0, padx=8, pady=(0, 8), sticky="w")

    # ---- Public API ----
    def set_breeds(self, labels: Sequence[str], enabled: bool) -> None:
        """Заполняет список пород; без каталога фильтр по породе недоступен."""
        self._breed_menu.configure(values=list(labels), state="normal" if enabled else "disabled")

    def set_filters(self, breed: str, order: str, mime_types: Iterable[str], has_breeds: bool) -> None:
        self._breed_menu.set(breed)
        self._order_menu.set(order)
        selected = set(mime_types)
        for value, var in self._mime_vars.items():
            var.set(value in selected)
        self._has_breeds_var.set(has_breeds)

    # ---- Events ----
    def _emit_breed_change(self, label: str) -> None:
        if self.on_breed_change:
            self.on_breed_change(label)

    def _emit_order_change(self, label: str) -> None:
        if self.on_order_change:
            self.on_order_change(label)

    def _emit_mime_toggle(self, value: str) -> None:
        if self.on_mime_toggle:
            self.on_mime_toggle(value)

    def _emit_has_breeds_change(self) -> None:
        if self.on_has_breeds_change:
            self.on_has_breeds_change(bool(self._has_breeds_var.get()))

    def _emit_apply(self) -> None:
        if self.on_apply:
            self.on_apply()

    def _emit_reset(self) -> None:
        if self.on_reset:
            self.on_reset()
