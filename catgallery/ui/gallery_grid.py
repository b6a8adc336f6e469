"""Сетка карточек галереи с бесконечной прокруткой.

Принципы:
- SRP: отвечает только за отображение карточек и сигнал «конец списка».
- Сигнал срабатывает по переходу «далеко от конца → близко к концу» и
  взводится заново, когда список вырос; пустая страница не вызывает
  повторных запросов.
"""
from __future__ import annotations

from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image

from catgallery.models.cat_model import ImageItem
from catgallery.ui import text

COLUMNS = 3
END_THRESHOLD = 0.92  # fraction of the scroll region


class _Card(ctk.CTkFrame):
    def __init__(self, master: tk.Misc, item: ImageItem, is_favorite: bool, **kwargs) -> None:
        super().__init__(master, corner_radius=16, **kwargs)
        self.item = item
        self.on_toggle_favorite: Optional[Callable[[ImageItem], None]] = None
        self.on_select: Optional[Callable[[ImageItem], None]] = None

        self.grid_columnconfigure(0, weight=1)
        self._image_label = ctk.CTkLabel(self, text="…", width=240, height=200, cursor="hand2")
        self._image_label.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="ew")
        self._image_label.bind("<Button-1>", lambda _e: self._emit_select())

        self._heart = ctk.CTkButton(self, text=text.favorite_glyph(is_favorite), width=36, fg_color="transparent", command=self._emit_toggle)
        self._heart.place(relx=1.0, x=-14, y=14, anchor="ne")

        lines = text.card_lines(item)
        ctk.CTkLabel(self, text=lines["title"], font=ctk.CTkFont(size=15, weight="bold"), anchor="w").grid(
            row=1, column=0, padx=10, sticky="ew"
        )
        ctk.CTkLabel(self, text=lines["subtitle"], wraplength=230, justify="left", anchor="w").grid(
            row=2, column=0, padx=10, sticky="ew"
        )
        ctk.CTkLabel(self, text=f"{lines['origin']} · {lines['life_span']}", anchor="w").grid(
            row=3, column=0, padx=10, pady=(2, 10), sticky="ew"
        )

    def set_favorite(self, is_favorite: bool) -> None:
        self._heart.configure(text=text.favorite_glyph(is_favorite))

    def set_image(self, image: Optional[ctk.CTkImage]) -> None:
        if image is None:
            self._image_label.configure(image=None, text="🐱")
        else:
            self._image_label.configure(image=image, text="")

    def _emit_toggle(self) -> None:
        if self.on_toggle_favorite:
            self.on_toggle_favorite(self.item)

    def _emit_select(self) -> None:
        if self.on_select:
            self.on_select(self.item)


class GalleryGrid(ctk.CTkFrame):
    """Прокручиваемая сетка; холст + фрейм, как обычно делают для tk."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)

        self.on_toggle_favorite: Optional[Callable[[ImageItem], None]] = None
        self.on_select: Optional[Callable[[ImageItem], None]] = None
        self.on_end_reached: Optional[Callable[[], None]] = None

        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._title = ctk.CTkLabel(self, text="Galería", font=ctk.CTkFont(size=20, weight="bold"))
        self._title.grid(row=0, column=0, padx=10, pady=(8, 0), sticky="w")

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=1, column=0, sticky="nsew")
        self._scrollbar = ctk.CTkScrollbar(self, command=self._canvas.yview)
        self._scrollbar.grid(row=1, column=1, sticky="ns")
        self._canvas.configure(yscrollcommand=self._on_yscroll)

        self._inner = ctk.CTkFrame(self._canvas, fg_color="transparent")
        for col in range(COLUMNS):
            self._inner.grid_columnconfigure(col, weight=1)
        self._window_id = self._canvas.create_window((0, 0), window=self._inner, anchor="nw")

        self._empty_label = ctk.CTkLabel(self._inner, text=text.EMPTY_GALLERY)

        self._items: Tuple[ImageItem, ...] = ()
        self._cards: List[_Card] = []  # by position; the API may repeat ids across pages
        self._images: Dict[str, ctk.CTkImage] = {}
        self._end_armed = True

        self._inner.bind("<Configure>", self._on_inner_resize)
        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Enter>", lambda _e: self._bind_wheel())
        self._canvas.bind("<Leave>", lambda _e: self._unbind_wheel())

    # ---- Public API ----
    def set_items(self, items: Sequence[ImageItem], favorite_ids: FrozenSet[str]) -> None:
        """Показывает `items`; если это продолжение текущего списка, дописывает карточки."""
        items = tuple(items)
        if items[: len(self._items)] == self._items and self._items:
            start = len(self._items)
        else:
            start = 0
            for card in self._cards:
                card.destroy()
            self._cards.clear()
            self._images.clear()
            self._canvas.yview_moveto(0)

        for index in range(start, len(items)):
            item = items[index]
            card = _Card(self._inner, item, is_favorite=item.id in favorite_ids)
            card.on_toggle_favorite = self._emit_toggle
            card.on_select = self._emit_select
            row, col = divmod(index, COLUMNS)
            card.grid(row=row + 1, column=col, padx=8, pady=8, sticky="nsew")
            self._cards.append(card)

        if len(items) > len(self._items) or start == 0:
            self._end_armed = True
        self._items = items

    def set_favorite_ids(self, favorite_ids: FrozenSet[str]) -> None:
        for card in self._cards:
            card.set_favorite(card.item.id in favorite_ids)

    def set_item_image(self, item_id: str, image: Optional[Image.Image]) -> None:
        cards = [card for card in self._cards if card.item.id == item_id]
        if not cards:
            return
        ctk_image = None
        if image is not None:
            ctk_image = ctk.CTkImage(light_image=image, dark_image=image, size=image.size)
            self._images[item_id] = ctk_image  # keep a reference
        for card in cards:
            card.set_image(ctk_image)

    def set_empty(self, visible: bool) -> None:
        if visible:
            self._empty_label.grid(row=0, column=0, columnspan=COLUMNS, padx=8, pady=24)
        else:
            self._empty_label.grid_remove()

    # ---- Events ----
    def _emit_toggle(self, item: ImageItem) -> None:
        if self.on_toggle_favorite:
            self.on_toggle_favorite(item)

    def _emit_select(self, item: ImageItem) -> None:
        if self.on_select:
            self.on_select(item)

    def _on_yscroll(self, first: str, last: str) -> None:
        self._scrollbar.set(first, last)
        near_end = float(last) >= END_THRESHOLD
        scrollable = float(first) > 0.0 or float(last) < 1.0
        if near_end and scrollable and self._end_armed and self._items:
            self._end_armed = False
            if self.on_end_reached:
                self.on_end_reached()
        elif not near_end:
            self._end_armed = True

    def _on_inner_resize(self, _event: tk.Event) -> None:
        self._canvas.configure(scrollregion=self._canvas.bbox("all"))

    def _on_canvas_resize(self, event: tk.Event) -> None:
        self._canvas.itemconfigure(self._window_id, width=event.width)

    def _bind_wheel(self) -> None:
        self._canvas.bind_all("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind_all("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind_all("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

    def _unbind_wheel(self) -> None:
        for seq in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self._canvas.unbind_all(seq)

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta:
            self._canvas.yview_scroll(-1 if event.delta > 0 else 1, "units")

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        self._canvas.yview_scroll(-1 if getattr(event, "num", None) == 4 else 1, "units")

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
