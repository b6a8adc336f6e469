"""Состояние галереи и чистые функции переходов между состояниями.

Принципы:
- Одно явное значение вместо нескольких независимых ячеек состояния.
- Переходы не выполняют I/O: они возвращают новое состояние и, при
  необходимости, описание запроса, который должен выполнить контроллер.
- Каждый запрос помечен номером сессии и страницей; ответ, чья метка уже
  не совпадает с ожидаемой, отбрасывается.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from catgallery.models.cat_model import ImageItem
from catgallery.models.filter_state import FilterState


class Status(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class PageRequest:
    """Описание одной загрузки страницы.

    `reset=True` — результаты заменяют список (страница 0),
    `reset=False` — дописываются в конец.
    """
    session: int
    page: int
    filters: FilterState
    reset: bool


@dataclass(frozen=True)
class GalleryState:
    items: Tuple[ImageItem, ...] = ()
    page: int = 0
    status: Status = Status.IDLE
    error: Optional[str] = None
    filters: FilterState = field(default_factory=FilterState)
    session: int = 0
    pending: Optional[PageRequest] = None
    # page 0 of the current session has been loaded
    ready: bool = False

    @property
    def loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def is_empty(self) -> bool:
        """Нечего показывать: загрузка завершена без ошибки и без результатов."""
        return self.status is Status.IDLE and not self.items


def start_reset(state: GalleryState, filters: FilterState) -> Tuple[GalleryState, PageRequest]:
    """Начинает новую сессию фильтров: страница 0, результаты заменят список.

    Разрешено в любом состоянии; незавершённый запрос прошлой сессии
    становится устаревшим.
    """
    session = state.session + 1
    request = PageRequest(session=session, page=0, filters=filters, reset=True)
    new_state = replace(
        state,
        page=0,
        status=Status.LOADING,
        error=None,
        filters=filters,
        session=session,
        pending=request,
        ready=False,
    )
    return new_state, request


def start_append(state: GalleryState) -> Tuple[GalleryState, Optional[PageRequest]]:
    """Запрашивает следующую страницу по сигналу «конец списка».

    Пока идёт загрузка, сигнал игнорируется: возвращается прежнее состояние
    и `None`. Номер страницы меняется только после успешного ответа.
    Если первая страница сессии так и не загрузилась, вместо дописывания
    повторяется сброс на страницу 0.
    """
    if state.loading:
        return state, None
    if not state.ready:
        request = PageRequest(session=state.session, page=0, filters=state.filters, reset=True)
    else:
        request = PageRequest(session=state.session, page=state.page + 1, filters=state.filters, reset=False)
    return replace(state, status=Status.LOADING, error=None, pending=request), request


def is_current(state: GalleryState, request: PageRequest) -> bool:
    return state.pending is not None and state.pending == request


def resolve(state: GalleryState, request: PageRequest, items: Sequence[ImageItem]) -> GalleryState:
    """Применяет успешный ответ. Устаревший ответ не меняет состояние."""
    if not is_current(state, request):
        return state
    new_items = tuple(items) if request.reset else state.items + tuple(items)
    return replace(
        state,
        items=new_items,
        page=request.page,
        status=Status.IDLE,
        error=None,
        pending=None,
        ready=True,
    )


def reject(state: GalleryState, request: PageRequest, message: str) -> GalleryState:
    """Применяет неудачу: список не трогаем, страница остаётся последней загруженной."""
    if not is_current(state, request):
        return state
    return replace(state, status=Status.ERROR, error=message, pending=None)
