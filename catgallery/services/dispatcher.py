"""Запуск блокирующих задач и доставка результатов в цикл событий UI.

Всё состояние меняется только в потоке UI: поток `TkDispatcher` лишь
выполняет I/O и передаёт результат обратно через `after(0, ...)`.
"""
from __future__ import annotations

import logging
import threading
import tkinter as tk
from typing import Any, Callable, List, Protocol, Tuple, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class Dispatcher(Protocol):
    def submit(self, job: Callable[[], Any], on_success: SuccessCallback, on_error: ErrorCallback) -> None: ...


class ImmediateDispatcher:
    """Выполняет задачу сразу в вызывающем потоке (тесты, CLI)."""
    def submit(self, job: Callable[[], T], on_success: Callable[[T], None], on_error: ErrorCallback) -> None:
        try:
            result = job()
        except Exception as exc:  # delivered to the caller, not swallowed
            on_error(exc)
            return
        on_success(result)


class DeferredDispatcher:
    """Копит задачи до явного `run_pending()`; позволяет проверять состояние «в полёте»."""
    def __init__(self) -> None:
        self.pending: List[Tuple[Callable[[], Any], SuccessCallback, ErrorCallback]] = []

    def submit(self, job: Callable[[], Any], on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        self.pending.append((job, on_success, on_error))

    def run_pending(self) -> int:
        batch, self.pending = self.pending, []
        runner = ImmediateDispatcher()
        for job, on_success, on_error in batch:
            runner.submit(job, on_success, on_error)
        return len(batch)


class TkDispatcher:
    """Выполняет задачу в фоновом потоке и вызывает колбэк в потоке Tk.

    Args:
        widget: Любой виджет Tk (нужен только метод `after`).
    """
    def __init__(self, widget: Any, thread_name: str = "catgallery-io") -> None:
        self._widget = widget
        self._thread_name = thread_name
        self._closed = False

    def close(self) -> None:
        self._closed = True

    def submit(self, job: Callable[[], T], on_success: Callable[[T], None], on_error: ErrorCallback) -> None:
        def run() -> None:
            try:
                result = job()
            except Exception as exc:
                self._deliver(on_error, exc)
                return
            self._deliver(on_success, result)

        threading.Thread(target=run, name=self._thread_name, daemon=True).start()

    def _deliver(self, callback: Callable[[Any], None], value: Any) -> None:
        if self._closed:
            return
        try:
            self._widget.after(0, lambda: callback(value))
        except (RuntimeError, tk.TclError):
            # main loop or widget already gone (window closed mid-flight)
            _logger.debug("Dropping result: UI main loop is not running")
