"""Исключения предметной области.

Принципы:
- Сервисы переводят ошибки библиотек (requests, json, ОС) в эти типы.
- Контроллеры ловят только их и превращают в состояние для UI.
"""
from __future__ import annotations


class CatGalleryError(Exception):
    """Базовая ошибка приложения; сообщение показывается пользователю как есть."""


class NetworkError(CatGalleryError):
    """Неуспешный HTTP-статус, сбой транспорта или неразборчивый ответ API."""


class StorageError(CatGalleryError):
    """Хранилище недоступно или содержит повреждённые данные."""
