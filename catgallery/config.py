"""Настройки приложения.

Значения по умолчанию зашиты здесь; переменные окружения `CATGALLERY_*`
позволяют их переопределить (удобно для тестового API-ключа и отдельной
папки данных).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

_logger = logging.getLogger(__name__)

API_BASE = "https://api.thecatapi.com/v1"
PAGE_SIZE = 9
REQUEST_TIMEOUT = 15  # seconds
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "catgallery"
STORAGE_FILE_NAME = "storage.json"


@dataclass(frozen=True)
class Settings:
    """Неизменяемый набор параметров, собираемый один раз при старте.

    Fields:
        api_base: Базовый URL The Cat API без завершающего слэша.
        api_key: Необязательный ключ, отправляется в заголовке `x-api-key`.
        page_size: Размер страницы поиска.
        request_timeout: Таймаут одного HTTP-запроса, секунды.
        data_dir: Папка, где лежит файл локального хранилища.
        log_level: Уровень логирования для `logging.basicConfig`.
    """
    api_base: str = API_BASE
    api_key: Optional[str] = None
    page_size: int = PAGE_SIZE
    request_timeout: float = REQUEST_TIMEOUT
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        return self.data_dir / STORAGE_FILE_NAME


def _positive_float(raw: Optional[str], default: float, name: str) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        _logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        _logger.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Собирает `Settings` из окружения.

    Args:
        environ: Источник переменных; по умолчанию `os.environ`.

    Returns:
        Настройки с подставленными значениями по умолчанию для пустых или
        некорректных переменных.
    """
    env = os.environ if environ is None else environ
    api_base = (env.get("CATGALLERY_API_BASE") or API_BASE).rstrip("/")
    api_key = env.get("CATGALLERY_API_KEY") or None
    timeout = _positive_float(env.get("CATGALLERY_TIMEOUT"), float(REQUEST_TIMEOUT), "CATGALLERY_TIMEOUT")
    data_dir_raw = env.get("CATGALLERY_DATA_DIR")
    data_dir = Path(data_dir_raw).expanduser() if data_dir_raw else DEFAULT_DATA_DIR
    log_level = (env.get("CATGALLERY_LOG_LEVEL") or "INFO").upper()
    return Settings(
        api_base=api_base,
        api_key=api_key,
        request_timeout=timeout,
        data_dir=data_dir,
        log_level=log_level,
    )
