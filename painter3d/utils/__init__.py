# painter3d/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger         – готовый объект logging.Logger (с level INFO)
    * Config         – JSON‑конфигурация
    * RendererConfig – настройки рендерера (backface culling, viewport)
    * Profiler       – замер времени стадий конвейера
"""

from .logger import logger
from .config import Config, RendererConfig
from .profiler import Profiler

__all__ = ["logger", "Config", "RendererConfig", "Profiler"]
